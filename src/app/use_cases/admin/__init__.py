"""Admin use cases for maintenance operations."""

from .prune_revoked_tokens_use_case import (
    PruneRevokedTokensUseCase,
    PruneRevokedTokensResponse,
)

__all__ = [
    "PruneRevokedTokensUseCase",
    "PruneRevokedTokensResponse",
]
