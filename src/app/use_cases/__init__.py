"""
Use Cases

Organized by area:
- auth/: registration, login, logout, password reset, token authentication
- admin/: maintenance operations
"""

from .auth import (
    RegisterUseCase,
    LoginUseCase,
    LogoutUseCase,
    AuthenticateUseCase,
    RequestPasswordResetUseCase,
    ConfirmPasswordResetUseCase,
)
from .admin import PruneRevokedTokensUseCase

__all__ = [
    # Auth
    "RegisterUseCase",
    "LoginUseCase",
    "LogoutUseCase",
    "AuthenticateUseCase",
    "RequestPasswordResetUseCase",
    "ConfirmPasswordResetUseCase",
    # Admin
    "PruneRevokedTokensUseCase",
]
