from abc import ABC, abstractmethod
from datetime import datetime

from src.domain.entities import RevokedToken


class IRevokedTokenRepository(ABC):
    """RevokedToken repository interface - application layer"""

    @abstractmethod
    async def exists(self, token_hash: str) -> bool:
        """Check whether a token digest has been revoked"""
        pass

    @abstractmethod
    async def create(self, revoked_token: RevokedToken) -> RevokedToken:
        """Record a revoked token"""
        pass

    @abstractmethod
    async def delete_expired(self, now: datetime) -> int:
        """Delete entries whose token has expired. Returns count deleted."""
        pass
