from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional
from uuid import UUID

from src.domain.entities import User


class IUserRepository(ABC):
    """User repository interface - application layer"""

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by (normalized) email address"""
        pass

    @abstractmethod
    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID"""
        pass

    @abstractmethod
    async def create(self, user: User) -> User:
        """Create a new user"""
        pass

    @abstractmethod
    async def update(self, user: User) -> User:
        """Update existing user"""
        pass

    @abstractmethod
    async def consume_reset_token(
        self, token_hash: str, issued_after: datetime, password_hash: str
    ) -> bool:
        """
        Atomically set a new password and clear the pending reset token.

        Only matches a user whose reset_token_hash equals token_hash and whose
        reset_requested_at is not older than issued_after. Returns True if a
        row was updated.
        """
        pass
