"""
User Entity

Represents a registered account.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utcnow


class User(SQLModel, table=True):
    """
    User entity - a registered account identified by email.

    Business Rules:
    - Email is stored lower-cased and must be unique
    - Password stored as bcrypt hash, never in plaintext
    - reset_token_hash holds the SHA-256 digest of a pending reset token;
      it and reset_requested_at are cleared when the reset is consumed
    """

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    email: str = Field(unique=True, index=True, max_length=255)
    password_hash: str = Field(max_length=60)  # Bcrypt output is 60 chars

    # Password reset (pending while set)
    reset_token_hash: Optional[str] = Field(
        default=None, unique=True, index=True, max_length=64
    )
    reset_requested_at: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime)
    )

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_user_reset_requested_at", "reset_requested_at"),)
