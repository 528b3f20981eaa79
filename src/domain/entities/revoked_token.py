"""
RevokedToken Entity

Session tokens invalidated by logout.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utcnow


class RevokedToken(SQLModel, table=True):
    """
    RevokedToken entity - blacklist entry for a logged-out session token.

    Business Rules:
    - Token stored as SHA-256 digest, unique
    - Never updated
    - Safe to delete once expires_at has passed (the token is dead anyway)
    """

    __tablename__ = "revoked_tokens"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    token_hash: str = Field(unique=True, index=True, max_length=64)

    expires_at: datetime = Field(sa_column=Column(DateTime, nullable=False))
    revoked_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_revoked_token_expires_at", "expires_at"),)
