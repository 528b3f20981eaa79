from datetime import datetime

from sqlalchemy import delete
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.revoked_token_repository import IRevokedTokenRepository
from src.domain.entities import RevokedToken


class RevokedTokenRepository(IRevokedTokenRepository):
    """RevokedToken repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def exists(self, token_hash: str) -> bool:
        stmt = select(RevokedToken.id).where(RevokedToken.token_hash == token_hash)
        result = await self.session.exec(stmt)
        return result.first() is not None

    async def create(self, revoked_token: RevokedToken) -> RevokedToken:
        """Record a revoked token (immutable)"""
        self.session.add(revoked_token)
        await self.session.flush()
        await self.session.refresh(revoked_token)
        return revoked_token

    async def delete_expired(self, now: datetime) -> int:
        """Delete entries whose token expired before now"""
        stmt = delete(RevokedToken).where(RevokedToken.expires_at < now)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
