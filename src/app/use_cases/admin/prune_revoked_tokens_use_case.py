"""
Use Case: Prune Revoked Tokens

Removes revocation entries for tokens that have expired on their own.
"""

from datetime import datetime
from typing import Callable, Optional

from pydantic import BaseModel

from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.libs.result import Result, Return


class PruneRevokedTokensResponse(BaseModel):
    """Response DTO for PruneRevokedTokensUseCase"""

    pruned: int


class PruneRevokedTokensUseCase:
    """
    Delete revoked-token entries past their natural expiry.

    An expired token is rejected on its exp claim alone, so its revocation
    entry no longer changes any verification outcome.
    """

    def __init__(self, uow: UnitOfWork, clock: Optional[Callable[[], datetime]] = None):
        self.uow = uow
        self.clock = clock or utcnow

    async def execute(self) -> Result[PruneRevokedTokensResponse]:
        async with self.uow:
            pruned = await self.uow.revoked_tokens.delete_expired(self.clock())
            await self.uow.commit()
            return Return.ok(PruneRevokedTokensResponse(pruned=pruned))
