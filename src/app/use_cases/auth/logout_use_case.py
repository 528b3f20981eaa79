"""
Logout Use Case

Invalidates a session token by adding it to the revocation list.
"""

import logging

from sqlalchemy.exc import IntegrityError

from src.app.services.token_service import TokenService
from src.app.services.unit_of_work import UnitOfWork
from src.libs.result import Result, Return
from .dtos import MessageResponse

logger = logging.getLogger(__name__)


class LogoutUseCase:
    """
    Use case for logout.

    Business Rules:
    - Token must carry a valid signature and not be expired
    - Revocation is idempotent: logging out twice with one token succeeds,
      including when two requests race on the insert
    """

    def __init__(self, uow: UnitOfWork, tokens: TokenService):
        self.uow = uow
        self.tokens = tokens

    async def execute(self, token: str) -> Result[MessageResponse]:
        async with self.uow:
            try:
                revoked = await self.tokens.revoke(token, self.uow.revoked_tokens)
                if revoked.is_err():
                    return Return.err(revoked.error)
                await self.uow.commit()
            except IntegrityError:
                # Another request inserted the same digest first
                logger.info("Token already revoked by a concurrent logout")

            return Return.ok(MessageResponse(message="Logged out successfully"))
