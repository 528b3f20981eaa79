"""
Authenticate Use Case

Resolves a bearer session token to the user it was issued for.
"""

from src.app.services.token_service import TokenService
from src.app.services.unit_of_work import UnitOfWork
from src.libs.result import Error, Result, Return
from .dtos import UserInfo


class AuthenticateUseCase:
    """
    Use case for authenticated requests.

    Business Rules:
    - Token verified for signature, expiry and revocation
    - A token for a user that no longer exists is rejected as invalid
    """

    def __init__(self, uow: UnitOfWork, tokens: TokenService):
        self.uow = uow
        self.tokens = tokens

    async def execute(self, token: str) -> Result[UserInfo]:
        async with self.uow:
            verified = await self.tokens.verify(token, self.uow.revoked_tokens)
            if verified.is_err():
                return Return.err(verified.error)

            user = await self.uow.users.get_by_id(verified.value)
            if user is None:
                return Return.err(Error("TOKEN_INVALID", "Invalid token"))

            return Return.ok(UserInfo.from_user(user))
