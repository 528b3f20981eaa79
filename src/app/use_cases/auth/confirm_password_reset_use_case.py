"""
Confirm Password Reset Use Case

Consumes a reset token and sets the new password.
"""

from src.app.services.credential_store import CredentialStore
from src.app.services.password_reset import RESET_TOKEN_TTL, PasswordResetFlow
from src.app.services.unit_of_work import UnitOfWork
from src.libs.result import Result, Return
from .dtos import MessageResponse


class ConfirmPasswordResetUseCase:
    """
    Use case for confirming a password reset.

    Business Rules:
    - New password at least 8 characters
    - Token must be known and issued within the last 6 hours
    - Password update and token clear are one conditional UPDATE, so a token
      can be consumed once even under concurrent requests
    - Unknown, used and expired tokens all give RESET_TOKEN_INVALID
    """

    def __init__(self, uow: UnitOfWork, bcrypt_rounds: int = 12, ttl=RESET_TOKEN_TTL):
        self.uow = uow
        self.bcrypt_rounds = bcrypt_rounds
        self.ttl = ttl

    async def execute(self, token: str, new_password: str) -> Result[MessageResponse]:
        async with self.uow:
            flow = PasswordResetFlow(
                self.uow.users,
                CredentialStore(self.uow.users, self.bcrypt_rounds),
                ttl=self.ttl,
            )
            consumed = await flow.consume(token, new_password)
            if consumed.is_err():
                return Return.err(consumed.error)

            await self.uow.commit()

            return Return.ok(
                MessageResponse(message="Password has been reset successfully")
            )
