"""
Request Password Reset Use Case

Issues a reset token and hands it to the notifier.
"""

import logging

from src.app.services.notifier import INotifier
from src.app.services.password_reset import RESET_TOKEN_TTL, PasswordResetFlow
from src.app.services.unit_of_work import UnitOfWork
from src.libs.result import Result, Return
from .dtos import MessageResponse

logger = logging.getLogger(__name__)

RESET_REQUESTED_MESSAGE = (
    "If an account exists for that email, password reset instructions have been sent"
)


class RequestPasswordResetUseCase:
    """
    Use case for requesting a password reset.

    Business Rules:
    - Token valid for 6 hours, single-use
    - Reset email queued after commit, never awaited
    - Unknown email gets the same response as a known one unless
      reveal_unknown_email is set, in which case RESET_EMAIL_NOT_FOUND
    """

    def __init__(
        self,
        uow: UnitOfWork,
        notifier: INotifier,
        reveal_unknown_email: bool = False,
        ttl=RESET_TOKEN_TTL,
    ):
        self.uow = uow
        self.notifier = notifier
        self.reveal_unknown_email = reveal_unknown_email
        self.ttl = ttl

    async def execute(self, email: str) -> Result[MessageResponse]:
        async with self.uow:
            flow = PasswordResetFlow(self.uow.users, ttl=self.ttl)
            pending = await flow.initiate(email)

            if pending.is_err():
                if self.reveal_unknown_email:
                    return Return.err(pending.error)
                logger.info("Password reset requested for unknown email")
                return Return.ok(MessageResponse(message=RESET_REQUESTED_MESSAGE))

            await self.uow.commit()

            reset = pending.value
            self.notifier.send_password_reset(reset.user, reset.token, reset.expires_at)

            return Return.ok(MessageResponse(message=RESET_REQUESTED_MESSAGE))
