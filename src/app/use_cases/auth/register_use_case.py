import logging

from sqlalchemy.exc import IntegrityError

from src.app.services.credential_store import CredentialStore, email_taken_error
from src.app.services.notifier import INotifier
from src.app.services.token_service import TokenService
from src.app.services.unit_of_work import UnitOfWork
from src.libs.result import Result, Return
from .dtos import UserInfo
from .register_dto import RegisterCommand, RegisterResponse

logger = logging.getLogger(__name__)


class RegisterUseCase:
    """
    Register Use Case

    Command/Response Pattern:
    - Input: RegisterCommand
    - Output: Result[RegisterResponse]

    Business Logic:
    1. Validate and create the user through the CredentialStore
    2. Commit; a unique-constraint race on email maps to EMAIL_TAKEN
    3. Queue the welcome notification (not awaited)
    4. Issue a session token

    Nothing is persisted unless every step up to the commit succeeds.
    """

    def __init__(
        self,
        uow: UnitOfWork,
        tokens: TokenService,
        notifier: INotifier,
        bcrypt_rounds: int = 12,
    ):
        self.uow = uow
        self.tokens = tokens
        self.notifier = notifier
        self.bcrypt_rounds = bcrypt_rounds

    async def execute(self, command: RegisterCommand) -> Result[RegisterResponse]:
        """
        Execute register use case

        Returns:
            Result[RegisterResponse] with token and user,
            or VALIDATION_FAILED / EMAIL_TAKEN
        """
        async with self.uow:
            credentials = CredentialStore(self.uow.users, self.bcrypt_rounds)
            try:
                created = await credentials.create(
                    command.email, command.password, command.password_confirmation
                )
                if created.is_err():
                    return Return.err(created.error)
                user = created.value
                await self.uow.commit()
            except IntegrityError:
                logger.info("Concurrent registration lost the race on email uniqueness")
                return Return.err(email_taken_error())

            self.notifier.send_welcome(user)
            token = self.tokens.issue(user)

            return Return.ok(
                RegisterResponse(token=token, user=UserInfo.from_user(user))
            )
