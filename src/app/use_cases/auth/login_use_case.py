"""
Login Use Case

Authenticates email + password and issues a session token.
"""

from src.app.services.credential_store import CredentialStore
from src.app.services.token_service import TokenService
from src.app.services.unit_of_work import UnitOfWork
from src.libs.result import Error, Result, Return
from .dtos import LoginResponse, UserInfo


class LoginUseCase:
    """
    Use case for user login and JWT issuance.

    Business Rules:
    - Email matched after normalization (case-insensitive)
    - Constant-time password comparison
    - Unknown email and wrong password give the same error, and both cost a
      bcrypt check
    """

    def __init__(self, uow: UnitOfWork, tokens: TokenService, bcrypt_rounds: int = 12):
        self.uow = uow
        self.tokens = tokens
        self.bcrypt_rounds = bcrypt_rounds

    async def execute(self, email: str, password: str) -> Result[LoginResponse]:
        """
        Execute login use case.

        Returns:
            Result with LoginResponse, or Error(INVALID_CREDENTIALS)
        """
        async with self.uow:
            credentials = CredentialStore(self.uow.users, self.bcrypt_rounds)
            found = await credentials.find_by_email(email)

            if found.is_err():
                credentials.burn_time()
                return Return.err(invalid_credentials_error())

            user = found.value
            if not credentials.verify_password(user, password):
                return Return.err(invalid_credentials_error())

            token = self.tokens.issue(user)
            return Return.ok(LoginResponse(token=token, user=UserInfo.from_user(user)))


def invalid_credentials_error() -> Error:
    return Error("INVALID_CREDENTIALS", "Invalid email or password")
