from datetime import timedelta
from typing import Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from config import ApplicationConfig
from src.api.error import ClientError, ServerError
from src.app.services.notifier import INotifier
from src.app.services.token_service import TokenService
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import (
    ConfirmPasswordResetUseCase,
    LoginResponse,
    LoginUseCase,
    LogoutUseCase,
    MessageResponse,
    RegisterCommand,
    RegisterResponse,
    RegisterUseCase,
    RequestPasswordResetUseCase,
    UserInfo,
)
from src.depends import (
    get_bearer_token,
    get_current_user,
    get_notifier,
    get_token_service,
    get_unit_of_work,
)

router = APIRouter(prefix="/auth", tags=["Authentication"])

RESET_TTL = timedelta(hours=ApplicationConfig.PASSWORD_RESET_TTL_HOURS)


class RegisterRequest(BaseModel):
    """
    Register HTTP request payload

    Only types are checked here; email format and password rules are
    enforced by the use case so they come back as field-level errors.
    """

    email: str = Field(..., description="User email address")
    password: str = Field(..., description="User password (min 8 chars)")
    password_confirmation: Optional[str] = Field(
        None, description="Must match password when supplied"
    )


@router.post(
    "/register", status_code=status.HTTP_201_CREATED, response_model=RegisterResponse
)
async def register(
    request: RegisterRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    tokens: TokenService = Depends(get_token_service),
    notifier: INotifier = Depends(get_notifier),
):
    """
    User Registration

    Creates the account, queues a welcome email and returns a session token.

    Raises:
        - 422 Unprocessable Entity: invalid input or email already taken
        - 500 Internal Server Error: Server error
    """
    command = RegisterCommand(
        email=request.email,
        password=request.password,
        password_confirmation=request.password_confirmation,
    )

    use_case = RegisterUseCase(
        uow, tokens, notifier, bcrypt_rounds=ApplicationConfig.BCRYPT_ROUNDS
    )
    result = await use_case.execute(command)

    if result.is_err():
        error = result.error
        if error.code in ("VALIDATION_FAILED", "EMAIL_TAKEN"):
            raise ClientError(error, status_code=status.HTTP_422_UNPROCESSABLE_ENTITY)
        raise ServerError(error)

    return result.value


class LoginRequest(BaseModel):
    """Login HTTP request payload"""

    email: str = Field(..., description="User email address")
    password: str = Field(..., description="User password")


@router.post("/login", status_code=status.HTTP_200_OK, response_model=LoginResponse)
async def login(
    request: LoginRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    tokens: TokenService = Depends(get_token_service),
):
    """
    User Login

    Raises:
        - 401 Unauthorized: Invalid email or password (same message either way)
        - 500 Internal Server Error: Server error
    """
    use_case = LoginUseCase(uow, tokens, bcrypt_rounds=ApplicationConfig.BCRYPT_ROUNDS)
    result = await use_case.execute(request.email, request.password)

    if result.is_err():
        error = result.error
        if error.code == "INVALID_CREDENTIALS":
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        raise ServerError(error)

    return result.value


@router.delete("/logout", status_code=status.HTTP_200_OK, response_model=MessageResponse)
async def logout(
    token: str = Depends(get_bearer_token),
    uow: UnitOfWork = Depends(get_unit_of_work),
    tokens: TokenService = Depends(get_token_service),
):
    """
    User Logout

    Adds the bearer token to the revocation list. Logging out an already
    revoked token succeeds.

    Raises:
        - 422 Unprocessable Entity: token malformed or expired
        - 500 Internal Server Error: Server error
    """
    use_case = LogoutUseCase(uow, tokens)
    result = await use_case.execute(token)

    if result.is_err():
        error = result.error
        if error.code in ("TOKEN_INVALID", "TOKEN_EXPIRED"):
            raise ClientError(error, status_code=status.HTTP_422_UNPROCESSABLE_ENTITY)
        raise ServerError(error)

    return result.value


@router.get("/me", status_code=status.HTTP_200_OK, response_model=UserInfo)
async def me(current_user: UserInfo = Depends(get_current_user)):
    """
    Current User

    Raises:
        - 401 Unauthorized: token invalid, expired or revoked
    """
    return current_user


class ForgotPasswordRequest(BaseModel):
    """Forgot password HTTP request payload"""

    email: str = Field(..., description="User email address")


@router.post(
    "/forgot-password", status_code=status.HTTP_200_OK, response_model=MessageResponse
)
async def forgot_password(
    request: ForgotPasswordRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    notifier: INotifier = Depends(get_notifier),
):
    """
    Request Password Reset

    Issues a 6-hour single-use reset token and queues it by email.

    Security:
        - Same response for known and unknown emails unless
          PASSWORD_RESET_REVEAL_UNKNOWN_EMAIL is enabled
        - Only the SHA-256 digest of the token is stored

    Raises:
        - 404 Not Found: unknown email (only when revealing is enabled)
        - 500 Internal Server Error: Server error
    """
    use_case = RequestPasswordResetUseCase(
        uow,
        notifier,
        reveal_unknown_email=ApplicationConfig.PASSWORD_RESET_REVEAL_UNKNOWN_EMAIL,
        ttl=RESET_TTL,
    )
    result = await use_case.execute(request.email)

    if result.is_err():
        error = result.error
        if error.code == "RESET_EMAIL_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value


class ResetPasswordRequest(BaseModel):
    """Reset password HTTP request payload"""

    token: str = Field(..., description="Password reset token from email")
    password: str = Field(..., description="New password (min 8 chars)")


@router.put(
    "/reset-password", status_code=status.HTTP_200_OK, response_model=MessageResponse
)
async def reset_password(
    request: ResetPasswordRequest, uow: UnitOfWork = Depends(get_unit_of_work)
):
    """
    Confirm Password Reset

    Raises:
        - 422 Unprocessable Entity: password too short, or token unknown,
          already used or expired (not distinguished)
        - 500 Internal Server Error: Server error
    """
    use_case = ConfirmPasswordResetUseCase(
        uow, bcrypt_rounds=ApplicationConfig.BCRYPT_ROUNDS, ttl=RESET_TTL
    )
    result = await use_case.execute(request.token, request.password)

    if result.is_err():
        error = result.error
        if error.code in ("VALIDATION_FAILED", "RESET_TOKEN_INVALID"):
            raise ClientError(error, status_code=status.HTTP_422_UNPROCESSABLE_ENTITY)
        raise ServerError(error)

    return result.value
