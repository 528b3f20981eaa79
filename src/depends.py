from datetime import timedelta
from typing import Optional

from fastapi import BackgroundTasks, Depends, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from src.adapter.services.email_notifier import EmailNotifier, MailSettings
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.error import ClientError
from src.app.services.notifier import INotifier
from src.app.services.token_service import TokenService, TokenSettings
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import AuthenticateUseCase, UserInfo
from src.libs.result import Error

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

# Missing or non-Bearer headers reach the use cases as an empty token
security = HTTPBearer(auto_error=False)

# Process-wide signing configuration, built once at import
token_service = TokenService(
    TokenSettings(
        secret_key=ApplicationConfig.JWT_SECRET_KEY,
        algorithm=ApplicationConfig.JWT_ALGORITHM,
        ttl=timedelta(hours=ApplicationConfig.JWT_TTL_HOURS),
    )
)

mail_settings = MailSettings(
    smtp_host=ApplicationConfig.SMTP_HOST,
    smtp_port=ApplicationConfig.SMTP_PORT,
    smtp_username=ApplicationConfig.SMTP_USERNAME,
    smtp_password=ApplicationConfig.SMTP_PASSWORD,
    mail_from=ApplicationConfig.MAIL_FROM,
    password_reset_url=ApplicationConfig.PASSWORD_RESET_URL,
)


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_token_service() -> TokenService:
    return token_service


def get_notifier(background_tasks: BackgroundTasks) -> INotifier:
    return EmailNotifier(background_tasks, mail_settings)


def get_bearer_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> str:
    if credentials is None:
        return ""
    return credentials.credentials


async def get_current_user(
    token: str = Depends(get_bearer_token),
    uow: UnitOfWork = Depends(get_unit_of_work),
    tokens: TokenService = Depends(get_token_service),
) -> UserInfo:
    """
    Dependency to authenticate the bearer token.

    Args:
        token: Bearer token from Authorization header

    Returns:
        UserInfo of the token's user

    Raises:
        ClientError: 401 if the token is invalid, expired or revoked. The
        cause is logged by the TokenService but not exposed.
    """
    result = await AuthenticateUseCase(uow, tokens).execute(token)

    if result.is_err():
        raise ClientError(
            Error("UNAUTHORIZED", "Invalid or expired token"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    return result.value


async def init_db():
    """Create missing tables. Schema migrations are managed outside this service."""
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
