"""
Password Reset Flow

Single-use, time-limited reset tokens stored as SHA-256 digests on the user.
"""

import hashlib
import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, Optional

from src.app.repositories.user_repository import IUserRepository
from src.app.services.credential_store import (
    CredentialStore,
    normalize_email,
    password_errors,
    validation_error,
)
from src.domain.base import utcnow
from src.domain.entities import User
from src.libs.result import Error, Result, Return

RESET_TOKEN_TTL = timedelta(hours=6)


@dataclass(frozen=True)
class PendingReset:
    user: User
    token: str  # plain token, only ever handed to the notifier
    expires_at: datetime


def hash_reset_token(token: str) -> str:
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


def reset_token_invalid_error() -> Error:
    return Error("RESET_TOKEN_INVALID", "Invalid or expired reset token")


class PasswordResetFlow:
    """
    Issues and consumes password reset tokens.

    Business Rules:
    - Token is secrets.token_urlsafe(32); only its SHA-256 digest is stored
    - Valid for 6 hours from issuance
    - Single-use: consuming clears the digest in the same UPDATE that sets
      the new password hash
    - A new request replaces any pending token
    - Unknown and expired tokens produce the same error
    - Only consume hashes passwords, so initiate-only callers may omit credentials
    """

    def __init__(
        self,
        users: IUserRepository,
        credentials: Optional[CredentialStore] = None,
        ttl: timedelta = RESET_TOKEN_TTL,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.users = users
        self.credentials = credentials
        self.ttl = ttl
        self.clock = clock or utcnow

    def _credentials(self) -> CredentialStore:
        if self.credentials is None:
            raise RuntimeError("PasswordResetFlow needs a CredentialStore to consume tokens")
        return self.credentials

    async def initiate(self, email: str) -> Result[PendingReset]:
        user = await self.users.get_by_email(normalize_email(email))
        if user is None:
            return Return.err(
                Error("RESET_EMAIL_NOT_FOUND", "No account found for that email")
            )

        token = secrets.token_urlsafe(32)
        now = self.clock()
        user.reset_token_hash = hash_reset_token(token)
        user.reset_requested_at = now
        user = await self.users.update(user)

        return Return.ok(PendingReset(user=user, token=token, expires_at=now + self.ttl))

    async def consume(self, token: str, new_password: str) -> Result[None]:
        """
        Set a new password using a reset token.

        Returns:
            Result with None on success, VALIDATION_FAILED for a short
            password, or RESET_TOKEN_INVALID for an unknown, used or expired token
        """
        errors = password_errors(new_password)
        if errors:
            return Return.err(validation_error({"password": errors}))

        if not token:
            return Return.err(reset_token_invalid_error())

        consumed = await self.users.consume_reset_token(
            token_hash=hash_reset_token(token),
            issued_after=self.clock() - self.ttl,
            password_hash=self._credentials().hash_password(new_password),
        )
        if not consumed:
            return Return.err(reset_token_invalid_error())

        return Return.ok(None)
