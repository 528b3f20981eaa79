"""
Token Service

Issues and verifies signed session tokens (JWT, HS256) and maintains the
revocation list used by logout.
"""

import hashlib
import logging
import secrets
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Callable, Optional
from uuid import UUID

from jose import JWTError, jwt

from src.app.repositories.revoked_token_repository import IRevokedTokenRepository
from src.domain.entities import RevokedToken, User
from src.libs.result import Error, Result, Return

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TokenSettings:
    secret_key: str
    algorithm: str = "HS256"
    ttl: timedelta = timedelta(hours=24)


def _utc_now() -> datetime:
    return datetime.now(UTC)


class TokenService:
    """
    Signed session tokens.

    A token is valid only if its signature verifies, its exp claim has not
    passed, and its digest is not in the revocation list.

    Token states: issued -> valid | expired | revoked. Expired and revoked
    are both rejections; the error code keeps the cause for logging.
    """

    def __init__(
        self, settings: TokenSettings, clock: Optional[Callable[[], datetime]] = None
    ):
        self.settings = settings
        self.clock = clock or _utc_now

    @staticmethod
    def digest(token: str) -> str:
        return hashlib.sha256(token.encode("utf-8")).hexdigest()

    def issue(self, user: User) -> str:
        """
        Issue a session token for user.

        Returns:
            JWT carrying user_id and exp (unix seconds, issuance + ttl)
        """
        now = self.clock()
        payload = {
            "user_id": str(user.id),
            "exp": int((now + self.settings.ttl).timestamp()),
            "iat": int(now.timestamp()),
            "jti": secrets.token_hex(8),
        }
        return jwt.encode(
            payload, self.settings.secret_key, algorithm=self.settings.algorithm
        )

    def decode(self, token: str) -> Result[dict]:
        """Check signature and expiry; revocation is not consulted here."""
        if not token:
            return Return.err(Error("TOKEN_INVALID", "Invalid token"))

        try:
            # exp is checked below against the service clock
            payload = jwt.decode(
                token,
                self.settings.secret_key,
                algorithms=[self.settings.algorithm],
                options={"verify_exp": False},
            )
        except JWTError:
            return Return.err(Error("TOKEN_INVALID", "Invalid token"))

        exp = payload.get("exp")
        if not isinstance(exp, (int, float)) or "user_id" not in payload:
            return Return.err(Error("TOKEN_INVALID", "Invalid token"))

        if exp <= self.clock().timestamp():
            return Return.err(Error("TOKEN_EXPIRED", "Token has expired"))

        return Return.ok(payload)

    async def verify(
        self, token: str, revoked_tokens: IRevokedTokenRepository
    ) -> Result[UUID]:
        """
        Verify a session token.

        Returns:
            Result with the user id, or TOKEN_INVALID / TOKEN_EXPIRED / TOKEN_REVOKED
        """
        decoded = self.decode(token)
        if decoded.is_err():
            logger.info("Token rejected: %s", decoded.error.code)
            return Return.err(decoded.error)

        if await revoked_tokens.exists(self.digest(token)):
            logger.info("Token rejected: TOKEN_REVOKED")
            return Return.err(Error("TOKEN_REVOKED", "Token has been revoked"))

        try:
            user_id = UUID(decoded.value["user_id"])
        except (AttributeError, TypeError, ValueError):
            return Return.err(Error("TOKEN_INVALID", "Invalid token"))

        return Return.ok(user_id)

    async def revoke(
        self, token: str, revoked_tokens: IRevokedTokenRepository
    ) -> Result[bool]:
        """
        Add token to the revocation list.

        Idempotent: revoking an already revoked token succeeds.

        Returns:
            Result with True if a new entry was written, False if it already existed
        """
        decoded = self.decode(token)
        if decoded.is_err():
            return Return.err(decoded.error)

        token_hash = self.digest(token)
        if await revoked_tokens.exists(token_hash):
            return Return.ok(False)

        expires_at = datetime.fromtimestamp(decoded.value["exp"], UTC).replace(
            tzinfo=None
        )
        await revoked_tokens.create(
            RevokedToken(token_hash=token_hash, expires_at=expires_at)
        )
        return Return.ok(True)
