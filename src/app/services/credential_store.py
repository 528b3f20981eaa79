"""
Credential Store

Account creation, lookup and password verification on top of the users
repository. Validation is explicit and runs before any repository call.
"""

from typing import Dict, List, Optional

import bcrypt
from email_validator import EmailNotValidError, validate_email

from src.app.repositories.user_repository import IUserRepository
from src.domain.entities import User
from src.libs.result import Error, Result, Return

MIN_PASSWORD_LENGTH = 8
# bcrypt only reads the first 72 bytes; bcrypt 5 rejects anything longer
MAX_PASSWORD_BYTES = 72


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


def password_errors(password: str) -> List[str]:
    if len(password or "") < MIN_PASSWORD_LENGTH:
        return [f"is too short (minimum is {MIN_PASSWORD_LENGTH} characters)"]
    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        return [f"is too long (maximum is {MAX_PASSWORD_BYTES} bytes)"]
    return []


def validation_error(fields: Dict[str, List[str]]) -> Error:
    message = "; ".join(
        f"{name.replace('_', ' ').capitalize()} {msg}"
        for name, messages in fields.items()
        for msg in messages
    )
    return Error("VALIDATION_FAILED", message, fields=fields)


class CredentialStore:
    """
    Persists user identity and bcrypt password hash.

    Business Rules:
    - Email normalized (strip + lower-case) before uniqueness check and storage
    - Password at least 8 characters and at most 72 bytes
    - Password comparison via bcrypt.checkpw (constant time)
    """

    def __init__(self, users: IUserRepository, bcrypt_rounds: int = 12):
        self.users = users
        self.bcrypt_rounds = bcrypt_rounds

    def validate_registration(
        self, email: str, password: str, password_confirmation: Optional[str] = None
    ) -> Result[None]:
        """
        Validate registration input field by field.

        Returns:
            Result with None if valid, or VALIDATION_FAILED with per-field messages
        """
        fields: Dict[str, List[str]] = {}

        if not normalize_email(email):
            fields["email"] = ["can't be blank"]
        else:
            try:
                validate_email(normalize_email(email), check_deliverability=False)
            except EmailNotValidError:
                fields["email"] = ["is invalid"]

        errors = password_errors(password)
        if errors:
            fields["password"] = errors

        if password_confirmation is not None and password_confirmation != password:
            fields["password_confirmation"] = ["doesn't match Password"]

        if fields:
            return Return.err(validation_error(fields))
        return Return.ok(None)

    def hash_password(self, password: str) -> str:
        return bcrypt.hashpw(
            password.encode("utf-8"), bcrypt.gensalt(self.bcrypt_rounds)
        ).decode("utf-8")

    def verify_password(self, user: User, candidate: str) -> bool:
        try:
            return bcrypt.checkpw(
                (candidate or "").encode("utf-8"), user.password_hash.encode("utf-8")
            )
        except ValueError:
            # Corrupt stored hash, or a candidate over 72 bytes
            return False

    def burn_time(self) -> None:
        # Same cost as a real check, for lookups that found no user
        bcrypt.hashpw(b"dummy_password", bcrypt.gensalt(self.bcrypt_rounds))

    async def find_by_email(self, email: str) -> Result[User]:
        user = await self.users.get_by_email(normalize_email(email))
        if user is None:
            return Return.err(Error("NOT_FOUND", "User not found"))
        return Return.ok(user)

    async def create(
        self, email: str, password: str, password_confirmation: Optional[str] = None
    ) -> Result[User]:
        """
        Validate and insert a new user.

        Returns:
            Result[User], or VALIDATION_FAILED / EMAIL_TAKEN

        Note:
            A concurrent registration with the same email can still pass the
            existence check; the unique constraint then raises IntegrityError
            at flush or commit, which the caller maps to EMAIL_TAKEN.
        """
        validation = self.validate_registration(email, password, password_confirmation)
        if validation.is_err():
            return Return.err(validation.error)

        email = normalize_email(email)
        if await self.users.get_by_email(email) is not None:
            return Return.err(email_taken_error())

        user = User(email=email, password_hash=self.hash_password(password))
        user = await self.users.create(user)
        return Return.ok(user)


def email_taken_error() -> Error:
    return Error(
        "EMAIL_TAKEN",
        "Email has already been taken",
        fields={"email": ["has already been taken"]},
    )
