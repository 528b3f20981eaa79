"""
Register Use Case DTOs

- RegisterCommand: input to the use case (registration intent)
- RegisterResponse: output from the use case
"""

from typing import Optional
from pydantic import BaseModel

from .dtos import UserInfo


class RegisterCommand(BaseModel):
    """
    Register command - registration intent as submitted

    Not validated beyond types: field rules live in the CredentialStore so
    they apply to every caller, not just HTTP.
    """

    email: str
    password: str
    password_confirmation: Optional[str] = None


class RegisterResponse(BaseModel):
    """Register response - the new account and a session token"""

    token: str
    user: UserInfo
