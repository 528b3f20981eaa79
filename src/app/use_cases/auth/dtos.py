"""
Authentication Use Case DTOs (Data Transfer Objects)

Response classes for the auth domain. Users are only ever serialized as
UserInfo: password hash and reset token never leave the application layer.
"""

from datetime import datetime
from pydantic import BaseModel

from src.domain.entities import User


class UserInfo(BaseModel):
    """Public user representation"""

    id: str
    email: str
    created_at: datetime

    @classmethod
    def from_user(cls, user: User) -> "UserInfo":
        return cls(id=str(user.id), email=user.email, created_at=user.created_at)


class LoginResponse(BaseModel):
    """Response for user login use case"""

    token: str
    user: UserInfo


class MessageResponse(BaseModel):
    """Response for logout and password reset use cases"""

    message: str
