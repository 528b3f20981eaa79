"""
Domain Entities

Each entity in its own file.
"""

from .user import User
from .revoked_token import RevokedToken

__all__ = [
    "User",
    "RevokedToken",
]
