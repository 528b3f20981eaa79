from abc import ABC, abstractmethod
from datetime import datetime

from src.domain.entities import User


class INotifier(ABC):
    """
    Out-of-band notification port - application layer.

    Implementations must return without waiting for delivery.
    """

    @abstractmethod
    def send_welcome(self, user: User) -> None:
        """Queue the welcome message for a newly registered user"""
        pass

    @abstractmethod
    def send_password_reset(self, user: User, token: str, expires_at: datetime) -> None:
        """Queue delivery of a password reset token"""
        pass
