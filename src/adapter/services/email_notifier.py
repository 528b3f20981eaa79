import logging
import smtplib
from dataclasses import dataclass
from datetime import datetime
from email.message import EmailMessage
from typing import Optional

from fastapi import BackgroundTasks

from src.app.services.notifier import INotifier
from src.domain.entities import User

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MailSettings:
    smtp_host: Optional[str] = None
    smtp_port: Optional[int] = None
    smtp_username: Optional[str] = None
    smtp_password: Optional[str] = None
    mail_from: str = "no-reply@authkit.local"
    password_reset_url: str = "http://localhost:3000/reset-password?token={token}"


def build_welcome_email(*, email: str) -> tuple[str, str]:
    subject = "Welcome!"
    body = (
        f"Hi {email},\n\n"
        "Your account has been created. You can now sign in with your email "
        "address and password.\n"
    )
    return subject, body


def build_password_reset_email(*, reset_url: str, expires_at: datetime) -> tuple[str, str]:
    subject = "Reset your password"
    body = (
        "Hello,\n\nWe received a request to reset your password. "
        f"Follow the link below to choose a new one:\n{reset_url}\n\n"
        f"The link expires at {expires_at:%Y-%m-%d %H:%M} UTC and can be used once.\n"
        "If you did not request this change, you can ignore this message."
    )
    return subject, body


class EmailNotifier(INotifier):
    """Queues emails on the request's BackgroundTasks; delivered after the response."""

    def __init__(self, background_tasks: BackgroundTasks, settings: MailSettings):
        self.background_tasks = background_tasks
        self.settings = settings

    def send_welcome(self, user: User) -> None:
        subject, body = build_welcome_email(email=user.email)
        self._schedule(user.email, subject, body)

    def send_password_reset(self, user: User, token: str, expires_at: datetime) -> None:
        reset_url = self.settings.password_reset_url.format(token=token)
        subject, body = build_password_reset_email(
            reset_url=reset_url, expires_at=expires_at
        )
        self._schedule(user.email, subject, body)

    def _schedule(self, recipient: str, subject: str, body: str) -> None:
        if not self.settings.smtp_host or not self.settings.smtp_port:
            logger.info("SMTP disabled; skipping email %r to %s", subject, recipient)
            return
        self.background_tasks.add_task(deliver_email, self.settings, recipient, subject, body)


def deliver_email(settings: MailSettings, recipient: str, subject: str, body: str) -> None:
    message = EmailMessage()
    message["Subject"] = subject
    message["To"] = recipient
    message["From"] = settings.mail_from
    message.set_content(body)

    try:
        with smtplib.SMTP(settings.smtp_host, settings.smtp_port, timeout=10) as smtp:
            if settings.smtp_username and settings.smtp_password:
                smtp.starttls()
                smtp.login(settings.smtp_username, settings.smtp_password)
            smtp.send_message(message)
        logger.info("Email %r sent to %s", subject, recipient)
    except (smtplib.SMTPException, OSError):
        logger.exception("Failed to send email %r to %s", subject, recipient)
