"""
Unit tests for EmailNotifier
"""
from datetime import datetime
from unittest.mock import MagicMock, patch

from src.adapter.services.email_notifier import EmailNotifier, MailSettings, deliver_email
from src.domain.entities import User

SMTP_SETTINGS = MailSettings(
    smtp_host="smtp.example.com",
    smtp_port=587,
    password_reset_url="https://app.example.com/reset?token={token}",
)


def test_reset_email_is_queued_not_sent():
    background_tasks = MagicMock()
    notifier = EmailNotifier(background_tasks, SMTP_SETTINGS)
    user = User(email="user@example.com", password_hash="x")

    with patch("src.adapter.services.email_notifier.smtplib.SMTP") as smtp:
        notifier.send_password_reset(user, "tok123", datetime(2024, 1, 1, 18, 0))
        smtp.assert_not_called()

    func, settings, recipient, subject, body = background_tasks.add_task.call_args.args
    assert func is deliver_email
    assert recipient == "user@example.com"
    assert "https://app.example.com/reset?token=tok123" in body


def test_welcome_skipped_without_smtp():
    background_tasks = MagicMock()
    notifier = EmailNotifier(background_tasks, MailSettings())

    notifier.send_welcome(User(email="user@example.com", password_hash="x"))

    background_tasks.add_task.assert_not_called()


def test_delivery_failure_is_logged_not_raised():
    with patch("src.adapter.services.email_notifier.smtplib.SMTP", side_effect=OSError("refused")):
        deliver_email(SMTP_SETTINGS, "user@example.com", "subject", "body")
