"""
Unit tests for RequestPasswordResetUseCase
"""
from uuid import uuid4

import pytest

from src.app.use_cases.auth import RequestPasswordResetUseCase
from src.domain.entities import User


@pytest.fixture
def user():
    return User(id=uuid4(), email="user@example.com", password_hash="x")


@pytest.mark.asyncio
async def test_reset_requested_for_existing_user(mock_uow, mock_notifier, user):
    mock_uow.users.get_by_email.return_value = user

    result = await RequestPasswordResetUseCase(mock_uow, mock_notifier).execute("user@example.com")

    assert result.is_ok()
    mock_uow.users.update.assert_called_once()
    mock_uow.commit.assert_called_once()

    sent_user, sent_token, expires_at = mock_notifier.send_password_reset.call_args.args
    assert sent_user is user
    assert sent_token != user.reset_token_hash
    assert expires_at > user.reset_requested_at


@pytest.mark.asyncio
async def test_unknown_email_same_response_by_default(mock_uow, mock_notifier, user):
    use_case = RequestPasswordResetUseCase(mock_uow, mock_notifier)
    unknown = await use_case.execute("nobody@example.com")

    mock_uow.users.get_by_email.return_value = user
    known = await use_case.execute("user@example.com")

    assert unknown.is_ok()
    assert unknown.value == known.value
    mock_notifier.send_password_reset.assert_called_once()


@pytest.mark.asyncio
async def test_unknown_email_revealed_when_configured(mock_uow, mock_notifier):
    use_case = RequestPasswordResetUseCase(mock_uow, mock_notifier, reveal_unknown_email=True)

    result = await use_case.execute("nobody@example.com")

    assert result.is_err()
    assert result.error.code == "RESET_EMAIL_NOT_FOUND"
    mock_uow.commit.assert_not_called()
    mock_notifier.send_password_reset.assert_not_called()
