"""
Unit tests for AuthenticateUseCase
"""
from uuid import uuid4

import pytest

from src.app.services.token_service import TokenService, TokenSettings
from src.app.use_cases.auth import AuthenticateUseCase
from src.domain.entities import User


@pytest.fixture
def tokens():
    return TokenService(TokenSettings(secret_key="unit-test-secret"))


@pytest.fixture
def user():
    return User(id=uuid4(), email="user@example.com", password_hash="x")


@pytest.mark.asyncio
async def test_valid_token_resolves_user(mock_uow, tokens, user):
    mock_uow.users.get_by_id.return_value = user

    result = await AuthenticateUseCase(mock_uow, tokens).execute(tokens.issue(user))

    assert result.is_ok()
    assert result.value.email == "user@example.com"
    mock_uow.users.get_by_id.assert_called_once_with(user.id)


@pytest.mark.asyncio
async def test_revoked_token_rejected(mock_uow, tokens, user):
    mock_uow.revoked_tokens.exists.return_value = True

    result = await AuthenticateUseCase(mock_uow, tokens).execute(tokens.issue(user))

    assert result.error.code == "TOKEN_REVOKED"
    mock_uow.users.get_by_id.assert_not_called()


@pytest.mark.asyncio
async def test_token_for_deleted_user_rejected(mock_uow, tokens, user):
    result = await AuthenticateUseCase(mock_uow, tokens).execute(tokens.issue(user))

    assert result.error.code == "TOKEN_INVALID"
