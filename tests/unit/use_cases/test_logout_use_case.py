"""
Unit tests for LogoutUseCase
"""
from uuid import uuid4

import pytest
from sqlalchemy.exc import IntegrityError

from src.app.services.token_service import TokenService, TokenSettings
from src.app.use_cases.auth import LogoutUseCase
from src.domain.entities import User


@pytest.fixture
def tokens():
    return TokenService(TokenSettings(secret_key="unit-test-secret"))


@pytest.fixture
def token(tokens):
    return tokens.issue(User(id=uuid4(), email="user@example.com", password_hash="x"))


@pytest.mark.asyncio
async def test_logout_revokes_token(mock_uow, tokens, token):
    result = await LogoutUseCase(mock_uow, tokens).execute(token)

    assert result.is_ok()
    assert result.value.message
    mock_uow.revoked_tokens.create.assert_called_once()
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_logout_twice_is_ok(mock_uow, tokens, token):
    mock_uow.revoked_tokens.exists.return_value = True

    result = await LogoutUseCase(mock_uow, tokens).execute(token)

    assert result.is_ok()
    mock_uow.revoked_tokens.create.assert_not_called()


@pytest.mark.asyncio
async def test_concurrent_duplicate_insert_is_tolerated(mock_uow, tokens, token):
    mock_uow.commit.side_effect = IntegrityError("INSERT", {}, Exception("UNIQUE"))

    result = await LogoutUseCase(mock_uow, tokens).execute(token)

    assert result.is_ok()


@pytest.mark.asyncio
async def test_logout_with_invalid_token(mock_uow, tokens):
    result = await LogoutUseCase(mock_uow, tokens).execute("not-a-token")

    assert result.is_err()
    assert result.error.code == "TOKEN_INVALID"
    mock_uow.commit.assert_not_called()
