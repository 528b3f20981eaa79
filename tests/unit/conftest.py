import pytest
from unittest.mock import AsyncMock, MagicMock


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.users = MagicMock()
    uow.users.get_by_email = AsyncMock(return_value=None)
    uow.users.get_by_id = AsyncMock(return_value=None)
    uow.users.create = AsyncMock(side_effect=lambda user: user)
    uow.users.update = AsyncMock(side_effect=lambda user: user)
    uow.users.consume_reset_token = AsyncMock(return_value=True)

    uow.revoked_tokens = MagicMock()
    uow.revoked_tokens.exists = AsyncMock(return_value=False)
    uow.revoked_tokens.create = AsyncMock(side_effect=lambda token: token)
    uow.revoked_tokens.delete_expired = AsyncMock(return_value=0)
    return uow


@pytest.fixture
def mock_notifier():
    return MagicMock()
