import pytest
from httpx import AsyncClient
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.services.token_service import TokenService
from src.domain.entities import RevokedToken
from tests.utils.auth_client import bearer, login, register


@pytest.mark.asyncio
async def test_logout_revokes_token(client: AsyncClient, db_session: AsyncSession):
    await register(client, "user@example.com", "longpassword1")
    token = await login(client, "user@example.com", "longpassword1")

    response = await client.delete("/auth/logout", headers=bearer(token))

    assert response.status_code == 200
    assert "message" in response.json()

    entries = (await db_session.exec(select(RevokedToken))).all()
    assert [e.token_hash for e in entries] == [TokenService.digest(token)]


@pytest.mark.asyncio
async def test_logout_twice_is_idempotent(client: AsyncClient, db_session: AsyncSession):
    await register(client, "user@example.com", "longpassword1")
    token = await login(client, "user@example.com", "longpassword1")

    first = await client.delete("/auth/logout", headers=bearer(token))
    second = await client.delete("/auth/logout", headers=bearer(token))

    assert first.status_code == 200
    assert second.status_code == 200
    assert len((await db_session.exec(select(RevokedToken))).all()) == 1


@pytest.mark.asyncio
async def test_logout_only_revokes_that_token(client: AsyncClient):
    await register(client, "user@example.com", "longpassword1")
    first = await login(client, "user@example.com", "longpassword1")
    second = await login(client, "user@example.com", "longpassword1")

    await client.delete("/auth/logout", headers=bearer(first))

    assert (await client.get("/auth/me", headers=bearer(first))).status_code == 401
    assert (await client.get("/auth/me", headers=bearer(second))).status_code == 200


@pytest.mark.asyncio
async def test_logout_with_malformed_token(client: AsyncClient):
    response = await client.delete("/auth/logout", headers=bearer("not.a.token"))

    assert response.status_code == 422
    assert response.json()["errors"]["code"] == "TOKEN_INVALID"


@pytest.mark.asyncio
@pytest.mark.parametrize("headers", [{}, {"Authorization": "Basic abc"}])
async def test_logout_without_bearer_token(client: AsyncClient, db_session: AsyncSession, headers):
    response = await client.delete("/auth/logout", headers=headers)

    assert response.status_code == 422
    assert response.json()["errors"]["code"] == "TOKEN_INVALID"
    assert (await db_session.exec(select(RevokedToken))).all() == []
