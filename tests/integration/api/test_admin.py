from datetime import timedelta

import pytest
from httpx import AsyncClient
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.domain.base import utcnow
from src.domain.entities import RevokedToken


@pytest.mark.asyncio
async def test_prune_removes_only_expired_entries(client: AsyncClient, db_session: AsyncSession):
    db_session.add(RevokedToken(token_hash="a" * 64, expires_at=utcnow() - timedelta(hours=1)))
    db_session.add(RevokedToken(token_hash="b" * 64, expires_at=utcnow() + timedelta(hours=1)))
    await db_session.commit()

    response = await client.post(
        "/admin/revoked-tokens/prune",
        headers={"X-Admin-API-Key": ApplicationConfig.ADMIN_API_KEY},
    )

    assert response.status_code == 200
    assert response.json() == {"pruned": 1}
    remaining = (await db_session.exec(select(RevokedToken))).all()
    assert [r.token_hash for r in remaining] == ["b" * 64]


@pytest.mark.asyncio
async def test_prune_requires_admin_key(client: AsyncClient):
    missing = await client.post("/admin/revoked-tokens/prune")
    wrong = await client.post("/admin/revoked-tokens/prune", headers={"X-Admin-API-Key": "nope"})

    assert missing.status_code == 401
    assert wrong.status_code == 401
    assert wrong.json()["errors"]["code"] == "INVALID_API_KEY"


@pytest.mark.asyncio
async def test_health(client: AsyncClient):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
