import pytest
from httpx import AsyncClient

from tests.utils.auth_client import bearer


@pytest.mark.asyncio
async def test_register_login_logout_then_token_rejected(client: AsyncClient):
    """End-to-end: register, login with other casing, logout, token no longer accepted"""
    registered = await client.post("/auth/register", json={"email": "a@x.com", "password": "longpassword1"})
    assert registered.status_code == 201

    logged_in = await client.post("/auth/login", json={"email": "A@X.com", "password": "longpassword1"})
    assert logged_in.status_code == 200
    token = logged_in.json()["token"]

    assert (await client.get("/auth/me", headers=bearer(token))).status_code == 200

    logged_out = await client.delete("/auth/logout", headers=bearer(token))
    assert logged_out.status_code == 200

    rejected = await client.get("/auth/me", headers=bearer(token))
    assert rejected.status_code == 401
