from datetime import UTC, datetime, timedelta

import pytest
from httpx import AsyncClient
from jose import jwt

from config import ApplicationConfig
from blog_auth.domain.base import utc_now
from tests.utils.auth_flow import bearer, fetch_session, fetch_user, login, register


@pytest.mark.asyncio
async def test_me_returns_principal(client: AsyncClient):
    user = await register(client)
    login_data, _ = await login(client)

    response = await client.get("/auth/me", headers=bearer(login_data["access_token"]))

    assert response.status_code == 200
    data = response.json()
    assert data["id"] == user["id"]
    assert data["email"] == "author@blog.dev"
    assert data["role"] == "user"
    assert data["session_id"] == login_data["session_id"]


@pytest.mark.asyncio
async def test_me_without_token(client: AsyncClient):
    response = await client.get("/auth/me")

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "AUTH_REQUIRED"
    assert response.headers["www-authenticate"] == "Bearer"


@pytest.mark.asyncio
async def test_me_with_malformed_header(client: AsyncClient):
    response = await client.get("/auth/me", headers={"Authorization": "Token abc"})

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "AUTH_INVALID_TOKEN"


@pytest.mark.asyncio
async def test_me_with_expired_token(client: AsyncClient, db_session):
    await register(client)
    login_data, _ = await login(client)
    user = await fetch_user(db_session)

    past = datetime.now(UTC) - timedelta(hours=1)
    token = jwt.encode(
        {
            "sub": str(user.id),
            "sid": login_data["session_id"],
            "type": "access",
            "iss": ApplicationConfig.JWT_ISSUER,
            "aud": ApplicationConfig.JWT_AUDIENCE,
            "iat": past,
            "exp": past + timedelta(minutes=15),
        },
        ApplicationConfig.JWT_SECRET,
        algorithm=ApplicationConfig.JWT_ALGORITHM,
    )

    response = await client.get("/auth/me", headers=bearer(token))

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "AUTH_TOKEN_EXPIRED"


@pytest.mark.asyncio
async def test_me_with_expired_session(client: AsyncClient, db_session):
    """The access token is still valid but its session is past expires_at"""
    await register(client)
    login_data, _ = await login(client)

    session = await fetch_session(db_session, login_data["session_id"])
    session.expires_at = utc_now() - timedelta(seconds=1)
    db_session.add(session)
    await db_session.commit()

    response = await client.get("/auth/me", headers=bearer(login_data["access_token"]))

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "AUTH_SESSION_REVOKED"


@pytest.mark.asyncio
async def test_me_rejects_token_issued_before_password_change(
    client: AsyncClient, db_session
):
    """Stale Access Token

    Given an access token issued at t0 whose session is still active
    When the password is changed at t1 > t0
    Then the token is rejected with AUTH_SESSION_REVOKED
    """
    await register(client)
    login_data, _ = await login(client)

    user = await fetch_user(db_session)
    user.password_changed_at = utc_now() + timedelta(seconds=5)
    db_session.add(user)
    await db_session.commit()

    assert (await fetch_session(db_session, login_data["session_id"])).revoked_at is None

    response = await client.get("/auth/me", headers=bearer(login_data["access_token"]))

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "AUTH_SESSION_REVOKED"


@pytest.mark.asyncio
async def test_me_for_deactivated_user(client: AsyncClient, db_session):
    await register(client)
    login_data, _ = await login(client)

    user = await fetch_user(db_session)
    user.is_active = False
    db_session.add(user)
    await db_session.commit()

    response = await client.get("/auth/me", headers=bearer(login_data["access_token"]))

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "AUTH_SESSION_REVOKED"
