import re
from datetime import UTC, datetime, timedelta
from uuid import uuid4

import pytest
from jose import jwt

from config import ApplicationConfig
from blog_auth.api.error import AuthenticationError
from blog_auth.api.utils.jwt import (
    generate_access_token,
    generate_refresh_secret,
    hash_refresh_secret,
    verify_access_token,
)
from blog_auth.domain.entities import User, UserRole


@pytest.fixture
def user():
    return User(
        id=uuid4(),
        email="editor@blog.dev",
        username="editor",
        password_hash="x" * 60,
        role=UserRole.moderator,
    )


def encode(**claims) -> str:
    now = datetime.now(UTC)
    payload = {
        "sub": str(uuid4()),
        "sid": str(uuid4()),
        "type": "access",
        "iss": ApplicationConfig.JWT_ISSUER,
        "aud": ApplicationConfig.JWT_AUDIENCE,
        "iat": now,
        "exp": now + timedelta(minutes=5),
    }
    payload.update(claims)
    return jwt.encode(
        payload, ApplicationConfig.JWT_SECRET, algorithm=ApplicationConfig.JWT_ALGORITHM
    )


def test_access_token_claims(user):
    session_id = uuid4()

    payload = verify_access_token(generate_access_token(user, session_id))

    assert payload["sub"] == str(user.id)
    assert payload["email"] == "editor@blog.dev"
    assert payload["role"] == "moderator"
    assert payload["sid"] == str(session_id)
    assert payload["type"] == "access"
    assert payload["iss"] == ApplicationConfig.JWT_ISSUER
    assert payload["aud"] == ApplicationConfig.JWT_AUDIENCE
    lifetime = ApplicationConfig.JWT_ACCESS_EXPIRES_MINUTES * 60
    assert lifetime - 1 < payload["exp"] - payload["iat"] <= lifetime
    assert payload["jti"]


def test_access_tokens_are_unique(user):
    session_id = uuid4()
    assert generate_access_token(user, session_id) != generate_access_token(user, session_id)


def test_verify_missing_token():
    assert verify_access_token(None) is None

    with pytest.raises(AuthenticationError) as exc_info:
        verify_access_token("", strict=True)
    assert exc_info.value.code == "AUTH_REQUIRED"


def test_verify_expired_token():
    past = datetime.now(UTC) - timedelta(hours=1)
    token = encode(iat=past, exp=past + timedelta(minutes=15))

    assert verify_access_token(token) is None
    with pytest.raises(AuthenticationError) as exc_info:
        verify_access_token(token, strict=True)
    assert exc_info.value.code == "AUTH_TOKEN_EXPIRED"
    assert exc_info.value.status_code == 401


@pytest.mark.parametrize(
    "token",
    [
        "not-a-jwt",
        encode(aud="someone-else"),
        encode(iss="someone-else"),
        encode(type="refresh"),
        encode(sid=None),
    ],
    ids=["garbage", "audience", "issuer", "type", "no-session"],
)
def test_verify_invalid_token(token):
    assert verify_access_token(token) is None
    with pytest.raises(AuthenticationError) as exc_info:
        verify_access_token(token, strict=True)
    assert exc_info.value.code == "AUTH_INVALID_TOKEN"


def test_verify_rejects_foreign_signature(user):
    token = jwt.encode({"sub": str(user.id)}, "another-secret", algorithm="HS256")
    assert verify_access_token(token) is None


def test_refresh_secret_format():
    secret = generate_refresh_secret()

    # 48 random bytes, unpadded URL-safe base64
    assert len(secret) == 64
    assert re.fullmatch(r"[A-Za-z0-9_-]+", secret)
    assert generate_refresh_secret() != secret


def test_refresh_secret_hash_is_keyed(monkeypatch):
    digest = hash_refresh_secret("refresh-secret")

    assert re.fullmatch(r"[0-9a-f]{64}", digest)
    assert hash_refresh_secret("refresh-secret") == digest

    monkeypatch.setattr(ApplicationConfig, "REFRESH_TOKEN_SECRET", "rotated-key")
    assert hash_refresh_secret("refresh-secret") != digest
