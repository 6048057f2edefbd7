import base64
import hashlib
import hmac
import secrets
from datetime import UTC, datetime, timedelta
from typing import Optional
from uuid import UUID, uuid4

from jose import ExpiredSignatureError, JWTError, jwt

from config import ApplicationConfig
from blog_auth.api.error import AuthErrorCode, auth_error
from blog_auth.domain.entities import User

ACCESS_TOKEN_TYPE = "access"
REFRESH_SECRET_BYTES = 48


def access_token_expires_in() -> int:
    """Access token lifetime in seconds"""
    return ApplicationConfig.JWT_ACCESS_EXPIRES_MINUTES * 60


def generate_access_token(user: User, session_id: UUID) -> str:
    """
    Generate JWT access token bound to a session

    Args:
        user: Authenticated user
        session_id: Session the token belongs to (sid claim)

    Returns:
        JWT token string (HS256, JWT_ACCESS_EXPIRES_MINUTES expiry)
    """
    now = datetime.now(UTC)
    payload = {
        "sub": str(user.id),
        "email": user.email,
        "role": getattr(user.role, "value", user.role),
        "sid": str(session_id),
        "type": ACCESS_TOKEN_TYPE,
        "iss": ApplicationConfig.JWT_ISSUER,
        "aud": ApplicationConfig.JWT_AUDIENCE,
        # Sub-second precision; compared against password_changed_at
        "iat": now.timestamp(),
        "exp": now + timedelta(seconds=access_token_expires_in()),
        "jti": uuid4().hex,
    }
    return jwt.encode(
        payload, ApplicationConfig.JWT_SECRET, algorithm=ApplicationConfig.JWT_ALGORITHM
    )


def verify_access_token(token: Optional[str], strict: bool = False) -> Optional[dict]:
    """
    Verify and decode an access token

    Checks signature, expiry, issuer, audience and token type.

    Args:
        token: JWT token string
        strict: Raise AuthenticationError instead of returning None

    Returns:
        Decoded payload dict or None if invalid (lenient mode)

    Raises:
        AuthenticationError: AUTH_REQUIRED, AUTH_TOKEN_EXPIRED or
            AUTH_INVALID_TOKEN (strict mode only)
    """
    if not token:
        if strict:
            raise auth_error(
                AuthErrorCode.AUTH_REQUIRED, "Authentication token is required"
            )
        return None

    try:
        payload = jwt.decode(
            token,
            ApplicationConfig.JWT_SECRET,
            algorithms=[ApplicationConfig.JWT_ALGORITHM],
            audience=ApplicationConfig.JWT_AUDIENCE,
            issuer=ApplicationConfig.JWT_ISSUER,
        )
    except ExpiredSignatureError:
        if strict:
            raise auth_error(
                AuthErrorCode.AUTH_TOKEN_EXPIRED, "Authentication token has expired"
            )
        return None
    except JWTError:
        if strict:
            raise auth_error(
                AuthErrorCode.AUTH_INVALID_TOKEN, "Invalid authentication token"
            )
        return None

    if (
        payload.get("type") != ACCESS_TOKEN_TYPE
        or not payload.get("sub")
        or not payload.get("sid")
    ):
        if strict:
            raise auth_error(
                AuthErrorCode.AUTH_INVALID_TOKEN, "Invalid authentication token"
            )
        return None

    return payload


def generate_refresh_secret() -> str:
    """Opaque refresh secret: 48 random bytes, URL-safe base64 without padding"""
    return base64.urlsafe_b64encode(secrets.token_bytes(REFRESH_SECRET_BYTES)).decode().rstrip("=")


def hash_refresh_secret(refresh_secret: str) -> str:
    """Keyed HMAC-SHA256 of a refresh secret, hex encoded, for storage and lookup"""
    key = ApplicationConfig.REFRESH_TOKEN_SECRET.encode()
    return hmac.new(key, refresh_secret.encode(), hashlib.sha256).hexdigest()
