"""
Request Authentication

Turns an Authorization header into a Principal, validating both the access
token and the server-side session behind it. REST dependencies and any other
transport (GraphQL context, WebSocket handshake) go through this class.
"""

import logging
from datetime import UTC, datetime
from typing import Optional
from uuid import UUID

from blog_auth.api.error import AuthErrorCode, AuthenticationError, auth_error
from blog_auth.api.utils.jwt import verify_access_token
from blog_auth.app.services.unit_of_work import UnitOfWork
from blog_auth.app.use_cases.auth.dtos import Principal
from blog_auth.domain.base import utc_now

logger = logging.getLogger(__name__)

BEARER_SCHEME = "bearer"


def parse_bearer(authorization: Optional[str]) -> Optional[str]:
    """
    Extract the token from an ``Authorization: Bearer <token>`` value.

    Raises:
        AuthenticationError: AUTH_REQUIRED when the header is absent,
            AUTH_INVALID_TOKEN when it is not a bearer credential
    """
    if not authorization or not authorization.strip():
        raise auth_error(AuthErrorCode.AUTH_REQUIRED, "Authentication token is required")

    parts = authorization.strip().split()
    if len(parts) != 2 or parts[0].lower() != BEARER_SCHEME:
        raise auth_error(
            AuthErrorCode.AUTH_INVALID_TOKEN, "Malformed authorization header"
        )
    return parts[1]


def _timestamp(value: datetime) -> float:
    return value.replace(tzinfo=UTC).timestamp()


class RequestAuthenticator:
    """
    Resolves bearer access tokens to principals.

    Strict mode raises AuthenticationError with one of the AUTH_* codes.
    Lenient mode returns None on any failure, for routes that personalize
    output but also serve anonymous callers.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def authenticate(
        self, authorization: Optional[str], strict: bool = True
    ) -> Optional[Principal]:
        try:
            return await self._authenticate(authorization)
        except AuthenticationError:
            if strict:
                raise
            return None

    async def _authenticate(self, authorization: Optional[str]) -> Principal:
        token = parse_bearer(authorization)
        payload = verify_access_token(token, strict=True)

        try:
            user_id = UUID(payload["sub"])
            session_id = UUID(payload["sid"])
            issued_at = float(payload.get("iat", 0))
        except (TypeError, ValueError):
            raise auth_error(
                AuthErrorCode.AUTH_INVALID_TOKEN, "Invalid authentication token"
            )

        # The user row is read before the unit of work exits; leaving it
        # rolls back and expires loaded instances
        async with self.uow:
            found = await self.uow.sessions.find_active_with_user(
                session_id, user_id, utc_now()
            )

            if found is None:
                raise auth_error(
                    AuthErrorCode.AUTH_SESSION_REVOKED, "Session is no longer active"
                )

            _, user = found
            if not user.is_active:
                raise auth_error(
                    AuthErrorCode.AUTH_SESSION_REVOKED, "Session is no longer active"
                )

            # A password change invalidates every token issued before it
            if user.password_changed_at is not None and issued_at < _timestamp(
                user.password_changed_at
            ):
                logger.info(f"Rejected stale access token for user {user.id}")
                raise auth_error(
                    AuthErrorCode.AUTH_SESSION_REVOKED,
                    "Session is no longer active",
                )

            return Principal(
                id=str(user.id),
                email=user.email,
                role=getattr(user.role, "value", user.role),
                session_id=str(session_id),
                issued_at=int(issued_at),
            )
