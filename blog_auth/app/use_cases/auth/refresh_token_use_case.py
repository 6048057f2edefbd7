"""
Refresh Token Use Case

Handles access token refresh with refresh token rotation and reuse detection.
"""

import logging
from datetime import datetime
from typing import Optional
from uuid import UUID

from blog_auth.libs.result import Error, Result, Return
from blog_auth.api.utils.jwt import hash_refresh_secret
from blog_auth.app.services.unit_of_work import UnitOfWork
from blog_auth.domain.base import utc_now
from .dtos import AuthTokensResponse, SessionMetadata
from .session_issuer import build_session, build_tokens_response

logger = logging.getLogger(__name__)


class RefreshTokenUseCase:
    """
    Use case for exchanging a refresh secret for new tokens.

    Business Rules:
    - Refresh token rotation: each secret is single-use; a successful
      refresh revokes the session and chains it to a new one
    - Presenting a revoked secret is treated as theft: every session of
      the user is revoked
    - An expired session is revoked on its own (expired, not stolen)
    - The user must still exist and be active
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, refresh_token: Optional[str], metadata: Optional[SessionMetadata] = None
    ) -> Result[AuthTokensResponse]:
        """
        Execute refresh token use case.

        Args:
            refresh_token: The refresh secret to verify and rotate
            metadata: User agent and IP address of the client

        Returns:
            Result with AuthTokensResponse containing new tokens, or Error
        """
        if not refresh_token:
            return Return.err(Error("AUTHENTICATION_ERROR", "Missing refresh token"))

        refresh_token_hash = hash_refresh_secret(refresh_token)

        async with self.uow:
            session = await self.uow.sessions.find_by_refresh_token_hash(refresh_token_hash)

            if session is None:
                return Return.err(Error("AUTHENTICATION_ERROR", "Invalid refresh token"))

            now = utc_now()

            if session.revoked_at is not None:
                return await self._reject_reuse(session.user_id, session.id, now)

            if session.expires_at <= now:
                await self.uow.sessions.revoke(session.id, now)
                await self.uow.commit()
                return Return.err(Error("AUTHENTICATION_ERROR", "Refresh token expired"))

            user = await self.uow.users.get_by_id(session.user_id)
            if user is None or not user.is_active:
                await self.uow.sessions.revoke(session.id, now)
                await self.uow.commit()
                return Return.err(Error("AUTHENTICATION_ERROR", "Account is not active"))

            successor, new_refresh_token = build_session(user, metadata, now)

            # Compare-and-set on the parent: a concurrent refresh that got
            # there first means this secret was used twice
            rotated = await self.uow.sessions.rotate(session.id, successor.id, now)
            if not rotated:
                return await self._reject_reuse(session.user_id, session.id, now)

            await self.uow.sessions.create(successor)
            await self.uow.commit()

            logger.info(f"Rotated session {session.id} -> {successor.id} for user {user.id}")

            return Return.ok(build_tokens_response(user, successor, new_refresh_token))

    async def _reject_reuse(
        self, user_id: UUID, session_id: UUID, now: datetime
    ) -> Result[AuthTokensResponse]:
        revoked_count = await self.uow.sessions.revoke_all_by_user_id(user_id, now)
        await self.uow.commit()

        logger.warning(
            f"Refresh token reuse detected on session {session_id}; "
            f"revoked {revoked_count} session(s) for user {user_id}"
        )
        return Return.err(Error("AUTHENTICATION_ERROR", "Refresh token has been revoked"))
