"""
Logout Use Case

Revokes the session behind a refresh secret or session id.
"""

from typing import Optional
from uuid import UUID

from blog_auth.libs.result import Result, Return
from blog_auth.api.utils.jwt import hash_refresh_secret
from blog_auth.app.services.unit_of_work import UnitOfWork
from blog_auth.domain.base import utc_now
from .dtos import LogoutResponse


class LogoutUseCase:
    """
    Use case for logging out of one session.

    Business Rules:
    - Matches on the hashed refresh secret and/or the session id; when both
      are given both must match
    - Idempotent: no identifiers, no match or an already revoked session
      are all successful no-ops
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, refresh_token: Optional[str] = None, session_id: Optional[UUID] = None
    ) -> Result[LogoutResponse]:
        if not refresh_token and session_id is None:
            return Return.ok(LogoutResponse(revoked=False))

        refresh_token_hash = hash_refresh_secret(refresh_token) if refresh_token else None

        async with self.uow:
            count = await self.uow.sessions.revoke_matching(
                refresh_token_hash, session_id, utc_now()
            )
            await self.uow.commit()

        return Return.ok(LogoutResponse(revoked=count > 0))
