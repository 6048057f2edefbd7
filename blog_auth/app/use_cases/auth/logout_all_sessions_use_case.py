"""
Logout All Sessions Use Case

"Log out everywhere": revokes every active session of a user.
"""

import logging
from uuid import UUID

from blog_auth.libs.result import Result, Return
from blog_auth.app.services.unit_of_work import UnitOfWork
from blog_auth.domain.base import utc_now
from .dtos import RevokedSessionsResponse

logger = logging.getLogger(__name__)


class LogoutAllSessionsUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID) -> Result[RevokedSessionsResponse]:
        async with self.uow:
            count = await self.uow.sessions.revoke_all_by_user_id(user_id, utc_now())
            await self.uow.commit()

        logger.info(f"Revoked {count} session(s) for user {user_id}")
        return Return.ok(RevokedSessionsResponse(revoked_count=count))
