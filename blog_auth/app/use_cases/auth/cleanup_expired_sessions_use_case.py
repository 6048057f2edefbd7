"""
Cleanup Expired Sessions Use Case

Housekeeping: marks sessions past their expiry as revoked.
Triggered externally (see cleanup_sessions.py), never from the request path.
"""

import logging

from blog_auth.libs.result import Result, Return
from blog_auth.app.services.unit_of_work import UnitOfWork
from blog_auth.domain.base import utc_now
from .dtos import RevokedSessionsResponse

logger = logging.getLogger(__name__)


class CleanupExpiredSessionsUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self) -> Result[RevokedSessionsResponse]:
        async with self.uow:
            count = await self.uow.sessions.revoke_expired(utc_now())
            await self.uow.commit()

        logger.info(f"Expired session cleanup revoked {count} session(s)")
        return Return.ok(RevokedSessionsResponse(revoked_count=count))
