"""
Deactivate Account Use Case

Account deletion from the caller's point of view. The user row is kept
(sessions reference it and are never hard-deleted); it is marked inactive
and every session is revoked.
"""

import logging
from uuid import UUID

from blog_auth.libs.result import Error, Result, Return
from blog_auth.app.services.unit_of_work import UnitOfWork
from blog_auth.domain.base import utc_now
from .dtos import AccountDeactivatedResponse

logger = logging.getLogger(__name__)


class DeactivateAccountUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID) -> Result[AccountDeactivatedResponse]:
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error("NOT_FOUND", f"User with ID {user_id} not found"))

            revoked_count = await self.uow.sessions.revoke_all_by_user_id(
                user.id, utc_now()
            )

            user.is_active = False
            await self.uow.users.update(user)

            await self.uow.commit()

        logger.info(f"User deactivated: {user_id}")
        return Return.ok(
            AccountDeactivatedResponse(id=str(user_id), revoked_count=revoked_count)
        )
