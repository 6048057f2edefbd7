"""
Revoke Session Use Case

Handles revocation of a single session from the caller's device list.
"""

from uuid import UUID

from blog_auth.libs.result import Error, Result, Return
from blog_auth.app.services.unit_of_work import UnitOfWork
from blog_auth.app.use_cases.auth.dtos import LogoutResponse
from blog_auth.domain.base import utc_now
from blog_auth.domain.entities import UserRole


class RevokeSessionUseCase:
    """
    Use case for revoking one session by ID.

    Business Rules:
    - Users can revoke their own sessions
    - Admins can revoke any user's session
    - Sessions of other users are reported as not found to non-admins
    - Revoking an already revoked session is a no-op (revoked=False)
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, session_id: UUID, requesting_user_id: UUID, requesting_role: str
    ) -> Result[LogoutResponse]:
        """
        Args:
            session_id: Session to revoke
            requesting_user_id: User requesting the revocation
            requesting_role: Role of requesting user

        Returns:
            Result with revoked flag, or Error NOT_FOUND
        """
        async with self.uow:
            session = await self.uow.sessions.get_by_id(session_id)

            is_admin = requesting_role == UserRole.admin.value
            if session is None or (session.user_id != requesting_user_id and not is_admin):
                return Return.err(Error("NOT_FOUND", "Session not found"))

            revoked = await self.uow.sessions.revoke(session_id, utc_now())

            await self.uow.commit()

        return Return.ok(LogoutResponse(revoked=revoked))
