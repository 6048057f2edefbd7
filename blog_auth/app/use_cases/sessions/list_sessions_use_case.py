from typing import Optional
from uuid import UUID

from blog_auth.libs.result import Result, Return
from blog_auth.app.services.unit_of_work import UnitOfWork
from blog_auth.domain.base import utc_now
from .dtos import SessionInfo, SessionListResponse


class ListSessionsUseCase:
    """Lists the caller's active sessions, flagging the one making the request."""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, user_id: UUID, current_session_id: Optional[UUID] = None
    ) -> Result[SessionListResponse]:
        async with self.uow:
            sessions = await self.uow.sessions.list_active_by_user_id(user_id, utc_now())

            return Return.ok(
                SessionListResponse(
                    sessions=[
                        SessionInfo(
                            id=str(s.id),
                            user_agent=s.user_agent,
                            ip_address=s.ip_address,
                            created_at=s.created_at,
                            last_used_at=s.last_used_at,
                            expires_at=s.expires_at,
                            current=s.id == current_session_id,
                        )
                        for s in sessions
                    ]
                )
            )
