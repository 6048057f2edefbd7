from datetime import datetime
from typing import List, Optional, Tuple
from uuid import UUID

from sqlmodel import col, select, update
from sqlmodel.ext.asyncio.session import AsyncSession

from blog_auth.app.repositories.session_repository import ISessionRepository
from blog_auth.domain.entities import Session, User


class SessionRepository(ISessionRepository):
    """Session repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, session_obj: Session) -> Session:
        """Create a new session"""
        self.session.add(session_obj)
        await self.session.flush()
        await self.session.refresh(session_obj)
        return session_obj

    async def get_by_id(self, session_id: UUID) -> Optional[Session]:
        """Get session by ID"""
        stmt = select(Session).where(Session.id == session_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def find_by_refresh_token_hash(self, refresh_token_hash: str) -> Optional[Session]:
        """
        Find session by refresh token hash.

        Revoked and expired rows are returned too; the caller needs them
        to tell a replayed secret from an expired one.
        """
        stmt = (
            select(Session)
            .where(Session.refresh_token_hash == refresh_token_hash)
            .execution_options(populate_existing=True)
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def find_active_by_refresh_token_hash(
        self, refresh_token_hash: str, now: datetime
    ) -> Optional[Session]:
        """Find an unrevoked, unexpired session by refresh token hash.

        For callers that must ignore revoked rows. Rotation uses
        find_by_refresh_token_hash instead so a revoked hash can be detected
        as reuse, and logout revokes through revoke_matching.
        """
        stmt = select(Session).where(
            Session.refresh_token_hash == refresh_token_hash,
            col(Session.revoked_at).is_(None),
            col(Session.expires_at) > now,
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def find_active_with_user(
        self, session_id: UUID, user_id: UUID, now: datetime
    ) -> Optional[Tuple[Session, User]]:
        """Find an active session of the given user, joined with its user row"""
        stmt = (
            select(Session, User)
            .join(User, col(User.id) == col(Session.user_id))
            .where(
                Session.id == session_id,
                Session.user_id == user_id,
                col(Session.revoked_at).is_(None),
                col(Session.expires_at) > now,
            )
            .execution_options(populate_existing=True)
        )
        result = await self.session.exec(stmt)
        row = result.first()
        if row is None:
            return None
        session_obj, user = row
        return session_obj, user

    async def list_active_by_user_id(self, user_id: UUID, now: datetime) -> List[Session]:
        """List a user's active sessions, newest first"""
        stmt = (
            select(Session)
            .where(
                Session.user_id == user_id,
                col(Session.revoked_at).is_(None),
                col(Session.expires_at) > now,
            )
            .order_by(col(Session.created_at).desc())
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def revoke(self, session_id: UUID, at: datetime) -> bool:
        """Revoke a specific session by ID"""
        stmt = (
            update(Session)
            .where(Session.id == session_id, col(Session.revoked_at).is_(None))
            .values(revoked_at=at, last_used_at=at)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0

    async def rotate(self, parent_id: UUID, child_id: UUID, at: datetime) -> bool:
        """Revoke the parent session and point it at its successor"""
        stmt = (
            update(Session)
            .where(Session.id == parent_id, col(Session.revoked_at).is_(None))
            .values(revoked_at=at, replaced_by_session_id=child_id, last_used_at=at)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount == 1

    async def revoke_matching(
        self,
        refresh_token_hash: Optional[str],
        session_id: Optional[UUID],
        at: datetime,
    ) -> int:
        """Revoke the live session matching every supplied identifier"""
        if refresh_token_hash is None and session_id is None:
            return 0

        conditions = [col(Session.revoked_at).is_(None)]
        if session_id is not None:
            conditions.append(Session.id == session_id)
        if refresh_token_hash is not None:
            conditions.append(Session.refresh_token_hash == refresh_token_hash)

        stmt = update(Session).where(*conditions).values(revoked_at=at, last_used_at=at)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    async def revoke_all_by_user_id(self, user_id: UUID, at: datetime) -> int:
        """Revoke all active sessions for a user"""
        stmt = (
            update(Session)
            .where(Session.user_id == user_id, col(Session.revoked_at).is_(None))
            .values(revoked_at=at, last_used_at=at)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    async def revoke_expired(self, now: datetime) -> int:
        """Revoke sessions past expires_at that are still unrevoked"""
        stmt = (
            update(Session)
            .where(col(Session.revoked_at).is_(None), col(Session.expires_at) <= now)
            .values(revoked_at=now)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
