from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional, Tuple
from uuid import UUID

from blog_auth.domain.entities import Session, User


class ISessionRepository(ABC):
    """Session repository interface - application layer

    Every revoking method is a conditional update on ``revoked_at IS NULL``,
    so concurrent callers racing on the same row see exactly one winner.
    """

    @abstractmethod
    async def create(self, session: Session) -> Session:
        """Create a new session"""
        pass

    @abstractmethod
    async def get_by_id(self, session_id: UUID) -> Optional[Session]:
        """Get session by ID"""
        pass

    @abstractmethod
    async def find_by_refresh_token_hash(self, refresh_token_hash: str) -> Optional[Session]:
        """Find session by refresh token hash, whatever its state"""
        pass

    @abstractmethod
    async def find_active_by_refresh_token_hash(
        self, refresh_token_hash: str, now: datetime
    ) -> Optional[Session]:
        """Find an unrevoked, unexpired session by refresh token hash.

        For callers that must ignore revoked rows. Rotation uses
        find_by_refresh_token_hash instead so a revoked hash can be detected
        as reuse, and logout revokes through revoke_matching.
        """
        pass

    @abstractmethod
    async def find_active_with_user(
        self, session_id: UUID, user_id: UUID, now: datetime
    ) -> Optional[Tuple[Session, User]]:
        """Find an active session of the given user, joined with its user row"""
        pass

    @abstractmethod
    async def list_active_by_user_id(self, user_id: UUID, now: datetime) -> List[Session]:
        """List a user's active sessions, newest first"""
        pass

    @abstractmethod
    async def revoke(self, session_id: UUID, at: datetime) -> bool:
        """Revoke one session. Returns True if this call revoked it."""
        pass

    @abstractmethod
    async def rotate(self, parent_id: UUID, child_id: UUID, at: datetime) -> bool:
        """Revoke the parent and chain it to its successor.

        Returns False when the parent was already revoked, i.e. another
        refresh consumed it first.
        """
        pass

    @abstractmethod
    async def revoke_matching(
        self,
        refresh_token_hash: Optional[str],
        session_id: Optional[UUID],
        at: datetime,
    ) -> int:
        """Revoke the live session matching every supplied identifier. Returns count."""
        pass

    @abstractmethod
    async def revoke_all_by_user_id(self, user_id: UUID, at: datetime) -> int:
        """Revoke all active sessions for a user. Returns count of revoked sessions."""
        pass

    @abstractmethod
    async def revoke_expired(self, now: datetime) -> int:
        """Revoke sessions past expires_at that are not yet revoked. Returns count."""
        pass
