"""
Session Entity

One refresh-token lineage link for a user.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from blog_auth.domain.base import utc_now


class Session(SQLModel, table=True):
    """
    Session entity - server-side record behind a refresh secret.

    Business Rules:
    - Only the keyed hash of the refresh secret is stored (HMAC-SHA256, hex)
    - Active iff revoked_at is NULL and expires_at is in the future
    - A refresh rotates the session: the old row is revoked and points to
      its successor through replaced_by_session_id
    - revoked_at is never cleared; rows are never deleted by the core
    """

    __tablename__ = "user_sessions"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    user_id: UUID = Field(foreign_key="users.id", nullable=False, index=True)

    refresh_token_hash: str = Field(unique=True, max_length=64)

    # Provenance, informational only
    user_agent: Optional[str] = Field(default=None, max_length=255)
    ip_address: Optional[str] = Field(default=None, max_length=100)

    # Timestamps
    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
    expires_at: datetime = Field(sa_column=Column(DateTime, nullable=False))
    last_used_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    revoked_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    replaced_by_session_id: Optional[UUID] = Field(default=None)

    __table_args__ = (
        Index("idx_session_expires_at", "expires_at"),
        Index("idx_session_revoked_at", "revoked_at"),
    )

    def is_active(self, now: datetime) -> bool:
        return self.revoked_at is None and self.expires_at > now
