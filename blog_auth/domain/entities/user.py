"""
User Entity

Account record consulted by the authentication core.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from blog_auth.domain.base import utc_now
from .enums import UserRole


class User(SQLModel, table=True):
    """
    User entity - a blog author or reader.

    Business Rules:
    - Email is unique and stored lowercase
    - Password stored as bcrypt hash (cost factor from BCRYPT_ROUNDS)
    - failed_login_attempts reaching MAX_LOGIN_ATTEMPTS sets locked_until
    - password_changed_at invalidates access tokens issued before it
    """

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    email: str = Field(unique=True, index=True, max_length=255)
    username: str = Field(unique=True, index=True, max_length=50)
    password_hash: str = Field(max_length=60)  # Bcrypt output is 60 chars

    role: UserRole = Field(default=UserRole.user)
    is_active: bool = Field(default=True)

    # Lockout state
    failed_login_attempts: int = Field(default=0)
    locked_until: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    # Timestamps
    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
    last_login_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    password_changed_at: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime)
    )

    __table_args__ = (Index("idx_user_is_active", "is_active"),)

    def is_locked(self, now: datetime) -> bool:
        return self.locked_until is not None and self.locked_until > now
