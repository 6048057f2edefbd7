"""
Authentication Use Case DTOs (Data Transfer Objects)

All Command and Response classes for auth domain.
Provides type safety and clear contracts between layers.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from blog_auth.domain.entities import User


# ============================================================================
# Commands
# ============================================================================


class SessionMetadata(BaseModel):
    """Provenance recorded on a new session (informational only)"""

    user_agent: Optional[str] = None
    ip_address: Optional[str] = None


# ============================================================================
# Response DTOs
# ============================================================================


class UserInfo(BaseModel):
    """User details safe to return to clients (no password hash)"""

    id: str
    email: str
    username: str
    role: str
    is_active: bool
    last_login_at: Optional[datetime] = None
    created_at: datetime

    @classmethod
    def from_user(cls, user: User) -> "UserInfo":
        return cls(
            id=str(user.id),
            email=user.email,
            username=user.username,
            role=getattr(user.role, "value", user.role),
            is_active=user.is_active,
            last_login_at=user.last_login_at,
            created_at=user.created_at,
        )


class AuthTokensResponse(BaseModel):
    """Response for login and refresh use cases"""

    access_token: str
    token_type: str = "Bearer"
    expires_in: int
    refresh_token: str
    refresh_token_expires_at: datetime
    session_id: str
    user: UserInfo


class LogoutResponse(BaseModel):
    """Response for logout use case"""

    revoked: bool


class RevokedSessionsResponse(BaseModel):
    """Response for bulk session revocation use cases"""

    revoked_count: int


class Principal(BaseModel):
    """Authenticated caller resolved from a bearer access token"""

    id: str
    email: str
    role: str
    session_id: str
    issued_at: int
