"""
Session issuing shared by login and refresh.
"""

from datetime import datetime, timedelta
from typing import Optional, Tuple

from config import ApplicationConfig
from blog_auth.api.utils.jwt import (
    access_token_expires_in,
    generate_access_token,
    generate_refresh_secret,
    hash_refresh_secret,
)
from blog_auth.domain.entities import Session, User
from .dtos import AuthTokensResponse, SessionMetadata, UserInfo


def normalize_email(email: Optional[str]) -> str:
    return str(email or "").strip().lower()


def build_session(
    user: User, metadata: Optional[SessionMetadata], now: datetime
) -> Tuple[Session, str]:
    """
    Build an unsaved session and the refresh secret it is keyed on.

    The session id is assigned here, before persistence, so a rotation can
    chain the parent to it first.
    """
    metadata = metadata or SessionMetadata()
    refresh_token = generate_refresh_secret()
    session = Session(
        user_id=user.id,
        refresh_token_hash=hash_refresh_secret(refresh_token),
        user_agent=metadata.user_agent[:255] if metadata.user_agent else None,
        ip_address=metadata.ip_address[:100] if metadata.ip_address else None,
        expires_at=now + timedelta(days=ApplicationConfig.JWT_REFRESH_EXPIRES_DAYS),
        last_used_at=now,
    )
    return session, refresh_token


def build_tokens_response(
    user: User, session: Session, refresh_token: str
) -> AuthTokensResponse:
    return AuthTokensResponse(
        access_token=generate_access_token(user, session.id),
        expires_in=access_token_expires_in(),
        refresh_token=refresh_token,
        refresh_token_expires_at=session.expires_at,
        session_id=str(session.id),
        user=UserInfo.from_user(user),
    )
