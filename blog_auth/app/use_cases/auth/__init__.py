"""
Authentication Use Cases

Login, refresh rotation, logout and session housekeeping.
"""

from .login_use_case import LoginUseCase
from .refresh_token_use_case import RefreshTokenUseCase
from .logout_use_case import LogoutUseCase
from .logout_all_sessions_use_case import LogoutAllSessionsUseCase
from .cleanup_expired_sessions_use_case import CleanupExpiredSessionsUseCase
from .dtos import (
    SessionMetadata,
    UserInfo,
    AuthTokensResponse,
    LogoutResponse,
    RevokedSessionsResponse,
    Principal,
)

__all__ = [
    # Use Cases
    "LoginUseCase",
    "RefreshTokenUseCase",
    "LogoutUseCase",
    "LogoutAllSessionsUseCase",
    "CleanupExpiredSessionsUseCase",
    # DTOs - Commands
    "SessionMetadata",
    # DTOs - Responses
    "AuthTokensResponse",
    "LogoutResponse",
    "RevokedSessionsResponse",
    "Principal",
    # DTOs - Nested Models
    "UserInfo",
]
