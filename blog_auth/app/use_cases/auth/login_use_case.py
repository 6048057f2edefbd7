"""
Login Use Case

Handles user authentication, lockout policy and session creation.
"""

import logging
from datetime import timedelta
from typing import Optional

from config import ApplicationConfig
from blog_auth.libs.result import Error, Result, Return
from blog_auth.app.services.password_hasher import burn_password_check, verify_password
from blog_auth.app.services.unit_of_work import UnitOfWork
from blog_auth.domain.base import utc_now
from .dtos import AuthTokensResponse, SessionMetadata
from .session_issuer import build_session, build_tokens_response, normalize_email

logger = logging.getLogger(__name__)

# One message for every failure so callers cannot enumerate accounts
INVALID_CREDENTIALS = Error("AUTHENTICATION_ERROR", "Invalid email or password")


class LoginUseCase:
    """
    Use case for user login and session issuance.

    Business Rules:
    - Email is trimmed and lowercased before lookup
    - Unknown, inactive and locked accounts get the same generic error
    - A wrong password increments failed_login_attempts; reaching
      MAX_LOGIN_ATTEMPTS locks the account for ACCOUNT_LOCK_MINUTES
    - Success resets the counter, clears the lock, stamps last_login_at
    - Creates a new session with a rotating refresh secret
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, email: str, password: str, metadata: Optional[SessionMetadata] = None
    ) -> Result[AuthTokensResponse]:
        """
        Execute login use case.

        Args:
            email: User email (any case, surrounding whitespace allowed)
            password: Plain text password
            metadata: User agent and IP address of the client

        Returns:
            Result with AuthTokensResponse, or Error AUTHENTICATION_ERROR
        """
        normalized_email = normalize_email(email)

        async with self.uow:
            user = await self.uow.users.get_by_email(normalized_email)

            # Always pay for one bcrypt check, even if user not found
            if user is None:
                burn_password_check()
                return Return.err(INVALID_CREDENTIALS)

            now = utc_now()

            if not user.is_active:
                logger.info(f"Login rejected for inactive user {user.id}")
                burn_password_check()
                return Return.err(INVALID_CREDENTIALS)

            if user.is_locked(now):
                logger.info(f"Login rejected for locked user {user.id}")
                burn_password_check()
                return Return.err(INVALID_CREDENTIALS)

            if not verify_password(password, user.password_hash):
                max_attempts = ApplicationConfig.MAX_LOGIN_ATTEMPTS
                lock_until = now + timedelta(minutes=ApplicationConfig.ACCOUNT_LOCK_MINUTES)
                attempts = await self.uow.users.register_failed_login(
                    user.id, max_attempts, lock_until
                )
                await self.uow.commit()

                if attempts >= max_attempts:
                    logger.warning(
                        f"User {user.id} locked until {lock_until.isoformat()} "
                        f"after {attempts} failed login attempts"
                    )
                return Return.err(INVALID_CREDENTIALS)

            user.failed_login_attempts = 0
            user.locked_until = None
            user.last_login_at = now
            await self.uow.users.update(user)

            session, refresh_token = build_session(user, metadata, now)
            await self.uow.sessions.create(session)

            await self.uow.commit()

            return Return.ok(build_tokens_response(user, session, refresh_token))
