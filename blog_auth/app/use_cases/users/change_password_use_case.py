"""
Change Password Use Case

Replaces a user's password and invalidates everything issued under the old one.
"""

import logging
from uuid import UUID

from blog_auth.libs.result import Error, Result, Return
from blog_auth.app.services.password_hasher import hash_password, verify_password
from blog_auth.app.services.unit_of_work import UnitOfWork
from blog_auth.domain.base import utc_now
from .dtos import PasswordChangedResponse
from .password_policy import validate_password

logger = logging.getLogger(__name__)


class ChangePasswordUseCase:
    """
    Use case for changing the caller's password.

    Business Rules:
    - The current password must verify
    - New password must meet PASSWORD_MIN_LENGTH
    - Password is hashed explicitly here, before the user row is updated
    - password_changed_at is stamped so older access tokens are rejected
    - All sessions are revoked; the user logs in again everywhere
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, user_id: UUID, current_password: str, new_password: str
    ) -> Result[PasswordChangedResponse]:
        """
        Execute change password use case.

        Errors:
            - NOT_FOUND: User does not exist
            - AUTHENTICATION_ERROR: Current password is wrong
            - VALIDATION_ERROR: New password does not meet the policy
        """
        password_validation = validate_password(new_password)
        if password_validation.is_err():
            return Return.err(password_validation.error)

        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error("NOT_FOUND", "User not found"))

            if not verify_password(current_password, user.password_hash):
                return Return.err(
                    Error("AUTHENTICATION_ERROR", "Current password is incorrect")
                )

            now = utc_now()
            user.password_hash = hash_password(new_password)
            user.password_changed_at = now
            await self.uow.users.update(user)

            revoked_count = await self.uow.sessions.revoke_all_by_user_id(user.id, now)

            await self.uow.commit()

        logger.info(f"Password changed for user {user_id}; revoked {revoked_count} session(s)")
        return Return.ok(
            PasswordChangedResponse(status="success", revoked_count=revoked_count)
        )
