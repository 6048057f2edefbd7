from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional
from uuid import UUID

from blog_auth.domain.entities import User


class IUserRepository(ABC):
    """User repository interface - application layer"""

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by (normalized) email address"""
        pass

    @abstractmethod
    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID"""
        pass

    @abstractmethod
    async def get_by_email_or_username(self, email: str, username: str) -> Optional[User]:
        """Get a user holding either the email or the username"""
        pass

    @abstractmethod
    async def create(self, user: User) -> User:
        """Create a new user"""
        pass

    @abstractmethod
    async def update(self, user: User) -> User:
        """Update existing user"""
        pass

    @abstractmethod
    async def register_failed_login(
        self, user_id: UUID, max_attempts: int, lock_until: datetime
    ) -> int:
        """
        Atomically increment failed_login_attempts.

        Sets locked_until to lock_until when the incremented count reaches
        max_attempts, clears it otherwise. Returns the new count.
        """
        pass
