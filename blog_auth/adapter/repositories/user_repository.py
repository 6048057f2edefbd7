from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy import case, or_
from sqlmodel import select, update
from sqlmodel.ext.asyncio.session import AsyncSession

from blog_auth.app.repositories.user_repository import IUserRepository
from blog_auth.domain.entities import User


class UserRepository(IUserRepository):
    """User repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email address"""
        stmt = (
            select(User)
            .where(User.email == email)
            .execution_options(populate_existing=True)
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID"""
        stmt = (
            select(User)
            .where(User.id == user_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_email_or_username(self, email: str, username: str) -> Optional[User]:
        """Get a user holding either the email or the username"""
        stmt = select(User).where(or_(User.email == email, User.username == username))
        result = await self.session.exec(stmt)
        return result.first()

    async def create(self, user: User) -> User:
        """Create a new user"""
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user

    async def update(self, user: User) -> User:
        """Update existing user"""
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user

    async def register_failed_login(
        self, user_id: UUID, max_attempts: int, lock_until: datetime
    ) -> int:
        """
        Increment failed_login_attempts in a single UPDATE.

        The lock decision is evaluated by the database against the
        pre-update counter, so concurrent failures cannot lose increments.
        """
        next_attempts = User.failed_login_attempts + 1
        stmt = (
            update(User)
            .where(User.id == user_id)
            .values(
                failed_login_attempts=next_attempts,
                locked_until=case((next_attempts >= max_attempts, lock_until), else_=None),
            )
            .execution_options(synchronize_session=False)
        )
        await self.session.execute(stmt)
        await self.session.flush()

        count_stmt = select(User.failed_login_attempts).where(User.id == user_id)
        result = await self.session.exec(count_stmt)
        return result.one()
