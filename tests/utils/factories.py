from datetime import timedelta
from uuid import uuid4

from sqlmodel.ext.asyncio.session import AsyncSession

from blog_auth.adapter.repositories.session_repository import SessionRepository
from blog_auth.adapter.repositories.user_repository import UserRepository
from blog_auth.domain.base import utc_now
from blog_auth.domain.entities import Session, User


async def create_user(db_session: AsyncSession) -> User:
    user = User(email="author@blog.dev", username="author", password_hash="x" * 60)
    return await UserRepository(db_session).create(user)


async def create_session(db_session: AsyncSession, user: User, **overrides) -> Session:
    fields = dict(
        user_id=user.id,
        refresh_token_hash=uuid4().hex,
        expires_at=utc_now() + timedelta(days=7),
    )
    fields.update(overrides)
    return await SessionRepository(db_session).create(Session(**fields))
