from typing import Optional

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from blog_auth.libs.result import Error
from blog_auth.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from blog_auth.api.error import ForbiddenError
from blog_auth.api.utils.request_auth import RequestAuthenticator
from blog_auth.app.services.unit_of_work import UnitOfWork
from blog_auth.app.use_cases.auth.dtos import Principal

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


async def require_auth(
    authorization: Optional[str] = Header(None),
    uow: UnitOfWork = Depends(get_unit_of_work),
) -> Principal:
    """
    Dependency gating protected endpoints.

    Args:
        authorization: Raw Authorization header

    Returns:
        Principal of the authenticated caller

    Raises:
        AuthenticationError: 401 with AUTH_REQUIRED, AUTH_INVALID_TOKEN,
            AUTH_TOKEN_EXPIRED or AUTH_SESSION_REVOKED
    """
    return await RequestAuthenticator(uow).authenticate(authorization, strict=True)


async def optional_auth(
    authorization: Optional[str] = Header(None),
    uow: UnitOfWork = Depends(get_unit_of_work),
) -> Optional[Principal]:
    """Dependency for endpoints that serve anonymous callers too. Never raises."""
    return await RequestAuthenticator(uow).authenticate(authorization, strict=False)


def require_role(*roles: str):
    """Build a dependency that admits only authenticated callers holding one of roles."""

    async def dependency(principal: Principal = Depends(require_auth)) -> Principal:
        if principal.role not in roles:
            raise ForbiddenError(Error("FORBIDDEN", "Access denied"))
        return principal

    return dependency
