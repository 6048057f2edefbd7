from uuid import UUID

from fastapi import APIRouter, Depends, status

from blog_auth.api.error import ClientError, ServerError
from blog_auth.app.services.unit_of_work import UnitOfWork
from blog_auth.app.use_cases.auth import (
    CleanupExpiredSessionsUseCase,
    LogoutResponse,
    Principal,
    RevokedSessionsResponse,
)
from blog_auth.app.use_cases.sessions import (
    ListSessionsUseCase,
    RevokeSessionUseCase,
    SessionListResponse,
)
from blog_auth.depends import get_unit_of_work, require_auth, require_role
from blog_auth.domain.entities import UserRole

router = APIRouter(prefix="/sessions", tags=["Sessions"])


@router.get("", status_code=status.HTTP_200_OK, response_model=SessionListResponse)
async def list_sessions(
    principal: Principal = Depends(require_auth),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    List Sessions

    Active sessions (devices) of the caller; the one behind the presented
    access token is flagged as current.
    """
    use_case = ListSessionsUseCase(uow)
    result = await use_case.execute(UUID(principal.id), UUID(principal.session_id))

    if result.is_err():
        raise ServerError(result.error)

    return result.value


@router.delete("/{session_id}", status_code=status.HTTP_200_OK, response_model=LogoutResponse)
async def revoke_session(
    session_id: UUID,
    principal: Principal = Depends(require_auth),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Revoke Specific Session

    Logs out one device. Admins may revoke any user's session.

    Raises:
        - 404 Not Found: Session does not exist or belongs to someone else
    """
    use_case = RevokeSessionUseCase(uow)
    result = await use_case.execute(session_id, UUID(principal.id), principal.role)

    if result.is_err():
        error = result.error
        if error.code == "NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value


@router.post(
    "/cleanup", status_code=status.HTTP_200_OK, response_model=RevokedSessionsResponse
)
async def cleanup_expired_sessions(
    principal: Principal = Depends(require_role(UserRole.admin.value)),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Cleanup Expired Sessions (admin)

    Marks every expired, unrevoked session as revoked.

    Raises:
        - 403 Forbidden: Caller is not an admin
    """
    use_case = CleanupExpiredSessionsUseCase(uow)
    result = await use_case.execute()

    if result.is_err():
        raise ServerError(result.error)

    return result.value
