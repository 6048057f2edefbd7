from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Request, Response, status
from pydantic import BaseModel, EmailStr, Field

from blog_auth.api.error import AuthenticationError, ServerError
from blog_auth.api.utils.cookies import (
    clear_refresh_cookie,
    read_refresh_cookie,
    set_refresh_cookie,
)
from blog_auth.app.services.unit_of_work import UnitOfWork
from blog_auth.app.use_cases.auth import (
    AuthTokensResponse,
    LoginUseCase,
    LogoutAllSessionsUseCase,
    LogoutResponse,
    LogoutUseCase,
    Principal,
    RefreshTokenUseCase,
    RevokedSessionsResponse,
    SessionMetadata,
)
from blog_auth.depends import get_unit_of_work, optional_auth, require_auth

router = APIRouter(prefix="/auth", tags=["Authentication"])

# The refresh secret travels in the cookie only
TOKENS_RESPONSE_EXCLUDE = {"refresh_token"}


def session_metadata(request: Request) -> SessionMetadata:
    return SessionMetadata(
        user_agent=request.headers.get("user-agent"),
        ip_address=request.client.host if request.client else None,
    )


class LoginRequest(BaseModel):
    """
    Login HTTP request payload

    Validates incoming login request.
    """

    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=1, description="User password")


@router.post(
    "/login",
    status_code=status.HTTP_200_OK,
    response_model=AuthTokensResponse,
    response_model_exclude=TOKENS_RESPONSE_EXCLUDE,
)
async def login(
    request: LoginRequest,
    http_request: Request,
    response: Response,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    User Login

    Authenticates user, opens a session and sets the refresh cookie.

    Raises:
        - 401 Unauthorized: AUTHENTICATION_ERROR for unknown email, wrong
          password, locked or deactivated account (deliberately identical)
        - 500 Internal Server Error: Server error
    """
    use_case = LoginUseCase(uow)
    result = await use_case.execute(
        request.email, request.password, session_metadata(http_request)
    )

    if result.is_err():
        error = result.error
        if error.code == "AUTHENTICATION_ERROR":
            raise AuthenticationError(error)
        raise ServerError(error)

    tokens = result.value
    set_refresh_cookie(response, tokens.refresh_token, tokens.refresh_token_expires_at)
    return tokens


class RefreshRequest(BaseModel):
    """
    Refresh token HTTP request payload

    Optional; browsers send the secret in the refresh cookie instead.
    """

    refresh_token: Optional[str] = Field(None, description="Refresh token")


@router.post(
    "/refresh",
    status_code=status.HTTP_200_OK,
    response_model=AuthTokensResponse,
    response_model_exclude=TOKENS_RESPONSE_EXCLUDE,
)
async def refresh(
    http_request: Request,
    response: Response,
    request: Optional[RefreshRequest] = None,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Refresh Access Token

    Exchanges the refresh secret for new tokens and rotates the secret.
    Replaying an already rotated secret revokes every session of the account.

    Raises:
        - 401 Unauthorized: Missing, unknown, expired or revoked refresh token
        - 500 Internal Server Error: Server error
    """
    refresh_token = (request and request.refresh_token) or read_refresh_cookie(http_request)

    use_case = RefreshTokenUseCase(uow)
    result = await use_case.execute(refresh_token, session_metadata(http_request))

    if result.is_err():
        error = result.error
        if error.code == "AUTHENTICATION_ERROR":
            raise AuthenticationError(error)
        raise ServerError(error)

    tokens = result.value
    set_refresh_cookie(response, tokens.refresh_token, tokens.refresh_token_expires_at)
    return tokens


@router.post("/logout", status_code=status.HTTP_200_OK, response_model=LogoutResponse)
async def logout(
    http_request: Request,
    response: Response,
    request: Optional[RefreshRequest] = None,
    principal: Optional[Principal] = Depends(optional_auth),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Logout

    Revokes the session behind the refresh cookie, or behind the access
    token when no cookie is present. Always succeeds and clears the cookie.
    """
    refresh_token = (request and request.refresh_token) or read_refresh_cookie(http_request)
    session_id = None
    if not refresh_token and principal is not None:
        session_id = UUID(principal.session_id)

    use_case = LogoutUseCase(uow)
    result = await use_case.execute(refresh_token, session_id)

    if result.is_err():
        raise ServerError(result.error)

    clear_refresh_cookie(response)
    return result.value


@router.post(
    "/logout-all", status_code=status.HTTP_200_OK, response_model=RevokedSessionsResponse
)
async def logout_all(
    response: Response,
    principal: Principal = Depends(require_auth),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Logout Everywhere

    Revokes every active session of the caller, including the current one.

    Raises:
        - 401 Unauthorized: AUTH_* codes from the access token check
    """
    use_case = LogoutAllSessionsUseCase(uow)
    result = await use_case.execute(UUID(principal.id))

    if result.is_err():
        raise ServerError(result.error)

    clear_refresh_cookie(response)
    return result.value


@router.get("/me", status_code=status.HTTP_200_OK, response_model=Principal)
async def me(principal: Principal = Depends(require_auth)):
    """Return the principal resolved from the bearer access token."""
    return principal
