from uuid import UUID

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel, EmailStr, Field

from blog_auth.api.error import AuthenticationError, ClientError, ServerError
from blog_auth.api.utils.cookies import clear_refresh_cookie
from blog_auth.app.services.unit_of_work import UnitOfWork
from blog_auth.app.use_cases.auth import Principal, UserInfo
from blog_auth.app.use_cases.users import (
    AccountDeactivatedResponse,
    ChangePasswordUseCase,
    DeactivateAccountUseCase,
    PasswordChangedResponse,
    RegisterUserCommand,
    RegisterUserUseCase,
)
from blog_auth.depends import get_unit_of_work, require_auth

router = APIRouter(prefix="/users", tags=["User"])


class RegisterRequest(BaseModel):
    """
    Register HTTP request payload

    Validates incoming HTTP request before converting to RegisterUserCommand.
    Password length policy is enforced by the use case.
    """

    email: EmailStr = Field(..., description="User email address")
    username: str = Field(
        ...,
        min_length=3,
        max_length=50,
        pattern=r"^[A-Za-z0-9]+$",
        description="Letters and digits only",
    )
    password: str = Field(..., description="User password")


@router.post("", status_code=status.HTTP_201_CREATED, response_model=UserInfo)
async def register(request: RegisterRequest, uow: UnitOfWork = Depends(get_unit_of_work)):
    """
    Register User

    Raises:
        - 400 Bad Request: Password does not meet the policy
        - 409 Conflict: Email or username already in use
        - 422 Unprocessable Entity: Invalid input (handled by FastAPI)
    """
    command = RegisterUserCommand(
        email=request.email, username=request.username, password=request.password
    )

    use_case = RegisterUserUseCase(uow)
    result = await use_case.execute(command)

    if result.is_err():
        error = result.error
        if error.code == "CONFLICT":
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        elif error.code == "VALIDATION_ERROR":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        raise ServerError(error)

    return result.value


class ChangePasswordRequest(BaseModel):
    current_password: str = Field(..., description="Current password")
    new_password: str = Field(..., description="New password")


@router.put(
    "/me/password", status_code=status.HTTP_200_OK, response_model=PasswordChangedResponse
)
async def change_password(
    request: ChangePasswordRequest,
    response: Response,
    principal: Principal = Depends(require_auth),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Change Password

    Revokes every session; access tokens issued before the change stop
    working immediately.

    Raises:
        - 400 Bad Request: New password does not meet the policy
        - 401 Unauthorized: Current password is wrong, or AUTH_* token failure
        - 404 Not Found: User no longer exists
    """
    use_case = ChangePasswordUseCase(uow)
    result = await use_case.execute(
        UUID(principal.id), request.current_password, request.new_password
    )

    if result.is_err():
        error = result.error
        if error.code == "AUTHENTICATION_ERROR":
            raise AuthenticationError(error)
        elif error.code == "VALIDATION_ERROR":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code == "NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    clear_refresh_cookie(response)
    return result.value


@router.delete("/me", status_code=status.HTTP_200_OK, response_model=AccountDeactivatedResponse)
async def delete_me(
    response: Response,
    principal: Principal = Depends(require_auth),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Delete Account

    Deactivates the caller's account and logs it out everywhere.
    """
    use_case = DeactivateAccountUseCase(uow)
    result = await use_case.execute(UUID(principal.id))

    if result.is_err():
        error = result.error
        if error.code == "NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    clear_refresh_cookie(response)
    return result.value
