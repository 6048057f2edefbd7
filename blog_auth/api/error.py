from enum import Enum

from fastapi import status

from blog_auth.libs.result import Error


class AuthErrorCode(str, Enum):
    """Stable failure codes surfaced to API callers"""

    AUTH_REQUIRED = "AUTH_REQUIRED"
    AUTH_INVALID_TOKEN = "AUTH_INVALID_TOKEN"
    AUTH_TOKEN_EXPIRED = "AUTH_TOKEN_EXPIRED"
    AUTH_SESSION_REVOKED = "AUTH_SESSION_REVOKED"
    AUTHENTICATION_ERROR = "AUTHENTICATION_ERROR"


class ClientError(Exception):
    def __init__(self, base_error: Error, status_code: int = status.HTTP_400_BAD_REQUEST):
        self.base_error = base_error
        self.status_code = status_code
        super().__init__(base_error.message)

    @property
    def code(self) -> str:
        return self.base_error.code


class AuthenticationError(ClientError):
    def __init__(self, base_error: Error):
        super().__init__(base_error, status_code=status.HTTP_401_UNAUTHORIZED)


class ForbiddenError(ClientError):
    def __init__(self, base_error: Error):
        super().__init__(base_error, status_code=status.HTTP_403_FORBIDDEN)


class ServerError(Exception):
    def __init__(self, base_error: Error):
        self.base_error = base_error
        super().__init__(base_error.message)


def auth_error(code: AuthErrorCode, message: str) -> AuthenticationError:
    return AuthenticationError(Error(code.value, message))
