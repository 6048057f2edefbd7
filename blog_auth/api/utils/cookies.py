from datetime import UTC, datetime

from fastapi import Request, Response

from config import ApplicationConfig


def set_refresh_cookie(response: Response, refresh_token: str, expires_at: datetime) -> None:
    """Deliver the refresh secret as an HttpOnly, SameSite=strict cookie expiring with its session"""
    response.set_cookie(
        key=ApplicationConfig.REFRESH_COOKIE_NAME,
        value=refresh_token,
        expires=expires_at.replace(tzinfo=UTC),
        path=ApplicationConfig.REFRESH_COOKIE_PATH,
        secure=ApplicationConfig.REFRESH_COOKIE_SECURE,
        httponly=True,
        samesite="strict",
    )


def clear_refresh_cookie(response: Response) -> None:
    response.delete_cookie(
        key=ApplicationConfig.REFRESH_COOKIE_NAME,
        path=ApplicationConfig.REFRESH_COOKIE_PATH,
        secure=ApplicationConfig.REFRESH_COOKIE_SECURE,
        httponly=True,
        samesite="strict",
    )


def read_refresh_cookie(request: Request):
    return request.cookies.get(ApplicationConfig.REFRESH_COOKIE_NAME)
