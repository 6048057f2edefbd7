from config import ApplicationConfig
from blog_auth.libs.result import Error, Result, Return


def validate_password(password: str) -> Result[None]:
    """
    Validate password complexity.

    Args:
        password: Password to validate

    Returns:
        Result with None if valid, or Error VALIDATION_ERROR if invalid
    """
    min_length = ApplicationConfig.PASSWORD_MIN_LENGTH
    if len(password or "") < min_length:
        return Return.err(
            Error(
                "VALIDATION_ERROR",
                f"Password must be at least {min_length} characters long",
            )
        )

    return Return.ok(None)
