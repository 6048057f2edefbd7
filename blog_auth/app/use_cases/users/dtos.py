"""
User Use Case DTOs (Data Transfer Objects)

Command/Response pattern for clean architecture separation:
- RegisterUserCommand: Input to use case (validated business intent)
- *Response: Output from use case (structured result)
"""

from pydantic import BaseModel


class RegisterUserCommand(BaseModel):
    """
    Register command - represents validated registration intent

    Created by API layer after request validation passes.
    Contains only business-relevant data (no HTTP concerns).
    """

    email: str
    username: str
    password: str


class PasswordChangedResponse(BaseModel):
    """Response for change password use case"""

    status: str
    revoked_count: int


class AccountDeactivatedResponse(BaseModel):
    """Response for deactivate account use case"""

    id: str
    revoked_count: int
