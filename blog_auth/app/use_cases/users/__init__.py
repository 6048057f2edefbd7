"""
User Use Cases

Account registration and credential management.
"""

from .register_user_use_case import RegisterUserUseCase
from .change_password_use_case import ChangePasswordUseCase
from .deactivate_account_use_case import DeactivateAccountUseCase
from .dtos import RegisterUserCommand, PasswordChangedResponse, AccountDeactivatedResponse

__all__ = [
    "RegisterUserUseCase",
    "ChangePasswordUseCase",
    "DeactivateAccountUseCase",
    "RegisterUserCommand",
    "PasswordChangedResponse",
    "AccountDeactivatedResponse",
]
