import logging

from blog_auth.libs.result import Error, Result, Return
from blog_auth.app.services.password_hasher import hash_password
from blog_auth.app.services.unit_of_work import UnitOfWork
from blog_auth.app.use_cases.auth.dtos import UserInfo
from blog_auth.app.use_cases.auth.session_issuer import normalize_email
from blog_auth.domain.entities import User
from .dtos import RegisterUserCommand
from .password_policy import validate_password

logger = logging.getLogger(__name__)


class RegisterUserUseCase:
    """
    Register User Use Case

    Command/Response Pattern:
    - Input: RegisterUserCommand (validated business intent)
    - Output: Result[UserInfo] (account without password hash)

    Business Logic:
    1. Normalize email (trim + lowercase)
    2. Enforce PASSWORD_MIN_LENGTH
    3. Reject duplicate email or username (CONFLICT)
    4. Hash password with bcrypt before the row is persisted
    5. Create User with role=user, is_active=True
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, command: RegisterUserCommand) -> Result[UserInfo]:
        email = normalize_email(command.email)

        password_validation = validate_password(command.password)
        if password_validation.is_err():
            return Return.err(password_validation.error)

        async with self.uow:
            existing = await self.uow.users.get_by_email_or_username(
                email, command.username
            )
            if existing is not None:
                field = "email" if existing.email == email else "username"
                return Return.err(
                    Error("CONFLICT", f"A user with this {field} already exists")
                )

            user = User(
                email=email,
                username=command.username,
                password_hash=hash_password(command.password),
            )
            user = await self.uow.users.create(user)

            await self.uow.commit()

            logger.info(f"User created: {user.id} ({user.username})")
            return Return.ok(UserInfo.from_user(user))
