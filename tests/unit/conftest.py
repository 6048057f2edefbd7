from unittest.mock import AsyncMock, MagicMock

import bcrypt
import pytest

from config import ApplicationConfig


@pytest.fixture(autouse=True)
def fast_bcrypt(monkeypatch):
    monkeypatch.setattr(ApplicationConfig, "BCRYPT_ROUNDS", 4)


@pytest.fixture
def password():
    return "SecurePass123!"


@pytest.fixture
def password_hash(password):
    return bcrypt.hashpw(password.encode(), bcrypt.gensalt(4)).decode()


@pytest.fixture
def mock_uow():
    """Mock UnitOfWork with both repositories"""
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.users = MagicMock()
    uow.users.get_by_email = AsyncMock()
    uow.users.get_by_id = AsyncMock()
    uow.users.get_by_email_or_username = AsyncMock(return_value=None)
    uow.users.create = AsyncMock(side_effect=lambda user: user)
    uow.users.update = AsyncMock(side_effect=lambda user: user)
    uow.users.register_failed_login = AsyncMock(return_value=1)

    uow.sessions = MagicMock()
    uow.sessions.create = AsyncMock(side_effect=lambda session: session)
    uow.sessions.get_by_id = AsyncMock()
    uow.sessions.find_by_refresh_token_hash = AsyncMock()
    uow.sessions.find_active_with_user = AsyncMock()
    uow.sessions.list_active_by_user_id = AsyncMock(return_value=[])
    uow.sessions.revoke = AsyncMock(return_value=True)
    uow.sessions.rotate = AsyncMock(return_value=True)
    uow.sessions.revoke_matching = AsyncMock(return_value=1)
    uow.sessions.revoke_all_by_user_id = AsyncMock(return_value=0)
    uow.sessions.revoke_expired = AsyncMock(return_value=0)

    return uow
