from uuid import uuid4

import pytest

from blog_auth.api.utils.jwt import hash_refresh_secret
from blog_auth.app.use_cases.auth import (
    CleanupExpiredSessionsUseCase,
    LogoutAllSessionsUseCase,
    LogoutUseCase,
)


@pytest.mark.asyncio
async def test_logout_by_refresh_token(mock_uow):
    mock_uow.sessions.revoke_matching.return_value = 1

    result = await LogoutUseCase(mock_uow).execute(refresh_token="refresh-secret")

    assert result.is_ok()
    assert result.value.revoked is True
    token_hash, session_id, _ = mock_uow.sessions.revoke_matching.call_args.args
    assert token_hash == hash_refresh_secret("refresh-secret")
    assert session_id is None
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_logout_by_session_id(mock_uow):
    session_id = uuid4()

    result = await LogoutUseCase(mock_uow).execute(session_id=session_id)

    assert result.is_ok()
    token_hash, matched_id, _ = mock_uow.sessions.revoke_matching.call_args.args
    assert token_hash is None
    assert matched_id == session_id


@pytest.mark.asyncio
async def test_logout_already_revoked_is_noop(mock_uow):
    """Logging out twice succeeds; the second call simply revokes nothing"""
    mock_uow.sessions.revoke_matching.return_value = 0

    result = await LogoutUseCase(mock_uow).execute(refresh_token="refresh-secret")

    assert result.is_ok()
    assert result.value.revoked is False


@pytest.mark.asyncio
async def test_logout_without_identifiers(mock_uow):
    result = await LogoutUseCase(mock_uow).execute()

    assert result.is_ok()
    assert result.value.revoked is False
    mock_uow.sessions.revoke_matching.assert_not_called()
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_logout_all_sessions(mock_uow):
    user_id = uuid4()
    mock_uow.sessions.revoke_all_by_user_id.return_value = 3

    result = await LogoutAllSessionsUseCase(mock_uow).execute(user_id)

    assert result.is_ok()
    assert result.value.revoked_count == 3
    assert mock_uow.sessions.revoke_all_by_user_id.call_args.args[0] == user_id
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_cleanup_expired_sessions(mock_uow):
    mock_uow.sessions.revoke_expired.return_value = 4

    result = await CleanupExpiredSessionsUseCase(mock_uow).execute()

    assert result.is_ok()
    assert result.value.revoked_count == 4
    mock_uow.sessions.revoke_expired.assert_called_once()
    mock_uow.commit.assert_called_once()
