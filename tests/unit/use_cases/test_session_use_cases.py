from datetime import timedelta
from uuid import uuid4

import pytest

from blog_auth.app.use_cases.sessions import ListSessionsUseCase, RevokeSessionUseCase
from blog_auth.domain.base import utc_now
from blog_auth.domain.entities import Session


def make_session(user_id, **overrides) -> Session:
    fields = dict(
        id=uuid4(),
        user_id=user_id,
        refresh_token_hash=uuid4().hex,
        expires_at=utc_now() + timedelta(days=7),
    )
    fields.update(overrides)
    return Session(**fields)


@pytest.mark.asyncio
async def test_list_sessions_flags_current(mock_uow):
    user_id = uuid4()
    current = make_session(user_id, user_agent="Firefox")
    other = make_session(user_id, user_agent="Safari")
    mock_uow.sessions.list_active_by_user_id.return_value = [current, other]

    result = await ListSessionsUseCase(mock_uow).execute(user_id, current.id)

    assert result.is_ok()
    sessions = result.value.sessions
    assert [s.id for s in sessions] == [str(current.id), str(other.id)]
    assert sessions[0].current is True
    assert sessions[1].current is False
    assert sessions[0].user_agent == "Firefox"
    assert mock_uow.sessions.list_active_by_user_id.call_args.args[0] == user_id


@pytest.mark.asyncio
async def test_revoke_own_session(mock_uow):
    user_id = uuid4()
    session = make_session(user_id)
    mock_uow.sessions.get_by_id.return_value = session

    result = await RevokeSessionUseCase(mock_uow).execute(session.id, user_id, "user")

    assert result.is_ok()
    assert result.value.revoked is True
    assert mock_uow.sessions.revoke.call_args.args[0] == session.id
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_revoke_other_users_session_hidden(mock_uow):
    """A non-admin cannot tell another user's session from a missing one"""
    session = make_session(uuid4())
    mock_uow.sessions.get_by_id.return_value = session

    result = await RevokeSessionUseCase(mock_uow).execute(session.id, uuid4(), "user")

    assert result.is_err()
    assert result.error.code == "NOT_FOUND"
    mock_uow.sessions.revoke.assert_not_called()


@pytest.mark.asyncio
async def test_admin_revokes_any_session(mock_uow):
    session = make_session(uuid4())
    mock_uow.sessions.get_by_id.return_value = session

    result = await RevokeSessionUseCase(mock_uow).execute(session.id, uuid4(), "admin")

    assert result.is_ok()
    assert result.value.revoked is True


@pytest.mark.asyncio
async def test_revoke_missing_session(mock_uow):
    mock_uow.sessions.get_by_id.return_value = None

    result = await RevokeSessionUseCase(mock_uow).execute(uuid4(), uuid4(), "admin")

    assert result.is_err()
    assert result.error.code == "NOT_FOUND"
