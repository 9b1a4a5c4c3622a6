"""Tests for the per-request session dependency."""

from unittest.mock import AsyncMock

import pytest
from sqlalchemy.exc import SQLAlchemyError

from taskeval import database
from taskeval.exceptions import DatabaseError


class _SessionContext:
    def __init__(self, session):
        self.session = session

    async def __aenter__(self):
        return self.session

    async def __aexit__(self, *exc_info):
        return False


@pytest.fixture
def patched_factory(monkeypatch, mock_db_session):
    monkeypatch.setattr(database, "async_session_factory", lambda: _SessionContext(mock_db_session))
    return mock_db_session


@pytest.mark.asyncio
async def test_commits_after_successful_request(patched_factory):
    gen = database.get_db_session()
    session = await gen.__anext__()
    with pytest.raises(StopAsyncIteration):
        await gen.__anext__()

    assert session is patched_factory
    patched_factory.commit.assert_awaited_once()
    patched_factory.rollback.assert_not_awaited()


@pytest.mark.asyncio
async def test_route_error_rolls_back(patched_factory):
    gen = database.get_db_session()
    await gen.__anext__()
    with pytest.raises(RuntimeError):
        await gen.athrow(RuntimeError("route failed"))

    patched_factory.rollback.assert_awaited_once()
    patched_factory.commit.assert_not_awaited()


@pytest.mark.asyncio
async def test_commit_failure_becomes_database_error(patched_factory):
    patched_factory.commit = AsyncMock(side_effect=SQLAlchemyError("database is locked"))

    gen = database.get_db_session()
    await gen.__anext__()
    with pytest.raises(DatabaseError) as exc_info:
        await gen.__anext__()

    assert exc_info.value.message == "Something went wrong"
    patched_factory.rollback.assert_awaited_once()
    patched_factory.close.assert_awaited_once()
