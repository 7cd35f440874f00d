"""
Tests for the request-scoped session dependency.

get_db commits once the handler returns. A commit that fails must surface
as StorageError (HTTP 500 through the error handlers), never as a raw
SQLAlchemy exception.
"""

from datetime import date

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError

from banking.database import get_db
from banking.exceptions import StorageError
from banking.models.customer import Customer


class TestGetDb:

    async def test_commits_on_normal_exit(self, test_sessions, db_session):
        gen = get_db()
        session = await gen.__anext__()
        session.add(Customer(
            email="committed@example.com",
            hashed_password="not-a-real-hash",
            name="Committed",
            date_of_birth=date(1990, 1, 1),
        ))

        with pytest.raises(StopAsyncIteration):
            await gen.__anext__()

        count = await db_session.scalar(select(func.count()).select_from(Customer))
        assert count == 1

    async def test_commit_failure_becomes_storage_error(self, test_sessions, monkeypatch):
        gen = get_db()
        session = await gen.__anext__()

        async def broken_commit():
            raise OperationalError("COMMIT", {}, Exception("database is locked"))

        monkeypatch.setattr(session, "commit", broken_commit)

        with pytest.raises(StorageError) as exc_info:
            await gen.__anext__()

        assert isinstance(exc_info.value.__cause__, OperationalError)

    async def test_handler_error_rolls_back_and_propagates(self, test_sessions):
        gen = get_db()
        await gen.__anext__()

        with pytest.raises(RuntimeError):
            await gen.athrow(RuntimeError("handler failed"))
