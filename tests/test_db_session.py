"""
Tests for the request-scoped database session and the SQL store wiring.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import IntegrityError

from auth.dependencies import get_user_store
from database.session import get_db_session
from database.user_store import SqlUserStore
from main import create_app


def _mock_session() -> MagicMock:
    session = MagicMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.flush = AsyncMock()
    return session


def _request_with_factory(session: MagicMock) -> MagicMock:
    context = MagicMock()
    context.__aenter__ = AsyncMock(return_value=session)
    context.__aexit__ = AsyncMock(return_value=False)
    request = MagicMock()
    request.app.state.session_factory = MagicMock(return_value=context)
    return request


class TestGetDbSession:
    @pytest.mark.asyncio
    async def test_commits_after_normal_exit(self):
        session = _mock_session()
        gen = get_db_session(_request_with_factory(session))

        assert await gen.__anext__() is session
        with pytest.raises(StopAsyncIteration):
            await gen.__anext__()

        session.commit.assert_awaited_once()
        session.rollback.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_rolls_back_and_reraises(self):
        session = _mock_session()
        gen = get_db_session(_request_with_factory(session))
        await gen.__anext__()

        with pytest.raises(RuntimeError, match="boom"):
            await gen.athrow(RuntimeError("boom"))

        session.rollback.assert_awaited_once()
        session.commit.assert_not_awaited()


class TestSqlStoreWiring:
    @pytest.mark.asyncio
    async def test_get_user_store_wraps_session(self):
        session = _mock_session()
        store = await get_user_store(session)

        assert isinstance(store, SqlUserStore)
        assert store._session is session

    def test_unique_violation_answers_400(self, settings):
        session = _mock_session()
        session.flush = AsyncMock(
            side_effect=IntegrityError("INSERT", {}, Exception("unique"))
        )

        async def _session():
            yield session

        app = create_app(settings)
        app.dependency_overrides[get_db_session] = _session
        client = TestClient(app)

        response = client.post(
            "/auth", json={"email": "a@x.com", "password": "secret123"}
        )

        assert response.status_code == 400
        assert response.json() == {
            "status": False,
            "message": "Email already registered",
        }
        session.rollback.assert_awaited_once()
