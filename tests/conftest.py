"""Shared pytest fixtures: async test client, fake DB session, auth helpers."""

from __future__ import annotations

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import ASGITransport, AsyncClient

from app.auth import dependencies
from app.auth.jwt import create_access_token
from app.config import get_settings
from app.database import get_db
from app.main import app


class FakeAsyncSession:
	def __init__(self) -> None:
		self.commit = AsyncMock()
		self.rollback = AsyncMock()
		self.close = AsyncMock()
		self.execute = AsyncMock()
		self.flush = AsyncMock()
		self.refresh = AsyncMock()
		self.delete = AsyncMock()
		self.add = MagicMock()


def scalar_result(value: Any) -> MagicMock:
	"""A stand-in for the Result returned by ``session.execute``."""
	result = MagicMock()
	result.scalar_one.return_value = value
	result.scalar_one_or_none.return_value = value
	return result


def rows_result(rows: list[Any]) -> MagicMock:
	result = MagicMock()
	result.scalars.return_value.all.return_value = rows
	return result


@pytest.fixture
def fake_db_session() -> FakeAsyncSession:
	"""A lightweight async-session stub for dependency overrides in API tests."""
	return FakeAsyncSession()


@pytest.fixture
async def client(fake_db_session: FakeAsyncSession) -> AsyncGenerator[AsyncClient, None]:
	"""HTTPX async client with lifespan disabled and DB dependency mocked."""

	async def override_get_db() -> AsyncGenerator[Any, None]:
		yield fake_db_session

	app.dependency_overrides[get_db] = override_get_db
	original_lifespan = app.router.lifespan_context

	@asynccontextmanager
	async def noop_lifespan(_: Any) -> AsyncGenerator[None, None]:
		yield

	app.router.lifespan_context = noop_lifespan

	transport = ASGITransport(app=app)
	async with AsyncClient(transport=transport, base_url="http://test") as test_client:
		yield test_client

	app.router.lifespan_context = original_lifespan
	app.dependency_overrides.clear()


@pytest.fixture
def entity_auth_required(monkeypatch: pytest.MonkeyPatch) -> None:
	"""Turn on bearer enforcement for the entity routers."""
	settings = get_settings().model_copy(update={"entity_routes_require_auth": True})
	monkeypatch.setattr(dependencies, "get_settings", lambda: settings)


@pytest.fixture
def auth_user_id() -> int:
	return 7


@pytest.fixture
def access_token(auth_user_id: int) -> str:
	return create_access_token(auth_user_id, expires_minutes=30)


@pytest.fixture
def auth_headers(access_token: str) -> dict[str, str]:
	return {"Authorization": f"Bearer {access_token}"}
