"""Server-side failures are answered with the generic 500 body."""
import logging
from collections.abc import AsyncIterator, Callable
from typing import Any

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.exc import OperationalError

from app.dependencies import get_db_session


class BrokenSession:
    """Stands in for an AsyncSession whose every query fails."""

    def __init__(self, error: Exception) -> None:
        self.error = error

    async def execute(self, *args: Any, **kwargs: Any) -> Any:
        raise self.error

    async def get(self, *args: Any, **kwargs: Any) -> Any:
        raise self.error


@pytest_asyncio.fixture
async def failing_backend(backend: FastAPI) -> Callable[[Exception], None]:
    """Route every request to a session that raises the given error."""

    def install(error: Exception) -> None:
        async def override_session() -> AsyncIterator[BrokenSession]:
            yield BrokenSession(error)

        backend.dependency_overrides[get_db_session] = override_session

    return install


@pytest_asyncio.fixture
async def lenient_client(backend: FastAPI) -> AsyncIterator[AsyncClient]:
    """Client that returns the 500 response instead of re-raising the app error."""

    transport = ASGITransport(app=backend, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client


@pytest.mark.asyncio
async def test_database_failure_returns_generic_500(
    client: AsyncClient, failing_backend: Callable[[Exception], None], caplog: pytest.LogCaptureFixture
) -> None:
    failing_backend(OperationalError("SELECT 1", None, Exception("database is locked")))

    with caplog.at_level(logging.ERROR, logger="app.errors"):
        response = await client.get("/api/employees/stats/summary")

    assert response.status_code == 500
    assert response.json() == {"message": "Server error"}
    assert "database is locked" not in response.text
    assert any(record.exc_info for record in caplog.records)


@pytest.mark.asyncio
async def test_unexpected_exception_returns_generic_500(
    lenient_client: AsyncClient,
    failing_backend: Callable[[Exception], None],
    caplog: pytest.LogCaptureFixture,
) -> None:
    failing_backend(RuntimeError("disk on fire"))

    with caplog.at_level(logging.ERROR, logger="app.errors"):
        response = await lenient_client.get("/api/employees")

    assert response.status_code == 500
    assert response.json() == {"message": "Server error"}
    assert "disk on fire" not in response.text
    assert any(
        record.name == "app.errors" and record.exc_info for record in caplog.records
    )


@pytest.mark.asyncio
async def test_lookup_failure_returns_generic_500(
    lenient_client: AsyncClient, failing_backend: Callable[[Exception], None]
) -> None:
    failing_backend(OverflowError("Python int too large to convert to SQLite INTEGER"))

    response = await lenient_client.get(
        "/api/employees/0b6a1a52-5d0c-4a8e-9b55-3f2f1f2c6f10"
    )
    assert response.status_code == 500
    assert response.json() == {"message": "Server error"}
