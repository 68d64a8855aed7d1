"""Test fixtures for the backend."""
import os
from collections.abc import AsyncIterator, Awaitable, Callable
from pathlib import Path
from typing import Any

import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./test_backend.db")

from app import models  # noqa: E402
from app.dependencies import get_db_session  # noqa: E402
from app.main import app  # noqa: E402

EmployeeFactory = Callable[..., Awaitable[dict[str, Any]]]


def employee_payload(**overrides: Any) -> dict[str, Any]:
    """A valid create payload; keyword arguments replace or add fields."""

    payload: dict[str, Any] = {
        "firstName": "Ada",
        "lastName": "Lovelace",
        "email": "ada@example.com",
        "salary": 5000,
        "date": "2024-01-01T00:00:00",
        "department": "R&D",
        "position": "Engineer",
    }
    payload.update(overrides)
    return payload


@pytest_asyncio.fixture
async def session_factory(tmp_path: Path) -> AsyncIterator[async_sessionmaker[AsyncSession]]:
    """A fresh SQLite database per test, schema already created."""

    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'employees.db'}",
        poolclass=NullPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(models.Base.metadata.create_all)
    yield async_sessionmaker(engine, expire_on_commit=False)
    await engine.dispose()


@pytest_asyncio.fixture
async def session(session_factory: async_sessionmaker[AsyncSession]) -> AsyncIterator[AsyncSession]:
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def backend(session_factory: async_sessionmaker[AsyncSession]) -> AsyncIterator[FastAPI]:
    """The application wired to the per-test database."""

    async def override_session() -> AsyncIterator[AsyncSession]:
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db_session] = override_session
    yield app
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client(backend: FastAPI) -> AsyncIterator[AsyncClient]:
    """Provide an HTTP client for integration tests."""

    async with AsyncClient(transport=ASGITransport(app=backend), base_url="http://testserver") as client:
        yield client


@pytest_asyncio.fixture
async def make_employee(client: AsyncClient) -> EmployeeFactory:
    """POST an employee and return the created record."""

    async def factory(**overrides: Any) -> dict[str, Any]:
        response = await client.post("/api/employees", json=employee_payload(**overrides))
        assert response.status_code == 201, response.text
        return response.json()["employee"]

    return factory
