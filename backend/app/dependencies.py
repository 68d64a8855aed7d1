"""Reusable FastAPI dependencies."""
from __future__ import annotations

from collections.abc import AsyncGenerator

from fastapi import Query
from sqlalchemy.ext.asyncio import AsyncSession

from .config import get_settings
from .database import get_session
from .schemas import MAX_PAGE, MAX_PAGE_SIZE, EmployeeListQuery

settings = get_settings()


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Dependency that yields an AsyncSession."""
    async for session in get_session():
        yield session


def get_list_query(
    page: int = Query(default=1, ge=1, le=MAX_PAGE),
    limit: int = Query(default=settings.default_page_size, ge=1, le=MAX_PAGE_SIZE),
    search: str | None = Query(default=None),
    sort_by: str = Query(default="createdAt", alias="sortBy"),
    sort_order: str = Query(default="desc", alias="sortOrder"),
) -> EmployeeListQuery:
    """Collect the listing query-string parameters into one object."""

    return EmployeeListQuery(
        page=page,
        limit=limit,
        search=search,
        sort_by=sort_by,
        sort_order=sort_order,
    )
