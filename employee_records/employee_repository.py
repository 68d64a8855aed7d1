"""
Employee repository – thin synchronous wrapper so callers without an event
loop (the terminal UI, scripts) can use the async HTTP client.
"""

from typing import Any, Awaitable, Callable, Dict, Optional, TypeVar
import asyncio

from employee_records.services.api_client import APIClient

T = TypeVar("T")


def _run(call: Callable[[APIClient], Awaitable[T]], base_url: Optional[str] = None) -> T:
    """
    Run one client call on a fresh event loop.

    Each call gets its own APIClient because httpx connection pools cannot
    outlive the loop that created them.
    """

    async def runner() -> T:
        client = APIClient(base_url=base_url)
        try:
            return await call(client)
        finally:
            await client.close()

    return asyncio.run(runner())


def list_employees(
    page: int = 1,
    limit: int = 10,
    search: Optional[str] = None,
    sort_by: str = "createdAt",
    sort_order: str = "desc",
    base_url: Optional[str] = None,
) -> Dict[str, Any]:
    return _run(
        lambda client: client.list_employees(
            page=page, limit=limit, search=search, sort_by=sort_by, sort_order=sort_order
        ),
        base_url,
    )


def get_employee(employee_id: str, base_url: Optional[str] = None) -> Dict[str, Any]:
    return _run(lambda client: client.get_employee(employee_id), base_url)


def add_employee(payload: Dict[str, Any], base_url: Optional[str] = None) -> Dict[str, Any]:
    """
    Create a new employee; 'payload' uses the API's camelCase field names.
    """
    return _run(lambda client: client.create_employee(payload), base_url)


def update_employee(
    employee_id: str, payload: Dict[str, Any], base_url: Optional[str] = None
) -> Dict[str, Any]:
    return _run(lambda client: client.update_employee(employee_id, payload), base_url)


def delete_employee(employee_id: str, base_url: Optional[str] = None) -> Dict[str, Any]:
    return _run(lambda client: client.delete_employee(employee_id), base_url)


def get_stats(base_url: Optional[str] = None) -> Dict[str, Any]:
    return _run(lambda client: client.get_stats(), base_url)
