"""
HTTP API client for talking to the employee records backend.

Usage pattern:

    from employee_records.services.api_client import get_api_client

    client = get_api_client()

    page = await client.list_employees(search="lee", sort_by="lastName", sort_order="asc")
    stats = await client.get_stats()
"""

from __future__ import annotations

import asyncio
import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import httpx

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://127.0.0.1:8000/api"


# -----------------------------
# Configuration helpers
# -----------------------------


def _load_base_url() -> str:
    """
    Determine the backend base URL (including the /api prefix).

    Priority:
    1. Environment variable EMPLOYEE_API_BASE_URL
    2. employee_records/config.json -> {"api_base_url": "..."}
    3. Default: http://127.0.0.1:8000/api
    """
    env_url = os.getenv("EMPLOYEE_API_BASE_URL")
    if env_url:
        return env_url.rstrip("/")

    # config.json lives one level above this file (inside employee_records)
    config_path = Path(__file__).resolve().parent.parent / "config.json"
    if config_path.exists():
        try:
            with config_path.open("r", encoding="utf-8") as f:
                data = json.load(f)
            cfg_url = data.get("api_base_url")
            if cfg_url:
                return str(cfg_url).rstrip("/")
        except (OSError, ValueError):
            logger.warning("Ignoring unreadable %s", config_path)

    return DEFAULT_BASE_URL


# -----------------------------
# Error types
# -----------------------------


class APIError(Exception):
    """Non-2xx response (or transport failure) from the backend."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        errors: Optional[List[Dict[str, Any]]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.errors = errors or []


class NotFoundError(APIError):
    """The requested employee does not exist."""


# -----------------------------
# Main API client
# -----------------------------


class APIClient:
    """
    Reusable async HTTP client for the employee records backend.

    Use APIClient.get() (or get_api_client()) to obtain a process-wide
    instance. Pass ``transport`` to route requests somewhere other than the
    network, e.g. ``httpx.ASGITransport(app=app)``.
    """

    _instance: Optional["APIClient"] = None

    def __init__(
        self,
        base_url: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = 10.0,
    ) -> None:
        self.base_url: str = (base_url or _load_base_url()).rstrip("/")
        self._transport = transport
        self._timeout = timeout
        self._client: Optional[httpx.AsyncClient] = None

    # ---------- Singleton helper ----------

    @classmethod
    def get(cls) -> "APIClient":
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    # ---------- Internal helpers ----------

    async def _ensure_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self._timeout,
                transport=self._transport,
                headers={"Content-Type": "application/json"},
            )
        return self._client

    @staticmethod
    def _error_from_response(resp: httpx.Response, label: str) -> APIError:
        """Build an APIError from the backend's `{message, errors?}` body."""
        try:
            body = resp.json()
        except ValueError:
            body = None

        message = None
        errors = None
        if isinstance(body, dict):
            message = body.get("message")
            errors = body.get("errors")
        message = message or f"{label} failed with HTTP {resp.status_code}"

        error_cls = NotFoundError if resp.status_code == 404 else APIError
        return error_cls(message, status_code=resp.status_code, errors=errors)

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        client = await self._ensure_client()
        label = f"{method} {path}"
        logger.debug("Making %s request", label)

        try:
            resp = await client.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            raise APIError(f"{label} failed: {exc}") from exc

        if resp.is_error:
            error = self._error_from_response(resp, label)
            logger.warning("API error on %s: %s", label, error.message)
            raise error
        return resp.json()

    # ---------- Public methods ----------

    async def close(self) -> None:
        """
        Close underlying HTTP connection pool.

        Call this once on shutdown (optional but recommended).
        """
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    # ---- Health check ----

    async def health(self) -> Dict[str, Any]:
        """
        Call /health on the backend.
        """
        return await self._request("GET", "/health")

    # ---- Employees ----

    async def list_employees(
        self,
        page: int = 1,
        limit: int = 10,
        search: Optional[str] = None,
        sort_by: str = "createdAt",
        sort_order: str = "desc",
    ) -> Dict[str, Any]:
        """
        GET /employees with pagination, search and sorting.

        Returns the page dict: {employees, totalPages, currentPage, total}.
        """
        params: Dict[str, Any] = {
            "page": page,
            "limit": limit,
            "sortBy": sort_by,
            "sortOrder": sort_order,
        }
        if search:
            params["search"] = search

        data = await self._request("GET", "/employees", params=params)
        if not isinstance(data, dict) or not isinstance(data.get("employees"), list):
            raise APIError("Expected a page of employees from /employees")
        return data

    async def get_employee(self, employee_id: str) -> Dict[str, Any]:
        return await self._request("GET", f"/employees/{employee_id}")

    async def create_employee(self, employee_data: Dict[str, Any]) -> Dict[str, Any]:
        """
        POST /employees to create a new employee.

        employee_data uses the camelCase field names of the API. Returns the
        created record (the `employee` part of the response).
        """
        data = await self._request("POST", "/employees", json=employee_data)
        return data["employee"]

    async def update_employee(self, employee_id: str, employee_data: Dict[str, Any]) -> Dict[str, Any]:
        """
        PUT /employees/{id}; only the keys present in employee_data change.
        """
        data = await self._request("PUT", f"/employees/{employee_id}", json=employee_data)
        return data["employee"]

    async def delete_employee(self, employee_id: str) -> Dict[str, Any]:
        """
        DELETE /employees/{id}.

        Returns {id, firstName, lastName} of the removed employee.
        """
        data = await self._request("DELETE", f"/employees/{employee_id}")
        return data["employee"]

    async def get_stats(self) -> Dict[str, Any]:
        """
        GET /employees/stats/summary.
        """
        return await self._request("GET", "/employees/stats/summary")


def get_api_client() -> APIClient:
    """
    Return the process-wide singleton APIClient.

        client = get_api_client()
        await client.list_employees()
    """
    return APIClient.get()


# -----------------------------
# Simple CLI test hook
# -----------------------------


async def _demo() -> None:
    """
    Quick manual check against a running backend:

        python -m employee_records.services.api_client
    """
    client = APIClient.get()

    print(f"Base URL: {client.base_url}")
    print("Checking /health ...")
    print(await client.health())
    print("Stats:", await client.get_stats())

    await client.close()


if __name__ == "__main__":
    asyncio.run(_demo())
