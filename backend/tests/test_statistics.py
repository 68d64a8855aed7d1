"""Tests for GET /api/employees/stats/summary."""
import pytest
from httpx import AsyncClient

from conftest import EmployeeFactory


@pytest.mark.asyncio
async def test_statistics_on_empty_store(client: AsyncClient) -> None:
    response = await client.get("/api/employees/stats/summary")
    assert response.status_code == 200
    assert response.json() == {"totalEmployees": 0, "averageSalary": 0, "departmentStats": []}


@pytest.mark.asyncio
async def test_statistics_group_by_department(
    client: AsyncClient, make_employee: EmployeeFactory
) -> None:
    await make_employee(email="a@example.com", department="Sales", salary=1000)
    await make_employee(email="b@example.com", department="Sales", salary=2000)
    await make_employee(email="c@example.com", department="Sales", salary=3000)
    await make_employee(email="d@example.com", department="HR", salary=4000)
    await make_employee(email="e@example.com", department=None, salary=5000)
    await make_employee(email="f@example.com", department="", salary=6000)

    stats = (await client.get("/api/employees/stats/summary")).json()
    assert stats["totalEmployees"] == 6
    assert stats["averageSalary"] == pytest.approx(3500)

    departments = stats["departmentStats"]
    assert departments[0] == {"department": "Sales", "count": 3}
    assert {"department": "unassigned", "count": 2} in departments
    assert {"department": "HR", "count": 1} in departments
    counts = [entry["count"] for entry in departments]
    assert counts == sorted(counts, reverse=True)


@pytest.mark.asyncio
async def test_statistics_follow_writes(client: AsyncClient, make_employee: EmployeeFactory) -> None:
    first = await make_employee(email="one@example.com", salary=50000)
    await make_employee(email="two@example.com", salary=70000)

    stats = (await client.get("/api/employees/stats/summary")).json()
    assert stats["averageSalary"] == pytest.approx(60000)

    await client.delete(f"/api/employees/{first['id']}")
    stats = (await client.get("/api/employees/stats/summary")).json()
    assert stats["totalEmployees"] == 1
    assert stats["averageSalary"] == pytest.approx(70000)
