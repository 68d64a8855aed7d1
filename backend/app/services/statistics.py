"""Aggregate figures over the employee table."""
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models import Employee
from ..schemas import UNASSIGNED_DEPARTMENT, DepartmentCount, EmployeeStats


async def employee_summary(session: AsyncSession) -> EmployeeStats:
    """Headcount, mean salary and per-department headcount.

    Each figure is its own full-table aggregate; nothing is cached or
    maintained incrementally.
    """

    total = (await session.execute(select(func.count()).select_from(Employee))).scalar_one()
    average = (await session.execute(select(func.avg(Employee.salary)))).scalar()

    department = func.coalesce(Employee.department, UNASSIGNED_DEPARTMENT).label("department")
    headcount = func.count(Employee.id).label("count")
    rows = await session.execute(
        select(department, headcount)
        .group_by(department)
        .order_by(headcount.desc(), department)
    )

    return EmployeeStats(
        total_employees=total,
        average_salary=float(average or 0),
        department_stats=[
            DepartmentCount(department=name, count=count) for name, count in rows.all()
        ],
    )
