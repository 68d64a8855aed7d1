"""Listing, lookup and write operations for employees.

These functions are the only code that mutates the ``employees`` table.
Routers hand them an ``AsyncSession`` and validated schemas; failures are
raised as :mod:`app.errors` exceptions and shaped into responses by the
handlers registered on the application.
"""
from __future__ import annotations

import logging
import math
import uuid
from typing import Any

from sqlalchemy import ColumnElement, asc, desc, func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ..errors import DuplicateEmail, EmployeeNotFound, InvalidEmployeeId
from ..models import Employee
from ..models.base import utcnow
from ..schemas import Address, EmployeeCreate, EmployeeListQuery, EmployeePage, EmployeeUpdate

logger = logging.getLogger(__name__)

DEFAULT_SORT = "createdAt"

SORTABLE_COLUMNS = {
    "firstName": Employee.first_name,
    "lastName": Employee.last_name,
    "email": Employee.email,
    "salary": Employee.salary,
    "date": Employee.date,
    "department": Employee.department,
    "position": Employee.position,
    "createdAt": Employee.created_at,
    "updatedAt": Employee.updated_at,
}

SEARCH_COLUMNS = (
    Employee.first_name,
    Employee.last_name,
    Employee.email,
    Employee.department,
    Employee.position,
)


def parse_employee_id(raw_id: str) -> str:
    """Return the canonical form of an employee id or raise InvalidEmployeeId."""

    try:
        return str(uuid.UUID(str(raw_id)))
    except ValueError:
        raise InvalidEmployeeId() from None


def escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def search_condition(term: str) -> ColumnElement[bool]:
    """Case-insensitive substring match over the searchable columns."""

    pattern = f"%{escape_like(term)}%"
    return or_(*(column.ilike(pattern, escape="\\") for column in SEARCH_COLUMNS))


async def list_employees(session: AsyncSession, query: EmployeeListQuery) -> EmployeePage:
    """Return one filtered, sorted page of employees."""

    statement = select(Employee)
    count_statement = select(func.count()).select_from(Employee)

    term = (query.search or "").strip()
    if term:
        condition = search_condition(term)
        statement = statement.where(condition)
        count_statement = count_statement.where(condition)

    column = SORTABLE_COLUMNS.get(query.sort_by, SORTABLE_COLUMNS[DEFAULT_SORT])
    direction = desc if query.sort_order == "desc" else asc
    # id as a secondary key keeps page boundaries stable between requests.
    statement = (
        statement.order_by(direction(column), direction(Employee.id))
        .offset((query.page - 1) * query.limit)
        .limit(query.limit)
    )

    result = await session.execute(statement)
    employees = list(result.scalars().all())
    total = (await session.execute(count_statement)).scalar_one()

    return EmployeePage(
        employees=employees,
        total_pages=math.ceil(total / query.limit),
        current_page=query.page,
        total=total,
    )


async def get_employee(session: AsyncSession, employee_id: str) -> Employee:
    employee = await session.get(Employee, parse_employee_id(employee_id))
    if employee is None:
        raise EmployeeNotFound()
    return employee


async def ensure_email_available(
    session: AsyncSession, email: str, exclude_id: str | None = None
) -> None:
    """Raise DuplicateEmail if another employee already uses ``email``."""

    statement = select(Employee.id).where(Employee.email == email)
    if exclude_id is not None:
        statement = statement.where(Employee.id != exclude_id)
    result = await session.execute(statement.limit(1))
    if result.first() is not None:
        logger.info("Rejected duplicate email %s", email)
        raise DuplicateEmail()


def address_data(address: Address | None) -> dict[str, Any] | None:
    if address is None:
        return None
    data = address.model_dump(exclude_none=True)
    return data or None


async def commit_or_duplicate(session: AsyncSession) -> None:
    """Commit, translating a unique-index violation on email into DuplicateEmail."""

    try:
        await session.commit()
    except IntegrityError as exc:
        await session.rollback()
        logger.warning("Unique constraint rejected a write: %s", exc.orig)
        raise DuplicateEmail() from exc


async def create_employee(session: AsyncSession, payload: EmployeeCreate) -> Employee:
    """Insert a new employee after checking that the email is free."""

    await ensure_email_available(session, payload.email)

    employee = Employee(
        first_name=payload.first_name,
        last_name=payload.last_name,
        email=payload.email,
        salary=payload.salary,
        date=payload.date or utcnow(),
        department=payload.department,
        position=payload.position,
        phone=payload.phone,
        address=address_data(payload.address),
    )
    session.add(employee)
    await commit_or_duplicate(session)
    await session.refresh(employee)
    logger.info("Created employee %s %s (%s)", employee.id, employee.full_name, employee.email)
    return employee


async def update_employee(
    session: AsyncSession, employee_id: str, payload: EmployeeUpdate
) -> Employee:
    """Merge the fields present in ``payload`` into an existing employee."""

    employee = await get_employee(session, employee_id)
    changes = payload.model_dump(exclude_unset=True)

    if "email" in changes:
        await ensure_email_available(session, changes["email"], exclude_id=employee.id)
    if "address" in changes:
        changes["address"] = address_data(payload.address)

    for field, value in changes.items():
        setattr(employee, field, value)

    await commit_or_duplicate(session)
    await session.refresh(employee)
    logger.info("Updated employee %s fields=%s", employee.id, sorted(changes))
    return employee


async def delete_employee(session: AsyncSession, employee_id: str) -> Employee:
    """Hard-delete an employee and return the removed record."""

    employee = await get_employee(session, employee_id)
    await session.delete(employee)
    await session.commit()
    logger.info("Deleted employee %s (%s)", employee.id, employee.full_name)
    return employee
