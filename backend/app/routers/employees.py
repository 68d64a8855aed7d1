"""Employee endpoints for the FastAPI backend."""
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..dependencies import get_db_session, get_list_query
from ..models import Employee
from ..schemas import (
    EmployeeCreate,
    EmployeeDeleted,
    EmployeeListQuery,
    EmployeeMessage,
    EmployeePage,
    EmployeeRead,
    EmployeeStats,
    EmployeeUpdate,
    ErrorResponse,
)
from ..services import employees as employee_service
from ..services.statistics import employee_summary

router = APIRouter(
    prefix="/employees",
    tags=["employees"],
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
    },
)

NOT_FOUND = {status.HTTP_404_NOT_FOUND: {"model": ErrorResponse}}


@router.get("", response_model=EmployeePage)
async def list_employees(
    query: EmployeeListQuery = Depends(get_list_query),
    session: AsyncSession = Depends(get_db_session),
) -> EmployeePage:
    """Return one page of employees, optionally filtered by a search term."""

    return await employee_service.list_employees(session, query)


@router.get("/stats/summary", response_model=EmployeeStats)
async def get_statistics(session: AsyncSession = Depends(get_db_session)) -> EmployeeStats:
    """Headcount, average salary and per-department headcount."""

    return await employee_summary(session)


@router.get("/{employee_id}", response_model=EmployeeRead, responses=NOT_FOUND)
async def get_employee(
    employee_id: str,
    session: AsyncSession = Depends(get_db_session),
) -> Employee:
    return await employee_service.get_employee(session, employee_id)


@router.post("", response_model=EmployeeMessage, status_code=status.HTTP_201_CREATED)
async def create_employee(
    payload: EmployeeCreate,
    session: AsyncSession = Depends(get_db_session),
) -> EmployeeMessage:
    """Create an employee; the email must not already be in use."""

    employee = await employee_service.create_employee(session, payload)
    return EmployeeMessage(message="Employee created successfully", employee=employee)


@router.put("/{employee_id}", response_model=EmployeeMessage, responses=NOT_FOUND)
async def update_employee(
    employee_id: str,
    payload: EmployeeUpdate,
    session: AsyncSession = Depends(get_db_session),
) -> EmployeeMessage:
    """Update the fields present in the body; omitted fields are kept."""

    employee = await employee_service.update_employee(session, employee_id, payload)
    return EmployeeMessage(message="Employee updated successfully", employee=employee)


@router.delete("/{employee_id}", response_model=EmployeeDeleted, responses=NOT_FOUND)
async def delete_employee(
    employee_id: str,
    session: AsyncSession = Depends(get_db_session),
) -> EmployeeDeleted:
    employee = await employee_service.delete_employee(session, employee_id)
    return EmployeeDeleted(message="Employee deleted successfully", employee=employee)
