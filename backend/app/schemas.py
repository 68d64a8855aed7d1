"""Pydantic schemas used across the backend API."""
from datetime import datetime, timezone
from typing import Annotated, Any

from pydantic import (
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    StringConstraints,
    field_validator,
)
from pydantic.alias_generators import to_camel

PHONE_PATTERN = r"^[+]?\d{7,15}$"
UNASSIGNED_DEPARTMENT = "unassigned"
# Keeps (page - 1) * limit inside a signed 64-bit OFFSET.
MAX_PAGE = 10**12
MAX_PAGE_SIZE = 1000

Name = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=50)]
ShortText = Annotated[str, StringConstraints(strip_whitespace=True, max_length=50)]
Phone = Annotated[str, StringConstraints(strip_whitespace=True, pattern=PHONE_PATTERN)]
Salary = Annotated[float, Field(ge=0, allow_inf_nan=False)]


class CamelModel(BaseModel):
    """Base model that speaks camelCase on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class Address(CamelModel):
    """Optional postal address attached to an employee."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    street: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None
    country: str | None = None


class EmployeeFields(CamelModel):
    """Optional properties shared by create and update payloads."""

    department: ShortText | None = None
    position: ShortText | None = None
    phone: Phone | None = None
    address: Address | None = None

    @field_validator("department", "position", "phone", mode="before")
    @classmethod
    def blank_as_missing(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("salary", mode="before", check_fields=False)
    @classmethod
    def reject_boolean_salary(cls, value: Any) -> Any:
        if isinstance(value, bool):
            raise ValueError("Input should be a valid number")
        return value

    @field_validator("email", mode="before", check_fields=False)
    @classmethod
    def strip_email(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip()
        return value

    @field_validator("email", mode="after", check_fields=False)
    @classmethod
    def lowercase_email(cls, value: str | None) -> str | None:
        return value.lower() if value is not None else value

    @field_validator("date", mode="after", check_fields=False)
    @classmethod
    def naive_utc_date(cls, value: datetime | None) -> datetime | None:
        if value is not None and value.tzinfo is not None:
            return value.astimezone(timezone.utc).replace(tzinfo=None)
        return value


class EmployeeCreate(EmployeeFields):
    """Employee payload for creation."""

    first_name: Name
    last_name: Name
    email: EmailStr
    salary: Salary
    date: datetime | None = None


class EmployeeUpdate(EmployeeFields):
    """Partial employee payload; only the fields sent are changed."""

    first_name: Name | None = None
    last_name: Name | None = None
    email: EmailStr | None = None
    salary: Salary | None = None
    date: datetime | None = None

    @field_validator("first_name", "last_name", "email", "salary", "date", mode="after")
    @classmethod
    def required_not_null(cls, value: Any) -> Any:
        # Defaults are not validated, so this only fires on an explicit null.
        if value is None:
            raise ValueError("Field is required and cannot be null")
        return value


class EmployeeRead(CamelModel):
    """Employee representation returned by the API."""

    id: str
    first_name: str
    last_name: str
    email: str
    salary: float
    date: datetime
    department: str | None = None
    position: str | None = None
    phone: str | None = None
    address: Address | None = None
    created_at: datetime
    updated_at: datetime


class EmployeeListQuery(BaseModel):
    """Normalised listing parameters handed to the query service."""

    page: int = Field(default=1, ge=1, le=MAX_PAGE)
    limit: int = Field(default=10, ge=1, le=MAX_PAGE_SIZE)
    search: str | None = None
    sort_by: str = "createdAt"
    sort_order: str = "desc"


class EmployeePage(CamelModel):
    """One page of the employee listing."""

    employees: list[EmployeeRead]
    total_pages: int
    current_page: int
    total: int


class EmployeeMessage(CamelModel):
    """Write confirmation carrying the affected record."""

    message: str
    employee: EmployeeRead


class DeletedEmployee(CamelModel):
    id: str
    first_name: str
    last_name: str


class EmployeeDeleted(CamelModel):
    message: str
    employee: DeletedEmployee


class DepartmentCount(CamelModel):
    department: str
    count: int


class EmployeeStats(CamelModel):
    """Aggregate figures over the whole employee table."""

    total_employees: int
    average_salary: float
    department_stats: list[DepartmentCount]


class FieldError(BaseModel):
    field: str
    message: str


class ErrorResponse(BaseModel):
    """Body returned for every non-2xx response."""

    message: str
    errors: list[FieldError] | None = None
