"""Plain-text rendering of employee pages and the statistics panel."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Sequence

# (header, field) pairs for the list table; sortable fields get an arrow.
LIST_COLUMNS = [
    ("First Name", "firstName"),
    ("Last Name", "lastName"),
    ("Email", "email"),
    ("Salary", "salary"),
    ("Date", "date"),
    ("Department", "department"),
]
SORTABLE_FIELDS = {"firstName", "lastName", "salary", "date"}
MAX_VISIBLE_PAGES = 5


def format_currency(amount: float | int | None) -> str:
    """Rupee amount without decimals unless the value has paise."""

    value = float(amount or 0)
    if value.is_integer():
        return f"₹{value:,.0f}"
    return f"₹{value:,.2f}"


def format_date(value: str | None) -> str:
    """'2024-01-05T00:00:00' -> '5 Jan 2024'."""

    if not value:
        return "N/A"
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return value
    return f"{parsed.day} {parsed:%b %Y}"


def visible_pages(current: int, total: int, window: int = MAX_VISIBLE_PAGES) -> List[int]:
    """Page numbers shown around ``current``, at most ``window`` of them."""

    start = max(1, current - window // 2)
    end = min(total, start + window - 1)
    if end - start + 1 < window:
        start = max(1, end - window + 1)
    return list(range(start, end + 1))


def sort_marker(field: str, sort_by: str, sort_order: str) -> str:
    if field != sort_by:
        return ""
    return " ↑" if sort_order == "asc" else " ↓"


def _cell(employee: Dict[str, Any], field: str) -> str:
    if field == "salary":
        return format_currency(employee.get("salary"))
    if field == "date":
        return format_date(employee.get("date"))
    if field == "department":
        return employee.get("department") or "N/A"
    return str(employee.get(field) or "")


def render_table(
    employees: Sequence[Dict[str, Any]],
    page: int = 1,
    limit: int = 10,
    sort_by: str = "createdAt",
    sort_order: str = "desc",
) -> str:
    """Render one page of employees as an aligned text table."""

    headers = ["No."] + [
        title + (sort_marker(field, sort_by, sort_order) if field in SORTABLE_FIELDS else "")
        for title, field in LIST_COLUMNS
    ] + ["ID"]

    if not employees:
        return "  ".join(headers) + "\nNo employees found"

    rows = [
        [str((page - 1) * limit + index + 1)]
        + [_cell(employee, field) for _, field in LIST_COLUMNS]
        + [str(employee.get("id", ""))]
        for index, employee in enumerate(employees)
    ]
    widths = [max(len(row[i]) for row in [headers] + rows) for i in range(len(headers))]

    lines = ["  ".join(text.ljust(width) for text, width in zip(headers, widths)).rstrip()]
    lines.append("  ".join("-" * width for width in widths))
    for row in rows:
        lines.append("  ".join(text.ljust(width) for text, width in zip(row, widths)).rstrip())
    return "\n".join(lines)


def render_pagination(current: int, total_pages: int, total: int) -> str:
    """'Page 2 of 7 (64 employees): 1 [2] 3 4 5'."""

    if total_pages <= 0:
        return f"No pages ({total} employees)"
    pages = " ".join(
        f"[{number}]" if number == current else str(number)
        for number in visible_pages(current, total_pages)
    )
    return f"Page {current} of {total_pages} ({total} employees): {pages}"


def render_employee(employee: Dict[str, Any]) -> str:
    """Detail view of a single employee."""

    address = employee.get("address") or {}
    address_text = ", ".join(
        str(address[key])
        for key in ("street", "city", "state", "zipCode", "country")
        if address.get(key)
    )
    rows = [
        ("ID", employee.get("id")),
        ("Name", f"{employee.get('firstName', '')} {employee.get('lastName', '')}".strip()),
        ("Email", employee.get("email")),
        ("Salary", format_currency(employee.get("salary"))),
        ("Date", format_date(employee.get("date"))),
        ("Department", employee.get("department") or "N/A"),
        ("Position", employee.get("position") or "N/A"),
        ("Phone", employee.get("phone") or "N/A"),
        ("Address", address_text or "N/A"),
    ]
    return "\n".join(f"{label + ':':<12}{value}" for label, value in rows)


def render_stats(stats: Dict[str, Any]) -> str:
    """Statistics panel: headline figures followed by the department breakdown."""

    total = stats.get("totalEmployees") or 0
    average = stats.get("averageSalary") or 0
    departments = stats.get("departmentStats") or []

    lines = [
        "Employee Statistics",
        f"  Total Employees: {total}",
        f"  Average Salary:  {format_currency(average)}",
        f"  Departments:     {len(departments)}",
        f"  Total Payroll:   {format_currency(total * average)}",
    ]
    if departments:
        lines.append("")
        lines.append("Department Breakdown")
        for entry in departments:
            count = entry.get("count", 0)
            noun = "employee" if count == 1 else "employees"
            lines.append(f"  {entry.get('department')}: {count} {noun}")
    return "\n".join(lines)
