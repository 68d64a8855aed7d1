"""Terminal rendering and command dispatch of the client."""
import pytest

from employee_records import main as cli
from employee_records import views
from employee_records.services.api_client import APIError

ANN = {
    "id": "7b1f6d2e-0c44-4d6e-9d0f-5b8f2c1a9e11",
    "firstName": "Ann",
    "lastName": "Lee",
    "email": "ann@x.com",
    "salary": 50000,
    "date": "2024-01-01T00:00:00",
    "department": None,
    "position": "Analyst",
    "phone": None,
    "address": {"city": "Pune", "country": "India"},
}


def test_format_currency() -> None:
    assert views.format_currency(50000) == "₹50,000"
    assert views.format_currency(1234.5) == "₹1,234.50"
    assert views.format_currency(None) == "₹0"


def test_format_date() -> None:
    assert views.format_date("2024-01-05T00:00:00") == "5 Jan 2024"
    assert views.format_date("2024-12-31T23:00:00Z") == "31 Dec 2024"
    assert views.format_date(None) == "N/A"


@pytest.mark.parametrize(
    ("current", "total", "expected"),
    [
        (1, 1, [1]),
        (1, 3, [1, 2, 3]),
        (1, 9, [1, 2, 3, 4, 5]),
        (5, 9, [3, 4, 5, 6, 7]),
        (9, 9, [5, 6, 7, 8, 9]),
        (1, 0, []),
    ],
)
def test_visible_pages(current: int, total: int, expected: list) -> None:
    assert views.visible_pages(current, total) == expected


def test_render_table() -> None:
    table = views.render_table([ANN], page=2, limit=10, sort_by="salary", sort_order="asc")
    header, _, row = table.splitlines()
    assert "Salary ↑" in header
    assert row.startswith("11 ")
    assert "₹50,000" in row and "1 Jan 2024" in row and "N/A" in row

    assert views.render_table([]).endswith("No employees found")


def test_render_pagination() -> None:
    assert views.render_pagination(2, 7, 64) == "Page 2 of 7 (64 employees): 1 [2] 3 4 5"


def test_render_stats() -> None:
    text = views.render_stats(
        {
            "totalEmployees": 3,
            "averageSalary": 20000,
            "departmentStats": [
                {"department": "Sales", "count": 2},
                {"department": "unassigned", "count": 1},
            ],
        }
    )
    assert "Total Employees: 3" in text
    assert "Departments:     2" in text
    assert "Total Payroll:   ₹60,000" in text
    assert "Sales: 2 employees" in text
    assert "unassigned: 1 employee" in text


def test_render_employee() -> None:
    text = views.render_employee(ANN)
    assert "Name:       Ann Lee" in text
    assert "Address:    Pune, India" in text


def test_add_command_sends_only_given_fields(monkeypatch, capsys) -> None:
    sent = {}

    def fake_add(payload, base_url=None):
        sent.update(payload)
        return {**ANN, **payload}

    monkeypatch.setattr(cli.repo, "add_employee", fake_add)
    code = cli.main(
        ["add", "--first-name", "Ann", "--last-name", "Lee", "--email", "Ann@X.COM", "--salary", "50000"]
    )

    assert code == 0
    assert sent == {"firstName": "Ann", "lastName": "Lee", "email": "Ann@X.COM", "salary": 50000.0}
    assert "Ann Lee's data has been added" in capsys.readouterr().out


def test_update_without_fields_is_rejected(capsys) -> None:
    assert cli.main(["update", ANN["id"]]) == 2
    assert "Nothing to update" in capsys.readouterr().err


def test_delete_can_be_cancelled(monkeypatch) -> None:
    monkeypatch.setattr("builtins.input", lambda prompt: "n")
    monkeypatch.setattr(cli.repo, "delete_employee", pytest.fail)
    assert cli.main(["delete", ANN["id"]]) == 1


def test_api_errors_are_printed(monkeypatch, capsys) -> None:
    def failing_stats(base_url=None):
        raise APIError("Validation failed", status_code=400, errors=[{"field": "salary", "message": "bad"}])

    monkeypatch.setattr(cli.repo, "get_stats", failing_stats)
    assert cli.main(["stats"]) == 1
    err = capsys.readouterr().err
    assert "Error: Validation failed" in err
    assert "salary: bad" in err


def test_list_command(monkeypatch, capsys) -> None:
    monkeypatch.setattr(
        cli.repo,
        "list_employees",
        lambda **kwargs: {"employees": [ANN], "totalPages": 1, "currentPage": 1, "total": 1},
    )
    assert cli.main(["list", "--search", "lee"]) == 0
    out = capsys.readouterr().out
    assert "Ann" in out
    assert "Page 1 of 1 (1 employees): [1]" in out
