"""Command-line entry point for the employee records client."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Any, Dict, Sequence

from . import employee_repository as repo
from . import views
from .services.api_client import APIError

# CLI option -> API field
EMPLOYEE_OPTIONS = [
    ("first_name", "firstName"),
    ("last_name", "lastName"),
    ("email", "email"),
    ("salary", "salary"),
    ("date", "date"),
    ("department", "department"),
    ("position", "position"),
    ("phone", "phone"),
]


def _add_employee_options(parser: argparse.ArgumentParser, required: bool) -> None:
    """Field options shared by `add` and `update`; `add` requires the core ones."""

    parser.add_argument("--first-name", required=required)
    parser.add_argument("--last-name", required=required)
    parser.add_argument("--email", required=required)
    parser.add_argument("--salary", type=float, required=required)
    parser.add_argument("--date", help="Hire date, YYYY-MM-DD (defaults to today on add).")
    parser.add_argument("--department")
    parser.add_argument("--position")
    parser.add_argument("--phone")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="employee_records",
        description="List, edit and summarise employees through the records API.",
    )
    parser.add_argument(
        "--base-url",
        default=None,
        help="API base URL including /api (default: EMPLOYEE_API_BASE_URL or config.json).",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log HTTP requests.")
    sub = parser.add_subparsers(dest="command", required=True)

    list_parser = sub.add_parser("list", help="Show one page of employees.")
    list_parser.add_argument("--page", type=int, default=1)
    list_parser.add_argument("--limit", type=int, default=10)
    list_parser.add_argument("--search", default=None)
    list_parser.add_argument("--sort-by", default="createdAt")
    list_parser.add_argument("--order", choices=["asc", "desc"], default="desc")

    show_parser = sub.add_parser("show", help="Show a single employee.")
    show_parser.add_argument("employee_id")

    add_parser = sub.add_parser("add", help="Create an employee.")
    _add_employee_options(add_parser, required=True)

    update_parser = sub.add_parser("update", help="Change fields of an employee.")
    update_parser.add_argument("employee_id")
    _add_employee_options(update_parser, required=False)

    delete_parser = sub.add_parser("delete", help="Delete an employee.")
    delete_parser.add_argument("employee_id")
    delete_parser.add_argument("-y", "--yes", action="store_true", help="Skip the confirmation prompt.")

    sub.add_parser("stats", help="Show headcount and salary statistics.")
    return parser


def employee_payload(args: argparse.Namespace) -> Dict[str, Any]:
    """Collect the field options that were given into an API payload."""

    return {
        field: getattr(args, option)
        for option, field in EMPLOYEE_OPTIONS
        if getattr(args, option, None) is not None
    }


def _print_api_error(exc: APIError) -> None:
    print(f"Error: {exc.message}", file=sys.stderr)
    for error in exc.errors:
        print(f"  {error.get('field') or '-'}: {error.get('message')}", file=sys.stderr)


def run_command(args: argparse.Namespace) -> int:
    base_url = args.base_url

    if args.command == "list":
        page = repo.list_employees(
            page=args.page,
            limit=args.limit,
            search=args.search,
            sort_by=args.sort_by,
            sort_order=args.order,
            base_url=base_url,
        )
        print(views.render_table(page["employees"], args.page, args.limit, args.sort_by, args.order))
        print()
        print(views.render_pagination(page["currentPage"], page["totalPages"], page["total"]))
        return 0

    if args.command == "show":
        print(views.render_employee(repo.get_employee(args.employee_id, base_url=base_url)))
        return 0

    if args.command == "add":
        employee = repo.add_employee(employee_payload(args), base_url=base_url)
        print(f"{employee['firstName']} {employee['lastName']}'s data has been added (id {employee['id']}).")
        return 0

    if args.command == "update":
        payload = employee_payload(args)
        if not payload:
            print("Nothing to update: pass at least one field option.", file=sys.stderr)
            return 2
        employee = repo.update_employee(args.employee_id, payload, base_url=base_url)
        print(f"{employee['firstName']} {employee['lastName']}'s data has been updated.")
        return 0

    if args.command == "delete":
        if not args.yes:
            answer = input(f"Delete employee {args.employee_id}? This cannot be undone [y/N] ")
            if answer.strip().lower() not in {"y", "yes"}:
                print("Cancelled.")
                return 1
        removed = repo.delete_employee(args.employee_id, base_url=base_url)
        print(f"{removed['firstName']} {removed['lastName']}'s data has been deleted.")
        return 0

    print(views.render_stats(repo.get_stats(base_url=base_url)))
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Parse CLI arguments and dispatch to the requested command."""

    parser = build_parser()
    args = parser.parse_args(None if argv is None else list(argv))

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    try:
        return run_command(args)
    except APIError as exc:
        _print_api_error(exc)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
