"""CLI entry point."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from typing import TypeVar

import typer
from rich.console import Console
from rich.table import Table

from staffledger.core.config import Settings, get_settings
from staffledger.core.logging import configure_logging
from staffledger.core.registry import EmployeeRegistry
from staffledger.models.employee import Employee
from staffledger.scanner.problems import find_defects

T = TypeVar("T")

app = typer.Typer(
    name="staffledger",
    help="Employee records with pension enrichment",
    no_args_is_help=True,
)
console = Console()

DatabaseOption = typer.Option(None, "--database-url", "-d", help="Store URL (default from settings)")
PensionUrlOption = typer.Option(None, "--pension-url", help="Pension service base URL")


def _settings(database_url: str | None, pension_url: str | None) -> Settings:
    overrides = {}
    if database_url:
        overrides["database_url"] = database_url
    if pension_url:
        overrides["pension_service_url"] = pension_url
    settings = get_settings(**overrides)
    configure_logging(settings.log_level, settings.log_format)
    return settings


def _run(settings: Settings, operation: Callable[[EmployeeRegistry], Awaitable[T]]) -> T:
    async def runner() -> T:
        async with EmployeeRegistry.from_settings(settings) as registry:
            return await operation(registry)

    return asyncio.run(runner())


def _employee_table(employees: list[Employee], title: str, *, defects: bool = False) -> Table:
    table = Table(title=title)
    table.add_column("ID", justify="right")
    table.add_column("Name")
    table.add_column("Pension ID")
    table.add_column("Role")
    if defects:
        table.add_column("Defects", style="red")

    for e in employees:
        row = [str(e.id), e.name, e.pension_id or "[dim]-[/dim]", e.role]
        if defects:
            row.append(", ".join(d.value for d in find_defects(e)))
        table.add_row(*row)
    return table


@app.command()
def version() -> None:
    """Show version."""
    from staffledger import __version__

    console.print(f"staffledger {__version__}")


@app.command()
def info() -> None:
    """Show system information and effective settings."""
    import sys

    from staffledger import __version__

    settings = get_settings()
    console.print(f"[bold]StaffLedger[/bold] {__version__}")
    console.print(f"Python {sys.version}")
    console.print(f"Store: {settings.database_url}")
    console.print(f"Pension service: {settings.pension_service_url}")
    console.print(f"Refresh strategy: {settings.refresh_strategy}")


@app.command()
def serve(
    host: str = typer.Option(None, help="Bind address (default from settings)"),
    port: int = typer.Option(None, help="Port (default from settings)"),
    database_url: str = DatabaseOption,
    pension_url: str = PensionUrlOption,
) -> None:
    """Run the HTTP API."""
    import uvicorn

    from staffledger.api.fastapi import create_app_from_settings

    settings = _settings(database_url, pension_url)
    uvicorn.run(
        create_app_from_settings(settings),
        host=host or settings.host,
        port=port or settings.port,
        log_level=settings.log_level.lower(),
    )


@app.command("list")
def list_employees(database_url: str = DatabaseOption) -> None:
    """List all employees."""
    settings = _settings(database_url, None)
    employees = _run(settings, lambda r: r.list_all())
    console.print(_employee_table(employees, f"Employees ({len(employees)})"))


@app.command()
def problems(database_url: str = DatabaseOption) -> None:
    """List employees with missing data or a lowercase name."""
    settings = _settings(database_url, None)
    found = _run(settings, lambda r: r.find_problems())
    if not found:
        console.print("[green]No problem records[/green]")
        return
    console.print(_employee_table(found, f"Problem records ({len(found)})", defects=True))


@app.command()
def refresh(
    database_url: str = DatabaseOption,
    pension_url: str = PensionUrlOption,
) -> None:
    """Look up pension ids for all employees and save them."""
    settings = _settings(database_url, pension_url)
    report = _run(settings, lambda r: r.refresh_all_pensions_with_report())
    console.print(_employee_table(report.employees, "Refreshed employees"))
    style = "green" if report.unavailable == 0 else "yellow"
    console.print(
        f"[{style}]{report.resolved}/{report.total} resolved, "
        f"{report.unavailable} unavailable[/{style}] in {report.duration_ms:.0f}ms"
    )


@app.command()
def add(
    name: str = typer.Argument(..., help="Employee name"),
    role: str = typer.Argument(..., help="Employee role"),
    database_url: str = DatabaseOption,
    pension_url: str = PensionUrlOption,
) -> None:
    """Create an employee, looking up their pension id."""
    settings = _settings(database_url, pension_url)
    employee = _run(settings, lambda r: r.create_employee(Employee(name=name, role=role)))
    console.print(_employee_table([employee], "Created employee"))


if __name__ == "__main__":
    app()
