"""FastAPI integration for StaffLedger.

Provides the employee REST API:
- Employee listing and lookup by id
- Employee creation with pension lookup
- Pension refresh for all employees
- Problem record scan
- Health check and OpenAPI documentation

Example:
    >>> from staffledger.api.fastapi import create_app
    >>> from staffledger.core.registry import EmployeeRegistry
    >>> from staffledger.enricher.pension import PensionLookupClient
    >>> from staffledger.storage.memory import MemoryStore
    >>>
    >>> registry = EmployeeRegistry(store=MemoryStore(), lookup=PensionLookupClient())
    >>> app = create_app(registry)
    >>>
    >>> # Run with: uvicorn staffledger.api.fastapi:app
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from staffledger import __version__
from staffledger.core.config import Settings, get_settings
from staffledger.core.exceptions import NotFoundError
from staffledger.core.registry import EmployeeRegistry
from staffledger.models.employee import Employee, EmployeeCreate


def create_app(
    registry: EmployeeRegistry,
    title: str = "StaffLedger API",
    version: str = __version__,
    description: str = "Employee records with pension enrichment",
) -> FastAPI:
    """Create a FastAPI application for StaffLedger.

    Args:
        registry: Registry that serves every endpoint.
        title: API title for OpenAPI docs.
        version: API version.
        description: API description for docs.

    Returns:
        Configured FastAPI application.

    Example:
        >>> from staffledger.api.fastapi import create_app
        >>> from staffledger.core.registry import EmployeeRegistry
        >>> from staffledger.enricher.pension import PensionLookupClient
        >>> from staffledger.storage.memory import MemoryStore
        >>> registry = EmployeeRegistry(store=MemoryStore(), lookup=PensionLookupClient())
        >>> create_app(registry).title
        'StaffLedger API'
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        await app.state.registry.initialize()
        try:
            yield
        finally:
            await app.state.registry.close()

    app = FastAPI(
        title=title,
        version=version,
        description=description,
        lifespan=lifespan,
    )

    app.state.registry = registry

    @app.exception_handler(NotFoundError)
    async def not_found(request: Request, exc: NotFoundError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    # =========================================================================
    # Health & Info Endpoints
    # =========================================================================

    @app.get("/")
    async def root() -> dict[str, Any]:
        """API root with basic info."""
        return {
            "name": title,
            "version": version,
            "description": description,
        }

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "healthy"}

    # =========================================================================
    # Employee Endpoints
    # =========================================================================

    @app.get("/employees")
    async def list_employees() -> list[Employee]:
        """List all employees."""
        return await app.state.registry.list_all()

    @app.get("/employees/problems")
    async def problem_employees() -> list[Employee]:
        """List employees with missing data or a lowercase name."""
        return await app.state.registry.find_problems()

    @app.get("/employees/pension")
    async def refresh_pensions() -> list[Employee]:
        """Look up pension ids for all employees and save them."""
        return await app.state.registry.refresh_all_pensions()

    @app.get("/employees/{employee_id}")
    async def get_employee(employee_id: int) -> Employee:
        """Get an employee by id."""
        return await app.state.registry.get_by_id(employee_id)

    @app.post("/employees")
    async def create_employee(body: EmployeeCreate) -> Employee:
        """Create an employee, looking up their pension id."""
        return await app.state.registry.create_employee(body.to_employee())

    return app


def create_app_from_settings(settings: Settings | None = None) -> FastAPI:
    """Create an app whose store and lookup client come from settings."""
    settings = settings or get_settings()
    return create_app(EmployeeRegistry.from_settings(settings))


# Default app instance for uvicorn
# Usage: uvicorn staffledger.api.fastapi:app
app = create_app_from_settings()
