"""EmployeeRegistry - main entry point for employee records.

The registry owns a store and a pension lookup client and exposes every
operation the API and CLI need: the read accessors, creation, pension
refresh and the problem scan.

Example:
    >>> import asyncio
    >>> from staffledger.core.registry import EmployeeRegistry
    >>> from staffledger.enricher.pension import PensionLookupClient
    >>> from staffledger.storage.memory import MemoryStore
    >>> async def example():
    ...     registry = EmployeeRegistry(store=MemoryStore(), lookup=PensionLookupClient())
    ...     async with registry:
    ...         return await registry.list_all()
    >>> asyncio.run(example())
    []
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from staffledger.core.exceptions import NotFoundError
from staffledger.enricher.pension import (
    PensionEnricher,
    PensionLookupClient,
    RefreshReport,
    RefreshStrategy,
)
from staffledger.scanner.problems import ProblemScanner
from staffledger.storage.factory import create_store

if TYPE_CHECKING:
    from staffledger.core.config import Settings
    from staffledger.models.employee import Employee
    from staffledger.protocols.lookup import PensionLookup
    from staffledger.protocols.storage import EmployeeStore

logger = logging.getLogger(__name__)


class EmployeeRegistry:
    """Coordinates the store, the enrichment engine and the problem scanner.

    Args:
        store: Employee store.
        lookup: Pension lookup client.
        strategy: Scheduling for refresh-all.
        max_concurrent: Upper bound on in-flight lookups.
    """

    def __init__(
        self,
        store: EmployeeStore,
        lookup: PensionLookup,
        *,
        strategy: RefreshStrategy | str = RefreshStrategy.CONCURRENT,
        max_concurrent: int = 10,
    ) -> None:
        self._store = store
        self._lookup = lookup
        self._enricher = PensionEnricher(
            store,
            lookup,
            strategy=strategy,
            max_concurrent=max_concurrent,
        )
        self._scanner = ProblemScanner(store)
        self._initialized = False

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        *,
        store: EmployeeStore | None = None,
        lookup: PensionLookup | None = None,
    ) -> EmployeeRegistry:
        """Build a registry from application settings.

        ``store`` and ``lookup`` replace the ones settings would build.
        """
        if store is None:
            store = create_store(settings.database_url)
        if lookup is None:
            lookup = PensionLookupClient(
                settings.pension_service_url,
                timeout=settings.lookup_timeout,
            )
        return cls(
            store,
            lookup,
            strategy=settings.refresh_strategy,
            max_concurrent=settings.lookup_concurrency,
        )

    @property
    def store(self) -> EmployeeStore:
        return self._store

    @property
    def enricher(self) -> PensionEnricher:
        return self._enricher

    @property
    def scanner(self) -> ProblemScanner:
        return self._scanner

    # =========================================================================
    # Lifecycle
    # =========================================================================

    async def initialize(self) -> None:
        """Initialize the store. Safe to call more than once."""
        if not self._initialized:
            await self._store.initialize()
            logger.debug("Registry initialized with %s", type(self._store).__name__)
            self._initialized = True

    async def close(self) -> None:
        """Close the lookup client and the store."""
        try:
            await self._lookup.close()
        finally:
            await self._store.close()
            self._initialized = False

    async def __aenter__(self) -> EmployeeRegistry:
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    # =========================================================================
    # Read Accessors
    # =========================================================================

    async def list_all(self) -> list[Employee]:
        """Return every employee in store order."""
        return await self._store.find_all()

    async def get_by_id(self, employee_id: int) -> Employee:
        """Return one employee.

        Raises:
            NotFoundError: If no employee has ``employee_id``.
        """
        employee = await self._store.find_by_id(employee_id)
        if employee is None:
            raise NotFoundError(employee_id)
        return employee

    # =========================================================================
    # Enrichment and Scanning
    # =========================================================================

    async def create_employee(self, employee: Employee) -> Employee:
        """Create an employee with a freshly resolved pension id."""
        return await self._enricher.create_employee(employee)

    async def refresh_all_pensions(self) -> list[Employee]:
        """Refresh every employee's pension id."""
        return await self._enricher.refresh_all_pensions()

    async def refresh_all_pensions_with_report(self) -> RefreshReport:
        """Refresh every employee's pension id and report each lookup."""
        return await self._enricher.refresh_all_pensions_with_report()

    async def find_problems(self) -> list[Employee]:
        """Return employees failing the data-quality rule."""
        return await self._scanner.find_problems()
