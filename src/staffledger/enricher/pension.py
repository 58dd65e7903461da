"""Pension enrichment - resolve pension identifiers and persist them.

Two pieces live here:

- `PensionLookupClient`: calls the external pension service over HTTP,
  ``GET {base_url}/{name}``, and returns the response body as the
  identifier.
- `PensionEnricher`: the enrichment engine. It resolves identifiers for
  one or all employees and saves the results to the store.

A failed lookup never fails the enclosing operation. The engine turns
every failure into the fallback identifier ``""`` and carries on; callers
inspect the returned ``pension_id`` values (or run the problem scanner)
to find incomplete records.

Example:
    >>> import asyncio
    >>> from staffledger.enricher.pension import PensionEnricher
    >>> from staffledger.models.employee import Employee
    >>> from staffledger.protocols.lookup import LookupResult
    >>> from staffledger.storage.memory import MemoryStore
    >>> class StaticLookup:
    ...     async def lookup(self, name):
    ...         return LookupResult.resolved(name, "P100")
    ...     async def close(self):
    ...         pass
    >>> enricher = PensionEnricher(store=MemoryStore(), lookup=StaticLookup())
    >>> created = asyncio.run(enricher.create_employee(Employee(name="Alice", role="Engineer")))
    >>> created.id, created.pension_id
    (1, 'P100')
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING
from urllib.parse import quote

from staffledger.core.exceptions import ConfigurationError, LookupUnavailableError
from staffledger.http.client import HttpClient, HttpClientError
from staffledger.protocols.lookup import LookupResult, LookupStatus

if TYPE_CHECKING:
    import httpx

    from staffledger.models.employee import Employee
    from staffledger.protocols.lookup import PensionLookup
    from staffledger.protocols.storage import EmployeeStore

logger = logging.getLogger(__name__)

DEFAULT_PENSION_SERVICE_URL = "http://localhost:8082"


class PensionLookupClient:
    """HTTP client for the pension lookup service.

    One GET per name, no retries, bounded timeout. Any transport error,
    timeout or non-success status becomes an UNAVAILABLE result.

    Args:
        base_url: Base URL of the pension service.
        timeout: Seconds allowed per lookup.
        transport: Optional httpx transport, mainly for tests.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_PENSION_SERVICE_URL,
        *,
        timeout: float = 5.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._http = HttpClient(
            base_url=base_url.rstrip("/"),
            timeout=timeout,
            transport=transport,
        )

    @property
    def base_url(self) -> str:
        return self._http.base_url

    async def fetch(self, name: str) -> str:
        """Fetch the identifier for ``name``.

        Raises:
            LookupUnavailableError: If the service fails in any way.
        """
        try:
            return await self._http.get_text(f"/{quote(name, safe='')}")
        except HttpClientError as e:
            raise LookupUnavailableError(name, str(e)) from e

    async def lookup(self, name: str) -> LookupResult:
        """Resolve ``name``, returning the failure as data."""
        start = time.perf_counter()
        try:
            pension_id = await self.fetch(name)
        except LookupUnavailableError as e:
            duration_ms = (time.perf_counter() - start) * 1000
            logger.warning("Pension lookup failed for %r: %s", name, e.reason)
            return LookupResult.unavailable(name, e.reason, duration_ms)

        duration_ms = (time.perf_counter() - start) * 1000
        logger.debug("Resolved pension id for %r in %.1fms", name, duration_ms)
        return LookupResult.resolved(name, pension_id, duration_ms)

    async def close(self) -> None:
        await self._http.close()

    async def __aenter__(self) -> PensionLookupClient:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()


class RefreshStrategy(str, Enum):
    """How refresh-all schedules its lookups.

    Attributes:
        CONCURRENT: One task per employee, bounded, joined at the end.
        SEQUENTIAL: One lookup at a time in store order.
    """

    CONCURRENT = "concurrent"
    SEQUENTIAL = "sequential"


@dataclass
class RefreshReport:
    """Result of a refresh-all run.

    Attributes:
        employees: The saved employees, in store order.
        results: One lookup result per employee, same order.
        strategy: The strategy used.
        duration_ms: Wall time for the whole run.

    Example:
        >>> from staffledger.enricher.pension import RefreshReport
        >>> RefreshReport().total
        0
    """

    employees: list[Employee] = field(default_factory=list)
    results: list[LookupResult] = field(default_factory=list)
    strategy: RefreshStrategy = RefreshStrategy.CONCURRENT
    duration_ms: float = 0.0

    @property
    def total(self) -> int:
        return len(self.employees)

    @property
    def resolved(self) -> int:
        return sum(1 for r in self.results if r.is_resolved)

    @property
    def unavailable(self) -> int:
        return sum(1 for r in self.results if r.status is LookupStatus.UNAVAILABLE)


class PensionEnricher:
    """Enrichment engine: resolves pension identifiers and persists them.

    Args:
        store: Employee store to read from and write to.
        lookup: Pension lookup client.
        strategy: Scheduling for refresh-all.
        max_concurrent: Upper bound on in-flight lookups (concurrent only).
    """

    def __init__(
        self,
        store: EmployeeStore,
        lookup: PensionLookup,
        *,
        strategy: RefreshStrategy | str = RefreshStrategy.CONCURRENT,
        max_concurrent: int = 10,
    ) -> None:
        try:
            self._strategy = RefreshStrategy(strategy)
        except ValueError as e:
            raise ConfigurationError(f"Unknown refresh strategy: {strategy!r}") from e
        if max_concurrent < 1:
            raise ConfigurationError("max_concurrent must be at least 1")

        self._store = store
        self._lookup = lookup
        self._max_concurrent = max_concurrent

    @property
    def strategy(self) -> RefreshStrategy:
        return self._strategy

    async def resolve(self, name: str) -> LookupResult:
        """Run one lookup. Never raises.

        Lookup clients report failures as UNAVAILABLE results; anything a
        client raises anyway is converted here.
        """
        start = time.perf_counter()
        try:
            return await self._lookup.lookup(name)
        except LookupUnavailableError as e:
            logger.warning("Pension lookup failed for %r: %s", name, e.reason)
            reason = e.reason
        except Exception as e:
            logger.exception("Unexpected error looking up pension id for %r", name)
            reason = f"{type(e).__name__}: {e}"
        return LookupResult.unavailable(name, reason, (time.perf_counter() - start) * 1000)

    async def lookup_pension(self, name: str) -> str:
        """Return the pension identifier for ``name``, or ``""`` on failure."""
        return (await self.resolve(name)).value

    async def create_employee(self, employee: Employee) -> Employee:
        """Resolve a pension identifier for a new employee and save it.

        Any ``pension_id`` already on ``employee`` is overwritten.

        Returns:
            The stored employee, carrying its store-assigned id.
        """
        pension_id = await self.lookup_pension(employee.name)
        saved = await self._store.save(employee.with_pension_id(pension_id))
        logger.info("Created employee %s (%s), pension id %r", saved.id, saved.name, pension_id)
        return saved

    async def refresh_all_pensions(self) -> list[Employee]:
        """Re-resolve every employee's pension identifier and save all.

        Returns:
            All employees, in store order, with refreshed identifiers.
        """
        report = await self.refresh_all_pensions_with_report()
        return report.employees

    async def refresh_all_pensions_with_report(self) -> RefreshReport:
        """Like `refresh_all_pensions`, also returning per-lookup results."""
        start = time.perf_counter()
        employees = await self._store.find_all()

        if self._strategy is RefreshStrategy.SEQUENTIAL:
            results = [await self.resolve(e.name) for e in employees]
        else:
            results = await self._resolve_concurrently(employees)

        updated = [e.with_pension_id(r.value) for e, r in zip(employees, results)]
        saved = await self._store.save_all(updated)

        report = RefreshReport(
            employees=saved,
            results=results,
            strategy=self._strategy,
            duration_ms=(time.perf_counter() - start) * 1000,
        )
        logger.info(
            "Refreshed %d pension ids (%d resolved, %d unavailable) in %.1fms",
            report.total,
            report.resolved,
            report.unavailable,
            report.duration_ms,
        )
        return report

    async def _resolve_concurrently(self, employees: Sequence[Employee]) -> list[LookupResult]:
        semaphore = asyncio.Semaphore(self._max_concurrent)

        async def bounded_resolve(employee: Employee) -> LookupResult:
            async with semaphore:
                return await self.resolve(employee.name)

        return list(await asyncio.gather(*[bounded_resolve(e) for e in employees]))
