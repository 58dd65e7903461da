"""Tests for staffledger.enricher.pension.

Covers the HTTP lookup client and the enrichment engine:
- Lookup failures always become an empty pension id
- Create resolves then saves
- Refresh-all preserves identities and isolates employees
- Concurrent and sequential strategies behave the same
- Memory and SQL stores keep the same values
"""

from __future__ import annotations

import asyncio

import httpx
import pytest

from staffledger.core.exceptions import ConfigurationError, LookupUnavailableError
from staffledger.enricher.pension import (
    PensionEnricher,
    PensionLookupClient,
    RefreshStrategy,
)
from staffledger.models.employee import Employee
from staffledger.protocols.lookup import LookupResult, LookupStatus, PensionLookup
from staffledger.protocols.storage import EmployeeStore
from staffledger.storage.memory import MemoryStore
from staffledger.storage.sqlalchemy_storage import SQLAlchemyStore

# =============================================================================
# Test Fixtures and Helpers
# =============================================================================


class FakeLookup:
    """Lookup returning canned identifiers; unknown names are unavailable."""

    def __init__(self, ids: dict[str, str] | None = None, *, raise_for: set[str] | None = None):
        self.ids = ids or {}
        self.raise_for = raise_for or set()
        self.calls: list[str] = []
        self.closed = False

    async def lookup(self, name: str) -> LookupResult:
        self.calls.append(name)
        if name in self.raise_for:
            raise RuntimeError(f"boom for {name}")
        if name in self.ids:
            return LookupResult.resolved(name, self.ids[name])
        return LookupResult.unavailable(name, "unknown")

    async def close(self) -> None:
        self.closed = True


def mock_service(ids: dict[str, str]) -> httpx.MockTransport:
    """Pension service answering GET /{name}; unknown names get a 404."""

    def handler(request: httpx.Request) -> httpx.Response:
        name = request.url.path.lstrip("/")
        if name in ids:
            return httpx.Response(200, text=ids[name])
        return httpx.Response(404)

    return httpx.MockTransport(handler)


def unreachable_service() -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    return httpx.MockTransport(handler)


@pytest.fixture(params=["memory", "sqlite"])
async def store(request: pytest.FixtureRequest) -> EmployeeStore:
    """Every engine test runs against both store backends."""
    s = MemoryStore() if request.param == "memory" else SQLAlchemyStore("sqlite://")
    await s.initialize()
    yield s
    await s.close()


# =============================================================================
# PensionLookupClient
# =============================================================================


class TestPensionLookupClient:
    """Tests for the HTTP-backed lookup."""

    def test_satisfies_protocol(self) -> None:
        assert isinstance(PensionLookupClient(), PensionLookup)

    def test_default_base_url(self) -> None:
        assert PensionLookupClient().base_url == "http://localhost:8082"

    async def test_returns_body_verbatim(self) -> None:
        """A success returns the body unchanged, whitespace included."""
        async with PensionLookupClient(
            "http://pensions.test", transport=mock_service({"Alice": " P100\n"})
        ) as client:
            result = await client.lookup("Alice")

        assert result.status is LookupStatus.RESOLVED
        assert result.value == " P100\n"

    async def test_name_is_path_segment(self) -> None:
        """Names are URL-quoted into a single path segment."""
        seen: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request.url.raw_path.decode())
            return httpx.Response(200, text="P1")

        async with PensionLookupClient(
            "http://pensions.test/", transport=httpx.MockTransport(handler)
        ) as client:
            await client.lookup("Mary Ann/Smith")

        assert seen == ["/Mary%20Ann%2FSmith"]

    async def test_non_success_status_is_unavailable(self) -> None:
        async with PensionLookupClient(
            "http://pensions.test", transport=mock_service({})
        ) as client:
            result = await client.lookup("Nobody")

        assert result.status is LookupStatus.UNAVAILABLE
        assert result.value == ""
        assert "404" in (result.error_message or "")

    async def test_connection_error_is_unavailable(self) -> None:
        async with PensionLookupClient(
            "http://pensions.test", transport=unreachable_service()
        ) as client:
            result = await client.lookup("Alice")

        assert result.value == ""
        assert result.status is LookupStatus.UNAVAILABLE

    async def test_fetch_raises_lookup_unavailable(self) -> None:
        """fetch() is the raising variant used inside lookup()."""
        async with PensionLookupClient(
            "http://pensions.test", transport=unreachable_service()
        ) as client:
            with pytest.raises(LookupUnavailableError) as exc_info:
                await client.fetch("Alice")

        assert exc_info.value.name == "Alice"


# =============================================================================
# lookup_pension
# =============================================================================


class TestLookupPension:
    """Tests for PensionEnricher.lookup_pension."""

    async def test_resolved(self, store: EmployeeStore) -> None:
        enricher = PensionEnricher(store, FakeLookup({"Alice": "P100"}))

        assert await enricher.lookup_pension("Alice") == "P100"

    async def test_unavailable_is_empty_string(self, store: EmployeeStore) -> None:
        enricher = PensionEnricher(store, FakeLookup())

        assert await enricher.lookup_pension("Alice") == ""

    async def test_unexpected_exception_is_empty_string(self, store: EmployeeStore) -> None:
        """Even a misbehaving lookup client cannot fail the caller."""
        enricher = PensionEnricher(store, FakeLookup(raise_for={"Alice"}))

        assert await enricher.lookup_pension("Alice") == ""

    async def test_raised_lookup_unavailable_is_empty_string(self, store: EmployeeStore) -> None:
        class RaisingLookup(FakeLookup):
            async def lookup(self, name: str) -> LookupResult:
                raise LookupUnavailableError(name, "down")

        enricher = PensionEnricher(store, RaisingLookup())

        result = await enricher.resolve("Alice")

        assert result.value == ""
        assert result.error_message == "down"

    async def test_over_http_unreachable(self, store: EmployeeStore) -> None:
        lookup = PensionLookupClient("http://pensions.test", transport=unreachable_service())
        enricher = PensionEnricher(store, lookup)

        assert await enricher.lookup_pension("Alice") == ""
        await lookup.close()


# =============================================================================
# create_employee
# =============================================================================


class TestCreateEmployee:
    """Tests for PensionEnricher.create_employee."""

    async def test_resolves_and_saves(self, store: EmployeeStore) -> None:
        """Carol gets P200 and a store-assigned id."""
        lookup = FakeLookup({"Carol": "P200"})
        enricher = PensionEnricher(store, lookup)

        created = await enricher.create_employee(Employee(name="Carol", role="Manager"))

        assert created.pension_id == "P200"
        assert created.id is not None
        assert await store.find_by_id(created.id) == created
        assert lookup.calls == ["Carol"]

    async def test_placeholder_overwritten(self, store: EmployeeStore) -> None:
        enricher = PensionEnricher(store, FakeLookup({"Carol": "P200"}))

        created = await enricher.create_employee(
            Employee(name="Carol", pension_id="placeholder", role="Manager")
        )

        assert created.pension_id == "P200"

    async def test_body_stored_verbatim(self, store: EmployeeStore) -> None:
        lookup = PensionLookupClient(
            "http://pensions.test", transport=mock_service({"Carol": "P200\n"})
        )
        enricher = PensionEnricher(store, lookup)

        created = await enricher.create_employee(Employee(name="Carol", role="Manager"))
        await lookup.close()

        assert created.pension_id == "P200\n"
        assert (await store.find_by_id(created.id)).pension_id == "P200\n"

    async def test_lookup_failure_still_creates(self, store: EmployeeStore) -> None:
        enricher = PensionEnricher(store, FakeLookup())

        created = await enricher.create_employee(Employee(name="Carol", role="Manager"))

        assert created.id is not None
        assert created.pension_id == ""
        assert len(await store.find_all()) == 1


# =============================================================================
# refresh_all_pensions
# =============================================================================


@pytest.mark.parametrize("strategy", list(RefreshStrategy))
class TestRefreshAllPensions:
    """Tests for PensionEnricher.refresh_all_pensions under both strategies."""

    async def test_resolved_lookup_applied(self, store: EmployeeStore, strategy) -> None:
        """Alice's empty pension id becomes P100."""
        await store.save(Employee(name="Alice", pension_id="", role="Engineer"))
        enricher = PensionEnricher(store, FakeLookup({"Alice": "P100"}), strategy=strategy)

        refreshed = await enricher.refresh_all_pensions()

        assert [e.pension_id for e in refreshed] == ["P100"]
        assert [e.pension_id for e in await store.find_all()] == ["P100"]

    async def test_unreachable_service_clears_id(self, store: EmployeeStore, strategy) -> None:
        """An unavailable lookup overwrites the id with the fallback."""
        await store.save(Employee(name="Alice", pension_id="OLD", role="Engineer"))
        lookup = PensionLookupClient("http://pensions.test", transport=unreachable_service())
        enricher = PensionEnricher(store, lookup, strategy=strategy)

        refreshed = await enricher.refresh_all_pensions()
        await lookup.close()

        assert refreshed[0].pension_id == ""
        assert (await store.find_all())[0].pension_id == ""

    async def test_preserves_identities_and_other_fields(
        self, store: EmployeeStore, strategy
    ) -> None:
        before = await store.save_all(
            [
                Employee(name="Alice", role="Engineer"),
                Employee(name="bob", pension_id="P1", role="Clerk"),
                Employee(name="", pension_id="P2", role=""),
            ]
        )
        enricher = PensionEnricher(store, FakeLookup({"Alice": "A1", "bob": "B1"}), strategy=strategy)

        after = await enricher.refresh_all_pensions()

        assert [e.id for e in after] == [e.id for e in before]
        assert [(e.name, e.role) for e in after] == [(e.name, e.role) for e in before]
        assert [e.pension_id for e in after] == ["A1", "B1", ""]

    async def test_one_failure_does_not_affect_others(
        self, store: EmployeeStore, strategy
    ) -> None:
        await store.save_all(
            [
                Employee(name="Alice", role="Engineer"),
                Employee(name="Broken", role="Clerk"),
                Employee(name="Carol", role="Manager"),
            ]
        )
        lookup = FakeLookup({"Alice": "P100", "Carol": "P200"}, raise_for={"Broken"})
        enricher = PensionEnricher(store, lookup, strategy=strategy)

        refreshed = await enricher.refresh_all_pensions()

        assert [e.pension_id for e in refreshed] == ["P100", "", "P200"]

    async def test_body_stored_verbatim(self, store: EmployeeStore, strategy) -> None:
        """Whitespace in a lookup body survives the round trip through the store."""
        await store.save_all(
            [Employee(name="Alice", role="Engineer"), Employee(name="Bob", role="Clerk")]
        )
        lookup = FakeLookup({"Alice": "   ", "Bob": " P101\n"})
        enricher = PensionEnricher(store, lookup, strategy=strategy)

        refreshed = await enricher.refresh_all_pensions()

        assert [e.pension_id for e in refreshed] == ["   ", " P101\n"]
        assert [e.pension_id for e in await store.find_all()] == ["   ", " P101\n"]

    async def test_empty_store(self, store: EmployeeStore, strategy) -> None:
        enricher = PensionEnricher(store, FakeLookup(), strategy=strategy)

        assert await enricher.refresh_all_pensions() == []

    async def test_report_counts(self, store: EmployeeStore, strategy) -> None:
        await store.save_all(
            [Employee(name="Alice", role="Engineer"), Employee(name="Bob", role="Clerk")]
        )
        enricher = PensionEnricher(store, FakeLookup({"Alice": "P100"}), strategy=strategy)

        report = await enricher.refresh_all_pensions_with_report()

        assert report.total == 2
        assert report.resolved == 1
        assert report.unavailable == 1
        assert report.strategy is RefreshStrategy(strategy)
        assert [r.name for r in report.results] == ["Alice", "Bob"]


class TestRefreshConcurrency:
    """Tests for the concurrent fan-out."""

    async def test_lookups_overlap(self, store: EmployeeStore) -> None:
        """All lookups are in flight together; none can finish until all start."""
        names = ["Alice", "Bob", "Carol"]
        await store.save_all([Employee(name=n, role="Staff") for n in names])
        all_started = asyncio.Event()
        started: list[str] = []

        class BarrierLookup(FakeLookup):
            async def lookup(self, name: str) -> LookupResult:
                started.append(name)
                if len(started) == len(names):
                    all_started.set()
                await asyncio.wait_for(all_started.wait(), timeout=2)
                return LookupResult.resolved(name, f"P-{name}")

        enricher = PensionEnricher(store, BarrierLookup(), strategy="concurrent")

        refreshed = await enricher.refresh_all_pensions()

        assert [e.pension_id for e in refreshed] == ["P-Alice", "P-Bob", "P-Carol"]

    async def test_concurrency_is_bounded(self, store: EmployeeStore) -> None:
        await store.save_all([Employee(name=f"E{i}", role="Staff") for i in range(10)])
        in_flight = 0
        peak = 0

        class CountingLookup(FakeLookup):
            async def lookup(self, name: str) -> LookupResult:
                nonlocal in_flight, peak
                in_flight += 1
                peak = max(peak, in_flight)
                await asyncio.sleep(0.01)
                in_flight -= 1
                return LookupResult.resolved(name, name)

        enricher = PensionEnricher(store, CountingLookup(), max_concurrent=3)

        await enricher.refresh_all_pensions()

        assert peak == 3

    async def test_sequential_runs_in_store_order(self, store: EmployeeStore) -> None:
        await store.save_all([Employee(name=n, role="Staff") for n in ["Carol", "Alice", "Bob"]])
        lookup = FakeLookup()
        enricher = PensionEnricher(store, lookup, strategy=RefreshStrategy.SEQUENTIAL)

        await enricher.refresh_all_pensions()

        assert lookup.calls == ["Carol", "Alice", "Bob"]


class TestEnricherConfiguration:
    """Tests for engine configuration."""

    def test_default_strategy(self) -> None:
        assert PensionEnricher(MemoryStore(), FakeLookup()).strategy is RefreshStrategy.CONCURRENT

    def test_strategy_from_string(self) -> None:
        enricher = PensionEnricher(MemoryStore(), FakeLookup(), strategy="sequential")

        assert enricher.strategy is RefreshStrategy.SEQUENTIAL

    def test_unknown_strategy(self) -> None:
        with pytest.raises(ConfigurationError):
            PensionEnricher(MemoryStore(), FakeLookup(), strategy="parallel")

    def test_invalid_concurrency(self) -> None:
        with pytest.raises(ConfigurationError):
            PensionEnricher(MemoryStore(), FakeLookup(), max_concurrent=0)
