"""Pension lookup protocol and result type.

A lookup resolves an employee name to a pension identifier. Failures are
represented as data: a `LookupResult` with status ``UNAVAILABLE`` and an
empty identifier, never as an exception crossing the enrichment engine.

Example:
    >>> from staffledger.protocols.lookup import LookupResult
    >>> LookupResult.resolved("Alice", "P100").value
    'P100'
    >>> LookupResult.unavailable("Alice", "connection refused").value
    ''
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Protocol, runtime_checkable

UNRESOLVED = ""


class LookupStatus(Enum):
    """Outcome of a single pension lookup.

    Attributes:
        RESOLVED: The service returned an identifier.
        UNAVAILABLE: The service failed; the fallback value applies.
    """

    RESOLVED = "resolved"
    UNAVAILABLE = "unavailable"


@dataclass(frozen=True)
class LookupResult:
    """Result of one pension lookup.

    Attributes:
        name: The employee name that was looked up.
        status: Whether an identifier was obtained.
        pension_id: The identifier, or ``UNRESOLVED`` on failure.
        error_message: Failure description when status is UNAVAILABLE.
        duration_ms: Time spent on the lookup in milliseconds.
    """

    name: str
    status: LookupStatus
    pension_id: str = UNRESOLVED
    error_message: str | None = None
    duration_ms: float = 0.0

    @classmethod
    def resolved(cls, name: str, pension_id: str, duration_ms: float = 0.0) -> LookupResult:
        return cls(name=name, status=LookupStatus.RESOLVED, pension_id=pension_id, duration_ms=duration_ms)

    @classmethod
    def unavailable(cls, name: str, reason: str, duration_ms: float = 0.0) -> LookupResult:
        return cls(
            name=name,
            status=LookupStatus.UNAVAILABLE,
            error_message=reason,
            duration_ms=duration_ms,
        )

    @property
    def is_resolved(self) -> bool:
        return self.status is LookupStatus.RESOLVED

    @property
    def value(self) -> str:
        """The identifier to store: the resolved one, or the fallback."""
        return self.pension_id if self.is_resolved else UNRESOLVED


@runtime_checkable
class PensionLookup(Protocol):
    """Protocol for pension lookup clients.

    Example:
        >>> class StaticLookup:
        ...     async def lookup(self, name: str) -> LookupResult:
        ...         return LookupResult.resolved(name, "P-" + name)
        ...
        ...     async def close(self) -> None:
        ...         pass
        >>> isinstance(StaticLookup(), PensionLookup)
        True
    """

    async def lookup(self, name: str) -> LookupResult:
        """Resolve ``name`` to a pension identifier.

        Implementations may raise `LookupUnavailableError`; the enrichment
        engine converts any exception into an UNAVAILABLE result.
        """
        ...

    async def close(self) -> None:
        """Release any underlying connections."""
        ...
