"""Custom exceptions.

StaffLedger uses a small hierarchy of exceptions. Only `NotFoundError`
crosses the registry boundary; lookup failures are absorbed by the
enrichment engine and turned into an empty pension identifier.

Example:
    >>> from staffledger.core.exceptions import NotFoundError, StaffLedgerError
    >>> try:
    ...     raise NotFoundError(999)
    ... except StaffLedgerError as e:
    ...     print(e)
    Could not find employee 999
"""

from __future__ import annotations


class StaffLedgerError(Exception):
    """Base exception for StaffLedger.

    Example:
        >>> from staffledger.core.exceptions import StaffLedgerError
        >>> str(StaffLedgerError("something went wrong"))
        'something went wrong'
    """


class NotFoundError(StaffLedgerError):
    """Requested employee does not exist.

    Example:
        >>> from staffledger.core.exceptions import NotFoundError
        >>> NotFoundError(42).employee_id
        42
    """

    def __init__(self, employee_id: int) -> None:
        self.employee_id = employee_id
        super().__init__(f"Could not find employee {employee_id}")


class StorageError(StaffLedgerError):
    """Storage operation failed.

    Example:
        >>> from staffledger.core.exceptions import StorageError
        >>> raise StorageError("connection lost")  # doctest: +IGNORE_EXCEPTION_DETAIL
        Traceback (most recent call last):
        StorageError: connection lost
    """


class LookupUnavailableError(StaffLedgerError):
    """Pension lookup service failed or is unreachable.

    Raised by lookup clients and recovered inside the enrichment engine.

    Example:
        >>> from staffledger.core.exceptions import LookupUnavailableError
        >>> e = LookupUnavailableError("Alice", "HTTP 503")
        >>> e.name, e.reason
        ('Alice', 'HTTP 503')
    """

    def __init__(self, name: str, reason: str) -> None:
        self.name = name
        self.reason = reason
        super().__init__(f"Pension lookup for {name!r} unavailable: {reason}")


class ConfigurationError(StaffLedgerError):
    """Configuration is invalid.

    Example:
        >>> from staffledger.core.exceptions import ConfigurationError
        >>> raise ConfigurationError("unknown store")  # doctest: +IGNORE_EXCEPTION_DETAIL
        Traceback (most recent call last):
        ConfigurationError: unknown store
    """
