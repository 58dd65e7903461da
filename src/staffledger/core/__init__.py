"""Core configuration and exceptions."""

from staffledger.core.config import Settings, get_settings
from staffledger.core.exceptions import (
    ConfigurationError,
    LookupUnavailableError,
    NotFoundError,
    StaffLedgerError,
    StorageError,
)

__all__ = [
    # Configuration
    "Settings",
    "get_settings",
    # Exceptions
    "StaffLedgerError",
    "NotFoundError",
    "StorageError",
    "LookupUnavailableError",
    "ConfigurationError",
]
