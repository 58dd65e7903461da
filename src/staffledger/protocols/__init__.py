"""Protocol definitions - all extension points."""

from staffledger.protocols.lookup import (
    UNRESOLVED,
    LookupResult,
    LookupStatus,
    PensionLookup,
)
from staffledger.protocols.storage import EmployeeStore

__all__ = [
    # Storage
    "EmployeeStore",
    # Lookup
    "PensionLookup",
    "LookupResult",
    "LookupStatus",
    "UNRESOLVED",
]
