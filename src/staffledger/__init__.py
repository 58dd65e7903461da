"""
StaffLedger - Employee Records with Pension Enrichment.

StaffLedger stores employee records and enriches each one with a pension
identifier fetched from an external lookup service.

Key Features:
- Protocol-based design (swap stores and lookup clients freely)
- Concurrent pension refresh with per-employee isolation
- Lookup failures degrade to an empty pension id, never to an error
- Data-quality scan for incomplete or badly formatted records

Quick Start:
    >>> from staffledger import EmployeeRegistry, MemoryStore, PensionLookupClient
    >>> registry = EmployeeRegistry(
    ...     store=MemoryStore(),
    ...     lookup=PensionLookupClient("http://localhost:8082"),
    ... )
    >>> # async with registry:
    >>> #     await registry.refresh_all_pensions()

Architecture:
    Stores: MemoryStore, SQLAlchemyStore
    Lookup: PensionLookupClient
    Engine: PensionEnricher
    Scanner: ProblemScanner
    API: staffledger.api.fastapi.create_app
"""

__version__ = "0.1.0"

from staffledger.core.config import Settings, get_settings
from staffledger.core.exceptions import (
    ConfigurationError,
    LookupUnavailableError,
    NotFoundError,
    StaffLedgerError,
    StorageError,
)
from staffledger.core.registry import EmployeeRegistry
from staffledger.enricher.pension import (
    PensionEnricher,
    PensionLookupClient,
    RefreshReport,
    RefreshStrategy,
)
from staffledger.http.client import HttpClient, HttpClientError
from staffledger.models.employee import Employee, EmployeeCreate
from staffledger.protocols.lookup import LookupResult, LookupStatus, PensionLookup
from staffledger.protocols.storage import EmployeeStore
from staffledger.scanner.problems import Defect, ProblemScanner, find_defects, is_problem
from staffledger.storage.factory import create_store
from staffledger.storage.memory import MemoryStore
from staffledger.storage.sqlalchemy_storage import SQLAlchemyStore

__all__ = [
    # Models
    "Employee",
    "EmployeeCreate",
    # Registry
    "EmployeeRegistry",
    # Stores
    "EmployeeStore",
    "MemoryStore",
    "SQLAlchemyStore",
    "create_store",
    # Enrichment
    "PensionEnricher",
    "PensionLookup",
    "PensionLookupClient",
    "LookupResult",
    "LookupStatus",
    "RefreshReport",
    "RefreshStrategy",
    # Scanning
    "ProblemScanner",
    "Defect",
    "find_defects",
    "is_problem",
    # HTTP
    "HttpClient",
    "HttpClientError",
    # Configuration
    "Settings",
    "get_settings",
    # Exceptions
    "StaffLedgerError",
    "NotFoundError",
    "StorageError",
    "LookupUnavailableError",
    "ConfigurationError",
    # Version
    "__version__",
]
