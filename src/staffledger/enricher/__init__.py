"""Enrichers for employee records.

Available:
- PensionEnricher: resolves and persists pension identifiers
- PensionLookupClient: HTTP client for the pension lookup service
"""

from staffledger.enricher.pension import (
    PensionEnricher,
    PensionLookupClient,
    RefreshReport,
    RefreshStrategy,
)

__all__ = [
    "PensionEnricher",
    "PensionLookupClient",
    "RefreshReport",
    "RefreshStrategy",
]
