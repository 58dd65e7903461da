"""Base model and shared configuration.

Example:
    >>> from staffledger.models.base import StaffLedgerModel
    >>> StaffLedgerModel.model_config["populate_by_name"]
    True
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class StaffLedgerModel(BaseModel):
    """Base model with standard configuration."""

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        validate_assignment=True,
        extra="forbid",
    )
