"""Pydantic models for StaffLedger."""

from staffledger.models.base import StaffLedgerModel
from staffledger.models.employee import Employee, EmployeeCreate

__all__ = [
    "StaffLedgerModel",
    "Employee",
    "EmployeeCreate",
]
