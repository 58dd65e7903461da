"""Employee models - the core data unit.

This module contains the record types handled by StaffLedger:

- `EmployeeCreate`: Inbound request body for creating an employee
- `Employee`: A stored employee record, identity assigned by the store

The pension identifier is exposed on the wire as ``pensionId`` and as
``pension_id`` in Python. An empty string means "unresolved"; it is never
``None``.

Example:
    >>> from staffledger.models.employee import Employee
    >>> e = Employee(name="Alice", role="Engineer")
    >>> e.pension_id
    ''
    >>> e.id is None
    True
    >>> e.model_dump(by_alias=True)
    {'id': None, 'name': 'Alice', 'pensionId': '', 'role': 'Engineer'}
"""

from __future__ import annotations

from pydantic import ConfigDict, Field

from staffledger.models.base import StaffLedgerModel


class EmployeeCreate(StaffLedgerModel):
    """Request body for creating an employee.

    Any ``pensionId`` supplied by the caller is a placeholder; it is
    overwritten by the lookup during creation. Other fields a client may
    send, such as ``id``, are ignored.

    Example:
        >>> from staffledger.models.employee import EmployeeCreate
        >>> body = EmployeeCreate.model_validate({"name": "Carol", "role": "Manager"})
        >>> body.to_employee().pension_id
        ''
    """

    model_config = ConfigDict(extra="ignore")

    name: str = Field(default="", description="Employee name")
    role: str = Field(default="", description="Employee role")
    pension_id: str = Field(
        default="",
        alias="pensionId",
        description="Ignored; resolved by pension lookup",
    )

    def to_employee(self) -> Employee:
        """Build an unsaved Employee from this request."""
        return Employee(name=self.name, role=self.role)


class Employee(StaffLedgerModel):
    """An employee record.

    No field is validated for content: empty names, roles and pension
    identifiers are accepted so that the problem scanner can find them.

    Example:
        >>> from staffledger.models.employee import Employee
        >>> e = Employee.model_validate(
        ...     {"id": 7, "name": "Bob", "pensionId": "P1", "role": "Clerk"}
        ... )
        >>> e.pension_id
        'P1'
        >>> e.with_pension_id("P2").pension_id
        'P2'
        >>> e.pension_id  # the original is untouched
        'P1'
    """

    id: int | None = Field(default=None, description="Store-assigned identity")
    name: str = Field(default="", description="Employee name")
    pension_id: str = Field(
        default="",
        alias="pensionId",
        description="Pension identifier, empty when unresolved",
    )
    role: str = Field(default="", description="Employee role")

    def with_pension_id(self, pension_id: str) -> Employee:
        """Return a copy carrying ``pension_id``."""
        return self.model_copy(update={"pension_id": pension_id})

    def with_id(self, employee_id: int) -> Employee:
        """Return a copy carrying the store-assigned ``employee_id``."""
        return self.model_copy(update={"id": employee_id})
