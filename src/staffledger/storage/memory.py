"""In-memory employee store.

Provides a complete in-memory implementation of EmployeeStore, useful for
testing, development and the default server configuration.

Example:
    >>> import asyncio
    >>> from staffledger.models.employee import Employee
    >>> from staffledger.storage.memory import MemoryStore
    >>> store = MemoryStore()
    >>> saved = asyncio.run(store.save(Employee(name="Alice", role="Engineer")))
    >>> saved.id
    1

Note:
    All methods are async. Use within async context or with asyncio.run().
"""

from __future__ import annotations

from collections.abc import Sequence
from itertools import count

from staffledger.models.employee import Employee


class MemoryStore:
    """In-memory store using a dictionary keyed by employee id.

    Identities come from a counter starting at 1. Iteration order is
    insertion order. Records are copied on the way in and on the way out.

    Best for: Testing, development, small datasets.

    Example:
        >>> from staffledger.storage.memory import MemoryStore
        >>> s = MemoryStore()
        >>> s._initialized
        False
    """

    def __init__(self, employees: Sequence[Employee] = ()) -> None:
        self._employees: dict[int, Employee] = {}
        self._ids = count(1)
        self._initialized = False
        for employee in employees:
            self._put(employee)

    async def initialize(self) -> None:
        """No-op for memory storage."""
        self._initialized = True

    async def close(self) -> None:
        """Mark closed. Data is kept so a registry can be reopened."""
        self._initialized = False

    # --- Record Operations ---

    async def find_all(self) -> list[Employee]:
        """Return every employee in insertion order."""
        return [e.model_copy() for e in self._employees.values()]

    async def find_by_id(self, employee_id: int) -> Employee | None:
        """Return the employee with ``employee_id``, or None."""
        employee = self._employees.get(employee_id)
        return employee.model_copy() if employee is not None else None

    async def save(self, employee: Employee) -> Employee:
        """Insert or update one employee."""
        return self._put(employee).model_copy()

    async def save_all(self, employees: Sequence[Employee]) -> list[Employee]:
        """Save several employees. Returns the stored values in input order."""
        return [self._put(e).model_copy() for e in employees]

    # --- Helpers ---

    def _put(self, employee: Employee) -> Employee:
        if employee.id is None:
            employee = employee.with_id(self._next_id())
        else:
            employee = employee.model_copy()
        self._employees[employee.id] = employee
        return employee

    def _next_id(self) -> int:
        employee_id = next(self._ids)
        while employee_id in self._employees:
            employee_id = next(self._ids)
        return employee_id

    def __len__(self) -> int:
        return len(self._employees)
