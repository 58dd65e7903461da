"""Problem scanner - find employee records with data-quality defects.

A record is a problem when its name, pension id or role is empty, or
when its name starts with a lowercase letter.

Example:
    >>> from staffledger.models.employee import Employee
    >>> from staffledger.scanner.problems import find_defects, is_problem
    >>> is_problem(Employee(name="bob", pension_id="P1", role="Clerk"))
    True
    >>> find_defects(Employee(name="", pension_id="P1", role="Clerk"))
    [<Defect.MISSING_NAME: 'missing_name'>]
    >>> is_problem(Employee(name="Alice", pension_id="P100", role="Engineer"))
    False
"""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from staffledger.models.employee import Employee
    from staffledger.protocols.storage import EmployeeStore


class Defect(str, Enum):
    """A single data-quality defect."""

    MISSING_NAME = "missing_name"
    MISSING_PENSION_ID = "missing_pension_id"
    MISSING_ROLE = "missing_role"
    LOWERCASE_NAME = "lowercase_name"


def find_defects(employee: Employee) -> list[Defect]:
    """List every defect on ``employee``, in a fixed order."""
    defects = []
    if not employee.name:
        defects.append(Defect.MISSING_NAME)
    # Empty names have no first character to inspect
    elif employee.name[0].islower():
        defects.append(Defect.LOWERCASE_NAME)
    if not employee.pension_id:
        defects.append(Defect.MISSING_PENSION_ID)
    if not employee.role:
        defects.append(Defect.MISSING_ROLE)
    return defects


def is_problem(employee: Employee) -> bool:
    """True if ``employee`` has at least one defect."""
    return (
        not employee.name
        or not employee.pension_id
        or not employee.role
        or employee.name[0].islower()
    )


class ProblemScanner:
    """Read-only scan of the store for problem records.

    Example:
        >>> import asyncio
        >>> from staffledger.models.employee import Employee
        >>> from staffledger.scanner.problems import ProblemScanner
        >>> from staffledger.storage.memory import MemoryStore
        >>> store = MemoryStore([
        ...     Employee(name="Alice", pension_id="P100", role="Engineer"),
        ...     Employee(name="bob", pension_id="P1", role="Clerk"),
        ... ])
        >>> [e.name for e in asyncio.run(ProblemScanner(store).find_problems())]
        ['bob']
    """

    def __init__(self, store: EmployeeStore) -> None:
        self._store = store

    @staticmethod
    def scan(employees: Iterable[Employee]) -> list[Employee]:
        """Filter ``employees`` down to problem records, keeping order."""
        return [e for e in employees if is_problem(e)]

    async def find_problems(self) -> list[Employee]:
        """Return every problem record in store order."""
        return self.scan(await self._store.find_all())
