"""Employee store protocol.

Defines the interface for employee record storage.

Example:
    >>> from staffledger.protocols.storage import EmployeeStore
    >>> # EmployeeStore is a Protocol - implementations include MemoryStore
    >>> hasattr(EmployeeStore, "save_all")
    True
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from staffledger.models.employee import Employee


@runtime_checkable
class EmployeeStore(Protocol):
    """Employee store protocol.

    The store exclusively owns record identity. Implementations return
    copies, so callers may modify what they receive without touching
    stored state.

    See Also:
        staffledger.storage.memory.MemoryStore: In-memory implementation
        staffledger.storage.sqlalchemy_storage.SQLAlchemyStore: SQL implementation
    """

    async def find_all(self) -> list[Employee]:
        """Return every employee in store order."""
        ...

    async def find_by_id(self, employee_id: int) -> Employee | None:
        """Return the employee with ``employee_id``, or None."""
        ...

    async def save(self, employee: Employee) -> Employee:
        """Insert or update one employee.

        Assigns an identity when ``employee.id`` is None and returns the
        stored value.
        """
        ...

    async def save_all(self, employees: Sequence[Employee]) -> list[Employee]:
        """Save several employees as one batch. Returns the stored values."""
        ...

    # --- Lifecycle ---

    async def initialize(self) -> None:
        """Initialize storage (create tables, etc.)."""
        ...

    async def close(self) -> None:
        """Clean up resources."""
        ...
