"""StaffLedger SQLAlchemy models and schema management.

Usage:
    from sqlalchemy import create_engine
    from staffledger.storage.models import create_all_tables

    engine = create_engine("sqlite:///staff.db")
    create_all_tables(engine)
"""

from sqlalchemy import Integer, String
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from staffledger.models.employee import Employee


class Base(DeclarativeBase):
    """Base class for all StaffLedger models."""


class EmployeeModel(Base):
    """Employee table.

    Empty strings are stored as-is; an empty ``pension_id`` is an
    unresolved identifier, not a NULL.
    """

    __tablename__ = "employees"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    pension_id: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    role: Mapped[str] = mapped_column(String(255), nullable=False, default="")

    def to_employee(self) -> Employee:
        return Employee(id=self.id, name=self.name, pension_id=self.pension_id, role=self.role)

    def update_from(self, employee: Employee) -> None:
        self.name = employee.name
        self.pension_id = employee.pension_id
        self.role = employee.role

    @classmethod
    def from_employee(cls, employee: Employee) -> "EmployeeModel":
        row = cls(id=employee.id)
        row.update_from(employee)
        return row

    def __repr__(self) -> str:
        return f"<EmployeeModel(id={self.id}, name={self.name!r})>"


def create_all_tables(engine: Engine) -> None:
    """Create all tables if they don't exist."""
    Base.metadata.create_all(engine)
