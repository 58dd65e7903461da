"""
SQLAlchemy-based employee store.

Works with any database SQLAlchemy can reach (SQLite, PostgreSQL, ...).
The schema is created on ``initialize()``.

Usage:
    from staffledger.storage.sqlalchemy_storage import SQLAlchemyStore

    # Local file
    store = SQLAlchemyStore("sqlite:///data/staff.db")
    await store.initialize()

    # In-memory SQLite (single shared connection)
    store = SQLAlchemyStore("sqlite://")
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

from sqlalchemy.exc import SQLAlchemyError

from staffledger.core.exceptions import StorageError
from staffledger.models.employee import Employee

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine
    from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)


class SQLAlchemyStore:
    """
    Employee store backed by a SQLAlchemy engine.

    Each operation runs in its own session, committed on success and
    rolled back on error. ``save_all`` writes every record in a single
    transaction, so a batch is never partially written.

    Args:
        connection_string: SQLAlchemy database URL
        echo: Log SQL statements
    """

    def __init__(self, connection_string: str, *, echo: bool = False) -> None:
        self.connection_string = connection_string
        self.echo = echo
        self._engine: Engine | None = None
        self._initialized = False

    def _get_engine(self) -> "Engine":
        """Get or create SQLAlchemy engine."""
        if self._engine is None:
            from sqlalchemy import create_engine
            from sqlalchemy.pool import StaticPool

            engine_kwargs: dict[str, Any] = {}
            if self._is_memory_sqlite():
                # One shared connection, or every session sees an empty database
                engine_kwargs = {
                    "poolclass": StaticPool,
                    "connect_args": {"check_same_thread": False},
                }

            self._engine = create_engine(self.connection_string, echo=self.echo, **engine_kwargs)

        return self._engine

    def _is_memory_sqlite(self) -> bool:
        url = self.connection_string
        return url.startswith("sqlite") and (url.endswith("://") or ":memory:" in url)

    @contextmanager
    def session(self) -> Iterator["Session"]:
        """Context manager for database sessions."""
        from sqlalchemy.orm import sessionmaker

        Session = sessionmaker(bind=self._get_engine(), expire_on_commit=False)
        session = Session()
        try:
            yield session
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            raise StorageError(f"Database operation failed: {e}") from e
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    async def initialize(self) -> None:
        """
        Initialize storage (create tables).

        Safe to call multiple times.
        """
        from staffledger.storage.models import create_all_tables

        engine = self._get_engine()
        try:
            create_all_tables(engine)
        except SQLAlchemyError as e:
            raise StorageError(f"Could not create schema: {e}") from e

        self._initialized = True
        logger.info("Employee store initialized at %s", engine.url)

    async def close(self) -> None:
        """Dispose of the engine and its pooled connections."""
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None
        self._initialized = False

    # =========================================================================
    # Record Operations
    # =========================================================================

    async def find_all(self) -> list[Employee]:
        """Return every employee ordered by id."""
        from sqlalchemy import select

        from staffledger.storage.models import EmployeeModel

        with self.session() as session:
            rows = session.scalars(select(EmployeeModel).order_by(EmployeeModel.id))
            return [row.to_employee() for row in rows]

    async def find_by_id(self, employee_id: int) -> Employee | None:
        """Return the employee with ``employee_id``, or None."""
        from staffledger.storage.models import EmployeeModel

        with self.session() as session:
            row = session.get(EmployeeModel, employee_id)
            return row.to_employee() if row is not None else None

    async def save(self, employee: Employee) -> Employee:
        """Insert or update one employee."""
        with self.session() as session:
            return self._upsert(session, employee)

    async def save_all(self, employees: Sequence[Employee]) -> list[Employee]:
        """Save several employees in one transaction."""
        with self.session() as session:
            saved = [self._upsert(session, e) for e in employees]
        logger.debug("Saved %d employees", len(saved))
        return saved

    # =========================================================================
    # Helpers
    # =========================================================================

    @staticmethod
    def _upsert(session: "Session", employee: Employee) -> Employee:
        from staffledger.storage.models import EmployeeModel

        row = session.get(EmployeeModel, employee.id) if employee.id is not None else None
        if row is None:
            row = EmployeeModel.from_employee(employee)
            session.add(row)
        else:
            row.update_from(employee)
        session.flush()
        return row.to_employee()
