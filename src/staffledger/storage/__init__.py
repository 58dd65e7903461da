"""Employee store implementations.

Quick Start:
    from staffledger.storage import create_store

    store = create_store("sqlite:///staff.db")  # SQLite
    store = create_store("memory://")           # In-memory

    await store.initialize()  # Creates schema where needed
"""

from staffledger.storage.factory import create_store, detect_store_type
from staffledger.storage.memory import MemoryStore
from staffledger.storage.sqlalchemy_storage import SQLAlchemyStore

__all__ = [
    "MemoryStore",
    "SQLAlchemyStore",
    "create_store",
    "detect_store_type",
]
