# src/xchange/adapters/persistence/__init__.py
"""
Persistence Adapters - Data Storage

This package contains adapters for persisting favorites and history:
- File-based storage (JSON, one file per key)
- In-memory storage
"""

from xchange.adapters.persistence.base import FAVORITES_KEY, HISTORY_KEY, PersistenceStore
from xchange.adapters.persistence.file_store import JsonFileStore
from xchange.adapters.persistence.memory_store import MemoryStore

__all__ = [
    "PersistenceStore",
    "JsonFileStore",
    "MemoryStore",
    "FAVORITES_KEY",
    "HISTORY_KEY",
]
