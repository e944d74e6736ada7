# src/xchange/adapters/persistence/base.py
"""
Persistence Port - Durable Key-Value Storage

The core only depends on this interface: `load(key)` returns the stored
JSON value or None, `save(key, value)` replaces it. Any medium (files, an
embedded database, a remote store) can implement it.

Files that USE this module:
- xchange.adapters.persistence.file_store (JsonFileStore)
- xchange.adapters.persistence.memory_store (MemoryStore)
- xchange.application.conversion_engine (history)
- xchange.application.favorites (favorite pairs)

Files that this module USES:
- None (pure interface definition)
"""
from abc import ABC, abstractmethod
from typing import Any, Optional

FAVORITES_KEY = "favoriteConversions"
HISTORY_KEY = "conversionHistory"


class PersistenceStore(ABC):
    @abstractmethod
    def load(self, key: str) -> Optional[Any]:
        """Return the JSON value stored under key, or None if absent or unreadable."""
        raise NotImplementedError

    @abstractmethod
    def save(self, key: str, value: Any) -> None:
        """
        Durably replace the value stored under key.

        Raises:
            PersistenceError: If the value cannot be written
        """
        raise NotImplementedError
