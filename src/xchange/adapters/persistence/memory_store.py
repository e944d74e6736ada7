# src/xchange/adapters/persistence/memory_store.py
"""
Memory Store - In-Process Implementation of the Persistence Port

Keeps JSON-encoded copies so callers can never mutate stored state through
a reference they passed in or got back.

Files that USE this module:
- tests.* (substitute store for engine, favorites and controller tests)
- xchange.app (used when no data directory should be touched)

Files that this module USES:
- xchange.adapters.persistence.base (PersistenceStore interface)
"""
from __future__ import annotations

import json
from typing import Any, Dict, Optional

from xchange.adapters.persistence.base import PersistenceStore
from xchange.domain.errors import PersistenceError


class MemoryStore(PersistenceStore):
    """Dictionary-backed store; contents vanish with the process."""

    def __init__(self, initial: Optional[Dict[str, Any]] = None):
        self._data: Dict[str, str] = {}
        for key, value in (initial or {}).items():
            self.save(key, value)

    def load(self, key: str) -> Optional[Any]:
        raw = self._data.get(key)
        if raw is None:
            return None
        return json.loads(raw)

    def save(self, key: str, value: Any) -> None:
        try:
            self._data[key] = json.dumps(value, ensure_ascii=False)
        except (TypeError, ValueError) as e:
            raise PersistenceError(f"Value for {key!r} is not JSON-serializable: {e}") from e

    def keys(self) -> list[str]:
        return list(self._data)
