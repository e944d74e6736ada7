# src/xchange/application/favorites.py
"""
Favorites Manager - Ordered Set of Favorite Currency Pairs

Pairs are order-sensitive (USD/EUR is not EUR/USD) and kept in insertion
order for the quick-select chips. The full list is persisted after every
mutation under the `favoriteConversions` key as "FROM/TO" strings.

Files that USE this module:
- xchange.application.controller (toggle_favorite, select_favorite)
- xchange.app (composition root)

Files that this module USES:
- xchange.adapters.persistence.base (PersistenceStore, FAVORITES_KEY)
- xchange.domain.models (FavoritePair)
"""
from __future__ import annotations

import logging
from typing import List

from xchange.adapters.persistence.base import FAVORITES_KEY, PersistenceStore
from xchange.domain.errors import PersistenceError
from xchange.domain.models import FavoritePair
from xchange.shared.events import Signal

logger = logging.getLogger(__name__)


class FavoritesManager:
    """Single writer of the favorites list."""

    def __init__(self, store: PersistenceStore):
        self.store = store
        self._pairs: List[FavoritePair] = []
        self.changed = Signal("favorites.changed")

    def __len__(self) -> int:
        return len(self._pairs)

    def list(self) -> List[FavoritePair]:
        """Favorites in insertion order."""
        return list(self._pairs)

    def is_favorite(self, from_code: str, to_code: str) -> bool:
        return FavoritePair(from_code, to_code) in self._pairs

    def toggle(self, from_code: str, to_code: str) -> bool:
        """
        Add the pair if absent, remove it if present, then persist.

        Returns:
            True if the pair is a favorite after the call
        """
        pair = FavoritePair(from_code, to_code)
        if pair in self._pairs:
            self._pairs.remove(pair)
            added = False
        else:
            self._pairs.append(pair)
            added = True

        logger.info("Favorite %s %s", pair.key, "added" if added else "removed")
        self._persist()
        self.changed.emit(self.list())
        return added

    def _persist(self) -> None:
        try:
            self.store.save(FAVORITES_KEY, [p.key for p in self._pairs])
        except PersistenceError as e:
            logger.error("Failed to persist favorites: %s", e)

    def load(self) -> List[FavoritePair]:
        """
        Restore persisted favorites, dropping malformed keys and duplicates.

        Returns:
            The loaded favorites
        """
        data = self.store.load(FAVORITES_KEY)
        if data is None:
            logger.info("No persisted favorites found")
            return self.list()
        if not isinstance(data, list):
            logger.warning("Persisted favorites have unexpected type %s, ignoring", type(data).__name__)
            return self.list()

        pairs: List[FavoritePair] = []
        for key in data:
            try:
                pair = FavoritePair.from_key(key)
            except ValueError as e:
                logger.warning("Skipping malformed favorite: %s", e)
                continue
            if pair not in pairs:
                pairs.append(pair)

        self._pairs = pairs
        logger.info("Loaded %d favorite pairs", len(self._pairs))
        self.changed.emit(self.list())
        return self.list()
