# tests/test_favorites.py
"""
Favorites Tests - Unit Tests for FavoritesManager

Files that USE this module:
- pytest (test runner executes these tests)

Files that this module USES:
- xchange.application.favorites (FavoritesManager)
- xchange.adapters.persistence.memory_store (MemoryStore)
"""
from unittest.mock import Mock

from xchange.adapters.persistence.base import FAVORITES_KEY
from xchange.application.favorites import FavoritesManager
from xchange.domain.errors import PersistenceError
from xchange.domain.models import FavoritePair


def test_toggle_adds_then_removes(favorites, store):
    assert favorites.toggle("USD", "EUR") is True
    assert favorites.is_favorite("USD", "EUR")
    assert store.load(FAVORITES_KEY) == ["USD/EUR"]

    assert favorites.toggle("USD", "EUR") is False
    assert not favorites.is_favorite("USD", "EUR")
    assert store.load(FAVORITES_KEY) == []


def test_pairs_are_order_sensitive(favorites):
    favorites.toggle("USD", "EUR")
    assert not favorites.is_favorite("EUR", "USD")


def test_insertion_order_kept(favorites, store):
    favorites.toggle("USD", "EUR")
    favorites.toggle("GBP", "USD")
    favorites.toggle("EUR", "GBP")
    favorites.toggle("GBP", "USD")

    assert [p.key for p in favorites.list()] == ["USD/EUR", "EUR/GBP"]
    assert store.load(FAVORITES_KEY) == ["USD/EUR", "EUR/GBP"]
    assert len(favorites) == 2


def test_changed_signal(favorites):
    seen = []
    favorites.changed.subscribe(seen.append)

    favorites.toggle("USD", "EUR")

    assert seen == [[FavoritePair("USD", "EUR")]]


def test_list_is_a_copy(favorites):
    favorites.toggle("USD", "EUR")
    favorites.list().clear()
    assert len(favorites) == 1


def test_load_skips_malformed_and_duplicates(store):
    store.save(FAVORITES_KEY, ["USD/EUR", "garbage", "EUR/GBP", "USD/EUR", 42, "usd/eur"])
    manager = FavoritesManager(store)

    loaded = manager.load()

    assert [p.key for p in loaded] == ["USD/EUR", "EUR/GBP"]


def test_load_missing_or_wrong_type(store):
    manager = FavoritesManager(store)
    assert manager.load() == []

    store.save(FAVORITES_KEY, {"USD": "EUR"})
    assert manager.load() == []


def test_persistence_failure_keeps_memory_state():
    failing_store = Mock()
    failing_store.save.side_effect = PersistenceError("read-only")
    manager = FavoritesManager(failing_store)

    assert manager.toggle("USD", "EUR") is True
    assert manager.is_favorite("USD", "EUR")
