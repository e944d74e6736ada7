# src/xchange/shared/events.py
"""
Signals - Explicit Publish/Subscribe Between Components

Components publish state changes through a Signal; the controller and the
presentation layer subscribe to them. Subscribers are called synchronously,
in subscription order, on the event loop thread that emits.

Files that USE this module:
- xchange.application.rate_cache (changed signal)
- xchange.application.conversion_engine (results/errors signals)
- xchange.application.network_monitor (transition signal)
- xchange.application.controller (view change signal)

Files that this module USES:
- None (pure utility implementation)
"""
import logging
from typing import Any, Callable, List

log = logging.getLogger(__name__)

Unsubscribe = Callable[[], None]


class Signal:
    """Ordered list of callbacks notified on emit."""

    def __init__(self, name: str):
        self.name = name
        self._subscribers: List[Callable[..., Any]] = []

    def subscribe(self, callback: Callable[..., Any]) -> Unsubscribe:
        """
        Register a callback.

        Returns:
            A function that removes the callback again (safe to call twice)
        """
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def emit(self, *args: Any) -> None:
        """
        Call every subscriber with the given arguments.

        A failing subscriber is logged and does not stop delivery to the rest.
        """
        for callback in list(self._subscribers):
            try:
                callback(*args)
            except Exception:
                log.exception("Subscriber %r of signal %s failed", callback, self.name)

    def __len__(self) -> int:
        return len(self._subscribers)
