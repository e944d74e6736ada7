# src/xchange/shared/debounce.py
"""
Debouncer - Trailing-Edge Timer on the Event Loop

Each trigger() cancels the previously armed timer and arms a new one, so
only the last call of a burst runs the callback once the quiet period has
elapsed.

Files that USE this module:
- xchange.application.conversion_engine (500 ms recompute window)

Files that this module USES:
- None (pure utility implementation)
"""
import asyncio
import logging
from typing import Callable, Optional

log = logging.getLogger(__name__)


class Debouncer:
    """Cancellable trailing-edge timer bound to an asyncio loop."""

    def __init__(self, delay: float, callback: Callable[[], object],
                 loop: Optional[asyncio.AbstractEventLoop] = None):
        """
        Args:
            delay: Quiet period in seconds
            callback: Zero-argument callable run when the timer fires
            loop: Event loop to schedule on; when omitted, the loop passed to
                bind() or else the running loop at trigger time
        """
        self.delay = delay
        self._callback = callback
        self._loop = loop
        self._handle: Optional[asyncio.TimerHandle] = None
        self.generation = 0

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def bind(self, loop: asyncio.AbstractEventLoop) -> None:
        """Schedule on loop from now on, so trigger() also works outside a running loop."""
        self._loop = loop

    def trigger(self) -> None:
        """
        Arm the timer, replacing any armed one.

        Must be called on the thread that runs the loop.

        Raises:
            RuntimeError: If no loop is bound and none is running
        """
        loop = self._loop or asyncio.get_running_loop()
        self.cancel()
        self.generation += 1
        self._handle = loop.call_later(self.delay, self._fire, self.generation)

    def cancel(self) -> None:
        """Disarm the timer without running the callback."""
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def flush(self) -> None:
        """Run a pending callback immediately."""
        if self._handle is not None:
            self.cancel()
            self._callback()

    def _fire(self, generation: int) -> None:
        if generation != self.generation:
            # superseded by a later trigger
            return
        self._handle = None
        log.debug("Debounce window elapsed (generation=%d)", generation)
        self._callback()
