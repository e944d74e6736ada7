# src/xchange/application/network_monitor.py
"""
Network Status Monitor - Online/Offline Tracking

This module tracks network reachability as a single boolean. Hosts with
native connectivity events push them through set_online(); hosts without
them can start() a background probe loop. The initial value is sampled
once at startup.

The status is advisory: it never blocks or cancels fetches or conversions,
since conversions only need the cached rates.

Files that USE this module:
- xchange.application.controller (offline flag, reconnect handling)
- xchange.app (composition root)

Files that this module USES:
- xchange.shared.events (transition signal)
- requests (HEAD probe)
"""
from __future__ import annotations

import asyncio
import logging
from typing import AsyncIterator, Callable, Optional

import requests

from xchange.shared.events import Signal, Unsubscribe

logger = logging.getLogger(__name__)

ONLINE = "online"
OFFLINE = "offline"


class NetworkStatusMonitor:
    """Process-wide offline flag with transition notifications."""

    def __init__(self, probe_url: Optional[str] = None, timeout: float = 5.0,
                 online: bool = True):
        """
        Args:
            probe_url: URL probed by sample() and the background loop
            timeout: Probe timeout in seconds
            online: Value assumed until the first sample
        """
        self.probe_url = probe_url
        self.timeout = timeout
        self._online = online
        self._task: Optional[asyncio.Task] = None
        self._transitions = Signal("network.transitions")

    @property
    def is_online(self) -> bool:
        return self._online

    @property
    def is_offline(self) -> bool:
        return not self._online

    def subscribe(self, callback: Callable[[bool], object]) -> Unsubscribe:
        """
        Register for transitions; the callback receives True when coming
        online and False when going offline.
        """
        return self._transitions.subscribe(callback)

    def set_online(self, online: bool) -> None:
        """
        Record a connectivity notification; emits only on change.
        """
        online = bool(online)
        if online == self._online:
            return
        self._online = online
        logger.info("Network status changed: %s", ONLINE if online else OFFLINE)
        self._transitions.emit(online)

    def probe(self) -> bool:
        """
        Check reachability with a HEAD request to probe_url.

        Any HTTP response counts as reachable; only transport errors count
        as offline. Without a probe_url the current value is returned.
        """
        if not self.probe_url:
            return self._online
        try:
            requests.head(self.probe_url, timeout=self.timeout, allow_redirects=True)
            return True
        except requests.exceptions.RequestException as e:
            logger.debug("Connectivity probe to %s failed: %s", self.probe_url, e)
            return False

    async def sample(self) -> bool:
        """
        Take a connectivity snapshot and adopt it as the current value.

        Returns:
            True if online
        """
        loop = asyncio.get_running_loop()
        online = await loop.run_in_executor(None, self.probe)
        self.set_online(online)
        return online

    async def _watch(self, interval: float) -> None:
        while True:
            await asyncio.sleep(interval)
            await self.sample()

    def start(self, interval: float = 30.0) -> None:
        """Start the background probe loop (no-op if already running)."""
        if self._task is not None and not self._task.done():
            return
        logger.info("Starting connectivity probe every %ss against %s", interval, self.probe_url)
        self._task = asyncio.get_running_loop().create_task(self._watch(interval))

    async def stop(self) -> None:
        """Stop the background probe loop."""
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass

    async def transitions(self) -> AsyncIterator[bool]:
        """
        Stream of online values: the current one first, then every
        transition. Each call starts a new independent stream.
        """
        queue: asyncio.Queue[bool] = asyncio.Queue()
        unsubscribe = self.subscribe(queue.put_nowait)
        try:
            yield self._online
            while True:
                yield await queue.get()
        finally:
            unsubscribe()
