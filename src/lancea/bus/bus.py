from __future__ import annotations

import asyncio
import time
from typing import Any, Dict, Optional

from lancea.utils.logger_util import get_logger, logging

logger = get_logger(__name__, logging.INFO)


def _running_loop() -> Optional[asyncio.AbstractEventLoop]:
    try:
        return asyncio.get_running_loop()
    except RuntimeError:
        return None


class Channel:
    """Bounded queue for one client, bound to the event loop that consumes it."""

    def __init__(self, maxsize: int = 256):
        self.q: asyncio.Queue = asyncio.Queue(maxsize=maxsize)
        self.maxsize = int(maxsize)
        self.dropped = 0
        self.delivered = 0
        self.created_at = time.time()
        self.loop = _running_loop()

    @property
    def depth(self) -> int:
        return self.q.qsize()

    def _put(self, item: Any) -> bool:
        # a slow client loses signals instead of stalling the engine
        try:
            self.q.put_nowait(item)
            self.delivered += 1
            return True
        except asyncio.QueueFull:
            self.dropped += 1
            return False

    def publish_nowait(self, item: Any) -> bool:
        """Enqueue ``item`` without blocking.

        From a foreign thread the put is handed to the owning loop and
        reported as accepted; drops are still counted in ``dropped``.
        """
        if self.loop is None or _running_loop() is self.loop:
            return self._put(item)
        if self.loop.is_closed():
            self.dropped += 1
            return False
        self.loop.call_soon_threadsafe(self._put, item)
        return True


class EventBus:
    """Signal bus: every engine signal is broadcast to all connected clients.

    Each client owns one bounded channel. Clients filter by epoch; nothing
    here orders signals across calls.
    """

    def __init__(self, default_maxsize: int = 256):
        self.clients: Dict[str, Channel] = {}
        self.default_maxsize = int(default_maxsize)

    def register_client(self, client_id: str, maxsize: int | None = None) -> Channel:
        ch = self.clients.get(client_id)
        if ch is None:
            ch = Channel(maxsize=int(maxsize or self.default_maxsize))
            self.clients[client_id] = ch
        return ch

    def subscribe(self, client_id: str) -> asyncio.Queue:
        return self.register_client(client_id).q

    def unregister_client(self, client_id: str) -> None:
        self.clients.pop(client_id, None)

    def broadcast(self, item: Any) -> int:
        """Publish ``item`` to every client channel; returns how many accepted it."""
        accepted = 0
        for client_id, ch in list(self.clients.items()):
            if ch.publish_nowait(item):
                accepted += 1
            else:
                logger.warning("client %s channel full, dropped %s", client_id, item.get("signal") if isinstance(item, dict) else type(item).__name__)
        return accepted

    def metrics(self) -> Dict[str, Dict[str, int]]:
        """Per-client queue depth, drop and delivery counters."""
        return {
            name: {"queue_depth": ch.depth, "dropped": ch.dropped, "delivered": ch.delivered, "maxsize": ch.maxsize}
            for name, ch in self.clients.items()
        }
