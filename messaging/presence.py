"""
Presence registry: which subjects currently have a live websocket.

The registry maps an external subject to the Channels channel name of
its connection.  It is process-local and never persisted.  One slot per
subject: a newer connection replaces the older one, and only the newest
receives pushes.

The registry is shared between the event loop (gateway consumers) and
the worker threads that run sync DRF views (delivery after a REST send),
so every access takes the lock.
"""
from __future__ import annotations

import logging
import threading
from typing import Optional

logger = logging.getLogger(__name__)


class PresenceRegistry:
    def __init__(self):
        self._lock = threading.Lock()
        self._connections: dict[str, str] = {}

    def register(self, subject: str, channel_name: str) -> Optional[str]:
        """Point ``subject`` at ``channel_name``; returns the replaced handle, if any."""
        with self._lock:
            previous = self._connections.get(subject)
            self._connections[subject] = channel_name
        if previous and previous != channel_name:
            logger.info("Presence for %s moved from %s to %s", subject, previous, channel_name)
        return previous

    def unregister(self, subject: str, channel_name: Optional[str] = None) -> bool:
        """Drop the entry for ``subject``.

        With ``channel_name``, the entry is only dropped while it still
        points at that connection, so a superseded session closing late
        does not evict its replacement.  Returns True if an entry was removed.
        """
        with self._lock:
            current = self._connections.get(subject)
            if current is None:
                return False
            if channel_name is not None and current != channel_name:
                return False
            del self._connections[subject]
            return True

    def lookup(self, subject: str) -> Optional[str]:
        if not subject:
            return None
        with self._lock:
            return self._connections.get(subject)

    def clear(self) -> None:
        with self._lock:
            self._connections.clear()

    def __contains__(self, subject) -> bool:
        return self.lookup(subject) is not None

    def __len__(self) -> int:
        with self._lock:
            return len(self._connections)


_registry = PresenceRegistry()


def get_presence_registry() -> PresenceRegistry:
    return _registry
