"""
Delivery dispatcher: best-effort push of persisted messages.

Called right after a message is stored.  If the recipient has a live
connection in the presence registry the envelope is handed to the
channel layer for that connection; otherwise nothing happens and the
recipient sees the message on their next listing.  Delivery never fails
the write that triggered it.
"""
from __future__ import annotations

import logging
from typing import Any, Optional

from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer

from .presence import PresenceRegistry, get_presence_registry
from .serializers import MessageSerializer

logger = logging.getLogger(__name__)

PUSH_EVENT = "receive.message"


def build_message_envelope(message) -> dict[str, Any]:
    return {"type": "new_message", "message": dict(MessageSerializer(message).data)}


class DeliveryDispatcher:
    def __init__(self, registry: Optional[PresenceRegistry] = None, channel_layer=None):
        self.registry = registry if registry is not None else get_presence_registry()
        self._channel_layer = channel_layer

    @property
    def channel_layer(self):
        if self._channel_layer is None:
            self._channel_layer = get_channel_layer()
        return self._channel_layer

    def _target(self, recipient_subject: str) -> Optional[str]:
        channel_name = self.registry.lookup(recipient_subject)
        if channel_name is None:
            logger.debug("Recipient %s offline; message left for next pull", recipient_subject)
        return channel_name

    async def anotify(self, recipient_subject: str, envelope: dict) -> bool:
        """Push ``envelope`` to ``recipient_subject`` if connected.  Never raises."""
        channel_name = self._target(recipient_subject)
        if channel_name is None:
            return False
        try:
            await self.channel_layer.send(channel_name, {"type": PUSH_EVENT, "payload": envelope})
        except Exception:
            logger.warning("Push to %s (%s) failed", recipient_subject, channel_name, exc_info=True)
            return False
        return True

    def notify(self, recipient_subject: str, envelope: dict) -> bool:
        """Sync entry point for DRF views; same contract as ``anotify``."""
        if self._target(recipient_subject) is None:
            return False
        try:
            return async_to_sync(self.anotify)(recipient_subject, envelope)
        except Exception:
            logger.warning("Push to %s failed", recipient_subject, exc_info=True)
            return False


def get_dispatcher() -> DeliveryDispatcher:
    return DeliveryDispatcher(get_presence_registry())
