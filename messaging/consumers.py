"""
Channels consumer for the realtime chat gateway.

One consumer instance per websocket connection, moving through
Connecting -> Connected -> Disconnected:

- Connecting: ``FirebaseAuthMiddlewareStack`` has already verified the
  handshake credential.  Without a verified subject the socket is closed
  with code 4401 and never accepted.
- Connected: the subject is registered in the presence registry.
  ``send_message`` events are relayed verbatim to the receiver's live
  connection, or dropped if the receiver is offline.  This raw path does
  not persist anything and sends no acknowledgement.
- Disconnected: the subject is removed from the registry, unless a newer
  connection has taken its slot.

Message formats
---------------
>>> client -> server: {"type": "send_message", "data": {"receiverUid": "abc", "text": "hi"}}
<<< server -> receiver: {"type": "receive_message", "data": {"receiverUid": "abc", "text": "hi"}}
>>> client -> server: {"type": "ping"}
<<< server -> client: {"type": "pong"}
"""
from __future__ import annotations

import logging
from typing import Any

from channels.generic.websocket import AsyncJsonWebsocketConsumer

from .delivery import DeliveryDispatcher
from .presence import get_presence_registry

logger = logging.getLogger(__name__)

CLOSE_UNAUTHORIZED = 4401


class ChatGatewayConsumer(AsyncJsonWebsocketConsumer):
    """Presence-tracking websocket gateway for direct messages."""

    presence_registry = None

    def get_registry(self):
        if self.presence_registry is not None:
            return self.presence_registry
        return get_presence_registry()

    async def connect(self) -> None:
        self.subject = self.scope.get("subject")
        if not self.subject:
            logger.info("WS connection refused: Unauthorized")
            await self.close(code=CLOSE_UNAUTHORIZED)
            return
        await self.accept()
        self.get_registry().register(self.subject, self.channel_name)
        logger.info("User connected: %s", self.subject)

    async def disconnect(self, code: int) -> None:
        subject = getattr(self, "subject", None)
        if not subject:
            return
        self.get_registry().unregister(subject, self.channel_name)
        logger.info("User disconnected: %s (code=%s)", subject, code)

    async def receive(self, text_data=None, bytes_data=None, **kwargs):
        if not text_data:
            logger.debug("Ignoring frame without text from %s", self.subject)
            return
        await super().receive(text_data=text_data, bytes_data=bytes_data, **kwargs)

    @classmethod
    async def decode_json(cls, text_data):
        try:
            return await super().decode_json(text_data)
        except ValueError:
            return None

    async def receive_json(self, content: Any, **kwargs: Any) -> None:
        if not isinstance(content, dict):
            logger.debug("Ignoring non-object frame from %s", self.subject)
            return
        event_type = content.get("type")
        if event_type == "send_message":
            await self._relay(content.get("data"))
        elif event_type == "ping":
            await self.send_json({"type": "pong"})
        else:
            logger.debug("Ignoring unknown event %r from %s", event_type, self.subject)

    async def _relay(self, data: Any) -> None:
        if not isinstance(data, dict) or not data.get("receiverUid"):
            logger.debug("Dropping send_message without receiverUid from %s", self.subject)
            return
        dispatcher = DeliveryDispatcher(self.get_registry(), self.channel_layer)
        delivered = await dispatcher.anotify(str(data["receiverUid"]), data)
        if not delivered:
            logger.debug("Raw message from %s to %s dropped", self.subject, data["receiverUid"])

    # ---------- channel layer events ----------
    async def receive_message(self, event: dict[str, Any]) -> None:
        await self.send_json({"type": "receive_message", "data": event["payload"]})
