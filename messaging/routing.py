"""
WebSocket routing for the messaging app.

Exposes a single URL for the chat gateway.  The Firebase credential
middleware populates the scope and the consumer itself refuses
connections without a verified subject.
"""
from django.urls import re_path

from .consumers import ChatGatewayConsumer


websocket_urlpatterns = [
    re_path(r"^ws/chat/?$", ChatGatewayConsumer.as_asgi()),
]
