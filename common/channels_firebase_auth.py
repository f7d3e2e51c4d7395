"""
Firebase credential middleware for Django Channels.

This middleware extracts the bearer credential either from the WebSocket's
`Authorization: Bearer <token>` header or from a `token` query parameter,
verifies it with the configured identity-provider verifier, and populates
the scope:

- ``scope["subject"]``: the verified external subject, or ``None``
- ``scope["firebase_claims"]``: the verified claims, or ``{}``
- ``scope["user"]``: the matching Django user, or ``AnonymousUser``

Verification is bounded by ``REALTIME_HANDSHAKE_TIMEOUT`` seconds; a
handshake that does not complete in time is treated as unauthenticated.
Consumers decide whether to refuse the connection.
"""

import asyncio
import logging
import urllib.parse
from typing import Callable

from channels.auth import AuthMiddlewareStack
from channels.db import database_sync_to_async
from channels.middleware import BaseMiddleware
from django.conf import settings
from django.contrib.auth.models import AnonymousUser
from django.db import close_old_connections

from users.firebase_auth import InvalidCredential, verify_credential
from users.identity import UserNotFound, get_user_for_subject

logger = logging.getLogger(__name__)


@database_sync_to_async
def authenticate_token(token):
    """Verify ``token`` and resolve its user (sync work wrapped for async use)."""
    claims = verify_credential(token)
    try:
        user = get_user_for_subject(claims["uid"])
    except UserNotFound:
        user = AnonymousUser()
    return claims, user


def token_from_scope(scope) -> str:
    headers = dict(scope.get("headers", []))
    auth_header = headers.get(b"authorization", b"").decode()
    if auth_header.lower().startswith("bearer "):
        token = auth_header.split(" ", 1)[1].strip()
        if token:
            return token

    qs = scope.get("query_string", b"").decode()
    params = urllib.parse.parse_qs(qs)
    return (params.get("token") or [""])[0]


class _FirebaseMiddleware(BaseMiddleware):
    """Low-level middleware to verify credentials in a WebSocket scope."""

    async def __call__(self, scope, receive, send):
        scope = dict(scope)
        scope["subject"] = None
        scope["firebase_claims"] = {}
        scope["user"] = AnonymousUser()

        token = token_from_scope(scope)
        if token:
            timeout = getattr(settings, "REALTIME_HANDSHAKE_TIMEOUT", 10)
            try:
                claims, user = await asyncio.wait_for(authenticate_token(token), timeout)
            except InvalidCredential as e:
                logger.info("WS handshake rejected: %s", e)
            except asyncio.TimeoutError:
                logger.warning("WS handshake timed out after %ss", timeout)
            else:
                scope["subject"] = claims["uid"]
                scope["firebase_claims"] = claims
                scope["user"] = user

        # Close old database connections to prevent leaks
        await database_sync_to_async(close_old_connections)()
        return await super().__call__(scope, receive, send)


def FirebaseAuthMiddlewareStack(inner: Callable):
    """Entry point for the middleware stack used by Channels routing."""
    return _FirebaseMiddleware(AuthMiddlewareStack(inner))
