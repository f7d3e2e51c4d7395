"""
Test doubles shared by the suite.

``fake_verify_id_token`` stands in for the Firebase verifier (wired via
``FIREBASE_TOKEN_VERIFIER`` in the test settings).  Tokens look like
``valid:<uid>`` or ``valid:<uid>:<email>``; ``slow:<uid>`` takes longer
than the handshake timeout used in the gateway tests.
"""
import time

from users.firebase_auth import InvalidCredential


def fake_verify_id_token(token: str) -> dict:
    kind, _, rest = (token or "").partition(":")
    if kind == "slow":
        time.sleep(0.6)
    elif kind != "valid":
        raise InvalidCredential("Invalid token")
    uid, _, email = rest.partition(":")
    if not uid:
        raise InvalidCredential("Token missing subject")
    claims = {"uid": uid, "sub": uid}
    if email:
        claims["email"] = email
    return claims


def bearer(uid: str) -> str:
    return f"Bearer valid:{uid}"


class RecordingChannelLayer:
    """Minimal channel layer that records sends instead of delivering them."""

    def __init__(self, fail: bool = False):
        self.sent = []
        self.fail = fail

    async def send(self, channel, message):
        if self.fail:
            raise ConnectionError("channel layer unavailable")
        self.sent.append((channel, message))
