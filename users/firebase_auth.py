"""
Firebase ID token verification.

Firebase signs ID tokens with RS256 keys published as a JWKS document.
Keys are fetched with ``requests`` and cached for an hour; the token's
issuer and audience must match the configured Firebase project.  The
verified claims always carry ``uid`` (copied from ``sub``), which is the
external subject the rest of the backend keys users by.
"""
import json
import time

import jwt
import requests
from django.conf import settings
from django.utils.module_loading import import_string
from jwt.algorithms import RSAAlgorithm


_JWKS_CACHE = {"keys": None, "fetched_at": 0}
_JWKS_TTL = 60 * 60  # 1 hour


class InvalidCredential(Exception):
    """Raised when a bearer credential is missing, malformed or rejected."""


def _issuer():
    project_id = getattr(settings, "FIREBASE_PROJECT_ID", None) or ""
    if not project_id:
        return ""
    return f"https://securetoken.google.com/{project_id}"


def _get_jwks():
    now = int(time.time())
    if _JWKS_CACHE["keys"] and (now - _JWKS_CACHE["fetched_at"] < _JWKS_TTL):
        return _JWKS_CACHE["keys"]

    url = getattr(settings, "FIREBASE_JWKS_URL", "")
    if not url:
        raise InvalidCredential("Firebase not configured (missing JWKS url)")

    try:
        resp = requests.get(url, timeout=10)
        resp.raise_for_status()
        data = resp.json()
    except (requests.RequestException, ValueError) as e:
        raise InvalidCredential(f"Could not fetch signing keys: {e}") from e

    _JWKS_CACHE["keys"] = data["keys"]
    _JWKS_CACHE["fetched_at"] = now
    return data["keys"]


def _get_public_key(kid: str):
    keys = _get_jwks()
    jwk = next((k for k in keys if k.get("kid") == kid), None)
    if not jwk:
        raise InvalidCredential("Invalid token (kid not found)")
    return RSAAlgorithm.from_jwk(json.dumps(jwk))


def verify_id_token(token: str) -> dict:
    """Verify a Firebase ID token and return its claims.

    Raises ``InvalidCredential`` on any failure.
    """
    if not token:
        raise InvalidCredential("No token")

    project_id = getattr(settings, "FIREBASE_PROJECT_ID", "") or ""
    iss = _issuer()
    if not iss:
        raise InvalidCredential("Firebase not configured (missing project id)")

    try:
        header = jwt.get_unverified_header(token)
        public_key = _get_public_key(header.get("kid"))
        claims = jwt.decode(
            token,
            public_key,
            algorithms=["RS256"],
            audience=project_id,
            issuer=iss,
            leeway=getattr(settings, "FIREBASE_TOKEN_LEEWAY", 0),
            options={"require": ["exp", "iat", "sub"]},
        )
    except jwt.PyJWTError as e:
        raise InvalidCredential(f"Invalid token: {e}") from e

    subject = (claims.get("sub") or "").strip()
    if not subject:
        raise InvalidCredential("Token missing subject")
    claims["uid"] = subject
    return claims


def get_token_verifier():
    """Return the configured verifier callable (``token -> claims``)."""
    return import_string(settings.FIREBASE_TOKEN_VERIFIER)


def verify_credential(token: str) -> dict:
    return get_token_verifier()(token)
