"""
DRF authentication backed by Firebase ID tokens.

Accepts: Authorization: Bearer <Firebase ID token>

``FirebaseAuthentication`` requires the token subject to be a synced
user and answers 404 "User not found" otherwise.  ``FirebaseSubjectAuthentication``
only verifies the token; it is used by the profile sync endpoint that
creates the user row in the first place.
"""
import logging

from rest_framework.authentication import BaseAuthentication, get_authorization_header
from rest_framework.exceptions import AuthenticationFailed

from .firebase_auth import InvalidCredential, verify_credential
from .identity import get_user_for_subject

logger = logging.getLogger(__name__)


class FirebaseSubject:
    """Authenticated-but-unregistered principal carrying verified claims."""

    is_authenticated = True
    is_anonymous = False
    is_active = True
    pk = None
    id = None

    def __init__(self, claims: dict):
        self.claims = claims
        self.uid = claims["uid"]

    def __str__(self) -> str:
        return f"FirebaseSubject<{self.uid}>"


def bearer_token_from_header(header: bytes | str) -> str:
    if isinstance(header, bytes):
        header = header.decode("utf-8", errors="ignore")
    if not header or not header.lower().startswith("bearer "):
        return ""
    return header.split(" ", 1)[1].strip()


class FirebaseAuthentication(BaseAuthentication):
    keyword = "Bearer"
    require_registered_user = True

    def authenticate(self, request):
        token = bearer_token_from_header(get_authorization_header(request))
        if not token:
            return None

        try:
            claims = verify_credential(token)
        except InvalidCredential as e:
            logger.info("Rejected bearer credential: %s", e)
            raise AuthenticationFailed("Invalid token")

        request.firebase_claims = claims
        if not self.require_registered_user:
            return (FirebaseSubject(claims), token)

        # UserNotFound is an APIException and surfaces as a 404
        user = get_user_for_subject(claims["uid"])
        return (user, token)

    def authenticate_header(self, request):
        return self.keyword


class FirebaseSubjectAuthentication(FirebaseAuthentication):
    require_registered_user = False
