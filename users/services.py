"""
Profile sync from identity-provider claims.

The first authenticated call a client makes is ``POST /api/users/me/``,
which creates the local user row that identity resolution relies on.
Later calls refresh the claim-backed fields.
"""
from __future__ import annotations

import logging

from django.contrib.auth import get_user_model
from django.db import IntegrityError, transaction

from .models import UserProfile

logger = logging.getLogger(__name__)

User = get_user_model()

DEFAULT_NAME = "Unnamed User"


def sync_user_from_claims(claims: dict, name: str | None = None) -> tuple[UserProfile, bool]:
    """Create or update the user for a verified token.

    Returns ``(profile, created)``.  ``name`` only overwrites the stored
    name when given; email and picture always follow the token.
    """
    uid = claims["uid"]
    email = (claims.get("email") or "").lower().strip()
    picture = claims.get("picture") or None
    name = (name or "").strip()

    try:
        with transaction.atomic():
            user, user_created = User.objects.get_or_create(
                username=uid, defaults={"email": email}
            )
            profile, created = UserProfile.objects.get_or_create(
                user=user,
                defaults={
                    "firebase_uid": uid,
                    "name": name or DEFAULT_NAME,
                    "email": email,
                    "image_url": picture,
                },
            )
    except IntegrityError:
        # concurrent first sync for the same subject
        profile = UserProfile.objects.select_related("user").get(firebase_uid=uid)
        created = False

    if created:
        logger.info("Created user %s for subject %s", profile.user_id, uid)
        return profile, True

    changed = []
    if name and profile.name != name:
        profile.name = name
        changed.append("name")
    if email and profile.email != email:
        profile.email = email
        changed.append("email")
    if picture and profile.image_url != picture:
        profile.image_url = picture
        changed.append("image_url")
    if changed:
        profile.save(update_fields=changed)
    if email and profile.user.email != email:
        profile.user.email = email
        profile.user.save(update_fields=["email"])
    return profile, False
