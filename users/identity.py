"""
Identity resolution: external subject -> internal user id.

Pure lookups against the profile table with no caching layer.  A missing
user is always surfaced as ``UserNotFound`` (HTTP 404) so callers never
proceed with a half-resolved identity.
"""
from __future__ import annotations

from typing import Iterable

from django.contrib.auth import get_user_model
from rest_framework.exceptions import NotFound

from .models import UserProfile

User = get_user_model()


class UserNotFound(NotFound):
    default_detail = "User not found"
    default_code = "user_not_found"


def resolve_subject(subject: str) -> int:
    """Return the internal user id for ``subject``."""
    subject = (subject or "").strip()
    if not subject:
        raise UserNotFound()
    user_id = (
        UserProfile.objects.filter(firebase_uid=subject)
        .values_list("user_id", flat=True)
        .first()
    )
    if user_id is None:
        raise UserNotFound()
    return user_id


def resolve_subjects(subjects: Iterable[str]) -> dict[str, int]:
    """Resolve several subjects at once; all of them must exist."""
    wanted = {(s or "").strip() for s in subjects}
    wanted.discard("")
    rows = dict(
        UserProfile.objects.filter(firebase_uid__in=wanted).values_list("firebase_uid", "user_id")
    )
    if not wanted or len(rows) != len(wanted):
        raise UserNotFound("One or both users not found")
    return rows


def get_user_for_subject(subject: str):
    subject = (subject or "").strip()
    user = (
        User.objects.select_related("profile")
        .filter(profile__firebase_uid=subject, is_active=True)
        .first()
    ) if subject else None
    if user is None:
        raise UserNotFound()
    return user


def subject_for_user_id(user_id: int) -> str | None:
    return (
        UserProfile.objects.filter(user_id=user_id)
        .values_list("firebase_uid", flat=True)
        .first()
    )
