# messaging/services.py
"""
Conversation store.

Every read and write on a conversation goes through these functions and
they verify that the acting user is one of the two participants.  A
missing conversation and a conversation the caller may not see are the
same outcome (``Conversation.DoesNotExist``) so non-participants learn
nothing about which ids exist.
"""
from __future__ import annotations

import logging

from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction
from django.db.models import F, OuterRef, Q, QuerySet, Subquery
from django.db.models.functions import Coalesce

from users.identity import resolve_subject

from .models import Conversation, Message

logger = logging.getLogger(__name__)

NOT_FOUND_DETAIL = "Conversation not found or you don't have access"


def _not_found() -> Conversation.DoesNotExist:
    return Conversation.DoesNotExist(NOT_FOUND_DETAIL)


def _clean_content(content) -> str:
    if not isinstance(content, str) or not content.strip():
        raise ValidationError({"content": ["Message content is required"]})
    return content.strip()


def find_or_create_conversation(user_a_id: int, user_b_id: int) -> tuple[Conversation, bool]:
    """Return the conversation for the unordered pair, creating it if needed.

    Returns ``(conversation, created)``.  Two racing callers for the same
    pair both end up with the single row guarded by the unique constraint.
    """
    if not user_a_id or not user_b_id:
        raise ValidationError("Both participants are required")
    if user_a_id == user_b_id:
        raise ValidationError("Cannot create conversation with yourself")

    low, high = sorted((user_a_id, user_b_id))
    try:
        with transaction.atomic():
            conv, created = Conversation.objects.get_or_create(user1_id=low, user2_id=high)
    except IntegrityError:
        logger.debug("Conversation for (%s, %s) created concurrently; reusing it", low, high)
        conv, created = Conversation.objects.get(user1_id=low, user2_id=high), False
    if created:
        logger.info("Created conversation %s for users (%s, %s)", conv.pk, low, high)
    return conv, created


def get_conversation_for_participant(conversation_id, user_id) -> Conversation:
    try:
        conversation_id = int(conversation_id)
    except (TypeError, ValueError):
        raise _not_found()
    conv = (
        Conversation.objects
        .filter(pk=conversation_id)
        .filter(Q(user1_id=user_id) | Q(user2_id=user_id))
        .first()
    )
    if conv is None:
        raise _not_found()
    return conv


def append_message(conversation_id, sender_id: int, content) -> Message:
    """Persist a message from ``sender_id``; content is stored trimmed."""
    body = _clean_content(content)
    conv = get_conversation_for_participant(conversation_id, sender_id)
    return Message.objects.create(conversation=conv, sender_id=sender_id, content=body)


def send_direct_message(sender_id: int, receiver_subject: str, content) -> tuple[Message, Conversation]:
    """Send to a user addressed by external subject, opening the conversation on first contact."""
    body = _clean_content(content)
    receiver_id = resolve_subject(receiver_subject)
    with transaction.atomic():
        conv, _ = find_or_create_conversation(sender_id, receiver_id)
        message = Message.objects.create(conversation=conv, sender_id=sender_id, content=body)
    return message, conv


def list_messages(conversation_id, user_id: int) -> QuerySet:
    conv = get_conversation_for_participant(conversation_id, user_id)
    return (
        Message.objects
        .filter(conversation=conv)
        .select_related("sender__profile")
        .order_by("created_at", "id")
    )


def list_conversations_for_user(user_id: int) -> QuerySet:
    """Conversations of ``user_id``, most recent activity first.

    Each row is annotated with ``last_message``, ``last_message_at`` and
    ``last_activity_at`` (last message time, else creation time).
    """
    latest = Message.objects.filter(conversation=OuterRef("pk")).order_by("-created_at", "-id")
    return (
        Conversation.objects
        .filter(Q(user1_id=user_id) | Q(user2_id=user_id))
        .select_related("user1__profile", "user2__profile")
        .annotate(
            last_message=Subquery(latest.values("content")[:1]),
            last_message_at=Subquery(latest.values("created_at")[:1]),
        )
        .annotate(last_activity_at=Coalesce(F("last_message_at"), F("created_at")))
        .order_by("-last_activity_at", "-id")
    )


def delete_conversation(conversation_id, requester_id: int) -> bool:
    """Delete a conversation the requester takes part in, with its messages."""
    try:
        conv = get_conversation_for_participant(conversation_id, requester_id)
    except Conversation.DoesNotExist:
        return False
    conv_pk = conv.pk
    conv.delete()
    logger.info("User %s deleted conversation %s", requester_id, conv_pk)
    return True
