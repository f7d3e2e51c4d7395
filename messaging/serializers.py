from __future__ import annotations

from rest_framework import serializers

from .models import Conversation, Message


def public_user(user) -> dict | None:
    """Public profile fields of a user, as embedded in messaging payloads."""
    if user is None:
        return None
    prof = getattr(user, "profile", None)
    return {
        "id": user.id,
        "uid": getattr(prof, "firebase_uid", None),
        "name": getattr(prof, "name", "") or user.get_full_name() or user.username,
        "image_url": getattr(prof, "image_url", None),
    }


class ConversationSummarySerializer(serializers.ModelSerializer):
    """Row of the caller's inbox; expects ``request`` in the context and the
    annotations added by ``services.list_conversations_for_user``."""

    conversation_id = serializers.IntegerField(source="id", read_only=True)
    other_user = serializers.SerializerMethodField()
    last_message = serializers.CharField(read_only=True, allow_null=True)
    last_message_at = serializers.DateTimeField(read_only=True, allow_null=True)

    class Meta:
        model = Conversation
        fields = (
            "conversation_id",
            "created_at",
            "other_user",
            "last_message",
            "last_message_at",
        )
        read_only_fields = fields

    def get_other_user(self, obj: Conversation):
        req = self.context.get("request")
        me_id = getattr(getattr(req, "user", None), "id", None)
        other = obj.user2 if obj.user1_id == me_id else obj.user1
        return public_user(other)


class MessageSerializer(serializers.ModelSerializer):
    conversation_id = serializers.IntegerField(read_only=True)
    sender_id = serializers.IntegerField(read_only=True)
    sender = serializers.SerializerMethodField()

    class Meta:
        model = Message
        fields = ("id", "conversation_id", "sender_id", "sender", "content", "created_at")
        read_only_fields = fields

    def get_sender(self, obj: Message):
        return public_user(obj.sender)


class StartConversationSerializer(serializers.Serializer):
    other_uid = serializers.CharField(max_length=128, trim_whitespace=True)


class MessageCreateSerializer(serializers.Serializer):
    # blank content is rejected by the store with a 400
    content = serializers.CharField(allow_blank=True, trim_whitespace=False)


class DirectSendSerializer(MessageCreateSerializer):
    receiver_uid = serializers.CharField(max_length=128, trim_whitespace=True)
