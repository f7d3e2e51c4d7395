"""
Serializers for the users app.

`PublicProfileSerializer` is the shape other users (and the messaging
payloads) see; `MeSerializer` is the caller's own profile including the
private fields.
"""
from rest_framework import serializers

from .models import UserProfile


class PublicProfileSerializer(serializers.ModelSerializer):
    id = serializers.IntegerField(source="user_id", read_only=True)
    uid = serializers.CharField(source="firebase_uid", read_only=True)

    class Meta:
        model = UserProfile
        fields = ("id", "uid", "name", "image_url", "skills", "bio", "created_at")
        read_only_fields = fields


class MeSerializer(serializers.ModelSerializer):
    id = serializers.IntegerField(source="user_id", read_only=True)
    uid = serializers.CharField(source="firebase_uid", read_only=True)

    class Meta:
        model = UserProfile
        fields = ("id", "uid", "name", "email", "role", "image_url", "skills", "bio", "created_at")
        read_only_fields = ("id", "uid", "email", "role", "created_at")

    def validate_name(self, value):
        value = (value or "").strip()
        if not value:
            raise serializers.ValidationError("Name cannot be blank.")
        return value


class SyncMeSerializer(serializers.Serializer):
    name = serializers.CharField(required=False, allow_blank=True, max_length=255)
