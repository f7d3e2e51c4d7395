# messaging/models.py
from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models


class Conversation(models.Model):
    """A direct conversation between two users.

    The pair is unordered: it is stored canonically with the smaller user
    id in ``user1`` so (A, B) and (B, A) land on the same row, and the
    database refuses a second row for the same pair.
    """

    user1 = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE,
        related_name="conversations_as_user1",
    )
    user2 = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE,
        related_name="conversations_as_user2",
    )
    created_at = models.DateTimeField(auto_now_add=True)

    # ---------- validation ----------
    def clean(self):
        super().clean()
        if self.user1_id and self.user1_id == self.user2_id:
            raise ValidationError("A conversation requires two distinct participants.")

    def save(self, *args, **kwargs):
        # keep pairs canonical (smaller id in user1)
        if self.user1_id and self.user2_id and self.user1_id > self.user2_id:
            self.user1_id, self.user2_id = self.user2_id, self.user1_id
        super().save(*args, **kwargs)

    def other_participant_id(self, user_id):
        return self.user2_id if self.user1_id == user_id else self.user1_id

    def __str__(self):
        return f"Conversation({self.user1_id}, {self.user2_id})"

    class Meta:
        constraints = [
            # One unique conversation per (user1, user2)
            models.UniqueConstraint(
                fields=["user1", "user2"], name="uniq_conversation_per_user_pair",
            ),
            models.CheckConstraint(
                name="conversation_distinct_participants",
                condition=~models.Q(user1=models.F("user2")),
            ),
        ]
        indexes = [
            models.Index(fields=["user2"], name="messaging_conv_user2_idx"),
        ]


class Message(models.Model):
    """An immutable message; history order is (created_at, id)."""

    conversation = models.ForeignKey(Conversation, on_delete=models.CASCADE, related_name="messages")
    sender = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="sent_messages")
    content = models.TextField()
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    def __str__(self):
        return f"Message({self.pk}) in {self.conversation_id} from {self.sender_id}"

    class Meta:
        ordering = ["created_at", "id"]
        indexes = [
            models.Index(fields=["conversation", "created_at", "id"], name="messaging_msg_conv_created_idx"),
        ]
