"""
Views for the messaging app.

Expose RESTful endpoints for the caller's conversations and their
messages.  Authentication is required for all endpoints.  Participant
checks live in ``messaging.services``; a conversation the caller is not
part of answers 404 exactly like one that does not exist.

After a message is stored the recipient is notified through the
delivery dispatcher; a failed push never changes the response.
"""
from __future__ import annotations

import logging

from rest_framework import permissions, status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import NotFound, ValidationError
from rest_framework.response import Response
from rest_framework.views import APIView

from common.pagination import MessageCursorPagination
from users.identity import resolve_subjects, subject_for_user_id

from . import services
from .delivery import build_message_envelope, get_dispatcher
from .models import Conversation
from .serializers import (
    ConversationSummarySerializer,
    DirectSendSerializer,
    MessageCreateSerializer,
    MessageSerializer,
    StartConversationSerializer,
    public_user,
)

logger = logging.getLogger(__name__)


def _notify_recipient(conversation: Conversation, message) -> None:
    recipient_id = conversation.other_participant_id(message.sender_id)
    recipient_subject = subject_for_user_id(recipient_id)
    if not recipient_subject:
        return
    get_dispatcher().notify(recipient_subject, build_message_envelope(message))


class ConversationViewSet(viewsets.ViewSet):
    """ViewSet for listing, starting and deleting conversations and their messages."""

    permission_classes = [permissions.IsAuthenticated]

    def list(self, request, *args, **kwargs):
        qs = services.list_conversations_for_user(request.user.id)
        serializer = ConversationSummarySerializer(qs, many=True, context={"request": request})
        return Response(serializer.data)

    def destroy(self, request, pk=None):
        if not services.delete_conversation(pk, request.user.id):
            raise NotFound(services.NOT_FOUND_DETAIL)
        return Response({"success": True, "message": "Conversation deleted"})

    @action(detail=False, methods=["post"], url_path="start")
    def start(self, request):
        """
        Start or get the conversation with another user.
        Body: {"other_uid": "<external subject>"}
        """
        ser = StartConversationSerializer(data=request.data or {})
        ser.is_valid(raise_exception=True)
        other_uid = ser.validated_data["other_uid"]

        my_uid = request.user.profile.firebase_uid
        if other_uid == my_uid:
            raise ValidationError({"other_uid": "Cannot create conversation with yourself"})

        ids = resolve_subjects([my_uid, other_uid])
        conv, created = services.find_or_create_conversation(ids[my_uid], ids[other_uid])
        other = conv.user2 if conv.user1_id == request.user.id else conv.user1

        return Response(
            {
                "conversation_id": conv.id,
                "other_user": public_user(other),
                "created_at": conv.created_at,
                "created": created,
            },
            status=status.HTTP_201_CREATED if created else status.HTTP_200_OK,
        )

    @action(detail=True, methods=["get", "post"], url_path="messages")
    def messages(self, request, pk=None):
        if request.method == "POST":
            return self._append(request, pk)

        qs = services.list_messages(pk, request.user.id)
        paginator = MessageCursorPagination()
        if paginator.is_requested(request):
            page = paginator.paginate_queryset(qs, request, view=self)
            return paginator.get_paginated_response(MessageSerializer(page, many=True).data)
        return Response(MessageSerializer(qs, many=True).data)

    def _append(self, request, pk):
        ser = MessageCreateSerializer(data=request.data or {})
        ser.is_valid(raise_exception=True)

        message = services.append_message(pk, request.user.id, ser.validated_data["content"])
        message.sender = request.user
        _notify_recipient(message.conversation, message)
        return Response(MessageSerializer(message).data, status=status.HTTP_201_CREATED)

    @action(detail=False, methods=["post"], url_path="send")
    def send(self, request):
        return DirectSendView.send_for(request)


class DirectSendView(APIView):
    """
    POST /api/messaging/conversations/send/  (also /api/chats/send/)
    Body: {"receiver_uid": "<external subject>", "content": "..."}

    Opens the conversation on first contact, stores the message and
    notifies the receiver.
    """
    permission_classes = [permissions.IsAuthenticated]

    @staticmethod
    def send_for(request):
        ser = DirectSendSerializer(data=request.data or {})
        ser.is_valid(raise_exception=True)
        message, conv = services.send_direct_message(
            request.user.id,
            ser.validated_data["receiver_uid"],
            ser.validated_data["content"],
        )
        message.sender = request.user
        _notify_recipient(conv, message)
        return Response(MessageSerializer(message).data, status=status.HTTP_201_CREATED)

    def post(self, request):
        return self.send_for(request)
