"""
Tests for the delivery dispatcher.

Pushes go to the recipient's registered channel when present, are
skipped when the recipient is offline, and never raise when the
channel layer fails.
"""
import pytest

from messaging import services
from messaging.delivery import PUSH_EVENT, DeliveryDispatcher, build_message_envelope
from messaging.presence import PresenceRegistry

from tests.helpers import RecordingChannelLayer


def test_notify_offline_recipient_is_a_noop():
    layer = RecordingChannelLayer()
    dispatcher = DeliveryDispatcher(PresenceRegistry(), layer)

    assert dispatcher.notify("bob", {"type": "new_message"}) is False
    assert layer.sent == []


def test_notify_pushes_to_registered_channel():
    registry = PresenceRegistry()
    registry.register("bob", "chan-bob")
    layer = RecordingChannelLayer()
    dispatcher = DeliveryDispatcher(registry, layer)

    envelope = {"type": "new_message", "message": {"id": 1, "content": "hi"}}
    assert dispatcher.notify("bob", envelope) is True
    assert layer.sent == [("chan-bob", {"type": PUSH_EVENT, "payload": envelope})]


def test_notify_targets_latest_connection_only():
    registry = PresenceRegistry()
    registry.register("bob", "chan-old")
    registry.register("bob", "chan-new")
    layer = RecordingChannelLayer()

    DeliveryDispatcher(registry, layer).notify("bob", {"n": 1})

    assert [channel for channel, _ in layer.sent] == ["chan-new"]


def test_notify_swallows_channel_layer_failures():
    registry = PresenceRegistry()
    registry.register("bob", "chan-bob")
    dispatcher = DeliveryDispatcher(registry, RecordingChannelLayer(fail=True))

    assert dispatcher.notify("bob", {"type": "new_message"}) is False


@pytest.mark.asyncio
async def test_anotify_pushes_from_async_code():
    registry = PresenceRegistry()
    registry.register("bob", "chan-bob")
    layer = RecordingChannelLayer()

    delivered = await DeliveryDispatcher(registry, layer).anotify("bob", {"x": 1})

    assert delivered is True
    assert layer.sent[0][1]["payload"] == {"x": 1}


@pytest.mark.django_db
def test_message_envelope_shape(alice, bob):
    conv, _ = services.find_or_create_conversation(alice.id, bob.id)
    msg = services.append_message(conv.id, alice.id, "hello")

    envelope = build_message_envelope(msg)

    assert envelope["type"] == "new_message"
    body = envelope["message"]
    assert body["id"] == msg.id
    assert body["conversation_id"] == conv.id
    assert body["content"] == "hello"
    assert body["sender"] == {
        "id": alice.id,
        "uid": "alice",
        "name": "Alice A",
        "image_url": "https://img.example.com/alice.png",
    }
