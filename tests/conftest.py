"""
Common test fixtures.

Provides a factory for synced users (auth.User + UserProfile), a few
named users, authenticated DRF clients, and a clean presence registry
for every test.
"""
import pytest
from django.contrib.auth.models import User
from rest_framework.test import APIClient

from messaging.presence import get_presence_registry
from users.models import UserProfile

from .helpers import bearer


@pytest.fixture(autouse=True)
def presence():
    """The process-wide presence registry, emptied around each test."""
    registry = get_presence_registry()
    registry.clear()
    yield registry
    registry.clear()


@pytest.fixture
def make_user(db):
    def _make(uid: str, name: str = "", image_url: str | None = None) -> User:
        user = User.objects.create_user(username=uid, email=f"{uid}@example.com")
        UserProfile.objects.create(
            user=user,
            firebase_uid=uid,
            name=name or uid.title(),
            email=f"{uid}@example.com",
            image_url=image_url,
        )
        return user
    return _make


@pytest.fixture
def alice(make_user):
    return make_user("alice", "Alice A", "https://img.example.com/alice.png")


@pytest.fixture
def bob(make_user):
    return make_user("bob", "Bob B")


@pytest.fixture
def carol(make_user):
    return make_user("carol", "Carol C")


@pytest.fixture
def client_for():
    """Build an APIClient authenticated as the given external subject."""
    def _client(uid: str) -> APIClient:
        client = APIClient()
        client.credentials(HTTP_AUTHORIZATION=bearer(uid))
        return client
    return _client
