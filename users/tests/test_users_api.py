"""Profile sync, self-service edits and public profile lookups."""
import pytest
from django.core.cache import cache
from rest_framework.test import APIClient

from users.models import UserProfile
from users.throttling import SubjectRateThrottle


def _client(token):
    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {token}")
    return client


@pytest.mark.django_db
def test_me_requires_a_token(client):
    assert client.get("/api/users/me/").status_code == 401
    assert _client("forged").get("/api/users/me/").status_code == 401


@pytest.mark.django_db
def test_me_is_404_until_synced():
    resp = _client("valid:dave").get("/api/users/me/")
    assert resp.status_code == 404
    assert resp.json()["detail"] == "User not found"


@pytest.mark.django_db
def test_sync_creates_then_updates_profile():
    api = _client("valid:dave:Dave@Example.com")

    created = api.post("/api/users/me/", {"name": "Dave"}, format="json")
    assert created.status_code == 201
    assert created.json()["uid"] == "dave"
    assert created.json()["name"] == "Dave"
    assert created.json()["email"] == "dave@example.com"

    again = api.post("/api/users/me/", {}, format="json")
    assert again.status_code == 200
    assert again.json()["name"] == "Dave"
    assert again.json()["id"] == created.json()["id"]
    assert UserProfile.objects.filter(firebase_uid="dave").count() == 1

    renamed = api.post("/api/users/me/", {"name": "David"}, format="json")
    assert renamed.json()["name"] == "David"


@pytest.mark.django_db
def test_sync_without_name_uses_placeholder():
    resp = _client("valid:erin").post("/api/users/me/", {}, format="json")
    assert resp.status_code == 201
    assert resp.json()["name"] == "Unnamed User"


@pytest.mark.django_db
def test_synced_user_can_use_messaging():
    _client("valid:dave").post("/api/users/me/", {"name": "Dave"}, format="json")
    assert _client("valid:dave").get("/api/messaging/conversations/").json() == []


@pytest.mark.django_db
def test_update_own_profile(alice, client_for):
    api = client_for("alice")

    resp = api.put("/api/users/me/", {"bio": "Logo designer", "name": " Alice "}, format="json")
    assert resp.status_code == 200
    assert resp.json()["bio"] == "Logo designer"
    assert resp.json()["name"] == "Alice"

    assert api.put("/api/users/me/", {"name": "  "}, format="json").status_code == 400
    # uid and email are not writable
    api.put("/api/users/me/", {"uid": "mallory", "email": "x@example.com"}, format="json")
    profile = UserProfile.objects.get(user=alice)
    assert profile.firebase_uid == "alice"
    assert profile.email == "alice@example.com"


@pytest.mark.django_db
def test_public_profile(alice, client):
    resp = client.get("/api/users/public/alice/")
    assert resp.status_code == 200
    body = resp.json()
    assert body["uid"] == "alice"
    assert body["name"] == "Alice A"
    assert body["image_url"] == "https://img.example.com/alice.png"
    assert "email" not in body

    assert client.get("/api/users/public/nobody/").status_code == 404


@pytest.fixture
def two_per_minute(monkeypatch):
    monkeypatch.setattr(SubjectRateThrottle, "rate", "2/min", raising=False)
    cache.clear()
    yield
    cache.clear()


@pytest.mark.django_db
def test_new_subjects_are_throttled_separately(two_per_minute):
    codes = [
        _client(f"valid:{uid}").post("/api/users/me/", {}, format="json").status_code
        for uid in ("dave", "erin", "frank")
    ]
    assert codes == [201, 201, 201]

    dave = _client("valid:dave")
    assert dave.post("/api/users/me/", {}, format="json").status_code == 200
    assert dave.post("/api/users/me/", {}, format="json").status_code == 429
    assert _client("valid:erin").get("/api/users/me/").status_code == 200


@pytest.mark.django_db
def test_skills_are_editable_and_public(alice, client_for, client):
    resp = client_for("alice").put(
        "/api/users/me/", {"skills": "logo design, branding", "role": "admin"}, format="json"
    )
    assert resp.status_code == 200
    assert resp.json()["skills"] == "logo design, branding"
    assert resp.json()["role"] == "user"

    public = client.get("/api/users/public/alice/").json()
    assert public["skills"] == "logo design, branding"
    assert "role" not in public
