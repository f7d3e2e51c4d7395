"""Unauthenticated liveness endpoints."""
import pytest


@pytest.mark.django_db
def test_index(client):
    assert client.get("/").json() == {"message": "API is running", "status": "ok"}


@pytest.mark.django_db
def test_api_root(client):
    assert client.get("/api/").json() == {"message": "Yes connected"}
