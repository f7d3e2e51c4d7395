"""Subject resolution against synced profiles."""
import pytest

from users.identity import (
    UserNotFound,
    get_user_for_subject,
    resolve_subject,
    resolve_subjects,
    subject_for_user_id,
)


@pytest.mark.django_db
def test_resolve_subject(alice):
    assert resolve_subject("alice") == alice.id
    assert resolve_subject("  alice ") == alice.id


@pytest.mark.django_db
@pytest.mark.parametrize("subject", ["", None, "nobody"])
def test_resolve_unknown_subject(subject):
    with pytest.raises(UserNotFound):
        resolve_subject(subject)


@pytest.mark.django_db
def test_resolve_subjects_requires_all(alice, bob):
    assert resolve_subjects(["alice", "bob"]) == {"alice": alice.id, "bob": bob.id}

    with pytest.raises(UserNotFound) as exc:
        resolve_subjects(["alice", "nobody"])
    assert str(exc.value.detail) == "One or both users not found"


@pytest.mark.django_db
def test_get_user_for_subject_skips_inactive(alice):
    assert get_user_for_subject("alice") == alice

    alice.is_active = False
    alice.save(update_fields=["is_active"])
    with pytest.raises(UserNotFound):
        get_user_for_subject("alice")


@pytest.mark.django_db
def test_subject_for_user_id(alice):
    assert subject_for_user_id(alice.id) == "alice"
    assert subject_for_user_id(alice.id + 1000) is None
