"""
Test settings.

SQLite and the in-memory channel layer keep the suite self-contained; the
credential verifier is swapped for a deterministic double.
"""
from .base import *  # noqa

DEBUG = False
ALLOWED_HOSTS = ["*"]

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": BASE_DIR / "test.sqlite3",  # noqa: F405
    }
}

CHANNEL_LAYERS = {
    "default": {"BACKEND": "channels.layers.InMemoryChannelLayer"},
}

FIREBASE_PROJECT_ID = "marketplace-test"
FIREBASE_TOKEN_VERIFIER = "tests.helpers.fake_verify_id_token"
REALTIME_HANDSHAKE_TIMEOUT = 2.0

REST_FRAMEWORK = {
    **REST_FRAMEWORK,  # noqa: F405
    "DEFAULT_THROTTLE_CLASSES": [],
}

PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]
