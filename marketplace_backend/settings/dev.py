"""
Development settings for the freelance marketplace backend.

Extends the base settings by enabling debugging and allowing all hosts.  Do
not use these settings in production.
"""
from .base import *  # noqa

# Development toggles
DEBUG = True
ALLOWED_HOSTS = ["*", "127.0.0.1", "localhost"]
CORS_ALLOW_ALL_ORIGINS = True

LOGGING["loggers"]["channels"]["level"] = "DEBUG"  # noqa: F405
LOGGING["loggers"]["messaging"]["level"] = "DEBUG"  # noqa: F405
