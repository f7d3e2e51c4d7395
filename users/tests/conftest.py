"""Shared fixtures from the project-level test package."""
from tests.conftest import *  # noqa: F401,F403
