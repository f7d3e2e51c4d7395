# messaging/urls.py
"""
URL configuration for the messaging app.

Defines REST endpoints for conversations and nested message resources.
These routes are included under the ``/api/messaging/`` prefix at the
project level.
"""

from django.urls import path, include
from rest_framework.routers import DefaultRouter

from .views import ConversationViewSet

app_name = "messaging"

router = DefaultRouter()
router.register(r"conversations", ConversationViewSet, basename="conversation")

urlpatterns = [
    # list on /conversations/, delete on /conversations/<id>/,
    # start/ and send/ actions, and nested /conversations/<id>/messages/
    path("", include(router.urls)),
]
