"""
Profile endpoints for the users app.

Included under the ``/api/users/`` prefix at the project level.
"""
from django.urls import path

from .views import MeView, PublicProfileView

app_name = "users"

urlpatterns = [
    path("me/", MeView.as_view(), name="me"),
    path("public/<str:uid>/", PublicProfileView.as_view(), name="public-profile"),
]
