"""
URL configuration for the freelance marketplace backend.
Messaging endpoints live under `/api/messaging/` and profile sync under
`/api/users/`.  The legacy `/api/chats/send/` path is kept for older
clients and served by the unified conversation model.
"""

from django.contrib import admin
from django.urls import include, path
from drf_spectacular.views import (
    SpectacularAPIView, SpectacularSwaggerView, SpectacularRedocView
)

from marketplace_backend.views import index, api_root
from messaging.views import DirectSendView


urlpatterns = [
    path("", index, name="index"),
    path("admin/", admin.site.urls),

    path("api/", api_root, name="api-root"),

    #  Swagger/Redoc
    path("api/schema/", SpectacularAPIView.as_view(), name="schema"),
    path("api/docs/", SpectacularSwaggerView.as_view(url_name="schema"), name="swagger-ui"),
    path("api/redoc/", SpectacularRedocView.as_view(url_name="schema"), name="redoc"),

    path("api/users/", include("users.urls")),
    path("api/messaging/", include("messaging.urls")),
    path("api/chats/send/", DirectSendView.as_view(), name="legacy-chat-send"),
]
