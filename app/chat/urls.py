"""
URL configuration for chat API.

URL Structure:
    Chats:
        /chats/                 GET, POST
        /chats/{id}/            GET

    Messages:
        /chats/{id}/messages/   GET, POST

All URLs are prefixed with /api/v1/ in the main URL configuration.
"""

from django.urls import include, path
from rest_framework.routers import SimpleRouter

from chat.views import ChatViewSet, MessageViewSet

router = SimpleRouter()
router.register(r"chats", ChatViewSet, basename="chat")

app_name = "chat"

urlpatterns = [
    path("", include(router.urls)),
    # Nested routes for messages
    path(
        "chats/<int:chat_pk>/messages/",
        MessageViewSet.as_view({"get": "list", "post": "create"}),
        name="chat-message-list",
    ),
]
