"""
Chat application configuration.

This app provides the chat system with:
- Private (1:1) chats, unique per user pair
- Group chats with an optional name
- Membership-gated message history and posting
"""

from django.apps import AppConfig


class ChatConfig(AppConfig):
    """Configuration for the chat application."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "chat"
    verbose_name = "Chat"
