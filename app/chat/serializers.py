"""
Serializers for chat API.

This module provides serializers for the chat system:
- Chat serializers (list/detail entry, chat with full membership, create)
- Message serializers (read, create, last-message preview)

Serializer Hierarchy:
    ChatSerializer: List and detail entry with computed fields
    ChatWithMembersSerializer: Chat header for the message list
    ChatCreateSerializer: Private/group chat creation input

    MessageSerializer: Message with author
    LastMessageSerializer: Minimal message for the chat list preview
    MessageCreateSerializer: Send new message (body/content/message)

Design Decisions:
    - Read and write serializers are separate
    - Write serializers only check the input shape; ChatService and
      MessageService own the rules (membership, lengths, existence)
    - Serializers that depend on the viewer read it from
      ``context["caller"]``
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rest_framework import serializers

from authentication.serializers import UserSummarySerializer
from chat.constants import CHAT_CONFIG, MESSAGE_CONFIG
from chat.models import Chat, ChatType, Message

if TYPE_CHECKING:
    from authentication.models import User


# =============================================================================
# Message Serializers
# =============================================================================


class LastMessageSerializer(serializers.ModelSerializer):
    """
    Minimal message serializer for the chat list preview.
    """

    class Meta:
        model = Message
        fields = ["id", "body", "created_at", "user_id"]
        read_only_fields = fields


class MessageSerializer(serializers.ModelSerializer):
    """
    Full message serializer for message lists and send responses.
    """

    user = UserSummarySerializer(read_only=True, allow_null=True)

    class Meta:
        model = Message
        fields = [
            "id",
            "chat_id",
            "user_id",
            "user",
            "body",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class MessageCreateSerializer(serializers.Serializer):
    """
    Serializer for sending messages.

    The text may arrive as ``body``, ``content`` or ``message``; the first
    one present wins and is returned as ``body``. A missing body comes out
    as None so that MessageService checks membership before rejecting it.
    """

    body = serializers.CharField(
        required=False,
        allow_blank=True,
        allow_null=True,
        help_text=f"Message text (max {MESSAGE_CONFIG.MAX_BODY_LENGTH} characters)",
    )
    content = serializers.CharField(
        required=False,
        allow_blank=True,
        allow_null=True,
        help_text="Alias for body",
    )
    message = serializers.CharField(
        required=False,
        allow_blank=True,
        allow_null=True,
        help_text="Alias for body",
    )

    def validate(self, attrs: dict) -> dict:
        for key in MESSAGE_CONFIG.BODY_FIELD_ALIASES:
            if key in attrs:
                return {"body": attrs[key]}
        return {"body": None}


# =============================================================================
# Chat Serializers
# =============================================================================


class ChatViewerMixin:
    """Access to the viewing user passed in serializer context."""

    def get_caller(self) -> User:
        return self.context["caller"]

    def get_display_name(self, obj: Chat) -> str | None:
        """Other member's name for private chats, stored name for groups."""
        return obj.get_display_name(self.get_caller())


class ChatSerializer(ChatViewerMixin, serializers.ModelSerializer):
    """
    Serializer for chat list entries and chat detail.

    Includes computed fields:
    - display_name: Other member's name for private chats, name for groups
    - members: Members other than the caller (id, name, email)
    - messages_count: Number of messages in the chat
    - last_message: Preview of the most recent message, or null

    Uses the ``messages_count`` and ``last_message`` attributes set by
    ChatService.list_chats / get_chat when present, and queries otherwise
    (freshly created chats).
    """

    type = serializers.CharField(source="chat_type", read_only=True)
    display_name = serializers.SerializerMethodField(
        help_text="Display name for the chat"
    )
    members = serializers.SerializerMethodField(
        help_text="Members other than the caller"
    )
    messages_count = serializers.SerializerMethodField(
        help_text="Number of messages in the chat"
    )
    last_message = serializers.SerializerMethodField(
        help_text="Most recent message preview"
    )

    class Meta:
        model = Chat
        fields = [
            "id",
            "type",
            "name",
            "display_name",
            "created_by_id",
            "members",
            "messages_count",
            "last_message",
            "last_message_at",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields

    def get_members(self, obj: Chat) -> list[dict]:
        return UserSummarySerializer(
            obj.other_members(self.get_caller()), many=True
        ).data

    def get_messages_count(self, obj: Chat) -> int:
        count = getattr(obj, "messages_count", None)
        if count is None:
            count = obj.messages.count()
        return count

    def get_last_message(self, obj: Chat) -> dict | None:
        if hasattr(obj, "last_message"):
            last_message = obj.last_message
        else:
            last_message = obj.messages.order_by("-created_at", "-id").first()
        if last_message is None:
            return None
        return LastMessageSerializer(last_message).data


class ChatWithMembersSerializer(ChatViewerMixin, serializers.ModelSerializer):
    """
    Chat header returned with the message list.

    Unlike ChatSerializer, ``members`` lists every member, caller included.
    """

    type = serializers.CharField(source="chat_type", read_only=True)
    display_name = serializers.SerializerMethodField(
        help_text="Display name for the chat"
    )
    members = serializers.SerializerMethodField(help_text="All members of the chat")

    class Meta:
        model = Chat
        fields = [
            "id",
            "type",
            "name",
            "display_name",
            "created_by_id",
            "members",
            "last_message_at",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields

    def get_members(self, obj: Chat) -> list[dict]:
        users = [membership.user for membership in obj.memberships.all()]
        return UserSummarySerializer(users, many=True).data


class ChatCreateSerializer(serializers.Serializer):
    """
    Serializer for creating chats.

    Supports both private (1:1) and group chats:
    - Private: Finds existing or creates new between the caller and one user
    - Group: Creates new chat with the caller and the listed users

    Only the shape is checked here; ChatService.create_chat validates the
    user list and the name.
    """

    type = serializers.ChoiceField(
        choices=ChatType.choices,
        help_text="Type of chat to create",
    )
    users = serializers.ListField(
        child=serializers.IntegerField(
            min_value=1, max_value=CHAT_CONFIG.MAX_USER_ID
        ),
        help_text="Ids of the other users in the chat",
    )
    name = serializers.CharField(
        required=False,
        allow_null=True,
        allow_blank=True,
        default=None,
        help_text="Optional chat name (2-100 characters)",
    )
