"""
Django admin configuration for chat models.

Provides admin interfaces for:
- Chat management with inline memberships
- Private pair inspection
- Message moderation
"""

from django.contrib import admin

from chat.models import Chat, Membership, Message, PrivateChatPair


class MembershipInline(admin.TabularInline):
    """Inline display of members in chat admin."""

    model = Membership
    extra = 0
    readonly_fields = ["created_at"]
    raw_id_fields = ["user"]


@admin.register(Chat)
class ChatAdmin(admin.ModelAdmin):
    """Admin interface for Chat model."""

    list_display = [
        "id",
        "chat_type",
        "name",
        "created_by",
        "created_at",
        "last_message_at",
    ]
    list_filter = ["chat_type", "created_at"]
    search_fields = ["name", "id"]
    readonly_fields = ["created_at", "updated_at", "last_message_at"]
    raw_id_fields = ["created_by"]
    inlines = [MembershipInline]
    ordering = ["-updated_at"]


@admin.register(PrivateChatPair)
class PrivateChatPairAdmin(admin.ModelAdmin):
    """Admin interface for PrivateChatPair model."""

    list_display = ["chat", "user_lower", "user_higher"]
    raw_id_fields = ["chat", "user_lower", "user_higher"]


@admin.register(Message)
class MessageAdmin(admin.ModelAdmin):
    """Admin interface for Message model (read-only content)."""

    list_display = ["id", "chat", "user", "short_body", "created_at"]
    list_filter = ["created_at"]
    search_fields = ["body", "user__email"]
    readonly_fields = ["chat", "user", "body", "created_at", "updated_at"]
    ordering = ["-created_at"]

    @admin.display(description="Body")
    def short_body(self, obj: Message) -> str:
        return obj.body[:50]
