"""
Chat system models.

This module defines the data models for the chat system supporting:
- Private chats between exactly two users
- Group chats between the creator and one or more members

Models:
    Chat: Container for messages between members
    PrivateChatPair: Storage-level uniqueness of private chats per user pair
    Membership: Join row granting a user access to a chat
    Message: Individual message within a chat

Design Decisions:
    - Membership is the only gate: a user sees and posts to a chat if and
      only if a Membership row links them
    - Private chats are unique per unordered user pair; the unique constraint
      on PrivateChatPair closes the check-then-insert race
    - Messages are immutable once written
    - Sending a message touches the chat so lists sort by recent activity
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from django.conf import settings
from django.db import models
from django.db.models import F, Q

from chat.constants import CHAT_CONFIG
from core.models import BaseModel

if TYPE_CHECKING:
    from authentication.models import User


class ChatType(models.TextChoices):
    """
    Type of chat.

    PRIVATE: Exactly two members, name derived from the other member
    GROUP: Creator plus one or more members, optional explicit name
    """

    PRIVATE = "private", "Private"
    GROUP = "group", "Group"


class ChatQuerySet(models.QuerySet):
    """QuerySet with membership-scoped lookups."""

    def for_member(self, user: User) -> ChatQuerySet:
        """
        Chats where ``user`` is a member, most recently updated first.
        """
        return self.filter(memberships__user=user).order_by("-updated_at", "-id")


class Chat(BaseModel):
    """
    A chat between two or more users.

    Chat Types:
        PRIVATE: Exactly 2 members. Unique per user pair (enforced via
                 PrivateChatPair). The name is usually empty and the
                 display name is the other member's name.

        GROUP: Creator plus at least one member. The name is shown
               verbatim, even when empty.

    Fields:
        chat_type: Type of chat (private or group)
        name: Optional chat name (2-100 characters when given)
        created_by: User who created the chat
        last_message_at: Timestamp of most recent message

    Relationships:
        memberships: Membership rows for this chat
        members: Users linked through Membership
        messages: All Message records for this chat
        private_pair: PrivateChatPair if type is PRIVATE
    """

    chat_type = models.CharField(
        max_length=10,
        choices=ChatType.choices,
        db_index=True,
        help_text="Type of chat (private or group)",
    )

    name = models.CharField(
        max_length=CHAT_CONFIG.NAME_MAX_LENGTH,
        null=True,
        blank=True,
        help_text="Chat name (optional; private chats derive one from the other member)",
    )

    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="created_chats",
        help_text="User who created this chat",
    )

    members = models.ManyToManyField(
        settings.AUTH_USER_MODEL,
        through="Membership",
        related_name="chats",
        help_text="Users who can read and post in this chat",
    )

    last_message_at = models.DateTimeField(
        null=True,
        blank=True,
        help_text="Timestamp of most recent message",
    )

    objects = ChatQuerySet.as_manager()

    class Meta:
        db_table = "chat_chat"
        ordering = ["-updated_at", "-id"]
        indexes = [
            models.Index(
                fields=["-updated_at"],
                name="chat_chat_updated_idx",
            ),
        ]

    def __str__(self) -> str:
        if self.is_private:
            return f"Private({self.pk})"
        if self.name:
            return f"Group: {self.name}"
        return f"Group({self.pk})"

    @property
    def is_private(self) -> bool:
        """Check if this is a private (1:1) chat."""
        return self.chat_type == ChatType.PRIVATE

    def has_member(self, user: User) -> bool:
        """
        Check whether ``user`` is a member of this chat.

        Every access decision in the chat services goes through here.
        """
        return self.memberships.filter(user=user).exists()

    def other_members(self, user: User):
        """
        Members of this chat other than ``user``, in join order.

        Reads ``memberships`` (and each membership's user) so a queryset
        built with ``prefetch_related("memberships__user")`` needs no
        further queries.

        Returns:
            list of User
        """
        return [m.user for m in self.memberships.all() if m.user_id != user.pk]

    def get_display_name(self, viewer: User) -> str | None:
        """
        Name to show ``viewer`` for this chat.

        Private chats without a stored name show the other member's name, or
        CHAT_CONFIG.PRIVATE_CHAT_PLACEHOLDER when no other member is left.
        Group chats show their stored name as is, which may be empty.
        """
        if self.is_private and not self.name:
            others = self.other_members(viewer)
            if others and others[0].name:
                return others[0].name
            return CHAT_CONFIG.PRIVATE_CHAT_PLACEHOLDER
        return self.name


class PrivateChatPair(models.Model):
    """
    Enforces uniqueness of private chats between two users.

    Stores the user pair in canonical order (lower user id first), so the
    unique constraint holds regardless of who started the chat. Two
    concurrent creates for the same pair cannot both commit: the loser's
    insert fails with IntegrityError and the service returns the winner's
    chat instead.

    Constraints:
        - UniqueConstraint(user_lower, user_higher): One chat per pair
        - CheckConstraint(user_lower_id < user_higher_id): Canonical order
    """

    chat = models.OneToOneField(
        Chat,
        on_delete=models.CASCADE,
        primary_key=True,
        related_name="private_pair",
        help_text="The private chat this pair represents",
    )

    user_lower = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="+",
        help_text="User with lower id in this pair",
    )

    user_higher = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="+",
        help_text="User with higher id in this pair",
    )

    class Meta:
        db_table = "chat_private_pair"
        constraints = [
            models.UniqueConstraint(
                fields=["user_lower", "user_higher"],
                name="unique_private_chat_pair",
            ),
            models.CheckConstraint(
                condition=Q(user_lower__lt=F("user_higher")),
                name="private_pair_user_lower_lt_higher",
            ),
        ]

    def __str__(self) -> str:
        return f"PrivatePair({self.user_lower_id}, {self.user_higher_id})"

    @staticmethod
    def normalize(user_a_id: int, user_b_id: int) -> tuple[int, int]:
        """Return the two ids as (lower, higher)."""
        return (user_a_id, user_b_id) if user_a_id < user_b_id else (user_b_id, user_a_id)


class Membership(BaseModel):
    """
    Links a user to a chat.

    A user can read and post in a chat exactly when a Membership row exists.
    The creator of a chat always gets one. Rows are never updated; they go
    away with their chat.

    Constraints:
        - UniqueConstraint(chat, user): One membership per user per chat
    """

    chat = models.ForeignKey(
        Chat,
        on_delete=models.CASCADE,
        related_name="memberships",
        help_text="Chat this membership belongs to",
    )

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="chat_memberships",
        help_text="Member of the chat",
    )

    class Meta:
        db_table = "chat_membership"
        ordering = ["created_at", "id"]
        constraints = [
            models.UniqueConstraint(
                fields=["chat", "user"],
                name="unique_chat_membership",
            ),
        ]
        indexes = [
            models.Index(
                fields=["user", "chat"],
                name="chat_membership_user_idx",
            ),
        ]

    def __str__(self) -> str:
        return f"Membership: {self.user_id} in {self.chat_id}"


class Message(BaseModel):
    """
    A message within a chat.

    Messages are written only by MessageService.send_message and never
    change afterwards.

    Fields:
        chat: Chat this message belongs to
        user: Author (a member of the chat when the message was sent)
        body: Message text, at most MESSAGE_CONFIG.MAX_BODY_LENGTH characters
    """

    chat = models.ForeignKey(
        Chat,
        on_delete=models.CASCADE,
        related_name="messages",
        help_text="Chat this message belongs to",
    )

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="chat_messages",
        help_text="User who sent this message",
    )

    body = models.TextField(
        help_text="Message text",
    )

    class Meta:
        db_table = "chat_message"
        ordering = ["created_at", "id"]
        indexes = [
            models.Index(
                fields=["chat", "created_at", "id"],
                name="chat_msg_chat_created_idx",
            ),
        ]

    def __str__(self) -> str:
        author = f"User {self.user_id}" if self.user_id else "Unknown"
        preview = self.body[:50] + "..." if len(self.body) > 50 else self.body
        return f"{author}: {preview}"
