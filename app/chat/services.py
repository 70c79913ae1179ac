"""
Chat system service layer.

This module provides the business logic for the chat system, encapsulating
all operations on chats, memberships and messages.

Services:
    ChatService: Chat lifecycle (create, list, get)
    MessageService: Message operations (list, send)

Design Principles:
    - Services are stateless (use class methods)
    - The calling user is always passed in explicitly
    - Expected failures return ServiceResult.failure()
    - Unexpected failures raise exceptions
    - Every multi-row write runs in one transaction

Access Policy:
    Membership is the only gate. A chat id that does not exist gives
    NOT_FOUND; an existing chat the caller is not a member of gives
    PERMISSION_DENIED. The same rule applies to chat detail, message
    listing and message sending.

Usage:
    from chat.services import ChatService, MessageService

    # Create (or find) a private chat
    result = ChatService.create_chat(caller, "private", [other_user.id])
    if result.success:
        chat, created = result.data.chat, result.data.created

    # Send a message
    result = MessageService.send_message(caller, chat.id, "Hello!")
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from django.db import DatabaseError, IntegrityError
from django.db.models import Count, OuterRef, Subquery

from core.services import (
    NOT_FOUND,
    PERMISSION_DENIED,
    STORAGE_ERROR,
    BaseService,
    ServiceResult,
)

from chat.constants import CHAT_CONFIG, MESSAGE_CONFIG
from chat.models import Chat, ChatType, Membership, Message, PrivateChatPair

if TYPE_CHECKING:
    from collections.abc import Iterable

    from django.db.models import QuerySet

    from authentication.models import User


@dataclass
class ChatCreation:
    """
    Outcome of ChatService.create_chat.

    Attributes:
        chat: The new chat, or the existing private chat for the same pair
        created: False when an existing private chat was returned
    """

    chat: Chat
    created: bool


@dataclass
class ChatMessages:
    """A chat together with its messages, oldest first."""

    chat: Chat
    messages: list[Message]


def _chat_queryset() -> QuerySet[Chat]:
    """Chats with members prefetched, ready for rendering."""
    return Chat.objects.prefetch_related("memberships__user")


def _with_summary(queryset: QuerySet[Chat]) -> QuerySet[Chat]:
    """
    Annotate chats with ``messages_count`` and ``last_message_id``.
    """
    latest = (
        Message.objects.filter(chat=OuterRef("pk"))
        .order_by("-created_at", "-id")
        .values("id")[:1]
    )
    return queryset.annotate(
        messages_count=Count("messages", distinct=True),
        last_message_id=Subquery(latest),
    )


def _attach_last_messages(chats: list[Chat]) -> list[Chat]:
    """
    Set ``chat.last_message`` from the annotated ``last_message_id``.

    One query for the whole list.
    """
    ids = [chat.last_message_id for chat in chats if chat.last_message_id]
    messages = Message.objects.select_related("user").in_bulk(ids)
    for chat in chats:
        chat.last_message = messages.get(chat.last_message_id)
    return chats


class ChatService(BaseService):
    """
    Service for chat lifecycle operations.

    Methods:
        create_chat: Create a private or group chat, de-duplicating private ones
        list_chats: Chats the caller is a member of, most recent first
        get_chat: A single chat the caller is a member of
    """

    @classmethod
    def _validate_creation(
        cls,
        caller: User,
        chat_type,
        member_ids,
        name,
    ) -> ServiceResult | None:
        """
        Check create_chat input. Returns a failure, or None when valid.

        Runs before any write, so a failure never leaves rows behind.
        """
        from authentication.models import User

        if chat_type not in ChatType.values:
            return cls.validation_failure(
                "Chat type must be 'private' or 'group'", "type"
            )

        if not isinstance(member_ids, (list, tuple)) or not member_ids:
            return cls.validation_failure(
                "At least one user must be selected", "users"
            )

        if any(
            isinstance(user_id, bool) or not isinstance(user_id, int)
            for user_id in member_ids
        ):
            return cls.validation_failure("User ids must be integers", "users")

        if any(
            not 0 < user_id <= CHAT_CONFIG.MAX_USER_ID for user_id in member_ids
        ):
            return cls.validation_failure("One or more users do not exist", "users")

        if len(set(member_ids)) != len(member_ids):
            return cls.validation_failure("Duplicate users are not allowed", "users")

        if caller.pk in member_ids:
            return cls.validation_failure(
                "You cannot add yourself to the user list", "users"
            )

        other_count = CHAT_CONFIG.PRIVATE_CHAT_SIZE - 1
        if chat_type == ChatType.PRIVATE and len(member_ids) != other_count:
            return cls.validation_failure(
                "A private chat requires exactly one other user", "users"
            )

        if name is not None:
            if not isinstance(name, str):
                return cls.validation_failure("Name must be a string", "name")
            if not (
                CHAT_CONFIG.NAME_MIN_LENGTH
                <= len(name)
                <= CHAT_CONFIG.NAME_MAX_LENGTH
            ):
                return cls.validation_failure(
                    f"Name must be between {CHAT_CONFIG.NAME_MIN_LENGTH} and "
                    f"{CHAT_CONFIG.NAME_MAX_LENGTH} characters",
                    "name",
                )

        if User.objects.filter(pk__in=member_ids).count() != len(member_ids):
            return cls.validation_failure("One or more users do not exist", "users")

        return None

    @classmethod
    def _find_private_chat(cls, user_lower_id: int, user_higher_id: int) -> Chat | None:
        pair = (
            PrivateChatPair.objects.select_related("chat")
            .filter(user_lower_id=user_lower_id, user_higher_id=user_higher_id)
            .first()
        )
        return pair.chat if pair else None

    @classmethod
    def create_chat(
        cls,
        caller: User,
        chat_type: str,
        member_ids: list[int],
        name: str | None = None,
    ) -> ServiceResult[ChatCreation]:
        """
        Create a chat between the caller and ``member_ids``.

        Private chats are unique per user pair. If one already exists
        between the caller and the other user, it is returned with
        ``created=False`` instead of creating a duplicate. This is a
        success, not an error.

        Implementation (private):
            1. Canonicalize the pair (lower user id first)
            2. Look up an existing PrivateChatPair; return its chat if found
            3. Create chat, pair and both memberships in one transaction
            4. If the pair insert violates the unique constraint, a
               concurrent request created the chat first: roll back and
               return that chat

        Implementation (group):
            Create the chat and memberships for the caller and every
            member in one transaction.

        Args:
            caller: Authenticated user creating the chat (always a member)
            chat_type: "private" or "group"
            member_ids: Ids of the other users; non-empty, distinct,
                never the caller, exactly one for private chats
            name: Optional name, 2-100 characters. Blank names count as
                not given.

        Returns:
            ServiceResult with ChatCreation

        Error codes:
            VALIDATION_ERROR: Input rejected before any write
            STORAGE_ERROR: The transaction failed and was rolled back
        """
        logger = cls.get_logger()

        if isinstance(name, str) and not name.strip():
            name = None

        failure = cls._validate_creation(caller, chat_type, member_ids, name)
        if failure is not None:
            logger.warning(
                f"Rejected chat creation by user {caller.pk}: {failure.error}"
            )
            return failure

        if chat_type == ChatType.PRIVATE:
            return cls._create_private(caller, member_ids[0], name)
        return cls._create_group(caller, member_ids, name)

    @classmethod
    def _create_private(
        cls,
        caller: User,
        other_id: int,
        name: str | None,
    ) -> ServiceResult[ChatCreation]:
        logger = cls.get_logger()
        user_lower_id, user_higher_id = PrivateChatPair.normalize(caller.pk, other_id)

        existing = cls._find_private_chat(user_lower_id, user_higher_id)
        if existing is not None:
            logger.info(
                f"Found existing private chat {existing.pk} "
                f"between users {user_lower_id} and {user_higher_id}"
            )
            return ServiceResult.success(ChatCreation(chat=existing, created=False))

        try:
            with cls.atomic():
                chat = Chat.objects.create(
                    chat_type=ChatType.PRIVATE,
                    name=name,
                    created_by=caller,
                )
                PrivateChatPair.objects.create(
                    chat=chat,
                    user_lower_id=user_lower_id,
                    user_higher_id=user_higher_id,
                )
                Membership.objects.bulk_create(
                    [
                        Membership(chat=chat, user_id=caller.pk),
                        Membership(chat=chat, user_id=other_id),
                    ]
                )
        except IntegrityError:
            existing = cls._find_private_chat(user_lower_id, user_higher_id)
            if existing is None:
                logger.exception(
                    f"Private chat creation failed for users "
                    f"{user_lower_id} and {user_higher_id}"
                )
                return ServiceResult.failure(
                    "Could not create chat", error_code=STORAGE_ERROR
                )
            logger.warning(
                f"Lost private chat creation race for users {user_lower_id} and "
                f"{user_higher_id}; returning chat {existing.pk}"
            )
            return ServiceResult.success(ChatCreation(chat=existing, created=False))
        except DatabaseError:
            logger.exception(
                f"Private chat creation failed for users "
                f"{user_lower_id} and {user_higher_id}"
            )
            return ServiceResult.failure("Could not create chat", error_code=STORAGE_ERROR)

        logger.info(
            f"Created private chat {chat.pk} "
            f"between users {user_lower_id} and {user_higher_id}"
        )
        return ServiceResult.success(ChatCreation(chat=chat, created=True))

    @classmethod
    def _create_group(
        cls,
        caller: User,
        member_ids: Iterable[int],
        name: str | None,
    ) -> ServiceResult[ChatCreation]:
        logger = cls.get_logger()

        try:
            with cls.atomic():
                chat = Chat.objects.create(
                    chat_type=ChatType.GROUP,
                    name=name,
                    created_by=caller,
                )
                Membership.objects.bulk_create(
                    [Membership(chat=chat, user_id=caller.pk)]
                    + [Membership(chat=chat, user_id=user_id) for user_id in member_ids]
                )
        except DatabaseError:
            logger.exception(f"Group chat creation failed for user {caller.pk}")
            return ServiceResult.failure("Could not create chat", error_code=STORAGE_ERROR)

        logger.info(f"User {caller.pk} created group chat {chat.pk}")
        return ServiceResult.success(ChatCreation(chat=chat, created=True))

    @classmethod
    def list_chats(cls, caller: User) -> list[Chat]:
        """
        List every chat the caller is a member of.

        Each chat carries ``messages_count`` and ``last_message`` (None for
        chats without messages), with members prefetched.

        Returns:
            list of Chat ordered by updated_at descending, then id descending
        """
        chats = list(_with_summary(_chat_queryset().for_member(caller)))
        return _attach_last_messages(chats)

    @classmethod
    def get_chat(cls, caller: User, chat_id: int) -> ServiceResult[Chat]:
        """
        Get a single chat, in the same shape as a list_chats entry.

        Error codes:
            NOT_FOUND: No chat with this id
            PERMISSION_DENIED: Chat exists but the caller is not a member
        """
        result = get_chat_for_member(
            caller, chat_id, queryset=_with_summary(_chat_queryset())
        )
        if result:
            _attach_last_messages([result.data])
        return result


def get_chat_for_member(
    caller: User,
    chat_id: int,
    queryset: QuerySet[Chat] | None = None,
) -> ServiceResult[Chat]:
    """
    Fetch a chat and check the caller's membership.

    Args:
        caller: Authenticated user
        chat_id: Id of the chat
        queryset: Optional base queryset (annotations, prefetches)

    Returns:
        ServiceResult with Chat

    Error codes:
        NOT_FOUND: No chat with this id
        PERMISSION_DENIED: Chat exists but the caller is not a member
    """
    if queryset is None:
        queryset = Chat.objects.all()

    chat = queryset.filter(pk=chat_id).first()
    if chat is None:
        return ServiceResult.failure("Chat not found", error_code=NOT_FOUND)

    if not chat.has_member(caller):
        return ServiceResult.failure(
            "You are not a member of this chat",
            error_code=PERMISSION_DENIED,
        )

    return ServiceResult.success(chat)


class MessageService(BaseService):
    """
    Service for message operations.

    Methods:
        list_messages: Messages of a chat, oldest first
        send_message: Post a text message and touch the chat
    """

    @classmethod
    def list_messages(cls, caller: User, chat_id: int) -> ServiceResult[ChatMessages]:
        """
        List the messages of a chat the caller is a member of.

        Returns:
            ServiceResult with ChatMessages; the chat has its full
            membership prefetched and messages carry their author

        Error codes:
            NOT_FOUND: No chat with this id
            PERMISSION_DENIED: Chat exists but the caller is not a member
        """
        result = get_chat_for_member(caller, chat_id, queryset=_chat_queryset())
        if not result:
            return result

        chat = result.data
        messages = list(
            chat.messages.select_related("user").order_by("created_at", "id")
        )
        return ServiceResult.success(ChatMessages(chat=chat, messages=messages))

    @classmethod
    def send_message(
        cls,
        caller: User,
        chat_id: int,
        body,
    ) -> ServiceResult[Message]:
        """
        Send a text message to a chat.

        The message insert and the chat touch (``last_message_at`` and
        ``updated_at``) commit together, so the chat moves to the top of
        the caller's chat list.

        Args:
            caller: Authenticated user sending the message
            chat_id: Target chat id
            body: Message text; surrounding whitespace is stripped

        Returns:
            ServiceResult with new Message (author attached)

        Error codes:
            NOT_FOUND: No chat with this id
            PERMISSION_DENIED: Chat exists but the caller is not a member
            VALIDATION_ERROR: Body missing, not a string, blank or too long
        """
        result = get_chat_for_member(caller, chat_id)
        if not result:
            return result
        chat = result.data

        if not isinstance(body, str):
            return cls.validation_failure("Message body is required", "body")

        body = body.strip()
        if not body:
            return cls.validation_failure("Message body cannot be empty", "body")

        if len(body) > MESSAGE_CONFIG.MAX_BODY_LENGTH:
            return cls.validation_failure(
                f"Message body cannot exceed {MESSAGE_CONFIG.MAX_BODY_LENGTH} "
                f"characters",
                "body",
            )

        with cls.atomic():
            message = Message.objects.create(chat=chat, user=caller, body=body)

            chat.last_message_at = message.created_at
            chat.save(update_fields=["last_message_at", "updated_at"])

        cls.get_logger().debug(
            f"User {caller.pk} sent message {message.pk} to chat {chat.pk}"
        )

        return ServiceResult.success(message)
