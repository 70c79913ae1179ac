"""
Constants and configuration for the chat module.

This module centralizes configuration values for:
- Chat names and display labels
- Message content limits

Import example:
    from chat.constants import CHAT_CONFIG, MESSAGE_CONFIG
"""

from typing import Final


class CHAT_CONFIG:
    """Configuration for chats."""

    NAME_MIN_LENGTH: Final[int] = 2
    NAME_MAX_LENGTH: Final[int] = 100

    # Display name for a private chat whose other member cannot be resolved
    PRIVATE_CHAT_PLACEHOLDER: Final[str] = "Private Chat"

    # A private chat always has exactly this many members
    PRIVATE_CHAT_SIZE: Final[int] = 2

    # Largest primary key a member id may carry (signed 64-bit integer)
    MAX_USER_ID: Final[int] = 2**63 - 1


class MESSAGE_CONFIG:
    """Configuration for message operations."""

    MAX_BODY_LENGTH: Final[int] = 1000  # Characters

    # Request keys accepted for the message text, in priority order
    BODY_FIELD_ALIASES: Final[tuple[str, ...]] = ("body", "content", "message")
