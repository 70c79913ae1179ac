"""
Tests for chat app.

This package contains test modules for:
- test_models.py: Chat, PrivateChatPair, Membership, Message model tests
- test_services.py: ChatService and MessageService tests
- test_serializers.py: Input and output serializer tests
- test_views.py: REST API endpoint tests

Usage:
    pytest chat/tests/
    pytest chat/tests/test_services.py
"""
