"""
Test configuration and fixtures for chat tests.

This module provides:
- User fixtures for the usual chat roles (caller, other member, outsider)
- Chat fixtures (private and group)
- API client helpers for authenticated requests

Usage:
    def test_example(group_chat, authenticated_client_factory, alice):
        client = authenticated_client_factory(alice)
        response = client.get(f"/api/v1/chats/{group_chat.id}/")
        assert response.status_code == 200
"""

import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from authentication.tests.factories import UserFactory
from chat.tests.factories import GroupChatFactory, PrivateChatFactory


# =============================================================================
# User Fixtures
# =============================================================================


@pytest.fixture
def alice(db):
    """The calling user in most scenarios."""
    return UserFactory(name="Alice", email="alice@example.com")


@pytest.fixture
def bob(db):
    """A second user, usually a fellow member."""
    return UserFactory(name="Bob", email="bob@example.com")


@pytest.fixture
def carol(db):
    """A third user for group scenarios."""
    return UserFactory(name="Carol", email="carol@example.com")


@pytest.fixture
def outsider(db):
    """A user who is not a member of any fixture chat."""
    return UserFactory(name="Oscar Outsider", email="oscar@example.com")


# =============================================================================
# Chat Fixtures
# =============================================================================


@pytest.fixture
def private_chat(db, alice, bob):
    """Private chat between alice and bob."""
    return PrivateChatFactory(user1=alice, user2=bob)


@pytest.fixture
def group_chat(db, alice, bob, carol):
    """Group chat created by alice with bob and carol."""
    return GroupChatFactory(created_by=alice, name="Weekend Plans", members=[bob, carol])


# =============================================================================
# API Client Fixtures
# =============================================================================


@pytest.fixture
def api_client():
    """Unauthenticated API client."""
    return APIClient()


@pytest.fixture
def authenticated_client_factory(db):
    """
    Factory for API clients authenticated as an arbitrary user.

    Usage:
        def test_example(authenticated_client_factory, alice):
            client = authenticated_client_factory(alice)
    """

    def _make_client(user):
        client = APIClient()
        refresh = RefreshToken.for_user(user)
        client.credentials(HTTP_AUTHORIZATION=f"Bearer {refresh.access_token}")
        return client

    return _make_client


@pytest.fixture
def alice_client(authenticated_client_factory, alice):
    """API client authenticated as alice."""
    return authenticated_client_factory(alice)
