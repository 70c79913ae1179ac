"""
Tests for authentication API views.

This module tests:
- RegisterView
- dj-rest-auth login, logout, token refresh and current user as configured
- UserViewSet: the user directory (list with search, retrieve)

Testing Philosophy:
    Tests focus on observable HTTP behavior, not implementation details:
    - Response status codes
    - Response body structure and content
    - Database state changes
    - Authentication enforcement
"""

import pytest
from rest_framework import status
from rest_framework_simplejwt.token_blacklist.models import BlacklistedToken
from rest_framework_simplejwt.tokens import RefreshToken

from authentication.models import User
from authentication.tests.factories import UserFactory


# =============================================================================
# URL Constants
# =============================================================================


REGISTER_URL = "/api/v1/auth/register/"
LOGIN_URL = "/api/v1/auth/login/"
LOGOUT_URL = "/api/v1/auth/logout/"
CURRENT_USER_URL = "/api/v1/auth/user/"
TOKEN_REFRESH_URL = "/api/v1/auth/token/refresh/"
USERS_URL = "/api/v1/users/"


def user_url(user_id):
    return f"{USERS_URL}{user_id}/"


# =============================================================================
# Account Views
# =============================================================================


@pytest.mark.django_db
class TestRegisterView:
    """
    Tests for POST /api/v1/auth/register/.
    """

    def test_register_creates_user_and_returns_tokens(
        self, api_client, valid_registration_data
    ):
        response = api_client.post(REGISTER_URL, valid_registration_data, format="json")

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data["success"] is True
        assert response.data["data"]["user"]["email"] == "carol@example.com"
        assert "access" in response.data["data"]
        assert "refresh" in response.data["data"]
        assert User.objects.filter(email="carol@example.com").exists()

    def test_register_duplicate_email_returns_422(
        self, api_client, valid_registration_data
    ):
        UserFactory(email="carol@example.com")

        response = api_client.post(REGISTER_URL, valid_registration_data, format="json")

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert response.data["error_code"] == "VALIDATION_ERROR"
        assert "email" in response.data["errors"]

    def test_register_short_name_returns_422(self, api_client, valid_registration_data):
        valid_registration_data["name"] = "C"

        response = api_client.post(REGISTER_URL, valid_registration_data, format="json")

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert "name" in response.data["errors"]


@pytest.mark.django_db
class TestLoginView:
    """
    Tests for POST /api/v1/auth/login/ (dj-rest-auth LoginView).
    """

    def test_login_with_valid_credentials_returns_tokens(self, api_client):
        UserFactory(email="login@example.com", password="SecurePass123!")

        response = api_client.post(
            LOGIN_URL,
            {"email": "login@example.com", "password": "SecurePass123!"},
            format="json",
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data["user"]["email"] == "login@example.com"
        assert "access" in response.data
        assert "refresh" in response.data

    def test_login_with_registration_casing_succeeds(
        self, api_client, valid_registration_data
    ):
        """
        Why it matters: Registration stores the email lowercased. Logging
        in with the exact credentials used to register must still work.
        """
        valid_registration_data["email"] = "Zed@Example.com"
        api_client.post(REGISTER_URL, valid_registration_data, format="json")

        response = api_client.post(
            LOGIN_URL,
            {
                "email": "Zed@Example.com",
                "password": valid_registration_data["password"],
            },
            format="json",
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data["user"]["email"] == "zed@example.com"

    def test_login_opens_session(self, api_client):
        UserFactory(email="login@example.com", password="SecurePass123!")
        api_client.post(
            LOGIN_URL,
            {"email": "login@example.com", "password": "SecurePass123!"},
            format="json",
        )

        response = api_client.get(CURRENT_USER_URL)

        assert response.status_code == status.HTTP_200_OK
        assert response.data["email"] == "login@example.com"

    def test_login_with_wrong_password_returns_400(self, api_client):
        UserFactory(email="login@example.com", password="SecurePass123!")

        response = api_client.post(
            LOGIN_URL,
            {"email": "login@example.com", "password": "wrong"},
            format="json",
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "non_field_errors" in response.data

    def test_login_inactive_user_returns_400(self, api_client):
        UserFactory(
            email="inactive@example.com", password="SecurePass123!", is_active=False
        )

        response = api_client.post(
            LOGIN_URL,
            {"email": "inactive@example.com", "password": "SecurePass123!"},
            format="json",
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_login_without_email_returns_400(self, api_client):
        response = api_client.post(
            LOGIN_URL, {"password": "SecurePass123!"}, format="json"
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "email" in response.data


@pytest.mark.django_db
class TestLogoutView:
    """
    Tests for POST /api/v1/auth/logout/ (dj-rest-auth LogoutView).
    """

    def test_logout_blacklists_refresh_token(self, api_client, user):
        refresh = RefreshToken.for_user(user)
        api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {refresh.access_token}")

        response = api_client.post(LOGOUT_URL, {"refresh": str(refresh)}, format="json")

        assert response.status_code == status.HTTP_200_OK
        assert BlacklistedToken.objects.filter(token__jti=refresh["jti"]).exists()

    def test_blacklisted_refresh_token_cannot_refresh(self, api_client, user):
        """
        Why it matters: Logging out must revoke the long-lived token,
        not just forget the access token on the client.
        """
        refresh = RefreshToken.for_user(user)
        api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {refresh.access_token}")
        api_client.post(LOGOUT_URL, {"refresh": str(refresh)}, format="json")

        response = api_client.post(
            TOKEN_REFRESH_URL, {"refresh": str(refresh)}, format="json"
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_logout_without_refresh_token_returns_401(self, authenticated_client):
        response = authenticated_client.post(LOGOUT_URL, {}, format="json")

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.django_db
class TestTokenRefreshView:
    """
    Tests for POST /api/v1/auth/token/refresh/.
    """

    def test_refresh_returns_new_access_token(self, api_client, user):
        refresh = RefreshToken.for_user(user)

        response = api_client.post(
            TOKEN_REFRESH_URL, {"refresh": str(refresh)}, format="json"
        )

        assert response.status_code == status.HTTP_200_OK
        assert "access" in response.data


@pytest.mark.django_db
class TestCurrentUserView:
    """
    Tests for GET /api/v1/auth/user/ (dj-rest-auth UserDetailsView).
    """

    def test_returns_current_user(self, authenticated_client, user):
        response = authenticated_client.get(CURRENT_USER_URL)

        assert response.status_code == status.HTTP_200_OK
        assert response.data["id"] == user.id
        assert response.data["email"] == user.email
        assert "password" not in response.data

    def test_patch_updates_name_only(self, authenticated_client, user):
        response = authenticated_client.patch(
            CURRENT_USER_URL,
            {"name": "Alice Renamed", "email": "changed@example.com"},
            format="json",
        )

        assert response.status_code == status.HTTP_200_OK
        user.refresh_from_db()
        assert user.name == "Alice Renamed"
        assert user.email == "alice@example.com"

    def test_patch_rejects_short_name(self, authenticated_client):
        response = authenticated_client.patch(
            CURRENT_USER_URL, {"name": "A"}, format="json"
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "name" in response.data

    def test_unauthenticated_returns_401(self, api_client):
        response = api_client.get(CURRENT_USER_URL)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


# =============================================================================
# User Directory
# =============================================================================


@pytest.mark.django_db
class TestUserViewSetList:
    """
    Tests for GET /api/v1/users/.
    """

    def test_lists_other_users_with_envelope(self, authenticated_client, user, other_user):
        response = authenticated_client.get(USERS_URL)

        assert response.status_code == status.HTTP_200_OK
        assert response.data["success"] is True
        assert response.data["count"] == 1
        assert response.data["current_user_id"] == user.id
        assert [u["id"] for u in response.data["data"]] == [other_user.id]

    def test_entries_have_public_fields_only(self, authenticated_client, other_user):
        response = authenticated_client.get(USERS_URL)

        entry = response.data["data"][0]
        assert set(entry) == {"id", "name", "email", "created_at", "updated_at"}

    def test_search_filters_results(self, authenticated_client, other_user):
        UserFactory(name="Zed Unrelated", email="zed@example.com")

        response = authenticated_client.get(USERS_URL, {"search": "bob"})

        assert [u["id"] for u in response.data["data"]] == [other_user.id]

    def test_unauthenticated_returns_401(self, api_client):
        response = api_client.get(USERS_URL)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.django_db
class TestUserViewSetRetrieve:
    """
    Tests for GET /api/v1/users/{id}/.
    """

    def test_returns_other_user(self, authenticated_client, other_user):
        response = authenticated_client.get(user_url(other_user.id))

        assert response.status_code == status.HTTP_200_OK
        assert response.data["data"]["id"] == other_user.id

    def test_own_id_returns_404(self, authenticated_client, user):
        response = authenticated_client.get(user_url(user.id))

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data["error_code"] == "NOT_FOUND"

    def test_missing_user_returns_404(self, authenticated_client):
        response = authenticated_client.get(user_url(999999))

        assert response.status_code == status.HTTP_404_NOT_FOUND
