"""
Tests for authentication services.

Covers:
- AuthService.create_user: email handling and duplicates
- UserDirectoryService.list_users: caller exclusion, search, ordering
- UserDirectoryService.get_user: lookup, self and missing users
"""

import pytest

from authentication.services import AuthService, UserDirectoryService
from authentication.tests.factories import UserFactory
from core.services import NOT_FOUND


@pytest.mark.django_db
class TestAuthServiceCreateUser:
    """Tests for AuthService.create_user."""

    def test_lowercases_and_strips_email(self):
        user = AuthService.create_user(
            "  Jane@Example.COM ", "SecurePass123!", name="Jane"
        )

        assert user.email == "jane@example.com"
        assert user.check_password("SecurePass123!")

    def test_duplicate_email_raises_value_error(self):
        """
        Emails are unique regardless of case.

        Why it matters: Two accounts sharing an email would make login
        ambiguous.
        """
        UserFactory(email="taken@example.com")

        with pytest.raises(ValueError):
            AuthService.create_user("TAKEN@example.com", "SecurePass123!")


@pytest.mark.django_db
class TestUserDirectoryServiceListUsers:
    """Tests for UserDirectoryService.list_users."""

    def test_excludes_caller(self):
        """
        The caller never appears in their own directory.

        Why it matters: The directory is the list of people the caller
        can start a chat with; chatting with yourself is rejected.
        """
        caller = UserFactory(name="Caller")
        other = UserFactory(name="Other")

        users = list(UserDirectoryService.list_users(caller))

        assert users == [other]

    def test_orders_by_name_ascending(self):
        caller = UserFactory(name="Caller")
        zoe = UserFactory(name="Zoe")
        adam = UserFactory(name="Adam")
        mia = UserFactory(name="Mia")

        users = list(UserDirectoryService.list_users(caller))

        assert users == [adam, mia, zoe]

    def test_search_matches_name_case_insensitively(self):
        caller = UserFactory(name="Caller")
        match = UserFactory(name="Jonathan Smith")
        UserFactory(name="Other Person")

        users = list(UserDirectoryService.list_users(caller, search="jonaTHAN"))

        assert users == [match]

    def test_search_matches_email(self):
        caller = UserFactory(name="Caller")
        match = UserFactory(name="Someone", email="unique.handle@example.com")
        UserFactory(name="Else", email="else@example.com")

        users = list(UserDirectoryService.list_users(caller, search="unique.hand"))

        assert users == [match]

    def test_search_never_returns_caller(self):
        caller = UserFactory(name="Searchable Caller")

        users = list(UserDirectoryService.list_users(caller, search="Searchable"))

        assert users == []

    def test_blank_search_returns_everyone_else(self):
        caller = UserFactory(name="Caller")
        UserFactory.create_batch(3)

        users = list(UserDirectoryService.list_users(caller, search="   "))

        assert len(users) == 3


@pytest.mark.django_db
class TestUserDirectoryServiceGetUser:
    """Tests for UserDirectoryService.get_user."""

    def test_returns_other_user(self):
        caller = UserFactory()
        other = UserFactory()

        result = UserDirectoryService.get_user(caller, other.id)

        assert result.success is True
        assert result.data == other

    def test_missing_user_is_not_found(self):
        caller = UserFactory()

        result = UserDirectoryService.get_user(caller, 999999)

        assert result.success is False
        assert result.error_code == NOT_FOUND
        assert result.status_code == 404

    def test_self_is_not_found(self):
        """
        The caller's own id is not served by the directory.

        Why it matters: The current-user endpoint is the single place
        for the caller's own record.
        """
        caller = UserFactory()

        result = UserDirectoryService.get_user(caller, caller.id)

        assert result.success is False
        assert result.error_code == NOT_FOUND
