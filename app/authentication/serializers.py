"""
Serializers for authentication models.

This module provides DRF serializers for:
- User model (directory and current-user responses)
- User summaries embedded in chat payloads
- Registration and login request bodies

Related files:
    - models.py: User model
    - views.py: Views that use these serializers
    - settings.py: REST_AUTH serializer configuration

Security:
    - Password fields are write-only
    - Passwords are checked against AUTH_PASSWORD_VALIDATORS
"""

from django.contrib.auth.password_validation import validate_password
from dj_rest_auth.serializers import LoginSerializer as BaseLoginSerializer
from rest_framework import serializers

from authentication.models import User


class UserSerializer(serializers.ModelSerializer):
    """
    Serializer for User model.

    Used for the user directory and the current-user endpoint, where the
    user may change their display name. Everything else is read-only.
    """

    class Meta:
        model = User
        fields = [
            "id",
            "name",
            "email",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "email", "created_at", "updated_at"]
        extra_kwargs = {"name": {"min_length": 2}}


class UserSummarySerializer(serializers.ModelSerializer):
    """
    Minimal user representation embedded in chat payloads.

    Only id, name and email leave the server for chat participants.
    """

    class Meta:
        model = User
        fields = ["id", "name", "email"]
        read_only_fields = fields


class RegisterSerializer(serializers.Serializer):
    """
    Serializer for account registration.

    Validates email uniqueness (case-insensitive) and password strength.
    """

    name = serializers.CharField(
        min_length=2,
        max_length=255,
        help_text="Display name shown to other users",
    )
    email = serializers.EmailField(help_text="Email address used to log in")
    password = serializers.CharField(
        write_only=True,
        style={"input_type": "password"},
        help_text="Account password",
    )

    def validate_email(self, value):
        """Reject emails that are already registered."""
        email = value.lower().strip()
        if User.objects.filter(email__iexact=email).exists():
            raise serializers.ValidationError("A user with this email already exists.")
        return email

    def validate_password(self, value):
        """Run Django's configured password validators."""
        validate_password(value)
        return value


class LoginSerializer(BaseLoginSerializer):
    """
    Email/password login for dj-rest-auth's LoginView.

    Drops the username field: accounts are identified by email only.
    Emails are stored lowercased, so the submitted one is lowercased too.
    """

    username = None
    email = serializers.EmailField()

    def validate_email(self, value):
        return value.lower().strip()
