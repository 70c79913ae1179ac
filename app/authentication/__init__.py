"""
Authentication application.

This app owns user accounts and everything the chat system needs to know
about them.

Key components:
    - User model: Custom email-based user with a display name
    - AuthService: Registration
    - UserDirectoryService: Read-only listing and lookup of other users
    - Views: register, login, logout, current user, user directory

Usage:
    from authentication.models import User
    from authentication.services import UserDirectoryService
"""
