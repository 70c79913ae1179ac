"""
Tests for authentication app.

This package contains test modules for:
- test_managers.py: UserManager and User model tests
- test_services.py: AuthService and UserDirectoryService tests
- test_views.py: Auth and user directory endpoint tests

Usage:
    pytest authentication/tests/
    pytest authentication/tests/test_views.py
"""
