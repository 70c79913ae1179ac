"""
URL configuration for authentication endpoints.

URL structure:
    /api/v1/auth/register/        - Create account (POST)
    /api/v1/auth/login/           - Session + JWT login (POST)
    /api/v1/auth/logout/          - Logout, blacklists the refresh token (POST)
    /api/v1/auth/user/            - Current user (GET)
    /api/v1/auth/token/refresh/   - Refresh access token (POST)

Login, logout, current user and refresh are dj-rest-auth views configured
through REST_AUTH in settings.py. Password reset is not exposed: without
allauth it needs e-mail templates and confirm URLs this project lacks.

The user directory lives in user_urls.py under /api/v1/users/.
"""

from dj_rest_auth.jwt_auth import get_refresh_view
from dj_rest_auth.views import LoginView, LogoutView, UserDetailsView
from django.urls import path

from authentication.views import RegisterView

app_name = "authentication"

urlpatterns = [
    path("register/", RegisterView.as_view(), name="register"),
    path("login/", LoginView.as_view(), name="login"),
    path("logout/", LogoutView.as_view(), name="logout"),
    path("user/", UserDetailsView.as_view(), name="current-user"),
    path("token/refresh/", get_refresh_view().as_view(), name="token-refresh"),
]
