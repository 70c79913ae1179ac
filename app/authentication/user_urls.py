"""
URL configuration for the user directory.

URL Structure:
    /api/v1/users/          GET  (?search=)
    /api/v1/users/{id}/     GET
"""

from django.urls import include, path
from rest_framework.routers import SimpleRouter

from authentication.views import UserViewSet

router = SimpleRouter()
router.register(r"", UserViewSet, basename="user")

app_name = "users"

urlpatterns = [
    path("", include(router.urls)),
]
