"""
Authentication views.

This module provides API views for:
- Registration
- The user directory (other registered users)

Login, logout, the current user and token refresh are served by
dj-rest-auth (see REST_AUTH in settings.py).

Related files:
    - serializers.py: Request/response serialization
    - services.py: AuthService, UserDirectoryService
    - urls.py / user_urls.py: URL routing
"""

from dj_rest_auth.utils import jwt_encode
from drf_spectacular.utils import OpenApiParameter, extend_schema, extend_schema_view
from rest_framework import status, viewsets
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from authentication.serializers import RegisterSerializer, UserSerializer
from authentication.services import AuthService, UserDirectoryService
from core.views import invalid_data_response, service_failure_response


def _token_pair(user):
    """Issue a fresh JWT pair for ``user``, as dj-rest-auth's LoginView does."""
    access, refresh = jwt_encode(user)
    return {"access": str(access), "refresh": str(refresh)}


# =============================================================================
# Account Views
# =============================================================================


class RegisterView(APIView):
    """
    API view for account registration.

    POST: Create an account and return it with a JWT pair

    URL: /api/v1/auth/register/

    Request body:
        {
            "name": "Jane Doe",
            "email": "jane@example.com",
            "password": "..."
        }
    """

    authentication_classes = []
    permission_classes = [AllowAny]

    @extend_schema(request=RegisterSerializer, tags=["Auth"])
    def post(self, request):
        serializer = RegisterSerializer(data=request.data)
        if not serializer.is_valid():
            return invalid_data_response(serializer)

        data = serializer.validated_data
        user = AuthService.create_user(
            email=data["email"],
            password=data["password"],
            name=data["name"],
        )

        return Response(
            {
                "success": True,
                "message": "User registered successfully",
                "data": {"user": UserSerializer(user).data, **_token_pair(user)},
            },
            status=status.HTTP_201_CREATED,
        )


# =============================================================================
# User Directory
# =============================================================================


@extend_schema_view(
    list=extend_schema(
        operation_id="list_users",
        summary="List users",
        tags=["Users"],
        parameters=[
            OpenApiParameter(
                name="search",
                type=str,
                required=False,
                description="Case-insensitive match on name or email",
            ),
        ],
    ),
    retrieve=extend_schema(
        operation_id="get_user",
        summary="Get user",
        tags=["Users"],
    ),
)
class UserViewSet(viewsets.ViewSet):
    """
    ViewSet for the user directory.

    list:
        All users except the caller, ordered by name.
        Optional ?search= filters on name or email.

    retrieve:
        A single user other than the caller.
    """

    permission_classes = [IsAuthenticated]
    serializer_class = UserSerializer
    lookup_value_regex = r"\d+"

    def list(self, request):
        users = UserDirectoryService.list_users(
            caller=request.user,
            search=request.query_params.get("search"),
        )
        data = UserSerializer(users, many=True).data

        return Response(
            {
                "success": True,
                "message": "Users retrieved successfully",
                "data": data,
                "count": len(data),
                "current_user_id": request.user.id,
            }
        )

    def retrieve(self, request, pk=None):
        result = UserDirectoryService.get_user(caller=request.user, user_id=pk)
        if not result:
            return service_failure_response(result)

        return Response(
            {
                "success": True,
                "message": "User data retrieved successfully",
                "data": UserSerializer(result.data).data,
            }
        )
