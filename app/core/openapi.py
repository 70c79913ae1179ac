"""
OpenAPI schema customizations for drf-spectacular.

Tag naming follows the pattern: [App Name] - [Group Name]
Examples:
- Auth (register, login, logout, token refresh)
- Auth - User (current user)
- Users (user directory)
- Chat - Chats (chat list/create/detail)
- Chat - Messages (message list/send)
"""

# Natural language summaries for registration and the dj-rest-auth endpoints
# Maps operation_id to (summary, description)
AUTH_SUMMARIES = {
    "auth_register_create": (
        "Register new account",
        "Create a new user account with name, email and password.",
    ),
    "auth_login_create": (
        "Log in",
        "Authenticate with email and password to open a session and receive JWT tokens.",
    ),
    "auth_logout_create": (
        "Log out",
        "End the session and blacklist the supplied refresh token.",
    ),
    "auth_user_retrieve": (
        "Get current user",
        "Retrieve the currently authenticated user's details.",
    ),
    "auth_user_update": (
        "Update current user",
        "Full update of the currently authenticated user's details.",
    ),
    "auth_user_partial_update": (
        "Partially update current user",
        "Partial update of the currently authenticated user's details.",
    ),
    "auth_token_refresh_create": (
        "Refresh access token",
        "Get a new access token using a valid refresh token.",
    ),
}


def group_api_endpoints(result, generator, request, public):
    """
    Postprocessing hook to group API endpoints by function.

    Auth endpoints get summaries from AUTH_SUMMARIES and are grouped under
    "Auth" / "Auth - User". Chat and directory endpoints set their tags
    through @extend_schema in the views; this hook only adds descriptions.
    """
    paths = result.get("paths", {})

    for path, methods in paths.items():
        for method, operation in methods.items():
            if not isinstance(operation, dict):
                continue

            operation_id = operation.get("operationId", "")

            if operation_id in AUTH_SUMMARIES:
                summary, description = AUTH_SUMMARIES[operation_id]
                operation["summary"] = summary
                operation["description"] = description

            if operation_id.startswith("auth_user_"):
                operation["tags"] = ["Auth - User"]
            elif operation_id.startswith("auth_"):
                operation["tags"] = ["Auth"]

    result["tags"] = [
        {
            "name": "Auth",
            "description": "Registration, login, logout and token management.",
        },
        {
            "name": "Auth - User",
            "description": "Current user retrieval.",
        },
        {
            "name": "Users",
            "description": "Directory of other registered users, with search by name or email.",
        },
        {
            "name": "Chat - Chats",
            "description": "Private and group chats the caller is a member of.",
        },
        {
            "name": "Chat - Messages",
            "description": "Messages inside a chat, visible to its members only.",
        },
    ]

    return result
