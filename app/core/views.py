"""
Core views providing infrastructure endpoints.

These views sit outside the chat domain and are not behind authentication.
The response helpers turn service and serializer failures into the shared
failure envelope for the API views.
"""

from django.db import connection
from django.http import JsonResponse
from rest_framework.response import Response

from core.services import VALIDATION_ERROR, ServiceResult


def health_check(request):
    """
    Health check endpoint for load balancers and container orchestration.

    Returns:
        JsonResponse with status and component health:
        - status: "healthy" or "unhealthy"
        - database: "connected" or "disconnected"

    HTTP Status Codes:
        200: Database reachable
        503: Database unreachable
    """
    health_status = {
        "status": "healthy",
        "database": "unknown",
    }

    try:
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")
            cursor.fetchone()
        health_status["database"] = "connected"
    except Exception:
        health_status["database"] = "disconnected"
        health_status["status"] = "unhealthy"

    status_code = 200 if health_status["status"] == "healthy" else 503
    return JsonResponse(health_status, status=status_code)


def service_failure_response(result):
    """
    DRF Response for a failed ServiceResult.

    Body is ``result.to_response()``; status comes from the error code.
    """
    return Response(result.to_response(), status=result.status_code)


def invalid_data_response(serializer):
    """422 response in the shared failure envelope for serializer errors."""
    result = ServiceResult.failure(
        "Invalid data",
        error_code=VALIDATION_ERROR,
        errors=serializer.errors,
    )
    return service_failure_response(result)
