"""
Core Application - Infrastructure & Base Classes

Generic building blocks shared by the domain apps (authentication, chat).
Nothing in here knows about users, chats or messages.

Models (import from core.models):
    - BaseModel: Abstract model with timestamps (created_at, updated_at)

Services (import from core.services):
    - BaseService: Base class for service layer (logger, atomic())
    - ServiceResult: Standard result wrapper for success/failure handling
    - Error codes: VALIDATION_ERROR, NOT_FOUND, PERMISSION_DENIED, STORAGE_ERROR

Views (import from core.views):
    - health_check: Database connectivity probe

OpenAPI (core.openapi):
    - group_api_endpoints: drf-spectacular postprocessing hook
"""
