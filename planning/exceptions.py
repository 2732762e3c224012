# ============================================
# planning/exceptions.py
# ============================================
"""
Domain errors raised by the planning services.

All of them are DRF ``APIException`` subclasses so views can let them
propagate and DRF renders ``{"detail": ..., "code": ...}`` with the right
HTTP status.
"""
from rest_framework import status
from rest_framework.exceptions import APIException


class PlanningError(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Invalid request.'
    default_code = 'bad_request'


class BadRequest(PlanningError):
    pass


class EntityNotFound(PlanningError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = 'Not found.'
    default_code = 'not_found'

    def __init__(self, entity: str, lookup=None):
        detail = f"{entity} not found" if lookup is None else f"{entity} with ID {lookup} not found"
        super().__init__(detail)
        self.entity = entity
        self.lookup = lookup


class KeyGenerationError(PlanningError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = 'Cannot generate key.'
    default_code = 'key_generation_failed'


class InvalidHierarchy(PlanningError):
    default_detail = 'Invalid work item hierarchy.'
    default_code = 'invalid_hierarchy'


class CircularHierarchy(PlanningError):
    default_detail = 'This change would create a circular hierarchy.'
    default_code = 'circular_hierarchy'


class InvalidStatusTransition(PlanningError):
    default_code = 'invalid_status_transition'

    def __init__(self, from_name: str, to_name: str):
        super().__init__(f"Cannot transition from '{from_name}' to '{to_name}'")
        self.from_name = from_name
        self.to_name = to_name


class DuplicateKey(PlanningError):
    default_detail = 'Duplicate key.'
    default_code = 'duplicate_key'


class Forbidden(PlanningError):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = 'You do not have permission to perform this action.'
    default_code = 'forbidden'
