# ============================================
# planning/views/utils.py
# ============================================
"""
Shared tooling for the planning APIViews: drf-spectacular helpers,
pagination and request-to-actor mapping.
"""
from django.conf import settings
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, inline_serializer
from rest_framework import serializers
from rest_framework.pagination import PageNumberPagination

from planning.exceptions import BadRequest

# ---- Reusable error schema
ErrorSerializer = inline_serializer(
    name="PlanningError",
    fields={
        "detail": serializers.CharField(),
        "code": serializers.CharField(required=False),
    }
)

# ---- Param helpers

def path_int(name: str, description: str):
    return OpenApiParameter(name, OpenApiTypes.INT, OpenApiParameter.PATH, description=description)

def path_str(name: str, description: str):
    return OpenApiParameter(name, OpenApiTypes.STR, OpenApiParameter.PATH, description=description)

def q_int(name: str, description: str, required: bool = False, many: bool = False):
    return OpenApiParameter(
        name, OpenApiTypes.INT, OpenApiParameter.QUERY,
        required=required, description=description, many=many
    )

def q_str(name: str, description: str, required: bool = False, many: bool = False):
    return OpenApiParameter(
        name, OpenApiTypes.STR, OpenApiParameter.QUERY,
        required=required, description=description, many=many
    )

# ---- Convenience for common responses

def std_errors(extra: dict | None = None):
    """Standard error response mapping you can merge into responses=..."""
    errs = {
        400: OpenApiResponse(ErrorSerializer, description="Bad Request"),
        401: OpenApiResponse(ErrorSerializer, description="Unauthorized"),
        403: OpenApiResponse(ErrorSerializer, description="Forbidden"),
        404: OpenApiResponse(ErrorSerializer, description="Not Found"),
    }
    if extra:
        errs.update(extra)
    return errs

# ---- Pagination

class DefaultPagination(PageNumberPagination):
    page_query_param = "page"
    page_size_query_param = "page_size"

    def __init__(self):
        self.page_size = getattr(settings, "PLANNING_PAGE_SIZE", 50)
        self.max_page_size = getattr(settings, "PLANNING_MAX_PAGE_SIZE", 200)

# ---- Actor

def actor_of(request):
    """(actor_id, is_privileged) of the authenticated caller"""
    return str(request.user.id), bool(request.user.is_staff)

# ---- Query parsing

def int_param(request, name: str):
    """Optional integer query parameter; malformed values are a 400"""
    raw = request.query_params.get(name)
    if raw in (None, ''):
        return None
    try:
        return int(raw)
    except ValueError:
        raise BadRequest(f"Query parameter '{name}' must be an integer")


def int_list_param(request, name: str):
    """Repeatable integer query parameter (``?name=1&name=2``)"""
    values = []
    for raw in request.query_params.getlist(name):
        try:
            values.append(int(raw))
        except ValueError:
            raise BadRequest(f"Query parameter '{name}' must be an integer")
    return values
