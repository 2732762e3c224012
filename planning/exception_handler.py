# ============================================
# planning/exception_handler.py
# ============================================
import logging

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import IntegrityError
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

from planning.exceptions import PlanningError

logger = logging.getLogger(__name__)


def planning_exception_handler(exc, context):
    """
    DRF exception handler: APIException subclasses render as usual,
    Django validation/integrity errors become 400, anything else is logged
    and returned as a generic 500 without store details.
    """
    response = exception_handler(exc, context)
    if response is not None:
        if isinstance(exc, PlanningError) and isinstance(response.data, dict):
            response.data['code'] = exc.get_codes()
        return response

    view = context.get('view')
    view_name = view.__class__.__name__ if view is not None else '?'

    if isinstance(exc, DjangoValidationError):
        messages = exc.messages if hasattr(exc, 'messages') else [str(exc)]
        return Response(
            {'detail': '; '.join(messages), 'code': 'invalid'},
            status=status.HTTP_400_BAD_REQUEST
        )

    if isinstance(exc, IntegrityError):
        logger.warning("[api] integrity error in %s: %s", view_name, exc)
        return Response(
            {'detail': 'The request conflicts with existing data.', 'code': 'conflict'},
            status=status.HTTP_400_BAD_REQUEST
        )

    logger.exception("[api] unhandled error in %s", view_name)
    return Response(
        {'detail': 'Internal server error.', 'code': 'error'},
        status=status.HTTP_500_INTERNAL_SERVER_ERROR
    )
