"""
API error envelope.

Every error leaving the API has the shape ``{"message": "..."}``; validation
failures additionally carry the per-field details under ``errors``.
Unexpected exceptions are logged with request context and answered with a
generic 500 so internals never reach the client.
"""

import logging

from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework import status
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class ConflictError(ValidationError):
    """Uniqueness conflict, reported as a plain 400 with a message."""

    default_detail = 'Resource already exists.'
    default_code = 'conflict'


def _first_message(detail):
    """Pick the most useful human-readable message out of DRF error detail."""
    if isinstance(detail, dict):
        for key in ('message', 'detail', 'non_field_errors'):
            if key in detail:
                return _first_message(detail[key])
        for field, value in detail.items():
            return f"{field}: {_first_message(value)}"
        return 'Invalid input.'
    if isinstance(detail, (list, tuple)):
        if not detail:
            return 'Invalid input.'
        return _first_message(detail[0])
    return str(detail)


def envelope_exception_handler(exc, context):
    """DRF exception handler producing the ``{message}`` envelope."""

    request = context.get('request')
    view = context.get('view')
    log_context = {
        'path': request.path if request else 'unknown',
        'method': request.method if request else 'unknown',
        'view': view.__class__.__name__ if view else 'unknown',
    }

    if isinstance(exc, DjangoValidationError):
        exc = ValidationError(detail=exc.messages if hasattr(exc, 'messages') else [str(exc)])

    response = exception_handler(exc, context)

    if response is not None:
        detail = getattr(exc, 'detail', response.data)
        payload = {'message': _first_message(detail)}
        if isinstance(exc, ValidationError) and isinstance(detail, dict):
            errors = {k: v for k, v in detail.items() if k != 'message'}
            if errors:
                payload['errors'] = errors
        logger.info('API error %s (%s): %s', response.status_code, exc.__class__.__name__, log_context)
        response.data = payload
        return response

    logger.exception('Unexpected error: %s', log_context)
    return Response(
        {'message': 'Server error'},
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
