from rest_framework.views import exception_handler
from rest_framework.response import Response
from rest_framework import status
from django.core.exceptions import ValidationError
from django.db import IntegrityError, DatabaseError
from django.conf import settings
import logging

logger = logging.getLogger(__name__)

STATUS_MESSAGES = {
    400: 'Validation error',
    404: 'Resource not found',
    405: 'Method not allowed',
    500: 'Internal server error',
}


def error_body(message, details, status_code):
    return {
        'error': True,
        'message': message,
        'details': details,
        'status_code': status_code,
    }


def request_path(context):
    request = context.get('request') if context else None
    return getattr(request, 'path', '-')


def custom_exception_handler(exc, context):
    """
    Wrap every API failure in ``{error, message, details, status_code}``.

    Store failures are logged and reported to the caller; the action is
    abandoned and never retried here.
    """
    response = exception_handler(exc, context)
    if response is not None:
        response.data = error_body(
            STATUS_MESSAGES.get(response.status_code, 'An error occurred'),
            response.data,
            response.status_code,
        )
        return response

    if isinstance(exc, ValidationError):
        # model-level checks, e.g. a second settings row
        logger.warning("Validation error in %s: %s", request_path(context), exc)
        code = status.HTTP_400_BAD_REQUEST
        body = error_body('Validation error', {'non_field_errors': exc.messages}, code)
    elif isinstance(exc, IntegrityError):
        logger.error("Integrity error in %s: %s", request_path(context), exc)
        code = status.HTTP_400_BAD_REQUEST
        body = error_body(
            'Database integrity error',
            {'error': 'This operation violates database constraints'},
            code,
        )
    elif isinstance(exc, DatabaseError):
        logger.error("Store operation failed in %s: %s", request_path(context), exc)
        code = status.HTTP_503_SERVICE_UNAVAILABLE
        body = error_body('Store operation failed', {'error': str(exc)}, code)
    else:
        logger.exception("Unexpected error in %s", request_path(context))
        code = status.HTTP_500_INTERNAL_SERVER_ERROR
        body = error_body(
            'An unexpected error occurred',
            {'error': str(exc)} if settings.DEBUG else {},
            code,
        )

    return Response(body, status=code)
