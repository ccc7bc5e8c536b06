"""
DRF exception handler producing the API's error envelope.

Service errors and DRF's own exceptions become ``{message, error_code}``
responses; anything unexpected becomes a 500.
"""

import logging

from django.conf import settings
from rest_framework import status
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler

from .exceptions import ErrorCode, TaskServiceError

logger = logging.getLogger(__name__)

_STATUS_CODES = {
    status.HTTP_400_BAD_REQUEST: ErrorCode.ERR_INVALID_INPUT,
    status.HTTP_401_UNAUTHORIZED: ErrorCode.ERR_NOT_AUTHENTICATED,
    status.HTTP_403_FORBIDDEN: ErrorCode.ERR_FORBIDDEN,
    status.HTTP_404_NOT_FOUND: ErrorCode.ERR_NOT_FOUND,
}


def api_exception_handler(exc, context):
    """
    DRF exception handler producing the API's error envelope.

    - TaskServiceError -> its own status with {message, error_code}
    - DRF exceptions (auth, validation, 404, 405 ...) -> DRF's status,
      reshaped; validation errors keep their field errors under 'errors'
    - anything else -> 500 {message: "Server error", error}
    """
    if isinstance(exc, TaskServiceError):
        return Response(
            {'message': exc.message, 'error_code': exc.code.value},
            status=exc.status_code
        )

    response = exception_handler(exc, context)

    if response is not None:
        code = _STATUS_CODES.get(response.status_code, ErrorCode.ERR_REQUEST)
        if isinstance(exc, ValidationError):
            response.data = {
                'message': 'Invalid input data.',
                'error_code': code.value,
                'errors': response.data,
            }
        else:
            detail = response.data.get('detail') if isinstance(response.data, dict) else None
            response.data = {
                'message': str(detail) if detail else 'Request failed',
                'error_code': code.value,
            }
        return response

    view = context.get('view') if context else None
    logger.error("Unhandled error in %s", getattr(view, "__name__", view), exc_info=exc)
    error = str(exc) if settings.EXPOSE_INTERNAL_ERRORS else 'Internal error'
    return Response(
        {'message': 'Server error', 'error': error, 'error_code': ErrorCode.ERR_SERVER.value},
        status=status.HTTP_500_INTERNAL_SERVER_ERROR
    )
