"""
Error taxonomy for the task service.

Service functions raise the ``TaskServiceError`` subclasses below;
``tasks.handlers.api_exception_handler`` turns them into responses.
"""

from enum import Enum
from typing import Optional

from rest_framework import status


class ErrorCode(Enum):
    """Error codes included in every error response."""
    ERR_INVALID_INPUT = "ERR_INVALID_INPUT"
    ERR_NOT_FOUND = "ERR_NOT_FOUND"
    ERR_FORBIDDEN = "ERR_FORBIDDEN"
    ERR_NOT_AUTHENTICATED = "ERR_NOT_AUTHENTICATED"
    ERR_REQUEST = "ERR_REQUEST"
    ERR_SERVER = "ERR_SERVER"


class TaskServiceError(Exception):
    """Base class for failures the service detects explicitly."""

    code = ErrorCode.ERR_REQUEST
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Request failed"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidInput(TaskServiceError):
    code = ErrorCode.ERR_INVALID_INPUT
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid input"


class TaskNotFound(TaskServiceError):
    code = ErrorCode.ERR_NOT_FOUND
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Task not found"


class Forbidden(TaskServiceError):
    code = ErrorCode.ERR_FORBIDDEN
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Not authorized"
