from rest_framework.views import exception_handler
from rest_framework.response import Response
from rest_framework import status
import logging

logger = logging.getLogger(__name__)


class BusinessLogicException(Exception):
    """
    Raised when a domain rule is violated (e.g. 'Insufficient stock for Apple').
    """
    def __init__(self, message, code="business_error"):
        self.message = message
        self.code = code
        super().__init__(message)


class DuplicateResourceException(BusinessLogicException):
    """
    Uniqueness conflict (e.g. a customer email that is already taken).
    """
    def __init__(self, message, code="duplicate"):
        super().__init__(message, code=code)


def first_error_message(detail):
    """
    Flattens a DRF ValidationError.detail into its first human readable message.
    Returns None when the structure holds no message at all.
    """
    if isinstance(detail, dict):
        values = detail.values()
    elif isinstance(detail, (list, tuple)):
        values = detail
    else:
        return str(detail)

    for value in values:
        message = first_error_message(value)
        if message:
            return message
    return None


def custom_exception_handler(exc, context):
    # Call REST framework's default exception handler first
    response = exception_handler(exc, context)

    # Handle custom BusinessLogicException
    if isinstance(exc, BusinessLogicException):
        status_code = status.HTTP_400_BAD_REQUEST
        if exc.code == "not_found":
            status_code = status.HTTP_404_NOT_FOUND
        elif exc.code == "duplicate":
            status_code = status.HTTP_409_CONFLICT
        return Response({"error": exc.message, "code": exc.code}, status=status_code)

    # If response is None, it's an unhandled server error (500)
    if response is None:
        logger.error(f"Unhandled Exception: {exc}", exc_info=True)
        return Response(
            {"error": "Internal Server Error", "code": "server_error"},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR
        )

    return response
