import logging

from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.exceptions import ValidationError as DRFValidationError
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class Unauthorized(APIException):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Unauthorized"
    default_code = "unauthorized"


class Forbidden(APIException):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "Forbidden"
    default_code = "forbidden"


class NotFound(APIException):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Not found"
    default_code = "not_found"


class DuplicateUser(APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Username already exists"
    default_code = "duplicate_user"


class DuplicateSlug(APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Slug must be unique"
    default_code = "duplicate_slug"


class ValidationError(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Required fields missing"
    default_code = "invalid"


class UpstreamError(APIException):
    status_code = status.HTTP_502_BAD_GATEWAY
    default_detail = "Failed to get AI response"
    default_code = "upstream_error"


class InvalidFile(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid file type"
    default_code = "invalid_file"


class FileTooLarge(InvalidFile):
    status_code = status.HTTP_413_REQUEST_ENTITY_TOO_LARGE
    default_detail = "File too large"
    default_code = "file_too_large"


def api_exception_handler(exc, context):
    """Render every API error as ``{"error": message}``.

    Serializer errors keep their field breakdown under ``issues``.
    """
    response = exception_handler(exc, context)
    if response is None:
        # Unhandled errors still go through Django's 500 handling
        return None

    if isinstance(exc, DRFValidationError):
        response.data = {"error": "Invalid data", "issues": exc.detail}
    else:
        detail = getattr(exc, "detail", None) or str(exc)
        response.data = {"error": str(detail)}

    if response.status_code >= 500:
        logger.error("API error %s on %s: %s", response.status_code, _view_name(context), exc)
    return response


def _view_name(context) -> str:
    view = context.get("view") if context else None
    return type(view).__name__ if view is not None else "unknown view"
