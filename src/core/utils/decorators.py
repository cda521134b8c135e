"""
Common decorators and helpers for API Gateway Lambda handlers.
"""

from __future__ import annotations

import traceback
from collections.abc import Callable
from functools import wraps
from http import HTTPStatus
from typing import Any, NamedTuple

from aws_lambda_powertools import Logger

from core.models.errors import NotFoundError, PhotoServiceError, ValidationError
from core.utils.response import JsonDict, ResponseBuilder

logger = Logger(service="api-gateway-handler", UTC=True)

_FRIENDLY_PREFIXES = (
    "Invalid",
    "Missing",
    "Required",
    "Must",
    "Cannot",
    "Unable to",
    "Photo",
    "File",
)


class _ErrorMapping(NamedTuple):
    exc_types: tuple[type[BaseException], ...]
    status: HTTPStatus
    log_message: str
    # None means derive the message from the exception
    user_message: str | None = None
    level: str = "warning"


# First match wins. PermissionError and TimeoutError must stay ahead of OSError.
_BUILTIN_ERRORS: tuple[_ErrorMapping, ...] = (
    _ErrorMapping(
        (ValueError, KeyError, TypeError, AttributeError),
        HTTPStatus.BAD_REQUEST,
        "Validation error in handler",
    ),
    _ErrorMapping(
        (PermissionError,),
        HTTPStatus.FORBIDDEN,
        "Permission denied in handler",
        "You don't have permission to perform this action.",
    ),
    _ErrorMapping(
        (FileNotFoundError, LookupError),
        HTTPStatus.NOT_FOUND,
        "Resource not found",
        "The requested resource was not found.",
    ),
    _ErrorMapping(
        (MemoryError,),
        HTTPStatus.REQUEST_ENTITY_TOO_LARGE,
        "Memory error - payload too large",
        "The file is too large to process. Please use a smaller file.",
    ),
    _ErrorMapping(
        (TimeoutError,),
        HTTPStatus.GATEWAY_TIMEOUT,
        "Request timeout",
        "The request took too long to process. Please try again.",
        "exception",
    ),
    _ErrorMapping(
        (ConnectionError, OSError),
        HTTPStatus.SERVICE_UNAVAILABLE,
        "Connection error",
        "Unable to connect to required services. Please try again later.",
        "exception",
    ),
)

_UNEXPECTED_ERROR = _ErrorMapping(
    (Exception,),
    HTTPStatus.INTERNAL_SERVER_ERROR,
    "Unexpected error in handler",
    "We're experiencing technical difficulties. Please try again in a few moments.",
    "exception",
)


def _get_user_friendly_message(exc: Exception) -> str:
    """
    Convert technical exception messages into user-friendly ones.

    Messages that already read as user-facing are kept as is.
    """
    exc_str = str(exc)

    if exc_str and exc_str.startswith(_FRIENDLY_PREFIXES):
        return exc_str

    if isinstance(exc, ValueError):
        return "The provided data is invalid. Please check your input and try again."

    if isinstance(exc, (KeyError, AttributeError)):
        return "A required field is missing. Please ensure all required fields are provided."

    if isinstance(exc, TypeError):
        return "The data format is incorrect. Please check the request format."

    return "We encountered an issue processing your request. Please try again."


def _log_error(
    message: str,
    *,
    handler_name: str,
    request_id: str | None,
    exc: Exception,
    level: str = "warning",
) -> None:
    """Log an escaped handler error with its request context."""
    log_extra = {
        "handler": handler_name,
        "request_id": request_id,
        "error": str(exc),
        "error_type": type(exc).__name__,
    }

    if level == "exception":
        logger.exception(message, extra=log_extra)
    else:
        log_extra["traceback"] = traceback.format_exc()
        logger.warning(message, extra=log_extra)


def _domain_error_response(
    exc: PhotoServiceError,
    *,
    handler_name: str,
    request_id: str | None,
    cors_origin: str | None,
) -> JsonDict:
    """Not-found → 404, validation → 400, anything else in the family → 500."""
    if isinstance(exc, NotFoundError):
        status, log_message, level = HTTPStatus.NOT_FOUND, "Photo resource not found", "warning"
    elif isinstance(exc, ValidationError):
        status, log_message, level = (
            HTTPStatus.BAD_REQUEST,
            "Domain validation error in handler",
            "warning",
        )
    else:
        status, log_message, level = (
            HTTPStatus.INTERNAL_SERVER_ERROR,
            "Photo service failure",
            "exception",
        )

    _log_error(
        log_message,
        handler_name=handler_name,
        request_id=request_id,
        exc=exc,
        level=level,
    )

    return ResponseBuilder.error(
        status=status,
        # 5xx bodies carry the specific failure code; 4xx use the status name
        error=exc.error_code if status >= HTTPStatus.INTERNAL_SERVER_ERROR else None,
        message=exc.message,
        request_id=request_id,
        cors_origin=cors_origin,
    )


def _builtin_error_response(
    exc: Exception,
    *,
    handler_name: str,
    request_id: str | None,
    cors_origin: str | None,
) -> JsonDict:
    mapping = next(
        (m for m in _BUILTIN_ERRORS if isinstance(exc, m.exc_types)),
        _UNEXPECTED_ERROR,
    )

    _log_error(
        mapping.log_message,
        handler_name=handler_name,
        request_id=request_id,
        exc=exc,
        level=mapping.level,
    )

    return ResponseBuilder.error(
        status=mapping.status,
        message=mapping.user_message or _get_user_friendly_message(exc),
        request_id=request_id,
        cors_origin=cors_origin,
    )


def api_gateway_handler(
    func: Callable[..., JsonDict],
) -> Callable[..., JsonDict]:
    """
    Decorator for API Gateway Lambda handlers.

    Provides:
    - Automatic CORS preflight (OPTIONS) handling
    - Mapping of escaped exceptions to HTTP error responses
    - Request ID tracking and structured logging

    Example:
        @api_gateway_handler
        def handler(event, context):
            return ResponseBuilder.ok({"photos": []})
    """

    @wraps(func)
    def wrapper(
        event: Any,
        context: Any,
        *,
        cors_origin: str | None = None,
    ) -> JsonDict:
        if event.get("httpMethod") == "OPTIONS":
            return ResponseBuilder.no_content(cors_origin=cors_origin)

        request_id = getattr(context, "aws_request_id", None)

        try:
            return func(event, context)
        except PhotoServiceError as exc:
            return _domain_error_response(
                exc,
                handler_name=func.__name__,
                request_id=request_id,
                cors_origin=cors_origin,
            )
        except Exception as exc:
            return _builtin_error_response(
                exc,
                handler_name=func.__name__,
                request_id=request_id,
                cors_origin=cors_origin,
            )

    return wrapper
