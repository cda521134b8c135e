"""
Centralized API response builder for AWS Lambda / API Gateway.
"""

from __future__ import annotations

import base64
import json
from http import HTTPStatus
from typing import Any

from core.utils.constants import (
    CORS_HEADERS,
    CORS_METHODS,
    CORS_ORIGIN,
    DEFAULT_CONTENT_TYPE,
    ERROR_CODE_VALIDATION_FAILED,
    EXPOSE_HEADERS,
)
from core.utils.time import utc_now_iso

JsonDict = dict[str, Any]


class ResponseBuilder:
    """Factory for API Gateway-compatible HTTP responses.

    JSON bodies always carry `request_id` when one is known. Error bodies
    share one shape: `error`, `message`, `timestamp` and optional `details`.
    """

    CORS: dict[str, str] = {
        "Access-Control-Allow-Origin": CORS_ORIGIN,
        "Access-Control-Allow-Headers": CORS_HEADERS,
        "Access-Control-Allow-Methods": CORS_METHODS,
        "Access-Control-Expose-Headers": EXPOSE_HEADERS,
    }

    @classmethod
    def build_headers(
        cls,
        content_type: str = DEFAULT_CONTENT_TYPE,
        cors_origin: str | None = None,
    ) -> dict[str, str]:
        headers = {"Content-Type": content_type, **cls.CORS}
        if cors_origin:
            headers["Access-Control-Allow-Origin"] = cors_origin
        return headers

    @classmethod
    def json_response(
        cls,
        status: HTTPStatus,
        body: JsonDict | None = None,
        *,
        request_id: str | None = None,
        cors_origin: str | None = None,
    ) -> JsonDict:
        payload = dict(body or {})
        if request_id:
            payload["request_id"] = request_id

        return {
            "statusCode": status.value,
            "headers": cls.build_headers(cors_origin=cors_origin),
            "body": json.dumps(payload),
        }

    @classmethod
    def ok(cls, body: JsonDict, **kwargs: Any) -> JsonDict:
        return cls.json_response(HTTPStatus.OK, body, **kwargs)

    @classmethod
    def no_content(cls, *, cors_origin: str | None = None) -> JsonDict:
        """Empty 204, used for CORS preflight."""
        return {
            "statusCode": HTTPStatus.NO_CONTENT.value,
            "headers": cls.build_headers(cors_origin=cors_origin),
            "body": "",
        }

    @classmethod
    def error(
        cls,
        *,
        status: HTTPStatus,
        message: str,
        error: str | None = None,
        details: JsonDict | None = None,
        request_id: str | None = None,
        cors_origin: str | None = None,
    ) -> JsonDict:
        payload: JsonDict = {
            "error": error or status.name,
            "message": message,
            "timestamp": utc_now_iso(),
        }
        if details:
            payload["details"] = details

        return cls.json_response(status, payload, request_id=request_id, cors_origin=cors_origin)

    @classmethod
    def bad_request(cls, message: str, **kwargs: Any) -> JsonDict:
        return cls.error(status=HTTPStatus.BAD_REQUEST, message=message, **kwargs)

    @classmethod
    def validation_error(cls, *, message: str, **kwargs: Any) -> JsonDict:
        """400 carrying sanitized field errors under `details`."""
        return cls.error(
            status=HTTPStatus.BAD_REQUEST,
            error=ERROR_CODE_VALIDATION_FAILED,
            message=message,
            **kwargs,
        )

    @classmethod
    def not_found(cls, message: str = "Resource not found", **kwargs: Any) -> JsonDict:
        return cls.error(status=HTTPStatus.NOT_FOUND, message=message, **kwargs)

    @classmethod
    def internal_error(cls, message: str = "Internal server error", **kwargs: Any) -> JsonDict:
        return cls.error(status=HTTPStatus.INTERNAL_SERVER_ERROR, message=message, **kwargs)

    @classmethod
    def binary_response(
        cls,
        content: bytes,
        *,
        content_type: str,
        cache_control: str | None = None,
        etag: str | None = None,
        cors_origin: str | None = None,
    ) -> JsonDict:
        """200 carrying raw file bytes, base64-encoded for API Gateway."""
        headers = cls.build_headers(content_type=content_type, cors_origin=cors_origin)
        headers["Content-Length"] = str(len(content))

        if cache_control:
            headers["Cache-Control"] = cache_control
        if etag:
            headers["ETag"] = etag

        return {
            "statusCode": HTTPStatus.OK.value,
            "headers": headers,
            "body": base64.b64encode(content).decode("utf-8"),
            "isBase64Encoded": True,
        }
