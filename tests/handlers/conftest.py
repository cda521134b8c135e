import base64
import json
from collections.abc import Callable
from types import SimpleNamespace
from typing import Any

import pytest


@pytest.fixture
def lambda_context(monkeypatch):
    context = SimpleNamespace(
        aws_request_id="test-request-id",
        function_name="test-function",
        memory_limit_in_mb=256,
        invoked_function_arn="arn:aws:lambda:us-east-1:000000000000:function:test",
        log_group_name="/aws/lambda/test-function",
        log_stream_name="2024/01/01/[$LATEST]test",
    )

    monkeypatch.setattr(
        "aws_lambda_powertools.utilities.typing.LambdaContext",
        lambda: context,
        raising=False,
    )

    return context


@pytest.fixture
def upload_file_payload() -> Callable[..., dict[str, str]]:
    """
    Build one entry of the upload request's `files` array.

    Usage:
        upload_file_payload(png_bytes, file_name="a.png", content_type="image/png")
    """

    def _payload(
        data: bytes,
        *,
        file_name: str = "photo.png",
        content_type: str = "image/png",
    ) -> dict[str, str]:
        return {
            "file_name": file_name,
            "content_type": content_type,
            "file": base64.b64encode(data).decode("utf-8"),
        }

    return _payload


@pytest.fixture
def upload_event() -> Callable[[list[dict[str, str]]], dict[str, Any]]:
    def _event(files: list[dict[str, str]]) -> dict[str, Any]:
        return {
            "httpMethod": "POST",
            "path": "/v1/photos",
            "body": json.dumps({"files": files}),
        }

    return _event


@pytest.fixture
def photo_event() -> Callable[..., dict[str, Any]]:
    """API Gateway event addressing a single photo by path parameter."""

    def _event(photo_id: Any, *, method: str = "GET", path: str | None = None) -> dict[str, Any]:
        return {
            "httpMethod": method,
            "path": path or f"/v1/photos/{photo_id}",
            "pathParameters": {"photo_id": str(photo_id)},
        }

    return _event


@pytest.fixture
def list_event() -> dict[str, Any]:
    return {"httpMethod": "GET", "path": "/v1/photos"}


@pytest.fixture
def options_event() -> dict[str, Any]:
    return {"httpMethod": "OPTIONS", "path": "/v1/photos"}
