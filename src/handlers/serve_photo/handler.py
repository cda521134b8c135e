"""
Lambda handler responsible for serving photo bytes.
"""

from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext

from core.models.errors import NotFoundError, PhotoServiceError
from core.utils.constants import METRICS_NAMESPACE, PHOTO_CACHE_CONTROL
from core.utils.decorators import api_gateway_handler
from core.utils.response import ResponseBuilder
from core.utils.validators import validate_request

from .models import ServePhotoRequest
from .service import ServeService, build_etag

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics(namespace=METRICS_NAMESPACE)


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Serve a photo file with its stored content type.

    The response is cacheable for a year and carries an ETag built from
    the photo id and upload time.

    Args:
        event: API Gateway event payload.
        context: AWS Lambda runtime context.

    Returns:
        Base64-encoded binary response, or a JSON error.
    """
    request_id = getattr(context, "aws_request_id", None)

    logger.info(
        "Received photo file request",
        extra={
            "http_method": event.get("httpMethod"),
            "path": event.get("path"),
            "request_id": request_id,
        },
    )

    path_params = event.get("pathParameters") or {}

    is_valid, result = validate_request(
        ServePhotoRequest,
        {"photo_id": path_params.get("photo_id")},
        request_id=request_id,
    )
    if not is_valid:
        logger.warning("Request validation failed", extra={"path_params": path_params})
        return result

    request: ServePhotoRequest = result

    try:
        photo, content = ServeService().fetch_photo_file(request.photo_id)
    except NotFoundError as exc:
        return ResponseBuilder.not_found(exc.message, request_id=request_id)
    except PhotoServiceError as exc:
        logger.exception("Error serving photo", extra={"photo_id": request.photo_id})
        return ResponseBuilder.internal_error(exc.message, request_id=request_id)

    return ResponseBuilder.binary_response(
        content,
        content_type=photo.mime_type,
        cache_control=PHOTO_CACHE_CONTROL,
        etag=build_etag(photo),
    )
