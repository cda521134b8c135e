"""
Lambda handler responsible for returning one photo's metadata.
"""

from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext

from core.models.errors import MetadataOperationFailedError, NotFoundError
from core.utils.constants import METRICS_NAMESPACE
from core.utils.decorators import api_gateway_handler
from core.utils.response import ResponseBuilder
from core.utils.validators import validate_request

from .models import GetPhotoRequest, PhotoDetail
from .service import GetService

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics(namespace=METRICS_NAMESPACE)


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Handle photo detail requests.

    Args:
        event: API Gateway event payload.
        context: AWS Lambda runtime context.

    Returns:
        API Gateway-compatible response dictionary.
    """
    request_id = getattr(context, "aws_request_id", None)

    logger.info(
        "Received photo detail request",
        extra={
            "http_method": event.get("httpMethod"),
            "path": event.get("path"),
            "request_id": request_id,
        },
    )

    path_params = event.get("pathParameters") or {}

    is_valid, result = validate_request(
        GetPhotoRequest,
        {"photo_id": path_params.get("photo_id")},
        request_id=request_id,
    )
    if not is_valid:
        logger.warning("Request validation failed", extra={"path_params": path_params})
        return result

    request: GetPhotoRequest = result

    try:
        photo = GetService().get_photo(request.photo_id)
    except NotFoundError:
        return ResponseBuilder.not_found(
            f"Photo not found: {request.photo_id}",
            request_id=request_id,
        )
    except MetadataOperationFailedError as exc:
        logger.exception("Get photo failed", extra={"photo_id": request.photo_id})
        return ResponseBuilder.internal_error(exc.message, request_id=request_id)

    return ResponseBuilder.ok(
        {"photo": PhotoDetail.from_photo(photo).model_dump(mode="json")},
        request_id=request_id,
    )
