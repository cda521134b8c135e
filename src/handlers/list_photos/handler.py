"""
Lambda handler responsible for listing the photo gallery.
"""

from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext

from core.models.errors import MetadataOperationFailedError
from core.utils.constants import METRICS_NAMESPACE
from core.utils.decorators import api_gateway_handler
from core.utils.response import ResponseBuilder
from handlers.get_photo.models import PhotoDetail

from .models import ListPhotosResponse
from .service import ListService

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics(namespace=METRICS_NAMESPACE)


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Handle requests to list all photos, newest first.

    Args:
        event: API Gateway Lambda proxy event
        context: AWS Lambda execution context

    Returns:
        API Gateway-compatible HTTP response
    """
    request_id = getattr(context, "aws_request_id", None)

    logger.info(
        "Received photo list request",
        extra={
            "http_method": event.get("httpMethod"),
            "path": event.get("path"),
            "request_id": request_id,
        },
    )

    try:
        photos = ListService().list_photos()
    except MetadataOperationFailedError as exc:
        logger.exception("Error listing photos")
        return ResponseBuilder.internal_error(exc.message, request_id=request_id)

    response = ListPhotosResponse(
        photos=[PhotoDetail.from_photo(photo) for photo in photos],
        total_count=len(photos),
    )

    return ResponseBuilder.ok(response.model_dump(mode="json"), request_id=request_id)
