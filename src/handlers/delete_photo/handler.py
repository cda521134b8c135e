"""
Lambda handler responsible for deleting a photo.
"""

from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.typing import LambdaContext

from core.models.errors import MetadataOperationFailedError
from core.utils.constants import METRICS_NAMESPACE
from core.utils.decorators import api_gateway_handler
from core.utils.response import ResponseBuilder
from core.utils.time import utc_now_iso
from core.utils.validators import validate_request

from .models import DeletePhotoRequest, DeletePhotoResponse
from .service import DeleteService

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics(namespace=METRICS_NAMESPACE)


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Handle photo deletion requests.

    This function:
    - Extracts the photo identifier from API Gateway path parameters
    - Delegates deletion to the service layer
    - Reports unknown ids as 404 and metadata failures as 500

    Args:
        event: API Gateway Lambda proxy event
        context: AWS Lambda execution context

    Returns:
        API Gateway-compatible HTTP response
    """
    request_id = getattr(context, "aws_request_id", None)

    logger.info(
        "Received photo delete request",
        extra={
            "http_method": event.get("httpMethod"),
            "path": event.get("path"),
            "request_id": request_id,
        },
    )

    path_params = event.get("pathParameters") or {}

    is_valid, result = validate_request(
        DeletePhotoRequest,
        {"photo_id": path_params.get("photo_id")},
        request_id=request_id,
    )
    if not is_valid:
        logger.warning("Request validation failed", extra={"path_params": path_params})
        return result

    request: DeletePhotoRequest = result
    service = DeleteService()

    try:
        deleted = service.delete_photo(request.photo_id)
    except MetadataOperationFailedError as exc:
        logger.exception("Deletion failed", extra={"photo_id": request.photo_id})
        return ResponseBuilder.internal_error(exc.message, request_id=request_id)

    if not deleted:
        return ResponseBuilder.not_found(
            f"Photo not found: {request.photo_id}",
            request_id=request_id,
        )

    metrics.add_metric(name="PhotosDeleted", unit=MetricUnit.Count, value=1)

    response = DeletePhotoResponse(
        photo_id=request.photo_id,
        message="Photo deleted successfully",
        deleted_at=utc_now_iso(),
    )

    return ResponseBuilder.ok(response.model_dump(), request_id=request_id)
