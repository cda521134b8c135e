"""
Lambda handler responsible for photo upload.
"""

import io
from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.typing import LambdaContext

from core.utils.constants import METRICS_NAMESPACE
from core.utils.decorators import api_gateway_handler
from core.utils.response import ResponseBuilder
from core.utils.validators import parse_json_body, validate_request

from .models import UploadPhotosRequest, UploadPhotosResponse
from .service import UploadService

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics(namespace=METRICS_NAMESPACE)


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Handle photo upload requests.

    Each submitted file is uploaded independently; one file failing does
    not affect the others. The response lists a result per file.

    Expected API Gateway event structure:
    {
        "body": "{\"files\": [{\"file_name\": ..., \"content_type\": ..., \"file\": <base64>}]}"
    }

    Args:
        event: API Gateway Lambda proxy event containing the upload payload
        context: AWS Lambda execution context

    Returns:
        API Gateway-compatible HTTP response with per-file upload results
    """
    request_id = getattr(context, "aws_request_id", None)

    logger.info(
        "Received photo upload request",
        extra={
            "http_method": event.get("httpMethod"),
            "path": event.get("path"),
            "request_id": request_id,
        },
    )

    body = parse_json_body(event)
    if body is None:
        logger.warning("Invalid JSON body received")
        return ResponseBuilder.bad_request("Invalid JSON body", request_id=request_id)

    is_valid, result = validate_request(UploadPhotosRequest, body, request_id=request_id)
    if not is_valid:
        logger.warning("Request validation failed")
        return result

    request: UploadPhotosRequest = result
    service = UploadService()

    results = []
    for upload in request.files:
        file_data = upload.decode()
        results.append(
            service.upload_photo(
                file_name=upload.file_name,
                content_type=upload.content_type,
                size_bytes=len(file_data),
                content=io.BytesIO(file_data),
            )
        )

    uploaded = sum(1 for r in results if r.success)
    failed = len(results) - uploaded

    metrics.add_metric(name="PhotosUploaded", unit=MetricUnit.Count, value=uploaded)
    metrics.add_metric(name="PhotoUploadsFailed", unit=MetricUnit.Count, value=failed)

    response = UploadPhotosResponse(
        results=results,
        uploaded_count=uploaded,
        failed_count=failed,
    )

    return ResponseBuilder.ok(response.model_dump(), request_id=request_id)
