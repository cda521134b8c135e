"""Global constants used throughout the application.

This module centralizes error codes, upload defaults, storage layout and
environment variable names shared by the handlers, services and
infrastructure layers.
"""

from typing import Final

# ============================================================================
# Error Codes
# ============================================================================

# Validation Errors
ERROR_CODE_VALIDATION_FAILED = "VALIDATION_FAILED"
ERROR_CODE_UNSUPPORTED_MIME_TYPE = "UNSUPPORTED_MIME_TYPE"
ERROR_CODE_FILE_SIZE_EXCEEDED = "FILE_SIZE_EXCEEDED"
ERROR_CODE_EMPTY_FILE = "EMPTY_FILE"

# Not Found Errors
ERROR_CODE_RESOURCE_NOT_FOUND = "NOT_FOUND"
ERROR_CODE_PHOTO_NOT_FOUND = "PHOTO_NOT_FOUND"
ERROR_CODE_PHOTO_FILE_MISSING = "PHOTO_FILE_MISSING"

# Storage Errors
ERROR_CODE_STORAGE = "STORAGE_ERROR"
ERROR_CODE_CONTAINER_UNAVAILABLE = "CONTAINER_UNAVAILABLE"
ERROR_CODE_PHOTO_UPLOAD_FAILED = "PHOTO_UPLOAD_FAILED"
ERROR_CODE_PHOTO_DOWNLOAD_FAILED = "PHOTO_DOWNLOAD_FAILED"
ERROR_CODE_PHOTO_DELETE_FAILED = "PHOTO_DELETE_FAILED"

# Metadata Errors
ERROR_CODE_METADATA_OPERATION_FAILED = "METADATA_OPERATION_FAILED"
ERROR_CODE_METADATA_CREATE_FAILED = "METADATA_CREATE_FAILED"
ERROR_CODE_METADATA_FETCH_FAILED = "METADATA_FETCH_FAILED"
ERROR_CODE_METADATA_DELETE_FAILED = "METADATA_DELETE_FAILED"
ERROR_CODE_METADATA_LIST_FAILED = "METADATA_LIST_FAILED"

# ============================================================================
# File Upload Constraints
# ============================================================================

BYTES_PER_MB = 1024 * 1024

DEFAULT_MAX_FILE_SIZE_BYTES = 10 * BYTES_PER_MB  # 10MB in bytes

DEFAULT_ALLOWED_MIME_TYPES: Final[tuple[str, ...]] = (
    "image/jpeg",
    "image/png",
    "image/gif",
    "image/webp",
)

# Display names used when telling the caller which types are accepted
MIME_TYPE_DISPLAY_NAMES: Final[dict[str, str]] = {
    "image/jpeg": "JPEG",
    "image/png": "PNG",
    "image/gif": "GIF",
    "image/webp": "WebP",
    "image/bmp": "BMP",
    "image/tiff": "TIFF",
}

# ============================================================================
# Upload Result Messages
# ============================================================================

MESSAGE_EMPTY_FILE = "File is empty."
MESSAGE_STORAGE_WRITE_FAILED = "Error saving file. Please try again."
MESSAGE_METADATA_WRITE_FAILED = "Error saving photo information. Please try again."
MESSAGE_UNEXPECTED_UPLOAD_ERROR = "An unexpected error occurred. Please try again."

# ============================================================================
# Object Storage Layout
# ============================================================================

DEFAULT_BUCKET_NAME = "photos"
UPLOADS_PREFIX = "uploads"

OBJECT_METADATA_ORIGINAL_FILE_NAME = "original_file_name"
OBJECT_METADATA_UPLOADED_AT = "uploaded_at"
# S3 caps all user metadata on an object at 2 KB
OBJECT_METADATA_MAX_NAME_BYTES = 1024

# ============================================================================
# Delivery
# ============================================================================

PHOTO_CACHE_CONTROL = "public,max-age=31536000"  # 1 year

# ============================================================================
# Diagnostics / Observability
# ============================================================================

DIAGNOSTIC_ORPHAN_OBJECT = "ORPHAN_OBJECT"
METRICS_NAMESPACE = "PhotoAlbum"

# ============================================================================
# API Gateway Configuration
# ============================================================================

CORS_ORIGIN = "*"
CORS_METHODS = "GET,POST,DELETE,OPTIONS"
CORS_HEADERS = "Content-Type,Authorization,X-Api-Key"
EXPOSE_HEADERS = "Content-Type,Content-Length,ETag,Cache-Control"
DEFAULT_CONTENT_TYPE = "application/json"

# ============================================================================
# Environment Variable Names
# ============================================================================

ENV_DATABASE_URL = "DATABASE_URL"
ENV_PHOTO_S3_BUCKET_NAME = "PHOTO_S3_BUCKET_NAME"
ENV_AWS_ENDPOINT_URL = "AWS_ENDPOINT_URL"
ENV_AWS_REGION = "AWS_REGION"
ENV_PHOTO_MAX_FILE_SIZE_BYTES = "PHOTO_MAX_FILE_SIZE_BYTES"
ENV_PHOTO_ALLOWED_MIME_TYPES = "PHOTO_ALLOWED_MIME_TYPES"

# ============================================================================
# Helper Functions
# ============================================================================

def format_size_limit_mb(size_bytes: int) -> int:
    """Return a byte limit as whole megabytes, as shown to callers."""
    return size_bytes // BYTES_PER_MB
