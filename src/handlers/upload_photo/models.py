"""Pydantic models for photo upload request/response."""

import base64
import binascii

from aws_lambda_powertools import Logger
from pydantic import BaseModel, ConfigDict, Field, field_validator

from core.models.photo import UploadResult

logger = Logger(UTC=True)


class UploadFile(BaseModel):
    """A single file in an upload request."""

    model_config = ConfigDict(str_strip_whitespace=True)

    file_name: str = Field(..., min_length=1, max_length=255, description="Original file name")
    content_type: str = Field(..., min_length=1, max_length=100, description="Declared MIME type")
    file: str = Field(..., description="Base64 encoded file content")

    @field_validator("file")
    @classmethod
    def validate_file(cls, value: str) -> str:
        """
        Validate that the file is well-formed base64.

        Size and emptiness are checked by the upload service against the
        configured limits, so an empty string is accepted here.
        """
        try:
            base64.b64decode(value, validate=True)
        except (binascii.Error, ValueError) as e:
            logger.error(f"File validation error: Invalid base64 - {e}")
            raise ValueError("Invalid base64 encoded file") from e

        return value

    def decode(self) -> bytes:
        return base64.b64decode(self.file)


class UploadPhotosRequest(BaseModel):
    """Validation model for photo upload request."""

    files: list[UploadFile] = Field(..., min_length=1, description="Files to upload")


class UploadPhotosResponse(BaseModel):
    """Per-file outcomes of an upload request."""

    results: list[UploadResult] = Field(..., description="One result per submitted file")
    uploaded_count: int = Field(..., description="Number of files stored")
    failed_count: int = Field(..., description="Number of files rejected or failed")
