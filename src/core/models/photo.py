"""Shared photo models."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, StrictBool, field_validator

from core.utils.time import ensure_utc


class Photo(BaseModel):
    """Photo metadata as stored in the catalog."""

    model_config = ConfigDict(from_attributes=True)

    id: int | None = Field(None, description="Surrogate key assigned by the metadata store")
    original_file_name: str = Field(..., max_length=255, description="Caller-supplied file name")
    stored_file_name: str = Field(..., max_length=255, description="Generated unique file name")
    file_path: str = Field(..., max_length=1024, description="Object storage key")
    file_size: int = Field(..., ge=0, description="File size in bytes")
    mime_type: str = Field(..., max_length=100, description="Declared MIME type")
    width: int | None = Field(None, description="Pixel width, if it could be probed")
    height: int | None = Field(None, description="Pixel height, if it could be probed")
    uploaded_at: datetime = Field(..., description="Commit timestamp (UTC)")

    @field_validator("uploaded_at")
    @classmethod
    def normalize_uploaded_at(cls, value: datetime) -> datetime:
        return ensure_utc(value)


class UploadResult(BaseModel):
    """Outcome of a single file upload, as shown to the caller."""

    success: StrictBool = False
    photo_id: int | None = None
    file_name: str
    error_message: str | None = None
