from datetime import datetime

from pydantic import BaseModel, Field

from core.models.photo import Photo


class GetPhotoRequest(BaseModel):
    """Validation model for get photo request."""

    photo_id: int = Field(..., gt=0, description="Photo ID to retrieve")


class PhotoDetail(BaseModel):
    """Photo metadata as exposed to API callers."""

    id: int
    original_file_name: str
    file_size: int
    mime_type: str
    width: int | None = None
    height: int | None = None
    uploaded_at: datetime
    file_url: str = Field(..., description="Relative URL serving the photo bytes")

    @classmethod
    def from_photo(cls, photo: Photo) -> "PhotoDetail":
        return cls(
            id=photo.id,
            original_file_name=photo.original_file_name,
            file_size=photo.file_size,
            mime_type=photo.mime_type,
            width=photo.width,
            height=photo.height,
            uploaded_at=photo.uploaded_at,
            file_url=f"/v1/photos/{photo.id}/file",
        )
