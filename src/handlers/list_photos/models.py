"""
Pydantic models for the list photos response.
"""

from pydantic import BaseModel, Field, StrictInt

from handlers.get_photo.models import PhotoDetail


class ListPhotosResponse(BaseModel):
    """Gallery listing, newest first."""

    photos: list[PhotoDetail] = Field(..., description="Photos ordered by upload time, newest first")
    total_count: StrictInt = Field(..., description="Number of photos in the gallery")
