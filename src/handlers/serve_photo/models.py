from pydantic import BaseModel, Field


class ServePhotoRequest(BaseModel):
    """Validation model for photo file request."""

    photo_id: int = Field(..., gt=0, description="Photo ID whose file is served")
