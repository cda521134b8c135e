"""Pydantic models for delete photo request/response."""

from pydantic import BaseModel, Field


class DeletePhotoRequest(BaseModel):
    """Validation model for delete photo request."""

    photo_id: int = Field(..., gt=0, description="Photo ID to delete")


class DeletePhotoResponse(BaseModel):
    """Response model for successful photo deletion."""

    photo_id: int = Field(..., description="Deleted photo ID")
    message: str = Field(..., description="Success message")
    deleted_at: str = Field(..., description="Deletion timestamp")
