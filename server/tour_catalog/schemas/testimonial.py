"""Testimonial-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from .common import ObjectIdStr


class CreateTestimonialRequest(BaseModel):
    """Request schema for adding a testimonial."""

    video_url: str = Field("", description="Video URL to embed")


class Testimonial(BaseModel):
    """Testimonial response schema."""

    model_config = ConfigDict(populate_by_name=True)

    id: ObjectIdStr = Field(..., alias="_id")
    video_url: str
    created_at: datetime = Field(..., alias="createdAt")


class TestimonialCreatedResponse(BaseModel):
    """Response schema for testimonial creation."""

    success: bool = True
    message: str = "Testimonial added successfully"
    testimonial: Testimonial
