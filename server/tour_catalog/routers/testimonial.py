"""Testimonial router."""

from typing import List

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from motor.motor_asyncio import AsyncIOMotorDatabase

from ..core.dependencies import DatabaseSession, RequiredAdmin
from ..schemas.testimonial import (
    CreateTestimonialRequest,
    Testimonial,
    TestimonialCreatedResponse,
)
from ..services.testimonial_service import TestimonialService

router = APIRouter(prefix="/api", tags=["testimonial"])


@router.post(
    "/add-testimonial",
    status_code=status.HTTP_201_CREATED,
    response_model=TestimonialCreatedResponse,
)
async def add_testimonial(
    request: CreateTestimonialRequest,
    db: AsyncIOMotorDatabase = DatabaseSession,
    admin: dict = RequiredAdmin,
) -> JSONResponse:
    """Add a video testimonial."""
    document = await TestimonialService(db).add_testimonial(request.video_url)

    response_data = TestimonialCreatedResponse(
        testimonial=Testimonial.model_validate(document)
    )
    return JSONResponse(
        status_code=status.HTTP_201_CREATED,
        content=response_data.model_dump(mode="json", by_alias=True),
    )


@router.get("/testimonials", response_model=List[Testimonial])
async def list_testimonials(db: AsyncIOMotorDatabase = DatabaseSession) -> JSONResponse:
    """List testimonials, newest first."""
    documents = await TestimonialService(db).list_testimonials()
    return JSONResponse(content=[
        Testimonial.model_validate(document).model_dump(mode="json", by_alias=True)
        for document in documents
    ])
