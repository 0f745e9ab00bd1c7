"""Tour router for admin tour management operations."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from fastapi.responses import JSONResponse
from motor.motor_asyncio import AsyncIOMotorDatabase

from ..core.config import settings
from ..core.dependencies import DatabaseSession, ImageUploader, RequiredAdmin
from ..core.identifiers import parse_object_id
from ..schemas.tour import (
    TourCreatedResponse,
    TourDeletedResponse,
    TourDocument,
    TourFields,
    TourUpdatedResponse,
)
from ..services.media_service import staged_upload
from ..services.tour_service import TourService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["tour"])

IMAGE_FILE = File(None, description="Tour image, at most 10 MiB")


def tour_form(
    package_name: Optional[str] = Form(None),
    url: Optional[str] = Form(None),
    tour_duration: Optional[str] = Form(None),
    tour_destination: Optional[str] = Form(None),
    tour_price: Optional[str] = Form(None),
    theme: Optional[str] = Form(None),
    indian: Optional[str] = Form(None),
    international: Optional[str] = Form(None),
    fixed_departure: Optional[str] = Form(None),
    inclusions: Optional[str] = Form(None),
    exclusions: Optional[str] = Form(None),
    itinerary: Optional[str] = Form(None, description="JSON array of {title, description}"),
) -> TourFields:
    """Collect the multipart tour form into a TourFields model."""
    return TourFields(
        package_name=package_name,
        url=url,
        tour_duration=tour_duration,
        tour_destination=tour_destination,
        tour_price=tour_price,
        theme=theme,
        indian=indian,
        international=international,
        fixed_departure=fixed_departure,
        inclusions=inclusions,
        exclusions=exclusions,
        itinerary=itinerary,
    )


TOUR_FORM = Depends(tour_form)


@router.post(
    "/add-tour",
    status_code=status.HTTP_201_CREATED,
    response_model=TourCreatedResponse,
)
async def add_tour(
    fields: TourFields = TOUR_FORM,
    image: Optional[UploadFile] = IMAGE_FILE,
    db: AsyncIOMotorDatabase = DatabaseSession,
    uploader=ImageUploader,
    admin: dict = RequiredAdmin,
) -> JSONResponse:
    """
    Create a tour listing from the admin form.

    The image, if attached, is uploaded first; nothing is stored when the
    upload fails.
    """
    service = TourService(db, uploader)

    async with staged_upload(image, settings.upload_dir, settings.max_upload_bytes) as image_path:
        tour = await service.create_tour(fields, image_path)

    response_data = TourCreatedResponse(
        tour_id=str(tour["_id"]),
        image_url=tour["image"],
        url=tour["url"],
    )
    return JSONResponse(
        status_code=status.HTTP_201_CREATED,
        content=response_data.model_dump(by_alias=True),
    )


@router.get("/tour-packages/{tour_id}")
async def get_tour_package(
    tour_id: str,
    db: AsyncIOMotorDatabase = DatabaseSession,
) -> JSONResponse:
    """Fetch a tour by id for the admin editor."""
    tour = await TourService(db).get_tour_by_id(parse_object_id(tour_id))
    document = TourDocument.model_validate(tour).to_json()

    return JSONResponse(content={
        "success": True,
        "tour": document,
        "itinerary": document["itinerary"],
    })


@router.put("/tour-packages/{tour_id}", response_model=TourUpdatedResponse)
async def update_tour_package(
    tour_id: str,
    fields: TourFields = TOUR_FORM,
    image: Optional[UploadFile] = IMAGE_FILE,
    db: AsyncIOMotorDatabase = DatabaseSession,
    uploader=ImageUploader,
    admin: dict = RequiredAdmin,
) -> JSONResponse:
    """
    Replace a tour's fields from the admin form.

    Fields left out of the form are cleared. The current image is kept
    unless a new one is attached.
    """
    object_id = parse_object_id(tour_id)
    service = TourService(db, uploader)

    async with staged_upload(image, settings.upload_dir, settings.max_upload_bytes) as image_path:
        image_url = await service.update_tour(object_id, fields, image_path)

    logger.info(
        "Tour package updated",
        extra={"tour_id": tour_id, "admin": admin.get("username")}
    )
    response_data = TourUpdatedResponse(tour_id=tour_id, image_url=image_url)
    return JSONResponse(content=response_data.model_dump(by_alias=True))


@router.delete("/delete-tour/{tour_id}", response_model=TourDeletedResponse)
async def delete_tour(
    tour_id: str,
    db: AsyncIOMotorDatabase = DatabaseSession,
    admin: dict = RequiredAdmin,
) -> JSONResponse:
    """Delete a tour listing."""
    object_id = parse_object_id(tour_id)
    deleted_id = await TourService(db).delete_tour(object_id)

    logger.info(
        "Tour package deleted",
        extra={"tour_id": deleted_id, "admin": admin.get("username")}
    )
    response_data = TourDeletedResponse(tour_id=deleted_id)
    return JSONResponse(content=response_data.model_dump(by_alias=True))
