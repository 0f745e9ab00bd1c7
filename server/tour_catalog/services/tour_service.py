"""Tour service for catalog business logic."""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional, Protocol

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ASCENDING

from ..core.exceptions import InvalidItineraryError, NotFoundError, ValidationError
from ..core.observability import metrics_collector
from ..core.slug import slugify
from ..models.tour import (
    THEME_SAMPLE_PROJECTION,
    TOUR_SCALAR_FIELDS,
    TOURS_COLLECTION,
    FlagValue,
    TourFlag,
)
from ..schemas.tour import TourFields
from .media_service import UploadResult

logger = logging.getLogger(__name__)

DEFAULT_SLUG = "tour"


class ImageUploader(Protocol):
    async def upload(self, path: Path) -> UploadResult: ...


def normalize_itinerary(raw: Any) -> list[dict[str, str]]:
    """
    Parse and normalize an itinerary submitted by the admin form.

    Accepts a JSON array string or an already-decoded list. Every entry
    is reduced to ``{"title", "description"}`` with missing values set
    to the empty string; entries that are not objects keep their slot as
    an empty day.

    Raises:
        InvalidItineraryError: If the value is not an array or holds a null day
    """
    if raw is None or raw == "":
        return []

    if isinstance(raw, str):
        try:
            days = json.loads(raw)
        except json.JSONDecodeError as e:
            raise InvalidItineraryError(str(e)) from e
    else:
        days = raw

    if not isinstance(days, list):
        raise InvalidItineraryError(
            f"Expected an array of itinerary days, got {type(days).__name__}"
        )

    normalized = []
    for position, day in enumerate(days):
        if day is None:
            raise InvalidItineraryError(f"Itinerary day {position} is null")
        if not isinstance(day, dict):
            day = {}
        normalized.append({
            "title": str(day.get("title") or ""),
            "description": str(day.get("description") or ""),
        })
    return normalized


def _now() -> datetime:
    return datetime.now(timezone.utc)


class TourService:
    """Service for tour listing operations."""

    def __init__(self, db: AsyncIOMotorDatabase, uploader: Optional[ImageUploader] = None):
        self.db = db
        self.collection = db[TOURS_COLLECTION]
        self.uploader = uploader

    async def _upload_image(self, image_path: Optional[Path]) -> Optional[str]:
        if image_path is None:
            return None
        if self.uploader is None:
            raise RuntimeError("No image uploader configured")
        result = await self.uploader.upload(image_path)
        return result.url

    async def _unique_url(self, package_name: str) -> str:
        """Derive a slug that no other tour uses yet, suffixing -2, -3, ... on collision."""
        base = slugify(package_name) or DEFAULT_SLUG
        candidate = base
        suffix = 1
        while await self.collection.find_one({"url": candidate}, {"_id": 1}):
            suffix += 1
            candidate = f"{base}-{suffix}"
        return candidate

    @staticmethod
    def _replace_fields(fields: TourFields) -> dict[str, Any]:
        """
        Build the full set of scalar fields for a tour write.

        Every scalar field is included, so a field omitted from the form is
        written as null. Flags default to "No".
        """
        document = {name: getattr(fields, name) for name in TOUR_SCALAR_FIELDS}
        for flag in TourFlag:
            document[flag.value] = document[flag.value] or FlagValue.NO.value
        return document

    async def create_tour(
        self,
        fields: TourFields,
        image_path: Optional[Path] = None,
    ) -> dict[str, Any]:
        """
        Create a new tour listing.

        The image, if any, is uploaded before anything is written; a failed
        upload aborts the operation with no record inserted.

        Args:
            fields: Submitted tour fields
            image_path: Staged image file to upload

        Returns:
            The inserted document, including its ``_id``

        Raises:
            ValidationError: If package_name is missing
            InvalidItineraryError: If the itinerary is malformed
            ImageUploadError: If the image host rejects the upload
        """
        if not fields.package_name or not fields.package_name.strip():
            raise ValidationError(
                detail="package_name is required",
                errors=[{"path": "package_name", "message": "Field required"}],
            )

        itinerary = normalize_itinerary(fields.itinerary)
        image_url = await self._upload_image(image_path)

        document = self._replace_fields(fields)
        document.update({
            "url": await self._unique_url(fields.package_name),
            "itinerary": itinerary,
            "image": image_url,
            "createdAt": _now(),
        })

        result = await self.collection.insert_one(document)
        document["_id"] = result.inserted_id
        metrics_collector.record_tour_created()

        logger.info(
            "Tour created successfully",
            extra={
                "tour_id": str(result.inserted_id),
                "url": document["url"],
                "has_image": image_url is not None,
            }
        )
        return document

    async def get_tour_by_id(self, tour_id: ObjectId) -> dict[str, Any]:
        """
        Get tour by ID.

        Raises:
            NotFoundError: If tour not found
        """
        tour = await self.collection.find_one({"_id": tour_id})
        if not tour:
            logger.warning("Tour not found", extra={"tour_id": str(tour_id)})
            raise NotFoundError(resource_type="tour", resource_id=str(tour_id))
        return tour

    async def get_tour_by_url(self, url: str) -> dict[str, Any]:
        """
        Get tour by its public slug.

        Raises:
            NotFoundError: If no tour has this url
        """
        tour = await self.collection.find_one({"url": url})
        if not tour:
            raise NotFoundError(
                resource_type="tour",
                detail=f"No tour is published at '{url}'",
            )
        return tour

    async def update_tour(
        self,
        tour_id: ObjectId,
        fields: TourFields,
        image_path: Optional[Path] = None,
    ) -> Optional[str]:
        """
        Replace the editable fields of an existing tour.

        Unlike the SEO patch this is a full replace: scalar fields missing
        from ``fields`` are overwritten with null. The stored image is kept
        unless a new file is supplied.

        Returns:
            The image URL now stored on the tour

        Raises:
            NotFoundError: If the tour does not exist, before or during the write
            InvalidItineraryError: If the itinerary is malformed
            ImageUploadError: If the image host rejects the upload
        """
        existing = await self.get_tour_by_id(tour_id)
        itinerary = normalize_itinerary(fields.itinerary)

        image_url = existing.get("image")
        if image_path is not None:
            image_url = await self._upload_image(image_path)

        update = self._replace_fields(fields)
        update.update({
            "itinerary": itinerary,
            "image": image_url,
            "updatedAt": _now(),
        })

        result = await self.collection.update_one({"_id": tour_id}, {"$set": update})
        if result.matched_count == 0:
            # Deleted between the read and the write
            raise NotFoundError(resource_type="tour", resource_id=str(tour_id))

        metrics_collector.record_tour_updated()
        logger.info(
            "Tour updated successfully",
            extra={"tour_id": str(tour_id), "image_replaced": image_path is not None}
        )
        return image_url

    async def delete_tour(self, tour_id: ObjectId) -> str:
        """
        Delete a tour.

        Existence is checked with a read first so a missing tour yields a
        precise not-found error; a concurrent delete between the two calls
        is caught by the deletion count.

        Returns:
            The deleted tour id

        Raises:
            NotFoundError: If the tour does not exist
        """
        await self.get_tour_by_id(tour_id)

        result = await self.collection.delete_one({"_id": tour_id})
        if result.deleted_count == 0:
            raise NotFoundError(resource_type="tour", resource_id=str(tour_id))

        metrics_collector.record_tour_deleted()
        logger.info("Tour deleted successfully", extra={"tour_id": str(tour_id)})
        return str(tour_id)

    async def list_tours(self) -> list[dict[str, Any]]:
        """Return every tour, unpaginated."""
        return await self.collection.find({}).to_list(length=None)

    async def list_by_flag(
        self,
        flag: TourFlag | str,
        limit: Optional[int] = None,
    ) -> list[dict[str, Any]]:
        """
        Return tours whose category flag is "Yes".

        Raises:
            ValueError: If ``flag`` is not a known category flag
        """
        flag = TourFlag(flag)
        query = {flag.value: FlagValue.YES.value}
        if limit:
            cursor = self.collection.find(query, limit=limit)
        else:
            cursor = self.collection.find(query)
        return await cursor.to_list(length=None)

    async def list_similar_by_theme(self, url: str, limit: int = 4) -> list[dict[str, Any]]:
        """
        Return up to ``limit`` other tours sharing the theme of the tour at ``url``.

        An unknown url yields an empty list rather than an error.
        """
        current = await self.collection.find_one({"url": url})
        if not current:
            return []

        cursor = self.collection.find(
            {"theme": current.get("theme"), "url": {"$ne": url}},
            limit=limit,
        )
        return await cursor.to_list(length=None)

    async def list_one_per_theme(self, limit: int = 6) -> list[dict[str, Any]]:
        """
        Return one representative tour per theme, at most ``limit`` themes.

        The representative is the tour with the lowest id in its theme and
        themes are ordered by that id, so the result is reproducible.
        """
        pipeline = [
            {"$sort": {"_id": ASCENDING}},
            {"$group": {"_id": "$theme", "doc": {"$first": "$$ROOT"}}},
            {"$replaceRoot": {"newRoot": "$doc"}},
            {"$sort": {"_id": ASCENDING}},
            {"$project": THEME_SAMPLE_PROJECTION},
            {"$limit": limit},
        ]
        return await self.collection.aggregate(pipeline).to_list(length=None)
