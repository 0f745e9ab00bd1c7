"""Testimonial service."""

import logging
from datetime import datetime, timezone
from typing import Any, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import DESCENDING

from ..core.exceptions import ValidationError
from ..core.observability import metrics_collector
from ..models.testimonial import TESTIMONIAL_COLLECTION

logger = logging.getLogger(__name__)


class TestimonialService:
    """Append-only store of customer video testimonials."""

    __test__ = False

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.collection = db[TESTIMONIAL_COLLECTION]

    async def add_testimonial(self, video_url: Optional[str]) -> dict[str, Any]:
        """
        Store a testimonial video URL.

        Returns:
            The inserted document, including its ``_id``

        Raises:
            ValidationError: If the URL is empty or whitespace
        """
        if not video_url or not video_url.strip():
            raise ValidationError(detail="Video URL is required")

        document = {"video_url": video_url, "createdAt": datetime.now(timezone.utc)}
        result = await self.collection.insert_one(document)
        document["_id"] = result.inserted_id

        metrics_collector.record_testimonial_added()
        logger.info("Testimonial added", extra={"testimonial_id": str(result.inserted_id)})
        return document

    async def list_testimonials(self) -> list[dict[str, Any]]:
        """Return all testimonials, newest first."""
        cursor = self.collection.find({}, sort=[("createdAt", DESCENDING)])
        return await cursor.to_list(length=None)
