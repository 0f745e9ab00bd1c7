"""SEO metadata service for tour listings."""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorDatabase

from ..core.exceptions import NotFoundError, ValidationError
from ..core.observability import metrics_collector
from ..models.tour import SEO_FIELDS, TOURS_COLLECTION

logger = logging.getLogger(__name__)


@dataclass
class SeoUpdateResult:
    """Outcome of an SEO patch."""

    modified: bool
    updated_fields: dict[str, Any] = field(default_factory=dict)


class SeoService:
    """Service for the SEO fields nested in a tour document."""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.collection = db[TOURS_COLLECTION]

    async def get_seo(self, tour_id: ObjectId) -> dict[str, Any]:
        """
        Return the tour carrying the SEO fields.

        The whole document is returned, not just the SEO subset.

        Raises:
            NotFoundError: If tour not found
        """
        tour = await self.collection.find_one({"_id": tour_id})
        if not tour:
            raise NotFoundError(resource_type="tour", resource_id=str(tour_id))
        return tour

    @staticmethod
    def _patch_fields(current: dict[str, Any], provided: dict[str, Any]) -> dict[str, Any]:
        """Return the provided SEO fields whose value differs from the stored one."""
        return {
            name: value
            for name, value in provided.items()
            if name in SEO_FIELDS and current.get(name) != value
        }

    async def update_seo(self, tour_id: ObjectId, provided: dict[str, Any]) -> SeoUpdateResult:
        """
        Sparse-patch the SEO fields of a tour.

        Only fields present in ``provided`` are written. When every provided
        value already matches the stored one nothing is written and the
        result reports ``modified=False``.

        Raises:
            ValidationError: If no SEO field carries a value
            NotFoundError: If tour not found
        """
        if not any(provided.get(name) for name in SEO_FIELDS):
            raise ValidationError(detail="At least one SEO field must be provided")

        current = await self.get_seo(tour_id)
        changes = self._patch_fields(current, provided)
        if not changes:
            metrics_collector.record_seo_update(modified=False)
            logger.info("SEO update made no changes", extra={"tour_id": str(tour_id)})
            return SeoUpdateResult(modified=False)

        changes["updatedAt"] = datetime.now(timezone.utc)
        result = await self.collection.update_one({"_id": tour_id}, {"$set": changes})
        if result.matched_count == 0:
            raise NotFoundError(resource_type="tour", resource_id=str(tour_id))

        metrics_collector.record_seo_update(modified=True)
        logger.info(
            "SEO details updated",
            extra={"tour_id": str(tour_id), "fields": sorted(changes)}
        )
        return SeoUpdateResult(modified=True, updated_fields=changes)
