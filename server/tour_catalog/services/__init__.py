"""Service layer package."""

from .auth_service import AuthService
from .media_service import CloudinaryUploader, UploadResult, staged_upload
from .seo_service import SeoService, SeoUpdateResult
from .testimonial_service import TestimonialService
from .tour_service import TourService, normalize_itinerary

__all__ = [
    "AuthService",
    "CloudinaryUploader",
    "SeoService",
    "SeoUpdateResult",
    "TestimonialService",
    "TourService",
    "UploadResult",
    "normalize_itinerary",
    "staged_upload",
]
