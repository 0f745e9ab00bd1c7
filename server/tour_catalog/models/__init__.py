"""Document model package."""

from .admin import ADMIN_COLLECTION
from .testimonial import TESTIMONIAL_COLLECTION
from .tour import TOURS_COLLECTION, FlagValue, TourFlag

__all__ = [
    "ADMIN_COLLECTION",
    "TESTIMONIAL_COLLECTION",
    "TOURS_COLLECTION",
    "FlagValue",
    "TourFlag",
]
