"""Tour document definitions."""

from enum import Enum

TOURS_COLLECTION = "tours"


class TourFlag(str, Enum):
    """Category flags stored on a tour as "Yes"/"No" strings."""
    INDIAN = "indian"
    INTERNATIONAL = "international"
    FIXED_DEPARTURE = "fixed_departure"


class FlagValue(str, Enum):
    """Stored values of a category flag."""
    YES = "Yes"
    NO = "No"


# Scalar fields written by tour create and update, in document order
TOUR_SCALAR_FIELDS = (
    "package_name",
    "url",
    "tour_duration",
    "tour_destination",
    "tour_price",
    "theme",
    "indian",
    "international",
    "fixed_departure",
    "inclusions",
    "exclusions",
)

SEO_FIELDS = ("seo_title", "seo_description", "seo_keyword")

# Fields returned for each representative of the one-per-theme sample
THEME_SAMPLE_PROJECTION = {
    "_id": 1,
    "package_name": 1,
    "tour_duration": 1,
    "tour_destination": 1,
    "tour_price": 1,
    "image": 1,
    "url": 1,
    "theme_name": "$theme",
}
