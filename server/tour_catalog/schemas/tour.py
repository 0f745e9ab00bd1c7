"""Tour-related Pydantic schemas."""

from datetime import datetime
from typing import Any, List, Optional, Union

from bson import ObjectId
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .common import LenientText, ObjectIdStr


def _plain(value: Any) -> Any:
    """Replace ObjectIds nested anywhere in a stored value with hex strings."""
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, dict):
        return {key: _plain(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(item) for item in value]
    return value


class ItineraryDay(BaseModel):
    """One day of a tour itinerary."""

    title: str = Field("", description="Day title")
    description: str = Field("", description="Day description")

    @model_validator(mode="before")
    @classmethod
    def _default_non_objects(cls, data: Any) -> Any:
        if isinstance(data, BaseModel):
            return data
        return data if isinstance(data, dict) else {}

    @field_validator("title", "description", mode="before")
    @classmethod
    def _as_text(cls, value: Any) -> str:
        return "" if value is None else str(value)


class TourFields(BaseModel):
    """Editable tour fields as submitted by the admin form."""

    package_name: Optional[str] = None
    url: Optional[str] = None
    tour_duration: Optional[str] = None
    tour_destination: Optional[str] = None
    tour_price: Optional[str] = None
    theme: Optional[str] = None
    indian: Optional[str] = None
    international: Optional[str] = None
    fixed_departure: Optional[str] = None
    inclusions: Optional[str] = None
    exclusions: Optional[str] = None
    itinerary: Optional[Union[str, List[Any]]] = None


class TourDocument(BaseModel):
    """Tour response schema mirroring the stored document.

    Records written by older tooling are read leniently: numbers in text
    fields come back as strings and unknown fields are passed through.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: ObjectIdStr = Field(..., alias="_id", description="Unique tour ID")
    package_name: LenientText = None
    url: LenientText = Field(None, description="URL-friendly slug")
    tour_duration: LenientText = None
    tour_destination: LenientText = None
    tour_price: LenientText = None
    theme: LenientText = None
    indian: LenientText = None
    international: LenientText = None
    fixed_departure: LenientText = None
    inclusions: LenientText = None
    exclusions: LenientText = None
    itinerary: List[ItineraryDay] = Field(default_factory=list)
    image: LenientText = Field(None, description="Hosted image URL")
    seo_title: LenientText = None
    seo_description: LenientText = None
    seo_keyword: LenientText = None
    created_at: Optional[datetime] = Field(None, alias="createdAt")
    updated_at: Optional[datetime] = Field(None, alias="updatedAt")

    @model_validator(mode="before")
    @classmethod
    def _plain_extras(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        return {key: value if key == "_id" else _plain(value) for key, value in data.items()}

    @field_validator("itinerary", mode="before")
    @classmethod
    def _itinerary_list(cls, value: Any) -> Any:
        return value if isinstance(value, list) else []

    def to_json(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class ThemeSample(BaseModel):
    """One representative tour for a theme."""

    model_config = ConfigDict(populate_by_name=True)

    id: ObjectIdStr = Field(..., alias="_id")
    package_name: LenientText = None
    tour_duration: LenientText = None
    tour_destination: LenientText = None
    tour_price: LenientText = None
    image: LenientText = None
    url: LenientText = None
    theme_name: LenientText = None


class TourCreatedResponse(BaseModel):
    """Response schema for tour creation."""

    success: bool = True
    message: str = "Tour added successfully"
    tour_id: str = Field(..., serialization_alias="tourId")
    image_url: Optional[str] = Field(None, serialization_alias="imageUrl")
    url: str


class TourUpdatedResponse(BaseModel):
    """Response schema for tour update."""

    success: bool = True
    message: str = "Tour updated successfully"
    tour_id: str = Field(..., serialization_alias="tourId")
    image_url: Optional[str] = Field(None, serialization_alias="imageUrl")


class TourDeletedResponse(BaseModel):
    """Response schema for tour deletion."""

    success: bool = True
    message: str = "Tour package deleted successfully"
    tour_id: str = Field(..., serialization_alias="tourId")
