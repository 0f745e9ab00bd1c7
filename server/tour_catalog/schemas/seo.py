"""SEO-related Pydantic schemas."""

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class SeoUpdateRequest(BaseModel):
    """Request schema for a sparse SEO update."""

    seo_title: Optional[str] = Field(None, description="Page title")
    seo_description: Optional[str] = Field(None, description="Meta description")
    seo_keyword: Optional[str] = Field(None, description="Meta keywords")

    def provided_fields(self) -> Dict[str, Any]:
        """Return only the fields present in the request body."""
        return self.model_dump(exclude_unset=True)


class SeoUpdateResponse(BaseModel):
    """Response schema for an applied SEO update."""

    success: bool = True
    message: str = "SEO details updated successfully"
    tour_id: str = Field(..., serialization_alias="tourId")
    updated_fields: Dict[str, Any] = Field(..., serialization_alias="updatedFields")
