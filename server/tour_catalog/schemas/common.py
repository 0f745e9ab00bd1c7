"""Common Pydantic schemas."""

from typing import Annotated, Any, List, Optional

from pydantic import BaseModel, BeforeValidator, Field

# Document identifiers are ObjectIds in the store and hex strings on the wire
ObjectIdStr = Annotated[str, BeforeValidator(str)]


def _as_text(value: Any) -> Any:
    if value is None or isinstance(value, str):
        return value
    return str(value)


# Older records may hold numbers (e.g. tour_price=24999) where text is expected
LenientText = Annotated[Optional[str], BeforeValidator(_as_text)]


class Violation(BaseModel):
    """Validation error violation."""

    path: str = Field(..., description="Location of the invalid field")
    message: str = Field(..., description="Validation error message")


class Problem(BaseModel):
    """RFC 9457 Problem Details response."""

    type: Optional[str] = Field(None, description="Problem type URI")
    title: str = Field(..., description="Short human-readable summary")
    status: int = Field(..., description="HTTP status code")
    detail: Optional[str] = Field(None, description="Human-readable explanation")
    instance: Optional[str] = Field(None, description="URI reference for this occurrence")
    violations: Optional[List[Violation]] = Field(None, description="Validation errors")
