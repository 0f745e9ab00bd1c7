"""Authentication-related Pydantic schemas."""

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    """Request schema for admin login."""

    username: str = Field(..., description="Admin username")
    password: str = Field(..., description="Admin password")


class LoginResponse(BaseModel):
    """Response schema for a successful login."""

    success: bool = True
    message: str = "Login successful"
    token: str = Field(..., description="Bearer token, valid for one day")
