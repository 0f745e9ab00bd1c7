"""Configuration settings for the tour catalog API."""

from typing import Annotated, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode


class Settings(BaseSettings):
    """Application settings with Pydantic validation."""

    # Document store settings
    mongodb_uri: str = Field(
        default="mongodb://localhost:27017",
        description="MongoDB connection URI"
    )

    mongodb_db: str = Field(
        default="tour_catalog",
        description="MongoDB database name"
    )

    mongodb_timeout_ms: int = Field(
        default=5000,
        description="Server selection timeout in milliseconds"
    )

    # Environment settings
    environment: str = Field(
        default="development",
        description="Application environment"
    )

    # Logging settings
    log_level: str = Field(
        default="INFO",
        description="Application log level"
    )

    # Security settings
    jwt_secret: str = Field(
        default="change-me",
        description="Secret key used to sign admin session tokens"
    )

    jwt_algorithm: str = Field(
        default="HS256",
        description="Signing algorithm for admin session tokens"
    )

    token_ttl_seconds: int = Field(
        default=24 * 60 * 60,
        description="Lifetime of an admin session token in seconds"
    )

    # Image host settings
    cloudinary_cloud_name: str = Field(default="", description="Cloudinary cloud name")
    cloudinary_api_key: str = Field(default="", description="Cloudinary API key")
    cloudinary_api_secret: str = Field(default="", description="Cloudinary API secret")
    cloudinary_folder: str = Field(
        default="travel_website/tours",
        description="Remote folder for tour images"
    )

    # Upload settings
    upload_dir: str = Field(
        default="uploads",
        description="Directory for transient uploaded files"
    )

    max_upload_bytes: int = Field(
        default=10 * 1024 * 1024,
        description="Maximum accepted image size in bytes"
    )

    # CORS settings
    cors_origins: Annotated[list[str], NoDecode] = Field(
        default=["https://myvacationholidays.in"],
        description="Allowed CORS origins"
    )

    # Server settings
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=5000, description="Server port")

    # Tracing settings
    otlp_endpoint: Optional[str] = Field(
        default=None,
        description="OTLP collector endpoint; tracing export is disabled when unset"
    )

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment value."""
        valid_environments = ["development", "staging", "production"]
        if v.lower() not in valid_environments:
            raise ValueError(f"Environment must be one of: {valid_environments}")
        return v.lower()

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level value."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v.upper()

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, v: str | list[str]) -> list[str]:
        """Parse CORS origins from a comma-separated string or list."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    @property
    def debug(self) -> bool:
        """Return True if in development mode."""
        return self.environment == "development"

    @property
    def is_production(self) -> bool:
        """Return True if in production mode."""
        return self.environment == "production"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }


# Global settings instance
settings = Settings()
