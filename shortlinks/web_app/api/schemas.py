"""Pydantic schemas for API requests and responses."""

from pydantic import BaseModel, Field, field_validator
from datetime import datetime
from typing import Optional

from shortlinks.lib.common.validators import MAX_URL_LENGTH, is_valid_url
from shortlinks.lib.expiration import MIN_EXPIRY_MINUTES, MAX_EXPIRY_MINUTES


def _validate_original_url(v: str) -> str:
    v = v.strip()
    is_valid, error = is_valid_url(v)
    if not is_valid:
        raise ValueError(error)
    return v


class CreateLinkRequest(BaseModel):
    """Request to shorten a URL."""

    original_url: str = Field(..., description="The URL to shorten", min_length=1, max_length=MAX_URL_LENGTH)
    expires_in_minutes: Optional[int] = Field(
        None,
        description="Lifetime in minutes; omit for a link that never expires",
        ge=MIN_EXPIRY_MINUTES,
        le=MAX_EXPIRY_MINUTES,
    )

    @field_validator("original_url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Trim and validate URL format."""
        return _validate_original_url(v)

    model_config = {
        "extra": "forbid",
        "json_schema_extra": {
            "examples": [
                {"original_url": "https://example.com/very/long/path/to/resource"},
                {"original_url": "https://github.com/user/repo", "expires_in_minutes": 60},
            ]
        },
    }


class UpdateLinkRequest(BaseModel):
    """Request to change an existing link.

    ``expires_in_minutes: null`` removes the expiry.
    """

    original_url: Optional[str] = Field(None, min_length=1, max_length=MAX_URL_LENGTH)
    expires_in_minutes: Optional[int] = Field(
        None,
        ge=MIN_EXPIRY_MINUTES,
        le=MAX_EXPIRY_MINUTES,
    )

    @field_validator("original_url")
    @classmethod
    def validate_url(cls, v: Optional[str]) -> Optional[str]:
        """Trim and validate URL format."""
        if v is None:
            raise ValueError("original_url cannot be null")
        return _validate_original_url(v)

    model_config = {"extra": "forbid"}


class LinkResponse(BaseModel):
    """A short link record."""

    id: int
    original_url: str
    short_code: str
    short_url: str = Field(..., description="The complete short URL")
    clicks: int
    created_at: datetime
    updated_at: datetime
    expires_at: Optional[datetime] = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "id": 1,
                    "original_url": "https://example.com/very/long/path",
                    "short_code": "aB3xY9",
                    "short_url": "https://short.link/aB3xY9",
                    "clicks": 0,
                    "created_at": "2024-01-01T12:00:00Z",
                    "updated_at": "2024-01-01T12:00:00Z",
                    "expires_at": None,
                }
            ]
        }
    }


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="Overall status")
    database: str = Field(..., description="Database status")
    cache: str = Field(..., description="Cache status")
    timestamp: datetime = Field(..., description="Check timestamp")


class ErrorResponse(BaseModel):
    """Error response."""

    error: str = Field(..., description="Error type")
    detail: Optional[str] = Field(None, description="Detailed error information")
