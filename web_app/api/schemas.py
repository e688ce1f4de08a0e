"""Pydantic schemas for API requests and responses."""

from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime

from shortlink.storage.models import Link


class ShortenRequest(BaseModel):
    """Request to shorten a URL."""

    url: str = Field(..., description="The URL to shorten", min_length=1, max_length=2048)
    custom_code: Optional[str] = Field(None, description="Optional custom short code")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "url": "https://example.com/very/long/path/to/resource",
                    "custom_code": None
                },
                {
                    "url": "https://github.com/user/repo",
                    "custom_code": "myrepo"
                }
            ]
        }
    }


class ShortenResponse(BaseModel):
    """Response after shortening a URL."""

    code: str = Field(..., description="The short code")
    short_url: str = Field(..., description="The complete short URL")
    long_url: str = Field(..., description="The original long URL")
    created_at: datetime = Field(..., description="Creation timestamp")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "code": "aB3dE9x",
                    "short_url": "https://short.link/aB3dE9x",
                    "long_url": "https://example.com/very/long/path",
                    "created_at": "2024-01-01T12:00:00Z"
                }
            ]
        }
    }


class LinkResponse(BaseModel):
    """A stored link with its usage counters."""

    code: str
    long_url: str
    short_url: str
    created_at: datetime
    updated_at: datetime
    hit_count: int
    last_access_at: Optional[datetime] = None

    @classmethod
    def from_link(cls, link: Link, short_url: str) -> "LinkResponse":
        return cls(
            code=link.code,
            long_url=link.long_url,
            short_url=short_url,
            created_at=link.created_at,
            updated_at=link.updated_at,
            hit_count=link.hit_count,
            last_access_at=link.last_access_at,
        )


class LinkListResponse(BaseModel):
    """All links plus totals."""

    total_links: int
    total_hits: int
    links: List[LinkResponse]


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="Overall status")
    storage: str = Field(..., description="Storage backend name")
    timestamp: datetime = Field(..., description="Check timestamp")


class ErrorResponse(BaseModel):
    """Error response."""

    error: str = Field(..., description="Error message")
    details: Optional[dict] = Field(None, description="Detailed error information")
