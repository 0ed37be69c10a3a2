"""
Common Schemas

Shared schemas used across the application for consistent API responses.

Schema Types:
=============
- BaseSchema: Base with common config (from_attributes, populate_by_name)
- Page[T]: One page of a compiled view plus its position metadata
- Generic Responses: MessageResponse, ToggleResponse, ErrorResponse
- HealthResponse: Liveness/readiness payload

Usage:
======
    from vidshare.shared.schemas.common import BaseSchema, Page

    class VideoSummary(BaseSchema):
        id: UUID
        title: str

    @router.get("", response_model=Page[VideoSummary])
    async def list_videos(...):
        return await service.list_videos(...)
"""

from datetime import datetime, timezone
from typing import Any, Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field


# Generic type for paginated responses
DataT = TypeVar("DataT")


class BaseSchema(BaseModel):
    """
    Base schema with common configuration.

    All response schemas inherit from this class.
    Provides:
    - from_attributes: Allow creating from ORM models
    - populate_by_name: Allow field population by name or alias
    """

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
    )


# ═══════════════════════════════════════════════════════════════════════════════
# PAGINATION
# ═══════════════════════════════════════════════════════════════════════════════


class Page(BaseModel, Generic[DataT]):
    """
    One page of a compiled view.

    Example:
        {
            "items": [...],
            "page": 2, "limit": 10,
            "total_items": 25, "total_pages": 3,
            "has_next_page": true, "has_prev_page": true,
            "next_page": 3, "prev_page": 1
        }
    """

    items: list[DataT]
    page: int = Field(description="Current page number (1-indexed)")
    limit: int = Field(description="Items per page")
    total_items: int = Field(description="Total items in the view")
    total_pages: int = Field(description="Total number of pages, at least 1")
    has_next_page: bool
    has_prev_page: bool
    next_page: Optional[int] = None
    prev_page: Optional[int] = None


# ═══════════════════════════════════════════════════════════════════════════════
# STANDARD RESPONSES
# ═══════════════════════════════════════════════════════════════════════════════


class MessageResponse(BaseModel):
    """Simple message response for success confirmations."""

    message: str
    success: bool = True


class ToggleResponse(BaseModel):
    """Result of a like/subscription toggle: whether the edge now exists."""

    active: bool


class ErrorDetail(BaseModel):
    """Error detail structure in error responses."""

    code: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error message")
    details: Optional[dict[str, Any]] = Field(
        default=None,
        description="Additional error context",
    )


class ErrorResponse(BaseModel):
    """
    Standard error response schema.

    Example:
        {
            "error": {
                "code": "NOT_FOUND",
                "message": "Video with id 'abc-123' not found",
                "details": {}
            }
        }
    """

    error: ErrorDetail


# ═══════════════════════════════════════════════════════════════════════════════
# HEALTH CHECK
# ═══════════════════════════════════════════════════════════════════════════════


class HealthResponse(BaseModel):
    """Health check response schema."""

    status: str = "healthy"
    service: str = "vidshare"
    version: str = "1.0.0"
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    checks: Optional[dict[str, bool]] = None
