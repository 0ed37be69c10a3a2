"""
Playlist Schemas
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field

from vidshare.shared.schemas.common import BaseSchema, Page
from vidshare.shared.schemas.video import PlaylistVideoItem


class PlaylistCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    description: str = ""


class PlaylistUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None


class PlaylistResponse(BaseSchema):
    id: UUID
    name: str
    description: str
    owner_id: UUID
    created_at: datetime
    updated_at: datetime


class PlaylistSummary(PlaylistResponse):
    videos_count: int


class PlaylistDetail(PlaylistResponse):
    """Playlist with one page of its videos."""

    videos: Page[PlaylistVideoItem]
