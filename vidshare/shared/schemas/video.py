"""
Video Schemas

Response models for compiled video views and publish toggles.
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from vidshare.shared.schemas.common import BaseSchema


class OwnerCard(BaseSchema):
    """Projection of the owning user embedded in video and comment views."""

    id: UUID
    username: str
    full_name: str
    avatar_url: str


class OwnerChannelCard(OwnerCard):
    """Owner card with the viewer's relation to the channel."""

    subscribers_count: int
    is_subscribed: bool


class VideoSummary(BaseSchema):
    """A video in a list."""

    id: UUID
    title: str
    description: str
    video_url: str
    thumbnail_url: str
    duration: float
    views: int
    is_published: bool
    created_at: datetime
    owner: OwnerCard
    likes_count: int
    is_liked: bool


class VideoResponse(VideoSummary):
    """A single video with viewer-relative owner fields."""

    updated_at: datetime
    owner: OwnerChannelCard


class WatchHistoryItem(VideoSummary):
    watched_at: datetime


class LikedVideoItem(VideoSummary):
    liked_at: datetime


class PlaylistVideoItem(VideoSummary):
    position: int


class PublishStatusResponse(BaseModel):
    id: UUID
    is_published: bool

