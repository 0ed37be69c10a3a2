"""
Service Dependencies

FastAPI dependencies for service injection.

These dependencies create service instances with proper database session injection.
Services are created per-request, which is fine because:
- Services only hold the request's db session, settings and blob store
- Each request gets its own db session
- No shared state between requests

The blob store is a process-wide singleton; tests swap it (and the settings)
through app.dependency_overrides[get_blob_store] / [get_settings].

Usage:
======
    from vidshare.api.dependencies.services import get_video_service

    @router.get("/{video_id}")
    async def get_video(video_id: str, service: VideoService = Depends(get_video_service)):
        ...
"""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from vidshare.api.dependencies.database import get_db
from vidshare.config.settings import Settings, get_settings
from vidshare.shared.adapters.blob_store import BlobStore, S3BlobStore
from vidshare.shared.services.auth_service import AuthService
from vidshare.shared.services.channel_service import ChannelService
from vidshare.shared.services.comment_service import CommentService
from vidshare.shared.services.engagement_service import EngagementService
from vidshare.shared.services.playlist_service import PlaylistService
from vidshare.shared.services.video_service import VideoService


@lru_cache
def get_blob_store() -> BlobStore:
    """Shared S3 blob store (the boto3 client is created on first use)."""
    return S3BlobStore(get_settings())


ConfigDep = Annotated[Settings, Depends(get_settings)]
BlobStoreDep = Annotated[BlobStore, Depends(get_blob_store)]


async def get_auth_service(
    config: ConfigDep,
    blob_store: BlobStoreDep,
    db: AsyncSession = Depends(get_db),
) -> AuthService:
    """
    Dependency to get AuthService instance.

    Creates a new service instance per request with the request's db session.
    """
    return AuthService(db, config, blob_store)


async def get_video_service(
    config: ConfigDep,
    blob_store: BlobStoreDep,
    db: AsyncSession = Depends(get_db),
) -> VideoService:
    return VideoService(db, config, blob_store)


async def get_comment_service(
    config: ConfigDep,
    db: AsyncSession = Depends(get_db),
) -> CommentService:
    return CommentService(db, config)


async def get_engagement_service(
    config: ConfigDep,
    db: AsyncSession = Depends(get_db),
) -> EngagementService:
    return EngagementService(db, config)


async def get_channel_service(
    config: ConfigDep,
    db: AsyncSession = Depends(get_db),
) -> ChannelService:
    return ChannelService(db, config)


async def get_playlist_service(
    config: ConfigDep,
    db: AsyncSession = Depends(get_db),
) -> PlaylistService:
    return PlaylistService(db, config)
