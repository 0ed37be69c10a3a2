"""
Video Handler

Publishing, listing, watching and managing videos, plus video likes.

Reads are viewer-relative: an optional Bearer token decides is_liked /
is_subscribed and whether the caller's own drafts are visible.
"""

from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status

from vidshare.api.dependencies import CurrentUser, OptionalViewer, Pagination, viewer_id
from vidshare.api.dependencies.services import get_engagement_service, get_video_service
from vidshare.api.uploads import read_upload
from vidshare.shared.models.like import LikeTarget
from vidshare.shared.schemas.common import MessageResponse, Page, ToggleResponse
from vidshare.shared.schemas.video import (
    LikedVideoItem,
    PublishStatusResponse,
    VideoResponse,
    VideoSummary,
)
from vidshare.shared.services.engagement_service import EngagementService
from vidshare.shared.services.video_service import VideoService
from vidshare.shared.utils.identifiers import parse_identifier
from vidshare.shared.views.compiler import VideoListingQuery


router = APIRouter()


@router.get("", response_model=Page[VideoSummary])
async def list_videos(
    viewer: OptionalViewer,
    pagination: Pagination,
    query: Optional[str] = Query(None, description="Case-insensitive title/description search"),
    user_id: Optional[str] = Query(None, description="Only videos of this owner"),
    sort_by: Optional[str] = Query(None, description="created_at | views | duration | title"),
    sort_type: Optional[str] = Query(None, description="asc | desc"),
    video_service: VideoService = Depends(get_video_service),
):
    """
    Public listing of published videos.

    Unpublished videos are excluded even when filtering by their owner.

    Raises:
        400: Unknown sort field/direction or malformed user_id
    """
    listing = VideoListingQuery(
        text=query,
        owner_id=parse_identifier(user_id, "user") if user_id else None,
        sort_by=sort_by,
        sort_type=sort_type,
    )
    return await video_service.list_videos(
        listing, viewer_id(viewer), pagination.page, pagination.limit
    )


@router.post("", response_model=VideoResponse, status_code=status.HTTP_201_CREATED)
async def publish_video(
    current_user: CurrentUser,
    title: str = Form(...),
    description: str = Form(...),
    duration: float = Form(0.0),
    video_file: Optional[UploadFile] = File(None),
    thumbnail: Optional[UploadFile] = File(None),
    video_service: VideoService = Depends(get_video_service),
):
    """
    Upload a video and its thumbnail. The video starts unpublished.

    Raises:
        400: Missing title, description or files
        502: Blob store failure (nothing is written)
    """
    return await video_service.publish_video(
        owner_id=current_user.id,
        title=title,
        description=description,
        video_file=await read_upload(video_file),
        thumbnail=await read_upload(thumbnail),
        duration=duration,
    )


@router.get("/mine", response_model=Page[VideoSummary])
async def list_own_videos(
    current_user: CurrentUser,
    pagination: Pagination,
    video_service: VideoService = Depends(get_video_service),
):
    """The caller's videos, drafts included."""
    return await video_service.list_own_videos(current_user.id, pagination.page, pagination.limit)


@router.get("/liked", response_model=Page[LikedVideoItem])
async def list_liked_videos(
    current_user: CurrentUser,
    pagination: Pagination,
    video_service: VideoService = Depends(get_video_service),
):
    return await video_service.list_liked_videos(current_user.id, pagination.page, pagination.limit)


@router.get("/{video_id}", response_model=VideoResponse)
async def get_video(
    video_id: str,
    viewer: OptionalViewer,
    video_service: VideoService = Depends(get_video_service),
):
    """
    Watch a video: counts a view, adds it to the viewer's history and
    returns the video as the viewer sees it.

    Raises:
        400: Malformed id
        404: Absent, or an unpublished video of someone else
    """
    return await video_service.watch_video(parse_identifier(video_id, "video"), viewer_id(viewer))


@router.patch("/{video_id}", response_model=VideoResponse)
async def update_video(
    video_id: str,
    current_user: CurrentUser,
    title: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    thumbnail: Optional[UploadFile] = File(None),
    video_service: VideoService = Depends(get_video_service),
):
    return await video_service.update_video(
        parse_identifier(video_id, "video"),
        current_user.id,
        title=title,
        description=description,
        thumbnail=await read_upload(thumbnail),
    )


@router.delete("/{video_id}", response_model=MessageResponse)
async def delete_video(
    video_id: str,
    current_user: CurrentUser,
    video_service: VideoService = Depends(get_video_service),
):
    """Delete a video together with its comments, likes, history and playlist entries."""
    await video_service.delete_video(parse_identifier(video_id, "video"), current_user.id)
    return MessageResponse(message="Video deleted successfully")


@router.patch("/{video_id}/publish", response_model=PublishStatusResponse)
async def toggle_publish(
    video_id: str,
    current_user: CurrentUser,
    video_service: VideoService = Depends(get_video_service),
):
    video_uuid = parse_identifier(video_id, "video")
    is_published = await video_service.toggle_publish(video_uuid, current_user.id)
    return PublishStatusResponse(id=video_uuid, is_published=is_published)


@router.post("/{video_id}/like", response_model=ToggleResponse)
async def toggle_video_like(
    video_id: str,
    current_user: CurrentUser,
    engagement_service: EngagementService = Depends(get_engagement_service),
):
    target = LikeTarget.video(parse_identifier(video_id, "video"))
    active = await engagement_service.toggle_like(target, current_user.id)
    return ToggleResponse(active=active)
