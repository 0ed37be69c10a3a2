"""
Comment Handler

Comment pages for a video, comment writes and comment likes.
"""

from fastapi import APIRouter, Depends, status

from vidshare.api.dependencies import CurrentUser, OptionalViewer, Pagination, viewer_id
from vidshare.api.dependencies.services import get_comment_service, get_engagement_service
from vidshare.shared.models.like import LikeTarget
from vidshare.shared.schemas.comment import (
    CommentCreate,
    CommentResponse,
    CommentUpdate,
    CommentView,
)
from vidshare.shared.schemas.common import MessageResponse, Page, ToggleResponse
from vidshare.shared.services.comment_service import CommentService
from vidshare.shared.services.engagement_service import EngagementService
from vidshare.shared.utils.identifiers import parse_identifier


router = APIRouter()


@router.get("/{video_id}", response_model=Page[CommentView])
async def list_comments(
    video_id: str,
    viewer: OptionalViewer,
    pagination: Pagination,
    comment_service: CommentService = Depends(get_comment_service),
):
    """A page of comments on a video, newest first."""
    return await comment_service.list_comments(
        parse_identifier(video_id, "video"),
        viewer_id(viewer),
        pagination.page,
        pagination.limit,
    )


@router.post("/{video_id}", response_model=CommentResponse, status_code=status.HTTP_201_CREATED)
async def add_comment(
    video_id: str,
    request: CommentCreate,
    current_user: CurrentUser,
    comment_service: CommentService = Depends(get_comment_service),
):
    comment = await comment_service.add_comment(
        parse_identifier(video_id, "video"), current_user.id, request.content
    )
    return CommentResponse.model_validate(comment)


@router.patch("/c/{comment_id}", response_model=CommentResponse)
async def update_comment(
    comment_id: str,
    request: CommentUpdate,
    current_user: CurrentUser,
    comment_service: CommentService = Depends(get_comment_service),
):
    """
    Raises:
        403: The caller did not write the comment
    """
    comment = await comment_service.update_comment(
        parse_identifier(comment_id, "comment"), current_user.id, request.content
    )
    return CommentResponse.model_validate(comment)


@router.delete("/c/{comment_id}", response_model=MessageResponse)
async def delete_comment(
    comment_id: str,
    current_user: CurrentUser,
    comment_service: CommentService = Depends(get_comment_service),
):
    await comment_service.delete_comment(parse_identifier(comment_id, "comment"), current_user.id)
    return MessageResponse(message="Comment deleted successfully")


@router.post("/c/{comment_id}/like", response_model=ToggleResponse)
async def toggle_comment_like(
    comment_id: str,
    current_user: CurrentUser,
    engagement_service: EngagementService = Depends(get_engagement_service),
):
    target = LikeTarget.comment(parse_identifier(comment_id, "comment"))
    active = await engagement_service.toggle_like(target, current_user.id)
    return ToggleResponse(active=active)
