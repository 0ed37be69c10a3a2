"""
Playlist Handler

Playlist CRUD and membership. Every write is limited to the playlist owner.
"""

from fastapi import APIRouter, Depends, status

from vidshare.api.dependencies import CurrentUser, OptionalViewer, Pagination, viewer_id
from vidshare.api.dependencies.services import get_playlist_service
from vidshare.shared.schemas.common import MessageResponse
from vidshare.shared.schemas.playlist import (
    PlaylistCreate,
    PlaylistDetail,
    PlaylistResponse,
    PlaylistUpdate,
)
from vidshare.shared.services.playlist_service import PlaylistService
from vidshare.shared.utils.identifiers import parse_identifier


router = APIRouter()


@router.post("", response_model=PlaylistResponse, status_code=status.HTTP_201_CREATED)
async def create_playlist(
    request: PlaylistCreate,
    current_user: CurrentUser,
    playlist_service: PlaylistService = Depends(get_playlist_service),
):
    playlist = await playlist_service.create_playlist(
        current_user.id, request.name, request.description
    )
    return PlaylistResponse.model_validate(playlist)


@router.get("/{playlist_id}", response_model=PlaylistDetail)
async def get_playlist(
    playlist_id: str,
    viewer: OptionalViewer,
    pagination: Pagination,
    playlist_service: PlaylistService = Depends(get_playlist_service),
):
    """Playlist details and one page of its videos, in position order."""
    return await playlist_service.get_playlist(
        parse_identifier(playlist_id, "playlist"),
        viewer_id(viewer),
        pagination.page,
        pagination.limit,
    )


@router.patch("/{playlist_id}", response_model=PlaylistResponse)
async def update_playlist(
    playlist_id: str,
    request: PlaylistUpdate,
    current_user: CurrentUser,
    playlist_service: PlaylistService = Depends(get_playlist_service),
):
    playlist = await playlist_service.update_playlist(
        parse_identifier(playlist_id, "playlist"),
        current_user.id,
        name=request.name,
        description=request.description,
    )
    return PlaylistResponse.model_validate(playlist)


@router.delete("/{playlist_id}", response_model=MessageResponse)
async def delete_playlist(
    playlist_id: str,
    current_user: CurrentUser,
    playlist_service: PlaylistService = Depends(get_playlist_service),
):
    await playlist_service.delete_playlist(parse_identifier(playlist_id, "playlist"), current_user.id)
    return MessageResponse(message="Playlist deleted successfully")


@router.post("/{playlist_id}/videos/{video_id}", response_model=PlaylistDetail)
async def add_video_to_playlist(
    playlist_id: str,
    video_id: str,
    current_user: CurrentUser,
    playlist_service: PlaylistService = Depends(get_playlist_service),
):
    """
    Raises:
        404: No such playlist, or a video the caller cannot see
        409: Video already in the playlist
    """
    return await playlist_service.add_video(
        parse_identifier(playlist_id, "playlist"),
        parse_identifier(video_id, "video"),
        current_user.id,
    )


@router.delete("/{playlist_id}/videos/{video_id}", response_model=PlaylistDetail)
async def remove_video_from_playlist(
    playlist_id: str,
    video_id: str,
    current_user: CurrentUser,
    playlist_service: PlaylistService = Depends(get_playlist_service),
):
    return await playlist_service.remove_video(
        parse_identifier(playlist_id, "playlist"),
        parse_identifier(video_id, "video"),
        current_user.id,
    )
