"""
Playlist Service

Owner-curated, ordered lists of videos. Anyone may read a playlist; only
its owner may rename it, delete it or change its contents.
"""

from typing import Any, Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from vidshare.config.settings import Settings
from vidshare.shared.core.exceptions import (
    AuthorizationError,
    DuplicateResourceError,
    NotFoundError,
    PlaylistNotFoundError,
    UserNotFoundError,
    ValidationError,
)
from vidshare.shared.core.logging import get_logger
from vidshare.shared.models.base import utcnow
from vidshare.shared.models.playlist import Playlist
from vidshare.shared.repositories.playlist_repository import PlaylistRepository
from vidshare.shared.repositories.user_repository import UserRepository
from vidshare.shared.schemas.common import Page
from vidshare.shared.views.compiler import ViewCompiler


logger = get_logger(__name__)


class PlaylistService:
    """
    Service for playlist business logic.

    Attributes:
        repo: PlaylistRepository instance
        views: ViewCompiler for playlist contents and listings
    """

    def __init__(self, session: AsyncSession, config: Settings) -> None:
        self.session = session
        self.repo = PlaylistRepository(session)
        self.users = UserRepository(session)
        self.views = ViewCompiler(session, config.DEFAULT_PAGE_SIZE, config.MAX_PAGE_SIZE)

    async def _get(self, playlist_id: UUID) -> Playlist:
        playlist = await self.repo.get(playlist_id)
        if playlist is None:
            raise PlaylistNotFoundError(str(playlist_id))
        return playlist

    async def get_owned_playlist(self, playlist_id: UUID, requester_id: UUID) -> Playlist:
        """
        Raises:
            PlaylistNotFoundError: No such playlist
            AuthorizationError: Someone else owns it
        """
        playlist = await self._get(playlist_id)
        if playlist.owner_id != requester_id:
            raise AuthorizationError("You can only modify your own playlists")
        return playlist

    # ═══════════════════════════════════════════════════════════════════════════
    # READS
    # ═══════════════════════════════════════════════════════════════════════════

    async def get_playlist(
        self,
        playlist_id: UUID,
        viewer_id: Optional[UUID] = None,
        page: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> dict[str, Any]:
        """Playlist details plus one page of its videos in position order."""
        playlist = await self._get(playlist_id)
        videos = await self.views.fetch_page(
            self.views.compile_playlist_videos(playlist_id, viewer_id), page, limit
        )
        return {
            "id": playlist.id,
            "name": playlist.name,
            "description": playlist.description,
            "owner_id": playlist.owner_id,
            "created_at": playlist.created_at,
            "updated_at": playlist.updated_at,
            "videos": videos,
        }

    async def list_user_playlists(
        self,
        user_id: UUID,
        page: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> Page[dict[str, Any]]:
        if not await self.users.exists(user_id):
            raise UserNotFoundError(str(user_id))
        return await self.views.fetch_page(self.views.compile_user_playlists(user_id), page, limit)

    # ═══════════════════════════════════════════════════════════════════════════
    # WRITES
    # ═══════════════════════════════════════════════════════════════════════════

    async def create_playlist(self, owner_id: UUID, name: str, description: str = "") -> Playlist:
        name = (name or "").strip()
        if not name:
            raise ValidationError("Playlist name is required", details={"field": "name"})

        playlist = await self.repo.create(
            name=name,
            description=(description or "").strip(),
            owner_id=owner_id,
        )
        logger.info("Playlist created", playlist_id=str(playlist.id), owner_id=str(owner_id))
        return playlist

    async def update_playlist(
        self,
        playlist_id: UUID,
        requester_id: UUID,
        name: Optional[str] = None,
        description: Optional[str] = None,
    ) -> Playlist:
        if name is None and description is None:
            raise ValidationError("Name or description is required")
        if name is not None and not name.strip():
            raise ValidationError("Playlist name cannot be empty", details={"field": "name"})

        playlist = await self.get_owned_playlist(playlist_id, requester_id)
        return await self.repo.update(
            playlist,
            name=name.strip() if name is not None else None,
            description=description.strip() if description is not None else None,
        )

    async def delete_playlist(self, playlist_id: UUID, requester_id: UUID) -> None:
        playlist = await self.get_owned_playlist(playlist_id, requester_id)
        await self.repo.clear(playlist_id)
        await self.repo.delete(playlist)
        logger.info("Playlist deleted", playlist_id=str(playlist_id))

    async def add_video(self, playlist_id: UUID, video_id: UUID, requester_id: UUID) -> dict[str, Any]:
        """
        Append a video the owner can see.

        Raises:
            VideoNotFoundError: Absent, or an unpublished video of someone else
            DuplicateResourceError: Already in the playlist
        """
        playlist = await self.get_owned_playlist(playlist_id, requester_id)
        await self.views.compile_video_view(video_id, requester_id)

        if await self.repo.get_entry(playlist_id, video_id) is not None:
            raise DuplicateResourceError("Video is already in the playlist")

        try:
            await self.repo.add_video(playlist_id, video_id)
        except IntegrityError:
            raise DuplicateResourceError("Video is already in the playlist")

        await self.repo.update(playlist, updated_at=utcnow())
        return await self.get_playlist(playlist_id, requester_id)

    async def remove_video(self, playlist_id: UUID, video_id: UUID, requester_id: UUID) -> dict[str, Any]:
        """
        Raises:
            NotFoundError: The video is not in the playlist
        """
        await self.get_owned_playlist(playlist_id, requester_id)

        entry = await self.repo.get_entry(playlist_id, video_id)
        if entry is None:
            raise NotFoundError("Playlist entry", str(video_id))

        await self.repo.remove_entry(entry)
        return await self.get_playlist(playlist_id, requester_id)
