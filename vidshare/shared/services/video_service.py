"""
Video Service

Business logic for publishing, reading and maintaining videos.

Ownership Gate:
===============
Every mutation follows the same path:

    fetch by id ──► missing?        → VideoNotFoundError (404)
                ──► owner != actor? → AuthorizationError (403)
                ──► mutate

Delete Cascade:
===============
    likes on the video's comments → comments → likes on the video
        → watch history entries → playlist entries → video row
        → media blobs (video file and thumbnail)

Views:
======
Reading a video (get_video) is pure. Counting a view (record_view) is a
separate write: it bumps the counter and, for a signed-in viewer, moves the
video to the top of their watch history.
"""

from typing import Any, Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from vidshare.config.settings import Settings
from vidshare.shared.adapters.blob_store import BlobStore
from vidshare.shared.core.exceptions import AuthorizationError, ValidationError, VideoNotFoundError
from vidshare.shared.core.logging import get_logger
from vidshare.shared.models.enums import LikeTargetKind, MediaKind
from vidshare.shared.models.video import Video
from vidshare.shared.repositories.comment_repository import CommentRepository
from vidshare.shared.repositories.like_repository import LikeRepository
from vidshare.shared.repositories.playlist_repository import PlaylistRepository
from vidshare.shared.repositories.video_repository import VideoRepository
from vidshare.shared.repositories.watch_history_repository import WatchHistoryRepository
from vidshare.shared.schemas.common import Page
from vidshare.shared.services.media import MediaBatch, MediaUpload, discard_blobs
from vidshare.shared.views.compiler import VideoListingQuery, ViewCompiler


logger = get_logger(__name__)


class VideoService:
    """
    Service for video business logic.

    Attributes:
        session: Database session
        repo: VideoRepository instance
        views: ViewCompiler for client-facing reads
        blob_store: Media storage
    """

    def __init__(self, session: AsyncSession, config: Settings, blob_store: BlobStore) -> None:
        self.session = session
        self.config = config
        self.blob_store = blob_store
        self.repo = VideoRepository(session)
        self.comments = CommentRepository(session)
        self.likes = LikeRepository(session)
        self.history = WatchHistoryRepository(session)
        self.playlists = PlaylistRepository(session)
        self.views = ViewCompiler(session, config.DEFAULT_PAGE_SIZE, config.MAX_PAGE_SIZE)

    async def get_owned_video(self, video_id: UUID, requester_id: UUID) -> Video:
        """
        Load a video the requester owns.

        Raises:
            VideoNotFoundError: No such video
            AuthorizationError: Someone else owns it
        """
        video = await self.repo.get(video_id)
        if video is None:
            raise VideoNotFoundError(str(video_id))
        if video.owner_id != requester_id:
            raise AuthorizationError("You can only modify your own videos")
        return video

    # ═══════════════════════════════════════════════════════════════════════════
    # READS
    # ═══════════════════════════════════════════════════════════════════════════

    async def get_video(self, video_id: UUID, viewer_id: Optional[UUID] = None) -> dict[str, Any]:
        return await self.views.compile_video_view(video_id, viewer_id)

    async def record_view(self, video_id: UUID, viewer_id: Optional[UUID] = None) -> None:
        """
        Count one view of a video the viewer can see.

        Raises:
            VideoNotFoundError: Absent, or an unpublished video of someone else
        """
        await self.views.compile_video_view(video_id, viewer_id)
        await self.repo.increment_views(video_id)
        if viewer_id is not None:
            await self.history.touch(viewer_id, video_id)

    async def watch_video(self, video_id: UUID, viewer_id: Optional[UUID] = None) -> dict[str, Any]:
        """Record a view, then return the video as the viewer now sees it."""
        await self.record_view(video_id, viewer_id)
        return await self.get_video(video_id, viewer_id)

    async def list_videos(
        self,
        query: VideoListingQuery,
        viewer_id: Optional[UUID] = None,
        page: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> Page[dict[str, Any]]:
        pipeline = self.views.compile_video_listing(query, viewer_id)
        return await self.views.fetch_page(pipeline, page, limit)

    async def list_own_videos(
        self,
        owner_id: UUID,
        page: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> Page[dict[str, Any]]:
        return await self.views.fetch_page(self.views.compile_owner_video_listing(owner_id), page, limit)

    async def list_liked_videos(
        self,
        user_id: UUID,
        page: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> Page[dict[str, Any]]:
        return await self.views.fetch_page(self.views.compile_liked_videos(user_id), page, limit)

    # ═══════════════════════════════════════════════════════════════════════════
    # WRITES
    # ═══════════════════════════════════════════════════════════════════════════

    async def publish_video(
        self,
        owner_id: UUID,
        title: str,
        description: str,
        video_file: Optional[MediaUpload],
        thumbnail: Optional[MediaUpload],
        duration: float = 0.0,
    ) -> dict[str, Any]:
        """
        Upload media and create an unpublished video.

        Raises:
            ValidationError: Blank title/description, missing file, negative duration
            UpstreamFailureError: Blob store failure (no row is written)
        """
        title, description = (title or "").strip(), (description or "").strip()
        if not title or not description:
            raise ValidationError("Title and description are required")
        if video_file is None or thumbnail is None:
            raise ValidationError("Video file and thumbnail are required")
        if duration is not None and duration < 0:
            raise ValidationError("Duration cannot be negative")

        async with MediaBatch(self.blob_store) as batch:
            video_blob = await batch.upload(video_file, MediaKind.VIDEO)
            thumbnail_blob = await batch.upload(thumbnail, MediaKind.THUMBNAIL)

            video = await self.repo.create(
                title=title,
                description=description,
                video_url=video_blob.url,
                video_public_id=video_blob.public_id,
                thumbnail_url=thumbnail_blob.url,
                thumbnail_public_id=thumbnail_blob.public_id,
                duration=duration or 0.0,
                owner_id=owner_id,
                is_published=False,
            )

        logger.info("Video uploaded", video_id=str(video.id), owner_id=str(owner_id))
        return await self.views.compile_video_view(video.id, owner_id)

    async def update_video(
        self,
        video_id: UUID,
        requester_id: UUID,
        title: Optional[str] = None,
        description: Optional[str] = None,
        thumbnail: Optional[MediaUpload] = None,
    ) -> dict[str, Any]:
        """
        Change title, description and/or thumbnail.

        A new thumbnail is uploaded before the row changes; the old blob is
        removed only after the row points at the new one.
        """
        video = await self.get_owned_video(video_id, requester_id)

        changes: dict[str, Any] = {}
        if title is not None:
            if not title.strip():
                raise ValidationError("Title cannot be empty")
            changes["title"] = title.strip()
        if description is not None:
            if not description.strip():
                raise ValidationError("Description cannot be empty")
            changes["description"] = description.strip()
        if not changes and thumbnail is None:
            raise ValidationError("Nothing to update")

        old_thumbnail = None
        async with MediaBatch(self.blob_store) as batch:
            if thumbnail is not None:
                blob = await batch.upload(thumbnail, MediaKind.THUMBNAIL)
                old_thumbnail = video.thumbnail_public_id
                changes.update(thumbnail_url=blob.url, thumbnail_public_id=blob.public_id)
            await self.repo.update(video, **changes)
            await self.session.commit()

        await discard_blobs(self.blob_store, [old_thumbnail])
        logger.info("Video updated", video_id=str(video_id), fields=sorted(changes))
        return await self.views.compile_video_view(video_id, requester_id)

    async def toggle_publish(self, video_id: UUID, requester_id: UUID) -> bool:
        """Flip is_published; returns the new state."""
        video = await self.get_owned_video(video_id, requester_id)
        video = await self.repo.update(video, is_published=not video.is_published)
        logger.info("Video publish state changed", video_id=str(video_id), is_published=video.is_published)
        return video.is_published

    async def delete_video(self, video_id: UUID, requester_id: UUID) -> None:
        """Delete a video with everything that hangs off it, then its media."""
        video = await self.get_owned_video(video_id, requester_id)
        media = [video.video_public_id, video.thumbnail_public_id]

        comment_ids = await self.comments.ids_for_video(video_id)
        comment_likes = await self.likes.delete_for_targets(LikeTargetKind.COMMENT, comment_ids)
        comments = await self.comments.delete_for_video(video_id)
        video_likes = await self.likes.delete_for_targets(LikeTargetKind.VIDEO, [video_id])
        await self.history.delete_for_video(video_id)
        await self.playlists.remove_video_everywhere(video_id)
        await self.repo.delete(video)
        await self.session.commit()

        await discard_blobs(self.blob_store, media)
        logger.info(
            "Video deleted",
            video_id=str(video_id),
            comments=comments,
            comment_likes=comment_likes,
            video_likes=video_likes,
        )
