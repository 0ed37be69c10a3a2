"""
Playlist Repository

Playlists plus their ordered video membership.

Position Handling:
==================
    add:    position = max(position) + 1  (0 for an empty playlist)
    remove: every later entry shifts down by one

    before remove(v2):  v1@0  v2@1  v3@2
    after:              v1@0  v3@1
"""

from typing import Optional
from uuid import UUID

from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from vidshare.shared.models.playlist import Playlist, PlaylistVideo
from vidshare.shared.repositories.base import BaseRepository


class PlaylistRepository(BaseRepository[Playlist]):
    """
    Repository for Playlist database operations.
    """

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(Playlist, session)

    # ═══════════════════════════════════════════════════════════════════════════
    # MEMBERSHIP
    # ═══════════════════════════════════════════════════════════════════════════

    async def get_entry(self, playlist_id: UUID, video_id: UUID) -> Optional[PlaylistVideo]:
        result = await self.session.execute(
            select(PlaylistVideo).where(
                PlaylistVideo.playlist_id == playlist_id,
                PlaylistVideo.video_id == video_id,
            )
        )
        return result.scalar_one_or_none()

    async def add_video(self, playlist_id: UUID, video_id: UUID) -> PlaylistVideo:
        """
        Append a video at the end of the playlist, inside a SAVEPOINT.

        A concurrent insert of the same pair raises IntegrityError after
        rolling back only the nested transaction.
        """
        result = await self.session.execute(
            select(func.max(PlaylistVideo.position)).where(
                PlaylistVideo.playlist_id == playlist_id
            )
        )
        last_position = result.scalar()
        async with self.session.begin_nested():
            entry = PlaylistVideo(
                playlist_id=playlist_id,
                video_id=video_id,
                position=0 if last_position is None else last_position + 1,
            )
            self.session.add(entry)
        return entry

    async def remove_entry(self, entry: PlaylistVideo) -> None:
        """Remove a membership and close the gap it leaves."""
        playlist_id, position = entry.playlist_id, entry.position
        await self.session.delete(entry)
        await self.session.flush()
        await self.session.execute(
            update(PlaylistVideo)
            .where(
                PlaylistVideo.playlist_id == playlist_id,
                PlaylistVideo.position > position,
            )
            .values(position=PlaylistVideo.position - 1)
        )

    async def clear(self, playlist_id: UUID) -> int:
        """Drop every membership of a playlist."""
        result = await self.session.execute(
            delete(PlaylistVideo).where(PlaylistVideo.playlist_id == playlist_id)
        )
        return result.rowcount or 0

    async def remove_video_everywhere(self, video_id: UUID) -> list[UUID]:
        """
        Remove a video from every playlist that holds it.

        Called when the video is deleted; positions are compacted per
        playlist.

        Returns:
            Ids of the playlists that changed
        """
        result = await self.session.execute(
            select(PlaylistVideo).where(PlaylistVideo.video_id == video_id)
        )
        entries = list(result.scalars().all())
        for entry in entries:
            await self.remove_entry(entry)
        return [entry.playlist_id for entry in entries]
