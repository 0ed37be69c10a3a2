"""
Watch History Repository
"""

from typing import Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from vidshare.shared.models.base import utcnow
from vidshare.shared.models.watch_history import WatchHistoryEntry
from vidshare.shared.repositories.base import BaseRepository


class WatchHistoryRepository(BaseRepository[WatchHistoryEntry]):
    """
    Repository for watch history entries.
    """

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(WatchHistoryEntry, session)

    async def find(self, user_id: UUID, video_id: UUID) -> Optional[WatchHistoryEntry]:
        result = await self.session.execute(
            select(WatchHistoryEntry).where(
                WatchHistoryEntry.user_id == user_id,
                WatchHistoryEntry.video_id == video_id,
            )
        )
        return result.scalar_one_or_none()

    async def touch(self, user_id: UUID, video_id: UUID) -> WatchHistoryEntry:
        """
        Record that the user watched the video now.

        Inserts the entry on first watch and refreshes watched_at after that,
        so a video appears once in the history at its latest position. When a
        concurrent first watch inserts the pair first, that row is refreshed
        instead.
        """
        entry = await self.find(user_id, video_id)

        if entry is None:
            try:
                async with self.session.begin_nested():
                    entry = WatchHistoryEntry(user_id=user_id, video_id=video_id, watched_at=utcnow())
                    self.session.add(entry)
                return entry
            except IntegrityError:
                entry = await self.find(user_id, video_id)

        entry.watched_at = utcnow()
        await self.session.flush()
        return entry

    async def delete_for_video(self, video_id: UUID) -> int:
        """Drop the video from everyone's history."""
        return await self.delete_where(WatchHistoryEntry.video_id == video_id)
