"""
Repository Pattern Implementations

This module provides the Repository pattern for database operations.
Repositories encapsulate lookups and writes; client-facing reads are
compiled by vidshare.shared.views.

Repository Hierarchy:
=====================
    BaseRepository[ModelType]           ← Generic CRUD operations
         │
         ├── UserRepository             ← Username/email lookups
         ├── VideoRepository            ← View counter
         ├── CommentRepository          ← Per-video cascades
         ├── LikeRepository             ← LikeTarget → column mapping
         ├── SubscriptionRepository     ← Subscriber/channel edges
         ├── PlaylistRepository         ← Ordered membership
         └── WatchHistoryRepository     ← Upserted history entries

    SessionRepository                   ← Refresh-token records (keyed by user)

Usage Example:
==============
    from vidshare.shared.repositories import VideoRepository

    async def publish(db: AsyncSession, video_id: UUID):
        repo = VideoRepository(db)
        video = await repo.get(video_id)
        return await repo.update(video, is_published=True)
"""

from vidshare.shared.repositories.base import BaseRepository
from vidshare.shared.repositories.user_repository import UserRepository
from vidshare.shared.repositories.video_repository import VideoRepository
from vidshare.shared.repositories.comment_repository import CommentRepository
from vidshare.shared.repositories.like_repository import LikeRepository
from vidshare.shared.repositories.subscription_repository import SubscriptionRepository
from vidshare.shared.repositories.playlist_repository import PlaylistRepository
from vidshare.shared.repositories.watch_history_repository import WatchHistoryRepository
from vidshare.shared.repositories.session_repository import SessionRepository

__all__ = [
    # Base class
    "BaseRepository",
    # Entity-specific repositories
    "UserRepository",
    "VideoRepository",
    "CommentRepository",
    "LikeRepository",
    "SubscriptionRepository",
    "PlaylistRepository",
    "WatchHistoryRepository",
    "SessionRepository",
]
