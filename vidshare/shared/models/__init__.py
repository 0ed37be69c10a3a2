"""
VidShare SQLAlchemy Models

This package contains all database models for the VidShare application.

Model Graph:
============
    User ──< Video ──< Comment
     │         │          │
     │         └──< Like >┘        (Like targets exactly one of video/comment)
     │
     ├──< Subscription >── User    (subscriber → channel)
     ├──< Playlist ──< PlaylistVideo >── Video
     ├──< WatchHistoryEntry >── Video
     └──  UserSession              (at most one per user)

Models reference each other by foreign key only; there are no ORM
relationships to traverse.

Usage:
======
    from vidshare.shared.models import User, Video, Like, LikeTarget
"""

from vidshare.shared.models.base import Base, CreatedAtMixin, TimestampMixin, utcnow
from vidshare.shared.models.enums import (
    LikeTargetKind,
    MediaKind,
    SortDirection,
    VideoSortField,
)
from vidshare.shared.models.user import User
from vidshare.shared.models.video import Video
from vidshare.shared.models.comment import Comment
from vidshare.shared.models.like import Like, LikeTarget
from vidshare.shared.models.subscription import Subscription
from vidshare.shared.models.playlist import Playlist, PlaylistVideo
from vidshare.shared.models.watch_history import WatchHistoryEntry
from vidshare.shared.models.user_session import UserSession

__all__ = [
    # Base classes and mixins
    "Base",
    "CreatedAtMixin",
    "TimestampMixin",
    "utcnow",
    # Enums
    "LikeTargetKind",
    "MediaKind",
    "SortDirection",
    "VideoSortField",
    # Models
    "User",
    "Video",
    "Comment",
    "Like",
    "LikeTarget",
    "Subscription",
    "Playlist",
    "PlaylistVideo",
    "WatchHistoryEntry",
    "UserSession",
]
