"""
Enums used across the application.
"""

from enum import Enum


class LikeTargetKind(str, Enum):
    """What a Like points at."""

    VIDEO = "video"
    COMMENT = "comment"


class VideoSortField(str, Enum):
    """Columns a public video listing may be sorted by."""

    CREATED_AT = "created_at"
    VIEWS = "views"
    DURATION = "duration"
    TITLE = "title"


class SortDirection(str, Enum):
    """Sort direction."""

    ASC = "asc"
    DESC = "desc"


class MediaKind(str, Enum):
    """
    Folder/resource type used when uploading to the blob store.

    Keeps avatars, covers, videos and thumbnails in separate key prefixes.
    """

    AVATAR = "avatar"
    COVER_IMAGE = "cover-image"
    VIDEO = "video"
    THUMBNAIL = "thumbnail"
