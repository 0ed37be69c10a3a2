"""
Pydantic Schemas

Request and response models for the API.

Schema Categories:
==================
- common: Base schema, Page[T], message/toggle/error/health responses
- user: Authentication, account and channel schemas
- video: Compiled video views and owner cards
- comment: Comment requests and views
- playlist: Playlist requests and views

Usage:
======
    from vidshare.shared.schemas.video import VideoSummary
    from vidshare.shared.schemas.common import Page, ErrorResponse
"""

from vidshare.shared.schemas.common import (
    BaseSchema,
    Page,
    MessageResponse,
    ToggleResponse,
    ErrorDetail,
    ErrorResponse,
    HealthResponse,
)
from vidshare.shared.schemas.user import (
    UserLogin,
    RefreshTokenRequest,
    ChangePasswordRequest,
    UpdateAccountRequest,
    UserResponse,
    TokenResponse,
    AuthResponse,
    ChannelResponse,
    UserCard,
)
from vidshare.shared.schemas.video import (
    OwnerCard,
    OwnerChannelCard,
    VideoSummary,
    VideoResponse,
    WatchHistoryItem,
    LikedVideoItem,
    PlaylistVideoItem,
    PublishStatusResponse,
)
from vidshare.shared.schemas.comment import (
    CommentCreate,
    CommentUpdate,
    CommentResponse,
    CommentView,
)
from vidshare.shared.schemas.playlist import (
    PlaylistCreate,
    PlaylistUpdate,
    PlaylistResponse,
    PlaylistSummary,
    PlaylistDetail,
)

__all__ = [
    # Common
    "BaseSchema",
    "Page",
    "MessageResponse",
    "ToggleResponse",
    "ErrorDetail",
    "ErrorResponse",
    "HealthResponse",
    # User
    "UserLogin",
    "RefreshTokenRequest",
    "ChangePasswordRequest",
    "UpdateAccountRequest",
    "UserResponse",
    "TokenResponse",
    "AuthResponse",
    "ChannelResponse",
    "UserCard",
    # Video
    "OwnerCard",
    "OwnerChannelCard",
    "VideoSummary",
    "VideoResponse",
    "WatchHistoryItem",
    "LikedVideoItem",
    "PlaylistVideoItem",
    "PublishStatusResponse",
    # Comment
    "CommentCreate",
    "CommentUpdate",
    "CommentResponse",
    "CommentView",
    # Playlist
    "PlaylistCreate",
    "PlaylistUpdate",
    "PlaylistResponse",
    "PlaylistSummary",
    "PlaylistDetail",
]
