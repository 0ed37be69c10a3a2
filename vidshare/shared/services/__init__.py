"""
Business Logic Services

Services encapsulate business logic and coordinate between repositories,
the view compiler, the session authority and the blob store.

Service Pattern:
================
    Handler → Service → Repository → Database
                │   └──► ViewCompiler (reads)
                └──────► BlobStore (media)

Services should:
- Contain business logic and validation (ownership, policies)
- Coordinate multiple repositories if needed
- Handle transactions (via session)
- NOT handle HTTP concerns (that's for handlers)

Available Services:
===================
- SessionAuthority: Token issuance, rotation and revocation
- AuthService: Registration, login/refresh/logout, account updates
- VideoService: Publishing, listing, updating and deleting videos
- CommentService: Comments on videos
- EngagementService: Like and subscription toggles
- ChannelService: Channel profiles and watch history
- PlaylistService: Playlists
"""

from vidshare.shared.services.session_authority import Principal, SessionAuthority, TokenPair
from vidshare.shared.services.auth_service import AuthService
from vidshare.shared.services.video_service import VideoService
from vidshare.shared.services.comment_service import CommentService
from vidshare.shared.services.engagement_service import EngagementService
from vidshare.shared.services.channel_service import ChannelService
from vidshare.shared.services.playlist_service import PlaylistService
from vidshare.shared.services.media import MediaUpload

__all__ = [
    "Principal",
    "SessionAuthority",
    "TokenPair",
    "AuthService",
    "VideoService",
    "CommentService",
    "EngagementService",
    "ChannelService",
    "PlaylistService",
    "MediaUpload",
]
