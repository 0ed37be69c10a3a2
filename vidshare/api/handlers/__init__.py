"""
API Handlers

Route handlers for the VidShare API.

Handlers follow the pattern:
- Parse HTTP requests
- Call service methods
- Format HTTP responses

All business logic is delegated to the service layer.
"""

from vidshare.api.handlers import (
    user_handler,
    video_handler,
    comment_handler,
    subscription_handler,
    playlist_handler,
    health_handler,
)

__all__ = [
    "user_handler",
    "video_handler",
    "comment_handler",
    "subscription_handler",
    "playlist_handler",
    "health_handler",
]
