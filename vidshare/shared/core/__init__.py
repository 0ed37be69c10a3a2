"""
Core Module

Provides core functionality shared across the application:
- Structured logging
- Custom exceptions

Usage:
======
    from vidshare.shared.core.logging import logger, get_logger
    from vidshare.shared.core.exceptions import VidShareException, NotFoundError

    logger.info("Starting operation", user_id=user_id)
"""

from vidshare.shared.core.logging import (
    logger,
    get_logger,
    log_context,
    clear_log_context,
)
from vidshare.shared.core.exceptions import (
    VidShareException,
    AuthenticationError,
    SessionRevokedError,
    AuthorizationError,
    NotFoundError,
    UserNotFoundError,
    ChannelNotFoundError,
    VideoNotFoundError,
    CommentNotFoundError,
    PlaylistNotFoundError,
    ValidationError,
    InvalidIdentifierError,
    ConflictError,
    DuplicateResourceError,
    UpstreamFailureError,
)

__all__ = [
    # Logging
    "logger",
    "get_logger",
    "log_context",
    "clear_log_context",
    # Exceptions
    "VidShareException",
    "AuthenticationError",
    "SessionRevokedError",
    "AuthorizationError",
    "NotFoundError",
    "UserNotFoundError",
    "ChannelNotFoundError",
    "VideoNotFoundError",
    "CommentNotFoundError",
    "PlaylistNotFoundError",
    "ValidationError",
    "InvalidIdentifierError",
    "ConflictError",
    "DuplicateResourceError",
    "UpstreamFailureError",
]
