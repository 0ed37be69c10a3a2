"""
Custom Exceptions

Application-specific exceptions with HTTP status codes and error codes.

Exception Hierarchy:
====================
    VidShareException (base)
       │
       ├── AuthenticationError (401)    ← Missing, invalid or expired credentials
       │      └── SessionRevokedError   ← Refresh token reuse detected
       ├── AuthorizationError (403)     ← Valid principal, wrong owner
       ├── NotFoundError (404)          ← Entity absent
       │      ├── UserNotFoundError
       │      ├── ChannelNotFoundError
       │      ├── VideoNotFoundError
       │      ├── CommentNotFoundError
       │      └── PlaylistNotFoundError
       ├── ValidationError (400)        ← Invalid input data
       │      └── InvalidIdentifierError ← Malformed entity id
       ├── ConflictError (409)          ← Uniqueness violation
       │      └── DuplicateResourceError
       └── UpstreamFailureError (502)   ← Blob store or database failure

Every kind carries its own stable error code so clients can tell "log in
again" (AUTHENTICATION_ERROR, SESSION_REVOKED) from "not your resource"
(AUTHORIZATION_ERROR) from "gone" (NOT_FOUND).

Usage:
======
    from vidshare.shared.core.exceptions import VideoNotFoundError, AuthorizationError

    raise VideoNotFoundError(str(video_id))
    # Results in: {"error": {"code": "NOT_FOUND", "message": "Video with id '...' not found"}}

Exception Handling:
===================
    api/middleware/error_handler.py renders every VidShareException as:
    {
        "error": {
            "code": "NOT_FOUND",
            "message": "Video with id 'abc-123' not found",
            "details": {}
        }
    }
"""

from typing import Any, Optional


class VidShareException(Exception):
    """
    Root of every error a service may raise.

    Carries the HTTP status and stable error code the API renders, plus
    optional structured details.

    Attributes:
        message: Human-readable error message
        status_code: HTTP status code (default 500)
        error_code: Machine-readable error code
        details: Additional error context
    """

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        error_code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.status_code = status_code
        self.error_code = error_code or "INTERNAL_ERROR"
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """
        The error envelope: {"error": {"code", "message", "details"}}.
        """
        return {
            "error": {
                "code": self.error_code,
                "message": self.message,
                "details": self.details,
            }
        }


# ═══════════════════════════════════════════════════════════════════════════════
# AUTHENTICATION & AUTHORIZATION ERRORS (401, 403)
# ═══════════════════════════════════════════════════════════════════════════════


class AuthenticationError(VidShareException):
    """
    The caller is not (or no longer) a known principal (401).

    Bad login credentials, a missing bearer token, or a token that fails
    signature, expiry or type checks.
    """

    def __init__(
        self,
        message: str = "Authentication failed",
        details: Optional[dict[str, Any]] = None,
        error_code: str = "AUTHENTICATION_ERROR",
    ) -> None:
        super().__init__(
            message=message,
            status_code=401,
            error_code=error_code,
            details=details,
        )


class SessionRevokedError(AuthenticationError):
    """
    Session revoked (401).

    Raised when a correctly signed, unexpired refresh token is presented that
    is no longer the recorded one. The whole session has been destroyed and
    the principal must log in again.
    """

    def __init__(
        self,
        message: str = "Session has been revoked, please log in again",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message=message, details=details, error_code="SESSION_REVOKED")


class AuthorizationError(VidShareException):
    """
    Authenticated, but not the owner of the entity being changed (403).
    """

    def __init__(
        self,
        message: str = "Access denied",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=403,
            error_code="AUTHORIZATION_ERROR",
            details=details,
        )


# ═══════════════════════════════════════════════════════════════════════════════
# NOT FOUND ERRORS (404)
# ═══════════════════════════════════════════════════════════════════════════════


class NotFoundError(VidShareException):
    """
    An entity the request names does not exist for this viewer (404).

    Example:
        raise NotFoundError("Video", video_id)
        # Message: "Video with id 'abc-123' not found"
    """

    def __init__(
        self,
        resource: str,
        resource_id: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        message = f"{resource} not found"
        if resource_id:
            message = f"{resource} with id '{resource_id}' not found"
        super().__init__(
            message=message,
            status_code=404,
            error_code="NOT_FOUND",
            details=details,
        )


class UserNotFoundError(NotFoundError):
    """User not found error."""

    def __init__(self, user_id: str) -> None:
        super().__init__(resource="User", resource_id=user_id)


class ChannelNotFoundError(NotFoundError):
    """Channel lookup by username found nobody."""

    def __init__(self, username: str) -> None:
        super().__init__(
            resource="Channel",
            details={"username": username},
        )
        self.message = f"Channel '{username}' does not exist"


class VideoNotFoundError(NotFoundError):
    """Video not found error."""

    def __init__(self, video_id: str) -> None:
        super().__init__(resource="Video", resource_id=video_id)


class CommentNotFoundError(NotFoundError):
    """Comment not found error."""

    def __init__(self, comment_id: str) -> None:
        super().__init__(resource="Comment", resource_id=comment_id)


class PlaylistNotFoundError(NotFoundError):
    """Playlist not found error."""

    def __init__(self, playlist_id: str) -> None:
        super().__init__(resource="Playlist", resource_id=playlist_id)


# ═══════════════════════════════════════════════════════════════════════════════
# VALIDATION & CONFLICT ERRORS (400, 409)
# ═══════════════════════════════════════════════════════════════════════════════


class ValidationError(VidShareException):
    """Request data the services refuse to act on (400)."""

    def __init__(
        self,
        message: str = "Validation failed",
        details: Optional[dict[str, Any]] = None,
        error_code: str = "VALIDATION_ERROR",
    ) -> None:
        super().__init__(
            message=message,
            status_code=400,
            error_code=error_code,
            details=details,
        )


class InvalidIdentifierError(ValidationError):
    """
    Malformed identifier (400).

    Distinct from NotFoundError: the id could never name an entity.
    """

    def __init__(self, resource: str, value: Any) -> None:
        super().__init__(
            message=f"Invalid {resource} id '{value}'",
            details={"resource": resource, "value": str(value)},
            error_code="INVALID_IDENTIFIER",
        )


class ConflictError(VidShareException):
    """
    A write lost against a uniqueness constraint (409).

    Example:
        raise ConflictError("Like already recorded by a concurrent request")
    """

    def __init__(
        self,
        message: str = "Resource conflict",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=409,
            error_code="CONFLICT",
            details=details,
        )


class DuplicateResourceError(ConflictError):
    """The username, email or playlist entry already exists."""

    def __init__(
        self,
        message: str = "Resource already exists",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message=message, details=details)


# ═══════════════════════════════════════════════════════════════════════════════
# UPSTREAM ERRORS (502)
# ═══════════════════════════════════════════════════════════════════════════════


class UpstreamFailureError(VidShareException):
    """
    Upstream dependency failed (502 Bad Gateway).

    Raised when the blob store or the database fails transiently. Never
    retried automatically; the caller decides.
    """

    def __init__(
        self,
        service_name: str,
        message: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        extra_details = details or {}
        extra_details["service"] = service_name
        super().__init__(
            message=message or f"{service_name} service error",
            status_code=502,
            error_code="UPSTREAM_FAILURE",
            details=extra_details,
        )
