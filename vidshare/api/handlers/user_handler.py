"""
User Handler

Registration, session and account endpoints, plus channel profiles.

ARCHITECTURE:
=============
    Handler → Service → Repository → Model
          ↘ ViewCompiler ↗

Handlers should ONLY:
- Parse HTTP requests (ids, forms, uploads)
- Call service methods
- Format HTTP responses

Service exceptions propagate to the global error handler.
"""

from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile, status

from vidshare.api.dependencies import CurrentUser, OptionalViewer, Pagination, viewer_id
from vidshare.api.dependencies.services import (
    get_auth_service,
    get_channel_service,
    get_playlist_service,
)
from vidshare.api.uploads import read_upload
from vidshare.shared.core.exceptions import ValidationError
from vidshare.shared.schemas.common import MessageResponse, Page
from vidshare.shared.schemas.playlist import PlaylistSummary
from vidshare.shared.schemas.user import (
    AuthResponse,
    ChangePasswordRequest,
    ChannelResponse,
    RefreshTokenRequest,
    TokenResponse,
    UpdateAccountRequest,
    UserLogin,
    UserResponse,
)
from vidshare.shared.schemas.video import WatchHistoryItem
from vidshare.shared.services.auth_service import AuthService
from vidshare.shared.services.channel_service import ChannelService
from vidshare.shared.services.playlist_service import PlaylistService
from vidshare.shared.utils.identifiers import parse_identifier


router = APIRouter()


# ═══════════════════════════════════════════════════════════════════════════════
# REGISTRATION & SESSIONS
# ═══════════════════════════════════════════════════════════════════════════════


@router.post(
    "/register",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
)
async def register(
    username: str = Form(...),
    email: str = Form(...),
    full_name: str = Form(...),
    password: str = Form(...),
    avatar: Optional[UploadFile] = File(None),
    cover_image: Optional[UploadFile] = File(None),
    auth_service: AuthService = Depends(get_auth_service),
):
    """
    Register a new user.

    Multipart form with an avatar (required) and an optional cover image.
    Both are uploaded before the account row is written.

    Raises:
        400: Missing field or avatar
        409: Username or email already registered
        502: Blob store failure
    """
    user = await auth_service.register(
        username=username,
        email=email,
        full_name=full_name,
        password=password,
        avatar=await read_upload(avatar),
        cover_image=await read_upload(cover_image),
    )
    return UserResponse.model_validate(user)


@router.post("/login", response_model=AuthResponse)
async def login(
    credentials: UserLogin,
    auth_service: AuthService = Depends(get_auth_service),
):
    """
    Authenticate by username or email and start a new session.

    Any earlier session of the user is replaced.

    Raises:
        401: If credentials are invalid
    """
    user, tokens = await auth_service.login(
        password=credentials.password,
        username=credentials.username,
        email=credentials.email,
    )
    return AuthResponse(
        access_token=tokens.access_token,
        refresh_token=tokens.refresh_token,
        user=UserResponse.model_validate(user),
    )


@router.post("/logout", response_model=MessageResponse)
async def logout(
    current_user: CurrentUser,
    auth_service: AuthService = Depends(get_auth_service),
):
    await auth_service.logout(current_user.id)
    return MessageResponse(message="User logged out")


@router.post("/refresh-token", response_model=TokenResponse)
async def refresh_token(
    request: RefreshTokenRequest,
    auth_service: AuthService = Depends(get_auth_service),
):
    """
    Rotate the refresh token.

    Raises:
        401 AUTHENTICATION_ERROR: Token is malformed, expired or not a refresh token
        401 SESSION_REVOKED: Token was already used; the session is destroyed
    """
    tokens = await auth_service.refresh(request.refresh_token)
    return TokenResponse(access_token=tokens.access_token, refresh_token=tokens.refresh_token)


# ═══════════════════════════════════════════════════════════════════════════════
# ACCOUNT
# ═══════════════════════════════════════════════════════════════════════════════


@router.post("/change-password", response_model=MessageResponse)
async def change_password(
    request: ChangePasswordRequest,
    current_user: CurrentUser,
    auth_service: AuthService = Depends(get_auth_service),
):
    await auth_service.change_password(
        current_user.id,
        old_password=request.old_password,
        new_password=request.new_password,
        confirm_password=request.confirm_password,
    )
    return MessageResponse(message="Password changed successfully")


@router.get("/current-user", response_model=UserResponse)
async def current_user(
    current_user: CurrentUser,
    auth_service: AuthService = Depends(get_auth_service),
):
    user = await auth_service.get_user(current_user.id)
    return UserResponse.model_validate(user)


@router.patch("/update-account", response_model=UserResponse)
async def update_account(
    request: UpdateAccountRequest,
    current_user: CurrentUser,
    auth_service: AuthService = Depends(get_auth_service),
):
    user = await auth_service.update_account(
        current_user.id,
        full_name=request.full_name,
        email=request.email,
    )
    return UserResponse.model_validate(user)


@router.patch("/avatar", response_model=UserResponse)
async def update_avatar(
    current_user: CurrentUser,
    avatar: Optional[UploadFile] = File(None),
    auth_service: AuthService = Depends(get_auth_service),
):
    upload = await read_upload(avatar)
    if upload is None:
        raise ValidationError("Avatar file is missing", details={"field": "avatar"})
    user = await auth_service.update_avatar(current_user.id, upload)
    return UserResponse.model_validate(user)


@router.patch("/cover-image", response_model=UserResponse)
async def update_cover_image(
    current_user: CurrentUser,
    cover_image: Optional[UploadFile] = File(None),
    auth_service: AuthService = Depends(get_auth_service),
):
    upload = await read_upload(cover_image)
    if upload is None:
        raise ValidationError("Cover image file is missing", details={"field": "cover_image"})
    user = await auth_service.update_cover_image(current_user.id, upload)
    return UserResponse.model_validate(user)


# ═══════════════════════════════════════════════════════════════════════════════
# CHANNELS
# ═══════════════════════════════════════════════════════════════════════════════


@router.get("/c/{username}", response_model=ChannelResponse)
async def get_channel_profile(
    username: str,
    viewer: OptionalViewer,
    channel_service: ChannelService = Depends(get_channel_service),
):
    """Channel profile with subscriber counts relative to the viewer."""
    return await channel_service.get_channel_profile(username, viewer_id(viewer))


@router.get("/history", response_model=Page[WatchHistoryItem])
async def get_watch_history(
    current_user: CurrentUser,
    pagination: Pagination,
    channel_service: ChannelService = Depends(get_channel_service),
):
    """The caller's watched videos, most recently watched first."""
    return await channel_service.get_watch_history(
        current_user.id, pagination.page, pagination.limit
    )


@router.get("/{user_id}/playlists", response_model=Page[PlaylistSummary])
async def list_user_playlists(
    user_id: str,
    pagination: Pagination,
    playlist_service: PlaylistService = Depends(get_playlist_service),
):
    return await playlist_service.list_user_playlists(
        parse_identifier(user_id, "user"), pagination.page, pagination.limit
    )
