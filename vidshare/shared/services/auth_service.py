"""
Authentication Service

Business logic for accounts: registration, login, token refresh and the
owner-only profile updates.

Service Pattern:
================
Services encapsulate business logic and coordinate between:
- Repositories (data access)
- The Session Authority (tokens and session records)
- The blob store (avatar and cover images)

Usage:
======
    from vidshare.shared.services.auth_service import AuthService

    service = AuthService(db, settings, blob_store)
    user = await service.register(username="alice", ..., avatar=upload)
    user, tokens = await service.login(password="...", username="alice")
"""

from typing import Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from vidshare.config.settings import Settings
from vidshare.shared.adapters.blob_store import BlobStore
from vidshare.shared.core.exceptions import (
    AuthenticationError,
    DuplicateResourceError,
    UserNotFoundError,
    ValidationError,
)
from vidshare.shared.core.logging import get_logger
from vidshare.shared.models.enums import MediaKind
from vidshare.shared.models.user import User
from vidshare.shared.repositories.user_repository import UserRepository
from vidshare.shared.services.media import MediaBatch, MediaUpload, discard_blobs
from vidshare.shared.services.session_authority import SessionAuthority, TokenPair
from vidshare.shared.utils.security import SecurityUtils


logger = get_logger(__name__)


def _required(**fields: Optional[str]) -> dict[str, str]:
    """Strip every field and reject blanks."""
    cleaned = {name: (value or "").strip() for name, value in fields.items()}
    missing = [name for name, value in cleaned.items() if not value]
    if missing:
        raise ValidationError("All fields are required", details={"missing": missing})
    return cleaned


class AuthService:
    """
    Service for account-related business logic.

    Handles:
    - Registration with avatar (required) and cover image (optional)
    - Login, refresh and logout through the Session Authority
    - Account details, password and image updates

    Attributes:
        session: Database session
        repo: UserRepository instance
        authority: SessionAuthority instance
        blob_store: Media storage
    """

    def __init__(self, session: AsyncSession, config: Settings, blob_store: BlobStore) -> None:
        self.session = session
        self.config = config
        self.blob_store = blob_store
        self.repo = UserRepository(session)
        self.authority = SessionAuthority(session, config)

    async def get_user(self, user_id: UUID) -> User:
        user = await self.repo.get(user_id)
        if user is None:
            raise UserNotFoundError(str(user_id))
        return user

    # ═══════════════════════════════════════════════════════════════════════════
    # REGISTRATION & SESSIONS
    # ═══════════════════════════════════════════════════════════════════════════

    async def register(
        self,
        username: str,
        email: str,
        full_name: str,
        password: str,
        avatar: Optional[MediaUpload],
        cover_image: Optional[MediaUpload] = None,
    ) -> User:
        """
        Register a new user.

        Uniqueness is checked before anything is uploaded; the avatar and
        optional cover are uploaded before the row is written.

        Raises:
            ValidationError: Blank field or missing avatar
            DuplicateResourceError: Username or email already taken
            UpstreamFailureError: Blob store failure (nothing is written)
        """
        fields = _required(username=username, email=email, full_name=full_name, password=password)
        username, email = fields["username"].lower(), fields["email"].lower()

        if avatar is None or not avatar.data:
            raise ValidationError("Avatar file is required", details={"field": "avatar"})

        if await self.repo.username_or_email_taken(username, email):
            raise DuplicateResourceError("User with email or username already exists")

        async with MediaBatch(self.blob_store) as batch:
            avatar_blob = await batch.upload(avatar, MediaKind.AVATAR)
            cover_blob = None
            if cover_image is not None and cover_image.data:
                cover_blob = await batch.upload(cover_image, MediaKind.COVER_IMAGE)

            try:
                user = await self.repo.create(
                    username=username,
                    email=email,
                    full_name=fields["full_name"],
                    password_hash=SecurityUtils.hash_password(password),
                    avatar_url=avatar_blob.url,
                    avatar_public_id=avatar_blob.public_id,
                    cover_image_url=cover_blob.url if cover_blob else None,
                    cover_image_public_id=cover_blob.public_id if cover_blob else None,
                )
            except IntegrityError:
                await self.session.rollback()
                raise DuplicateResourceError("User with email or username already exists")

        logger.info("User registered", user_id=str(user.id), username=user.username)
        return user

    async def login(
        self,
        password: str,
        username: Optional[str] = None,
        email: Optional[str] = None,
    ) -> tuple[User, TokenPair]:
        return await self.authority.login(password=password, username=username, email=email)

    async def refresh(self, refresh_token: str) -> TokenPair:
        return await self.authority.refresh(refresh_token)

    async def logout(self, user_id: UUID) -> None:
        await self.authority.logout(user_id)

    # ═══════════════════════════════════════════════════════════════════════════
    # ACCOUNT UPDATES
    # ═══════════════════════════════════════════════════════════════════════════

    async def update_account(
        self,
        user_id: UUID,
        full_name: Optional[str] = None,
        email: Optional[str] = None,
    ) -> User:
        """
        Change display name and/or email.

        Raises:
            ValidationError: Nothing to change, or a blank value
            DuplicateResourceError: Email used by another account
        """
        if full_name is None and email is None:
            raise ValidationError("Full name or email is required")

        user = await self.get_user(user_id)
        changes: dict[str, str] = {}

        if full_name is not None:
            changes["full_name"] = _required(full_name=full_name)["full_name"]
        if email is not None:
            new_email = _required(email=email)["email"].lower()
            existing = await self.repo.get_by_email(new_email)
            if existing is not None and existing.id != user.id:
                raise DuplicateResourceError("Email is already in use")
            changes["email"] = new_email

        try:
            async with self.session.begin_nested():
                user = await self.repo.update(user, **changes)
        except IntegrityError:
            # Another account took the email between the check and the write
            raise DuplicateResourceError("Email is already in use")

        logger.info("Account updated", user_id=str(user.id), fields=sorted(changes))
        return user

    async def change_password(
        self,
        user_id: UUID,
        old_password: str,
        new_password: str,
        confirm_password: str,
    ) -> None:
        """
        Replace the password after verifying the current one.

        Raises:
            ValidationError: Blank new password or confirmation mismatch
            AuthenticationError: Old password is wrong
        """
        _required(new_password=new_password)
        if new_password != confirm_password:
            raise ValidationError("New password and confirmation do not match")

        user = await self.get_user(user_id)
        if not SecurityUtils.verify_password(old_password or "", user.password_hash):
            raise AuthenticationError("Invalid old password")

        await self.repo.update(user, password_hash=SecurityUtils.hash_password(new_password))
        logger.info("Password changed", user_id=str(user.id))

    async def update_avatar(self, user_id: UUID, avatar: MediaUpload) -> User:
        """Upload a new avatar, point the user at it, then drop the old blob."""
        return await self._replace_image(user_id, avatar, MediaKind.AVATAR, "avatar")

    async def update_cover_image(self, user_id: UUID, cover_image: MediaUpload) -> User:
        """Upload a new cover image, point the user at it, then drop the old blob."""
        return await self._replace_image(user_id, cover_image, MediaKind.COVER_IMAGE, "cover_image")

    async def _replace_image(
        self,
        user_id: UUID,
        upload: MediaUpload,
        kind: MediaKind,
        field: str,
    ) -> User:
        user = await self.get_user(user_id)
        old_public_id = getattr(user, f"{field}_public_id")

        async with MediaBatch(self.blob_store) as batch:
            blob = await batch.upload(upload, kind)
            user = await self.repo.update(
                user,
                **{f"{field}_url": blob.url, f"{field}_public_id": blob.public_id},
            )
            # The old blob may only go once nothing can point back at it
            await self.session.commit()

        await discard_blobs(self.blob_store, [old_public_id])
        logger.info("Profile image replaced", user_id=str(user.id), kind=kind.value)
        return user
