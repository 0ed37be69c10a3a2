"""
Channel Service

Read-side account views: a channel's public profile and a user's own
watch history.
"""

from typing import Any, Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from vidshare.config.settings import Settings
from vidshare.shared.core.exceptions import ValidationError
from vidshare.shared.schemas.common import Page
from vidshare.shared.views.compiler import ViewCompiler


class ChannelService:
    """
    Service for channel profiles and watch history.

    Attributes:
        views: ViewCompiler
    """

    def __init__(self, session: AsyncSession, config: Settings) -> None:
        self.session = session
        self.views = ViewCompiler(session, config.DEFAULT_PAGE_SIZE, config.MAX_PAGE_SIZE)

    async def get_channel_profile(
        self,
        username: str,
        viewer_id: Optional[UUID] = None,
    ) -> dict[str, Any]:
        """
        Raises:
            ValidationError: Blank username
            ChannelNotFoundError: No such channel
        """
        if not username or not username.strip():
            raise ValidationError("Username is missing")
        return await self.views.compile_channel_profile(username, viewer_id)

    async def get_watch_history(
        self,
        user_id: UUID,
        page: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> Page[dict[str, Any]]:
        return await self.views.fetch_page(self.views.compile_watch_history(user_id), page, limit)
