"""
View Compiler

Builds the read-side views clients see. Every view is a ViewPipeline over
one root entity; the compiler never writes.

Views:
======
    compile_video_view          → one video + owner card + like/subscription flags
    compile_comment_page        → one page of a video's comments
    compile_channel_profile     → a channel (user) with subscription counts
    compile_video_listing       → public, published-only search/listing
    compile_owner_video_listing → the requester's own videos, drafts included
    compile_watch_history       → videos the user watched, latest first
    compile_liked_videos        → videos the user liked, latest like first
    compile_playlist_videos     → a playlist's videos in position order
    compile_subscriber_list     → users subscribed to a channel
    compile_subscription_list   → channels a user subscribes to
    compile_user_playlists      → a user's playlists with their sizes

Counts and Viewer Flags:
========================
Counts are never stored. Each like or subscription set is aggregated in a
subquery grouped by its target and outer-joined on the root:

    SELECT video_id AS target_id,
           count(id) AS likes_count,
           max(CASE WHEN liked_by_id = :viewer THEN 1 ELSE 0 END) AS viewer_liked
      FROM likes WHERE video_id IS NOT NULL GROUP BY video_id

    likes_count = coalesce(likes_count, 0)
    is_liked    = coalesce(viewer_liked, 0) = 1        (false when anonymous)

Grouping first keeps the root at one row per entity, so joins never
multiply rows and pagination counts stay exact.

Stage Order:
============
    filters (root only) → sort (ends in id tiebreak) → joins → derived → shape
"""

from dataclasses import dataclass
from typing import Any, Optional
from uuid import UUID

from sqlalchemy import ColumnElement, Subquery, case, false, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from vidshare.shared.core.exceptions import (
    ChannelNotFoundError,
    ValidationError,
    VideoNotFoundError,
)
from vidshare.shared.core.logging import get_logger
from vidshare.shared.models import (
    Comment,
    Like,
    LikeTargetKind,
    Playlist,
    PlaylistVideo,
    SortDirection,
    Subscription,
    User,
    Video,
    VideoSortField,
    WatchHistoryEntry,
)
from vidshare.shared.repositories.like_repository import target_column
from vidshare.shared.schemas.common import Page
from vidshare.shared.views.pagination import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, paginate
from vidshare.shared.views.pipeline import ViewPipeline


logger = get_logger(__name__)


# ═══════════════════════════════════════════════════════════════════════════════
# PROJECTIONS
# ═══════════════════════════════════════════════════════════════════════════════

OWNER_FIELDS = ["owner__id", "owner__username", "owner__full_name", "owner__avatar_url"]

VIDEO_SUMMARY_FIELDS = [
    "id",
    "title",
    "description",
    "video_url",
    "thumbnail_url",
    "duration",
    "views",
    "is_published",
    "created_at",
    *OWNER_FIELDS,
    "likes_count",
    "is_liked",
]

VIDEO_VIEW_FIELDS = VIDEO_SUMMARY_FIELDS + [
    "updated_at",
    "owner__subscribers_count",
    "owner__is_subscribed",
]

COMMENT_FIELDS = [
    "id",
    "content",
    "video_id",
    "created_at",
    "updated_at",
    *OWNER_FIELDS,
    "likes_count",
    "is_liked",
]

CHANNEL_FIELDS = [
    "id",
    "username",
    "full_name",
    "email",
    "avatar_url",
    "cover_image_url",
    "created_at",
    "subscribers_count",
    "channels_subscribed_to_count",
    "is_subscribed",
]

USER_CARD_FIELDS = ["id", "username", "full_name", "avatar_url", "subscribed_at"]

PLAYLIST_FIELDS = ["id", "name", "description", "owner_id", "created_at", "updated_at", "videos_count"]


def _video_columns() -> dict[str, ColumnElement[Any]]:
    return {
        "id": Video.id,
        "title": Video.title,
        "description": Video.description,
        "video_url": Video.video_url,
        "thumbnail_url": Video.thumbnail_url,
        "duration": Video.duration,
        "views": Video.views,
        "is_published": Video.is_published,
        "created_at": Video.created_at,
        "updated_at": Video.updated_at,
    }


def _user_card_columns(users: Any) -> dict[str, ColumnElement[Any]]:
    return {
        "id": users.c.id,
        "username": users.c.username,
        "full_name": users.c.full_name,
        "avatar_url": users.c.avatar_url,
    }


def _owner_columns(owner: Any) -> dict[str, ColumnElement[Any]]:
    return {
        "owner__id": owner.c.id,
        "owner__username": owner.c.username,
        "owner__full_name": owner.c.full_name,
        "owner__avatar_url": owner.c.avatar_url,
    }


# ═══════════════════════════════════════════════════════════════════════════════
# AGGREGATED EDGE SETS
# ═══════════════════════════════════════════════════════════════════════════════


def _viewer_flag(stats: Subquery, marker: str, viewer_id: Optional[UUID]) -> ColumnElement[bool]:
    """True iff the aggregated viewer marker is set; always false when anonymous."""
    if viewer_id is None:
        return false()
    return func.coalesce(stats.c[marker], 0) == 1


def _like_stats(kind: LikeTargetKind, viewer_id: Optional[UUID]) -> Subquery:
    """Likes grouped by target: likes_count plus the viewer's marker."""
    column = target_column(kind)
    fields = [column.label("target_id"), func.count(Like.id).label("likes_count")]
    if viewer_id is not None:
        fields.append(
            func.max(case((Like.liked_by_id == viewer_id, 1), else_=0)).label("viewer_liked")
        )
    return (
        select(*fields)
        .where(column.is_not(None))
        .group_by(column)
        .subquery(f"{kind.value}_likes")
    )


def _like_fields(stats: Subquery, viewer_id: Optional[UUID]) -> dict[str, ColumnElement[Any]]:
    return {
        "likes_count": func.coalesce(stats.c.likes_count, 0),
        "is_liked": _viewer_flag(stats, "viewer_liked", viewer_id),
    }


def _subscriber_stats(viewer_id: Optional[UUID]) -> Subquery:
    """Subscriptions grouped by channel: subscribers_count plus the viewer's marker."""
    fields = [
        Subscription.channel_id.label("channel_id"),
        func.count(Subscription.id).label("subscribers_count"),
    ]
    if viewer_id is not None:
        fields.append(
            func.max(case((Subscription.subscriber_id == viewer_id, 1), else_=0)).label(
                "viewer_subscribed"
            )
        )
    return select(*fields).group_by(Subscription.channel_id).subquery("channel_subscribers")


def _following_stats() -> Subquery:
    """Subscriptions grouped by subscriber: how many channels each user follows."""
    return (
        select(
            Subscription.subscriber_id.label("subscriber_id"),
            func.count(Subscription.id).label("channels_count"),
        )
        .group_by(Subscription.subscriber_id)
        .subquery("channel_following")
    )


def _visible_video_ids(viewer_id: Optional[UUID]) -> Any:
    """Videos the viewer may see: published ones, plus their own."""
    visible = Video.is_published.is_(True)
    if viewer_id is not None:
        visible = or_(visible, Video.owner_id == viewer_id)
    return select(Video.id).where(visible)


def _ordered(direction: SortDirection, *columns: Any) -> list[ColumnElement[Any]]:
    if direction is SortDirection.ASC:
        return [column.asc() for column in columns]
    return [column.desc() for column in columns]


def resolve_sort(
    sort_by: Optional[str],
    sort_type: Optional[str],
) -> tuple[VideoSortField, SortDirection]:
    """
    Validate a listing sort request.

    Missing values default to created_at desc.

    Raises:
        ValidationError: Unknown field or direction
    """
    try:
        field = VideoSortField(sort_by) if sort_by else VideoSortField.CREATED_AT
    except ValueError:
        raise ValidationError(
            f"Cannot sort videos by '{sort_by}'",
            details={"allowed": [f.value for f in VideoSortField]},
        )
    try:
        direction = SortDirection(sort_type.lower()) if sort_type else SortDirection.DESC
    except ValueError:
        raise ValidationError(
            f"Unknown sort direction '{sort_type}'",
            details={"allowed": [d.value for d in SortDirection]},
        )
    return field, direction


@dataclass(frozen=True)
class VideoListingQuery:
    """Filters and sort for the public video listing."""

    text: Optional[str] = None
    owner_id: Optional[UUID] = None
    sort_by: Optional[str] = None
    sort_type: Optional[str] = None


# ═══════════════════════════════════════════════════════════════════════════════
# COMPILER
# ═══════════════════════════════════════════════════════════════════════════════


class ViewCompiler:
    """
    Compiles viewer-relative read views.

    Single-entity views (video, channel) are executed here and raise
    NotFound; list views return an unpaged ViewPipeline for paginate().

    Attributes:
        session: Async database session
    """

    def __init__(
        self,
        session: AsyncSession,
        default_page_size: int = DEFAULT_PAGE_SIZE,
        max_page_size: int = MAX_PAGE_SIZE,
    ) -> None:
        self.session = session
        self.default_page_size = default_page_size
        self.max_page_size = max_page_size

    async def fetch_page(
        self,
        pipeline: ViewPipeline,
        page: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> Page[dict[str, Any]]:
        """Paginate a list view with this compiler's page size policy."""
        logger.debug("Compiling paged view", view=pipeline.name, stages=len(pipeline.stages))
        return await paginate(
            self.session,
            pipeline,
            page,
            limit,
            default_limit=self.default_page_size,
            max_limit=self.max_page_size,
        )

    async def _fetch_one(self, pipeline: ViewPipeline) -> Optional[dict[str, Any]]:
        logger.debug("Compiling view", view=pipeline.name, stages=len(pipeline.stages))
        result = await self.session.execute(pipeline.to_statement().limit(1))
        row = result.mappings().first()
        return ViewPipeline.materialize(row) if row is not None else None

    # ═══════════════════════════════════════════════════════════════════════════
    # SHARED STAGES
    # ═══════════════════════════════════════════════════════════════════════════

    @staticmethod
    def _with_video_cards(
        pipeline: ViewPipeline,
        video_id_column: Any,
        viewer_id: Optional[UUID],
        *,
        join_video: bool = False,
    ) -> ViewPipeline:
        """
        Joins and derivations shared by every video-list view: owner card,
        like count and the viewer's like flag.
        """
        if join_video:
            pipeline.join(
                "video",
                Video.__table__,
                Video.id == video_id_column,
                _video_columns(),
                outer=False,
            )
        owner = User.__table__.alias("owner")
        likes = _like_stats(LikeTargetKind.VIDEO, viewer_id)
        pipeline.join("owner", owner, owner.c.id == Video.owner_id, _owner_columns(owner), outer=False)
        pipeline.join("video_likes", likes, likes.c.target_id == Video.id)
        pipeline.derive("like_stats", _like_fields(likes, viewer_id))
        return pipeline

    # ═══════════════════════════════════════════════════════════════════════════
    # SINGLE ENTITY VIEWS
    # ═══════════════════════════════════════════════════════════════════════════

    async def compile_video_view(
        self,
        video_id: UUID,
        viewer_id: Optional[UUID] = None,
    ) -> dict[str, Any]:
        """
        One video with its owner card and viewer-relative flags.

        An unpublished video is visible only to its owner.

        Raises:
            VideoNotFoundError: Absent, or unpublished and not the viewer's
        """
        visible = Video.is_published.is_(True)
        if viewer_id is not None:
            visible = or_(visible, Video.owner_id == viewer_id)

        owner = User.__table__.alias("owner")
        likes = _like_stats(LikeTargetKind.VIDEO, viewer_id)
        subscribers = _subscriber_stats(viewer_id)

        pipeline = (
            ViewPipeline("video_view", Video, _video_columns())
            .filter("by_id", Video.id == video_id, visible)
            .join("owner", owner, owner.c.id == Video.owner_id, _owner_columns(owner), outer=False)
            .join("video_likes", likes, likes.c.target_id == Video.id)
            .join("owner_subscribers", subscribers, subscribers.c.channel_id == owner.c.id)
            .derive("like_stats", _like_fields(likes, viewer_id))
            .derive(
                "owner_subscriber_stats",
                {
                    "owner__subscribers_count": func.coalesce(subscribers.c.subscribers_count, 0),
                    "owner__is_subscribed": _viewer_flag(subscribers, "viewer_subscribed", viewer_id),
                },
            )
            .shape("video_view", VIDEO_VIEW_FIELDS)
        )

        view = await self._fetch_one(pipeline)
        if view is None:
            raise VideoNotFoundError(str(video_id))
        return view

    async def compile_channel_profile(
        self,
        username: str,
        viewer_id: Optional[UUID] = None,
    ) -> dict[str, Any]:
        """
        A channel looked up by username (case-insensitive).

        Raises:
            ChannelNotFoundError: No user has that username
        """
        handle = username.strip().lower()
        subscribers = _subscriber_stats(viewer_id)
        following = _following_stats()

        pipeline = (
            ViewPipeline(
                "channel_profile",
                User,
                {
                    "id": User.id,
                    "username": User.username,
                    "full_name": User.full_name,
                    "email": User.email,
                    "avatar_url": User.avatar_url,
                    "cover_image_url": User.cover_image_url,
                    "created_at": User.created_at,
                },
            )
            .filter("by_username", User.username == handle)
            .join("subscribers", subscribers, subscribers.c.channel_id == User.id)
            .join("following", following, following.c.subscriber_id == User.id)
            .derive(
                "subscription_stats",
                {
                    "subscribers_count": func.coalesce(subscribers.c.subscribers_count, 0),
                    "channels_subscribed_to_count": func.coalesce(following.c.channels_count, 0),
                    "is_subscribed": _viewer_flag(subscribers, "viewer_subscribed", viewer_id),
                },
            )
            .shape("channel", CHANNEL_FIELDS)
        )

        view = await self._fetch_one(pipeline)
        if view is None:
            raise ChannelNotFoundError(handle)
        return view

    # ═══════════════════════════════════════════════════════════════════════════
    # LIST VIEWS
    # ═══════════════════════════════════════════════════════════════════════════

    async def compile_comment_page(
        self,
        video_id: UUID,
        viewer_id: Optional[UUID] = None,
        page: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> Page[dict[str, Any]]:
        """
        One page of a video's comments, newest first.

        Raises:
            VideoNotFoundError: The video is absent or not visible to the viewer
        """
        exists = await self.session.execute(
            _visible_video_ids(viewer_id).where(Video.id == video_id).limit(1)
        )
        if exists.scalar_one_or_none() is None:
            raise VideoNotFoundError(str(video_id))

        owner = User.__table__.alias("owner")
        likes = _like_stats(LikeTargetKind.COMMENT, viewer_id)

        pipeline = (
            ViewPipeline(
                "comment_page",
                Comment,
                {
                    "id": Comment.id,
                    "content": Comment.content,
                    "video_id": Comment.video_id,
                    "created_at": Comment.created_at,
                    "updated_at": Comment.updated_at,
                },
            )
            .filter("on_video", Comment.video_id == video_id)
            .sort("newest", Comment.created_at.desc(), Comment.id.desc())
            .join("owner", owner, owner.c.id == Comment.owner_id, _owner_columns(owner), outer=False)
            .join("comment_likes", likes, likes.c.target_id == Comment.id)
            .derive("like_stats", _like_fields(likes, viewer_id))
            .shape("comment", COMMENT_FIELDS)
        )

        return await self.fetch_page(pipeline, page, limit)

    def compile_video_listing(
        self,
        query: VideoListingQuery,
        viewer_id: Optional[UUID] = None,
    ) -> ViewPipeline:
        """
        Public listing: text match, owner, published-only, sort, then cards.

        Unpublished videos never appear, not even when filtering by the
        requester's own id.

        Raises:
            ValidationError: Unknown sort field or direction
        """
        field, direction = resolve_sort(query.sort_by, query.sort_type)
        pipeline = ViewPipeline("video_listing", Video, _video_columns())

        if query.text and query.text.strip():
            text = query.text.strip()
            pipeline.filter(
                "text",
                or_(
                    Video.title.icontains(text, autoescape=True),
                    Video.description.icontains(text, autoescape=True),
                ),
            )
        if query.owner_id is not None:
            pipeline.filter("owner", Video.owner_id == query.owner_id)

        pipeline.filter("published", Video.is_published.is_(True))
        pipeline.sort(
            f"{field.value}_{direction.value}",
            *_ordered(direction, getattr(Video, field.value), Video.id),
        )

        self._with_video_cards(pipeline, Video.id, viewer_id)
        return pipeline.shape("video_summary", VIDEO_SUMMARY_FIELDS)

    def compile_owner_video_listing(self, owner_id: UUID) -> ViewPipeline:
        """The owner's videos, published or not, newest first."""
        pipeline = (
            ViewPipeline("owner_video_listing", Video, _video_columns())
            .filter("owned", Video.owner_id == owner_id)
            .sort("newest", Video.created_at.desc(), Video.id.desc())
        )
        self._with_video_cards(pipeline, Video.id, owner_id)
        return pipeline.shape("video_summary", VIDEO_SUMMARY_FIELDS)

    def compile_watch_history(self, user_id: UUID) -> ViewPipeline:
        """Videos the user watched, most recently watched first."""
        pipeline = (
            ViewPipeline(
                "watch_history",
                WatchHistoryEntry,
                {"watched_at": WatchHistoryEntry.watched_at},
            )
            .filter(
                "mine",
                WatchHistoryEntry.user_id == user_id,
                WatchHistoryEntry.video_id.in_(_visible_video_ids(user_id)),
            )
            .sort("latest", WatchHistoryEntry.watched_at.desc(), WatchHistoryEntry.id.desc())
        )
        self._with_video_cards(pipeline, WatchHistoryEntry.video_id, user_id, join_video=True)
        return pipeline.shape("history_entry", VIDEO_SUMMARY_FIELDS + ["watched_at"])

    def compile_liked_videos(self, user_id: UUID) -> ViewPipeline:
        """Videos the user liked, most recent like first."""
        pipeline = (
            ViewPipeline("liked_videos", Like, {"liked_at": Like.created_at})
            .filter(
                "mine",
                Like.liked_by_id == user_id,
                Like.video_id.in_(_visible_video_ids(user_id)),
            )
            .sort("latest", Like.created_at.desc(), Like.id.desc())
        )
        self._with_video_cards(pipeline, Like.video_id, user_id, join_video=True)
        return pipeline.shape("liked_video", VIDEO_SUMMARY_FIELDS + ["liked_at"])

    def compile_playlist_videos(
        self,
        playlist_id: UUID,
        viewer_id: Optional[UUID] = None,
    ) -> ViewPipeline:
        """A playlist's videos in position order, hiding others' drafts."""
        pipeline = (
            ViewPipeline("playlist_videos", PlaylistVideo, {"position": PlaylistVideo.position})
            .filter(
                "in_playlist",
                PlaylistVideo.playlist_id == playlist_id,
                PlaylistVideo.video_id.in_(_visible_video_ids(viewer_id)),
            )
            .sort("position", PlaylistVideo.position.asc(), PlaylistVideo.id.asc())
        )
        self._with_video_cards(pipeline, PlaylistVideo.video_id, viewer_id, join_video=True)
        return pipeline.shape("playlist_video", VIDEO_SUMMARY_FIELDS + ["position"])

    def compile_subscriber_list(self, channel_id: UUID) -> ViewPipeline:
        """Users subscribed to the channel, newest subscription first."""
        subscriber = User.__table__.alias("subscriber")
        return (
            ViewPipeline("subscriber_list", Subscription, {"subscribed_at": Subscription.created_at})
            .filter("to_channel", Subscription.channel_id == channel_id)
            .sort("newest", Subscription.created_at.desc(), Subscription.id.desc())
            .join(
                "subscriber",
                subscriber,
                subscriber.c.id == Subscription.subscriber_id,
                _user_card_columns(subscriber),
                outer=False,
            )
            .shape("user_card", USER_CARD_FIELDS)
        )

    def compile_subscription_list(self, subscriber_id: UUID) -> ViewPipeline:
        """Channels the user subscribes to, newest subscription first, with their sizes."""
        channel = User.__table__.alias("channel")
        subscribers = _subscriber_stats(None)
        return (
            ViewPipeline("subscription_list", Subscription, {"subscribed_at": Subscription.created_at})
            .filter("by_subscriber", Subscription.subscriber_id == subscriber_id)
            .sort("newest", Subscription.created_at.desc(), Subscription.id.desc())
            .join(
                "channel",
                channel,
                channel.c.id == Subscription.channel_id,
                _user_card_columns(channel),
                outer=False,
            )
            .join("channel_subscribers", subscribers, subscribers.c.channel_id == channel.c.id)
            .derive(
                "channel_size",
                {"subscribers_count": func.coalesce(subscribers.c.subscribers_count, 0)},
            )
            .shape("channel_card", USER_CARD_FIELDS + ["subscribers_count"])
        )

    def compile_user_playlists(self, owner_id: UUID) -> ViewPipeline:
        """A user's playlists, most recently changed first, with their sizes."""
        sizes = (
            select(
                PlaylistVideo.playlist_id.label("playlist_id"),
                func.count(PlaylistVideo.id).label("videos_count"),
            )
            .group_by(PlaylistVideo.playlist_id)
            .subquery("playlist_sizes")
        )
        return (
            ViewPipeline(
                "user_playlists",
                Playlist,
                {
                    "id": Playlist.id,
                    "name": Playlist.name,
                    "description": Playlist.description,
                    "owner_id": Playlist.owner_id,
                    "created_at": Playlist.created_at,
                    "updated_at": Playlist.updated_at,
                },
            )
            .filter("owned", Playlist.owner_id == owner_id)
            .sort("recent", Playlist.updated_at.desc(), Playlist.id.desc())
            .join("sizes", sizes, sizes.c.playlist_id == Playlist.id)
            .derive("size", {"videos_count": func.coalesce(sizes.c.videos_count, 0)})
            .shape("playlist", PLAYLIST_FIELDS)
        )
