"""Ownership-gated writes, cascading deletes and write races."""

import uuid

import pytest
from sqlalchemy import func, select

from vidshare.shared.core.exceptions import (
    AuthorizationError,
    CommentNotFoundError,
    DuplicateResourceError,
    ValidationError,
    VideoNotFoundError,
)
from vidshare.shared.models import (
    Comment,
    Like,
    LikeTarget,
    PlaylistVideo,
    User,
    Video,
    WatchHistoryEntry,
)
from vidshare.shared.repositories import CommentRepository, VideoRepository, WatchHistoryRepository
from vidshare.shared.services import (
    AuthService,
    CommentService,
    EngagementService,
    PlaylistService,
    VideoService,
)

from tests.factories import make_comment, make_video


@pytest.fixture
def videos(session, config, blob_store) -> VideoService:
    return VideoService(session, config, blob_store)


@pytest.fixture
def comments(session, config) -> CommentService:
    return CommentService(session, config)


async def _count(session, model, *criteria) -> int:
    result = await session.execute(select(func.count()).select_from(model).where(*criteria))
    return result.scalar_one()


# ═══════════════════════════════════════════════════════════════════════════════
# COMMENTS
# ═══════════════════════════════════════════════════════════════════════════════


async def test_non_owner_cannot_edit_comment(session, comments, alice, bob):
    video = await make_video(session, alice)
    comment = await comments.add_comment(video.id, alice.id, "original")

    with pytest.raises(AuthorizationError):
        await comments.update_comment(comment.id, bob.id, "hijacked")

    stored = await CommentRepository(session).get(comment.id)
    assert stored.content == "original"


async def test_owner_edits_comment(session, comments, alice):
    video = await make_video(session, alice)
    comment = await comments.add_comment(video.id, alice.id, "first draft")

    updated = await comments.update_comment(comment.id, alice.id, "  final  ")

    assert updated.content == "final"


async def test_blank_comment_is_rejected(session, comments, alice):
    video = await make_video(session, alice)

    with pytest.raises(ValidationError):
        await comments.add_comment(video.id, alice.id, "   ")


async def test_cannot_comment_on_someone_elses_draft(session, comments, alice, bob):
    draft = await make_video(session, alice, published=False)

    with pytest.raises(VideoNotFoundError):
        await comments.add_comment(draft.id, bob.id, "hello")


async def test_deleting_comment_removes_its_likes(session, comments, config, alice, bob):
    video = await make_video(session, alice)
    comment = await comments.add_comment(video.id, bob.id, "hi")
    await EngagementService(session, config).toggle_like(LikeTarget.comment(comment.id), alice.id)

    with pytest.raises(AuthorizationError):
        await comments.delete_comment(comment.id, alice.id)
    await comments.delete_comment(comment.id, bob.id)

    assert await _count(session, Comment) == 0
    assert await _count(session, Like) == 0
    with pytest.raises(CommentNotFoundError):
        await comments.delete_comment(comment.id, bob.id)


# ═══════════════════════════════════════════════════════════════════════════════
# VIDEOS
# ═══════════════════════════════════════════════════════════════════════════════


async def test_non_owner_cannot_touch_video(session, videos, alice, bob):
    video = await make_video(session, alice, "Mine")

    with pytest.raises(AuthorizationError):
        await videos.update_video(video.id, bob.id, title="Theirs")
    with pytest.raises(AuthorizationError):
        await videos.toggle_publish(video.id, bob.id)
    with pytest.raises(AuthorizationError):
        await videos.delete_video(video.id, bob.id)

    stored = await VideoRepository(session).get(video.id)
    assert stored.title == "Mine"
    assert stored.is_published


async def test_missing_video_is_not_found_before_ownership(videos, bob):
    with pytest.raises(VideoNotFoundError):
        await videos.delete_video(uuid.uuid4(), bob.id)


async def test_toggle_publish_flips_state(session, videos, alice):
    video = await make_video(session, alice, published=False)

    assert await videos.toggle_publish(video.id, alice.id) is True
    assert await videos.toggle_publish(video.id, alice.id) is False


async def test_update_video_fields(session, videos, alice):
    video = await make_video(session, alice, "Old")

    view = await videos.update_video(video.id, alice.id, title="New", description="Fresh")

    assert view["title"] == "New"
    assert view["description"] == "Fresh"
    with pytest.raises(ValidationError):
        await videos.update_video(video.id, alice.id)
    with pytest.raises(ValidationError):
        await videos.update_video(video.id, alice.id, title="   ")


async def test_watching_counts_views_and_history(session, videos, alice, bob):
    first = await make_video(session, alice, "First")
    second = await make_video(session, alice, "Second")

    await videos.watch_video(first.id, bob.id)
    await videos.watch_video(second.id, bob.id)
    view = await videos.watch_video(first.id, bob.id)
    await videos.watch_video(first.id, None)

    assert view["views"] == 2
    assert await _count(session, WatchHistoryEntry, WatchHistoryEntry.user_id == bob.id) == 2


async def test_concurrent_first_watch_refreshes_the_existing_entry(session, monkeypatch, alice, bob):
    video = await make_video(session, alice)
    history = WatchHistoryRepository(session)
    first_id = (await history.touch(bob.id, video.id)).id
    lookup = history.find
    lookups = []

    async def _missing_on_first_lookup(user_id, video_id):
        lookups.append(video_id)
        if len(lookups) == 1:
            return None
        return await lookup(user_id, video_id)

    monkeypatch.setattr(history, "find", _missing_on_first_lookup)

    entry = await history.touch(bob.id, video.id)

    assert entry.id == first_id
    assert await _count(session, WatchHistoryEntry) == 1


async def test_delete_video_cascades(session, videos, comments, config, blob_store, alice, bob):
    engagement = EngagementService(session, config)
    playlists = PlaylistService(session, config)

    video = await make_video(session, alice, "Doomed")
    keeper = await make_video(session, alice, "Keeper")
    c1 = await make_comment(session, video, bob, "one")
    c2 = await make_comment(session, video, alice, "two")
    kept_comment = await make_comment(session, keeper, bob, "stays")

    await engagement.toggle_like(LikeTarget.video(video.id), bob.id)
    await engagement.toggle_like(LikeTarget.comment(c1.id), alice.id)
    await engagement.toggle_like(LikeTarget.comment(c2.id), bob.id)
    await engagement.toggle_like(LikeTarget.comment(kept_comment.id), alice.id)
    await videos.watch_video(video.id, bob.id)
    playlist = await playlists.create_playlist(bob.id, "Faves")
    await playlists.add_video(playlist.id, video.id, bob.id)
    await playlists.add_video(playlist.id, keeper.id, bob.id)

    doomed_media = {video.video_public_id, video.thumbnail_public_id}
    await videos.delete_video(video.id, alice.id)

    assert await VideoRepository(session).get(video.id) is None
    assert await _count(session, Comment, Comment.video_id == video.id) == 0
    assert await _count(session, Like) == 1
    assert await _count(session, WatchHistoryEntry) == 0
    entries = (await session.execute(select(PlaylistVideo.video_id, PlaylistVideo.position))).all()
    assert [tuple(row) for row in entries] == [(keeper.id, 0)]
    assert await _count(session, Video) == 1
    assert doomed_media <= set(blob_store.deleted)


# ═══════════════════════════════════════════════════════════════════════════════
# ACCOUNTS
# ═══════════════════════════════════════════════════════════════════════════════


async def test_email_taken_concurrently_is_a_duplicate(session, config, blob_store, monkeypatch, alice, bob):
    auth = AuthService(session, config, blob_store)

    async def _unused(email):
        return None

    # Alice claimed the address after bob's request checked it
    monkeypatch.setattr(auth.repo, "get_by_email", _unused)

    with pytest.raises(DuplicateResourceError):
        await auth.update_account(bob.id, email="alice@example.com")

    email = await session.execute(select(User.email).where(User.id == bob.id))
    assert email.scalar_one() == "bob@example.com"
