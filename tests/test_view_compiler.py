"""Viewer-relative views: counts, flags, visibility and listing filters."""

import uuid

import pytest

from vidshare.shared.core.exceptions import ChannelNotFoundError, ValidationError, VideoNotFoundError
from vidshare.shared.models import LikeTarget
from vidshare.shared.repositories import LikeRepository, SubscriptionRepository
from vidshare.shared.views.compiler import VideoListingQuery, ViewCompiler, resolve_sort

from tests.factories import at, make_comment, make_user, make_video


async def _like(session, target, user):
    await LikeRepository(session).add(target, user.id)


async def _subscribe(session, subscriber, channel):
    await SubscriptionRepository(session).add(subscriber.id, channel.id)


# ═══════════════════════════════════════════════════════════════════════════════
# VIDEO VIEW
# ═══════════════════════════════════════════════════════════════════════════════


async def test_video_view_is_viewer_relative(session, alice, bob, carol):
    video = await make_video(session, alice, "Intro")
    await _like(session, LikeTarget.video(video.id), bob)
    await _like(session, LikeTarget.video(video.id), carol)
    await _subscribe(session, bob, alice)

    compiler = ViewCompiler(session)
    for_bob = await compiler.compile_video_view(video.id, bob.id)
    for_alice = await compiler.compile_video_view(video.id, alice.id)

    assert for_bob["likes_count"] == 2
    assert for_bob["is_liked"]
    assert for_bob["owner"]["is_subscribed"]
    assert for_bob["owner"]["subscribers_count"] == 1
    assert for_bob["owner"]["username"] == "alice"

    assert for_alice["likes_count"] == 2
    assert not for_alice["is_liked"]
    assert not for_alice["owner"]["is_subscribed"]


async def test_video_view_for_anonymous_viewer(session, alice, bob):
    video = await make_video(session, alice)
    await _like(session, LikeTarget.video(video.id), bob)
    await _subscribe(session, bob, alice)

    view = await ViewCompiler(session).compile_video_view(video.id, None)

    assert view["likes_count"] == 1
    assert not view["is_liked"]
    assert not view["owner"]["is_subscribed"]
    assert view["owner"]["subscribers_count"] == 1


async def test_video_view_without_any_edges_has_zero_counts(session, alice):
    video = await make_video(session, alice)

    view = await ViewCompiler(session).compile_video_view(video.id, alice.id)

    assert view["likes_count"] == 0
    assert view["owner"]["subscribers_count"] == 0
    assert set(view) >= {"id", "title", "views", "updated_at", "owner"}


async def test_unpublished_video_is_visible_only_to_owner(session, alice, bob):
    draft = await make_video(session, alice, "Draft", published=False)
    compiler = ViewCompiler(session)

    assert (await compiler.compile_video_view(draft.id, alice.id))["title"] == "Draft"
    with pytest.raises(VideoNotFoundError):
        await compiler.compile_video_view(draft.id, bob.id)
    with pytest.raises(VideoNotFoundError):
        await compiler.compile_video_view(draft.id, None)


async def test_missing_video_is_not_found(session, alice):
    with pytest.raises(VideoNotFoundError):
        await ViewCompiler(session).compile_video_view(uuid.uuid4(), alice.id)


# ═══════════════════════════════════════════════════════════════════════════════
# COMMENTS
# ═══════════════════════════════════════════════════════════════════════════════


async def test_comment_page_is_newest_first_with_like_flags(session, alice, bob):
    video = await make_video(session, alice)
    first = await make_comment(session, video, bob, "first", created_at=at(1))
    second = await make_comment(session, video, alice, "second", created_at=at(2))
    third = await make_comment(session, video, bob, "third", created_at=at(3))
    await _like(session, LikeTarget.comment(second.id), bob)

    page = await ViewCompiler(session).compile_comment_page(video.id, bob.id)

    assert [c["content"] for c in page.items] == ["third", "second", "first"]
    assert [c["id"] for c in page.items] == [third.id, second.id, first.id]
    liked = page.items[1]
    assert liked["likes_count"] == 1 and liked["is_liked"]
    assert liked["owner"]["username"] == "alice"
    assert not page.items[0]["is_liked"]


async def test_comment_page_of_hidden_video_is_not_found(session, alice, bob):
    draft = await make_video(session, alice, published=False)

    with pytest.raises(VideoNotFoundError):
        await ViewCompiler(session).compile_comment_page(draft.id, bob.id)


# ═══════════════════════════════════════════════════════════════════════════════
# LISTING
# ═══════════════════════════════════════════════════════════════════════════════


async def _listing(session, viewer=None, **query):
    compiler = ViewCompiler(session)
    pipeline = compiler.compile_video_listing(VideoListingQuery(**query), viewer)
    return await compiler.fetch_page(pipeline, 1, 50)


async def test_listing_excludes_unpublished_even_for_owner_filter(session, alice):
    await make_video(session, alice, "Public")
    await make_video(session, alice, "Draft", published=False)

    page = await _listing(session, viewer=alice.id, owner_id=alice.id)

    assert [v["title"] for v in page.items] == ["Public"]
    assert page.total_items == 1


async def test_listing_filters_by_owner_and_text(session, alice, bob):
    await make_video(session, alice, "Cooking pasta")
    await make_video(session, alice, "Gardening")
    await make_video(session, bob, "Cooking rice")

    page = await _listing(session, text="cooking", owner_id=alice.id)

    assert [v["title"] for v in page.items] == ["Cooking pasta"]


async def test_listing_text_match_is_literal(session, alice):
    await make_video(session, alice, "100% real")
    await make_video(session, alice, "1000 reasons")

    page = await _listing(session, text="100%")

    assert [v["title"] for v in page.items] == ["100% real"]


async def test_listing_sorts_by_requested_field(session, alice):
    await make_video(session, alice, "b", views=5)
    await make_video(session, alice, "a", views=9)
    await make_video(session, alice, "c", views=1)

    by_views = await _listing(session, sort_by="views", sort_type="asc")
    by_title = await _listing(session, sort_by="title", sort_type="desc")

    assert [v["views"] for v in by_views.items] == [1, 5, 9]
    assert [v["title"] for v in by_title.items] == ["c", "b", "a"]


async def test_listing_defaults_to_newest_first(session, alice):
    await make_video(session, alice, "old", created_at=at(1))
    await make_video(session, alice, "new", created_at=at(5))

    page = await _listing(session)

    assert [v["title"] for v in page.items] == ["new", "old"]


@pytest.mark.parametrize(
    ("sort_by", "sort_type"),
    [("password_hash", "asc"), ("views", "sideways")],
)
def test_unknown_sort_is_a_validation_error(sort_by, sort_type):
    with pytest.raises(ValidationError):
        resolve_sort(sort_by, sort_type)


def test_sort_direction_is_case_insensitive():
    field, direction = resolve_sort("duration", "ASC")

    assert (field.value, direction.value) == ("duration", "asc")


# ═══════════════════════════════════════════════════════════════════════════════
# CHANNELS & PERSONAL LISTS
# ═══════════════════════════════════════════════════════════════════════════════


async def test_channel_profile_counts(session, alice, bob, carol):
    await _subscribe(session, bob, alice)
    await _subscribe(session, carol, alice)
    await _subscribe(session, alice, carol)

    compiler = ViewCompiler(session)
    profile = await compiler.compile_channel_profile("ALICE", bob.id)

    assert profile["username"] == "alice"
    assert profile["subscribers_count"] == 2
    assert profile["channels_subscribed_to_count"] == 1
    assert profile["is_subscribed"]
    assert not (await compiler.compile_channel_profile("alice", alice.id))["is_subscribed"]


async def test_unknown_channel(session):
    with pytest.raises(ChannelNotFoundError):
        await ViewCompiler(session).compile_channel_profile("nobody")


async def test_owner_listing_includes_drafts(session, alice, bob):
    await make_video(session, alice, "Public", created_at=at(1))
    await make_video(session, alice, "Draft", published=False, created_at=at(2))
    await make_video(session, bob, "Other")

    compiler = ViewCompiler(session)
    page = await compiler.fetch_page(compiler.compile_owner_video_listing(alice.id))

    assert [v["title"] for v in page.items] == ["Draft", "Public"]


async def test_liked_videos_hide_drafts_of_others(session, alice, bob):
    public = await make_video(session, alice, "Public")
    draft = await make_video(session, alice, "Draft", published=False)
    await _like(session, LikeTarget.video(public.id), bob)
    await _like(session, LikeTarget.video(draft.id), bob)

    compiler = ViewCompiler(session)
    page = await compiler.fetch_page(compiler.compile_liked_videos(bob.id))

    assert [v["title"] for v in page.items] == ["Public"]
    assert page.items[0]["is_liked"]
    assert "liked_at" in page.items[0]


async def test_subscription_lists(session, alice, bob, carol):
    await _subscribe(session, bob, alice)
    await _subscribe(session, carol, alice)
    await _subscribe(session, bob, carol)

    compiler = ViewCompiler(session)
    subscribers = await compiler.fetch_page(compiler.compile_subscriber_list(alice.id))
    channels = await compiler.fetch_page(compiler.compile_subscription_list(bob.id))

    assert {u["username"] for u in subscribers.items} == {"bob", "carol"}
    assert {c["username"]: c["subscribers_count"] for c in channels.items} == {
        "alice": 2,
        "carol": 1,
    }


async def test_lonely_user_lists_are_empty(session):
    loner = await make_user(session, "loner")
    compiler = ViewCompiler(session)

    page = await compiler.fetch_page(compiler.compile_subscriber_list(loner.id))

    assert page.items == [] and page.total_pages == 1
