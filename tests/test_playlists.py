"""Playlist membership, ordering and ownership."""

import uuid

import pytest
from sqlalchemy import func, select

from vidshare.shared.core.exceptions import (
    AuthorizationError,
    DuplicateResourceError,
    NotFoundError,
    PlaylistNotFoundError,
    UserNotFoundError,
    ValidationError,
    VideoNotFoundError,
)
from vidshare.shared.models import PlaylistVideo
from vidshare.shared.services import PlaylistService

from tests.factories import make_video


@pytest.fixture
def playlists(session, config) -> PlaylistService:
    return PlaylistService(session, config)


def _titles(detail) -> list[str]:
    return [item["title"] for item in detail["videos"].items]


async def test_videos_keep_insertion_order(session, playlists, alice, bob):
    videos = [await make_video(session, bob, title) for title in ("One", "Two", "Three")]
    playlist = await playlists.create_playlist(alice.id, "  Road trip ", " songs ")

    for video in videos:
        detail = await playlists.add_video(playlist.id, video.id, alice.id)

    assert detail["name"] == "Road trip"
    assert detail["description"] == "songs"
    assert _titles(detail) == ["One", "Two", "Three"]
    assert [item["position"] for item in detail["videos"].items] == [0, 1, 2]


async def test_removal_compacts_positions(session, playlists, alice):
    videos = [await make_video(session, alice, title) for title in ("A", "B", "C")]
    playlist = await playlists.create_playlist(alice.id, "Mix")
    for video in videos:
        await playlists.add_video(playlist.id, video.id, alice.id)

    detail = await playlists.remove_video(playlist.id, videos[0].id, alice.id)
    assert [(item["title"], item["position"]) for item in detail["videos"].items] == [("B", 0), ("C", 1)]

    detail = await playlists.add_video(playlist.id, videos[0].id, alice.id)
    assert _titles(detail) == ["B", "C", "A"]


async def test_duplicate_entry_is_rejected(session, playlists, alice):
    video = await make_video(session, alice)
    playlist = await playlists.create_playlist(alice.id, "Mix")
    await playlists.add_video(playlist.id, video.id, alice.id)

    with pytest.raises(DuplicateResourceError):
        await playlists.add_video(playlist.id, video.id, alice.id)


async def test_concurrent_duplicate_entry_is_rejected(session, playlists, monkeypatch, alice):
    video = await make_video(session, alice)
    playlist = await playlists.create_playlist(alice.id, "Mix")
    await playlists.add_video(playlist.id, video.id, alice.id)

    async def _no_entry(*args):
        return None

    # Both requests passed the membership check before either inserted
    monkeypatch.setattr(playlists.repo, "get_entry", _no_entry)

    with pytest.raises(DuplicateResourceError):
        await playlists.add_video(playlist.id, video.id, alice.id)

    entries = await session.execute(select(func.count()).select_from(PlaylistVideo))
    assert entries.scalar_one() == 1


async def test_removing_absent_entry_is_not_found(session, playlists, alice):
    video = await make_video(session, alice)
    playlist = await playlists.create_playlist(alice.id, "Mix")

    with pytest.raises(NotFoundError):
        await playlists.remove_video(playlist.id, video.id, alice.id)


async def test_cannot_add_someone_elses_draft(session, playlists, alice, bob):
    draft = await make_video(session, bob, published=False)
    playlist = await playlists.create_playlist(alice.id, "Mix")

    with pytest.raises(VideoNotFoundError):
        await playlists.add_video(playlist.id, draft.id, alice.id)


async def test_unpublished_video_disappears_for_other_viewers(session, playlists, alice, bob):
    video = await make_video(session, alice, "Later hidden")
    playlist = await playlists.create_playlist(alice.id, "Mix")
    await playlists.add_video(playlist.id, video.id, alice.id)
    video.is_published = False
    await session.flush()

    assert _titles(await playlists.get_playlist(playlist.id, alice.id)) == ["Later hidden"]
    assert _titles(await playlists.get_playlist(playlist.id, bob.id)) == []
    assert _titles(await playlists.get_playlist(playlist.id, None)) == []


async def test_only_owner_can_change_playlist(session, playlists, alice, bob):
    video = await make_video(session, bob)
    playlist = await playlists.create_playlist(alice.id, "Mine")

    with pytest.raises(AuthorizationError):
        await playlists.add_video(playlist.id, video.id, bob.id)
    with pytest.raises(AuthorizationError):
        await playlists.update_playlist(playlist.id, bob.id, name="Theirs")
    with pytest.raises(AuthorizationError):
        await playlists.delete_playlist(playlist.id, bob.id)

    assert (await playlists.get_playlist(playlist.id))["name"] == "Mine"


async def test_update_playlist(playlists, alice):
    playlist = await playlists.create_playlist(alice.id, "Mine", "old")

    updated = await playlists.update_playlist(playlist.id, alice.id, description="new")

    assert updated.name == "Mine"
    assert updated.description == "new"
    with pytest.raises(ValidationError):
        await playlists.update_playlist(playlist.id, alice.id)
    with pytest.raises(ValidationError):
        await playlists.update_playlist(playlist.id, alice.id, name="  ")


async def test_delete_playlist(session, playlists, alice):
    video = await make_video(session, alice)
    playlist = await playlists.create_playlist(alice.id, "Gone soon")
    await playlists.add_video(playlist.id, video.id, alice.id)

    await playlists.delete_playlist(playlist.id, alice.id)

    with pytest.raises(PlaylistNotFoundError):
        await playlists.get_playlist(playlist.id)


async def test_user_playlists_carry_sizes(session, playlists, alice, bob):
    video = await make_video(session, alice)
    full = await playlists.create_playlist(alice.id, "Full")
    await playlists.create_playlist(alice.id, "Empty")
    await playlists.create_playlist(bob.id, "Not alice's")
    await playlists.add_video(full.id, video.id, alice.id)

    page = await playlists.list_user_playlists(alice.id)

    sizes = {item["name"]: item["videos_count"] for item in page.items}
    assert sizes == {"Full": 1, "Empty": 0}
    assert page.total_items == 2


async def test_playlists_of_unknown_user(playlists):
    with pytest.raises(UserNotFoundError):
        await playlists.list_user_playlists(uuid.uuid4())


async def test_blank_playlist_name_is_rejected(playlists, alice):
    with pytest.raises(ValidationError):
        await playlists.create_playlist(alice.id, "   ")
