"""Page parameter clamping and page assembly over compiled views."""

import pytest

from vidshare.shared.views.compiler import VideoListingQuery, ViewCompiler
from vidshare.shared.views.pagination import PageParams, build_page

from tests.factories import make_video


@pytest.mark.parametrize(
    ("page", "limit", "expected"),
    [
        (None, None, (1, 10)),
        (0, 5, (1, 5)),
        (-3, 5, (1, 5)),
        (2, 0, (2, 10)),
        (2, -1, (2, 10)),
        (4, 1000, (4, 100)),
        (3, 100, (3, 100)),
    ],
)
def test_clamp(page, limit, expected):
    params = PageParams.clamp(page, limit, default_limit=10, max_limit=100)

    assert (params.page, params.limit) == expected


def test_offset():
    assert PageParams(page=3, limit=20).offset == 40


def test_empty_view_still_has_one_page():
    page = build_page([], PageParams(page=1, limit=10), total_items=0)

    assert page.total_pages == 1
    assert not page.has_next_page
    assert not page.has_prev_page
    assert page.next_page is None and page.prev_page is None


def test_page_links():
    page = build_page(["x"] * 10, PageParams(page=2, limit=10), total_items=25)

    assert page.total_pages == 3
    assert (page.prev_page, page.next_page) == (1, 3)
    assert page.has_next_page and page.has_prev_page


def test_page_past_the_end_is_empty_but_keeps_totals():
    page = build_page([], PageParams(page=9, limit=10), total_items=25)

    assert page.items == []
    assert page.total_pages == 3
    assert not page.has_next_page
    assert page.prev_page == 8


async def test_pages_cover_the_view_exactly_once(session, alice):
    # Many ties on views; the id tiebreak must still give a total order
    for i in range(23):
        await make_video(session, alice, f"video {i}", views=i % 3)

    compiler = ViewCompiler(session)
    listing = VideoListingQuery(sort_by="views", sort_type="desc")

    seen = []
    for number in range(1, 4):
        page = await compiler.fetch_page(compiler.compile_video_listing(listing), number, 10)
        assert page.total_items == 23
        assert page.total_pages == 3
        seen.extend(item["id"] for item in page.items)

    assert len(seen) == 23
    assert len(set(seen)) == 23

    everything = await compiler.fetch_page(compiler.compile_video_listing(listing), 1, 100)
    assert seen == [item["id"] for item in everything.items]


async def test_oversized_limit_is_capped(session, alice):
    for i in range(3):
        await make_video(session, alice, f"video {i}")

    compiler = ViewCompiler(session, default_page_size=2, max_page_size=2)
    page = await compiler.fetch_page(compiler.compile_video_listing(VideoListingQuery()), 1, 50)

    assert page.limit == 2
    assert len(page.items) == 2
    assert page.total_pages == 2
