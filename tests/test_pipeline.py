"""ViewPipeline stage ordering and document shaping."""

import pytest
from sqlalchemy import func

from vidshare.shared.models import User, Video
from vidshare.shared.views import PipelineOrderError, StageKind, ViewPipeline


def _pipeline() -> ViewPipeline:
    return ViewPipeline("test_view", Video, {"id": Video.id, "title": Video.title})


def _owner():
    return User.__table__.alias("owner")


def test_stages_in_order_compile_to_one_select():
    owner = _owner()
    pipeline = (
        _pipeline()
        .filter("published", Video.is_published.is_(True))
        .sort("newest", Video.created_at.desc(), Video.id.desc())
        .join("owner", owner, owner.c.id == Video.owner_id, {"owner__username": owner.c.username})
        .derive("upper_title", {"shout": func.upper(Video.title)})
        .shape("card", ["id", "owner__username", "shout"])
    )

    assert [stage.kind for stage in pipeline.stages] == [
        StageKind.FILTER,
        StageKind.SORT,
        StageKind.JOIN,
        StageKind.DERIVE,
        StageKind.SHAPE,
    ]
    statement = pipeline.to_statement()
    assert list(statement.selected_columns.keys()) == ["id", "owner__username", "shout"]


def test_filter_after_join_is_rejected():
    owner = _owner()
    pipeline = _pipeline().join("owner", owner, owner.c.id == Video.owner_id)

    with pytest.raises(PipelineOrderError, match="before any join"):
        pipeline.filter("late", Video.is_published.is_(True))


def test_join_after_derive_is_rejected():
    owner = _owner()
    pipeline = _pipeline().derive("upper_title", {"shout": func.upper(Video.title)})

    with pytest.raises(PipelineOrderError, match="before any derived field"):
        pipeline.join("owner", owner, owner.c.id == Video.owner_id)


@pytest.mark.parametrize(
    "add_stage",
    [
        lambda p: p.filter("f", Video.is_published.is_(True)),
        lambda p: p.sort("s", Video.id.asc()),
        lambda p: p.derive("d", {"shout": func.upper(Video.title)}),
        lambda p: p.shape("again", ["id"]),
    ],
)
def test_nothing_may_follow_shape(add_stage):
    pipeline = _pipeline().shape("card", ["id"])

    with pytest.raises(PipelineOrderError, match="after shape"):
        add_stage(pipeline)


def test_rejected_stage_is_not_recorded():
    owner = _owner()
    pipeline = _pipeline().join("owner", owner, owner.c.id == Video.owner_id)

    with pytest.raises(PipelineOrderError):
        pipeline.filter("late", Video.is_published.is_(True))

    assert len(pipeline.stages) == 1


def test_shape_with_unknown_label_fails_at_compile():
    pipeline = _pipeline().shape("card", ["id", "likes_count"])

    with pytest.raises(PipelineOrderError, match="likes_count"):
        pipeline.to_statement()


def test_filter_after_sort_is_allowed():
    pipeline = _pipeline().sort("newest", Video.created_at.desc()).filter(
        "published", Video.is_published.is_(True)
    )
    assert "WHERE" in str(pipeline.to_statement())


def test_to_statement_can_be_called_repeatedly():
    pipeline = _pipeline().filter("published", Video.is_published.is_(True))

    assert str(pipeline.to_statement()) == str(pipeline.to_statement())


def test_materialize_nests_on_path_separator():
    row = {
        "id": 1,
        "owner__id": 2,
        "owner__username": "alice",
        "owner__stats__followers": 3,
        "likes_count": 0,
    }

    assert ViewPipeline.materialize(row) == {
        "id": 1,
        "owner": {"id": 2, "username": "alice", "stats": {"followers": 3}},
        "likes_count": 0,
    }
