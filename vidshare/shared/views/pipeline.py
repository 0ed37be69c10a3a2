"""
View Pipeline

A compiled view is an ordered list of stages folded into one SELECT.

Stage Kinds:
============
    FILTER  → WHERE criteria on the root entity
    SORT    → ORDER BY (must end in a unique tiebreak for stable paging)
    JOIN    → Outer join of a related table or aggregated subquery,
              contributing projected columns
    DERIVE  → Computed columns over joined data (counts, viewer flags)
    SHAPE   → Final projection: which labels reach the client

Ordering Rule:
==============
    FILTER ─┐
    SORT   ─┼─► JOIN ─► DERIVE ─► SHAPE
            │
    - no FILTER after a JOIN     (filters narrow the root set first)
    - no JOIN after a DERIVE     (derived fields see every join they need)
    - nothing after SHAPE

A pipeline that breaks the rule raises PipelineOrderError at add() time,
before any SQL is built.

Nested Documents:
=================
Labels use "__" as a path separator. materialize() turns the flat row

    {"id": ..., "owner__id": ..., "owner__username": "alice"}

into

    {"id": ..., "owner": {"id": ..., "username": "alice"}}

Usage:
======
    pipeline = ViewPipeline("video_listing", Video, {"id": Video.id, "title": Video.title})
    pipeline.filter("published", Video.is_published.is_(True))
    pipeline.sort("newest", Video.created_at.desc(), Video.id.desc())
    pipeline.join("owner", owner, owner.id == Video.owner_id, {"owner__username": owner.username})
    statement = pipeline.to_statement()
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Mapping, Optional

from sqlalchemy import ColumnElement, Select, select


PATH_SEPARATOR = "__"


class PipelineOrderError(ValueError):
    """A stage was added where the ordering rule forbids it."""


class StageKind(str, Enum):
    FILTER = "filter"
    SORT = "sort"
    JOIN = "join"
    DERIVE = "derive"
    SHAPE = "shape"


@dataclass
class ViewState:
    """Mutable accumulator the stages write into while folding."""

    from_clause: Any
    columns: dict[str, ColumnElement[Any]]
    criteria: list[ColumnElement[bool]] = field(default_factory=list)
    order_by: list[ColumnElement[Any]] = field(default_factory=list)
    projection: Optional[list[str]] = None


@dataclass(frozen=True)
class Stage:
    kind: StageKind
    name: str
    apply: Callable[[ViewState], None]


class ViewPipeline:
    """
    Ordered, validated list of stages over one root entity.

    Attributes:
        name: Diagnostic name of the view (appears in errors and logs)
        stages: Stages in the order they were added
    """

    def __init__(
        self,
        name: str,
        root: Any,
        columns: Mapping[str, ColumnElement[Any]],
    ) -> None:
        """
        Args:
            name: Diagnostic name
            root: Root mapped class or FromClause
            columns: Root fields, keyed by output label
        """
        self.name = name
        self._root = root
        self._root_columns = dict(columns)
        self._stages: list[Stage] = []

    @property
    def stages(self) -> tuple[Stage, ...]:
        return tuple(self._stages)

    # ═══════════════════════════════════════════════════════════════════════════
    # BUILDING
    # ═══════════════════════════════════════════════════════════════════════════

    def add(self, stage: Stage) -> "ViewPipeline":
        """
        Append a stage, enforcing the ordering rule.

        Raises:
            PipelineOrderError: If the stage may not follow the current ones
        """
        seen = {existing.kind for existing in self._stages}

        if StageKind.SHAPE in seen:
            raise PipelineOrderError(
                f"{self.name}: cannot add {stage.kind.value} stage '{stage.name}' after shape"
            )
        if stage.kind is StageKind.FILTER and StageKind.JOIN in seen:
            raise PipelineOrderError(
                f"{self.name}: filter '{stage.name}' must run before any join"
            )
        if stage.kind is StageKind.JOIN and StageKind.DERIVE in seen:
            raise PipelineOrderError(
                f"{self.name}: join '{stage.name}' must run before any derived field"
            )

        self._stages.append(stage)
        return self

    def filter(self, name: str, *criteria: ColumnElement[bool]) -> "ViewPipeline":
        def apply(state: ViewState) -> None:
            state.criteria.extend(criteria)

        return self.add(Stage(StageKind.FILTER, name, apply))

    def sort(self, name: str, *order_by: ColumnElement[Any]) -> "ViewPipeline":
        def apply(state: ViewState) -> None:
            state.order_by = list(order_by)

        return self.add(Stage(StageKind.SORT, name, apply))

    def join(
        self,
        name: str,
        target: Any,
        onclause: ColumnElement[bool],
        columns: Optional[Mapping[str, ColumnElement[Any]]] = None,
        *,
        outer: bool = True,
    ) -> "ViewPipeline":
        """
        Join a table, alias or subquery onto the current FROM clause.

        Outer by default: a missing related row (no likes yet, no
        subscribers yet) must not drop the root row.
        """
        def apply(state: ViewState) -> None:
            if outer:
                state.from_clause = state.from_clause.outerjoin(target, onclause)
            else:
                state.from_clause = state.from_clause.join(target, onclause)
            state.columns.update(columns or {})

        return self.add(Stage(StageKind.JOIN, name, apply))

    def derive(self, name: str, columns: Mapping[str, ColumnElement[Any]]) -> "ViewPipeline":
        def apply(state: ViewState) -> None:
            state.columns.update(columns)

        return self.add(Stage(StageKind.DERIVE, name, apply))

    def shape(self, name: str, labels: list[str]) -> "ViewPipeline":
        def apply(state: ViewState) -> None:
            unknown = [label for label in labels if label not in state.columns]
            if unknown:
                raise PipelineOrderError(f"{self.name}: shape '{name}' names unknown fields {unknown}")
            state.projection = list(labels)

        return self.add(Stage(StageKind.SHAPE, name, apply))

    # ═══════════════════════════════════════════════════════════════════════════
    # COMPILING
    # ═══════════════════════════════════════════════════════════════════════════

    def to_statement(self) -> Select:
        """
        Fold the stages into a single SELECT.

        The pipeline itself is not consumed; calling this twice yields two
        equivalent statements.
        """
        root = self._root.__table__ if hasattr(self._root, "__table__") else self._root
        state = ViewState(from_clause=root, columns=dict(self._root_columns))

        for stage in self._stages:
            stage.apply(state)

        labels = state.projection if state.projection is not None else list(state.columns)
        statement = select(*(state.columns[label].label(label) for label in labels))
        statement = statement.select_from(state.from_clause)

        if state.criteria:
            statement = statement.where(*state.criteria)
        if state.order_by:
            statement = statement.order_by(*state.order_by)

        return statement

    @staticmethod
    def materialize(row: Mapping[str, Any]) -> dict[str, Any]:
        """Turn a flat labelled row into a nested document."""
        document: dict[str, Any] = {}
        for label, value in row.items():
            *parents, leaf = label.split(PATH_SEPARATOR)
            node = document
            for parent in parents:
                node = node.setdefault(parent, {})
            node[leaf] = value
        return document
