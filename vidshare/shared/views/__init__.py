"""
Graph View Engine

Read-side views over the user/video/comment/like/subscription graph.

- pipeline.py: ViewPipeline stages and their ordering rule
- compiler.py: ViewCompiler with one method per client-facing view
- pagination.py: Page parameter clamping and exact-count paging
"""

from vidshare.shared.views.pipeline import (
    PipelineOrderError,
    Stage,
    StageKind,
    ViewPipeline,
)
from vidshare.shared.views.pagination import PageParams, paginate
from vidshare.shared.views.compiler import VideoListingQuery, ViewCompiler, resolve_sort

__all__ = [
    "PipelineOrderError",
    "Stage",
    "StageKind",
    "ViewPipeline",
    "PageParams",
    "paginate",
    "VideoListingQuery",
    "ViewCompiler",
    "resolve_sort",
]
