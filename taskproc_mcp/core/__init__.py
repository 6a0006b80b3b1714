"""Store, expression compiler, view pipeline, replay and coordinator."""

from taskproc_mcp.core.expressions import compile_filter, compile_sort
from taskproc_mcp.core.manager import DataManager
from taskproc_mcp.core.replay import replay
from taskproc_mcp.core.store import TaskStore
from taskproc_mcp.core.view import ViewPipeline, make_predicate

__all__ = [
    "compile_filter",
    "compile_sort",
    "TaskStore",
    "ViewPipeline",
    "make_predicate",
    "replay",
    "DataManager",
]
