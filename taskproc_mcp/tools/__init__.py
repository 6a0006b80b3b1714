"""MCP tool definitions for TaskProc."""

# Import all tools to register them with the MCP server
from taskproc_mcp.tools.core import (
    taskproc_clear,
    taskproc_filter,
    taskproc_find_by_tag,
    taskproc_find_untagged,
    taskproc_get,
    taskproc_load,
    taskproc_reload,
    taskproc_reset,
    taskproc_search,
    taskproc_sort,
    taskproc_view,
)
from taskproc_mcp.tools.stats import (
    taskproc_history,
    taskproc_status,
    taskproc_summary,
    taskproc_tags,
)

__all__ = [
    # Source tools
    "taskproc_load",
    "taskproc_reload",
    "taskproc_clear",
    # View tools
    "taskproc_filter",
    "taskproc_sort",
    "taskproc_find_by_tag",
    "taskproc_find_untagged",
    "taskproc_search",
    "taskproc_reset",
    "taskproc_view",
    "taskproc_get",
    # Read-only tools
    "taskproc_status",
    "taskproc_history",
    "taskproc_summary",
    "taskproc_tags",
]
