"""Utility functions for TaskProc MCP."""

from taskproc_mcp.utils.formatters import (
    _format_history_markdown,
    _format_status_stats,
    _format_task_concise,
    _format_task_markdown,
    _format_tasks_concise,
    _format_tasks_markdown,
)

__all__ = [
    "_format_task_concise",
    "_format_task_markdown",
    "_format_tasks_concise",
    "_format_tasks_markdown",
    "_format_history_markdown",
    "_format_status_stats",
]
