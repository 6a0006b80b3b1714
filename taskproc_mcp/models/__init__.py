"""Pydantic models for TaskProc MCP."""

from taskproc_mcp.models.inputs import (
    ClearInput,
    FilterInput,
    FindByTagInput,
    GetTaskInput,
    ListTagsInput,
    LoadSourceInput,
    SearchInput,
    SortInput,
    StatusInput,
    SummaryInput,
    ViewInput,
)
from taskproc_mcp.models.specs import FilterSpec, ReplayResult, SortSpec, StatusStats, ViewAction
from taskproc_mcp.models.task import TaskModel

__all__ = [
    # Task model
    "TaskModel",
    # Compiled expressions and log entries
    "FilterSpec",
    "SortSpec",
    "ViewAction",
    "StatusStats",
    "ReplayResult",
    # Tool input models
    "LoadSourceInput",
    "ClearInput",
    "FilterInput",
    "SortInput",
    "FindByTagInput",
    "SearchInput",
    "ViewInput",
    "GetTaskInput",
    "StatusInput",
    "SummaryInput",
    "ListTagsInput",
]
