"""Enums for TaskProc MCP."""

from enum import Enum


class ResponseFormat(str, Enum):
    """Output format for tool responses."""

    CONCISE = "concise"  # One line per task
    MARKDOWN = "markdown"  # Human-readable (default)
    JSON = "json"  # Machine-readable with all fields


class FilterField(str, Enum):
    """Task fields a filter expression may test."""

    ID = "id"
    TITLE = "title"
    STATUS = "status"
    PRIORITY = "priority"
    CREATED_DATE = "created_date"
    DUE_DATE = "due_date"
    ASSIGNEE = "assignee"
    DESCRIPTION = "description"


class FilterOp(str, Enum):
    """Comparison operators, listed in scan order (longest first)."""

    GREATER_THAN_OR_EQUAL = ">="
    LESS_THAN_OR_EQUAL = "<="
    NOT_EQUAL = "!="
    EQUAL = "="
    GREATER_THAN = ">"
    LESS_THAN = "<"


class SortField(str, Enum):
    """Task fields the view can be sorted by."""

    ID = "id"
    TITLE = "title"
    STATUS = "status"
    PRIORITY = "priority"
    CREATED_DATE = "created_date"
    DUE_DATE = "due_date"


class SortDirection(str, Enum):
    """Sort direction."""

    ASCENDING = "ascending"
    DESCENDING = "descending"


class ViewOpType(str, Enum):
    """Kinds of view operations recorded in the action log."""

    LOAD = "load"
    FILTER = "filter"
    SORT = "sort"
    RESET_FILTERS = "reset-filters"
    FIND_BY_TAG = "find-by-tag"
    FIND_UNTAGGED = "find-untagged"
    SEARCH = "search"
