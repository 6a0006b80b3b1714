"""
MCP Server for TaskProc.

Loads task records from CSV or JSON files and lets clients shape a current
view with filter, sort, tag and search operations. The view is a
non-owning projection of the loaded tasks, and the operations that built
it are saved so the same view is rebuilt after a restart.
"""

# Re-export core components
from taskproc_mcp.core import (
    DataManager,
    TaskStore,
    ViewPipeline,
    compile_filter,
    compile_sort,
    make_predicate,
    replay,
)

# Re-export enums
from taskproc_mcp.enums import (
    FilterField,
    FilterOp,
    ResponseFormat,
    SortDirection,
    SortField,
    ViewOpType,
)

# Re-export errors
from taskproc_mcp.errors import ParseError, SourceError, StaleViewError, StorageError, TaskProcError

# Re-export models
from taskproc_mcp.models import (
    ClearInput,
    FilterInput,
    FilterSpec,
    FindByTagInput,
    GetTaskInput,
    ListTagsInput,
    LoadSourceInput,
    ReplayResult,
    SearchInput,
    SortInput,
    SortSpec,
    StatusInput,
    StatusStats,
    SummaryInput,
    TaskModel,
    ViewAction,
    ViewInput,
)
from taskproc_mcp.readers import CSVReader, JSONReader, ReaderRegistry, TaskReader, default_registry

# Re-export MCP server instance
from taskproc_mcp.server import get_manager, mcp, set_manager
from taskproc_mcp.storage import ActionLog

# Re-export tools
from taskproc_mcp.tools import (
    taskproc_clear,
    taskproc_filter,
    taskproc_find_by_tag,
    taskproc_find_untagged,
    taskproc_get,
    taskproc_history,
    taskproc_load,
    taskproc_reload,
    taskproc_reset,
    taskproc_search,
    taskproc_sort,
    taskproc_status,
    taskproc_summary,
    taskproc_tags,
    taskproc_view,
)

# Re-export formatters (private, used by tests)
from taskproc_mcp.utils import (
    _format_history_markdown,
    _format_task_concise,
    _format_task_markdown,
    _format_tasks_concise,
    _format_tasks_markdown,
)

__all__ = [
    # Enums
    "ResponseFormat",
    "FilterField",
    "FilterOp",
    "SortField",
    "SortDirection",
    "ViewOpType",
    # Errors
    "TaskProcError",
    "ParseError",
    "SourceError",
    "StorageError",
    "StaleViewError",
    # Models
    "TaskModel",
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
    # Core
    "compile_filter",
    "compile_sort",
    "make_predicate",
    "TaskStore",
    "ViewPipeline",
    "replay",
    "DataManager",
    "ActionLog",
    # Readers
    "TaskReader",
    "CSVReader",
    "JSONReader",
    "ReaderRegistry",
    "default_registry",
    # Formatters
    "_format_task_concise",
    "_format_task_markdown",
    "_format_tasks_concise",
    "_format_tasks_markdown",
    "_format_history_markdown",
    # Tools
    "taskproc_load",
    "taskproc_reload",
    "taskproc_clear",
    "taskproc_filter",
    "taskproc_sort",
    "taskproc_find_by_tag",
    "taskproc_find_untagged",
    "taskproc_search",
    "taskproc_reset",
    "taskproc_view",
    "taskproc_get",
    "taskproc_status",
    "taskproc_history",
    "taskproc_summary",
    "taskproc_tags",
    # MCP server
    "mcp",
    "get_manager",
    "set_manager",
]
