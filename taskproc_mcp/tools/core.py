"""Core MCP tool definitions: loading sources and shaping the view."""

import json

from mcp.types import ToolAnnotations

from taskproc_mcp.enums import ResponseFormat
from taskproc_mcp.errors import TaskProcError
from taskproc_mcp.models.inputs import (
    ClearInput,
    FilterInput,
    FindByTagInput,
    GetTaskInput,
    LoadSourceInput,
    SearchInput,
    SortInput,
    ViewInput,
)
from taskproc_mcp.server import get_manager, mcp
from taskproc_mcp.utils.formatters import (
    _format_task_concise,
    _format_task_markdown,
    _format_tasks_concise,
    _format_tasks_markdown,
)


def _view_line(prefix: str) -> str:
    """One-line confirmation with the resulting view size."""
    manager = get_manager()
    return f"{prefix}\nView: {manager.view_count()} of {manager.task_count()} task(s)"


# ============================================================================
# Source Tools
# ============================================================================


@mcp.tool(
    name="taskproc_load",
    annotations=ToolAnnotations(
        title="Load Task File",
        readOnlyHint=False,
        destructiveHint=True,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def taskproc_load(params: LoadSourceInput) -> str:
    """
    Load tasks from a CSV or JSON file and make it the active source.

    USE THIS WHEN:
    - Starting work on a task file
    - Switching to a different task file

    DO NOT USE WHEN:
    - The file changed on disk and you want to keep the current view → use taskproc_reload

    Loading a file replaces all loaded tasks and clears the recorded view
    history; the view starts as every task ordered by id.

    Args:
        params: LoadSourceInput containing the file path

    Returns:
        Confirmation with the number of tasks loaded

    Examples:
        - Load a CSV file: params with path="tasks.csv"
        - Load a JSON file: params with path="/data/sprint.json"
    """
    try:
        count = get_manager().load_source(params.path)
    except TaskProcError as e:
        return f"Error: {e}"
    return f"Loaded {count} task(s) from {params.path}."


@mcp.tool(
    name="taskproc_reload",
    annotations=ToolAnnotations(
        title="Reload Task File",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def taskproc_reload() -> str:
    """
    Re-read the active task file and rebuild the view from its recorded history.

    Returns:
        Confirmation with the number of replayed and skipped actions
    """
    manager = get_manager()
    try:
        result = manager.reload_source()
    except TaskProcError as e:
        return f"Error: {e}"

    message = f"Reloaded {manager.task_count()} task(s) from {manager.current_source_path()}."
    if result.applied or result.skipped:
        message += f" Replayed {result.applied} action(s)"
        if result.skipped:
            message += f", skipped {result.skipped}"
        message += "."
    return _view_line(message)


@mcp.tool(
    name="taskproc_clear",
    annotations=ToolAnnotations(
        title="Clear Dataset",
        readOnlyHint=False,
        destructiveHint=True,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def taskproc_clear(params: ClearInput) -> str:
    """
    Unload all tasks and delete the saved view history.

    Args:
        params: ClearInput (no parameters)

    Returns:
        Confirmation message
    """
    try:
        get_manager().clear()
    except TaskProcError as e:
        return f"Error: {e}"
    return "Cleared loaded tasks and saved view."


# ============================================================================
# View Tools
# ============================================================================


@mcp.tool(
    name="taskproc_filter",
    annotations=ToolAnnotations(
        title="Filter View",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def taskproc_filter(params: FilterInput) -> str:
    """
    Narrow the current view with a filter expression.

    Filters are cumulative: each one is combined (AND) with the filters
    already applied. Use taskproc_reset to start over.

    FILTER SYNTAX: <field><op><value>
    - Operators: =, !=, >, >=, <, <=
    - id, priority: integer comparison, all operators
    - due_date: ISO date comparison, all operators ("due_date<2025-01-01")
    - title, status, created_date, assignee, description: = and != only
    - The value may contain spaces: "title=Fix login bug"

    Args:
        params: FilterInput containing the expression

    Returns:
        Confirmation with the resulting view size, or an error for invalid expressions

    Examples:
        - Open work: params with expression="status!=done"
        - High priority: params with expression="priority>=4"
        - Unassigned: params with expression="assignee="
    """
    try:
        get_manager().apply_filter(params.expression)
    except TaskProcError as e:
        return f"Error: {e}"
    return _view_line(f"Applied filter '{params.expression}'.")


@mcp.tool(
    name="taskproc_sort",
    annotations=ToolAnnotations(
        title="Sort View",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def taskproc_sort(params: SortInput) -> str:
    """
    Reorder the current view.

    Sorting is stable, so chaining sorts uses the previous order as a
    tiebreaker: sort by "priority desc" after "due_date" to get due dates
    ordered within each priority. Tasks without a due date sort last.

    SORT SYNTAX: <field> [asc|desc]
    - Fields: id, title, status, priority, created_date, due_date

    Args:
        params: SortInput containing the expression

    Returns:
        Confirmation message, or an error for invalid expressions
    """
    try:
        get_manager().apply_sort(params.expression)
    except TaskProcError as e:
        return f"Error: {e}"
    return _view_line(f"Sorted by '{params.expression}'.")


@mcp.tool(
    name="taskproc_find_by_tag",
    annotations=ToolAnnotations(
        title="Filter View by Tag",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def taskproc_find_by_tag(params: FindByTagInput) -> str:
    """
    Narrow the current view to tasks carrying a tag.

    Args:
        params: FindByTagInput containing the tag

    Returns:
        Confirmation with the resulting view size
    """
    try:
        get_manager().find_by_tag(params.tag)
    except TaskProcError as e:
        return f"Error: {e}"
    return _view_line(f"Kept tasks tagged '{params.tag}'.")


@mcp.tool(
    name="taskproc_find_untagged",
    annotations=ToolAnnotations(
        title="Filter View to Untagged Tasks",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def taskproc_find_untagged() -> str:
    """
    Narrow the current view to tasks without any tags.

    Returns:
        Confirmation with the resulting view size
    """
    try:
        get_manager().find_untagged()
    except TaskProcError as e:
        return f"Error: {e}"
    return _view_line("Kept untagged tasks.")


@mcp.tool(
    name="taskproc_search",
    annotations=ToolAnnotations(
        title="Search View",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def taskproc_search(params: SearchInput) -> str:
    """
    Narrow the current view to tasks whose title or description contains the text.

    Matching is case-insensitive.

    Args:
        params: SearchInput containing the text

    Returns:
        Confirmation with the resulting view size
    """
    try:
        get_manager().search(params.text)
    except TaskProcError as e:
        return f"Error: {e}"
    return _view_line(f"Kept tasks matching '{params.text}'.")


@mcp.tool(
    name="taskproc_reset",
    annotations=ToolAnnotations(
        title="Reset View",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def taskproc_reset() -> str:
    """
    Discard all filters and sorts: the view becomes every task ordered by id.

    Returns:
        Confirmation with the resulting view size
    """
    try:
        get_manager().reset_view()
    except TaskProcError as e:
        return f"Error: {e}"
    return _view_line("View reset.")


@mcp.tool(
    name="taskproc_view",
    annotations=ToolAnnotations(
        title="Show Current View",
        readOnlyHint=True,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def taskproc_view(params: ViewInput) -> str:
    """
    List the tasks in the current view, in view order.

    Args:
        params: ViewInput containing limit and response_format

    Returns:
        Formatted list of tasks (markdown, concise or JSON)
    """
    manager = get_manager()
    try:
        tasks = manager.current_view()
    except TaskProcError as e:
        return f"Error: {e}"
    total_count = len(tasks)

    if params.limit and len(tasks) > params.limit:
        tasks = tasks[: params.limit]

    if params.response_format == ResponseFormat.JSON:
        return json.dumps(
            {
                "source": manager.current_source_path(),
                "total": total_count,
                "count": len(tasks),
                "tasks": [t.model_dump(mode="json") for t in tasks],
            },
            indent=2,
        )

    if params.response_format == ResponseFormat.CONCISE:
        return _format_tasks_concise(tasks, manager.current_source_path() or None)

    return _format_tasks_markdown(tasks, "Current View", total=total_count)


@mcp.tool(
    name="taskproc_get",
    annotations=ToolAnnotations(
        title="Get Task",
        readOnlyHint=True,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def taskproc_get(params: GetTaskInput) -> str:
    """
    Get a single task from the loaded data by id, whether or not it is in the view.

    Args:
        params: GetTaskInput containing task_id and response_format

    Returns:
        Task details, or an error if the id is unknown
    """
    task = get_manager().get_task(params.task_id)
    if task is None:
        return f"Error: Task {params.task_id} not found."

    if params.response_format == ResponseFormat.JSON:
        return task.model_dump_json(indent=2)
    if params.response_format == ResponseFormat.CONCISE:
        return _format_task_concise(task)
    return _format_task_markdown(task)
