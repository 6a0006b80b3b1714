"""Read-only MCP tools: dataset status, view history and statistics."""

import json

from mcp.types import ToolAnnotations

from taskproc_mcp.enums import ResponseFormat
from taskproc_mcp.errors import TaskProcError
from taskproc_mcp.models.inputs import ListTagsInput, StatusInput, SummaryInput
from taskproc_mcp.server import get_manager, mcp
from taskproc_mcp.utils.formatters import _format_history_markdown, _format_status_stats


@mcp.tool(
    name="taskproc_status",
    annotations=ToolAnnotations(
        title="Dataset Status",
        readOnlyHint=True,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def taskproc_status(params: StatusInput) -> str:
    """
    Report the active source file, task counts and the size of the saved history.

    Returns:
        Status report (markdown or JSON)
    """
    manager = get_manager()
    source = manager.current_source_path()
    try:
        view_count = manager.view_count()
    except TaskProcError as e:
        return f"Error: {e}"

    data = {
        "source": source,
        "task_count": manager.task_count(),
        "view_count": view_count,
        "history_length": len(manager.history()),
    }

    if params.response_format == ResponseFormat.JSON:
        return json.dumps(data, indent=2)

    if not source:
        return "# Dataset Status\n\nNo task file loaded."

    lines = [
        "# Dataset Status",
        "",
        f"**Source**: {source}",
        f"**Tasks loaded**: {data['task_count']}",
        f"**Tasks in view**: {view_count}",
        f"**Recorded actions**: {data['history_length']}",
    ]
    return "\n".join(lines)


@mcp.tool(
    name="taskproc_history",
    annotations=ToolAnnotations(
        title="View History",
        readOnlyHint=True,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def taskproc_history() -> str:
    """
    List the recorded view actions, oldest first.

    These are the actions replayed to rebuild the view after a restart or
    a reload.

    Returns:
        Numbered list of actions
    """
    return _format_history_markdown(get_manager().history())


@mcp.tool(
    name="taskproc_summary",
    annotations=ToolAnnotations(
        title="View Summary",
        readOnlyHint=True,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def taskproc_summary(params: SummaryInput) -> str:
    """
    Statistics over the current view: status distribution, average priority and overdue count.

    A task is overdue when it has a due date before `today` and is not done.

    Args:
        params: SummaryInput containing optional today date and response_format

    Returns:
        Summary statistics (markdown or JSON)
    """
    manager = get_manager()
    try:
        stats = manager.status_stats()
        average = manager.average_priority()
        overdue = manager.overdue_count(params.today)
    except TaskProcError as e:
        return f"Error: {e}"

    if params.response_format == ResponseFormat.JSON:
        return json.dumps(
            {
                "total": stats.total,
                "by_status": stats.model_dump(),
                "average_priority": average,
                "overdue": overdue,
            },
            indent=2,
        )

    if not stats.total:
        return "# View Summary\n\nThe view is empty."

    lines = [
        "# View Summary",
        "",
        f"**Tasks in view**: {stats.total}",
        f"**Average priority**: {average:.2f}",
        f"**Overdue**: {overdue}",
        "",
        "## By Status",
    ]
    lines.extend(_format_status_stats(stats))
    return "\n".join(lines)


@mcp.tool(
    name="taskproc_tags",
    annotations=ToolAnnotations(
        title="List Tags",
        readOnlyHint=True,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def taskproc_tags(params: ListTagsInput) -> str:
    """
    List every tag in the loaded data with the number of tasks carrying it.

    Useful for picking a tag for taskproc_find_by_tag.

    Args:
        params: ListTagsInput containing response_format

    Returns:
        Tags sorted by task count, most used first
    """
    counts = get_manager().tag_counts()
    ordered = sorted(counts.items(), key=lambda x: (-x[1], x[0]))

    if params.response_format == ResponseFormat.JSON:
        return json.dumps({"tags": [{"name": tag, "count": count} for tag, count in ordered]}, indent=2)

    if not ordered:
        return "# Tags\n\nNo tags found."

    lines = ["# Tags", f"*{len(ordered)} tag(s)*", ""]
    for tag, count in ordered:
        lines.append(f"- **{tag}**: {count} task(s)")
    return "\n".join(lines)
