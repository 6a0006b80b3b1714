"""Formatting utilities for task output."""

from taskproc_mcp.models.specs import StatusStats, ViewAction
from taskproc_mcp.models.task import TaskModel


def _format_task_concise(task: TaskModel) -> str:
    """
    Format a single task in concise format.

    Output: "#5: Fix login bug (P4, todo, due:2024-12-31, @alice)"
    """
    title = task.title[:50]

    meta = [f"P{task.priority}", task.status]
    if task.due_date:
        meta.append(f"due:{task.due_date[:10]}")
    if task.assignee:
        meta.append(f"@{task.assignee}")

    return f"#{task.id}: {title} ({', '.join(meta)})"


def _format_tasks_concise(tasks: list[TaskModel], title: str | None = None) -> str:
    """
    Format a list of tasks in concise format.

    Output:
    2 task(s) | status=todo
    #1: Task one (P5, todo)
    #2: Task two (P3, todo)
    """
    if not tasks:
        return "0 tasks"

    header = f"{len(tasks)} task(s)"
    if title:
        header = f"{len(tasks)} task(s) | {title}"

    lines = [header]
    for task in tasks:
        lines.append(_format_task_concise(task))

    return "\n".join(lines)


def _format_task_markdown(task: TaskModel) -> str:
    """Format a single task as markdown."""
    status_icon = {"todo": "○", "in-progress": "◐", "done": "●"}
    icon = status_icon.get(task.status, "?")

    lines = [f"### {icon} [{task.id}] {task.title}"]

    details = [f"**Status**: {task.status}", f"**Priority**: {task.priority}"]
    if task.assignee:
        details.append(f"**Assignee**: {task.assignee}")
    if task.due_date:
        details.append(f"**Due**: {task.due_date}")
    if task.created_date:
        details.append(f"**Created**: {task.created_date}")
    if task.tags:
        details.append(f"**Tags**: {', '.join(task.tags)}")
    lines.append(" | ".join(details))

    if task.description:
        lines.append(f"> {task.description}")

    return "\n".join(lines)


def _format_tasks_markdown(tasks: list[TaskModel], title: str = "Tasks", total: int | None = None) -> str:
    """Format a list of tasks as markdown."""
    if not tasks:
        return f"# {title}\n\nNo tasks found."

    count = f"*{len(tasks)} task(s)*"
    if total is not None and total > len(tasks):
        count = f"*showing {len(tasks)} of {total} task(s)*"

    lines = [f"# {title}", count, ""]
    for task in tasks:
        lines.append(_format_task_markdown(task))
        lines.append("")

    return "\n".join(lines)


def _format_history_markdown(history: tuple[ViewAction, ...] | list[ViewAction]) -> str:
    """Format the recorded view history as a numbered list."""
    if not history:
        return "# View History\n\nNo recorded actions."

    lines = ["# View History", ""]
    for n, action in enumerate(history, start=1):
        if action.payload:
            lines.append(f"{n}. `{action.type.value}` {action.payload}")
        else:
            lines.append(f"{n}. `{action.type.value}`")
    return "\n".join(lines)


def _format_status_stats(stats: StatusStats) -> list[str]:
    return [
        f"- todo: {stats.todo}",
        f"- in-progress: {stats.in_progress}",
        f"- done: {stats.done}",
        f"- other: {stats.other}",
    ]
