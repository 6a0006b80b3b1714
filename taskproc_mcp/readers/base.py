"""Reader contract and helpers shared by the file readers."""

import logging
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from pydantic import ValidationError

from taskproc_mcp.models.task import TaskModel

logger = logging.getLogger(__name__)


@runtime_checkable
class TaskReader(Protocol):
    """A file format reader selected by ``can_handle``."""

    def can_handle(self, path: str | Path) -> bool: ...

    def read(self, path: str | Path) -> list[TaskModel]: ...


def _has_suffix(path: str | Path, suffix: str) -> bool:
    return Path(path).suffix.lower() == suffix


def _parse_record(record: dict[str, Any], where: str) -> TaskModel | None:
    """
    Validate one raw record into a TaskModel.

    Applies the loader rules: a blank or missing priority becomes 1, a
    priority below 1 is raised to 1. Invalid records are logged and
    skipped (None is returned).
    """
    data = dict(record)
    data.setdefault("status", "")

    priority = data.get("priority")
    if priority is None or (isinstance(priority, str) and not priority.strip()):
        data["priority"] = 1

    try:
        task = TaskModel.model_validate(data)
    except ValidationError as e:
        fields = ", ".join(".".join(str(p) for p in err["loc"]) or "record" for err in e.errors())
        logger.warning("Skipping task at %s: invalid %s", where, fields)
        return None

    if task.priority < 1:
        task = task.model_copy(update={"priority": 1})
    return task
