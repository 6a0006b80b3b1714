"""CSV task reader."""

import csv
import logging
from pathlib import Path

from taskproc_mcp.errors import SourceError
from taskproc_mcp.models.task import TaskModel
from taskproc_mcp.readers.base import _has_suffix, _parse_record

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ("id", "title", "status")
KNOWN_COLUMNS = REQUIRED_COLUMNS + ("priority", "created_date", "description", "assignee", "due_date", "tags")


def _split_tags(field: str) -> list[str]:
    """Split a "tag1,tag2" cell into tags; an empty cell means no tags."""
    if not field:
        return []
    return [tag.strip(" \t") for tag in field.split(",")]


class CSVReader:
    """
    Reads tasks from a CSV file with a header row.

    Expected columns: id, title, status, priority, created_date,
    description, assignee, due_date, tags (in any order; extra columns are
    ignored). ``tags`` is a single comma-separated cell.
    """

    def can_handle(self, path: str | Path) -> bool:
        return _has_suffix(path, ".csv")

    def read(self, path: str | Path) -> list[TaskModel]:
        try:
            with open(path, newline="", encoding="utf-8") as f:
                rows = list(csv.reader(f, skipinitialspace=True))
        except (OSError, UnicodeDecodeError, csv.Error) as e:
            raise SourceError(f"Cannot read CSV file {path}: {e}") from e

        if not rows:
            raise SourceError(f"CSV file {path} has no header row")

        header = [name.strip(" \t") for name in rows[0]]
        missing = [col for col in REQUIRED_COLUMNS if col not in header]
        if missing:
            raise SourceError(f"CSV file {path} is missing column(s): {', '.join(missing)}")
        positions = {col: header.index(col) for col in KNOWN_COLUMNS if col in header}

        tasks: list[TaskModel] = []
        for line_no, row in enumerate(rows[1:], start=2):
            if not any(cell.strip() for cell in row):
                continue
            cells = [cell.strip(" \t") for cell in row]
            record: dict[str, object] = {
                col: cells[pos] if pos < len(cells) else "" for col, pos in positions.items()
            }
            record["tags"] = _split_tags(str(record.get("tags", "")))
            task = _parse_record(record, f"{path}:{line_no}")
            if task is not None:
                tasks.append(task)

        logger.info("Read %d task(s) from %s", len(tasks), path)
        return tasks
