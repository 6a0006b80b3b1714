"""JSON task reader."""

import json
import logging
from pathlib import Path

from taskproc_mcp.errors import SourceError
from taskproc_mcp.models.task import TaskModel
from taskproc_mcp.readers.base import _has_suffix, _parse_record

logger = logging.getLogger(__name__)


class JSONReader:
    """Reads tasks from a JSON array of task objects."""

    def can_handle(self, path: str | Path) -> bool:
        return _has_suffix(path, ".json")

    def read(self, path: str | Path) -> list[TaskModel]:
        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, UnicodeDecodeError) as e:
            raise SourceError(f"Cannot read JSON file {path}: {e}") from e
        except json.JSONDecodeError as e:
            raise SourceError(f"Failed to parse JSON file {path} - {e}") from e

        if not isinstance(data, list):
            raise SourceError(f"JSON file {path} must contain an array of tasks")

        tasks: list[TaskModel] = []
        for index, item in enumerate(data):
            where = f"{path}[{index}]"
            if not isinstance(item, dict):
                logger.warning("Skipping task at %s: not an object", where)
                continue
            record = dict(item)
            if not isinstance(record.get("tags"), list):
                record["tags"] = []
            task = _parse_record(record, where)
            if task is not None:
                tasks.append(task)

        logger.info("Read %d task(s) from %s", len(tasks), path)
        return tasks
