"""Canonical task store with status and tag indices."""

import logging
from collections.abc import Iterable

from taskproc_mcp.models.task import TaskModel

logger = logging.getLogger(__name__)


class TaskStore:
    """
    Owns every loaded task, keyed by id.

    Iteration is always by ascending id. The status and tag indices are
    derived from the tasks and rebuilt in full on every load. ``generation``
    increases on each load so views built on earlier contents can tell they
    are stale.
    """

    def __init__(self) -> None:
        self._tasks: dict[int, TaskModel] = {}
        self._status_index: dict[str, list[int]] = {}
        self._tag_index: dict[str, list[int]] = {}
        self._generation = 0

    @property
    def generation(self) -> int:
        return self._generation

    def load(self, tasks: Iterable[TaskModel]) -> None:
        """Replace the whole store; a later duplicate id overwrites an earlier one."""
        staged: dict[int, TaskModel] = {}
        for task in tasks:
            if task.id in staged:
                logger.debug("Duplicate task id %s, keeping the later record", task.id)
            staged[task.id] = task

        ordered = {task_id: staged[task_id] for task_id in sorted(staged)}
        status_index, tag_index = self._build_indices(ordered)

        # Swap everything in one step so readers never see a partial mix.
        self._tasks, self._status_index, self._tag_index = ordered, status_index, tag_index
        self._generation += 1
        logger.info("Store loaded %d task(s) (generation %d)", len(ordered), self._generation)

    def clear(self) -> None:
        self.load([])

    def rebuild_indices(self) -> None:
        """Recompute the status and tag indices from the current tasks."""
        self._status_index, self._tag_index = self._build_indices(self._tasks)

    @staticmethod
    def _build_indices(tasks: dict[int, TaskModel]) -> tuple[dict[str, list[int]], dict[str, list[int]]]:
        status_index: dict[str, list[int]] = {}
        tag_index: dict[str, list[int]] = {}
        for task_id, task in tasks.items():
            status_index.setdefault(task.status, []).append(task_id)
            for tag in task.tags:
                ids = tag_index.setdefault(tag, [])
                # A task may repeat a tag; index it once
                if not ids or ids[-1] != task_id:
                    ids.append(task_id)
        return status_index, tag_index

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def get(self, task_id: int) -> TaskModel | None:
        return self._tasks.get(task_id)

    def all(self) -> list[TaskModel]:
        return list(self._tasks.values())

    def ids(self) -> list[int]:
        return list(self._tasks)

    def ids_with_status(self, status: str) -> list[int]:
        return list(self._status_index.get(status, ()))

    def ids_with_tag(self, tag: str) -> list[int]:
        return list(self._tag_index.get(tag, ()))

    def status_counts(self) -> dict[str, int]:
        return {status: len(ids) for status, ids in self._status_index.items()}

    def tag_counts(self) -> dict[str, int]:
        return {tag: len(ids) for tag, ids in self._tag_index.items()}

    def __len__(self) -> int:
        return len(self._tasks)
