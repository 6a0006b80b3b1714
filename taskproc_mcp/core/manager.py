"""Coordinator: load a source, keep the view and its durable history in step."""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from taskproc_mcp.core.expressions import compile_filter, compile_sort
from taskproc_mcp.core.replay import replay
from taskproc_mcp.core.store import TaskStore
from taskproc_mcp.core.view import ViewPipeline
from taskproc_mcp.enums import ViewOpType
from taskproc_mcp.errors import SourceError, StorageError, TaskProcError
from taskproc_mcp.models.specs import ReplayResult, StatusStats, ViewAction
from taskproc_mcp.models.task import TaskModel
from taskproc_mcp.readers import ReaderRegistry, default_registry
from taskproc_mcp.storage import ActionLog

logger = logging.getLogger(__name__)


class DataManager:
    """
    Owns the task store, the current view and the action log.

    Every successful view operation is recorded and persisted, so a new
    DataManager built on the same storage file reloads the last source and
    replays the history to reach the same view.
    """

    def __init__(self, storage_path: str | Path, readers: ReaderRegistry | None = None):
        self._readers = readers or default_registry()
        self._log = ActionLog(storage_path)
        self._store = TaskStore()
        self._view = ViewPipeline(self._store)
        self._restore_from_storage()

    def _restore_from_storage(self) -> None:
        try:
            if not self._log.load():
                return
            source = self._log.source_path
            if not source:
                return
            self._store.load(self._read_source(source))
            result = replay(self._log.history, self._view)
            logger.info(
                "Restored view for %s: %d action(s) replayed, %d skipped",
                source,
                result.applied,
                result.skipped,
            )
        except TaskProcError as e:
            logger.warning("Unable to restore view from storage: %s", e)
            # Keep the record on disk for reload_source, but not in memory
            self._log.restore((None, ()))
            self._store.clear()
            self._view.reset()

    def _read_source(self, path: str) -> list[TaskModel]:
        reader = self._readers.select(path)
        if reader is None:
            raise SourceError(f"No reader found for file: {path}")
        tasks = reader.read(path)
        if not tasks:
            raise SourceError(f"No tasks found in file: {path}")
        return tasks

    # ------------------------------------------------------------------
    # Sources
    # ------------------------------------------------------------------

    def load_source(self, path: str | Path) -> int:
        """
        Load tasks from ``path``, replacing the store and starting a fresh history.

        Returns:
            Number of tasks loaded

        Raises:
            SourceError: If the file has no reader, cannot be read, or holds no tasks
            StorageError: If the new history cannot be persisted; nothing changes
        """
        path = str(path)
        tasks = self._read_source(path)

        previous = self._log.snapshot()
        self._log.set_source(path)
        self._log.record(ViewAction(type=ViewOpType.LOAD, payload=path))
        try:
            self._log.persist()
        except StorageError:
            self._log.restore(previous)
            raise

        self._store.load(tasks)
        self._view.reset()
        return len(self._store)

    def reload_source(self) -> ReplayResult:
        """
        Re-read the current source and replay the history over the fresh data.

        Falls back to the durable record when no source is loaded in memory.

        Raises:
            SourceError: If there is no known source or it cannot be read
            StorageError: If the durable record cannot be read
        """
        source = self._log.source_path
        if not source and self._log.load():
            source = self._log.source_path
        if not source:
            raise SourceError("No source file to reload")

        self._store.load(self._read_source(source))
        return replay(self._log.history, self._view)

    def clear(self) -> None:
        """Drop the loaded tasks and the saved view."""
        self._log.clear()
        self._store.clear()
        self._view.reset()

    # ------------------------------------------------------------------
    # View operations
    # ------------------------------------------------------------------

    def _run_view_op(self, action: ViewAction, apply: Callable[[], None]) -> None:
        if not self._log.source_path:
            raise SourceError("No source file loaded; load a task file first")
        view_state = self._view.snapshot()
        log_state = self._log.snapshot()
        apply()
        self._log.record(action)
        try:
            self._log.persist()
        except StorageError:
            self._view.restore(view_state)
            self._log.restore(log_state)
            raise

    def apply_filter(self, expr: str) -> None:
        spec = compile_filter(expr)
        self._run_view_op(ViewAction(type=ViewOpType.FILTER, payload=expr), lambda: self._view.apply_filter(spec))

    def apply_sort(self, expr: str) -> None:
        spec = compile_sort(expr)
        self._run_view_op(ViewAction(type=ViewOpType.SORT, payload=expr), lambda: self._view.apply_sort(spec))

    def find_by_tag(self, tag: str) -> None:
        self._run_view_op(ViewAction(type=ViewOpType.FIND_BY_TAG, payload=tag), lambda: self._view.filter_by_tag(tag))

    def find_untagged(self) -> None:
        self._run_view_op(ViewAction(type=ViewOpType.FIND_UNTAGGED), self._view.filter_no_tags)

    def search(self, text: str) -> None:
        self._run_view_op(ViewAction(type=ViewOpType.SEARCH, payload=text), lambda: self._view.search_text(text))

    def reset_view(self) -> None:
        self._run_view_op(ViewAction(type=ViewOpType.RESET_FILTERS), self._view.reset)

    # ------------------------------------------------------------------
    # Access
    # ------------------------------------------------------------------

    def current_view(self) -> list[TaskModel]:
        return self._view.tasks()

    def get_task(self, task_id: int) -> TaskModel | None:
        return self._store.get(task_id)

    def task_count(self) -> int:
        return len(self._store)

    def view_count(self) -> int:
        return len(self._view)

    def current_source_path(self) -> str:
        return self._log.source_path or ""

    def history(self) -> tuple[ViewAction, ...]:
        return self._log.history

    def status_stats(self) -> StatusStats:
        return self._view.status_stats()

    def average_priority(self) -> float:
        return self._view.average_priority()

    def overdue_count(self, today: str | None = None) -> int:
        return self._view.overdue_count(today)

    def tag_counts(self) -> dict[str, int]:
        return self._store.tag_counts()
