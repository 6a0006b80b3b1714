"""The current view: an ordered, non-owning projection of the task store."""

import logging
import operator
from collections.abc import Callable
from datetime import date

from taskproc_mcp.core.store import TaskStore
from taskproc_mcp.enums import FilterField, FilterOp, SortDirection, SortField
from taskproc_mcp.errors import StaleViewError
from taskproc_mcp.models.specs import FilterSpec, SortSpec, StatusStats
from taskproc_mcp.models.task import TaskModel

logger = logging.getLogger(__name__)

Predicate = Callable[[TaskModel], bool]

_COMPARE: dict[FilterOp, Callable[[object, object], bool]] = {
    FilterOp.EQUAL: operator.eq,
    FilterOp.NOT_EQUAL: operator.ne,
    FilterOp.GREATER_THAN: operator.gt,
    FilterOp.GREATER_THAN_OR_EQUAL: operator.ge,
    FilterOp.LESS_THAN: operator.lt,
    FilterOp.LESS_THAN_OR_EQUAL: operator.le,
}

# Fields compared as exact strings; a missing optional value compares as "".
_STRING_GETTERS: dict[FilterField, Callable[[TaskModel], str]] = {
    FilterField.TITLE: lambda t: t.title,
    FilterField.STATUS: lambda t: t.status,
    FilterField.CREATED_DATE: lambda t: t.created_date,
    FilterField.ASSIGNEE: lambda t: t.assignee or "",
    FilterField.DESCRIPTION: lambda t: t.description or "",
}

_INT_GETTERS: dict[FilterField, Callable[[TaskModel], int]] = {
    FilterField.ID: lambda t: t.id,
    FilterField.PRIORITY: lambda t: t.priority,
}

# Sort keys; None marks a missing value, which always sorts last.
_SORT_KEYS: dict[SortField, Callable[[TaskModel], object]] = {
    SortField.ID: lambda t: t.id,
    SortField.TITLE: lambda t: t.title,
    SortField.STATUS: lambda t: t.status,
    SortField.PRIORITY: lambda t: t.priority,
    SortField.CREATED_DATE: lambda t: t.created_date or None,
    SortField.DUE_DATE: lambda t: t.due_date,
}


def make_predicate(spec: FilterSpec) -> Predicate:
    """Build the per-task predicate for a FilterSpec."""
    compare = _COMPARE[spec.op]

    if spec.field in _INT_GETTERS:
        getter = _INT_GETTERS[spec.field]
        target = int(spec.value)
        return lambda t: compare(getter(t), target)

    if spec.field == FilterField.DUE_DATE:
        due_target = spec.value

        def due_predicate(t: TaskModel) -> bool:
            if t.due_date is None:
                return spec.op == FilterOp.NOT_EQUAL
            return compare(t.due_date, due_target)

        return due_predicate

    if spec.field in _STRING_GETTERS and spec.op in (FilterOp.EQUAL, FilterOp.NOT_EQUAL):
        str_getter = _STRING_GETTERS[spec.field]
        str_target = spec.value
        return lambda t: compare(str_getter(t), str_target)

    raise AssertionError(f"unsupported filter: {spec.field.value} {spec.op.value}")


class ViewPipeline:
    """
    Ordered projection of a TaskStore.

    The view holds task ids rather than task objects and remembers the store
    generation it was built from. Once the store is reloaded the view is
    stale: reading it raises StaleViewError until ``reset()`` rebuilds it.

    Filters narrow cumulatively (AND); there is no single-step undo, only a
    full ``reset()``.
    """

    def __init__(self, store: TaskStore):
        self._store = store
        self._ids: list[int] = []
        self._generation = -1
        self.reset()

    @property
    def store(self) -> TaskStore:
        return self._store

    @property
    def is_stale(self) -> bool:
        return self._generation != self._store.generation

    def _check_fresh(self) -> None:
        if self.is_stale:
            raise StaleViewError("The task store was reloaded; rebuild the view before reading it")

    def _resolve(self) -> list[TaskModel]:
        self._check_fresh()
        tasks = []
        for task_id in self._ids:
            task = self._store.get(task_id)
            if task is None:
                raise AssertionError(f"view references missing task {task_id}")
            tasks.append(task)
        return tasks

    def _narrow(self, keep: Predicate) -> None:
        before = len(self._ids)
        self._ids = [t.id for t in self._resolve() if keep(t)]
        logger.debug("View narrowed %d -> %d", before, len(self._ids))

    # ------------------------------------------------------------------
    # View operations
    # ------------------------------------------------------------------

    def reset(self) -> None:
        """Discard all filtering and sorting: every task, ordered by id."""
        self._ids = self._store.ids()
        self._generation = self._store.generation

    def apply_filter(self, spec: FilterSpec) -> None:
        self._narrow(make_predicate(spec))

    def apply_sort(self, spec: SortSpec) -> None:
        """Stable reorder of the current view; tasks missing the key go last."""
        key = _SORT_KEYS[spec.field]
        present: list[tuple[object, int]] = []
        missing: list[int] = []
        for task in self._resolve():
            value = key(task)
            if value is None:
                missing.append(task.id)
            else:
                present.append((value, task.id))
        present.sort(key=lambda pair: pair[0], reverse=spec.direction == SortDirection.DESCENDING)
        self._ids = [task_id for _, task_id in present] + missing

    def filter_by_tag(self, tag: str) -> None:
        tagged = set(self._store.ids_with_tag(tag))
        self._check_fresh()
        self._ids = [task_id for task_id in self._ids if task_id in tagged]

    def filter_no_tags(self) -> None:
        self._narrow(lambda t: not t.tags)

    def search_text(self, text: str) -> None:
        """Keep tasks whose title or description contains ``text`` (case-insensitive)."""
        needle = text.casefold()
        self._narrow(lambda t: needle in t.title.casefold() or needle in (t.description or "").casefold())

    # ------------------------------------------------------------------
    # Access
    # ------------------------------------------------------------------

    def tasks(self) -> list[TaskModel]:
        return self._resolve()

    def ids(self) -> list[int]:
        self._check_fresh()
        return list(self._ids)

    def snapshot(self) -> tuple[int, tuple[int, ...]]:
        return self._generation, tuple(self._ids)

    def restore(self, snapshot: tuple[int, tuple[int, ...]]) -> None:
        self._generation, ids = snapshot
        self._ids = list(ids)

    def __len__(self) -> int:
        self._check_fresh()
        return len(self._ids)

    # ------------------------------------------------------------------
    # Aggregates over the current view
    # ------------------------------------------------------------------

    def status_stats(self) -> StatusStats:
        stats = StatusStats()
        for task in self._resolve():
            if task.status == "todo":
                stats.todo += 1
            elif task.status == "in-progress":
                stats.in_progress += 1
            elif task.status == "done":
                stats.done += 1
            else:
                stats.other += 1
        return stats

    def average_priority(self) -> float:
        tasks = self._resolve()
        if not tasks:
            return 0.0
        return sum(t.priority for t in tasks) / len(tasks)

    def overdue_count(self, today: str | None = None) -> int:
        """Count open tasks whose due date is before ``today`` (ISO-8601 strings compare lexically)."""
        today = today or date.today().isoformat()
        return sum(1 for t in self._resolve() if t.due_date is not None and t.due_date < today and t.status != "done")
