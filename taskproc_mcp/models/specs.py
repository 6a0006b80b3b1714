"""Compiled filter and sort models, plus action log entries."""

import re

from pydantic import BaseModel, ConfigDict, model_validator

from taskproc_mcp.enums import FilterField, FilterOp, SortDirection, SortField, ViewOpType

NUMERIC_FIELDS = frozenset({FilterField.ID, FilterField.PRIORITY})
ORDERED_FIELDS = NUMERIC_FIELDS | {FilterField.DUE_DATE}
EQUALITY_OPS = frozenset({FilterOp.EQUAL, FilterOp.NOT_EQUAL})
_INTEGER = re.compile(r"[+-]?[0-9]+")


class FilterSpec(BaseModel):
    """A single compiled predicate such as ``priority>=3`` or ``status=todo``.

    Only field/operator pairs the view pipeline can evaluate are accepted:
    id and priority compare as integers, due_date compares as an ISO-8601
    string with all six operators, every other field supports ``=`` and
    ``!=`` only.
    """

    model_config = ConfigDict(frozen=True)

    field: FilterField
    op: FilterOp
    value: str

    @model_validator(mode="after")
    def check_operator_for_field(self) -> "FilterSpec":
        if self.field not in ORDERED_FIELDS and self.op not in EQUALITY_OPS:
            raise ValueError(f"operator '{self.op.value}' is not supported for field '{self.field.value}'")
        if self.field in NUMERIC_FIELDS and not _INTEGER.fullmatch(self.value):
            raise ValueError(f"field '{self.field.value}' needs an integer value, got '{self.value}'")
        return self


class SortSpec(BaseModel):
    """Sort order for the current view, e.g. ``priority desc``."""

    model_config = ConfigDict(frozen=True)

    field: SortField
    direction: SortDirection = SortDirection.ASCENDING


class ViewAction(BaseModel):
    """One recorded view operation with its verbatim payload.

    Examples: ``ViewAction(type=ViewOpType.FILTER, payload="priority<=3")``,
    ``ViewAction(type=ViewOpType.FIND_BY_TAG, payload="urgent")``.
    """

    model_config = ConfigDict(frozen=True)

    type: ViewOpType
    payload: str = ""


class StatusStats(BaseModel):
    """Task counts per status bucket over the current view."""

    todo: int = 0
    in_progress: int = 0
    done: int = 0
    other: int = 0  # Non-standard status values

    @property
    def total(self) -> int:
        return self.todo + self.in_progress + self.done + self.other


class ReplayResult(BaseModel):
    """Outcome of replaying an action log."""

    applied: int = 0
    skipped: int = 0
