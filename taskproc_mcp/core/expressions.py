"""Compile filter and sort expressions into FilterSpec and SortSpec models."""

import logging

from pydantic import ValidationError

from taskproc_mcp.enums import FilterField, FilterOp, SortDirection, SortField
from taskproc_mcp.errors import ParseError
from taskproc_mcp.models.specs import FilterSpec, SortSpec

logger = logging.getLogger(__name__)

_BLANKS = " \t"

# Two-character operators must be tried before "=", ">" and "<" or they
# would be split in half ("priority>=3" -> ">" with value "=3").
_OPERATOR_SCAN_ORDER = (
    FilterOp.GREATER_THAN_OR_EQUAL,
    FilterOp.LESS_THAN_OR_EQUAL,
    FilterOp.NOT_EQUAL,
    FilterOp.EQUAL,
    FilterOp.GREATER_THAN,
    FilterOp.LESS_THAN,
)

_ASCENDING_TOKENS = {"asc", "ascending"}
_DESCENDING_TOKENS = {"desc", "descending"}


def _find_operator(expr: str) -> tuple[FilterOp, int] | None:
    """Return the first operator in scan order that occurs in ``expr`` and its position."""
    for op in _OPERATOR_SCAN_ORDER:
        pos = expr.find(op.value)
        if pos != -1:
            return op, pos
    return None


def compile_filter(expr: str) -> FilterSpec:
    """
    Compile a filter expression into a FilterSpec.

    Supported formats: ``field=value``, ``field!=value``, ``field>value``,
    ``field>=value``, ``field<value``, ``field<=value``.

    Args:
        expr: Expression such as "priority>=3" or "title=Fix login bug"

    Returns:
        The compiled FilterSpec

    Raises:
        ParseError: If the expression is empty, has no operator, names an
            unknown field, or pairs a field with an operator or value it
            cannot be compared with
    """
    if not expr or not expr.strip(_BLANKS):
        raise ParseError("Empty filter expression")

    found = _find_operator(expr)
    if found is None:
        raise ParseError(f"No valid operator found in: {expr}")
    op, pos = found

    field_str = expr[:pos].strip(_BLANKS)
    value = expr[pos + len(op.value) :].strip(_BLANKS)

    try:
        field = FilterField(field_str)
    except ValueError:
        raise ParseError(f"Unknown field: {field_str}") from None

    try:
        return FilterSpec(field=field, op=op, value=value)
    except ValidationError as e:
        reason = e.errors()[0]["msg"].removeprefix("Value error, ")
        raise ParseError(f"Invalid filter '{expr}': {reason}") from None


def compile_sort(expr: str) -> SortSpec:
    """
    Compile a sort expression into a SortSpec.

    Supported formats: ``field``, ``field asc``, ``field desc`` (also
    ``ascending`` / ``descending``). An unrecognised direction is logged
    and treated as ascending.

    Raises:
        ParseError: If the expression is empty or names an unknown field
    """
    parts = expr.split(None, 1) if expr else []
    if not parts:
        raise ParseError("Empty sort expression")

    field_str = parts[0]
    direction_str = parts[1].strip() if len(parts) > 1 else "asc"

    try:
        field = SortField(field_str)
    except ValueError:
        raise ParseError(f"Unknown sort field: {field_str}") from None

    direction = SortDirection.ASCENDING
    if direction_str in _DESCENDING_TOKENS:
        direction = SortDirection.DESCENDING
    elif direction_str not in _ASCENDING_TOKENS:
        logger.warning("Unknown sort direction '%s', using ascending", direction_str)

    return SortSpec(field=field, direction=direction)
