"""Rebuild a view by re-applying a recorded action log."""

import logging
from collections.abc import Iterable

from taskproc_mcp.core.expressions import compile_filter, compile_sort
from taskproc_mcp.core.view import ViewPipeline
from taskproc_mcp.enums import ViewOpType
from taskproc_mcp.errors import ParseError
from taskproc_mcp.models.specs import ReplayResult, ViewAction

logger = logging.getLogger(__name__)


def replay(history: Iterable[ViewAction], pipeline: ViewPipeline) -> ReplayResult:
    """
    Reset ``pipeline`` and apply every action of ``history`` in order.

    Filter and sort payloads are compiled again; an entry that no longer
    parses is logged and skipped, and replay carries on with the rest.
    Load entries are no-ops: the caller loads the store before replaying.

    Returns:
        Counts of applied and skipped actions
    """
    result = ReplayResult()
    pipeline.reset()

    for action in history:
        try:
            if action.type == ViewOpType.FILTER:
                pipeline.apply_filter(compile_filter(action.payload))
            elif action.type == ViewOpType.SORT:
                pipeline.apply_sort(compile_sort(action.payload))
            elif action.type == ViewOpType.RESET_FILTERS:
                pipeline.reset()
            elif action.type == ViewOpType.FIND_BY_TAG:
                pipeline.filter_by_tag(action.payload)
            elif action.type == ViewOpType.FIND_UNTAGGED:
                pipeline.filter_no_tags()
            elif action.type == ViewOpType.SEARCH:
                pipeline.search_text(action.payload)
            elif action.type == ViewOpType.LOAD:
                continue
        except ParseError as e:
            logger.warning("Replay skipped %s '%s': %s", action.type.value, action.payload, e)
            result.skipped += 1
            continue

        logger.debug("Replayed %s '%s'", action.type.value, action.payload)
        result.applied += 1

    return result
