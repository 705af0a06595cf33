"""
Compaction boundary detection.

When the host compacts a conversation it inserts a compaction marker into a
user message and then writes an assistant summary message. Everything before
that summary is superseded by it, so a fork only needs history from the
summary onward.
"""

import logging
from typing import Sequence

from ..models import NO_BOUNDARY, Message

logger = logging.getLogger(__name__)


def find_compaction_boundary(messages: Sequence[Message]) -> int:
    """
    Find where fork history should start.

    Only the latest compaction marker is considered, since its summary already
    covers any earlier compaction. A marker without a later summary message is
    ignored so an incomplete compaction never drops real history.

    Args:
        messages: Conversation history in chronological order

    Returns:
        Index of the summary message following the latest compaction marker,
        or NO_BOUNDARY (-1)
    """
    marker_index = NO_BOUNDARY
    for i in range(len(messages) - 1, -1, -1):
        if messages[i].has_compaction_marker():
            marker_index = i
            break

    if marker_index == NO_BOUNDARY:
        return NO_BOUNDARY

    for i in range(marker_index + 1, len(messages)):
        if messages[i].is_summary:
            logger.debug(
                "Compaction marker at %d, summary at %d", marker_index, i
            )
            return i

    logger.debug("Compaction marker at %d has no summary message", marker_index)
    return NO_BOUNDARY
