"""
Character budget enforcement.

The last line of defence after graduated truncation: if the rendered context
is still too large, whole messages are dropped from the oldest end.
"""

import logging
from typing import Sequence

from config import ForkConfig

from ..models import Message, ProcessingStats
from .formatter import format_messages, wrap_context, wrapped_length

logger = logging.getLogger(__name__)


def enforce_budget(
    messages: Sequence[Message], stats: ProcessingStats, config: ForkConfig
) -> tuple[str, ProcessingStats]:
    """
    Render messages, evicting the oldest until the context fits.

    Nothing is evicted when the full rendering is at or below
    ``no_removal_threshold``. Otherwise messages are removed one at a time
    while the size exceeds ``char_budget`` and more than one message remains.
    A single remaining message is returned even if it is over budget; callers
    see that as ``total_chars > char_budget``.

    Args:
        messages: Processed messages in chronological order
        stats: Statistics so far
        config: Budget thresholds

    Returns:
        Rendered context and updated statistics
    """
    if not messages:
        return "", stats.model_copy(update={"final_count": 0, "total_chars": 0})

    # Rendered once: parameter tiers come from the full sequence, so
    # evicting older messages never changes how the survivors render.
    blocks = format_messages(messages, config)
    body_length = sum(len(block) for block in blocks)
    total = wrapped_length(body_length)

    start = 0
    if total > config.no_removal_threshold:
        while total > config.char_budget and len(blocks) - start > 1:
            body_length -= len(blocks[start])
            start += 1
            total = wrapped_length(body_length)

    if start:
        logger.debug(
            "Evicted %d oldest messages to fit %d char budget (now %d chars)",
            start,
            config.char_budget,
            total,
        )
    if total > config.char_budget:
        logger.warning(
            "Fork context is %d chars, over the %d char budget", total, config.char_budget
        )

    text = wrap_context("".join(blocks[start:]))
    return text, stats.model_copy(
        update={
            "removed_messages": stats.removed_messages + start,
            "final_count": len(blocks) - start,
            "total_chars": len(text),
        }
    )
