"""
Fork context pipeline.

Turns a parent conversation into a bounded context string for a child
session in three deterministic stages:

1. Compaction boundary detection - drop history superseded by a host summary
2. Graduated truncation - shorten older tool results by recency tier
3. Budget enforcement - render, then evict oldest messages if still too large

No stage performs I/O or calls a model, and none modifies its input.
"""

import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Sequence

from config import ForkConfig, get_config

from ..models import NO_BOUNDARY, Message, ProcessingStats, coerce_messages
from .boundary import find_compaction_boundary
from .budget import enforce_budget
from .preamble import build_fork_preamble
from .truncation import truncate_tool_results

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ForkContext:
    """Everything the task launcher injects into a forked session."""

    preamble: str
    context: str
    stats: ProcessingStats

    @property
    def text(self) -> str:
        if not self.context:
            return self.preamble
        return f"{self.preamble}\n\n{self.context}"


class ForkPipeline:
    """Fork context pipeline bound to one configuration."""

    def __init__(self, config: ForkConfig | None = None) -> None:
        self.config = config or ForkConfig()

    def process(
        self, messages: Sequence[Message | dict[str, Any]]
    ) -> tuple[list[Message], ProcessingStats]:
        """
        Run boundary detection and graduated truncation.

        Args:
            messages: Parent history, as Message models or raw host dicts

        Returns:
            Processed messages and statistics
        """
        msgs = coerce_messages(messages)
        stats = ProcessingStats(original_count=len(msgs), final_count=len(msgs))

        slice_index = find_compaction_boundary(msgs)
        if slice_index != NO_BOUNDARY:
            stats = stats.model_copy(
                update={"compaction_detected": True, "compaction_slice_index": slice_index}
            )
            msgs = msgs[slice_index:]

        return truncate_tool_results(msgs, stats, self.config)

    def render(
        self, messages: Sequence[Message], stats: ProcessingStats
    ) -> tuple[str, ProcessingStats]:
        """Render processed messages, enforcing the character budget."""
        return enforce_budget(coerce_messages(messages), stats, self.config)

    def build(self, messages: Sequence[Message | dict[str, Any]]) -> ForkContext:
        """Process, render and summarise parent history for a fork."""
        processed, stats = self.process(messages)
        context, stats = self.render(processed, stats)
        logger.info(
            "Fork context: %d -> %d messages, %d chars "
            "(compaction=%s, truncated=%d, evicted=%d)",
            stats.original_count,
            stats.final_count,
            stats.total_chars,
            stats.compaction_detected,
            stats.truncated_results,
            stats.removed_messages,
        )
        return ForkContext(
            preamble=build_fork_preamble(stats, self.config),
            context=context,
            stats=stats,
        )


@lru_cache(maxsize=1)
def get_default_pipeline() -> ForkPipeline:
    """
    Pipeline built from the loaded configuration.

    Cached; clear with get_default_pipeline.cache_clear() after reloading config.
    """
    return ForkPipeline(get_config().fork)


def process_for_fork(
    messages: Sequence[Message | dict[str, Any]],
) -> tuple[list[Message], ProcessingStats]:
    """Run stages 1 and 2 with the default pipeline."""
    return get_default_pipeline().process(messages)


def render_context(
    messages: Sequence[Message], stats: ProcessingStats
) -> tuple[str, ProcessingStats]:
    """Run stage 3 and formatting with the default pipeline."""
    return get_default_pipeline().render(messages, stats)


def build_fork_context(messages: Sequence[Message | dict[str, Any]]) -> ForkContext:
    """Build the full fork context with the default pipeline."""
    return get_default_pipeline().build(messages)
