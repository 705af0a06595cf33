"""
Graduated tool result truncation.

Older tool results are cut harder than recent ones. The newest results keep
their full text, the next band is capped at a medium size and everything
older is capped at a small size.
"""

from dataclasses import dataclass
from typing import Sequence

from config import ForkConfig

from ..models import Message, Part, ProcessingStats, ToolResultPart
from .tiers import (
    assign_tiers,
    is_compacted_result,
    is_never_truncated,
    resolve_tool_name,
    should_use_head_tail,
)


def elision_marker(count: int) -> str:
    return f"...[truncated {count} chars]..."


def truncate_with_strategy(
    text: str, limit: int, use_head_tail: bool, config: ForkConfig
) -> str:
    """
    Cut text down to roughly ``limit`` characters.

    Head+tail keeps ``head_ratio`` of the limit from the start and
    ``tail_ratio`` from the end around an elision marker; head-only keeps the
    first ``limit`` characters followed by the marker. Text within the limit
    is returned unchanged.
    """
    if len(text) <= limit:
        return text

    if use_head_tail:
        head_size = int(limit * config.head_ratio)
        tail_size = int(limit * config.tail_ratio)
        elided = len(text) - head_size - tail_size
        head = text[:head_size]
        tail = text[len(text) - tail_size:]
        return f"{head}\n{elision_marker(elided)}\n{tail}"

    return f"{text[:limit]}\n{elision_marker(len(text) - limit)}"


@dataclass(frozen=True)
class TruncationOutcome:
    """What happened to a single tool result."""

    text: str
    tier: int
    truncated: bool = False
    head_tail: bool = False


def truncate_tool_result(
    parts: Sequence[Part], index: int, tier: int, config: ForkConfig
) -> TruncationOutcome:
    """Apply the tier cap to the tool result at ``parts[index]``."""
    part: ToolResultPart = parts[index]
    text = part.text

    if not text or is_compacted_result(text, config):
        return TruncationOutcome(text=text, tier=tier)

    limit = config.tier_limit(tier)
    if limit is None:
        return TruncationOutcome(text=text, tier=tier)

    tool_name = resolve_tool_name(parts, index)
    if is_never_truncated(tool_name, config):
        return TruncationOutcome(text=text, tier=tier)

    use_head_tail = should_use_head_tail(tool_name, text, config)
    new_text = truncate_with_strategy(text, limit, use_head_tail, config)
    if new_text == text:
        return TruncationOutcome(text=text, tier=tier)
    return TruncationOutcome(
        text=new_text, tier=tier, truncated=True, head_tail=use_head_tail
    )


def truncate_tool_results(
    messages: Sequence[Message], stats: ProcessingStats, config: ForkConfig
) -> tuple[list[Message], ProcessingStats]:
    """
    Truncate every tool result according to its recency tier.

    Args:
        messages: Messages after compaction slicing
        stats: Statistics so far
        config: Tier sizes, caps and strategy keywords

    Returns:
        New message list (inputs are not modified) and updated statistics
    """
    tiers = assign_tiers(messages, config)
    position = 0
    truncated = stats.truncated_results
    head_tail = stats.head_tail_applied
    distribution = stats.tier_distribution

    processed: list[Message] = []
    for msg in messages:
        if not msg.tool_result_count():
            processed.append(msg)
            continue

        new_parts = list(msg.parts)
        for idx, part in enumerate(msg.parts):
            if not isinstance(part, ToolResultPart):
                continue

            outcome = truncate_tool_result(msg.parts, idx, tiers[position], config)
            position += 1
            distribution = distribution.incremented(outcome.tier)

            if outcome.truncated:
                truncated += 1
                if outcome.head_tail:
                    head_tail += 1
                new_parts[idx] = part.model_copy(update={"text": outcome.text})

        processed.append(msg.model_copy(update={"parts": new_parts}))

    return processed, stats.model_copy(
        update={
            "truncated_results": truncated,
            "head_tail_applied": head_tail,
            "tier_distribution": distribution,
        }
    )
