"""Tier assignment and truncation strategy selection."""

from typing import Sequence

from config import ForkConfig

from ..models import Message, Part, ToolPart, ToolResultPart


def count_tool_results(messages: Sequence[Message]) -> int:
    """Count tool result parts across all messages."""
    return sum(msg.tool_result_count() for msg in messages)


def get_tool_result_tier(index_from_end: int, config: ForkConfig) -> int:
    """
    Tier for a tool result given its distance from the newest result.

    Args:
        index_from_end: 0 for the newest tool result
        config: Tier sizes

    Returns:
        1 (unlimited), 2 (medium cap) or 3 (small cap)
    """
    if index_from_end < config.tier1_count:
        return 1
    if index_from_end < config.tier1_count + config.tier2_count:
        return 2
    return 3


def assign_tiers(messages: Sequence[Message], config: ForkConfig) -> list[int]:
    """Tiers of every tool result part, in document order."""
    total = count_tool_results(messages)
    return [get_tool_result_tier(total - 1 - i, config) for i in range(total)]


def resolve_tool_name(parts: Sequence[Part], index: int) -> str | None:
    """
    Name of the tool that produced the tool result at ``parts[index]``.

    Uses the part's own name when present, otherwise the nearest preceding
    tool invocation in the same message.
    """
    if 0 <= index < len(parts):
        part = parts[index]
        if isinstance(part, ToolResultPart) and part.tool:
            return part.tool

    for i in range(min(index, len(parts)) - 1, -1, -1):
        candidate = parts[i]
        if isinstance(candidate, ToolPart):
            return candidate.tool
    return None


def is_compacted_result(text: str, config: ForkConfig) -> bool:
    return config.compacted_sentinel in text


def is_never_truncated(tool_name: str | None, config: ForkConfig) -> bool:
    if not tool_name:
        return False
    return any(name in tool_name for name in config.no_truncation_tools)


def should_use_head_tail(tool_name: str | None, text: str, config: ForkConfig) -> bool:
    """
    Decide between head+tail and head-only truncation.

    Shell-like tools echo the command first and report exit status last, and
    error output tends to end with the useful part, so both keep a tail.
    """
    if tool_name and any(keyword in tool_name for keyword in config.head_tail_keywords):
        return True
    return any(pattern in text for pattern in config.error_patterns)
