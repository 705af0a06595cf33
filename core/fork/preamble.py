"""Human-readable summary placed before the inherited context."""

from config import ForkConfig

from ..models import ProcessingStats

PREAMBLE_HEADER = (
    "You are continuing work forked from a parent conversation. "
    "Its history is provided below inside <inherited_context> tags."
)
PREAMBLE_FOOTER = (
    "Treat the inherited context as background. Truncated tool output is marked "
    "with '[truncated N chars]'; re-run a tool if you need its full output."
)


def build_fork_preamble(stats: ProcessingStats, config: ForkConfig | None = None) -> str:
    """
    Summarise how the parent history was reduced.

    Args:
        stats: Statistics from processing and rendering the fork context
        config: Tier caps quoted in the summary (defaults when omitted)

    Returns:
        Multi-line preamble text
    """
    config = config or ForkConfig()
    tiers = stats.tier_distribution

    if stats.compaction_detected:
        compaction = (
            "Compaction summary included: history before the latest compaction "
            "is represented by its summary."
        )
    else:
        compaction = "No compaction detected: full conversation history considered."

    tools = (
        f"Tool results: {tiers.tier1} full, "
        f"{tiers.tier2} truncated to {config.tier2_limit} chars, "
        f"{tiers.tier3} truncated to {config.tier3_limit} chars."
    )

    if stats.removed_messages:
        eviction = (
            f"{stats.removed_messages} oldest messages removed to fit the "
            "context budget."
        )
    else:
        eviction = "All messages preserved."

    return "\n".join(
        [
            PREAMBLE_HEADER,
            "",
            "Context processing:",
            f"- {compaction}",
            f"- {tools}",
            f"- {eviction}",
            "",
            PREAMBLE_FOOTER,
        ]
    )
