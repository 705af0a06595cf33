"""
Fork context formatting.

Renders messages as labelled plain-text blocks inside a pair of
``<inherited_context>`` tags so the child agent can find the injected history.
"""

import json
import logging
from typing import Any, Sequence

from config import ForkConfig

from ..models import Message, Part, TextPart, ToolPart, ToolResultPart
from .tiers import assign_tiers

logger = logging.getLogger(__name__)

CONTEXT_OPEN_TAG = "<inherited_context>"
CONTEXT_CLOSE_TAG = "</inherited_context>"

# Per-message map of tool invocation part index -> tier (None when unpaired)
ParamTiers = dict[int, int | None]


def role_label(role: str) -> str:
    if role == "user":
        return "User"
    if role == "assistant":
        return "Agent"
    return role[:1].upper() + role[1:] if role else "Unknown"


def pair_tool_invocations(
    messages: Sequence[Message], config: ForkConfig
) -> list[ParamTiers]:
    """
    Work out which tier each tool invocation's parameters belong to.

    An invocation takes the tier of its result. Results are matched by the
    host call ID when both parts carry one, otherwise by strict adjacency (the
    next part in the same message is an unclaimed tool result). Invocations
    matching neither are ambiguous and map to None.

    Returns:
        One dict per message mapping invocation part index to tier or None
    """
    tiers = assign_tiers(messages, config)

    result_tiers: dict[tuple[int, int], int] = {}
    by_call_id: dict[str, tuple[int, int]] = {}
    position = 0
    for m_idx, msg in enumerate(messages):
        for p_idx, part in enumerate(msg.parts):
            if isinstance(part, ToolResultPart):
                result_tiers[(m_idx, p_idx)] = tiers[position]
                position += 1
                if part.callID and part.callID not in by_call_id:
                    by_call_id[part.callID] = (m_idx, p_idx)

    claimed: set[tuple[int, int]] = set()
    pairs: list[ParamTiers] = [{} for _ in messages]

    # Call ID matches first so adjacency never steals an identified result
    for m_idx, msg in enumerate(messages):
        for p_idx, part in enumerate(msg.parts):
            if isinstance(part, ToolPart) and part.callID in by_call_id:
                key = by_call_id[part.callID]
                if key not in claimed:
                    claimed.add(key)
                    pairs[m_idx][p_idx] = result_tiers[key]

    for m_idx, msg in enumerate(messages):
        for p_idx, part in enumerate(msg.parts):
            if not isinstance(part, ToolPart) or p_idx in pairs[m_idx]:
                continue
            key = (m_idx, p_idx + 1)
            if key in result_tiers and key not in claimed:
                claimed.add(key)
                pairs[m_idx][p_idx] = result_tiers[key]
            else:
                logger.debug(
                    "No result paired with tool %s at message %d part %d",
                    part.tool,
                    m_idx,
                    p_idx,
                )
                pairs[m_idx][p_idx] = None

    return pairs


def format_params(params: dict[str, Any] | None, limit: int) -> str:
    """Compact JSON preview of tool parameters, cut to ``limit`` characters."""
    if params is None:
        return ""
    serialized = json.dumps(
        params, separators=(",", ":"), ensure_ascii=False, default=str
    )
    if len(serialized) > limit:
        return f" {serialized[:limit]}..."
    return f" {serialized}"


def format_part(part: Part, tier: int | None, config: ForkConfig) -> str | None:
    """Render one part, or None for parts that contribute nothing."""
    if isinstance(part, TextPart):
        return part.text or None
    if isinstance(part, ToolPart):
        if not part.tool:
            return None
        preview = format_params(part.params, config.params_limit(tier))
        return f"[Tool: {part.tool}]{preview}"
    if isinstance(part, ToolResultPart):
        if not part.text:
            return None
        return f"[Tool result]\n{part.text}"
    return None


def format_message(message: Message, param_tiers: ParamTiers, config: ForkConfig) -> str:
    """Render a message as a role label followed by blank-line separated parts."""
    blocks = []
    for idx, part in enumerate(message.parts):
        rendered = format_part(part, param_tiers.get(idx), config)
        if rendered is not None:
            blocks.append(rendered)

    header = f"\n{role_label(message.role)}:"
    if not blocks:
        return header
    return header + "\n" + "\n\n".join(blocks)


def wrap_context(body: str) -> str:
    return f"{CONTEXT_OPEN_TAG}{body}\n{CONTEXT_CLOSE_TAG}"


def wrapped_length(body_length: int) -> int:
    """Length of ``wrap_context`` output for a body of the given length."""
    return len(CONTEXT_OPEN_TAG) + body_length + 1 + len(CONTEXT_CLOSE_TAG)


def format_messages(messages: Sequence[Message], config: ForkConfig) -> list[str]:
    """Render each message once; joining the blocks gives the context body."""
    pairs = pair_tool_invocations(messages, config)
    return [format_message(msg, pairs[i], config) for i, msg in enumerate(messages)]
