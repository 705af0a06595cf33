"""
Fork context processing.

Deterministic, model-free reduction of a parent conversation into a bounded
context string for a forked child session.
"""

from .boundary import find_compaction_boundary
from .budget import enforce_budget
from .formatter import (
    CONTEXT_CLOSE_TAG,
    CONTEXT_OPEN_TAG,
    format_message,
    format_messages,
    pair_tool_invocations,
    role_label,
)
from .pipeline import (
    ForkContext,
    ForkPipeline,
    build_fork_context,
    get_default_pipeline,
    process_for_fork,
    render_context,
)
from .preamble import build_fork_preamble
from .tiers import (
    count_tool_results,
    get_tool_result_tier,
    resolve_tool_name,
    should_use_head_tail,
)
from .truncation import truncate_tool_results, truncate_with_strategy

__all__ = [
    # Pipeline
    "ForkPipeline",
    "ForkContext",
    "get_default_pipeline",
    "process_for_fork",
    "render_context",
    "build_fork_context",
    "build_fork_preamble",
    # Stages
    "find_compaction_boundary",
    "truncate_tool_results",
    "enforce_budget",
    # Helpers
    "count_tool_results",
    "get_tool_result_tier",
    "resolve_tool_name",
    "should_use_head_tail",
    "truncate_with_strategy",
    "pair_tool_invocations",
    "format_message",
    "format_messages",
    "role_label",
    "CONTEXT_OPEN_TAG",
    "CONTEXT_CLOSE_TAG",
]
