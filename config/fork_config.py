"""ForkConfig model."""

from pydantic import BaseModel, Field, model_validator

from .defaults import (
    FORK_CHAR_BUDGET,
    FORK_CHAR_NO_REMOVAL,
    FORK_COMPACTED_SENTINEL,
    FORK_ERROR_PATTERNS,
    FORK_HEAD_RATIO,
    FORK_HEAD_TAIL_KEYWORDS,
    FORK_NO_TRUNCATION_TOOLS,
    FORK_PARAMS_TIER1,
    FORK_PARAMS_TIER2,
    FORK_PARAMS_TIER3,
    FORK_TAIL_RATIO,
    FORK_TIER1_COUNT,
    FORK_TIER2_COUNT,
    FORK_TIER2_LIMIT,
    FORK_TIER3_LIMIT,
)


class ForkConfig(BaseModel):
    """Fork context truncation configuration.

    Values are fixed when a pipeline is built; invalid combinations are
    rejected here rather than on each fork.
    """

    char_budget: int = Field(
        default=FORK_CHAR_BUDGET,
        gt=0,
        description="Hard character ceiling for the rendered fork context",
    )
    no_removal_threshold: int = Field(
        default=FORK_CHAR_NO_REMOVAL,
        gt=0,
        description="Rendered size at or below which no message is evicted",
    )
    tier1_count: int = Field(
        default=FORK_TIER1_COUNT,
        ge=0,
        description="Number of newest tool results kept untruncated",
    )
    tier2_count: int = Field(
        default=FORK_TIER2_COUNT,
        ge=0,
        description="Number of tool results after tier 1 capped at tier2_limit",
    )
    tier2_limit: int = Field(
        default=FORK_TIER2_LIMIT, gt=0, description="Character cap for tier 2 results"
    )
    tier3_limit: int = Field(
        default=FORK_TIER3_LIMIT, gt=0, description="Character cap for tier 3 results"
    )
    params_tier1: int = Field(
        default=FORK_PARAMS_TIER1, gt=0, description="Tool parameter preview cap, tier 1"
    )
    params_tier2: int = Field(
        default=FORK_PARAMS_TIER2, gt=0, description="Tool parameter preview cap, tier 2"
    )
    params_tier3: int = Field(
        default=FORK_PARAMS_TIER3, gt=0, description="Tool parameter preview cap, tier 3"
    )
    head_ratio: float = Field(
        default=FORK_HEAD_RATIO,
        ge=0.0,
        le=1.0,
        description="Share of the cap kept from the start in head+tail mode",
    )
    tail_ratio: float = Field(
        default=FORK_TAIL_RATIO,
        ge=0.0,
        le=1.0,
        description="Share of the cap kept from the end in head+tail mode",
    )
    error_patterns: list[str] = Field(
        default_factory=lambda: list(FORK_ERROR_PATTERNS),
        description="Substrings that switch a result to head+tail truncation",
    )
    head_tail_keywords: list[str] = Field(
        default_factory=lambda: list(FORK_HEAD_TAIL_KEYWORDS),
        description="Tool name keywords that switch a result to head+tail truncation",
    )
    no_truncation_tools: list[str] = Field(
        default_factory=lambda: list(FORK_NO_TRUNCATION_TOOLS),
        description="Tool name fragments whose results are never truncated",
    )
    compacted_sentinel: str = Field(
        default=FORK_COMPACTED_SENTINEL,
        min_length=1,
        description="Marker the host leaves in tool results it already cleared",
    )

    @model_validator(mode="after")
    def check_consistency(self) -> "ForkConfig":
        if self.tier2_limit < self.tier3_limit:
            raise ValueError("tier2_limit must be >= tier3_limit")
        if not self.params_tier1 >= self.params_tier2 >= self.params_tier3:
            raise ValueError("params caps must not increase from tier 1 to tier 3")
        if self.head_ratio + self.tail_ratio > 1.0:
            raise ValueError("head_ratio + tail_ratio must not exceed 1.0")
        if self.no_removal_threshold > self.char_budget:
            raise ValueError("no_removal_threshold must be <= char_budget")
        return self

    def tier_limit(self, tier: int) -> int | None:
        """Character cap for a tool result tier, None meaning unlimited."""
        if tier == 1:
            return None
        if tier == 2:
            return self.tier2_limit
        return self.tier3_limit

    def params_limit(self, tier: int | None) -> int:
        """Parameter preview cap for a tier; unknown tiers get the smallest cap."""
        if tier == 1:
            return self.params_tier1
        if tier == 2:
            return self.params_tier2
        return self.params_tier3
