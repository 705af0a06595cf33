"""Fork context processing statistics."""

from pydantic import BaseModel, Field

NO_BOUNDARY = -1


class TierDistribution(BaseModel):
    """Number of tool results assigned to each truncation tier."""

    tier1: int = 0
    tier2: int = 0
    tier3: int = 0

    def incremented(self, tier: int) -> "TierDistribution":
        """Return a copy with the given tier counter increased by one."""
        if tier == 1:
            return self.model_copy(update={"tier1": self.tier1 + 1})
        if tier == 2:
            return self.model_copy(update={"tier2": self.tier2 + 1})
        return self.model_copy(update={"tier3": self.tier3 + 1})


class ProcessingStats(BaseModel):
    """Statistics produced alongside the fork context.

    Each pipeline stage returns a new instance rather than mutating the one
    it was given.
    """

    original_count: int = Field(default=0, description="Messages received")
    final_count: int = Field(default=0, description="Messages in the rendered context")
    total_chars: int = Field(default=0, description="Length of the rendered context")
    truncated_results: int = Field(
        default=0, description="Tool results whose text was shortened"
    )
    removed_messages: int = Field(
        default=0, description="Oldest messages evicted to fit the budget"
    )
    compaction_detected: bool = Field(
        default=False, description="Whether a complete compaction boundary was found"
    )
    compaction_slice_index: int = Field(
        default=NO_BOUNDARY, description="Index of the summary message, -1 when none"
    )
    tier_distribution: TierDistribution = Field(default_factory=TierDistribution)
    head_tail_applied: int = Field(
        default=0, description="Truncations that kept both head and tail"
    )
