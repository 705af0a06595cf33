"""Tests for the fork preamble."""

from config import ForkConfig
from core.fork import build_fork_preamble
from core.models import ProcessingStats, TierDistribution


class TestBuildForkPreamble:
    """Tests for build_fork_preamble."""

    def test_no_compaction_nothing_removed(self):
        """Test the preamble for an untouched history."""
        preamble = build_fork_preamble(ProcessingStats())

        assert "No compaction detected" in preamble
        assert "All messages preserved." in preamble
        assert "Tool results: 0 full" in preamble
        assert "<inherited_context>" in preamble

    def test_compaction_and_eviction(self):
        """Test compaction, tier counts and evictions are reported."""
        stats = ProcessingStats(
            compaction_detected=True,
            compaction_slice_index=4,
            removed_messages=3,
            tier_distribution=TierDistribution(tier1=5, tier2=10, tier3=7),
        )

        preamble = build_fork_preamble(stats)

        assert "Compaction summary included" in preamble
        assert (
            "Tool results: 5 full, 10 truncated to 3000 chars, "
            "7 truncated to 500 chars." in preamble
        )
        assert "3 oldest messages removed to fit the context budget." in preamble

    def test_caps_from_config(self):
        """Test the quoted caps follow the configuration."""
        config = ForkConfig(tier2_limit=1000, tier3_limit=100)

        preamble = build_fork_preamble(ProcessingStats(), config)

        assert "truncated to 1000 chars" in preamble
        assert "truncated to 100 chars" in preamble
