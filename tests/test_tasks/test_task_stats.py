"""Tests for task statistics and task groups."""

import pytest

from core.models import BackgroundTask, TaskProgress
from core.tasks import build_group, build_stats


@pytest.fixture
def tasks() -> list[BackgroundTask]:
    return [
        BackgroundTask(
            sessionID="ses_one",
            agent="explore",
            status="completed",
            startedAt="2026-01-01T00:00:00.000Z",
            completedAt="2026-01-01T00:00:10.000Z",
            batchId="batch_1",
            progress=TaskProgress(toolCalls=3, toolCallsByName={"read": 2, "grep": 1}),
        ),
        BackgroundTask(
            sessionID="ses_two",
            agent="general",
            status="running",
            startedAt="2026-01-01T00:00:01.000Z",
            batchId="batch_1",
            progress=TaskProgress(toolCalls=1, toolCallsByName={"bash": 1}),
        ),
        BackgroundTask(
            sessionID="ses_three",
            agent="explore",
            status="error",
            startedAt="2026-01-01T00:00:00.000Z",
            completedAt="2026-01-01T00:00:02.000Z",
        ),
    ]


class TestBuildStats:
    """Tests for build_stats."""

    def test_empty(self):
        stats = build_stats([])

        assert stats.totalTasks == 0
        assert stats.duration.avg == 0

    def test_counts(self, tasks):
        """Test counts by status and agent."""
        stats = build_stats(tasks)

        assert stats.totalTasks == 3
        assert stats.activeTasks == 1
        assert stats.byStatus == {"completed": 1, "running": 1, "error": 1}
        assert stats.byAgent == {"explore": 2, "general": 1}

    def test_tool_calls(self, tasks):
        """Test tool call totals by name and agent."""
        stats = build_stats(tasks)

        assert stats.toolCallsByName == {"read": 2, "grep": 1, "bash": 1}
        assert stats.toolCallsByAgent == {"explore": 3, "general": 1}

    def test_durations(self, tasks):
        """Test durations cover finished tasks only, in milliseconds."""
        stats = build_stats(tasks)

        assert stats.duration.avg == pytest.approx(6000)
        assert stats.duration.max == pytest.approx(10000)
        assert stats.duration.min == pytest.approx(2000)


class TestBuildGroup:
    """Tests for build_group."""

    def test_group(self, tasks):
        group = build_group("batch_1", tasks)

        assert group is not None
        assert [t.sessionID for t in group.tasks] == ["ses_one", "ses_two"]
        assert group.stats.total == 2
        assert group.stats.completed == 1
        assert group.stats.running == 1
        assert group.stats.completionRate == pytest.approx(0.5)
        assert group.stats.totalToolCalls == 4
        assert group.stats.duration == pytest.approx(10000)

    def test_unknown_group(self, tasks):
        assert build_group("batch_missing", tasks) is None
