"""Tests for fork context formatting and tool invocation pairing."""

import json
import logging

import pytest

from config import ForkConfig
from core.fork import (
    CONTEXT_CLOSE_TAG,
    CONTEXT_OPEN_TAG,
    format_message,
    format_messages,
    pair_tool_invocations,
    role_label,
)
from core.fork.formatter import format_params, wrap_context, wrapped_length
from core.models import (
    CompactionPart,
    Message,
    MessageInfo,
    TextPart,
    ToolInput,
    ToolPart,
    ToolResultPart,
    UnknownPart,
)


@pytest.fixture
def config() -> ForkConfig:
    return ForkConfig()


def message(role: str, *parts) -> Message:
    return Message(info=MessageInfo(role=role), parts=list(parts))


def tool(name: str, call_id: str | None = None, **params) -> ToolPart:
    return ToolPart(tool=name, callID=call_id, state=ToolInput(input=params))


class TestRoleLabel:
    """Test role labels."""

    @pytest.mark.parametrize(
        "role, label",
        [("user", "User"), ("assistant", "Agent"), ("system", "System"), ("", "Unknown")],
    )
    def test_labels(self, role, label):
        assert role_label(role) == label


class TestFormatMessage:
    """Test rendering of a single message."""

    def test_text_message(self, config):
        """Test a text part renders verbatim under the role label."""
        rendered = format_message(message("user", TextPart(text="hello")), {}, config)

        assert rendered == "\nUser:\nhello"

    def test_parts_blank_line_separated(self, config):
        """Test parts are separated by a blank line."""
        msg = message("assistant", TextPart(text="first"), TextPart(text="second"))

        assert format_message(msg, {}, config) == "\nAgent:\nfirst\n\nsecond"

    def test_tool_invocation_and_result(self, config):
        """Test tool parts render as tags with a compact parameter preview."""
        msg = message(
            "assistant",
            tool("read", path="a.py"),
            ToolResultPart(text="contents"),
        )

        rendered = format_message(msg, {0: 1}, config)

        assert rendered == (
            '\nAgent:\n[Tool: read] {"path":"a.py"}\n\n[Tool result]\ncontents'
        )

    def test_uninteresting_parts_skipped(self, config):
        """Test markers, unknown parts and empty text render nothing."""
        msg = message(
            "user",
            CompactionPart(),
            UnknownPart(type="file", raw={"type": "file"}),
            TextPart(text=""),
            ToolResultPart(text=""),
        )

        assert format_message(msg, {}, config) == "\nUser:"

    def test_tool_without_params(self, config):
        """Test an invocation with no recorded input renders just the tag."""
        msg = message("assistant", ToolPart(tool="todoread"))

        assert format_message(msg, {}, config) == "\nAgent:\n[Tool: todoread]"


class TestFormatParams:
    """Test parameter previews."""

    def test_compact_json(self):
        """Test parameters are serialized without extra whitespace."""
        assert format_params({"a": 1, "b": [1, 2]}, 500) == ' {"a":1,"b":[1,2]}'

    def test_truncated_with_ellipsis(self):
        """Test long previews are cut to the limit with an ellipsis."""
        params = {"content": "x" * 1000}
        serialized = json.dumps(params, separators=(",", ":"))

        assert format_params(params, 100) == f" {serialized[:100]}..."

    def test_none(self):
        assert format_params(None, 100) == ""


class TestPairToolInvocations:
    """Test matching tool invocations to their results' tiers."""

    def test_adjacent_result(self, config):
        """Test an invocation followed by its result takes the result's tier."""
        messages = [message("assistant", tool("read"), ToolResultPart(text="out"))]

        assert pair_tool_invocations(messages, config) == [{0: 1}]

    def test_call_id_across_messages(self, config):
        """Test call IDs pair invocations with results in later messages."""
        messages = [
            message("assistant", tool("read", call_id="c1")),
            message("user", ToolResultPart(text="out", callID="c1")),
        ]

        assert pair_tool_invocations(messages, config) == [{0: 1}, {}]

    def test_call_id_takes_precedence_over_adjacency(self, config):
        """Test adjacency never claims a result already matched by call ID."""
        messages = [
            message(
                "assistant",
                tool("first", call_id="c2"),
                ToolResultPart(text="out", callID="c1"),
                tool("second", call_id="c1"),
            )
        ]

        pairs = pair_tool_invocations(messages, config)

        assert pairs == [{0: None, 2: 1}]

    def test_ambiguous_invocation_is_flagged(self, config, caplog):
        """Test an invocation without a matching result maps to None."""
        messages = [
            message("assistant", tool("a"), tool("b"), ToolResultPart(text="out"))
        ]

        with caplog.at_level(logging.DEBUG, logger="core.fork.formatter"):
            pairs = pair_tool_invocations(messages, config)

        assert pairs == [{0: None, 1: 1}]
        assert "No result paired with tool a" in caplog.text

    def test_tier_follows_result(self, config):
        """Test an older result's tier carries over to its invocation."""
        messages = [message("assistant", tool("read"), ToolResultPart(text="old"))]
        messages += [message("assistant", ToolResultPart(text="new"))] * 5

        pairs = pair_tool_invocations(messages, config)

        assert pairs[0] == {0: 2}

    def test_param_cap_per_tier(self, config):
        """Test tier 1, tier 2 and unpaired invocations use shrinking caps."""
        params = {"content": "x" * 1000}
        serialized = json.dumps(params, separators=(",", ":"))
        msg = message("assistant", ToolPart(tool="write", state=ToolInput(input=params)))

        assert serialized[:500] + "..." in format_message(msg, {0: 1}, config)
        assert serialized[:200] + "..." in format_message(msg, {0: 2}, config)
        assert format_message(msg, {0: None}, config).endswith(serialized[:100] + "...")


class TestWrapping:
    """Test the context delimiters."""

    def test_wrap_context(self):
        wrapped = wrap_context("\nUser:\nhi")

        assert wrapped == f"{CONTEXT_OPEN_TAG}\nUser:\nhi\n{CONTEXT_CLOSE_TAG}"
        assert len(wrapped) == wrapped_length(len("\nUser:\nhi"))

    def test_format_messages_one_block_per_message(self, config):
        """Test each message renders to exactly one block."""
        messages = [
            message("user", TextPart(text="question")),
            message("assistant", TextPart(text="answer")),
        ]

        blocks = format_messages(messages, config)

        assert blocks == ["\nUser:\nquestion", "\nAgent:\nanswer"]

    def test_format_messages_empty(self, config):
        assert format_messages([], config) == []
