"""Message models."""

from typing import Any

from pydantic import BaseModel, Field

from .part import CompactionPart, Part, ToolResultPart, parse_part


class MessageInfo(BaseModel):
    role: str = "unknown"
    summary: bool | None = None


class Message(BaseModel):
    """One conversation turn as returned by the host's message history API."""

    info: MessageInfo = Field(default_factory=MessageInfo)
    parts: list[Part] = Field(default_factory=list)

    @property
    def role(self) -> str:
        return self.info.role

    @property
    def is_summary(self) -> bool:
        """True only for the assistant message produced by host compaction."""
        return self.info.role == "assistant" and self.info.summary is True

    def has_compaction_marker(self) -> bool:
        return any(isinstance(part, CompactionPart) for part in self.parts)

    def tool_result_count(self) -> int:
        return sum(1 for part in self.parts if isinstance(part, ToolResultPart))

    @classmethod
    def from_raw(cls, raw: Any) -> "Message":
        """
        Build a Message from a host ``{"info": ..., "parts": [...]}`` dict.

        Missing or malformed fields degrade to defaults.
        """
        if isinstance(raw, Message):
            return raw
        if not isinstance(raw, dict):
            return cls()

        info = raw.get("info")
        role = info.get("role") if isinstance(info, dict) else None
        summary = info.get("summary") if isinstance(info, dict) else None

        parts = raw.get("parts")
        return cls(
            info=MessageInfo(
                role=role if isinstance(role, str) and role else "unknown",
                summary=summary if isinstance(summary, bool) else None,
            ),
            parts=[parse_part(p) for p in parts] if isinstance(parts, list) else [],
        )


def coerce_messages(messages: Any) -> list[Message]:
    """Convert a sequence of Message models and/or raw dicts to Messages."""
    if not messages:
        return []
    return [Message.from_raw(m) for m in messages]
