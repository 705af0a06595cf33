"""Part models."""

import logging
from typing import Any, Literal

from pydantic import BaseModel, ValidationError

logger = logging.getLogger(__name__)


class TextPart(BaseModel):
    type: Literal["text"] = "text"
    text: str = ""


class CompactionPart(BaseModel):
    """Marker the host inserts into a user message when it compacts history."""

    type: Literal["compaction"] = "compaction"
    auto: bool | None = None


class ToolInput(BaseModel):
    input: dict[str, Any] | None = None


class ToolPart(BaseModel):
    """A tool invocation: tool name plus the parameters it was called with."""

    type: Literal["tool"] = "tool"
    tool: str | None = None
    callID: str | None = None
    state: ToolInput | None = None

    @property
    def params(self) -> dict[str, Any] | None:
        return self.state.input if self.state else None


class ToolResultPart(BaseModel):
    """Textual output of a tool, optionally naming the tool that produced it."""

    type: Literal["tool_result"] = "tool_result"
    text: str = ""
    tool: str | None = None
    callID: str | None = None


class UnknownPart(BaseModel):
    """Any part shape the fork pipeline does not interpret."""

    type: str = "unknown"
    raw: Any = None


Part = TextPart | CompactionPart | ToolPart | ToolResultPart | UnknownPart


def _optional_str(value: Any) -> str | None:
    return value if isinstance(value, str) and value else None


def parse_part(raw: Any) -> Part:
    """
    Build a Part from a host part dict.

    Accepts both the OpenCode tool shape (``tool`` + ``state.input``) and the
    legacy one (``name`` + ``input``). Anything unrecognised or invalid becomes
    an UnknownPart instead of raising.
    """
    if isinstance(raw, BaseModel):
        return raw  # type: ignore[return-value]
    if not isinstance(raw, dict):
        return UnknownPart(raw=raw)

    part_type = raw.get("type")
    try:
        if part_type == "text":
            return TextPart(text=raw.get("text") or "")
        if part_type == "compaction":
            return CompactionPart(auto=raw.get("auto"))
        if part_type == "tool":
            state = raw.get("state")
            params = state.get("input") if isinstance(state, dict) else None
            if params is None:
                params = raw.get("input")
            return ToolPart(
                tool=_optional_str(raw.get("tool")) or _optional_str(raw.get("name")),
                callID=_optional_str(raw.get("callID")),
                state=ToolInput(input=params if isinstance(params, dict) else None),
            )
        if part_type == "tool_result":
            return ToolResultPart(
                text=raw.get("text") or "",
                tool=_optional_str(raw.get("tool")) or _optional_str(raw.get("name")),
                callID=_optional_str(raw.get("callID")),
            )
    except ValidationError as e:
        logger.debug("Treating malformed %s part as opaque: %s", part_type, e)
        return UnknownPart(type=str(part_type), raw=raw)

    return UnknownPart(type=str(part_type or "unknown"), raw=raw)
