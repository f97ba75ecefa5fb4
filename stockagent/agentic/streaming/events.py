"""Event records consumed by the stream renderer.

Every record the orchestration call produces is normalized into one of
these Pydantic models before rendering (see handlers.to_event).
"""

from typing import Any, Literal, Union

from pydantic import BaseModel, Field


class SystemInitEvent(BaseModel):
    """Session metadata, always the first record of a run."""

    kind: Literal["system-init"] = "system-init"
    session_id: str | None = None
    model: str = "unknown"
    tools: list[str] = Field(default_factory=list)
    agents: list[str] = Field(default_factory=list)


class UserMessageEvent(BaseModel):
    """A user turn.

    parent_tool_use_id is set when the message belongs to a delegated
    sub-agent call rather than the top-level conversation.
    """

    kind: Literal["user-message"] = "user-message"
    parent_tool_use_id: str | None = None

    @property
    def is_delegated(self) -> bool:
        return self.parent_tool_use_id is not None


class StreamDeltaEvent(BaseModel):
    """Partial assistant output."""

    kind: Literal["stream-delta"] = "stream-delta"
    delta_kind: Literal["message-start", "text-delta", "message-end"]
    text: str = ""
    stop_reason: str | None = None


class TextBlock(BaseModel):
    type: Literal["text"] = "text"
    text: str


class ToolUseBlock(BaseModel):
    """A tool invocation requested by the assistant."""

    type: Literal["tool_use"] = "tool_use"
    id: str
    name: str
    input: dict[str, Any] = Field(default_factory=dict)

    @property
    def subagent(self) -> str | None:
        """Target sub-agent when this is a delegation call."""
        value = self.input.get("subagent_type")
        return value if isinstance(value, str) and value else None


class OtherBlock(BaseModel):
    """Any block the renderer does not inspect (thinking, tool results)."""

    type: str


ContentBlock = Union[TextBlock, ToolUseBlock, OtherBlock]


class AssistantMessageEvent(BaseModel):
    """A completed assistant message."""

    kind: Literal["assistant-message"] = "assistant-message"
    content: list[ContentBlock] = Field(default_factory=list)

    @property
    def tool_uses(self) -> list[ToolUseBlock]:
        return [block for block in self.content if isinstance(block, ToolUseBlock)]


class ResultEvent(BaseModel):
    """Final record of a run."""

    kind: Literal["result"] = "result"
    duration_ms: int = 0
    num_turns: int = 0
    total_cost_usd: float | None = None
    status: str = "success"
    result: str | None = None

    @property
    def is_success(self) -> bool:
        return self.status == "success"


class SkippedEvent(BaseModel):
    """An SDK message with nothing to render.

    Still passed to the renderer so the time between messages is measured
    against every arrival, not only the rendered ones.
    """

    kind: Literal["skipped"] = "skipped"
    source: str


StreamEvent = Union[
    SystemInitEvent,
    UserMessageEvent,
    StreamDeltaEvent,
    AssistantMessageEvent,
    ResultEvent,
    SkippedEvent,
]
