"""Adapter from Claude Agent SDK messages to event records.

The SDK yields five message classes. Each is normalized into the event
record the renderer understands:

| SDK message       | Condition                          | Event record            |
|-------------------|------------------------------------|-------------------------|
| SystemMessage     | subtype == "init"                  | SystemInitEvent         |
| UserMessage       | always                             | UserMessageEvent        |
| StreamEvent       | message_start                      | StreamDeltaEvent(start) |
| StreamEvent       | content_block_delta / text_delta   | StreamDeltaEvent(text)  |
| StreamEvent       | message_delta with stop_reason     | StreamDeltaEvent(end)   |
| AssistantMessage  | always                             | AssistantMessageEvent   |
| ResultMessage     | always                             | ResultEvent             |

Anything else (other system subtypes, tool-input JSON deltas, content
block boundaries) maps to None; iter_events passes it on as a SkippedEvent
so the renderer can still timestamp its arrival.
"""

from typing import Any, AsyncIterable, AsyncIterator

from claude_agent_sdk import types as sdk
from loguru import logger

from stockagent.agentic.streaming.events import (
    AssistantMessageEvent,
    ContentBlock,
    OtherBlock,
    ResultEvent,
    SkippedEvent,
    StreamDeltaEvent,
    StreamEvent,
    SystemInitEvent,
    TextBlock,
    ToolUseBlock,
    UserMessageEvent,
)


def extract_agent_names(agents: Any) -> list[str]:
    """Normalize the init payload's agent list.

    The CLI reports agents either as plain names or as objects with a
    `name` key.
    """
    if not agents:
        return []
    names = []
    for agent in agents:
        if isinstance(agent, str):
            names.append(agent)
        elif isinstance(agent, dict) and agent.get("name"):
            names.append(str(agent["name"]))
    return names


def convert_block(block: Any) -> ContentBlock:
    if isinstance(block, sdk.TextBlock):
        return TextBlock(text=block.text)
    if isinstance(block, sdk.ToolUseBlock):
        tool_input = block.input if isinstance(block.input, dict) else {}
        return ToolUseBlock(id=block.id, name=block.name, input=tool_input)
    return OtherBlock(type=type(block).__name__)


def convert_stream_event(event: dict) -> StreamDeltaEvent | None:
    """Convert a raw Anthropic streaming event dict."""
    event_type = event.get("type")
    delta = event.get("delta") or {}

    if event_type == "message_start":
        return StreamDeltaEvent(delta_kind="message-start")
    if event_type == "content_block_delta" and delta.get("type") == "text_delta":
        return StreamDeltaEvent(delta_kind="text-delta", text=delta.get("text", ""))
    if event_type == "message_delta" and delta.get("stop_reason"):
        return StreamDeltaEvent(delta_kind="message-end", stop_reason=delta["stop_reason"])
    return None


def to_event(message: Any) -> StreamEvent | None:
    """Convert one SDK message into an event record (None to skip)."""
    if isinstance(message, sdk.SystemMessage):
        if message.subtype != "init":
            logger.debug(f"Skipping system message subtype={message.subtype}")
            return None
        data = message.data or {}
        return SystemInitEvent(
            session_id=data.get("session_id"),
            model=data.get("model") or "unknown",
            tools=list(data.get("tools") or []),
            agents=extract_agent_names(data.get("agents")),
        )

    if isinstance(message, sdk.UserMessage):
        return UserMessageEvent(parent_tool_use_id=message.parent_tool_use_id)

    if isinstance(message, sdk.StreamEvent):
        return convert_stream_event(message.event or {})

    if isinstance(message, sdk.AssistantMessage):
        return AssistantMessageEvent(content=[convert_block(b) for b in message.content])

    if isinstance(message, sdk.ResultMessage):
        return ResultEvent(
            duration_ms=message.duration_ms,
            num_turns=message.num_turns,
            total_cost_usd=message.total_cost_usd,
            status=message.subtype,
            result=message.result,
        )

    logger.debug(f"Skipping unrecognized message type {type(message).__name__}")
    return None


def message_source(message: Any) -> str:
    """Short name of an SDK message type for transcript notices."""
    if isinstance(message, sdk.StreamEvent):
        return f"stream_event:{(message.event or {}).get('type', 'unknown')}"
    if isinstance(message, sdk.SystemMessage):
        return f"system:{message.subtype}"
    return type(message).__name__


async def iter_events(messages: AsyncIterable[Any]) -> AsyncIterator[StreamEvent]:
    """Lazily convert an SDK message stream.

    Messages with nothing to render become SkippedEvent markers rather
    than being dropped, so the renderer sees every arrival.
    """
    async for message in messages:
        event = to_event(message)
        yield event if event is not None else SkippedEvent(source=message_source(message))
