"""Streaming module for research runs.

Components:
- events.py: Event record types (Pydantic models)
- state.py: RendererState for tracking a run
- formatters.py: Terminal styling helpers
- handlers.py: Claude Agent SDK message adapter
- core.py: StreamRenderer
"""

from stockagent.agentic.streaming.core import StreamRenderer
from stockagent.agentic.streaming.events import (
    AssistantMessageEvent,
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
from stockagent.agentic.streaming.formatters import (
    format_cost,
    highlight_tools,
)
from stockagent.agentic.streaming.handlers import iter_events, to_event
from stockagent.agentic.streaming.state import DelegateName, RendererState

__all__ = [
    # Renderer
    "StreamRenderer",
    # Event types
    "StreamEvent",
    "SystemInitEvent",
    "UserMessageEvent",
    "StreamDeltaEvent",
    "AssistantMessageEvent",
    "ResultEvent",
    "SkippedEvent",
    "TextBlock",
    "ToolUseBlock",
    "OtherBlock",
    # State
    "RendererState",
    "DelegateName",
    # SDK adapter
    "to_event",
    "iter_events",
    # Formatters
    "format_cost",
    "highlight_tools",
]
