"""
Pytest configuration and shared fixtures for stockagent tests.

Test Organization:
- tests/unit/ - Mock-only tests, no external dependencies
"""

import io
from typing import AsyncIterator, Iterable

import pytest

from stockagent.agentic.streaming import (
    AssistantMessageEvent,
    ResultEvent,
    StreamDeltaEvent,
    StreamEvent,
    StreamRenderer,
    SystemInitEvent,
    ToolUseBlock,
    UserMessageEvent,
)


class FakeClock:
    """Monotonic clock advanced by hand."""

    def __init__(self, now: float = 100.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


async def stream_of(items: Iterable) -> AsyncIterator:
    """Async iterator over a fixed list, like the SDK's message stream."""
    for item in items:
        yield item


@pytest.fixture
def output() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def renderer(output, clock) -> StreamRenderer:
    return StreamRenderer(output, clock=clock)


@pytest.fixture
def init_event() -> SystemInitEvent:
    return SystemInitEvent(
        session_id="session-1",
        model="claude-sonnet-4-5",
        tools=["Task", "Read", "mcp__wayfound__evaluate_session"],
        agents=["web-researcher", "report-writer"],
    )


@pytest.fixture
def delegation_scenario(init_event) -> list[StreamEvent]:
    """Init, a delegation to "X", a delegated turn streaming "Hello", result."""
    return [
        init_event,
        UserMessageEvent(),
        AssistantMessageEvent(
            content=[ToolUseBlock(id="toolu_1", name="Task", input={"subagent_type": "X"})]
        ),
        UserMessageEvent(parent_tool_use_id="42"),
        StreamDeltaEvent(delta_kind="text-delta", text="He"),
        StreamDeltaEvent(delta_kind="text-delta", text="ll"),
        StreamDeltaEvent(delta_kind="text-delta", text="o"),
        StreamDeltaEvent(delta_kind="message-end", stop_reason="end_turn"),
        ResultEvent(duration_ms=5400, num_turns=2, total_cost_usd=1.23, status="success", result="Report written"),
    ]


@pytest.fixture
def make_stream():
    """Factory turning a list into an async message stream."""
    return stream_of
