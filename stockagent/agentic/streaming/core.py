"""
Event Stream Renderer
=====================

Renders the event stream of a research run as a live, colorized terminal
transcript. Records arrive one at a time from the orchestration call and
each one is printed as soon as it arrives; streamed assistant text is
written fragment by fragment, never buffered until the message ends.

EVENT HANDLING
--------------

| Event                     | Output                                  | State change                    |
|---------------------------|-----------------------------------------|---------------------------------|
| system-init               | [SYSTEM] model, tools, agents (once)    | session_id                      |
| user-message (top level)  | [USER] New user message received       | reset_turn()                    |
| user-message (delegated)  | [SUBAGENT] delegation banner            | reset_turn()                    |
| stream-delta start        | [STREAMING] streaming started           | reset_turn()                    |
| stream-delta text         | label once, then the raw fragment       | pending_text, text_block_open   |
| stream-delta end          | [STREAMING] complete (reason: ...)      | none                            |
| assistant-message         | [ASSISTANT] block count, tool names     | reset_turn(), current_delegate  |
| result                    | [RESULT] duration, turns, cost, output  | finished                        |

DELEGATION ORDERING
-------------------

The name of a delegated sub-agent is only known from the assistant's
delegation tool call, which always precedes the sub-agent's first user
message:

    assistant-message  Task(subagent_type="web-researcher", id="toolu_1")
         │                └── state.record_delegation("toolu_1", "web-researcher")
         ▼
    user-message       parent_tool_use_id="toolu_1"
                          └── banner: "Delegating to: web-researcher"

A delegated user message with no known delegation renders the
DelegateName.UNKNOWN placeholder.

WAIT NOTICES
------------

Once the session is initialized, a gap of more than WAIT_NOTICE_SECONDS
between two records is reported before the later record is rendered.
SkippedEvent markers count as arrivals: they reset the gap and render
nothing else.
"""

import time
from typing import IO, AsyncIterable, Callable

import click
from loguru import logger

from stockagent.agentic.streaming.events import (
    AssistantMessageEvent,
    ResultEvent,
    SkippedEvent,
    StreamDeltaEvent,
    StreamEvent,
    SystemInitEvent,
    UserMessageEvent,
)
from stockagent.agentic.streaming.formatters import (
    agent_label,
    agent_name,
    format_agent_list,
    format_cost,
    format_duration,
    format_wait,
    highlight_tools,
    rule,
    tag,
)
from stockagent.agentic.streaming.state import RendererState

WAIT_NOTICE_SECONDS = 2.0

DEFAULT_LABEL = "STOCK RESEARCH AGENT"
DELEGATION_TOOL = "Task"


class StreamRenderer:
    """Renders event records to a terminal stream.

    Args:
        out: Text stream to write to (default: stdout via click)
        label: Prefix printed once before each streamed assistant message
        delegation_tool: Tool name whose calls delegate to a sub-agent
        clock: Monotonic clock, injectable for tests
        state: Existing state to render into (default: fresh state)
    """

    def __init__(
        self,
        out: IO[str] | None = None,
        *,
        label: str = DEFAULT_LABEL,
        delegation_tool: str = DELEGATION_TOOL,
        clock: Callable[[], float] = time.monotonic,
        state: RendererState | None = None,
    ):
        self.out = out
        self.label = label
        self.delegation_tool = delegation_tool
        self.clock = clock
        self.state = state or RendererState()
        self.state.last_event_at = clock()

    def echo(self, message: str = "", nl: bool = True) -> None:
        click.echo(message, file=self.out, nl=nl)

    async def consume(self, events: AsyncIterable[StreamEvent]) -> ResultEvent | None:
        """Render events until the stream ends or a result arrives.

        Returns the result record, or None if the stream ended without one.
        Errors raised by the stream propagate unchanged.
        """
        async for event in events:
            self.render(event)
            if isinstance(event, ResultEvent):
                return event
        logger.debug("Event stream ended without a result")
        return None

    def render(self, event: StreamEvent) -> None:
        """Render a single event record.

        Records arriving after the result are ignored.
        """
        if self.state.finished:
            logger.debug(f"Ignoring {event.kind} record received after the result")
            return
        self._note_wait(event)

        if isinstance(event, SystemInitEvent):
            self.on_system_init(event)
        elif isinstance(event, UserMessageEvent):
            self.on_user_message(event)
        elif isinstance(event, StreamDeltaEvent):
            self.on_stream_delta(event)
        elif isinstance(event, AssistantMessageEvent):
            self.on_assistant_message(event)
        elif isinstance(event, ResultEvent):
            self.on_result(event)

    def _note_wait(self, event: StreamEvent) -> None:
        source = event.source if isinstance(event, SkippedEvent) else event.kind
        now = self.clock()
        waited = now - self.state.last_event_at
        self.state.last_event_at = now
        if self.state.initialized and waited > WAIT_NOTICE_SECONDS:
            self.echo()
            self.echo(
                click.style(
                    f"[STREAMING] Received message after {format_wait(waited)} wait "
                    f"(type: {source})",
                    fg="bright_black",
                )
            )

    def on_system_init(self, event: SystemInitEvent) -> None:
        if self.state.initialized:
            logger.debug(f"Ignoring repeated init for session {self.state.session_id}")
            return
        # An init without an id still counts as initialized
        self.state.session_id = event.session_id or ""

        self.echo(tag("SYSTEM") + "Initialized")
        self.echo(tag("SYSTEM") + f"Model: {event.model}")
        self.echo(tag("SYSTEM") + "Available tools: " + highlight_tools(", ".join(event.tools)))
        self.echo(tag("SYSTEM") + f"Available agents: {format_agent_list(event.agents)}")
        self.echo(click.style("[STREAMING] Waiting for Claude LLM response...", fg="bright_black"))
        self.echo()

    def on_user_message(self, event: UserMessageEvent) -> None:
        if event.is_delegated:
            delegate = self.state.delegate_for(event.parent_tool_use_id)
            self.echo()
            self.echo(rule("magenta"))
            self.echo(tag("SUBAGENT") + "Delegating to: " + agent_name(delegate))
            self.echo(tag("SUBAGENT") + f"Tool use ID: {event.parent_tool_use_id}")
            self.echo(rule("magenta"))
            self.echo(
                tag("STREAMING")
                + "Waiting for subagent ("
                + agent_name(delegate)
                + ") Claude LLM response..."
            )
        else:
            self.echo(tag("USER") + "New user message received")
        self.state.reset_turn()

    def on_stream_delta(self, event: StreamDeltaEvent) -> None:
        if event.delta_kind == "message-start":
            self.echo(click.style("[STREAMING] Claude response streaming started...", fg="bright_black"))
            self.state.reset_turn()
        elif event.delta_kind == "text-delta":
            if self.state.append_text(event.text):
                self.echo(agent_label(self.label), nl=False)
            self.echo(click.style(event.text, fg="white"), nl=False)
        elif event.delta_kind == "message-end":
            logger.debug(f"Assistant message ended: stop_reason={event.stop_reason}")
            self.echo()
            self.echo(tag("STREAMING") + f"Claude response complete (reason: {event.stop_reason})")
            self.echo(click.style("[STREAMING] Waiting for next Claude LLM response...", fg="bright_black"))

    def on_assistant_message(self, event: AssistantMessageEvent) -> None:
        if self.state.text_block_open:
            self.echo()
        self.state.reset_turn()

        self.echo(tag("ASSISTANT") + f"Message completed ({len(event.content)} content blocks)")

        tool_uses = event.tool_uses
        if not tool_uses:
            return

        names = ", ".join(t.name for t in tool_uses)
        self.echo(tag("ASSISTANT") + f"Requested {len(tool_uses)} tool(s): " + highlight_tools(names))

        for tool_use in tool_uses:
            if tool_use.name == self.delegation_tool and tool_use.subagent:
                self.state.record_delegation(tool_use.id, tool_use.subagent)
                logger.debug(f"Delegation {tool_use.id} -> {tool_use.subagent}")

        self.echo(tag("STREAMING") + "Executing tools, then waiting for next Claude LLM response...")

    def on_result(self, event: ResultEvent) -> None:
        self.state.finished = True
        self.echo()
        self.echo(rule("green"))
        self.echo(tag("RESULT") + "Research completed!")
        self.echo(tag("RESULT") + f"Duration: {format_duration(event.duration_ms)}")
        self.echo(tag("RESULT") + f"Turns: {event.num_turns}")
        self.echo(tag("RESULT") + f"Cost: {format_cost(event.total_cost_usd)}")

        if event.is_success:
            self.echo(click.style("[RESULT] Status: SUCCESS", fg="green"))
            self.echo(click.style("\n[OUTPUT] ", fg="white") + f"{event.result}")
        else:
            self.echo(click.style(f"[RESULT] Status: {event.status}", fg="red"))

        self.echo(rule("green"))
