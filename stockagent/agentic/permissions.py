"""Tool admission control for the research run.

The orchestration layer asks for permission before every tool execution.
All tools are approved with their input passed through unchanged, except
one rate-limited tool (WebSearch): each request increments the run's
external call counter, and once the counter exceeds the limit the request
is denied with a reason the model can act on.

A denial is a normal outcome, returned as a decision and never raised.
"""

import threading
from typing import IO, Any, Literal

import click
from loguru import logger
from pydantic import BaseModel, Field

from stockagent.agentic.streaming.formatters import highlight_tools, tag
from stockagent.agentic.streaming.state import RendererState

RATE_LIMITED_TOOL = "WebSearch"
DEFAULT_LIMIT = 3


class AdmissionDecision(BaseModel):
    """Outcome of one permission check."""

    behavior: Literal["allow", "deny"]
    updated_input: dict[str, Any] | None = None
    message: str = ""
    interrupt: bool = False

    @property
    def allowed(self) -> bool:
        return self.behavior == "allow"


class ToolAdmissionPolicy:
    """Approves tool calls, capping calls to one rate-limited tool.

    The counter is stored on the renderer state so the transcript and the
    policy describe the same run. Increment and check happen under a lock.
    """

    def __init__(
        self,
        state: RendererState | None = None,
        *,
        limited_tool: str = RATE_LIMITED_TOOL,
        limit: int = DEFAULT_LIMIT,
        out: IO[str] | None = None,
    ):
        self.state = state or RendererState()
        self.limited_tool = limited_tool
        self.limit = limit
        self.out = out
        self._lock = threading.Lock()

    @property
    def call_count(self) -> int:
        return self.state.external_call_counter

    def deny_message(self) -> str:
        return (
            f"You have reached the maximum limit of {self.limit} web searches. "
            "Please summarize your findings and return them now."
        )

    def decide(self, tool_name: str, tool_input: dict[str, Any]) -> AdmissionDecision:
        """Decide whether a tool call may run."""
        if tool_name == self.limited_tool:
            with self._lock:
                self.state.external_call_counter += 1
                count = self.state.external_call_counter

            self._echo(highlight_tools(f"{tool_name} request #{count}/{self.limit}"))

            if count > self.limit:
                logger.warning(f"Denied {tool_name} call #{count} (limit {self.limit})")
                self._echo(
                    click.style("BLOCKING ", fg="red")
                    + highlight_tools(tool_name)
                    + f" - limit of {self.limit} searches reached"
                )
                return AdmissionDecision(behavior="deny", message=self.deny_message())

        self._echo("Auto-approving " + highlight_tools(tool_name))
        return AdmissionDecision(behavior="allow", updated_input=tool_input)

    async def can_use_tool(self, tool_name: str, tool_input: dict[str, Any], context: Any = None):
        """Permission callback in the shape the Claude Agent SDK expects."""
        from claude_agent_sdk.types import PermissionResultAllow, PermissionResultDeny

        decision = self.decide(tool_name, tool_input)
        if decision.allowed:
            return PermissionResultAllow(updated_input=decision.updated_input)
        return PermissionResultDeny(message=decision.message, interrupt=decision.interrupt)

    def _echo(self, message: str) -> None:
        click.echo(file=self.out)
        click.echo(tag("PERMISSION") + message, file=self.out)
