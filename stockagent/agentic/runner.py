"""
Research Runner
===============

Wires one research run together:

    ticker
      │
      ├── build_research_prompt()      coordinator task list
      ├── load_subagents()             web-researcher, report-writer
      ├── ToolAdmissionPolicy          WebSearch cap via can_use_tool
      │
      ▼
    claude_agent_sdk.query(prompt, ClaudeAgentOptions)
      │
      ▼ (SDK messages)
    iter_events()  ──►  StreamRenderer.consume()  ──►  terminal

The Wayfound supervisor is attached as an SSE MCP server; the coordinator
reaches it through the mcp__wayfound__* tools in the allow-list.
"""

from typing import IO, Any, AsyncIterator, Callable

import click
from loguru import logger

from stockagent.agentic.permissions import ToolAdmissionPolicy
from stockagent.agentic.prompts import COORDINATOR_SYSTEM_PROMPT, build_research_prompt
from stockagent.agentic.schema import load_subagents
from stockagent.agentic.streaming import ResultEvent, StreamRenderer, iter_events
from stockagent.agentic.streaming.formatters import rule
from stockagent.settings import Settings, settings as default_settings

WAYFOUND_TOOLS = (
    "get_agent_details",
    "evaluate_session",
    "get_session_transcript_json_schema",
)


def allowed_tools(server_name: str) -> list[str]:
    """Tools the coordinator may call directly."""
    return ["Task", "Read"] + [f"mcp__{server_name}__{name}" for name in WAYFOUND_TOOLS]


def mcp_servers(config: Settings) -> dict[str, dict[str, Any]]:
    """MCP server descriptors (Wayfound over SSE)."""
    return {
        config.wayfound.server_name: {
            "type": "sse",
            "url": config.wayfound.mcp_url,
            "headers": {"Authorization": f"Bearer {config.wayfound.mcp_key}"},
        }
    }


def build_options(ticker: str, policy: ToolAdmissionPolicy, config: Settings | None = None):
    """Build ClaudeAgentOptions for a research run."""
    from claude_agent_sdk import ClaudeAgentOptions

    config = config or default_settings
    subagents = load_subagents(
        ticker,
        search_limit=policy.limit,
        model=config.agent.subagent_model,
    )

    return ClaudeAgentOptions(
        max_turns=config.agent.max_turns,
        allowed_tools=allowed_tools(config.wayfound.server_name),
        include_partial_messages=True,
        mcp_servers=mcp_servers(config),
        can_use_tool=policy.can_use_tool,
        system_prompt=COORDINATOR_SYSTEM_PROMPT,
        agents={name: schema.to_agent_definition() for name, schema in subagents.items()},
    )


async def prompt_stream(prompt: str) -> AsyncIterator[dict[str, Any]]:
    """Single-message streaming input.

    The SDK only accepts can_use_tool with an async iterable prompt.
    """
    yield {
        "type": "user",
        "message": {"role": "user", "content": prompt},
    }


def print_header(ticker: str, out: IO[str] | None = None) -> None:
    click.echo(rule("cyan"), file=out)
    click.echo(click.style(f"STOCK RESEARCH AGENT - Analyzing {ticker}", fg="cyan", bold=True), file=out)
    click.echo(rule("cyan"), file=out)
    click.echo(file=out)


async def run_research(
    ticker: str,
    *,
    out: IO[str] | None = None,
    config: Settings | None = None,
    query_fn: Callable[..., Any] | None = None,
) -> ResultEvent | None:
    """
    Run a supervised research session for one ticker and render it.

    Args:
        ticker: Stock ticker to research
        out: Text stream for the transcript (default: stdout)
        config: Settings override (default: module settings)
        query_fn: Replacement for claude_agent_sdk.query (tests)

    Returns:
        The run's result record, or None if the stream ended early

    Raises:
        Any error raised by the SDK stream, unchanged
    """
    config = config or default_settings
    if query_fn is None:
        from claude_agent_sdk import query as query_fn

    print_header(ticker, out)

    renderer = StreamRenderer(out)
    policy = ToolAdmissionPolicy(
        renderer.state,
        limit=config.agent.web_search_limit,
        out=out,
    )
    options = build_options(ticker, policy, config)
    prompt = build_research_prompt(ticker, config.wayfound.agent_id)

    logger.info(f"Starting research run for {ticker} (max_turns={config.agent.max_turns})")
    click.echo(click.style("[STREAMING] Starting to listen for Claude responses...", fg="bright_black"), file=out)

    events = iter_events(query_fn(prompt=prompt_stream(prompt), options=options))
    try:
        result = await renderer.consume(events)
    finally:
        await events.aclose()

    if result is not None:
        logger.info(f"Research run finished: status={result.status} turns={result.num_turns}")
    return result
