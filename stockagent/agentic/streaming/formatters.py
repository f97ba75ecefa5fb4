"""Terminal formatting functions.

Builds the styled fragments of the transcript:
- Tag prefixes: [SYSTEM], [USER], [ASSISTANT], [SUBAGENT], ...
- Tool and sub-agent name highlighting
- Result figures (duration, cost)

Styling uses click.style; click.echo strips it again when the target
stream is not a terminal.
"""

import re

import click

RULE_WIDTH = 80

TOOL_COLOR = (255, 165, 0)
AGENT_COLOR = (74, 144, 226)
LABEL_COLOR = (255, 182, 193)

TOOL_PATTERN = re.compile(r"\b(Task|Read|Write|Edit|WebSearch|Bash|mcp__\w+)\b")

TAG_COLORS = {
    "SYSTEM": "cyan",
    "USER": "blue",
    "ASSISTANT": "green",
    "SUBAGENT": "magenta",
    "STREAMING": "bright_black",
    "PERMISSION": "yellow",
    "RESULT": "green",
    "ERROR": "red",
}


def tag(name: str) -> str:
    """Styled `[NAME] ` prefix."""
    return click.style(f"[{name}] ", fg=TAG_COLORS.get(name, "white"))


def rule(color: str = "cyan") -> str:
    return click.style("=" * RULE_WIDTH, fg=color)


def highlight_tools(text: str) -> str:
    """Color every known tool name in text."""
    return TOOL_PATTERN.sub(lambda m: click.style(m.group(0), fg=TOOL_COLOR), text)


def agent_name(name: str) -> str:
    return click.style(name, fg=AGENT_COLOR)


def agent_label(label: str) -> str:
    """Prefix written once before streamed assistant text."""
    return click.style(f"[{label}] ", fg=LABEL_COLOR)


def format_cost(total_cost_usd: float | None) -> str:
    """Format a run cost with four decimals, e.g. `$1.2300`."""
    if total_cost_usd is None:
        return "n/a"
    return f"${total_cost_usd:.4f}"


def format_duration(duration_ms: int) -> str:
    return f"{duration_ms}ms"


def format_wait(seconds: float) -> str:
    return f"{seconds:.1f}s"


def format_agent_list(agents: list[str]) -> str:
    if not agents:
        return "none"
    return ", ".join(agent_name(a) for a in agents)
