"""
Sub-agent Definitions
=====================

The coordinator delegates to named sub-agents. Each sub-agent is defined
declaratively in a YAML file under `stockagent/agentic/agents/`:

    name: web-researcher
    description: Agent that searches the web for current stock information
    model: sonnet
    tools:
      - WebSearch
    prompt: |
      You are a financial web research specialist...
      You have a HARD LIMIT of {search_limit} web searches.

Prompts are templates: `{ticker}` and `{search_limit}` are filled in when
the definitions are loaded for a run. Unknown placeholders are left as-is.
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field

AGENTS_DIR = Path(__file__).parent / "agents"


class _Placeholders(dict):
    def __missing__(self, key: str) -> str:
        return "{" + key + "}"


class SubagentSchema(BaseModel):
    """A sub-agent the coordinator can delegate to via the Task tool."""

    name: str
    description: str
    prompt: str
    tools: list[str] = Field(default_factory=list)
    model: str | None = None

    def render(self, **variables: Any) -> "SubagentSchema":
        """Return a copy with the prompt template filled in."""
        prompt = self.prompt.format_map(_Placeholders(variables))
        return self.model_copy(update={"prompt": prompt})

    def to_agent_definition(self):
        """Convert to the Claude Agent SDK's AgentDefinition."""
        from claude_agent_sdk import AgentDefinition

        return AgentDefinition(
            description=self.description,
            prompt=self.prompt,
            tools=list(self.tools),
            model=self.model,
        )


def subagent_from_yaml(yaml_content: str) -> SubagentSchema:
    """Parse a sub-agent definition from a YAML string."""
    data = yaml.safe_load(yaml_content)
    return SubagentSchema(**data)


def subagent_from_yaml_file(file_path: str | Path) -> SubagentSchema:
    content = Path(file_path).read_text()
    return subagent_from_yaml(content)


def list_subagent_files(agents_dir: Path = AGENTS_DIR) -> list[Path]:
    return sorted(agents_dir.glob("*.yaml"))


def load_subagents(
    ticker: str,
    *,
    search_limit: int,
    model: str | None = None,
    agents_dir: Path = AGENTS_DIR,
) -> dict[str, SubagentSchema]:
    """
    Load and render every sub-agent definition for one run.

    Args:
        ticker: Stock ticker substituted into prompts
        search_limit: Web search cap substituted into prompts
        model: Optional model alias overriding each file's model
        agents_dir: Directory holding the YAML definitions

    Returns:
        Mapping of sub-agent name to rendered schema, in file name order
    """
    subagents = {}
    for path in list_subagent_files(agents_dir):
        schema = subagent_from_yaml_file(path).render(ticker=ticker, search_limit=search_limit)
        if model:
            schema = schema.model_copy(update={"model": model})
        subagents[schema.name] = schema
    return subagents
