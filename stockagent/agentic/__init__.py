"""stockagent agentic module - a supervised multi-agent research run.

Core Components:
- SubagentSchema: YAML-based sub-agent definitions
- ToolAdmissionPolicy: permission callback capping web searches
- build_options/run_research: orchestration call and rendering

Streaming:
- StreamRenderer: live terminal transcript of the event stream
"""

from stockagent.agentic.permissions import AdmissionDecision, ToolAdmissionPolicy
from stockagent.agentic.prompts import COORDINATOR_SYSTEM_PROMPT, build_research_prompt
from stockagent.agentic.runner import build_options, run_research
from stockagent.agentic.schema import (
    SubagentSchema,
    load_subagents,
    subagent_from_yaml,
    subagent_from_yaml_file,
)
from stockagent.agentic.streaming import RendererState, StreamRenderer

__all__ = [
    # Sub-agents
    "SubagentSchema",
    "load_subagents",
    "subagent_from_yaml",
    "subagent_from_yaml_file",
    # Prompts
    "COORDINATOR_SYSTEM_PROMPT",
    "build_research_prompt",
    # Admission control
    "AdmissionDecision",
    "ToolAdmissionPolicy",
    # Runner
    "build_options",
    "run_research",
    # Streaming
    "StreamRenderer",
    "RendererState",
]
