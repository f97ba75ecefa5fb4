"""Renderer state management."""

import time
from dataclasses import dataclass, field
from enum import Enum


class DelegateName(str, Enum):
    """Placeholder for a delegated call whose target is not known yet."""

    UNKNOWN = "unknown"


@dataclass
class RendererState:
    """Tracks state across one rendered run.

    Owned by a single StreamRenderer. Per-turn fields are cleared by
    reset_turn(); the external call counter lives for the whole run.
    """

    # Session
    session_id: str | None = None
    finished: bool = False
    last_event_at: float = field(default_factory=time.monotonic)

    # Delegation tracking
    current_delegate: str | None = None
    delegates: dict[str, str] = field(default_factory=dict)

    # Per-turn text accumulation
    pending_text: str = ""
    text_block_open: bool = False

    # Admission control
    external_call_counter: int = 0

    @property
    def initialized(self) -> bool:
        return self.session_id is not None

    def reset_turn(self) -> None:
        """Clear accumulated text at a turn or message boundary."""
        self.pending_text = ""
        self.text_block_open = False

    def append_text(self, fragment: str) -> bool:
        """Append a text fragment.

        Returns True when this fragment opens a new text block, i.e. the
        caller still has to print the label prefix.
        """
        opened = not self.text_block_open
        self.text_block_open = True
        self.pending_text += fragment
        return opened

    def record_delegation(self, tool_use_id: str, subagent: str) -> None:
        """Remember the target of a delegation tool call."""
        self.current_delegate = subagent
        self.delegates[tool_use_id] = subagent

    def delegate_for(self, parent_tool_use_id: str | None) -> str:
        """Resolve the sub-agent name for a delegated user message.

        Looks up the delegation by tool use id first, then falls back to
        the most recent delegation, then to DelegateName.UNKNOWN.
        """
        if parent_tool_use_id and parent_tool_use_id in self.delegates:
            return self.delegates[parent_tool_use_id]
        if self.current_delegate:
            return self.current_delegate
        return DelegateName.UNKNOWN.value
