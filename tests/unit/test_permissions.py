"""
Unit tests for tool admission control.

WebSearch calls are allowed up to the limit and denied afterwards; every
other tool is always allowed with its input passed through.
"""

import threading

import pytest
from claude_agent_sdk.types import PermissionResultAllow, PermissionResultDeny

from stockagent.agentic.permissions import AdmissionDecision, ToolAdmissionPolicy
from stockagent.agentic.streaming import RendererState


@pytest.fixture
def policy(output) -> ToolAdmissionPolicy:
    return ToolAdmissionPolicy(limit=3, out=output)


class TestDecide:
    def test_first_three_searches_allowed_fourth_denied(self, policy):
        decisions = [policy.decide("WebSearch", {"query": f"AAPL news {i}"}) for i in range(4)]

        assert [d.behavior for d in decisions] == ["allow", "allow", "allow", "deny"]
        assert decisions[3].message
        assert decisions[3].interrupt is False

    def test_every_later_search_denied(self, policy):
        for _ in range(3):
            policy.decide("WebSearch", {})

        later = [policy.decide("WebSearch", {}) for _ in range(5)]

        assert all(d.behavior == "deny" for d in later)
        assert policy.call_count == 8

    def test_other_tools_never_denied(self, policy):
        for _ in range(3):
            policy.decide("WebSearch", {})
        policy.decide("WebSearch", {})

        decisions = [policy.decide(name, {}) for name in ["Read", "Write", "Task"] * 5]

        assert all(d.allowed for d in decisions)
        assert policy.call_count == 4

    def test_allow_passes_input_through(self, policy):
        tool_input = {"file_path": "AAPL_research_report_v1.md"}

        decision = policy.decide("Read", tool_input)

        assert decision == AdmissionDecision(behavior="allow", updated_input=tool_input)

    def test_deny_message_names_limit(self, output):
        policy = ToolAdmissionPolicy(limit=1, out=output)
        policy.decide("WebSearch", {})

        decision = policy.decide("WebSearch", {})

        assert "maximum limit of 1 web searches" in decision.message

    def test_custom_limited_tool(self, output):
        policy = ToolAdmissionPolicy(limited_tool="WebFetch", limit=0, out=output)

        assert policy.decide("WebFetch", {}).behavior == "deny"
        assert policy.decide("WebSearch", {}).behavior == "allow"

    def test_counter_lives_on_renderer_state(self, output):
        state = RendererState()
        policy = ToolAdmissionPolicy(state, out=output)

        policy.decide("WebSearch", {})
        policy.decide("WebSearch", {})
        state.reset_turn()

        assert state.external_call_counter == 2

    def test_concurrent_calls_respect_limit(self, output):
        policy = ToolAdmissionPolicy(limit=3, out=output)
        decisions = []
        lock = threading.Lock()

        def request():
            decision = policy.decide("WebSearch", {})
            with lock:
                decisions.append(decision)

        threads = [threading.Thread(target=request) for _ in range(20)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert sum(d.allowed for d in decisions) == 3
        assert policy.call_count == 20


class TestTranscript:
    def test_request_and_block_lines(self, output):
        policy = ToolAdmissionPolicy(limit=1, out=output)
        policy.decide("WebSearch", {})
        policy.decide("WebSearch", {})
        text = output.getvalue()

        assert "[PERMISSION] WebSearch request #1/1" in text
        assert "[PERMISSION] WebSearch request #2/1" in text
        assert "[PERMISSION] BLOCKING WebSearch - limit of 1 searches reached" in text

    def test_auto_approve_line(self, policy, output):
        policy.decide("Read", {})

        assert "[PERMISSION] Auto-approving Read" in output.getvalue()


class TestCanUseTool:
    async def test_allow_result(self, policy):
        result = await policy.can_use_tool("Read", {"file_path": "x.md"}, None)

        assert isinstance(result, PermissionResultAllow)
        assert result.updated_input == {"file_path": "x.md"}

    async def test_deny_result(self, output):
        policy = ToolAdmissionPolicy(limit=0, out=output)

        result = await policy.can_use_tool("WebSearch", {"query": "AAPL"}, None)

        assert isinstance(result, PermissionResultDeny)
        assert "summarize your findings" in result.message
        assert result.interrupt is False
