"""Unit tests for coordinator prompts."""

from datetime import date

from stockagent.agentic.prompts import COORDINATOR_SYSTEM_PROMPT, build_research_prompt


class TestResearchPrompt:
    def test_contains_ticker_agent_and_date(self):
        prompt = build_research_prompt("AAPL", "agent-123", today=date(2026, 10, 16))

        assert "Research the stock ticker AAPL" in prompt
        assert "The Wayfound Agent ID is: agent-123" in prompt
        assert "Todays Date: 10/16/2026" in prompt
        assert "AAPL_research_report_<version>.md" in prompt

    def test_delegates_to_both_subagents(self):
        prompt = build_research_prompt("AAPL", "agent-123")

        assert "Delegate to 'web-researcher'" in prompt
        assert "Delegate to 'report-writer'" in prompt

    def test_grade_threshold(self):
        prompt = build_research_prompt("AAPL", "agent-123")

        assert "a grade of A-, A, or A+, you are done" in prompt
        assert "If the grade is lower than A-" in prompt

    def test_missing_agent_id_rendered_verbatim(self):
        assert "The Wayfound Agent ID is: None" in build_research_prompt("AAPL", None)


def test_system_prompt_requires_evaluation():
    assert "Task tool" in COORDINATOR_SYSTEM_PROMPT
    assert "mcp__wayfound__evaluate_session" in COORDINATOR_SYSTEM_PROMPT
