"""Coordinator prompts for the supervised research run."""

from datetime import date

COORDINATOR_SYSTEM_PROMPT = """You are a stock research coordinator. Your job is to orchestrate the research process by delegating to specialized subagents.

IMPORTANT:
- Use the Task tool to delegate research and writing work to subagents
- After the report is written, YOU MUST call the mcp__wayfound__evaluate_session tool"""

PASSING_GRADES = ("A-", "A", "A+")


def build_research_prompt(ticker: str, agent_id: str | None, today: date | None = None) -> str:
    """
    Build the coordinator's task prompt for one ticker.

    The coordinator gathers the supervisor's guidelines, delegates research
    and report writing, then has the supervisor grade the session and
    revises the report until the grade passes.

    Args:
        ticker: Stock ticker to research
        agent_id: Wayfound agent ID (rendered verbatim, even if None)
        today: Date shown to the model (default: today)
    """
    today = today or date.today()
    grades = ", ".join(PASSING_GRADES[:-1]) + f", or {PASSING_GRADES[-1]}"
    return f"""
Research the stock ticker {ticker} and produce a comprehensive investment research report.

Todays Date: {today.strftime("%m/%d/%Y")}

The Wayfound Agent ID is: {agent_id}

Your task:
1. Get the Wayfound agent guidelines to be aware of during execution

2. Delegate to 'web-researcher': Gather current info about {ticker} (news, financials, analyst opinions, trends). Keep research concise.

3. Delegate to 'report-writer': Write a professional 2-3 page research report. Pass ONLY the key findings in a brief summary, not a huge data dump. The report file will be named {ticker}_research_report_<version>.md

4. Get the Wayfound session transcript schema

5. Determine the correctly formatted JSON transcript of the research session **including the report file markdown content in FULL** and evaluate using Wayfound

6. If the Wayfound evaluation results in a grade of {grades}, you are done.
If the grade is lower than {PASSING_GRADES[0]}, iterate by delegating back to 'report-writer' to revise the report based on the feedback from Wayfound.
Repeat the evaluation until you achieve an {PASSING_GRADES[0]} or better.

IMPORTANT:
Keep delegations concise.
Summarize research findings before passing to report-writer.
ALWAYS read and include the full report markdown content in the Wayfound evaluation transcript."""
