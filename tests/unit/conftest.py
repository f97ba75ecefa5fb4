"""
Pytest configuration and fixtures for stockagent unit tests.

Unit tests MUST be isolated from external dependencies:
- No Claude Agent SDK sessions
- No MCP server connections
- No network access

The SDK's query() is replaced for every unit test; a test that needs a
stream passes its own fake query function to run_research().
"""

import pytest
from unittest.mock import MagicMock, patch


@pytest.fixture(autouse=True)
def block_sdk_query():
    """Fail loudly if a unit test reaches the real SDK query()."""
    mock_query = MagicMock(side_effect=AssertionError("claude_agent_sdk.query called in a unit test"))
    with patch("claude_agent_sdk.query", mock_query):
        yield mock_query


def pytest_collection_modifyitems(items):
    """Automatically add 'unit' marker to all tests in /unit/."""
    for item in items:
        if "/unit/" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
