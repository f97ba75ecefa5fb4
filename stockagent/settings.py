"""stockagent settings with environment variable support."""

import os
from pathlib import Path

from dotenv import load_dotenv


def _find_env_file() -> Path | None:
    """Find .env file in current or parent directories."""
    current = Path.cwd()
    for _ in range(5):  # Check up to 5 levels
        env_file = current / ".env"
        if env_file.exists():
            return env_file
        current = current.parent
    pkg_dir = Path(__file__).parent.parent
    env_file = pkg_dir / ".env"
    if env_file.exists():
        return env_file
    return None


env_file = _find_env_file()
if env_file:
    load_dotenv(env_file)

from pydantic import BaseModel


class WayfoundSettings(BaseModel):
    """Wayfound supervisor connection settings.

    Neither value is validated here; a missing key surfaces as an
    authorization failure from the MCP server.
    """

    agent_id: str | None = os.getenv("WAYFOUND_AGENT_ID")
    mcp_key: str | None = os.getenv("WAYFOUND_MCP_KEY")
    mcp_url: str = os.getenv("WAYFOUND__MCP_URL", "https://cburnette.ngrok.io/sse")
    server_name: str = os.getenv("WAYFOUND__SERVER_NAME", "wayfound")


class AgentSettings(BaseModel):
    """Orchestration settings for the research run."""

    max_turns: int = int(os.getenv("AGENT__MAX_TURNS", "50"))
    web_search_limit: int = int(os.getenv("AGENT__WEB_SEARCH_LIMIT", "3"))
    subagent_model: str = os.getenv("AGENT__SUBAGENT_MODEL", "sonnet")
    anthropic_api_key: str | None = os.getenv("ANTHROPIC_API_KEY")


class Settings(BaseModel):
    """Application settings."""

    wayfound: WayfoundSettings = WayfoundSettings()
    agent: AgentSettings = AgentSettings()
    log_level: str = os.getenv("LOG_LEVEL", "WARNING")


settings = Settings()
