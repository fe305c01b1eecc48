"""Application settings and configuration."""

import os
from pathlib import Path
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv


# Load environment variables from .env file if present
load_dotenv()


@dataclass
class AppSettings:
    """Application-wide settings."""

    # Window defaults
    window_width: int = 520
    window_height: int = 760
    window_title: str = "AI Chat"

    # Default model
    default_model: str = "gpt-4o"

    # Outbound request shape
    history_window: int = 10
    max_tokens: int = 1000
    temperature: float = 0.7

    # Paths
    app_data_dir: Path = Path.home() / ".notechat"
    logs_dir: Path = Path.home() / ".notechat" / "logs"
    vault_dir: Path = Path.home() / "Notes"

    def __post_init__(self) -> None:
        """Ensure directories exist."""
        self.app_data_dir.mkdir(parents=True, exist_ok=True)
        self.logs_dir.mkdir(parents=True, exist_ok=True)


def get_api_key(provider: str) -> Optional[str]:
    """Get API key for a provider from environment variables.

    Args:
        provider: The provider name (openai)

    Returns:
        The API key if found, None otherwise
    """
    key_map = {
        "openai": "OPENAI_API_KEY",
    }
    env_var = key_map.get(provider.lower())
    if env_var:
        return os.getenv(env_var)
    return None


def get_organization_id() -> Optional[str]:
    """Get the OpenAI organization ID from the environment, if set."""
    return os.getenv("OPENAI_ORG_ID")


# Global settings instance
settings = AppSettings()
