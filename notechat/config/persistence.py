"""Settings persistence for notechat.

The chat credentials, model choice, notes folder and window geometry
are kept in ~/.notechat/config.json. Missing or unknown keys fall back
to the defaults so older files keep loading.
"""

import json
import logging
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Optional

from .settings import settings, get_api_key, get_organization_id


logger = logging.getLogger(__name__)


@dataclass
class WindowState:
    """Last window geometry."""

    x: int = 100
    y: int = 100
    width: int = 520
    height: int = 760


@dataclass
class ChatPreferences:
    """What the user configured in the settings dialog."""

    api_key: str = ""
    organization_id: str = ""
    model: str = "gpt-4o"
    vault_path: str = ""

    window: WindowState = field(default_factory=WindowState)

    def effective_api_key(self) -> str:
        """API key to use: the stored one, else the environment's."""
        return self.api_key or get_api_key("openai") or ""

    def effective_organization_id(self) -> str:
        """Organization ID to use: the stored one, else the environment's."""
        return self.organization_id or get_organization_id() or ""


def _known_fields(cls: type, data: Dict[str, Any]) -> Dict[str, Any]:
    names = {f.name for f in fields(cls)}
    return {key: value for key, value in data.items() if key in names}


def preferences_from_dict(data: Dict[str, Any]) -> ChatPreferences:
    """Build preferences from stored JSON, ignoring unknown keys.

    Raises:
        TypeError: If the stored data is not a mapping
    """
    if not isinstance(data, dict):
        raise TypeError(f"Expected a JSON object, got {type(data).__name__}")
    values = _known_fields(ChatPreferences, data)
    values["window"] = WindowState(**_known_fields(WindowState, data.get("window") or {}))
    return ChatPreferences(**values)


class PersistenceManager:
    """Loads preferences lazily and writes every change through."""

    def __init__(self, config_path: Optional[Path] = None) -> None:
        """Initialize the manager.

        Args:
            config_path: JSON file, defaults to ~/.notechat/config.json
        """
        self._config_path = config_path or (settings.app_data_dir / "config.json")
        self._preferences: Optional[ChatPreferences] = None

    @property
    def config_path(self) -> Path:
        return self._config_path

    @property
    def preferences(self) -> ChatPreferences:
        """Current preferences; the first access reads the file."""
        if self._preferences is None:
            self._preferences = self.load()
        return self._preferences

    def load(self) -> ChatPreferences:
        """Read preferences from disk.

        Returns:
            Stored preferences, or defaults if the file is missing or unreadable
        """
        try:
            data = json.loads(self._config_path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return ChatPreferences()
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Ignoring unreadable config %s: %s", self._config_path, e)
            return ChatPreferences()

        try:
            return preferences_from_dict(data)
        except (TypeError, AttributeError) as e:
            logger.warning("Ignoring malformed config %s: %s", self._config_path, e)
            return ChatPreferences()

    def save(self) -> None:
        """Write the current preferences to disk."""
        self._config_path.parent.mkdir(parents=True, exist_ok=True)
        self._config_path.write_text(
            json.dumps(asdict(self.preferences), indent=2), encoding="utf-8"
        )
        logger.debug("Saved preferences to %s", self._config_path)

    def update_credentials(self, api_key: str, organization_id: str = "") -> None:
        """Store a new API key and organization ID.

        Args:
            api_key: OpenAI API key
            organization_id: Optional organization ID
        """
        self.preferences.api_key = api_key.strip()
        self.preferences.organization_id = organization_id.strip()
        self.save()

    def update_model(self, model_id: str) -> None:
        self.preferences.model = model_id
        self.save()

    def update_vault_path(self, vault_path: str) -> None:
        self.preferences.vault_path = vault_path
        self.save()

    def update_window_state(self, x: int, y: int, width: int, height: int) -> None:
        self.preferences.window = WindowState(x=x, y=y, width=width, height=height)
        self.save()


# Global instance
persistence = PersistenceManager()
