"""Per-user editor settings.

Settings live in a JSON file in the user's config directory. Missing or
invalid entries fall back to the defaults in EditorConstants; a broken
settings file never stops the editor from starting.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import platformdirs

from .constants import EditorConstants

logger = logging.getLogger(__name__)


@dataclass
class EditorSettings:
    quit_times: int = EditorConstants.QUIT_TIMES
    status_message_seconds: float = EditorConstants.STATUS_MESSAGE_SECONDS


class SettingsPersistence:
    """Loads and saves EditorSettings as JSON."""

    def __init__(self, config_dir: Optional[Path] = None):
        """Initialize settings persistence.

        Args:
            config_dir: Directory holding config.json. Defaults to the
                platform config directory for rowedit.
        """
        if config_dir is None:
            config_dir = Path(platformdirs.user_config_dir("rowedit"))
        self._config_dir = Path(config_dir)
        self._settings_file = self._config_dir / "config.json"

    @property
    def settings_file(self) -> Path:
        return self._settings_file

    def _load_raw(self) -> Dict[str, Any]:
        if not self._settings_file.exists():
            return {}
        try:
            with open(self._settings_file, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.warning(f"Could not load settings from {self._settings_file}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning("Settings file has invalid format (not a dict), ignoring")
            return {}
        return data

    @staticmethod
    def validate_setting(key: str, value: Any) -> bool:
        """Return True if value is acceptable for the given setting."""
        if key == 'quit_times':
            # bool is an int subclass; reject it explicitly
            return isinstance(value, int) and not isinstance(value, bool) and 1 <= value <= 10
        if key == 'status_message_seconds':
            return (isinstance(value, (int, float)) and not isinstance(value, bool)
                    and value > 0)
        return False

    def load(self) -> EditorSettings:
        """Load settings, skipping unknown keys and invalid values."""
        settings = EditorSettings()
        for key, value in self._load_raw().items():
            if not hasattr(settings, key):
                logger.warning(f"Unknown setting {key!r}, ignoring")
                continue
            if not self.validate_setting(key, value):
                logger.warning(f"Invalid value for {key}: {value!r}, using default")
                continue
            setattr(settings, key, value)
        return settings

    def save(self, settings: EditorSettings) -> bool:
        """Save settings atomically.

        Returns:
            True if save was successful, False otherwise.
        """
        try:
            self._config_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.warning(f"Could not create config directory {self._config_dir}: {e}")
            return False

        temp_file = self._settings_file.with_suffix('.tmp')
        data = {
            'quit_times': settings.quit_times,
            'status_message_seconds': settings.status_message_seconds,
        }
        try:
            with open(temp_file, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=2)
            temp_file.replace(self._settings_file)
            return True
        except OSError as e:
            logger.warning(f"Could not save settings to {self._settings_file}: {e}")
            try:
                if temp_file.exists():
                    temp_file.unlink()
            except OSError:
                logger.debug(f"Could not remove {temp_file}")
            return False


def get_settings() -> EditorSettings:
    """Load settings from the default location."""
    return SettingsPersistence().load()
