"""Settings persistence for editor preferences.

Preferences are stored as JSON in an OS-appropriate config location and
survive application restarts. Documents themselves are never stored here.
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

import platformdirs

from .constants import EditorConstants

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EditorSettings:
    """Preferences that change how a session behaves."""
    # Start every session with a HEADING1 title line
    title_first_line: bool = False
    # Merge touching same-kind ranges after every edit and command
    coalesce_ranges: bool = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EditorSettings":
        """Build settings from stored values, ignoring unknown or invalid keys."""
        known = {f.name for f in fields(cls)}
        values = {}
        for key, value in data.items():
            if key not in known:
                continue
            if not isinstance(value, bool):
                logger.warning(f"Ignoring setting {key}={value!r}: expected true or false")
                continue
            values[key] = value
        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class SettingsPersistence:
    """Manages persistent storage of editor settings.

    Settings are stored in a JSON file in the user's config directory.
    """

    def __init__(self, config_dir: Optional[Path] = None):
        """Initialize settings persistence.

        Args:
            config_dir: Directory holding the settings file. Defaults to the
                platform's user config directory.
        """
        self._config_dir = config_dir or Path(
            platformdirs.user_config_dir(EditorConstants.CONFIG_APP_NAME, EditorConstants.CONFIG_APP_AUTHOR)
        )
        self._settings_file = self._config_dir / EditorConstants.SETTINGS_FILENAME
        self._settings_cache: Optional[Dict[str, Any]] = None

    @property
    def settings_file(self) -> Path:
        return self._settings_file

    def _ensure_config_dir(self) -> None:
        """Ensure the config directory exists."""
        try:
            self._config_dir.mkdir(parents=True, exist_ok=True)
        except (OSError, PermissionError) as e:
            logger.warning(f"Could not create config directory {self._config_dir}: {e}")

    def load_settings(self) -> Dict[str, Any]:
        """Load raw settings from disk.

        Returns:
            Dictionary of stored settings. Empty if the file doesn't exist
            or can't be read.
        """
        if self._settings_cache is not None:
            return self._settings_cache.copy()

        if not self._settings_file.exists():
            self._settings_cache = {}
            return {}

        try:
            with open(self._settings_file, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError, PermissionError) as e:
            logger.warning(f"Could not load settings from {self._settings_file}: {e}")
            self._settings_cache = {}
            return {}

        if not isinstance(data, dict):
            logger.warning("Settings file has invalid format (not a dict), ignoring")
            data = {}
        self._settings_cache = data
        return data.copy()

    def save_settings(self, settings: Dict[str, Any]) -> bool:
        """Save settings to disk atomically.

        Args:
            settings: Dictionary of settings to save.

        Returns:
            True if save was successful, False otherwise.
        """
        self._ensure_config_dir()

        # Write a temp file next to the target, then rename over it
        temp_file = self._settings_file.with_suffix('.tmp')
        try:
            with open(temp_file, 'w', encoding='utf-8') as f:
                json.dump(settings, f, indent=2)
            temp_file.replace(self._settings_file)
            self._settings_cache = dict(settings)
            return True
        except (OSError, PermissionError) as e:
            logger.warning(f"Could not save settings to {self._settings_file}: {e}")
            try:
                if temp_file.exists():
                    temp_file.unlink()
            except OSError:
                pass
            return False

    def validate_setting(self, key: str, value: Any) -> bool:
        """Validate a setting value.

        Args:
            key: Setting key name.
            value: Setting value to validate.

        Returns:
            True if setting is valid, False otherwise.
        """
        if value is None:
            return True  # None means "not set"

        if key in ('title_first_line', 'coalesce_ranges'):
            return isinstance(value, bool)

        # Unknown settings are considered valid (forward compatibility)
        return True

    def load_editor_settings(self) -> EditorSettings:
        return EditorSettings.from_dict(self.load_settings())

    def save_editor_settings(self, settings: EditorSettings) -> bool:
        stored = self.load_settings()
        stored.update(settings.to_dict())
        return self.save_settings(stored)

    def clear_cache(self) -> None:
        """Clear the in-memory cache of settings."""
        self._settings_cache = None


# Global instance
_persistence: Optional[SettingsPersistence] = None


def get_persistence() -> SettingsPersistence:
    """Get the global settings persistence instance.

    Returns:
        The singleton SettingsPersistence instance.
    """
    global _persistence
    if _persistence is None:
        _persistence = SettingsPersistence()
    return _persistence
