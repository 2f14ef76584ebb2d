"""
PdfMerger - Preferences Store

This module provides JSON-based storage for user preferences.
A missing or unreadable preferences file is never an error: defaults are used.
"""

import copy
import json
import os
from typing import Any, Final

from pdfmerger.config import DEFAULT_OUTPUT_NAME, PREFERENCES_PATH, THUMBNAIL_SCALE
from pdfmerger.utils.logger import logger

# Default preference values
DEFAULT_PREFERENCES: Final[dict[str, Any]] = {
    "version": 1,
    "output": {
        "default_name": DEFAULT_OUTPUT_NAME,
    },
    "thumbnails": {
        "scale": THUMBNAIL_SCALE,
    },
}


class Preferences:
    """Manages user preferences in JSON format.

    Values are addressed by dot-separated paths such as ``"thumbnails.scale"``.
    """

    def __init__(self, path: str | None = None) -> None:
        """Initialize the preferences store.

        Args:
            path: Optional path to the preferences file.
                  Defaults to PREFERENCES_PATH.
        """
        self.path = path or PREFERENCES_PATH
        self._data: dict[str, Any] = {}
        self.load()

    def load(self) -> None:
        """Load preferences from disk, falling back to defaults."""
        self._data = copy.deepcopy(DEFAULT_PREFERENCES)

        if not os.path.exists(self.path):
            return

        try:
            with open(self.path, encoding="utf-8") as f:
                stored = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Ignoring invalid preferences file {self.path}: {e}")
            return

        if not isinstance(stored, dict):
            logger.warning(f"Ignoring preferences file {self.path}: not a JSON object")
            return

        self._merge(self._data, stored)
        logger.debug("Preferences loaded")

    def _merge(self, target: dict, stored: dict) -> None:
        """Overlay stored values onto the defaults, recursing into sections."""
        for key, value in stored.items():
            if isinstance(value, dict) and isinstance(target.get(key), dict):
                self._merge(target[key], value)
            else:
                target[key] = value

    def save(self) -> bool:
        """Save preferences to disk.

        Returns:
            True if save was successful, False otherwise.
        """
        try:
            os.makedirs(os.path.dirname(self.path) or ".", exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(self._data, f, indent=2, ensure_ascii=False)
            logger.debug("Preferences saved")
            return True
        except OSError as e:
            logger.error(f"Error saving preferences: {e}")
            return False

    def get(self, key_path: str, default: Any = None) -> Any:
        """Get a preference value by dot-separated path.

        Args:
            key_path: Dot-separated path (e.g., "output.default_name")
            default: Value returned when the path does not exist

        Returns:
            Stored value or default
        """
        value: Any = self._data
        for key in key_path.split("."):
            if isinstance(value, dict) and key in value:
                value = value[key]
            else:
                return default
        return value

    def set(self, key_path: str, value: Any, save_immediately: bool = True) -> None:
        """Set a preference value by dot-separated path.

        Args:
            key_path: Dot-separated path to the value
            value: Value to store
            save_immediately: Whether to write the file right away
        """
        keys = key_path.split(".")
        section = self._data
        for key in keys[:-1]:
            if not isinstance(section.get(key), dict):
                section[key] = {}
            section = section[key]
        section[keys[-1]] = value

        if save_immediately:
            self.save()

    def as_dict(self) -> dict[str, Any]:
        """Return a deep copy of all preference values."""
        return copy.deepcopy(self._data)


_preferences: Preferences | None = None


def get_preferences() -> Preferences:
    """Get the shared preferences instance, loading it on first use."""
    global _preferences
    if _preferences is None:
        _preferences = Preferences()
    return _preferences
