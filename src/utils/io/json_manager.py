"""Module for reading JSON configuration files (grouping overrides)."""

import json
import os
from typing import Any, Dict, Optional

from src.utils.io.logger import Logger


class JsonManager:
    """Class for handling JSON file operations."""

    @staticmethod
    def exists(filepath: str) -> bool:
        """Check if a file exists at the given path."""
        return os.path.exists(filepath)

    @staticmethod
    def load(filepath: Optional[str]) -> Any:
        """Load JSON data from a file, returning ``None`` on any failure."""
        if not filepath or not filepath.strip():
            Logger.error("filepath is empty")
            return None
        if not JsonManager.exists(filepath):
            Logger.warning(f"File not found: {filepath}")
            return None
        try:
            with open(filepath, "r", encoding="utf-8") as file:
                return json.load(file)
        except (OSError, TypeError, json.JSONDecodeError) as e:
            Logger.error(f"Error loading JSON file {filepath}: {e}")
            return None

    @staticmethod
    def load_dict(
        filepath: Optional[str], section: Optional[str] = None
    ) -> Dict[str, Any]:
        """Load a JSON object (optionally one of its *section* keys) as a dict.

        Missing files, decode errors and non-object payloads yield an empty dict.
        """
        data = JsonManager.load(filepath)
        if data is None:
            return {}
        if section is not None and isinstance(data, dict):
            data = data.get(section, {})
        if not isinstance(data, dict):
            Logger.warning(
                f"Expected a JSON object in {filepath}, got {type(data).__name__}"
            )
            return {}
        return data
