"""Central configuration manager.

This module loads the grouping parameters from three layers, each one
overriding the previous: constant defaults, an optional JSON file whose path is
given by ``GROUPING_CONFIG_FILEPATH`` (its ``grouping`` section), and
environment variables (``GROUPING_ENABLED``, ``GROUPING_FORCED``,
``GROUPING_MAX_VISIBLE_POINTS``, ``GROUPING_MIN_PIXELS_PER_POINT``). A ``.env``
file is honoured through python-dotenv.
"""

import copy
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv

from src.utils.io.json_manager import JsonManager
from src.utils.io.logger import Logger

DEFAULT_GROUPING_LEVELS: List[Dict[str, Any]] = [
    {"unit": "millisecond", "count": count}
    for count in (1, 2, 5, 10, 25, 50, 100, 250, 500)
] + [
    {"unit": "second", "count": count} for count in (1, 2, 5, 10, 15, 30)
] + [
    {"unit": "minute", "count": count} for count in (1, 2, 5, 10, 15, 30)
] + [
    {"unit": "hour", "count": count} for count in (1, 2, 3, 4, 6, 12)
] + [
    {"unit": "day", "count": count} for count in (1, 2)
] + [
    {"unit": "week", "count": count} for count in (1, 2)
] + [
    {"unit": "month", "count": count} for count in (1, 2, 3, 6)
] + [
    {"unit": "year", "count": count} for count in (1, 2, 3, 5, 10, 20, 50, 100)
]


class ParameterLoader:
    """Centralized configuration manager for the grouping parameters."""

    _ENV_FILEPATH = ".env"
    _CONFIG_SECTION = "grouping"
    _TRUE_VALUES = ("1", "true", "yes", "on")
    _FALSE_VALUES = ("0", "false", "no", "off")

    def __init__(self, config_filepath: Optional[str] = None):
        self.env_filepath = Path(ParameterLoader._ENV_FILEPATH)
        load_dotenv(dotenv_path=self.env_filepath)
        if config_filepath is None:
            config_filepath = os.getenv("GROUPING_CONFIG_FILEPATH")
        self.config_filepath: Optional[str] = config_filepath
        self._parameters: Dict[str, Any] = self._initialize_parameters()

    def _initialize_parameters(self) -> Dict[str, Any]:
        """Merge constant defaults, the JSON file and environment overrides."""
        parameters: Dict[str, Any] = {
            "grouping_enabled": True,
            "grouping_forced": False,
            "grouping_levels": copy.deepcopy(DEFAULT_GROUPING_LEVELS),
            "grouping_max_visible_points": 500,
            "grouping_min_pixels_per_point": None,
        }
        ParameterLoader._merge(parameters, self._file_parameters())
        ParameterLoader._merge(parameters, self._env_parameters())
        return parameters

    @staticmethod
    def _merge(parameters: Dict[str, Any], layer: Dict[str, Any]) -> None:
        """Apply *layer*; a density knob it sets clears the other one."""
        density_keys = ("grouping_max_visible_points", "grouping_min_pixels_per_point")
        given = [key for key in density_keys if layer.get(key) is not None]
        if len(given) == 1:
            for key in density_keys:
                parameters[key] = None
        parameters.update(layer)

    def _file_parameters(self) -> Dict[str, Any]:
        if not self.config_filepath:
            return {}
        section = JsonManager.load_dict(
            self.config_filepath, ParameterLoader._CONFIG_SECTION
        )
        result = {f"grouping_{key}": value for key, value in section.items()}
        if result:
            Logger.success(f"Grouping configuration loaded from {self.config_filepath}")
        return result

    def _env_parameters(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {}
        for key in ("enabled", "forced"):
            value = ParameterLoader._env_bool(f"GROUPING_{key.upper()}")
            if value is not None:
                result[f"grouping_{key}"] = value
        for key in ("max_visible_points", "min_pixels_per_point"):
            value = ParameterLoader._env_float(f"GROUPING_{key.upper()}")
            if value is not None:
                result[f"grouping_{key}"] = value
        return result

    @staticmethod
    def _env_bool(name: str) -> Optional[bool]:
        raw = os.getenv(name)
        if raw is None or not raw.strip():
            return None
        value = raw.strip().lower()
        if value in ParameterLoader._TRUE_VALUES:
            return True
        if value in ParameterLoader._FALSE_VALUES:
            return False
        Logger.warning(f"Ignoring invalid boolean for {name}: {raw}")
        return None

    @staticmethod
    def _env_float(name: str) -> Optional[float]:
        raw = os.getenv(name)
        if raw is None or not raw.strip():
            return None
        try:
            return float(raw)
        except ValueError:
            Logger.warning(f"Ignoring invalid number for {name}: {raw}")
            return None

    def get(self, key: str, default: Any = None) -> Any:
        """Return the parameter *key*, or *default* when it is not defined."""
        return self._parameters.get(key, default)

    def __getitem__(self, key: str) -> Any:
        return self._parameters[key]

    def __contains__(self, key: str) -> bool:
        return key in self._parameters
