"""Unit tests for the ParameterLoader configuration manager."""

import json
from unittest.mock import patch

import pytest  # type: ignore

from src.utils.config.parameters import DEFAULT_GROUPING_LEVELS, ParameterLoader

_ENV_KEYS = (
    "GROUPING_CONFIG_FILEPATH",
    "GROUPING_ENABLED",
    "GROUPING_FORCED",
    "GROUPING_MAX_VISIBLE_POINTS",
    "GROUPING_MIN_PIXELS_PER_POINT",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Remove grouping variables and skip reading any local .env file."""
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    with patch("src.utils.config.parameters.load_dotenv"):
        yield


@pytest.fixture
def config_file(tmp_path):
    """Grouping configuration switching to pixels-per-point mode."""
    filepath = tmp_path / "grouping.json"
    filepath.write_text(
        json.dumps(
            {
                "grouping": {
                    "forced": True,
                    "levels": [{"unit": "day", "count": 1}],
                    "min_pixels_per_point": 3,
                }
            }
        ),
        encoding="utf-8",
    )
    return str(filepath)


def test_defaults():
    """Without overrides the constant defaults apply."""
    loader = ParameterLoader()
    if loader["grouping_enabled"] is not True or loader["grouping_forced"] is not False:
        raise AssertionError("Expected enabled=True and forced=False")
    if loader["grouping_max_visible_points"] != 500:
        raise AssertionError("Expected 500 max visible points")
    if loader["grouping_min_pixels_per_point"] is not None:
        raise AssertionError("Expected no pixels-per-point setting")
    if loader["grouping_levels"] != DEFAULT_GROUPING_LEVELS:
        raise AssertionError("Expected the default level ladder")
    if loader["grouping_levels"] is DEFAULT_GROUPING_LEVELS:
        raise AssertionError("Levels must be copied, not shared")


def test_default_levels_ladder():
    """The default ladder spans 1 millisecond to 100 years."""
    if len(DEFAULT_GROUPING_LEVELS) != 43:
        raise AssertionError(f"Unexpected ladder size {len(DEFAULT_GROUPING_LEVELS)}")
    if DEFAULT_GROUPING_LEVELS[0] != {"unit": "millisecond", "count": 1}:
        raise AssertionError("Ladder should start at 1 millisecond")
    if DEFAULT_GROUPING_LEVELS[-1] != {"unit": "year", "count": 100}:
        raise AssertionError("Ladder should end at 100 years")


def test_get_and_contains():
    """Dictionary-style helpers behave like a mapping."""
    loader = ParameterLoader()
    if loader.get("non_existent_key") is not None:
        raise AssertionError("Expected None for missing key")
    if loader.get("non_existent_key", default="default_value") != "default_value":
        raise AssertionError("Expected default_value for missing key with default")
    if "grouping_levels" not in loader or "non_existent_key" in loader:
        raise AssertionError("Unexpected membership result")
    with pytest.raises(KeyError):
        _ = loader["non_existent_key"]


def test_env_overrides(monkeypatch):
    """Environment variables override defaults; one density knob clears the other."""
    monkeypatch.setenv("GROUPING_ENABLED", "no")
    monkeypatch.setenv("GROUPING_FORCED", "TRUE")
    monkeypatch.setenv("GROUPING_MIN_PIXELS_PER_POINT", "2.5")
    loader = ParameterLoader()
    if loader["grouping_enabled"] is not False:
        raise AssertionError("GROUPING_ENABLED=no should disable grouping")
    if loader["grouping_forced"] is not True:
        raise AssertionError("GROUPING_FORCED=TRUE should force grouping")
    if loader["grouping_min_pixels_per_point"] != 2.5:
        raise AssertionError("Expected 2.5 pixels per point")
    if loader["grouping_max_visible_points"] is not None:
        raise AssertionError("Max visible points should be cleared")


def test_invalid_env_values_are_ignored(monkeypatch):
    """Unparseable values are logged and ignored."""
    monkeypatch.setenv("GROUPING_FORCED", "maybe")
    monkeypatch.setenv("GROUPING_MAX_VISIBLE_POINTS", "lots")
    with patch("src.utils.io.logger.Logger.warning") as mock_warning:
        loader = ParameterLoader()
    if loader["grouping_forced"] is not False:
        raise AssertionError("Invalid boolean should keep the default")
    if loader["grouping_max_visible_points"] != 500:
        raise AssertionError("Invalid number should keep the default")
    if mock_warning.call_count != 2:
        raise AssertionError(f"Expected 2 warnings, got {mock_warning.call_count}")


# pylint: disable=redefined-outer-name
def test_config_file_overrides(config_file):
    """The grouping section of the config file overrides defaults."""
    with patch("src.utils.io.logger.Logger.success") as mock_success:
        loader = ParameterLoader(config_filepath=config_file)
    mock_success.assert_called_once()
    if loader["grouping_forced"] is not True:
        raise AssertionError("Config file should force grouping")
    if loader["grouping_levels"] != [{"unit": "day", "count": 1}]:
        raise AssertionError("Config file levels should replace defaults")
    if loader["grouping_min_pixels_per_point"] != 3:
        raise AssertionError("Expected 3 pixels per point")
    if loader["grouping_max_visible_points"] is not None:
        raise AssertionError("Max visible points should be cleared")


def test_env_wins_over_config_file(monkeypatch, config_file):
    """Environment variables are applied after the config file."""
    monkeypatch.setenv("GROUPING_CONFIG_FILEPATH", config_file)
    monkeypatch.setenv("GROUPING_MAX_VISIBLE_POINTS", "250")
    loader = ParameterLoader()
    if loader.config_filepath != config_file:
        raise AssertionError("Config path should come from the environment")
    if loader["grouping_max_visible_points"] != 250:
        raise AssertionError("Expected 250 max visible points from env")
    if loader["grouping_min_pixels_per_point"] is not None:
        raise AssertionError("Pixels per point should be cleared by env")


def test_missing_config_file_is_ignored(tmp_path):
    """A missing config file keeps the defaults."""
    with patch("src.utils.io.logger.Logger.warning") as mock_warning:
        loader = ParameterLoader(config_filepath=str(tmp_path / "missing.json"))
    mock_warning.assert_called_once()
    if loader["grouping_max_visible_points"] != 500:
        raise AssertionError("Defaults should apply without a config file")
