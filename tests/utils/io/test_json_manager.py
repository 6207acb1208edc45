"""Unit tests for the JsonManager utility module.

These tests verify loading JSON configuration files and the handling of
missing files, malformed payloads and non-object documents."""

import json
from unittest.mock import patch

import pytest  # type: ignore

from src.utils.io.json_manager import JsonManager


@pytest.fixture
def config_file(tmp_path):
    """Fixture writing a grouping configuration file."""
    filepath = tmp_path / "grouping.json"
    filepath.write_text(
        json.dumps({"grouping": {"forced": True, "levels": ["day"]}}),
        encoding="utf-8",
    )
    return filepath


# pylint: disable=redefined-outer-name
def test_load_json(config_file):
    """Loading an existing file returns its content."""
    data = JsonManager.load(str(config_file))
    if data != {"grouping": {"forced": True, "levels": ["day"]}}:
        raise AssertionError(f"Unexpected data {data}")


def test_load_file_not_found(tmp_path):
    """Loading a missing file returns None and warns."""
    filepath = tmp_path / "not_exists.json"
    with patch("src.utils.io.logger.Logger.warning") as mock_warning:
        result = JsonManager.load(str(filepath))
    if result is not None:
        raise AssertionError("Expected None for non-existent file")
    mock_warning.assert_called_once()


def test_load_json_decode_error(tmp_path):
    """A malformed file is reported and yields None."""
    filepath = tmp_path / "malformed.json"
    filepath.write_text("{ invalid json ")
    with patch("src.utils.io.logger.Logger.error") as mock_error:
        result = JsonManager.load(str(filepath))
    if result is not None:
        raise AssertionError("Expected load to return None for malformed JSON")
    mock_error.assert_called_once()


@pytest.mark.parametrize("invalid_path", [None, "", "   "])
def test_load_with_empty_path(invalid_path):
    """An empty path logs an error and returns None."""
    with patch("src.utils.io.logger.Logger.error") as mock_error:
        result = JsonManager.load(invalid_path)
    if result is not None:
        raise AssertionError("Expected None when filepath is invalid.")
    mock_error.assert_called_once_with("filepath is empty")


def test_load_dict_section(config_file):
    """A named section of the document is returned."""
    section = JsonManager.load_dict(str(config_file), "grouping")
    if section != {"forced": True, "levels": ["day"]}:
        raise AssertionError(f"Unexpected section {section}")
    if JsonManager.load_dict(str(config_file), "missing") != {}:
        raise AssertionError("A missing section should yield an empty dict")


def test_load_dict_rejects_non_objects(tmp_path):
    """A top-level array yields an empty dict with a warning."""
    filepath = tmp_path / "array.json"
    filepath.write_text("[1, 2, 3]")
    with patch("src.utils.io.logger.Logger.warning") as mock_warning:
        result = JsonManager.load_dict(str(filepath))
    if result != {}:
        raise AssertionError("Expected an empty dict for a JSON array")
    mock_warning.assert_called_once()
