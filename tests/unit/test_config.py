"""Tests for settings loading and merging."""

from pathlib import Path

import pytest

from rspec_lens.core.config import CONFIG_FILENAME, LensSettings, load_settings
from rspec_lens.core.errors import ConfigError


def test_defaults_without_file(tmp_path: Path) -> None:
    assert load_settings(tmp_path) == LensSettings()


def test_loads_values(tmp_path: Path) -> None:
    (tmp_path / CONFIG_FILENAME).write_text('rspec_command = "bin/dc rspec"\ndebug = true\n')
    settings = load_settings(tmp_path)
    assert settings.rspec_command == "bin/dc rspec"
    assert settings.debug is True


def test_invalid_toml(tmp_path: Path) -> None:
    (tmp_path / CONFIG_FILENAME).write_text("rspec_command = \n")
    with pytest.raises(ConfigError) as exc_info:
        load_settings(tmp_path)
    assert CONFIG_FILENAME in str(exc_info.value)


def test_wrong_types(tmp_path: Path) -> None:
    (tmp_path / CONFIG_FILENAME).write_text("rspec_command = 3\n")
    with pytest.raises(ConfigError, match="rspec_command must be a string"):
        load_settings(tmp_path)

    (tmp_path / CONFIG_FILENAME).write_text('debug = "yes"\n')
    with pytest.raises(ConfigError, match="debug must be true or false"):
        load_settings(tmp_path)


class TestMerged:
    def test_editor_options_override(self) -> None:
        base = LensSettings(rspec_command="rspec", debug=False)
        merged = base.merged({"rspecCommand": "bin/rspec", "debug": True})
        assert merged == LensSettings(rspec_command="bin/rspec", debug=True)

    def test_none_and_unknown_keys_ignored(self) -> None:
        base = LensSettings(rspec_command="rspec", debug=True)
        assert base.merged({"rspecCommand": None, "enabled": False}) == base

    def test_empty_options(self) -> None:
        base = LensSettings(debug=True)
        assert base.merged(None) is base
        assert base.merged({}) is base
