"""Unit tests for config.py"""

import pytest
from pydantic import ValidationError

from slidemark.config import Settings, load_config


@pytest.fixture(autouse=True)
def chdir_tmp(tmp_path, monkeypatch):
    """Run each test from an empty directory so no config.yaml is picked up."""
    monkeypatch.chdir(tmp_path)


def test_load_config_defaults(monkeypatch):
    """Settings defaults apply when no config.yaml, env var, or CLI override exists."""
    monkeypatch.delenv("SLIDEMARK_MAX_LEVEL", raising=False)
    settings = load_config()
    assert settings.max_level == 2
    assert settings.short_item_length == 80
    assert settings.output_format == "json"


def test_load_config_reads_config_yaml(tmp_path):
    (tmp_path / "config.yaml").write_text("short_item_length: 120\noutput_format: yaml\n")
    settings = load_config()
    assert settings.short_item_length == 120
    assert settings.output_format == "yaml"


def test_load_config_env_overrides_config_yaml(tmp_path, monkeypatch):
    """SLIDEMARK_MAX_LEVEL takes precedence over config.yaml and is coerced to int."""
    (tmp_path / "config.yaml").write_text("max_level: 1\n")
    monkeypatch.setenv("SLIDEMARK_MAX_LEVEL", "3")
    assert load_config().max_level == 3


def test_load_config_cli_overrides_env(monkeypatch):
    """A non-None CLI override beats the env var; None overrides are ignored."""
    monkeypatch.setenv("SLIDEMARK_OUTPUT_DIR", "env-out")
    assert load_config(overrides={"output_dir": "cli-out"}).output_dir == "cli-out"
    assert load_config(overrides={"output_dir": None}).output_dir == "env-out"


def test_load_config_invalid_yaml(tmp_path):
    """load_config raises ValueError when config.yaml contains invalid YAML."""
    (tmp_path / "config.yaml").write_text("key: [unclosed\n")
    with pytest.raises(ValueError, match="Invalid config.yaml"):
        load_config()


def test_load_config_non_mapping_yaml(tmp_path):
    (tmp_path / "config.yaml").write_text("- just\n- a list\n")
    with pytest.raises(ValueError, match="expected a mapping"):
        load_config()


def test_empty_config_yaml_uses_defaults(tmp_path):
    (tmp_path / "config.yaml").write_text("")
    assert load_config() == Settings()


@pytest.mark.parametrize("field, value", [
    ("max_level", 0),
    ("max_level", 7),
    ("output_format", "xml"),
    ("short_item_length", 0),
])
def test_settings_reject_out_of_range_values(field, value):
    with pytest.raises(ValidationError):
        Settings(**{field: value})
