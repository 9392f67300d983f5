"""Unit tests for config.py"""

import pytest

from notemark.config import load_config
from notemark.core.limits import MAX_NESTING_LEVEL


def test_load_config_defaults(tmp_path, monkeypatch):
    """Settings defaults are used when no config.yaml, env var, or CLI override exists."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("NOTEMARK_MAX_NESTING_LEVEL", raising=False)
    settings = load_config()
    assert settings.max_nesting_level == MAX_NESTING_LEVEL
    assert settings.cache_capacity == 50
    assert settings.log_level == "WARNING"


def test_load_config_reads_config_yaml(tmp_path, monkeypatch):
    """Values in config.yaml are applied to settings."""
    monkeypatch.chdir(tmp_path)
    (tmp_path / "config.yaml").write_text("max_table_columns: 8\ncache_capacity: 5\n")
    settings = load_config()
    assert settings.max_table_columns == 8
    assert settings.cache_capacity == 5


def test_load_config_env_max_nesting_level(monkeypatch):
    """NOTEMARK_MAX_NESTING_LEVEL env var is coerced to int and applied to settings."""
    monkeypatch.setenv("NOTEMARK_MAX_NESTING_LEVEL", "3")
    settings = load_config()
    assert settings.max_nesting_level == 3


def test_load_config_env_log_level(monkeypatch):
    """NOTEMARK_LOG_LEVEL env var is applied to settings."""
    monkeypatch.setenv("NOTEMARK_LOG_LEVEL", "DEBUG")
    settings = load_config()
    assert settings.log_level == "DEBUG"


def test_load_config_env_overrides_config_yaml(tmp_path, monkeypatch):
    """NOTEMARK_MAX_NESTING_LEVEL takes precedence over config.yaml."""
    monkeypatch.chdir(tmp_path)
    (tmp_path / "config.yaml").write_text("max_nesting_level: 4\n")
    monkeypatch.setenv("NOTEMARK_MAX_NESTING_LEVEL", "2")
    settings = load_config()
    assert settings.max_nesting_level == 2


def test_load_config_cli_overrides_env(monkeypatch):
    """A non-None CLI override beats the NOTEMARK_MAX_NESTING_LEVEL env var."""
    monkeypatch.setenv("NOTEMARK_MAX_NESTING_LEVEL", "3")
    settings = load_config(overrides={"max_nesting_level": 1})
    assert settings.max_nesting_level == 1


def test_load_config_none_override_is_ignored(monkeypatch):
    """A None CLI override leaves the env value in place."""
    monkeypatch.setenv("NOTEMARK_MAX_NESTING_LEVEL", "3")
    settings = load_config(overrides={"max_nesting_level": None})
    assert settings.max_nesting_level == 3


def test_load_config_invalid_yaml(tmp_path, monkeypatch):
    """load_config raises ValueError when config.yaml contains invalid YAML."""
    monkeypatch.chdir(tmp_path)
    (tmp_path / "config.yaml").write_text("key: [unclosed\n")
    with pytest.raises(ValueError, match="Invalid config.yaml"):
        load_config()


def test_load_config_non_mapping_yaml(tmp_path, monkeypatch):
    """A YAML list at the top level is rejected."""
    monkeypatch.chdir(tmp_path)
    (tmp_path / "config.yaml").write_text("- a\n- b\n")
    with pytest.raises(ValueError, match="expected a mapping"):
        load_config()


@pytest.mark.parametrize("env,value", [
    ("NOTEMARK_MAX_NESTING_LEVEL", "0"),
    ("NOTEMARK_CACHE_CAPACITY", "-1"),
    ("NOTEMARK_LOG_LEVEL", "LOUD"),
])
def test_load_config_rejects_out_of_range_values(monkeypatch, env, value):
    """Validation errors surface as ValueError."""
    monkeypatch.setenv(env, value)
    with pytest.raises(ValueError):
        load_config()
