"""Unit tests for config.py"""

import pytest

from sitemanifest.config import load_config


def test_load_config_defaults(tmp_path, monkeypatch):
    """Settings defaults apply when no config.yaml, env var, or CLI override exists."""
    monkeypatch.chdir(tmp_path)
    settings = load_config()
    assert settings.manifest_path == "manifest.json"
    assert settings.strict is True
    assert settings.precedence == "last"
    assert settings.read_attempts == 3


def test_load_config_reads_config_yaml(tmp_path, monkeypatch):
    """Values in config.yaml override defaults."""
    monkeypatch.chdir(tmp_path)
    (tmp_path / "config.yaml").write_text("precedence: first\nread_workers: 2\n")
    settings = load_config()
    assert settings.precedence == "first"
    assert settings.read_workers == 2


def test_load_config_env_overrides_config_yaml(tmp_path, monkeypatch):
    """SITEMANIFEST_MANIFEST_PATH takes precedence over config.yaml."""
    monkeypatch.chdir(tmp_path)
    (tmp_path / "config.yaml").write_text("manifest_path: from-yaml.json\n")
    monkeypatch.setenv("SITEMANIFEST_MANIFEST_PATH", "from-env.json")
    settings = load_config()
    assert settings.manifest_path == "from-env.json"


def test_load_config_cli_overrides_env(tmp_path, monkeypatch):
    """A non-None CLI override beats the env var; None overrides are ignored."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("SITEMANIFEST_READ_WORKERS", "8")
    settings = load_config(overrides={"read_workers": 1, "precedence": None})
    assert settings.read_workers == 1
    assert settings.precedence == "last"


@pytest.mark.parametrize("name,value,field,expected", [
    ("SITEMANIFEST_STRICT", "false", "strict", False),
    ("SITEMANIFEST_READ_ATTEMPTS", "5", "read_attempts", 5),
    ("SITEMANIFEST_READ_TIMEOUT", "2.5", "read_timeout", 2.5),
    ("SITEMANIFEST_LOG_LEVEL", "DEBUG", "log_level", "DEBUG"),
])
def test_load_config_env_coercion(tmp_path, monkeypatch, name, value, field, expected):
    """Env var strings are coerced to the field type."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv(name, value)
    assert getattr(load_config(), field) == expected


def test_load_config_invalid_yaml(tmp_path, monkeypatch):
    """load_config raises ValueError when config.yaml contains invalid YAML."""
    monkeypatch.chdir(tmp_path)
    (tmp_path / "config.yaml").write_text("key: [unclosed\n")
    with pytest.raises(ValueError, match="Invalid config.yaml"):
        load_config()


def test_load_config_rejects_unknown_precedence(tmp_path, monkeypatch):
    """precedence must be 'first' or 'last'."""
    monkeypatch.chdir(tmp_path)
    with pytest.raises(ValueError):
        load_config(overrides={"precedence": "newest"})


def test_load_config_rejects_zero_attempts(tmp_path, monkeypatch):
    """read_attempts must be at least 1."""
    monkeypatch.chdir(tmp_path)
    with pytest.raises(ValueError):
        load_config(overrides={"read_attempts": 0})
