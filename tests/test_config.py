"""Tests for configuration loading."""

from pathlib import Path
from cfinventory.config import Config, DEFAULT_IGNORED_DIRS, DEFAULT_ENCODINGS


def test_config_from_env_overrides(monkeypatch, tmp_path):
    """Environment variables should override defaults."""
    monkeypatch.setenv("MAX_WORKERS", "8")
    monkeypatch.setenv("OUTPUT_DIR", str(tmp_path / "reports"))
    monkeypatch.setenv("IGNORED_DIRS", "WEB-INF,archive")

    config = Config.from_env()

    assert config.max_workers == 8
    assert Path(config.output_dir) == tmp_path / "reports"

    # Ensure new ignored directories are appended to defaults
    assert set(DEFAULT_IGNORED_DIRS).issubset(set(config.ignored_dirs))
    assert "WEB-INF" in config.ignored_dirs
    assert "archive" in config.ignored_dirs


def test_config_from_env_invalid_workers_falls_back(monkeypatch):
    monkeypatch.setenv("MAX_WORKERS", "lots")
    assert Config.from_env().max_workers == 4

    monkeypatch.setenv("MAX_WORKERS", "0")
    assert Config.from_env().max_workers == 4


def test_config_defaults():
    config = Config()

    assert config.encodings == DEFAULT_ENCODINGS
    assert config.encodings[0] == "utf-8"
    assert "cache" in config.ignored_dirs
    assert config.respect_gitignore is False


def test_is_template_is_case_insensitive():
    config = Config()

    assert config.is_template("cfm")
    assert config.is_template(".CFC")
    assert config.is_template("CfMl")
    assert not config.is_template("html")
    assert not config.is_template("")
