"""Tests for environment-driven configuration."""

from src.core.config import AppConfig, config


def test_singleton():
    assert AppConfig() is config


def test_defaults():
    assert config.api_base_path == "/api"
    assert config.connection_default_cut is None
    assert config.validate() == []


def test_reload_reads_environment(monkeypatch):
    monkeypatch.setenv("API_BASE_PATH", "/data/")
    monkeypatch.setenv("CONNECTION_DEFAULT_CUT", '{"year": 2020}')
    config.reload()
    assert config.to_dict() == {
        "api_base_path": "/data",
        "connection_default_cut": {"year": 2020},
        "log_level": "INFO",
    }


def test_invalid_default_cut_is_ignored(monkeypatch, caplog):
    monkeypatch.setenv("CONNECTION_DEFAULT_CUT", "[1, 2]")
    config.reload()
    assert config.connection_default_cut is None
    assert "must be a JSON object" in caplog.text

    monkeypatch.setenv("CONNECTION_DEFAULT_CUT", "{not json")
    config.reload()
    assert config.connection_default_cut is None


def test_validate_reports_issues(monkeypatch):
    monkeypatch.setenv("API_BASE_PATH", "api")
    monkeypatch.setenv("LOG_LEVEL", "LOUD")
    config.reload()
    assert len(config.validate()) == 2
