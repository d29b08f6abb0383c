import os

import pytest

from activities_api import config
from activities_api.db import get_db_path


@pytest.fixture()
def cfg_file(tmp_path, monkeypatch):
    path = tmp_path / "config.yaml"
    monkeypatch.setenv("ACTIVITIES_CONFIG", str(path))
    return path


def test_defaults_when_file_missing(cfg_file):
    cfg = config.read_config_yaml()
    assert cfg["log_level"] == "INFO"
    assert cfg["db_path"] is None
    assert cfg["cors_origins"]


def test_yaml_values_override_defaults(cfg_file):
    cfg_file.write_text(
        "db_path: /tmp/a.db\nlog_level: debug\ncors_origins:\n  - http://example.test\n",
        encoding="utf-8",
    )
    cfg = config.read_config_yaml()
    assert cfg["db_path"] == "/tmp/a.db"
    assert cfg["log_level"] == "debug"
    assert cfg["cors_origins"] == ["http://example.test"]


def test_invalid_yaml_falls_back(cfg_file):
    cfg_file.write_text("db_path: [unclosed\n", encoding="utf-8")
    assert config.read_config_yaml()["db_path"] is None
    cfg_file.write_text("- just\n- a list\n", encoding="utf-8")
    assert config.read_config_yaml()["db_path"] is None


def test_log_level_env_wins(cfg_file, monkeypatch):
    cfg_file.write_text("log_level: warning\n", encoding="utf-8")
    assert config.get_log_level() == "WARNING"
    monkeypatch.setenv("ACTIVITIES_LOG_LEVEL", "debug")
    assert config.get_log_level() == "DEBUG"


def test_db_path_precedence(cfg_file, tmp_path, monkeypatch):
    prod = tmp_path / "prod" / "prod.db"
    test = tmp_path / "test" / "test.db"
    cfg_file.write_text(f"db_path: {prod}\ntest_db_path: {test}\n", encoding="utf-8")

    env_db = tmp_path / "env" / "env.db"
    monkeypatch.setenv("ACTIVITIES_DB_PATH", str(env_db))
    assert get_db_path() == str(env_db)
    assert os.path.isdir(env_db.parent)

    monkeypatch.delenv("ACTIVITIES_DB_PATH")
    # PYTEST_CURRENT_TEST is set while tests run
    assert get_db_path() == str(test)

    monkeypatch.delenv("PYTEST_CURRENT_TEST")
    monkeypatch.delenv("APP_ENV", raising=False)
    assert get_db_path() == str(prod)
