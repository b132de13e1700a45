# tests/test_config.py

from __future__ import annotations

from pathlib import Path

import pytest

from tickwork.config import Settings, parse_interval_setting


@pytest.fixture()
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> pytest.MonkeyPatch:
    # Keep a developer's .env out of the picture.
    monkeypatch.chdir(tmp_path)
    for key in (
        "TICKWORK_APP_NAME",
        "TICKWORK_LOG_LEVEL",
        "TICKWORK_DATA_DIR",
        "TICKWORK_CONSOLE_ENABLED",
        "TICKWORK_HEARTBEAT_ENABLED",
        "TICKWORK_HEARTBEAT_INTERVAL",
        "TICKWORK_HEARTBEAT_MAX_EXECUTIONS",
    ):
        monkeypatch.delenv(key, raising=False)
    return monkeypatch


def test_defaults(clean_env: pytest.MonkeyPatch) -> None:
    s = Settings.from_env()
    assert s.app_name == "tickwork"
    assert s.log_level == "INFO"
    assert s.data_dir == Path(".local/tickwork")
    assert s.console_enabled is True
    assert s.heartbeat_enabled is True
    assert s.heartbeat_interval == "minute"
    assert s.heartbeat_max_executions is None


def test_overrides(clean_env: pytest.MonkeyPatch, tmp_path: Path) -> None:
    clean_env.setenv("TICKWORK_APP_NAME", "backupd")
    clean_env.setenv("TICKWORK_DATA_DIR", str(tmp_path / "data"))
    clean_env.setenv("TICKWORK_CONSOLE_ENABLED", "no")
    clean_env.setenv("TICKWORK_HEARTBEAT_INTERVAL", "1500")
    clean_env.setenv("TICKWORK_HEARTBEAT_MAX_EXECUTIONS", "5")

    s = Settings.from_env()
    assert s.app_name == "backupd"
    assert s.data_dir == tmp_path / "data"
    assert s.console_enabled is False
    assert s.heartbeat_interval == 1500
    assert s.heartbeat_max_executions == 5


def test_bad_int_falls_back_to_default(clean_env: pytest.MonkeyPatch) -> None:
    clean_env.setenv("TICKWORK_HEARTBEAT_MAX_EXECUTIONS", "lots")
    assert Settings.from_env().heartbeat_max_executions is None


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("hour", "hour"), (" 250 ", 250), ("2.5", 2.5), ("fortnight", "fortnight")],
)
def test_parse_interval_setting(raw: str, expected) -> None:
    assert parse_interval_setting(raw) == expected
