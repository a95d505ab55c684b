"""Tests for EnvSyncConfig: defaults and ENVSYNC_* overrides."""

from __future__ import annotations

from pathlib import Path

import pytest

from envsync.config import EnvSyncConfig
from envsync.models.drift import Severity


@pytest.fixture(autouse=True)
def _isolated(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    for key in ("LOG_LEVEL", "SNAPSHOT_DIR", "INCLUDE_DOCKER", "FAIL_ON", "CAPTURE_WORKERS"):
        monkeypatch.delenv(f"ENVSYNC_{key}", raising=False)


class TestEnvSyncConfig:
    def test_defaults(self):
        cfg = EnvSyncConfig()
        assert cfg.log_level == "INFO"
        assert cfg.default_remote == "production"
        assert cfg.redact_sensitive is True
        assert cfg.include_docker is True
        assert cfg.capture_workers == 5
        assert cfg.fail_on is Severity.HIGH
        assert cfg.rollback_dir == Path(".envsync")

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("ENVSYNC_LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("ENVSYNC_INCLUDE_DOCKER", "false")
        monkeypatch.setenv("ENVSYNC_FAIL_ON", "critical")
        monkeypatch.setenv("ENVSYNC_CAPTURE_WORKERS", "2")
        cfg = EnvSyncConfig()
        assert cfg.log_level == "DEBUG"
        assert cfg.include_docker is False
        assert cfg.fail_on is Severity.CRITICAL
        assert cfg.capture_workers == 2

    def test_dotenv_file(self, tmp_path):
        (tmp_path / ".env").write_text("ENVSYNC_DEFAULT_REMOTE=staging\n", encoding="utf-8")
        assert EnvSyncConfig().default_remote == "staging"

    def test_snapshot_path(self, monkeypatch, tmp_path):
        monkeypatch.setenv("ENVSYNC_SNAPSHOT_DIR", str(tmp_path / "snaps"))
        cfg = EnvSyncConfig()
        assert cfg.snapshot_path("production") == tmp_path / "snaps" / "production.snapshot.json"

    def test_invalid_threshold_rejected(self, monkeypatch):
        monkeypatch.setenv("ENVSYNC_FAIL_ON", "catastrophic")
        with pytest.raises(ValueError):
            EnvSyncConfig()
