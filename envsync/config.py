"""Configuration: env-driven via pydantic-settings.

Reads from a .env file and ENVSYNC_* environment variables.

Examples
--------
Override via environment::

    export ENVSYNC_LOG_LEVEL=DEBUG
    export ENVSYNC_SNAPSHOT_DIR=/srv/snapshots
    export ENVSYNC_INCLUDE_DOCKER=false
"""

from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from envsync.models.drift import Severity


class EnvSyncConfig(BaseSettings):
    """Runtime configuration with environment variable overrides."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="ENVSYNC_",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = "INFO"

    # Locations
    project_dir: Path = Path(".")
    snapshot_dir: Path = Path(".")
    rollback_dir: Path = Path(".envsync")
    default_remote: str = "production"

    # Capture
    redact_sensitive: bool = True
    include_docker: bool = True
    include_native_modules: bool = True
    capture_workers: int = 5

    # External tools
    command_timeout_seconds: int = 300

    # Validation
    fail_on: Severity = Severity.HIGH

    def snapshot_path(self, environment: str) -> Path:
        """Where the snapshot for *environment* is stored."""
        return self.snapshot_dir / f"{environment}.snapshot.json"
