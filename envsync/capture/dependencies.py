"""Dependency capture: package manifest, lockfile hash, native artifacts."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path

from envsync.capture.base import CaptureError
from envsync.capture.runtime import probe_node
from envsync.capture.system import host_arch, host_platform
from envsync.core.hasher import sha256_hex
from envsync.models.snapshot import DependencySet, NativeBinaryArtifact

logger = logging.getLogger(__name__)

LOCKFILES = ("package-lock.json", "yarn.lock", "pnpm-lock.yaml")


def lockfile_hash(project_dir: Path) -> str:
    """Full SHA-256 of the first lockfile found, in ``LOCKFILES`` order."""
    for name in LOCKFILES:
        path = project_dir / name
        if path.exists():
            return sha256_hex(path.read_bytes())
    raise CaptureError(f"No lockfile found ({', '.join(LOCKFILES)})")


def artifact_name(relative: Path) -> str:
    """Owning package of a file below ``node_modules`` (scoped names kept)."""
    parts = relative.parts
    if not parts:
        return "unknown"
    if parts[0].startswith("@") and len(parts) > 1:
        return f"{parts[0]}/{parts[1]}"
    return parts[0]


def find_native_artifacts(
    project_dir: Path, *, platform: str, arch: str, abi: str
) -> list[NativeBinaryArtifact]:
    """Every compiled ``*.node`` file owned by a top-level package."""
    modules_dir = project_dir / "node_modules"
    if not modules_dir.is_dir():
        return []

    artifacts: list[NativeBinaryArtifact] = []
    for path in sorted(modules_dir.rglob("*.node")):
        relative = path.relative_to(modules_dir)
        if "node_modules" in relative.parts:
            continue  # nested dependency
        try:
            stat = path.stat()
        except OSError:
            continue
        artifacts.append(
            NativeBinaryArtifact(
                name=artifact_name(relative),
                path=str(path),
                platform=platform,
                arch=arch,
                abi=abi,
                size=stat.st_size,
                modified=datetime.fromtimestamp(stat.st_mtime, tz=timezone.utc),
            )
        )
    return artifacts


class DependencyCollector:
    name = "dependencies"

    def __init__(
        self,
        project_dir: Path = Path("."),
        *,
        include_native_modules: bool = True,
        node_binary: str = "node",
    ) -> None:
        self.project_dir = Path(project_dir)
        self.include_native_modules = include_native_modules
        self.node_binary = node_binary

    def collect(self) -> DependencySet:
        manifest_path = self.project_dir / "package.json"
        if not manifest_path.exists():
            raise CaptureError(f"package.json not found in {self.project_dir}")
        try:
            manifest = json.loads(manifest_path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise CaptureError(f"Invalid package.json: {exc}") from exc

        native: list[NativeBinaryArtifact] = []
        if self.include_native_modules:
            native = find_native_artifacts(
                self.project_dir,
                platform=host_platform(),
                arch=host_arch(),
                abi=self._abi(),
            )

        return DependencySet(
            production=manifest.get("dependencies") or {},
            development=manifest.get("devDependencies") or {},
            lockfile_hash=lockfile_hash(self.project_dir),
            native_artifacts=native,
        )

    def default(self) -> DependencySet:
        return DependencySet()

    def _abi(self) -> str:
        try:
            return str(probe_node(self.node_binary).get("modules", ""))
        except CaptureError as exc:
            logger.warning("Runtime ABI unknown for native artifacts: %s", exc)
            return ""
