"""Container capture via the docker CLI, plus compose file discovery.

When the engine is unreachable the engine fields stay ``None`` but compose
descriptors are still read from disk.
"""

from __future__ import annotations

import json
import logging
import re
from datetime import datetime
from pathlib import Path
from typing import Any

import yaml

from envsync.capture.base import CaptureError, run_text
from envsync.models.snapshot import (
    ComposeDescriptor,
    Container,
    ContainerImage,
    ContainerState,
)

logger = logging.getLogger(__name__)

COMPOSE_PATTERNS = (
    "docker-compose*.yml",
    "docker-compose*.yaml",
    "compose*.yml",
    "compose*.yaml",
)
_IGNORED_DIRS = {"node_modules", "dist", ".git"}
_FRACTION_RE = re.compile(r"\.(\d{6})\d+")


def parse_timestamp(value: str | None) -> datetime | None:
    """Parse an engine timestamp (nanosecond precision, ``Z`` suffix)."""
    if not value:
        return None
    normalized = _FRACTION_RE.sub(r".\1", value).replace("Z", "+00:00")
    try:
        return datetime.fromisoformat(normalized)
    except ValueError:
        return None


def find_compose_configs(project_dir: Path) -> list[ComposeDescriptor]:
    """Parse every compose file below *project_dir*, skipping invalid ones."""
    paths: set[Path] = set()
    for pattern in COMPOSE_PATTERNS:
        for path in project_dir.rglob(pattern):
            if _IGNORED_DIRS.isdisjoint(path.relative_to(project_dir).parts):
                paths.add(path)

    configs: list[ComposeDescriptor] = []
    for path in sorted(paths):
        try:
            data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        except (OSError, yaml.YAMLError) as exc:
            logger.debug("Skipping unreadable compose file %s: %s", path, exc)
            continue
        if not isinstance(data, dict):
            continue
        configs.append(
            ComposeDescriptor(
                file=str(path),
                services=list(data.get("services") or {}),
                networks=list(data.get("networks") or {}),
                volumes=list(data.get("volumes") or {}),
            )
        )
    return configs


class ContainerCollector:
    name = "container"

    def __init__(
        self,
        project_dir: Path = Path("."),
        *,
        docker_binary: str = "docker",
        timeout: float = 30,
    ) -> None:
        self.project_dir = Path(project_dir)
        self.docker_binary = docker_binary
        self.timeout = timeout

    def collect(self) -> ContainerState:
        compose = find_compose_configs(self.project_dir)
        try:
            server = self._json(["version", "--format", "{{json .Server}}"]) or {}
            images = self._images()
            containers = self._containers()
        except CaptureError as exc:
            logger.warning("Docker engine unavailable: %s", exc)
            return ContainerState(compose_configs=compose)

        return ContainerState(
            version=server.get("Version"),
            platform=server.get("Os"),
            arch=server.get("Arch"),
            images=images,
            containers=containers,
            compose_configs=compose,
        )

    def default(self) -> ContainerState:
        return ContainerState()

    # ------------------------------------------------------------------
    # docker CLI helpers
    # ------------------------------------------------------------------

    def _docker(self, args: list[str]) -> str:
        return run_text([self.docker_binary, *args], timeout=self.timeout)

    def _json(self, args: list[str]) -> Any:
        output = self._docker(args)
        try:
            return json.loads(output) if output else None
        except json.JSONDecodeError as exc:
            raise CaptureError(f"Unexpected docker output: {output[:80]!r}") from exc

    def _images(self) -> list[ContainerImage]:
        ids = list(dict.fromkeys(self._docker(["image", "ls", "-q", "--no-trunc"]).split()))
        if not ids:
            return []
        return [
            ContainerImage(
                id=raw.get("Id", "").removeprefix("sha256:")[:12],
                tags=raw.get("RepoTags") or [],
                size=int(raw.get("Size") or 0),
                created=parse_timestamp(raw.get("Created")),
            )
            for raw in self._json(["image", "inspect", *ids]) or []
        ]

    def _containers(self) -> list[Container]:
        output = self._docker(["ps", "-a", "--no-trunc", "--format", "{{json .}}"])
        containers: list[Container] = []
        for line in output.splitlines():
            if not line.strip():
                continue
            try:
                raw = json.loads(line)
            except json.JSONDecodeError as exc:
                raise CaptureError(f"Unexpected docker ps output: {line[:80]!r}") from exc
            containers.append(
                Container(
                    id=raw.get("ID", "")[:12],
                    name=(raw.get("Names") or "unnamed").split(",")[0],
                    image=raw.get("Image", ""),
                    state=raw.get("State", ""),
                )
            )
        return containers
