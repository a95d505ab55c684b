"""Snapshot models: immutable captures of one environment at one instant.

Attribute names are snake_case; the persisted document keeps the camelCase
keys of the snapshot wire form (``nodeVersion``, ``npmVersion``, ``nodeAbi``,
``composeConfigs``...).  Always dump with ``by_alias=True``.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

REDACTED = "[REDACTED]"


class EnvironmentTag(str, Enum):
    """Which kind of environment a snapshot was captured in."""

    LOCAL = "local"
    STAGING = "staging"
    PRODUCTION = "production"
    CI = "ci"
    DOCKER = "docker"


class _WireModel(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


class RuntimeInfo(_WireModel):
    """Runtime version and the platform it was built for."""

    version: str = ""
    npm_version: str = Field("", alias="npmVersion")
    platform: str = ""
    arch: str = ""
    v8_version: str = Field("", alias="v8Version")
    modules: str = ""  # native module ABI version
    openssl: str | None = None


class NativeBinaryArtifact(_WireModel):
    """A compiled native artifact shipped inside a dependency."""

    name: str
    path: str
    platform: str
    arch: str
    abi: str = Field(alias="nodeAbi")
    size: int = 0
    modified: datetime


class DependencySet(_WireModel):
    """Declared dependencies plus a coarse fingerprint of the lockfile."""

    production: dict[str, str] = {}
    development: dict[str, str] = {}
    lockfile_hash: str = Field("", alias="lockfileHash")
    native_artifacts: list[NativeBinaryArtifact] = Field(
        default_factory=list, alias="nativeModules"
    )

    def merged(self) -> dict[str, str]:
        """Production and development maps combined; development wins on overlap."""
        return {**self.production, **self.development}


class EnvVarSet(_WireModel):
    """Environment variables, sensitive values replaced by ``REDACTED``."""

    variables: dict[str, str] = {}
    redacted: list[str] = []


class ContainerImage(_WireModel):
    id: str
    tags: list[str] = []
    size: int = 0
    created: datetime | None = None


class Container(_WireModel):
    id: str
    name: str
    image: str
    state: str


class ComposeDescriptor(_WireModel):
    file: str
    services: list[str] = []
    networks: list[str] = []
    volumes: list[str] = []


class ContainerState(_WireModel):
    """Container engine state; engine fields are ``None`` when unavailable."""

    version: str | None = None
    platform: str | None = None
    arch: str | None = None
    images: list[ContainerImage] = []
    containers: list[Container] = []
    compose_configs: list[ComposeDescriptor] = Field(
        default_factory=list, alias="composeConfigs"
    )

    def image_tags(self) -> list[str]:
        """Every declared image tag, in image order, without duplicates."""
        return list(dict.fromkeys(tag for image in self.images for tag in image.tags))


class SystemInfo(_WireModel):
    """Host facts.  ``free_memory`` and ``hostname`` are volatile."""

    platform: str = ""
    arch: str = ""
    cpus: int = 0
    total_memory: int = Field(0, alias="totalMemory")
    free_memory: int = Field(0, alias="freeMemory")
    hostname: str = ""


class Snapshot(_WireModel):
    """Immutable description of an environment.

    Two snapshots are equal when their fingerprints are equal; the
    fingerprint covers only the structurally significant fields, so
    volatile facts (free memory, hostname, timestamp) never affect it.
    """

    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    environment: EnvironmentTag = EnvironmentTag.LOCAL
    runtime: RuntimeInfo = Field(default_factory=RuntimeInfo, alias="nodeVersion")
    dependencies: DependencySet = Field(default_factory=DependencySet)
    env_vars: EnvVarSet = Field(default_factory=EnvVarSet, alias="envVars")
    container: ContainerState = Field(default_factory=ContainerState, alias="docker")
    system: SystemInfo = Field(default_factory=SystemInfo)
    hash: str = ""

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Snapshot):
            return NotImplemented
        return self.hash == other.hash

    def __hash__(self) -> int:
        return hash(self.hash)
