"""Host facts and environment-tag detection."""

from __future__ import annotations

import os
import platform
import socket
import sys
from collections.abc import Mapping

import psutil

from envsync.models.snapshot import EnvironmentTag, SystemInfo

# Python -> Node.js naming, so host facts line up with runtime facts
_PLATFORMS = {"win32": "win32", "cygwin": "win32", "darwin": "darwin"}
_ARCHES = {
    "x86_64": "x64",
    "amd64": "x64",
    "i386": "ia32",
    "i686": "ia32",
    "aarch64": "arm64",
    "arm64": "arm64",
    "armv7l": "arm",
    "ppc64le": "ppc64",
    "s390x": "s390x",
}


def host_platform() -> str:
    if sys.platform.startswith("linux"):
        return "linux"
    if sys.platform.startswith("freebsd"):
        return "freebsd"
    return _PLATFORMS.get(sys.platform, sys.platform)


def host_arch() -> str:
    machine = platform.machine()
    return _ARCHES.get(machine.lower(), machine)


def detect_environment(environ: Mapping[str, str] | None = None) -> EnvironmentTag:
    """Infer the environment tag from well-known variables.

    ``NODE_ENV`` wins, then CI markers, then container markers; the
    fallback is ``local``.
    """
    env = os.environ if environ is None else environ

    node_env = env.get("NODE_ENV", "").lower()
    if node_env == "production":
        return EnvironmentTag.PRODUCTION
    if node_env == "staging":
        return EnvironmentTag.STAGING
    if node_env == "development":
        return EnvironmentTag.LOCAL

    if env.get("CI") == "true" or env.get("CONTINUOUS_INTEGRATION") == "true":
        return EnvironmentTag.CI

    if env.get("DOCKER_CONTAINER") == "true" or env.get("IS_DOCKER") == "true":
        return EnvironmentTag.DOCKER

    return EnvironmentTag.LOCAL


class SystemCollector:
    name = "system"

    def collect(self) -> SystemInfo:
        memory = psutil.virtual_memory()
        return SystemInfo(
            platform=host_platform(),
            arch=host_arch(),
            cpus=psutil.cpu_count() or 0,
            total_memory=memory.total,
            free_memory=memory.available,
            hostname=socket.gethostname(),
        )

    def default(self) -> SystemInfo:
        return SystemInfo()
