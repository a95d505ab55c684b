"""External tool collaborators: the only code that mutates an environment.

``RemediationTools`` is the protocol the orchestrator depends on.
``SubprocessTools`` drives the real ``npm`` and ``docker`` binaries; every
failure surfaces as ``ToolInvocationError``.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Protocol, runtime_checkable

logger = logging.getLogger(__name__)


class ToolInvocationError(RuntimeError):
    """Raised when an external tool is missing, times out, or exits non-zero."""


@runtime_checkable
class RemediationTools(Protocol):
    """Protocol for mutating tool backends.

    Each method either completes or raises; return values are ignored.
    """

    def install_package(self, name: str, version: str) -> None:
        """Install or pin exactly *version* of *name*."""
        ...

    def remove_package(self, name: str) -> None:
        ...

    def pull_image(self, reference: str) -> None:
        ...

    def rebuild_artifact(self, name: str) -> None:
        """Rebuild a native artifact in place for the current runtime."""
        ...


class SubprocessTools:
    """``RemediationTools`` backed by the npm and docker CLIs.

    Parameters
    ----------
    project_dir:
        Working directory for package-manager commands.
    timeout:
        Seconds before a single command is abandoned.
    """

    def __init__(
        self,
        project_dir: Path = Path("."),
        *,
        npm_binary: str = "npm",
        docker_binary: str = "docker",
        timeout: float = 300,
    ) -> None:
        self.project_dir = Path(project_dir)
        self.npm_binary = npm_binary
        self.docker_binary = docker_binary
        self.timeout = timeout

    def install_package(self, name: str, version: str) -> None:
        self._run([self.npm_binary, "install", f"{name}@{version}", "--save-exact"])

    def remove_package(self, name: str) -> None:
        self._run([self.npm_binary, "uninstall", name])

    def pull_image(self, reference: str) -> None:
        self._run([self.docker_binary, "pull", reference])

    def rebuild_artifact(self, name: str) -> None:
        self._run([self.npm_binary, "rebuild", name])

    def _run(self, args: list[str]) -> None:
        logger.debug("Running %s", " ".join(args))
        try:
            result = subprocess.run(
                args,
                cwd=self.project_dir,
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired as exc:
            raise ToolInvocationError(
                f"{' '.join(args)} timed out after {self.timeout}s"
            ) from exc
        except OSError as exc:
            raise ToolInvocationError(f"{args[0]} could not be started: {exc}") from exc

        if result.returncode != 0:
            detail = result.stderr.strip() or result.stdout.strip()
            raise ToolInvocationError(
                f"{' '.join(args)} exited with {result.returncode}: {detail}"
            )
