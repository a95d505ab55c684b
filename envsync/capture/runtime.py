"""Runtime capture: asks the ``node`` and ``npm`` binaries about themselves."""

from __future__ import annotations

import json
import logging
from typing import Any

from envsync.capture.base import CaptureError, run_text
from envsync.models.snapshot import RuntimeInfo

logger = logging.getLogger(__name__)

_NODE_PROBE = (
    "JSON.stringify({version: process.version, platform: process.platform, "
    "arch: process.arch, v8: process.versions.v8, "
    "modules: process.versions.modules, openssl: process.versions.openssl})"
)


def probe_node(node_binary: str = "node", *, timeout: float = 30) -> dict[str, Any]:
    """Return process facts reported by the node binary."""
    output = run_text([node_binary, "-p", _NODE_PROBE], timeout=timeout)
    try:
        return json.loads(output)
    except json.JSONDecodeError as exc:
        raise CaptureError(f"Unexpected node probe output: {output!r}") from exc


class RuntimeCollector:
    name = "runtime"

    def __init__(
        self,
        node_binary: str = "node",
        npm_binary: str = "npm",
        *,
        timeout: float = 30,
    ) -> None:
        self.node_binary = node_binary
        self.npm_binary = npm_binary
        self.timeout = timeout

    def collect(self) -> RuntimeInfo:
        info = probe_node(self.node_binary, timeout=self.timeout)
        try:
            npm_version = run_text([self.npm_binary, "--version"], timeout=self.timeout)
        except CaptureError as exc:
            logger.warning("npm version unavailable: %s", exc)
            npm_version = ""

        return RuntimeInfo(
            version=info.get("version", ""),
            npm_version=npm_version,
            platform=info.get("platform", ""),
            arch=info.get("arch", ""),
            v8_version=info.get("v8", ""),
            modules=str(info.get("modules", "")),
            openssl=info.get("openssl"),
        )

    def default(self) -> RuntimeInfo:
        return RuntimeInfo()
