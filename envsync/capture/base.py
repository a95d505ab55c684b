"""Capture boundary: turns a failing collaborator into a default fragment.

Every fragment collaborator exposes ``collect()`` (may raise) and
``default()`` (never raises).  ``capture_fragment`` is the only place a
capture failure is handled: it is logged and replaced by the default, so
the assembler only ever sees resolved values.
"""

from __future__ import annotations

import logging
import subprocess
from typing import Any, Generic, Protocol, TypeVar, runtime_checkable

from pydantic import BaseModel, ConfigDict

logger = logging.getLogger(__name__)

T = TypeVar("T")
T_co = TypeVar("T_co", covariant=True)


class CaptureError(RuntimeError):
    """Raised by a collaborator that could not retrieve its fragment."""


@runtime_checkable
class FragmentCollector(Protocol[T_co]):
    """Protocol for fragment capture collaborators."""

    name: str

    def collect(self) -> T_co:
        """Gather the fragment.  May raise."""
        ...

    def default(self) -> T_co:
        """The empty fragment substituted when ``collect`` fails."""
        ...


class CaptureResult(BaseModel, Generic[T]):
    """A resolved fragment: either the captured value or the default."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str
    value: T
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class StaticCollector:
    """Collector that always yields a fixed value (used to disable a fragment)."""

    def __init__(self, name: str, value: Any) -> None:
        self.name = name
        self._value = value

    def collect(self) -> Any:
        return self._value

    def default(self) -> Any:
        return self._value


def capture_fragment(collector: FragmentCollector[T]) -> CaptureResult[T]:
    """Run *collector*, substituting its default on any failure."""
    try:
        value = collector.collect()
    except Exception as exc:
        logger.warning(
            "Capture of %s fragment failed, using default: %s", collector.name, exc
        )
        return CaptureResult(name=collector.name, value=collector.default(), error=str(exc))
    return CaptureResult(name=collector.name, value=value)


def run_text(args: list[str], *, timeout: float = 30, cwd: str | None = None) -> str:
    """Run a read-only command and return its stripped stdout.

    Raises ``CaptureError`` when the binary is missing, times out, or
    exits non-zero.
    """
    try:
        result = subprocess.run(
            args,
            capture_output=True,
            text=True,
            timeout=timeout,
            cwd=cwd,
        )
    except (subprocess.SubprocessError, OSError) as exc:
        raise CaptureError(f"{args[0]} unavailable: {exc}") from exc
    if result.returncode != 0:
        raise CaptureError(
            f"{' '.join(args)} exited with {result.returncode}: {result.stderr.strip()}"
        )
    return result.stdout.strip()
