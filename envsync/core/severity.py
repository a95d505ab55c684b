"""Severity classification for version deltas.

One rule set covers both runtime versions and dependency versions:

    unparsable on either side -> medium
    major differs             -> high
    minor differs             -> medium
    anything else             -> low

Only the numeric (major, minor, patch) core is considered; a leading
``v``/``=`` is tolerated, pre-release and build metadata are ignored.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from envsync.models.drift import SEVERITY_ORDER, Severity

DEFAULT_SEVERITY = Severity.MEDIUM

_VERSION_RE = re.compile(
    r"^\s*[v=]?\s*"
    r"(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)"
    r"(?:-[0-9A-Za-z.-]+)?"
    r"(?:\+[0-9A-Za-z.-]+)?\s*$"
)


def parse_version(value: str | None) -> tuple[int, int, int] | None:
    """Decompose a version string into (major, minor, patch).

    Returns ``None`` for anything that is not a plain version, including
    ranges such as ``^4.17.0`` or ``>=1 <2``.
    """
    if not value:
        return None
    match = _VERSION_RE.match(value)
    if match is None:
        return None
    major, minor, patch = (int(part) for part in match.groups())
    return major, minor, patch


def classify_version_delta(local: str | None, remote: str | None) -> Severity:
    """Map two version strings to a drift severity."""
    local_ver = parse_version(local)
    remote_ver = parse_version(remote)
    if local_ver is None or remote_ver is None:
        return DEFAULT_SEVERITY
    if local_ver[0] != remote_ver[0]:
        return Severity.HIGH
    if local_ver[1] != remote_ver[1]:
        return Severity.MEDIUM
    return Severity.LOW


def describe_version_delta(local: str, remote: str) -> str:
    """Impact text naming which version component differs."""
    local_ver = parse_version(local)
    remote_ver = parse_version(remote)
    if local_ver is None or remote_ver is None:
        return "Version format differs"
    if local_ver[0] != remote_ver[0]:
        return f"Major version change ({local} → {remote}) - breaking changes likely"
    if local_ver[1] != remote_ver[1]:
        return f"Minor version change ({local} → {remote}) - new features or deprecations"
    return f"Patch version change ({local} → {remote}) - bug fixes"


def max_severity(severities: Iterable[Severity]) -> Severity:
    """Highest severity present, ``NONE`` for an empty iterable."""
    return max(severities, key=SEVERITY_ORDER.index, default=Severity.NONE)


def exceeds_threshold(severity: Severity, threshold: Severity) -> bool:
    """True when *severity* is at or above *threshold*."""
    return SEVERITY_ORDER.index(severity) >= SEVERITY_ORDER.index(threshold)
