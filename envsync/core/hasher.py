"""Canonical hashing helpers for snapshot fingerprints and lockfiles.

The fingerprint is computed over a fixed, explicit subset of snapshot
fields.  Volatile facts (timestamp, free memory, hostname) are never part
of it, so two captures of an unchanged environment fingerprint the same.
"""

from __future__ import annotations

import hashlib
import json
from typing import Any

from envsync.models.snapshot import Snapshot

FINGERPRINT_LENGTH = 16


def canonical_json_bytes(obj: Any) -> bytes:
    """Sorted-key, compact, ASCII-only JSON encoded as UTF-8."""
    return json.dumps(
        obj, sort_keys=True, separators=(",", ":"), ensure_ascii=True
    ).encode("utf-8")


def sha256_hex(data: bytes) -> str:
    """Return the SHA-256 hex digest of raw bytes."""
    return hashlib.sha256(data).hexdigest()


def fingerprint_payload(snapshot: Snapshot) -> dict[str, Any]:
    """The structurally significant fields that identify a snapshot."""
    return {
        "runtimeVersion": snapshot.runtime.version,
        "platform": snapshot.runtime.platform,
        "arch": snapshot.runtime.arch,
        "modules": snapshot.runtime.modules,
        "dependenciesHash": snapshot.dependencies.lockfile_hash,
        "envVarsCount": len(snapshot.env_vars.variables),
        "dockerVersion": snapshot.container.version,
        "imagesCount": len(snapshot.container.images),
    }


def full_fingerprint(snapshot: Snapshot) -> str:
    """Full SHA-256 of the fingerprint payload."""
    return sha256_hex(canonical_json_bytes(fingerprint_payload(snapshot)))


def compute_fingerprint(snapshot: Snapshot) -> str:
    """Short display fingerprint (first ``FINGERPRINT_LENGTH`` hex chars)."""
    return full_fingerprint(snapshot)[:FINGERPRINT_LENGTH]


def fingerprints_match(first: Snapshot, second: Snapshot) -> bool:
    """Cheap equality check between two assembled snapshots."""
    return first.hash == second.hash
