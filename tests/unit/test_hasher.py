"""Tests for canonical hashing and snapshot fingerprints."""

from __future__ import annotations

from envsync.core.hasher import (
    FINGERPRINT_LENGTH,
    canonical_json_bytes,
    compute_fingerprint,
    fingerprint_payload,
    fingerprints_match,
    full_fingerprint,
    sha256_hex,
)
from envsync.models.snapshot import ContainerImage, ContainerState, SystemInfo


class TestCanonicalJson:
    def test_key_order_independent(self):
        assert canonical_json_bytes({"b": 1, "a": 2}) == canonical_json_bytes({"a": 2, "b": 1})

    def test_compact_separators(self):
        assert canonical_json_bytes({"a": [1, 2]}) == b'{"a":[1,2]}'

    def test_sha256_hex_known_value(self):
        assert sha256_hex(b"") == (
            "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"
        )


class TestFingerprint:
    def test_length_and_prefix_of_full_digest(self, snapshot):
        short = compute_fingerprint(snapshot)
        assert len(short) == FINGERPRINT_LENGTH
        assert full_fingerprint(snapshot).startswith(short)

    def test_stamped_hash_matches_recomputation(self, rich_snapshot):
        assert rich_snapshot.hash == compute_fingerprint(rich_snapshot)

    def test_payload_covers_structural_fields(self, rich_snapshot):
        payload = fingerprint_payload(rich_snapshot)
        assert payload["runtimeVersion"] == "v18.0.0"
        assert payload["modules"] == "108"
        assert payload["envVarsCount"] == 2
        assert payload["dockerVersion"] == "24.0.7"
        assert payload["imagesCount"] == 2

    def test_volatile_fields_do_not_affect_fingerprint(self, make_snapshot, snapshot):
        other = make_snapshot(
            system=SystemInfo(hostname="elsewhere", free_memory=1, cpus=8),
            timestamp=snapshot.timestamp.replace(year=2030),
        )
        assert other.hash == snapshot.hash
        assert fingerprints_match(snapshot, other)

    def test_env_var_values_only_counted(self, make_snapshot):
        first = make_snapshot(variables={"NODE_ENV": "production"})
        second = make_snapshot(variables={"NODE_ENV": "development"})
        assert first.hash == second.hash

    def test_lockfile_change_changes_fingerprint(self, make_snapshot):
        first = make_snapshot(lockfile_hash="aaa")
        second = make_snapshot(lockfile_hash="bbb")
        assert not fingerprints_match(first, second)

    def test_image_count_changes_fingerprint(self, make_snapshot):
        first = make_snapshot()
        second = make_snapshot(
            container=ContainerState(images=[ContainerImage(id="abc", tags=["node:18"])])
        )
        assert first.hash != second.hash
