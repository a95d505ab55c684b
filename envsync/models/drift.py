"""Drift models: one detected difference, and the report built from many."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from envsync.models.snapshot import Snapshot


class DriftCategory(str, Enum):
    """The environment facet a drift belongs to.

    Declaration order is the comparison order and the report block order.
    """

    RUNTIME = "runtime"
    DEPENDENCY = "dependency"
    ENVVAR = "envvar"
    CONTAINER = "container"
    BINARY = "binary"


class Severity(str, Enum):
    """Ordered risk level: none < low < medium < high < critical."""

    NONE = "none"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    @property
    def rank(self) -> int:
        return SEVERITY_ORDER.index(self)


SEVERITY_ORDER: tuple[Severity, ...] = (
    Severity.NONE,
    Severity.LOW,
    Severity.MEDIUM,
    Severity.HIGH,
    Severity.CRITICAL,
)


class Drift(BaseModel):
    """One difference between a local and a remote snapshot.

    ``local`` / ``remote`` are ``None`` when the field is absent on that side.
    """

    model_config = ConfigDict(frozen=True)

    category: DriftCategory
    severity: Severity
    field: str  # dotted path, e.g. "dependency.lodash" or "native.sharp.abi"
    local: Any = None
    remote: Any = None
    impact: str = ""
    recommendation: str = ""

    @field_validator("severity")
    @classmethod
    def _never_none(cls, value: Severity) -> Severity:
        if value is Severity.NONE:
            raise ValueError("an individual drift cannot have severity 'none'")
        return value


class DriftSummary(BaseModel):
    """Counts per severity and per category."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    total: int = 0
    critical: int = 0
    high: int = 0
    medium: int = 0
    low: int = 0
    by_category: dict[DriftCategory, int] = Field(
        default_factory=lambda: {category: 0 for category in DriftCategory},
        alias="byCategory",
    )


class DriftReport(BaseModel):
    """Complete comparison result between two snapshots."""

    model_config = ConfigDict(frozen=True)

    has_drift: bool
    severity: Severity
    drifts: list[Drift] = []
    summary: DriftSummary = DriftSummary()
    local_snapshot: Snapshot
    remote_snapshot: Snapshot

    def by_category(self, category: DriftCategory) -> list[Drift]:
        """Drifts of one category, in report order."""
        return [d for d in self.drifts if d.category is category]

    def to_export(self) -> dict[str, Any]:
        """The export document: flags, drifts and summary, without snapshots."""
        return {
            "hasDrift": self.has_drift,
            "severity": self.severity.value,
            "drifts": [d.model_dump(mode="json") for d in self.drifts],
            "summary": self.summary.model_dump(mode="json", by_alias=True),
        }
