"""Usage domain types and pure business logic.

Constants, enums, and pure functions used by the ledger, enforcer and query
service. No IO; everything here is deterministic.
"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Iterable, Optional


class OperationKind(str, Enum):
    """Billable operation kinds."""

    GENERATE = "generate"
    MAGIC_EDIT = "magic_edit"
    UPSCALE = "upscale"
    REMOVE_BG = "remove_bg"


class AspectRatio(str, Enum):
    """Aspect ratios accepted for produced artifacts."""

    SIXTEEN_NINE = "16:9"
    NINE_SIXTEEN = "9:16"
    ONE_ONE = "1:1"


# Counter column on usage_tracking for each operation kind.
COUNTER_FIELDS: dict[OperationKind, str] = {
    OperationKind.GENERATE: "thumbnails_generated",
    OperationKind.MAGIC_EDIT: "magic_edits_used",
    OperationKind.UPSCALE: "upscales_used",
    OperationKind.REMOVE_BG: "background_removals_used",
}

# The tier allowance is expressed in this kind; it is what callers display
# next to the limit.
ALLOWANCE_KIND = OperationKind.GENERATE

DEFAULT_CAPPED_OPERATIONS: frozenset[OperationKind] = frozenset({OperationKind.GENERATE})


def parse_operation_kinds(values: Iterable[str]) -> frozenset[OperationKind]:
    """Convert configured operation names to kinds.

    Raises ValueError on unknown names so misconfiguration fails at startup.
    """
    return frozenset(OperationKind(str(v).strip().lower()) for v in values)


@dataclass(frozen=True)
class UsageCounts:
    """Counter values for one (account, period). Zero when no row exists."""

    thumbnails_generated: int = 0
    magic_edits_used: int = 0
    upscales_used: int = 0
    background_removals_used: int = 0

    def get(self, kind: OperationKind) -> int:
        """Return the counter for *kind*."""
        return getattr(self, COUNTER_FIELDS[kind])

    def incremented(self, kind: OperationKind) -> "UsageCounts":
        """Return a copy with *kind* incremented by one."""
        field_name = COUNTER_FIELDS[kind]
        values = self.as_dict()
        values[field_name] += 1
        return UsageCounts(**values)

    def as_dict(self) -> dict[str, int]:
        """Counters keyed by column name."""
        return {name: getattr(self, name) for name in COUNTER_FIELDS.values()}

    @classmethod
    def from_record(cls, record: object) -> "UsageCounts":
        """Build from an ORM row or any object exposing the counter columns."""
        return cls(**{name: int(getattr(record, name, 0) or 0) for name in COUNTER_FIELDS.values()})


@dataclass(frozen=True)
class Admission:
    """Outcome of a ledger admit-and-increment call."""

    admitted: bool
    operation: OperationKind
    counts: UsageCounts
    limit: Optional[int]

    @property
    def new_count(self) -> int:
        """Counter for the requested kind after the call (unchanged on rejection)."""
        return self.counts.get(self.operation)


@dataclass(frozen=True)
class ArtifactDetails:
    """Caller-supplied description of the produced artifact."""

    artifact_url: str
    prompt: Optional[str] = None
    style: Optional[str] = None
    aspect_ratio: Optional[AspectRatio] = None
    metadata: dict = field(default_factory=dict)


@dataclass(frozen=True)
class OperationResult:
    """Result of a successful record_operation call."""

    success: bool
    current_usage: int
    limit: int


@dataclass(frozen=True)
class PeriodUsage:
    """Counters of one billing period."""

    period: date
    counts: UsageCounts
