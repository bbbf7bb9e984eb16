# ============================================================================
# ClassProfiler - Profile Snapshot Schema
#
# Purpose: Pydantic models for exporting one object's collected metrics
# Inputs: MetricStore snapshots
# Outputs: Type-safe snapshot models (JSON-serializable)
# Dependencies: pydantic, datetime, instrumentation.store
# Usage: snapshot = ProfileSnapshot.from_store("Primes", instance_store(obj))
#
# Changelog:
#   2026-10-03: Initial snapshot schema for CLI --json output
#   2026-10-17: created_at_utc timestamp built here
# ============================================================================

from datetime import datetime, timezone
from typing import Dict, Optional

from pydantic import BaseModel, Field

from ClassProfiler.instrumentation.store import MetricStore

SCHEMA_VERSION = "0.1.0"

TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


def _utc_now() -> str:
    return datetime.now(timezone.utc).strftime(TIMESTAMP_FORMAT)


class TimingEntry(BaseModel):
    """Timing of one method, in seconds."""

    last: float = Field(ge=0.0)
    total: float = Field(ge=0.0)
    calls: int = Field(ge=0)


class AllocationEntry(BaseModel):
    """Allocation deltas of one method's most recent call."""

    objects: int = Field(ge=0)
    bytes: int  # signed unless clamping is configured
    calls: int = Field(ge=0)


class ProfileSnapshot(BaseModel):
    """Point-in-time export of a metric store."""

    schema_version: str = SCHEMA_VERSION
    owner: str
    created_at_utc: str = Field(default_factory=_utc_now)
    timings: Dict[str, TimingEntry] = Field(default_factory=dict)
    allocations: Dict[str, AllocationEntry] = Field(default_factory=dict)

    @classmethod
    def from_store(cls, owner: str, store: Optional[MetricStore]) -> "ProfileSnapshot":
        """
        Build a snapshot from a store (an absent store yields empty maps).

        Args:
            owner: Label for the instance/class the metrics belong to
            store: Store to copy from
        """
        if store is None:
            return cls(owner=owner)
        return cls(
            owner=owner,
            timings={
                name: TimingEntry(last=r.last, total=r.total, calls=r.calls)
                for name, r in store.timing_snapshot().items()
            },
            allocations={
                name: AllocationEntry(objects=r.objects, bytes=r.bytes, calls=r.calls)
                for name, r in store.allocation_snapshot().items()
            },
        )
