# ============================================================================
# ClassProfiler - Metric Store
#
# Purpose: Per-instance and per-class storage of timing/allocation records
# Inputs: Method names and measured values from collectors
# Outputs: Point-in-time snapshots of metric records
# Dependencies: dataclasses, weakref
# Usage: store = instance_store(obj); store.record_timing("run", 0.01)
#
# Changelog:
#   2026-09-02: Initial store with TimingRecord
#   2026-09-14: Added AllocationRecord and allocation snapshots
#   2026-09-28: Side table for instances without __dict__ (slots classes)
#   2026-10-17: Side table keyed by identity, not by the object's __eq__/__hash__
# ============================================================================

import copy
import weakref
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from ClassProfiler.logging_utils import get_logger

logger = get_logger(__name__)

# Attribute names are under the internal prefix so the selector never picks them
INSTANCE_STORE_ATTR = "_profiler_store"
CLASS_STORE_ATTR = "_profiler_class_store"


@dataclass
class TimingRecord:
    """Timing for a single method name."""
    last: float = 0.0
    total: float = 0.0
    calls: int = 0


@dataclass
class AllocationRecord:
    """Allocation deltas observed on the most recent call of a method."""
    objects: int = 0
    bytes: int = 0
    calls: int = 0


class MetricStore:
    """
    Mapping from method name to its metric records.

    Not thread-safe: concurrent updates to the same record are last-writer-wins.
    """

    def __init__(self):
        self.timings: Dict[str, TimingRecord] = {}
        self.allocations: Dict[str, AllocationRecord] = {}

    def record_timing(self, name: str, duration: float, cumulative: bool = True) -> TimingRecord:
        """
        Record one call's duration.

        Args:
            name: Method name
            duration: Elapsed seconds for the call
            cumulative: Accumulate into total (True) or keep total equal to last (False)

        Returns:
            The updated record
        """
        record = self.timings.get(name)
        if record is None:
            record = self.timings[name] = TimingRecord()
        record.last = duration
        record.total = record.total + duration if cumulative else duration
        record.calls += 1
        return record

    def record_allocation(self, name: str, objects: int, bytes_delta: int) -> AllocationRecord:
        """Record one call's allocation deltas, replacing the previous ones."""
        record = self.allocations.get(name)
        if record is None:
            record = self.allocations[name] = AllocationRecord()
        record.objects = objects
        record.bytes = bytes_delta
        record.calls += 1
        return record

    def timing_snapshot(self) -> Dict[str, TimingRecord]:
        """Copy of all timing records."""
        return {name: copy.copy(record) for name, record in self.timings.items()}

    def allocation_snapshot(self) -> Dict[str, AllocationRecord]:
        """Copy of all allocation records."""
        return {name: copy.copy(record) for name, record in self.allocations.items()}

    def clear(self) -> None:
        self.timings.clear()
        self.allocations.clear()

    def __bool__(self) -> bool:
        return bool(self.timings or self.allocations)

    def __repr__(self) -> str:
        return f"MetricStore(timings={len(self.timings)}, allocations={len(self.allocations)})"


# Stores for instances that have no __dict__ but support weak references,
# keyed by id(); an entry is dropped when its weak reference dies
_side_stores: Dict[int, Tuple["weakref.ref[Any]", MetricStore]] = {}


def _side_store(obj: Any, create: bool) -> Optional[MetricStore]:
    key = id(obj)
    entry = _side_stores.get(key)
    if entry is not None and entry[0]() is obj:
        return entry[1]
    if not create:
        return None

    def _discard(ref: "weakref.ref[Any]", key: int = key) -> None:
        current = _side_stores.get(key)
        if current is not None and current[0] is ref:
            del _side_stores[key]

    store = MetricStore()
    _side_stores[key] = (weakref.ref(obj, _discard), store)
    return store


def instance_store(obj: Any, create: bool = True) -> Optional[MetricStore]:
    """
    Return the store owned by an instance, creating it lazily.

    Args:
        obj: Instance whose metrics are requested
        create: Create the store if it does not exist yet

    Returns:
        The instance's MetricStore, or None when it has none (and create is False)
        or the object can hold none at all
    """
    try:
        namespace = vars(obj)
    except TypeError:
        namespace = None

    if namespace is not None:
        store = namespace.get(INSTANCE_STORE_ATTR)
        if store is None and create:
            store = namespace[INSTANCE_STORE_ATTR] = MetricStore()
        return store

    try:
        return _side_store(obj, create)
    except TypeError:
        logger.debug(f"{type(obj).__qualname__} instances can hold no metric store")
        return None


def class_store(cls: type, create: bool = True) -> Optional[MetricStore]:
    """
    Return the store owned by a class itself (never an ancestor's).

    Args:
        cls: Class whose type-level metrics are requested
        create: Create the store if it does not exist yet
    """
    store = cls.__dict__.get(CLASS_STORE_ATTR)
    if store is None and create:
        store = MetricStore()
        setattr(cls, CLASS_STORE_ATTR, store)
    return store
