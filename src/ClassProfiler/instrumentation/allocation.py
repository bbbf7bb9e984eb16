# ============================================================================
# ClassProfiler - Allocation Collector
#
# Purpose: Record per-call allocation deltas of instrumented methods
# Inputs: Class plus explicit method names or a selection policy
# Outputs: AllocationRecord entries in instance metric stores
# Dependencies: sys, tracemalloc, interceptor, selector, store
# Usage: AllocationCollector().instrument(MyClass, ["build_index"])
#
# Changelog:
#   2026-09-14: Initial allocation collector
#   2026-09-18: Lazy tracemalloc start; optional byte-delta clamping
# ============================================================================

from typing import Iterable, List, Optional, Tuple
import sys
import tracemalloc

from ClassProfiler.config import get_config
from ClassProfiler.instrumentation.interceptor import wrap_method
from ClassProfiler.instrumentation.selector import select_by_flags
from ClassProfiler.instrumentation.store import instance_store
from ClassProfiler.logging_utils import get_logger

logger = get_logger(__name__)


def sample_counters() -> Tuple[int, int]:
    """
    Read the allocation counters.

    Returns:
        (allocated memory blocks, bytes currently traced by tracemalloc;
        0 when tracemalloc is not tracing)
    """
    traced = tracemalloc.get_traced_memory()[0] if tracemalloc.is_tracing() else 0
    return sys.getallocatedblocks(), traced


def ensure_tracing() -> bool:
    """Start tracemalloc if it is not running. Returns True if it was started here."""
    if tracemalloc.is_tracing():
        return False
    tracemalloc.start()
    logger.info("tracemalloc started for allocation profiling")
    return True


class AllocationCollector:
    """
    Wraps instance methods with an allocation-sampling shim.

    Object deltas are clamped to zero. Byte deltas are reported as observed
    (negative when memory was released during the call) unless
    ``clamp_bytes`` is set.
    """

    def __init__(
        self,
        alias_prefix: Optional[str] = None,
        clamp_bytes: Optional[bool] = None,
        start_tracemalloc: Optional[bool] = None,
    ):
        allocation_config = get_config().allocation
        self.alias_prefix = alias_prefix if alias_prefix is not None else allocation_config.alias_prefix
        self.clamp_bytes = allocation_config.clamp_bytes if clamp_bytes is None else clamp_bytes
        self.start_tracemalloc = (
            allocation_config.start_tracemalloc if start_tracemalloc is None else start_tracemalloc
        )

    def _callback(self, name: str):
        clamp_bytes = self.clamp_bytes
        start_tracemalloc = self.start_tracemalloc

        def measure(receiver, call_next, *args, **kwargs):
            if start_tracemalloc:
                ensure_tracing()
            objects_before, bytes_before = sample_counters()
            result = call_next(*args, **kwargs)
            objects_after, bytes_after = sample_counters()

            bytes_delta = bytes_after - bytes_before
            if clamp_bytes:
                bytes_delta = max(0, bytes_delta)
            store = instance_store(receiver)
            if store is not None:
                store.record_allocation(name, max(0, objects_after - objects_before), bytes_delta)
            return result

        return measure

    def instrument(self, cls: type, names: Iterable[str]) -> List[str]:
        """
        Sample allocations around the named instance methods of ``cls``.

        Returns:
            Names that received a new shim
        """
        wrapped = []
        for name in names:
            if wrap_method(cls, name, self._callback(name), self.alias_prefix):
                wrapped.append(name)
        logger.debug(f"Allocation tracking on {len(wrapped)} method(s) of {cls.__qualname__}")
        return wrapped

    def instrument_selected(
        self,
        cls: type,
        inherited: bool = False,
        public: bool = True,
        protected: bool = True,
        private: bool = True,
    ) -> List[str]:
        """Sample allocations around methods chosen by visibility flags."""
        names = select_by_flags(cls, inherited=inherited, public=public, protected=protected, private=private)
        return self.instrument(cls, names)
