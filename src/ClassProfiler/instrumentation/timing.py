# ============================================================================
# ClassProfiler - Timing Collector
#
# Purpose: Record wall-clock duration per call of instrumented methods
# Inputs: Class plus explicit method names or a selection policy
# Outputs: TimingRecord entries in instance/class metric stores
# Dependencies: time, interceptor, selector, store
# Usage: TimingCollector(mode="cumulative").instrument(MyClass, ["run"])
#
# Changelog:
#   2026-09-02: Initial timing collector (last-duration mode)
#   2026-09-07: Cumulative mode (total + last)
#   2026-09-09: Class-level timing into the class store
# ============================================================================

from enum import Enum
from typing import Any, Callable, Iterable, List, Optional, Union
import time

from ClassProfiler.config import get_config
from ClassProfiler.instrumentation.interceptor import wrap_class_method, wrap_method
from ClassProfiler.instrumentation.selector import Visibility, select_class_methods, select_instance_methods
from ClassProfiler.instrumentation.store import MetricStore, class_store, instance_store
from ClassProfiler.logging_utils import get_logger

logger = get_logger(__name__)


class TimingMode(str, Enum):
    # last: total always equals the most recent duration
    LAST = "last"
    CUMULATIVE = "cumulative"


class TimingCollector:
    """
    Wraps methods with a timing shim.

    Each call is timed with a monotonic clock; the duration is written to
    the receiver's store only after the original returns, so a call that
    raises leaves no record.
    """

    def __init__(
        self,
        mode: Union[TimingMode, str, None] = None,
        alias_prefix: Optional[str] = None,
        clock: Callable[[], float] = time.perf_counter,
    ):
        """
        Initialize collector.

        Args:
            mode: "cumulative" or "last"; defaults to the active config
            alias_prefix: Layer prefix for the shims; defaults to the active config
            clock: Monotonic clock returning seconds
        """
        timing_config = get_config().timing
        self.mode = TimingMode(mode if mode is not None else timing_config.mode)
        self.alias_prefix = alias_prefix if alias_prefix is not None else timing_config.alias_prefix
        self.clock = clock

    def _callback(self, name: str, store_for: Callable[[Any], Optional[MetricStore]]):
        cumulative = self.mode is TimingMode.CUMULATIVE
        clock = self.clock

        def measure(receiver, call_next, *args, **kwargs):
            start = clock()
            result = call_next(*args, **kwargs)
            duration = clock() - start
            store = store_for(receiver)
            if store is not None:
                store.record_timing(name, duration, cumulative=cumulative)
            return result

        return measure

    def instrument(self, cls: type, names: Iterable[str]) -> List[str]:
        """
        Time the named instance methods of ``cls``.

        Returns:
            Names that received a new shim
        """
        wrapped = []
        for name in names:
            if wrap_method(cls, name, self._callback(name, instance_store), self.alias_prefix):
                wrapped.append(name)
        logger.debug(f"Timing {len(wrapped)} instance method(s) on {cls.__qualname__} ({self.mode.value})")
        return wrapped

    def instrument_selected(
        self,
        cls: type,
        visibility: Union[Visibility, str] = Visibility.PUBLIC,
        include_inherited: bool = False,
    ) -> List[str]:
        """Time the instance methods chosen by a visibility/inheritance policy."""
        names = select_instance_methods(cls, visibility=visibility, include_inherited=include_inherited)
        return self.instrument(cls, names)

    def instrument_class_methods(self, cls: type, names: Iterable[str]) -> List[str]:
        """Time the named classmethods/staticmethods; records go to the class store."""
        wrapped = []
        for name in names:
            if wrap_class_method(cls, name, self._callback(name, class_store), self.alias_prefix):
                wrapped.append(name)
        logger.debug(f"Timing {len(wrapped)} class method(s) on {cls.__qualname__} ({self.mode.value})")
        return wrapped

    def instrument_selected_class_methods(
        self,
        cls: type,
        visibility: Union[Visibility, str] = Visibility.PUBLIC,
        include_inherited: bool = False,
    ) -> List[str]:
        names = select_class_methods(cls, visibility=visibility, include_inherited=include_inherited)
        return self.instrument_class_methods(cls, names)
