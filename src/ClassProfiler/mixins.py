# ============================================================================
# ClassProfiler - Profiling Mix-ins
#
# Purpose: Class-level setup API and per-instance read API for profiling
# Inputs: Method names or selection policies, called at class-definition time
# Outputs: Timing/allocation metrics on instances and classes; text reports
# Dependencies: instrumentation, reporting, sinks, config
# Usage:
#   class Worker(Profiled, track_performance=True, track_memory=True):
#       def run(self): ...
#   Worker().run(); Worker.performance_report(...)
#
# Changelog:
#   2026-09-02: Initial Benchmark mix-in
#   2026-09-07: Performance mix-in (time + total)
#   2026-09-14: Memory mix-in
#   2026-09-21: Logging mix-in with pluggable sinks; reports never raise on
#               sink failure (RuntimeWarning instead)
#   2026-10-03: Profiled class keyword arguments applied in __init_subclass__
#   2026-10-17: Sinks built by the mix-in are closed when replaced
# ============================================================================

from typing import Any, Dict, Iterable, List, Optional, Sequence, Union
import logging
import warnings

from ClassProfiler.config import get_config
from ClassProfiler.instrumentation.allocation import AllocationCollector
from ClassProfiler.instrumentation.selector import Visibility, select_by_flags, select_instance_methods
from ClassProfiler.instrumentation.store import AllocationRecord, TimingRecord, class_store, instance_store
from ClassProfiler.instrumentation.timing import TimingCollector, TimingMode
from ClassProfiler.logging_utils import get_logger, parse_level
from ClassProfiler.reporting.formatter import format_durations, format_table
from ClassProfiler.reporting.schema import ProfileSnapshot
from ClassProfiler.sinks.base import MultiSink, Sink, as_sink
from ClassProfiler.sinks.factory import build_sink
from ClassProfiler.sinks.local_file import RotatingFileSink
from ClassProfiler.sinks.stream import StreamSink

logger = get_logger(__name__)

SINK_ATTR = "_profiler_sink"
# True when the class's sink was built here (and may be closed on replacement)
SINK_OWNED_ATTR = "_profiler_sink_owned"

VisibilityArg = Union[Visibility, str]


def _emit_lines(cls: type, lines: Iterable[str], report_name: str) -> None:
    """Send report lines to the class's sink; sink failures become warnings."""
    try:
        sink = cls.profiler_logger()
        for line in lines:
            sink.info(line)
    except Exception as e:
        warnings.warn(
            f"[class-profiler] {report_name} logging failed: {type(e).__name__}: {e}",
            RuntimeWarning,
            stacklevel=3,
        )


def _sink_label(cls: type) -> str:
    return f"{cls.__module__}.{cls.__qualname__}"


def _install_sink(cls: type, sink: Sink, owned: bool) -> None:
    previous = cls.__dict__.get(SINK_ATTR)
    if previous is not None and previous is not sink and cls.__dict__.get(SINK_OWNED_ATTR, False):
        previous.close()
    setattr(cls, SINK_ATTR, sink)
    setattr(cls, SINK_OWNED_ATTR, owned)
    logger.debug(f"Profiler sink for {cls.__qualname__}: {sink!r}")


def _timings(store_owner: Any, is_class: bool = False) -> Dict[str, TimingRecord]:
    store = class_store(store_owner, create=False) if is_class else instance_store(store_owner, create=False)
    return store.timing_snapshot() if store is not None else {}


def _allocations(obj: Any) -> Dict[str, AllocationRecord]:
    store = instance_store(obj, create=False)
    return store.allocation_snapshot() if store is not None else {}


def _print_table(
    obj: Any,
    entries: Sequence[Sequence[Any]],
    headers: Sequence[str],
    include_zero: bool,
    sort_index: int,
    report_name: str,
) -> List[str]:
    report_config = get_config().report
    lines = format_table(
        entries,
        headers=headers,
        include_zero=include_zero,
        sort_index=sort_index,
        precision=report_config.precision,
        separator=report_config.separator,
    )
    _emit_lines(type(obj), lines, report_name)
    return lines


class Logging:
    """Per-class report sink and table printing."""

    @classmethod
    def profiler_logger(cls) -> Sink:
        """
        Sink used for this class's reports.

        A sink set on an ancestor is shared; otherwise a default sink is
        built from the active config and stored on the class.
        """
        for klass in cls.__mro__:
            sink = klass.__dict__.get(SINK_ATTR)
            if sink is not None:
                return sink
        sink = build_sink(get_config().sink, name=_sink_label(cls))
        _install_sink(cls, sink, owned=True)
        return sink

    @classmethod
    def set_profiler_logger(cls, target: Union[Sink, logging.Logger]) -> None:
        """
        Use a Sink or logging.Logger for this class (and its subclasses).

        The caller keeps ownership: the sink is never closed by the class.
        """
        _install_sink(cls, as_sink(target), owned=False)

    @classmethod
    def enable_profiler_logging_to_stdout(cls, level: Union[str, int] = "INFO") -> Sink:
        """Send reports to stdout."""
        sink = StreamSink(level=parse_level(level), name=_sink_label(cls))
        _install_sink(cls, sink, owned=True)
        return sink

    @classmethod
    def enable_profiler_logging_to_file(
        cls,
        path: str,
        level: Union[str, int] = "INFO",
        max_bytes: int = 1_048_576,
        backup_count: int = 0,
        also_stdout: bool = False,
    ) -> Sink:
        """
        Send reports to a file, optionally also to stdout.

        Args:
            path: Log file path
            level: Lowest severity written
            max_bytes: Rollover size
            backup_count: Rotated files kept (0 = never rotate)
            also_stdout: Fan out to stdout as well
        """
        numeric_level = parse_level(level)
        sink: Sink = RotatingFileSink(path, level=numeric_level, max_bytes=max_bytes, backup_count=backup_count)
        if also_stdout:
            sink = MultiSink(sink, StreamSink(level=numeric_level, name=_sink_label(cls)))
        _install_sink(cls, sink, owned=True)
        return sink

    def print_report(
        self,
        entries: Sequence[Sequence[Any]],
        headers: Sequence[str] = (),
        include_zero: bool = True,
        sort_index: int = 0,
    ) -> List[str]:
        """
        Render rows as an aligned table and emit each line at INFO.

        Returns:
            The rendered lines
        """
        return _print_table(self, entries, headers, include_zero, sort_index, "print_report")


class Benchmark(Logging):
    """Last-call durations for selected methods."""

    @classmethod
    def benchmark_methods(cls, *method_names: str) -> List[str]:
        """Record how long each call of the named methods takes."""
        return TimingCollector(mode=TimingMode.LAST).instrument(cls, method_names)

    @classmethod
    def benchmark_instance_methods(cls, visibility: VisibilityArg = Visibility.PUBLIC) -> List[str]:
        """Benchmark methods declared on this class only."""
        return TimingCollector(mode=TimingMode.LAST).instrument_selected(cls, visibility, include_inherited=False)

    @classmethod
    def benchmark_all_methods(cls, visibility: VisibilityArg = Visibility.PUBLIC) -> List[str]:
        """Benchmark methods declared on this class and its ancestors."""
        return TimingCollector(mode=TimingMode.LAST).instrument_selected(cls, visibility, include_inherited=True)

    @classmethod
    def benchmark_class_methods(cls, *method_names: str) -> List[str]:
        return TimingCollector(mode=TimingMode.LAST).instrument_class_methods(cls, method_names)

    @classmethod
    def benchmark_own_class_methods(cls, visibility: VisibilityArg = Visibility.PUBLIC) -> List[str]:
        return TimingCollector(mode=TimingMode.LAST).instrument_selected_class_methods(
            cls, visibility, include_inherited=False
        )

    @classmethod
    def benchmark_all_class_methods(cls, visibility: VisibilityArg = Visibility.PUBLIC) -> List[str]:
        return TimingCollector(mode=TimingMode.LAST).instrument_selected_class_methods(
            cls, visibility, include_inherited=True
        )

    @property
    def benchmarked(self) -> Dict[str, float]:
        """Method name to the duration (seconds) of its most recent call."""
        return {name: record.last for name, record in _timings(self).items()}

    @classmethod
    def class_benchmarked(cls) -> Dict[str, float]:
        """Class-level method name to the duration of its most recent call."""
        return {name: record.last for name, record in _timings(cls, is_class=True).items()}

    def benchmark_report(self, include_zero: bool = False) -> str:
        """Emit and return this object's benchmark results."""
        text = format_durations(
            f"Benchmark results ({type(self).__name__} instance):",
            self.benchmarked,
            include_zero=include_zero,
            precision=get_config().report.precision,
        )
        _emit_lines(type(self), [text], "benchmark_report")
        return text

    @classmethod
    def benchmark_class_report(cls, include_zero: bool = False) -> str:
        """Emit and return this class's class-method benchmark results."""
        text = format_durations(
            f"Benchmark results ({cls.__name__} class methods):",
            cls.class_benchmarked(),
            include_zero=include_zero,
            precision=get_config().report.precision,
        )
        _emit_lines(cls, [text], "benchmark_class_report")
        return text


class Performance(Logging):
    """Last and cumulative durations for selected methods."""

    @classmethod
    def track_performance(
        cls,
        inherited: bool = False,
        public: bool = True,
        protected: bool = True,
        private: bool = True,
    ) -> List[str]:
        """
        Select instance methods by visibility flags and time them cumulatively.

        Args:
            inherited: Include methods declared on ancestors
            public: Include public methods
            protected: Include ``_name`` methods
            private: Include ``__name`` methods
        """
        names = select_by_flags(cls, inherited=inherited, public=public, protected=protected, private=private)
        return cls.performance_methods(*names)

    @classmethod
    def performance_methods(cls, *method_names: str) -> List[str]:
        return TimingCollector(mode=TimingMode.CUMULATIVE).instrument(cls, method_names)

    @classmethod
    def performance_instance_methods(cls, visibility: VisibilityArg = Visibility.PUBLIC) -> List[str]:
        return TimingCollector(mode=TimingMode.CUMULATIVE).instrument_selected(cls, visibility, include_inherited=False)

    @property
    def performance(self) -> Dict[str, Dict[str, float]]:
        """Method name to ``{"time": last, "total": cumulative}`` seconds."""
        return {name: {"time": record.last, "total": record.total} for name, record in _timings(self).items()}

    def performance_report(self, include_zero: bool = False, sort_index: int = 1) -> List[str]:
        """
        Emit a Method | Time | Total table.

        Args:
            include_zero: Include methods measured at 0 seconds
            sort_index: 0 for method, 1 for time, 2 for total
        """
        entries = [[name, record.last, record.total] for name, record in _timings(self).items()]
        return _print_table(self, entries, ["Method", "Time", "Total"], include_zero, sort_index, "performance_report")


class Memory(Logging):
    """Allocation deltas for selected methods."""

    @classmethod
    def track_memory(
        cls,
        inherited: bool = False,
        public: bool = True,
        protected: bool = True,
        private: bool = True,
    ) -> List[str]:
        """Select instance methods by visibility flags and record their allocations."""
        return AllocationCollector().instrument_selected(
            cls, inherited=inherited, public=public, protected=protected, private=private
        )

    @classmethod
    def profile_methods(cls, *method_names: str) -> List[str]:
        return AllocationCollector().instrument(cls, method_names)

    @classmethod
    def profile_instance_methods(cls, visibility: VisibilityArg = Visibility.PUBLIC) -> List[str]:
        """Record allocations of methods declared on this class only."""
        names = select_instance_methods(cls, visibility=visibility, include_inherited=False)
        return AllocationCollector().instrument(cls, names)

    @property
    def profiled_memory(self) -> Dict[str, Dict[str, int]]:
        """Method name to ``{"allocated_objects", "malloc_increase_bytes"}`` of its last call."""
        return {
            name: {"allocated_objects": record.objects, "malloc_increase_bytes": record.bytes}
            for name, record in _allocations(self).items()
        }

    def memory_report(self, include_zero: bool = True, sort_index: int = 0) -> List[str]:
        """
        Emit a Method | Objects | Bytes table.

        Args:
            include_zero: Include rows with zero object deltas
            sort_index: 0 for method, 1 for objects, 2 for bytes
        """
        entries = [[name, record.objects, record.bytes] for name, record in _allocations(self).items()]
        return _print_table(self, entries, ["Method", "Objects", "Bytes"], include_zero, sort_index, "memory_report")


class Profiled(Benchmark, Performance, Memory):
    """
    All profiling mix-ins in one base class.

    Setup can be passed as class keyword arguments and is applied when the
    subclass is created:

        class Worker(Profiled, track_performance=True, track_memory={"inherited": True}):
            ...

    ``True`` applies the default policy, a dict is passed as keyword
    arguments, and for ``benchmark`` a sequence names the methods.
    """

    def __init_subclass__(
        cls,
        track_performance: Union[bool, Dict[str, Any], None] = None,
        track_memory: Union[bool, Dict[str, Any], None] = None,
        benchmark: Union[bool, Sequence[str], None] = None,
        **kwargs: Any,
    ):
        super().__init_subclass__(**kwargs)
        if benchmark:
            if benchmark is True:
                cls.benchmark_instance_methods()
            else:
                cls.benchmark_methods(*benchmark)
        if track_performance:
            cls.track_performance(**(track_performance if isinstance(track_performance, dict) else {}))
        if track_memory:
            cls.track_memory(**(track_memory if isinstance(track_memory, dict) else {}))

    def timing_snapshot(self) -> Dict[str, TimingRecord]:
        """Copy of this object's timing records."""
        return _timings(self)

    def allocation_snapshot(self) -> Dict[str, AllocationRecord]:
        """Copy of this object's allocation records."""
        return _allocations(self)

    @classmethod
    def class_timing_snapshot(cls) -> Dict[str, TimingRecord]:
        return _timings(cls, is_class=True)

    def snapshot(self, owner: Optional[str] = None) -> ProfileSnapshot:
        """Exportable snapshot of this object's metrics."""
        return ProfileSnapshot.from_store(owner or type(self).__qualname__, instance_store(self, create=False))

    def profile_report(self) -> List[str]:
        """Emit the performance table followed by the memory table."""
        return self.performance_report() + [""] + self.memory_report()
