# ============================================================================
# ClassProfiler - Timing Collector Tests
#
# Purpose: Duration recording, modes, recursion, failures, inheritance
# Inputs: Small classes declared per test, fake clock
# Outputs: Test pass/fail
# Dependencies: pytest, ClassProfiler
# Usage: pytest tests/test_timing.py -v
#
# Changelog:
#   2026-09-02: Initial timing tests
#   2026-09-07: Cumulative mode and recursion ordering
# ============================================================================

import time

import pytest

from ClassProfiler.instrumentation.store import class_store, instance_store
from ClassProfiler.instrumentation.timing import TimingCollector, TimingMode


class TestModes:
    def test_last_mode_keeps_total_equal_to_last(self, fake_clock):
        class Task:
            def run(self):
                return "done"

        TimingCollector(mode="last", clock=fake_clock).instrument(Task, ["run"])
        task = Task()
        assert task.run() == "done"
        task.run()

        record = instance_store(task).timings["run"]
        assert record.last == 1.0
        assert record.total == 1.0
        assert record.calls == 2

    def test_cumulative_mode_accumulates(self, fake_clock):
        class Task:
            def run(self):
                return "done"

        TimingCollector(mode=TimingMode.CUMULATIVE, clock=fake_clock).instrument(Task, ["run"])
        task = Task()
        for _ in range(3):
            task.run()

        record = instance_store(task).timings["run"]
        assert record.last == 1.0
        assert record.total == 3.0
        assert record.calls == 3

    def test_mode_defaults_to_config(self, default_config):
        default_config.timing.mode = "last"
        assert TimingCollector().mode is TimingMode.LAST

    def test_invalid_mode_rejected(self):
        with pytest.raises(ValueError):
            TimingCollector(mode="median")


def test_recursion_outermost_frame_finishes_last(fake_clock):
    """Each frame records its own duration; the outermost is written last."""

    class Counter:
        def countdown(self, n):
            return n if n == 0 else self.countdown(n - 1)

    TimingCollector(mode="cumulative", clock=fake_clock).instrument(Counter, ["countdown"])
    counter = Counter()
    counter.countdown(2)

    # Clock reads: starts at 0, 1, 2; ends at 3, 4, 5 -> durations 1, 3, 5
    record = instance_store(counter).timings["countdown"]
    assert record.calls == 3
    assert record.last == 5.0
    assert record.total == 9.0


def test_failed_call_records_nothing():
    class Task:
        def fail(self, error):
            raise error

    TimingCollector().instrument(Task, ["fail"])
    task = Task()
    error = RuntimeError("nope")
    with pytest.raises(RuntimeError) as excinfo:
        task.fail(error)

    assert excinfo.value is error
    store = instance_store(task, create=False)
    assert store is None or "fail" not in store.timings


def test_durations_non_negative_and_totals_non_decreasing():
    class Task:
        def run(self, n):
            return sum(range(n))

    TimingCollector().instrument(Task, ["run"])
    task = Task()
    totals = []
    for n in (10, 1000, 10):
        task.run(n)
        record = instance_store(task).timings["run"]
        assert record.last >= 0.0
        totals.append(record.total)
    assert totals == sorted(totals)


def test_slow_method_takes_at_least_as_long_as_fast_method():
    class Pair:
        def slow(self):
            time.sleep(0.01)

        def fast(self):
            return None

    TimingCollector().instrument(Pair, ["slow", "fast"])
    pair = Pair()
    pair.slow()
    pair.fast()

    timings = instance_store(pair).timings
    assert timings["slow"].last >= timings["fast"].last >= 0.0


def test_instances_keep_separate_metrics(fake_clock):
    class Task:
        def run(self):
            pass

    TimingCollector(clock=fake_clock).instrument(Task, ["run"])
    first, second = Task(), Task()
    first.run()
    first.run()
    second.run()

    assert instance_store(first).timings["run"].calls == 2
    assert instance_store(second).timings["run"].calls == 1


def test_subclass_without_inherited_records_only_own_methods():
    class Parent:
        def parent_work(self):
            return "parent"

    class Child(Parent):
        def child_work(self):
            return "child"

    wrapped = TimingCollector().instrument_selected(Child, "public", include_inherited=False)
    assert wrapped == ["child_work"]

    child = Child()
    assert child.parent_work() == "parent"
    assert child.child_work() == "child"
    assert set(instance_store(child).timings) == {"child_work"}


def test_instrument_selected_with_inherited_wraps_on_the_subclass():
    class Parent:
        def parent_work(self):
            return "parent"

    class Child(Parent):
        pass

    TimingCollector().instrument_selected(Child, "public", include_inherited=True)
    Parent().parent_work()
    child = Child()
    child.parent_work()

    assert "parent_work" in vars(Child)
    assert set(instance_store(child).timings) == {"parent_work"}


def test_class_methods_record_into_the_class_store(fake_clock):
    class Factory:
        @classmethod
        def make(cls):
            return cls()

        @staticmethod
        def helper():
            return 42

    wrapped = TimingCollector(mode="last", clock=fake_clock).instrument_selected_class_methods(Factory, "public")
    assert wrapped == ["make", "helper"]

    assert isinstance(Factory.make(), Factory)
    assert Factory.helper() == 42

    store = class_store(Factory)
    assert store.timings["make"].last == 1.0
    assert store.timings["helper"].calls == 1


def test_slots_instance_without_store_still_returns_result():
    class Compact:
        __slots__ = ("value",)

        def __init__(self):
            self.value = 7

        def read(self):
            return self.value

    TimingCollector().instrument(Compact, ["read"])
    compact = Compact()
    assert compact.read() == 7
    assert instance_store(compact, create=False) is None
