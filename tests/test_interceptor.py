# ============================================================================
# ClassProfiler - Interceptor Tests
#
# Purpose: Pass-through, exception identity, idempotency and layering of shims
# Inputs: Small classes declared per test
# Outputs: Test pass/fail
# Dependencies: pytest, ClassProfiler
# Usage: pytest tests/test_interceptor.py -v
#
# Changelog:
#   2026-09-02: Initial wrap_method tests
#   2026-09-09: Class-level wrapping
#   2026-09-16: Layering and subclass re-wrap tests
# ============================================================================

import pytest

from ClassProfiler.errors import ConfigurationError, MethodNotFoundError
from ClassProfiler.instrumentation.interceptor import (
    is_wrapped,
    wrap,
    wrap_class_method,
    wrap_method,
    wrapped_methods,
)


def passthrough(calls):
    """Callback that records the receiver and forwards the call unchanged."""

    def callback(receiver, call_next, *args, **kwargs):
        calls.append(receiver)
        return call_next(*args, **kwargs)

    return callback


def make_calculator():
    class Calculator:
        def __init__(self, offset=0):
            self.offset = offset

        def add(self, a, b=0, *rest, scale=1):
            """Add things."""
            return (a + b + sum(rest) + self.offset) * scale

        def explode(self, error):
            raise error

        @classmethod
        def build(cls, offset):
            return cls(offset)

        @staticmethod
        def double(x):
            return x * 2

        @property
        def label(self):
            return "calc"

    return Calculator


class TestWrapMethod:
    def test_result_and_arguments_pass_through(self):
        Calculator = make_calculator()
        calls = []
        assert wrap_method(Calculator, "add", passthrough(calls)) is True

        calc = Calculator(offset=1)
        assert calc.add(1, 2, 3, 4, scale=2) == 22
        assert calls == [calc]

    def test_metadata_is_preserved(self):
        Calculator = make_calculator()
        wrap_method(Calculator, "add", passthrough([]))
        assert Calculator.add.__name__ == "add"
        assert Calculator.add.__doc__ == "Add things."
        assert Calculator.add.__wrapped__ is not None

    def test_exception_propagates_with_same_identity(self):
        Calculator = make_calculator()
        wrap_method(Calculator, "explode", passthrough([]))
        error = KeyError("boom")
        with pytest.raises(KeyError) as excinfo:
            Calculator().explode(error)
        assert excinfo.value is error

    def test_missing_method_raises(self):
        Calculator = make_calculator()
        with pytest.raises(MethodNotFoundError) as excinfo:
            wrap_method(Calculator, "subtract", passthrough([]))
        assert isinstance(excinfo.value, AttributeError)
        assert "subtract" in str(excinfo.value)

    @pytest.mark.parametrize("name", ["label", "build", "double"])
    def test_non_instance_method_rejected(self, name):
        Calculator = make_calculator()
        with pytest.raises(ConfigurationError):
            wrap_method(Calculator, name, passthrough([]))

    def test_same_prefix_twice_is_a_no_op(self):
        Calculator = make_calculator()
        calls = []
        assert wrap_method(Calculator, "add", passthrough(calls), "_timed_") is True
        assert wrap_method(Calculator, "add", passthrough(calls), "_timed_") is False

        Calculator().add(1)
        assert len(calls) == 1
        assert wrapped_methods(Calculator) == ["_timed_add"]

    def test_different_prefixes_layer(self):
        Calculator = make_calculator()
        order = []

        def tagged(tag):
            def callback(receiver, call_next, *args, **kwargs):
                order.append(tag)
                return call_next(*args, **kwargs)

            return callback

        wrap_method(Calculator, "add", tagged("inner"), "_timed_")
        wrap_method(Calculator, "add", tagged("outer"), "_allocated_")

        assert Calculator().add(2, 3) == 5
        assert order == ["outer", "inner"]
        assert is_wrapped(Calculator, "add", "_timed_")
        assert is_wrapped(Calculator, "add", "_allocated_")

    def test_subclass_wrap_leaves_parent_untouched(self):
        Calculator = make_calculator()

        class Scientific(Calculator):
            pass

        calls = []
        wrap_method(Scientific, "add", passthrough(calls))

        Calculator().add(1)
        assert calls == []
        assert not is_wrapped(Calculator, "add")
        assert wrapped_methods(Calculator) == []

        Scientific().add(1)
        assert len(calls) == 1
        assert "add" in vars(Scientific)

    def test_subclass_rewrap_of_wrapped_parent_is_a_no_op(self):
        Calculator = make_calculator()

        class Scientific(Calculator):
            pass

        calls = []
        wrap_method(Calculator, "add", passthrough(calls))
        assert wrap_method(Scientific, "add", passthrough(calls)) is False

        Scientific().add(1)
        assert len(calls) == 1

    def test_recursion_reaches_the_shim_every_time(self):
        class Counter:
            def countdown(self, n):
                return 0 if n == 0 else 1 + self.countdown(n - 1)

        calls = []
        wrap_method(Counter, "countdown", passthrough(calls))
        assert Counter().countdown(4) == 4
        assert len(calls) == 5


class TestWrapClassMethod:
    def test_classmethod_receiver_is_the_called_class(self):
        Calculator = make_calculator()

        class Scientific(Calculator):
            pass

        calls = []
        assert wrap_class_method(Calculator, "build", passthrough(calls)) is True

        built = Scientific.build(3)
        assert isinstance(built, Scientific)
        assert built.offset == 3
        assert calls == [Scientific]

    def test_staticmethod_receiver_is_the_wrapping_class(self):
        Calculator = make_calculator()
        calls = []
        wrap_class_method(Calculator, "double", passthrough(calls))

        assert Calculator.double(4) == 8
        assert Calculator(0).double(5) == 10
        assert calls == [Calculator, Calculator]

    def test_plain_method_rejected(self):
        Calculator = make_calculator()
        with pytest.raises(ConfigurationError):
            wrap_class_method(Calculator, "add", passthrough([]))

    def test_idempotent(self):
        Calculator = make_calculator()
        calls = []
        wrap_class_method(Calculator, "build", passthrough(calls))
        assert wrap_class_method(Calculator, "build", passthrough(calls)) is False
        Calculator.build(1)
        assert len(calls) == 1


def test_wrap_dispatches_by_attribute_type():
    Calculator = make_calculator()
    calls = []
    wrap(Calculator, "add", passthrough(calls))
    wrap(Calculator, "double", passthrough(calls))

    calc = Calculator()
    calc.add(1)
    Calculator.double(1)
    assert calls == [calc, Calculator]
