# ============================================================================
# ClassProfiler - Interceptor
#
# Purpose: Replace a class's method with a shim that routes calls through a
#          measurement callback and back into the wrapped method
# Inputs: Class, method name, callback(receiver, call_next, *args, **kwargs)
# Outputs: Shim installed on the class; registry entry per alias
# Dependencies: functools, inspect, dataclasses
# Usage: wrap_method(MyClass, "run", lambda obj, call_next, *a, **kw: call_next(*a, **kw))
#
# Changelog:
#   2026-09-02: Initial wrap_method for instance methods
#   2026-09-09: wrap_class_method for classmethod/staticmethod
#   2026-09-16: Layer tracking on shims; same alias prefix is a no-op even
#               when a subclass re-wraps a name its parent already wrapped
# ============================================================================

from dataclasses import dataclass
from typing import Any, Callable, Dict, FrozenSet, List
import functools
import inspect

from ClassProfiler.errors import ConfigurationError, MethodNotFoundError
from ClassProfiler.instrumentation.selector import MemberKind
from ClassProfiler.logging_utils import get_logger

logger = get_logger(__name__)

DEFAULT_ALIAS_PREFIX = "_wrapped_"

REGISTRY_ATTR = "_profiler_registry"
LAYERS_ATTR = "_profiler_layers"

# callback(receiver, call_next, *args, **kwargs) -> result
MeasurementCallback = Callable[..., Any]


@dataclass(frozen=True)
class WrapRecord:
    """One shim installed on a class."""
    name: str
    alias: str
    kind: MemberKind
    declared_on: type


def _registry(cls: type) -> Dict[str, WrapRecord]:
    registry = cls.__dict__.get(REGISTRY_ATTR)
    if registry is None:
        registry = {}
        setattr(cls, REGISTRY_ATTR, registry)
    return registry


def _resolve(cls: type, name: str) -> Any:
    try:
        return inspect.getattr_static(cls, name)
    except AttributeError:
        raise MethodNotFoundError(cls, name) from None


def _declaring_class(cls: type, name: str) -> type:
    for owner in cls.__mro__:
        if name in vars(owner):
            return owner
    return cls


def _layers(func: Any) -> FrozenSet[str]:
    return getattr(func, LAYERS_ATTR, frozenset())


def _install(cls: type, name: str, alias: str, kind: MemberKind, replacement: Any) -> None:
    declared_on = _declaring_class(cls, name)
    setattr(cls, name, replacement)
    _registry(cls)[alias] = WrapRecord(name=name, alias=alias, kind=kind, declared_on=declared_on)
    logger.debug(f"Wrapped {cls.__qualname__}.{name} as {alias} ({kind.value})")


def wrap_method(
    cls: type,
    name: str,
    callback: MeasurementCallback,
    alias_prefix: str = DEFAULT_ALIAS_PREFIX,
) -> bool:
    """
    Wrap an instance method so each call runs through ``callback``.

    The shim calls ``callback(instance, call_next, *args, **kwargs)`` where
    ``call_next`` is the previous implementation bound to the instance, and
    returns whatever the callback returns. Wrapping a method that is already
    a shim layers the new shim on top of it.

    Args:
        cls: Class to modify (ancestors are never touched)
        name: Method name
        callback: Measurement callback; must call ``call_next`` exactly once
        alias_prefix: Identifies this layer; re-wrapping with the same prefix is a no-op

    Returns:
        True if a shim was installed, False if this layer was already present

    Raises:
        MethodNotFoundError: If ``cls`` has no attribute ``name``
        ConfigurationError: If the attribute is not a plain instance method
    """
    original = _resolve(cls, name)
    if not inspect.isfunction(original):
        raise ConfigurationError(
            f"'{name}' on {cls.__qualname__} is not an instance method",
            details=f"found {type(original).__name__}",
        )

    alias = f"{alias_prefix}{name}"
    layers = _layers(original)
    if alias in layers:
        logger.debug(f"{cls.__qualname__}.{name} already wrapped as {alias}; skipping")
        return False

    @functools.wraps(original)
    def shim(self, *args, **kwargs):
        return callback(self, original.__get__(self, type(self)), *args, **kwargs)

    setattr(shim, LAYERS_ATTR, layers | {alias})
    _install(cls, name, alias, MemberKind.INSTANCE, shim)
    return True


def wrap_class_method(
    cls: type,
    name: str,
    callback: MeasurementCallback,
    alias_prefix: str = DEFAULT_ALIAS_PREFIX,
) -> bool:
    """
    Wrap a classmethod or staticmethod so each call runs through ``callback``.

    The receiver passed to the callback is the class the call was made on
    (classmethods) or ``cls`` itself (staticmethods, which have no receiver).

    Returns:
        True if a shim was installed, False if this layer was already present

    Raises:
        MethodNotFoundError: If ``cls`` has no attribute ``name``
        ConfigurationError: If the attribute is not a classmethod/staticmethod
    """
    raw = _resolve(cls, name)
    if not isinstance(raw, (classmethod, staticmethod)):
        raise ConfigurationError(
            f"'{name}' on {cls.__qualname__} is not a class-level method",
            details=f"found {type(raw).__name__}",
        )

    func = raw.__func__
    alias = f"{alias_prefix}{name}"
    layers = _layers(func)
    if alias in layers:
        logger.debug(f"{cls.__qualname__}.{name} already wrapped as {alias}; skipping")
        return False

    if isinstance(raw, classmethod):

        @functools.wraps(func)
        def shim(klass, *args, **kwargs):
            return callback(klass, func.__get__(klass, type(klass)), *args, **kwargs)

        setattr(shim, LAYERS_ATTR, layers | {alias})
        replacement: Any = classmethod(shim)
    else:

        @functools.wraps(func)
        def shim(*args, **kwargs):
            return callback(cls, func, *args, **kwargs)

        setattr(shim, LAYERS_ATTR, layers | {alias})
        replacement = staticmethod(shim)

    _install(cls, name, alias, MemberKind.CLASS, replacement)
    return True


def wrap(
    cls: type,
    name: str,
    callback: MeasurementCallback,
    alias_prefix: str = DEFAULT_ALIAS_PREFIX,
) -> bool:
    """Wrap ``name`` with the instance or class-level shim its attribute type calls for."""
    raw = _resolve(cls, name)
    if isinstance(raw, (classmethod, staticmethod)):
        return wrap_class_method(cls, name, callback, alias_prefix)
    return wrap_method(cls, name, callback, alias_prefix)


def wrapped_methods(cls: type) -> List[str]:
    """Aliases of the shims installed directly on ``cls``, in wrap order."""
    return list(cls.__dict__.get(REGISTRY_ATTR, {}))


def is_wrapped(cls: type, name: str, alias_prefix: str = DEFAULT_ALIAS_PREFIX) -> bool:
    """True when the method ``cls.name`` resolves to a shim carrying this layer."""
    try:
        raw = inspect.getattr_static(cls, name)
    except AttributeError:
        return False
    func = raw.__func__ if isinstance(raw, (classmethod, staticmethod)) else raw
    return f"{alias_prefix}{name}" in _layers(func)
