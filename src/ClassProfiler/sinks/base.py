# ============================================================================
# ClassProfiler - Base Sink Interface
#
# Purpose: Abstract destination for profiler report lines, plus fan-out
# Inputs: (severity level, message) pairs
# Outputs: None
# Dependencies: abc, logging
# Usage: class MySink(Sink): ...; MultiSink(file_sink, stdout_sink).info("...")
#
# Changelog:
#   2026-09-21: Initial Sink interface and MultiSink fan-out
#   2026-09-28: as_sink adapter for plain logging.Logger objects
#   2026-10-17: close() on sinks (MultiSink closes its children)
# ============================================================================

from abc import ABC, abstractmethod
from typing import Any, List, Optional
import logging

from ClassProfiler.errors import ConfigurationError, SinkError


class Sink(ABC):
    """
    Abstract base class for profiler output destinations.

    Sinks accept a logging severity level and a message. They may raise
    SinkError; the reporting layer catches it so a broken destination never
    affects measured calls.
    """

    @abstractmethod
    def emit(self, level: int, message: str) -> None:
        """
        Write one message.

        Args:
            level: Severity (logging.INFO, logging.WARNING, ...)
            message: Text to write

        Raises:
            SinkError: If the write fails
        """
        pass

    @property
    def level(self) -> int:
        """Lowest severity this sink writes."""
        return logging.NOTSET

    def set_level(self, level: int) -> None:
        """Change the lowest severity this sink writes."""
        pass

    def close(self) -> None:
        """Release files or handlers held by this sink."""
        pass

    def info(self, message: str) -> None:
        self.emit(logging.INFO, message)

    def warning(self, message: str) -> None:
        self.emit(logging.WARNING, message)


class LoggerSink(Sink):
    """Sink that forwards to a ``logging.Logger``."""

    def __init__(self, logger: logging.Logger):
        self.logger = logger

    def emit(self, level: int, message: str) -> None:
        try:
            self.logger.log(level, message)
        except Exception as e:
            raise SinkError(f"Logger '{self.logger.name}' failed to emit", details=str(e)) from e

    @property
    def level(self) -> int:
        return self.logger.level

    def set_level(self, level: int) -> None:
        self.logger.setLevel(level)

    def __repr__(self) -> str:
        return f"LoggerSink({self.logger.name!r}, level={logging.getLevelName(self.level)})"


class MultiSink(Sink):
    """
    Fan-out sink forwarding every message to each child sink.

    All children are attempted; if any of them failed, a single SinkError
    naming the failures is raised afterwards.
    """

    def __init__(self, *sinks: Optional[Any]):
        self.sinks: List[Sink] = [as_sink(sink) for sink in sinks if sink is not None]

    def emit(self, level: int, message: str) -> None:
        failures = []
        for sink in self.sinks:
            try:
                sink.emit(level, message)
            except Exception as e:
                failures.append(f"{type(sink).__name__}: {e}")
        if failures:
            raise SinkError(f"{len(failures)} of {len(self.sinks)} sink(s) failed", details="; ".join(failures))

    @property
    def level(self) -> int:
        levels = [sink.level for sink in self.sinks]
        return min(levels) if levels else logging.INFO

    def set_level(self, level: int) -> None:
        for sink in self.sinks:
            sink.set_level(level)

    def close(self) -> None:
        for sink in self.sinks:
            sink.close()

    def __repr__(self) -> str:
        return f"MultiSink({', '.join(repr(sink) for sink in self.sinks)})"


def as_sink(target: Any) -> Sink:
    """
    Adapt a Sink or a ``logging.Logger`` to the Sink interface.

    Raises:
        ConfigurationError: If the object is neither
    """
    if isinstance(target, Sink):
        return target
    if isinstance(target, logging.Logger):
        return LoggerSink(target)
    raise ConfigurationError(
        "Profiler logger must be a Sink or logging.Logger",
        details=f"got {type(target).__name__}",
    )
