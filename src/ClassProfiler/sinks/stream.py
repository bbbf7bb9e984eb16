# ============================================================================
# ClassProfiler - Stream Sink
#
# Purpose: Write profiler report lines to stdout (or any text stream)
# Inputs: (severity level, message) pairs
# Outputs: Lines on the stream
# Dependencies: logging, sys, base
# Usage: sink = StreamSink(level=logging.INFO)
#
# Changelog:
#   2026-09-21: Initial stdout sink
#   2026-10-17: One logger per sink (same-named sinks no longer share handlers); close()
# ============================================================================

from typing import Optional, TextIO
import itertools
import logging
import sys

from ClassProfiler.logging_utils import get_logger
from ClassProfiler.sinks.base import LoggerSink

logger = get_logger(__name__)

REPORT_FORMAT = "%(message)s"

_ids = itertools.count(1)


class StreamSink(LoggerSink):
    """
    Sink writing plain message lines to a stream through a dedicated logger.

    Every sink gets its own logger, so sinks built with the same name never
    share handlers or levels. The logger does not propagate, so report lines
    are not duplicated by the root logger's handlers.
    """

    def __init__(self, stream: Optional[TextIO] = None, level: int = logging.WARNING, name: Optional[str] = None):
        """
        Initialize stream sink.

        Args:
            stream: Target stream (default: sys.stdout at construction time)
            level: Lowest severity written
            name: Label included in the logger name (usually the owning class)
        """
        suffix = f"{name}.{next(_ids)}" if name else str(next(_ids))
        report_logger = logging.getLogger(f"ClassProfiler.report.{suffix}")
        handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
        handler.setFormatter(logging.Formatter(REPORT_FORMAT))
        report_logger.addHandler(handler)
        report_logger.setLevel(level)
        report_logger.propagate = False
        super().__init__(report_logger)
        self.handler = handler
        self.stream = handler.stream
        logger.debug(f"StreamSink initialized: {report_logger.name} (level={logging.getLevelName(level)})")

    def close(self) -> None:
        """Detach the handler; the stream itself is left open."""
        self.logger.removeHandler(self.handler)
