# ============================================================================
# ClassProfiler - Sinks Package
#
# Purpose: Output destinations for profiler reports
# Inputs: None
# Outputs: Public API exports
# Dependencies: None
# Usage: from ClassProfiler.sinks import Sink, MultiSink, StreamSink, RotatingFileSink
#
# Changelog:
#   2026-09-21: Initial sinks package
# ============================================================================

from ClassProfiler.sinks.base import LoggerSink, MultiSink, Sink, as_sink
from ClassProfiler.sinks.factory import build_sink
from ClassProfiler.sinks.local_file import RotatingFileSink
from ClassProfiler.sinks.stream import StreamSink

__all__ = [
    "Sink",
    "LoggerSink",
    "MultiSink",
    "RotatingFileSink",
    "StreamSink",
    "as_sink",
    "build_sink",
]
