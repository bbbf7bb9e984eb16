# ============================================================================
# ClassProfiler - Package Initialization
#
# Purpose: Package-level exports and version information
# Inputs: None
# Outputs: Public API exports
# Dependencies: None
# Usage: from ClassProfiler import Profiled
#
# Changelog:
#   2026-09-02: Initial package setup
#   2026-10-03: Export Profiled and ProfileSnapshot
# ============================================================================

NAME = "class-profiler"
__version__ = "0.1.0"
__license__ = "MIT"

from ClassProfiler.config import Config, get_config, set_config
from ClassProfiler.errors import ClassProfilerError, ConfigurationError, MethodNotFoundError, SinkError
from ClassProfiler.mixins import Benchmark, Logging, Memory, Performance, Profiled
from ClassProfiler.reporting.schema import ProfileSnapshot
from ClassProfiler.sinks.base import MultiSink, Sink

__all__ = [
    "NAME",
    "__version__",
    "Benchmark",
    "ClassProfilerError",
    "Config",
    "ConfigurationError",
    "Logging",
    "Memory",
    "MethodNotFoundError",
    "MultiSink",
    "Performance",
    "ProfileSnapshot",
    "Profiled",
    "Sink",
    "SinkError",
    "get_config",
    "set_config",
]
