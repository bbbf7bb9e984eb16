# ============================================================================
# ClassProfiler - Sink Factory
#
# Purpose: Build the default profiler sink from configuration
# Inputs: SinkConfig
# Outputs: Sink instance
# Dependencies: config, stream, local_file, base
# Usage: sink = build_sink(get_config().sink)
#
# Changelog:
#   2026-09-21: Initial factory (stdout, file, both)
# ============================================================================

from typing import Optional

from ClassProfiler.config import SinkConfig
from ClassProfiler.logging_utils import parse_level
from ClassProfiler.sinks.base import MultiSink, Sink
from ClassProfiler.sinks.local_file import RotatingFileSink
from ClassProfiler.sinks.stream import StreamSink


def build_sink(sink_config: SinkConfig, name: Optional[str] = None) -> Sink:
    """
    Create the sink described by ``sink_config``.

    Args:
        sink_config: Sink section of the active config
        name: Optional label for the stdout logger (usually the owning class)

    Returns:
        StreamSink, RotatingFileSink, or a MultiSink of both
    """
    level = parse_level(sink_config.level)
    if sink_config.type == "stdout":
        return StreamSink(level=level, name=name)

    file_sink = RotatingFileSink(
        sink_config.path,
        level=level,
        max_bytes=sink_config.max_bytes,
        backup_count=sink_config.backup_count,
    )
    if sink_config.type == "file":
        return file_sink
    return MultiSink(file_sink, StreamSink(level=level, name=name))
