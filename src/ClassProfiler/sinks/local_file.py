# ============================================================================
# ClassProfiler - Local File Sink
#
# Purpose: Write profiler report lines to a size-rotated local log file
# Inputs: (severity level, message) pairs
# Outputs: Log file (plus rotated backups when backup_count > 0)
# Dependencies: logging.handlers, pathlib, base
# Usage: sink = RotatingFileSink("profiler.log", max_bytes=1_048_576)
#
# Changelog:
#   2026-09-21: Initial file sink with size-based rotation
# ============================================================================

from pathlib import Path
from typing import Union
import itertools
import logging
from logging.handlers import RotatingFileHandler

from ClassProfiler.errors import SinkError
from ClassProfiler.logging_utils import get_logger
from ClassProfiler.sinks.base import LoggerSink

logger = get_logger(__name__)

FILE_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"

_ids = itertools.count(1)


class RotatingFileSink(LoggerSink):
    """
    Sink that appends report lines to a file.

    With ``backup_count=0`` the file is never rotated; otherwise it rolls
    over once it would exceed ``max_bytes``.
    """

    def __init__(
        self,
        path: Union[str, Path],
        level: int = logging.INFO,
        max_bytes: int = 1_048_576,
        backup_count: int = 0,
    ):
        """
        Initialize file sink.

        Args:
            path: Log file path (parent directories are created)
            level: Lowest severity written
            max_bytes: Rollover size
            backup_count: Number of rotated files kept

        Raises:
            SinkError: If the file cannot be opened
        """
        self.path = Path(path)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            handler = RotatingFileHandler(self.path, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8")
        except OSError as e:
            logger.exception("Failed to open profiler log file")
            raise SinkError(f"Failed to open profiler log file {self.path}", details=str(e)) from e

        handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        file_logger = logging.getLogger(f"ClassProfiler.file.{next(_ids)}")
        file_logger.addHandler(handler)
        file_logger.setLevel(level)
        file_logger.propagate = False
        super().__init__(file_logger)
        self.handler = handler
        logger.info(f"RotatingFileSink initialized: {self.path}")

    def close(self) -> None:
        """Close the underlying file handle."""
        self.logger.removeHandler(self.handler)
        self.handler.close()
