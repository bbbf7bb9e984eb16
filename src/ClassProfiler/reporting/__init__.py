# ============================================================================
# ClassProfiler - Reporting Package
#
# Purpose: Report formatting and snapshot schema
# Inputs: None
# Outputs: Public API exports
# Dependencies: None
# Usage: from ClassProfiler.reporting import format_table, ProfileSnapshot
#
# Changelog:
#   2026-09-21: Initial reporting package
#   2026-10-03: Exported ProfileSnapshot
# ============================================================================

from ClassProfiler.reporting.formatter import format_durations, format_table
from ClassProfiler.reporting.schema import AllocationEntry, ProfileSnapshot, TimingEntry

__all__ = ["AllocationEntry", "ProfileSnapshot", "TimingEntry", "format_durations", "format_table"]
