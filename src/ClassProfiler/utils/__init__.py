# ============================================================================
# ClassProfiler - Utils Package
#
# Purpose: Shared utility functions
# Inputs: None
# Outputs: Public API exports
# Dependencies: None
# Usage: from ClassProfiler.utils import serialize_snapshots_to_json
#
# Changelog:
#   2026-10-03: Initial utils package
#   2026-10-17: Timestamp helper moved into reporting.schema
# ============================================================================

from ClassProfiler.utils.serialization import deserialize_snapshots_from_json, serialize_snapshots_to_json

__all__ = ["deserialize_snapshots_from_json", "serialize_snapshots_to_json"]
