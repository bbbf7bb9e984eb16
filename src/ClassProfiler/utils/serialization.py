# ============================================================================
# ClassProfiler - Serialization Utilities
#
# Purpose: Serialize profile snapshots to JSON
# Inputs: ProfileSnapshot objects
# Outputs: JSON strings
# Dependencies: json, pydantic
# Usage: json_str = serialize_snapshots_to_json([snapshot], indent=2)
#
# Changelog:
#   2026-10-03: Initial serialization for CLI --json output
# ============================================================================

import json
from typing import Iterable, List, Optional

from ClassProfiler.reporting.schema import ProfileSnapshot


def serialize_snapshots_to_json(snapshots: Iterable[ProfileSnapshot], indent: Optional[int] = None) -> str:
    """
    Serialize snapshots to a JSON array.

    Args:
        snapshots: Snapshots to serialize
        indent: JSON indentation (None for compact, 2 for pretty-print)

    Returns:
        JSON string
    """
    data = [snapshot.model_dump(mode="json") for snapshot in snapshots]
    if indent is None:
        return json.dumps(data, separators=(",", ":"), ensure_ascii=False)
    return json.dumps(data, indent=indent, ensure_ascii=False)


def deserialize_snapshots_from_json(json_str: str) -> List[ProfileSnapshot]:
    """
    Deserialize snapshots from a JSON array string.

    Args:
        json_str: JSON string

    Returns:
        List of ProfileSnapshot objects
    """
    return [ProfileSnapshot(**item) for item in json.loads(json_str)]
