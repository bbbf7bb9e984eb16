# ============================================================================
# ClassProfiler - Report Formatter
#
# Purpose: Render metric snapshots as sorted, column-aligned text
# Inputs: Rows of (method, value, ...) and headers
# Outputs: Lines of text
# Dependencies: None
# Usage: lines = format_table(rows, headers=["Method", "Time", "Total"], sort_index=1)
#
# Changelog:
#   2026-09-21: Initial table and duration-list formatting
#   2026-09-28: Column widths computed from rendered cells (floats included)
# ============================================================================

from typing import Any, List, Mapping, Sequence, Tuple

from ClassProfiler.logging_utils import get_logger

logger = get_logger(__name__)


def _as_float(value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def _sort_key(value: Any) -> Tuple[int, Any]:
    # Numbers sort numerically and ahead of text
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return (0, float(value))
    return (1, str(value))


def _render(value: Any, precision: int) -> str:
    if isinstance(value, float):
        return f"{value:.{precision}f}"
    return str(value)


def format_table(
    rows: Sequence[Sequence[Any]],
    headers: Sequence[str] = (),
    include_zero: bool = True,
    sort_index: int = 0,
    precision: int = 6,
    separator: str = " | ",
) -> List[str]:
    """
    Render rows as an aligned table.

    Args:
        rows: Data rows; the second cell is the metric used for zero filtering
        headers: Optional header row (never sorted or filtered)
        include_zero: Keep rows whose second cell is <= 0
        sort_index: Column to sort by
        precision: Decimal places for float cells
        separator: Cell separator

    Returns:
        One string per line, header first
    """
    data = [list(row) for row in rows]
    if not include_zero:
        data = [row for row in data if len(row) > 1 and _as_float(row[1]) > 0.0]

    width = max([len(headers)] + [len(row) for row in data]) if (headers or data) else 0
    if data and not 0 <= sort_index < width:
        logger.debug(f"sort_index {sort_index} out of range for {width} column(s); sorting by column 0")
        sort_index = 0
    data.sort(key=lambda row: _sort_key(row[sort_index]) if sort_index < len(row) else (2, ""))

    table = ([list(headers)] if headers else []) + data
    rendered = [[_render(cell, precision) for cell in row] for row in table]
    widths = [0] * width
    for row in rendered:
        for index, cell in enumerate(row):
            widths[index] = max(widths[index], len(cell))

    return [separator.join(cell.ljust(widths[i]) for i, cell in enumerate(row)).rstrip() for row in rendered]


def format_durations(
    title: str,
    durations: Mapping[str, float],
    include_zero: bool = False,
    precision: int = 6,
) -> str:
    """
    Render a title followed by one ``"  name: 0.000123s"`` line per method.

    Args:
        title: First line
        durations: Method name to seconds
        include_zero: Keep methods measured at 0 seconds
        precision: Decimal places
    """
    lines = [title]
    for name, seconds in durations.items():
        if not include_zero and _as_float(seconds) <= 0.0:
            continue
        lines.append(f"  {name}: {_as_float(seconds):.{precision}f}s")
    return "\n".join(lines)
