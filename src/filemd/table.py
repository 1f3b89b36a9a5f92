"""Markdown pipe-table rendering.

Cells of any type are stringified with :func:`format_cell`, escaped so
they fit on a single table line, and emitted as ``| a | b |`` rows.
When a header row is requested it is followed by a separator line that
carries the per-column alignment markers.
"""

from __future__ import annotations

import datetime as _dt
import re
from typing import Any, List, Mapping, Optional, Sequence

ALIGNMENT_MARKERS = {
    "left": ":---",
    "center": ":---:",
    "right": "---:",
    "default": "---",
}
DEFAULT_MARKER = ALIGNMENT_MARKERS["default"]

_LINE_BREAK = re.compile(r"\r\n|\r|\n")
_LITERAL_MARKER = re.compile(r":?-{3,}:?")


def format_cell(value: Any) -> str:
    """Stringify a cell value uniformly across readers."""
    if value is None:
        return ""
    # bool before numbers: True is an int
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (_dt.datetime, _dt.date, _dt.time)):
        return value.isoformat()
    return str(value)


def escape_cell(text: str) -> str:
    return _LINE_BREAK.sub(" ", text.replace("|", "\\|"))


def alignment_marker(alignment: Optional[str]) -> str:
    """Map an alignment name (or literal marker) to its separator token."""
    if alignment is None:
        return DEFAULT_MARKER
    token = alignment.strip()
    if token.lower() in ALIGNMENT_MARKERS:
        return ALIGNMENT_MARKERS[token.lower()]
    if _LITERAL_MARKER.fullmatch(token):
        return token
    return DEFAULT_MARKER


def _row_line(row: Sequence[Any], column_count: int) -> str:
    cells = [escape_cell(format_cell(row[c])) for c in range(column_count)]
    return "| " + " | ".join(cells) + " |"


def render_table(
    table: Sequence[Sequence[Any]],
    include_header_row: bool = True,
    alignments: Optional[Mapping[int, str]] = None,
) -> str:
    """Render a rectangular table as a Markdown pipe table.

    Parameters
    ----------
    table:
        Rows of equal length, as produced by
        :func:`filemd.columns.normalize_rows`.
    include_header_row:
        Emit row 0 as the header followed by a separator line.
    alignments:
        Column index to alignment.  Keys outside the table are ignored.

    Returns
    -------
    str
        The table with a trailing newline, or ``""`` for an empty table.
    """
    if not table:
        return ""
    alignments = alignments or {}
    column_count = len(table[0])

    lines: List[str] = []
    start = 0
    if include_header_row:
        lines.append(_row_line(table[0], column_count))
        markers = [alignment_marker(alignments.get(c)) for c in range(column_count)]
        lines.append("| " + " | ".join(markers) + " |")
        start = 1
    for row in table[start:]:
        lines.append(_row_line(row, column_count))
    return "\n".join(lines) + "\n"
