"""Column selection, projection and row normalisation for tables.

A table arrives as a list of possibly ragged rows.  The pipeline is:

1. :func:`limit_rows` truncates the input to ``max_rows``;
2. :func:`resolve_columns` turns the selectors of the options into
   concrete column indices (and display names when a header exists);
3. :func:`project_rows` extracts those columns from every row, using an
   empty cell where a row is too short;
4. :func:`normalize_rows` pads the result so that it is rectangular.

Column selectors are either :class:`ByIndex` or :class:`ByName`.  Plain
tokens found in the options are converted with :func:`parse_selector`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence, Union

from .config import ConversionOptions
from .table import format_cell

logger = logging.getLogger(__name__)

Row = List[Any]


@dataclass(frozen=True)
class ByIndex:
    index: int


@dataclass(frozen=True)
class ByName:
    name: str


Selector = Union[ByIndex, ByName]


@dataclass
class ColumnResolution:
    indices: List[int]
    selected_names: Optional[List[str]]


def parse_selector(token: Any) -> Selector:
    """Interpret a raw selector token.

    Integers and strings made only of ASCII digits select by position;
    anything else selects by header name.  Explicit :class:`ByIndex` or
    :class:`ByName` values are returned unchanged, which is the way to
    select a header that is itself numeric.
    """
    if isinstance(token, (ByIndex, ByName)):
        return token
    if isinstance(token, int) and not isinstance(token, bool) and token >= 0:
        return ByIndex(token)
    text = str(token)
    if text.isascii() and text.isdigit():
        return ByIndex(int(text))
    return ByName(text)


def max_row_width(rows: Sequence[Sequence[Any]]) -> int:
    return max((len(row) for row in rows), default=0)


def limit_rows(rows: Sequence[Row], max_rows: Optional[int]) -> List[Row]:
    if max_rows is None or max_rows <= 0:
        return list(rows)
    return list(rows[: min(max_rows, len(rows))])


def _all_columns(rows: Sequence[Row], header: Optional[List[str]]) -> ColumnResolution:
    return ColumnResolution(indices=list(range(max_row_width(rows))), selected_names=header)


def resolve_columns(rows: Sequence[Row], options: ConversionOptions) -> ColumnResolution:
    """Decide which columns to keep, in output order.

    Selectors that cannot be resolved are dropped silently.  When none
    of them resolves, every column is kept, exactly as if no selector
    had been given.
    """
    header: Optional[List[str]] = None
    if options.include_headers and rows:
        header = [format_cell(v) for v in rows[0]]

    if not options.columns_to_include:
        return _all_columns(rows, header)

    indices: List[int] = []
    names: List[str] = []
    for selector in map(parse_selector, options.columns_to_include):
        if isinstance(selector, ByIndex):
            idx = selector.index
            indices.append(idx)
            if header is not None and idx < len(header):
                names.append(header[idx])
            else:
                names.append(f"col{idx}")
        elif header is not None:
            try:
                idx = header.index(selector.name)
            except ValueError:
                logger.debug("Column %r not found in header, skipping", selector.name)
                continue
            indices.append(idx)
            names.append(selector.name)
        else:
            logger.debug("Column %r selected by name but table has no header, skipping", selector.name)

    if not indices:
        logger.debug("No column selector matched, falling back to all columns")
        return _all_columns(rows, header)
    return ColumnResolution(indices=indices, selected_names=names)


def project_rows(rows: Sequence[Sequence[Any]], indices: Sequence[int]) -> List[Row]:
    return [[row[i] if i < len(row) else "" for i in indices] for row in rows]


def normalize_rows(rows: Sequence[Sequence[Any]]) -> List[Row]:
    """Pad every row with empty cells up to the widest row."""
    width = max_row_width(rows)
    return [list(row) + [""] * (width - len(row)) for row in rows]
