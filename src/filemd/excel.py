"""Workbook decoding for ``.xlsx`` (openpyxl) and ``.xls`` (xlrd) files.

Both backends are reduced to the same shape: an ordered mapping of
sheet name to a list of rows of Python values.  Dates come back as
:class:`datetime.datetime` and booleans as :class:`bool` so that
:func:`filemd.table.format_cell` renders them consistently.
"""

from __future__ import annotations

import io
import logging
from typing import Any, Dict, List

import openpyxl
import xlrd

from .errors import EmptyInputError, UnsupportedFormatError

logger = logging.getLogger(__name__)

Sheets = Dict[str, List[List[Any]]]


def _read_xlsx(data: bytes) -> Sheets:
    wb = openpyxl.load_workbook(io.BytesIO(data), read_only=True, data_only=True)
    try:
        sheets: Sheets = {}
        for ws in wb.worksheets:
            rows = [list(r) for r in ws.iter_rows(values_only=True)]
            # read-only mode can report phantom trailing rows
            while rows and all(v is None for v in rows[-1]):
                rows.pop()
            sheets[ws.title] = rows
        return sheets
    finally:
        wb.close()


def _xls_value(cell: "xlrd.sheet.Cell", datemode: int) -> Any:
    if cell.ctype == xlrd.XL_CELL_DATE:
        return xlrd.xldate.xldate_as_datetime(cell.value, datemode)
    if cell.ctype == xlrd.XL_CELL_BOOLEAN:
        return bool(cell.value)
    if cell.ctype in (xlrd.XL_CELL_EMPTY, xlrd.XL_CELL_BLANK):
        return None
    return cell.value


def _read_xls(data: bytes) -> Sheets:
    book = xlrd.open_workbook(file_contents=data)
    sheets: Sheets = {}
    for sheet in book.sheets():
        sheets[sheet.name] = [
            [_xls_value(cell, book.datemode) for cell in sheet.row(r)] for r in range(sheet.nrows)
        ]
    return sheets


def read_workbook(data: bytes, file_type: str = "xlsx") -> Sheets:
    """Decode workbook bytes into ``{sheet name: rows}``.

    Parameters
    ----------
    data:
        Raw file content.
    file_type:
        ``"xlsx"`` or ``"xls"`` (a leading dot is ignored).
    """
    kind = file_type.lower().lstrip(".")
    if kind == "xlsx":
        sheets = _read_xlsx(data)
    elif kind == "xls":
        sheets = _read_xls(data)
    else:
        raise UnsupportedFormatError(f"Unsupported file format: .{kind}")
    if not sheets:
        raise EmptyInputError("Excel file contains no sheets")
    logger.debug("Read %d sheet(s) from %s workbook", len(sheets), kind)
    return sheets
