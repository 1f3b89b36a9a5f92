"""Markdown assembly for tables, sheets, PDF pages and OCR blocks.

This module glues the pure building blocks together.  Readers hand it
already-decoded data (rows, page texts or recognised text blocks) and
get back a :class:`~filemd.result.ConversionResult` carrying the
Markdown string and a metadata record describing what was rendered.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence

from .columns import limit_rows, normalize_rows, project_rows, resolve_columns
from .config import ConversionOptions
from .result import ConversionResult
from .structure import format_text
from .table import render_table

logger = logging.getLogger(__name__)

EMPTY_SHEET = "Sheet is empty"


def _table(rows: Sequence[Sequence[Any]], options: ConversionOptions):
    limited = limit_rows(list(rows), options.max_rows)
    resolved = resolve_columns(limited, options)
    normalized = normalize_rows(project_rows(limited, resolved.indices))
    return normalized, resolved


def table_to_markdown(rows: Sequence[Sequence[Any]], options: Optional[ConversionOptions] = None) -> str:
    """Limit, resolve, project, normalise and render a single table."""
    options = options or ConversionOptions()
    normalized, _ = _table(rows, options)
    return render_table(normalized, options.include_headers, options.column_alignments)


def rows_to_result(
    rows: Sequence[Sequence[Any]],
    options: Optional[ConversionOptions] = None,
    source: str = "csv",
) -> ConversionResult:
    """Render ``rows`` and describe the rendered table in the metadata."""
    options = options or ConversionOptions()
    if not rows:
        return ConversionResult.fail(f"{source.upper()} file is empty")
    normalized, resolved = _table(rows, options)
    markdown = render_table(normalized, options.include_headers, options.column_alignments)
    return ConversionResult.ok(
        markdown,
        metadata={
            "rows": len(normalized),
            "columns": len(normalized[0]) if normalized else 0,
            "type": source,
            "columnsSelected": resolved.selected_names,
        },
    )


def sheets_to_result(
    sheets: Mapping[str, Sequence[Sequence[Any]]],
    options: Optional[ConversionOptions] = None,
) -> ConversionResult:
    """Render every sheet of a workbook one after another.

    Each sheet is preceded by a ``<prefix> <name>`` heading when
    ``include_sheet_headings`` is set.  Empty sheets are rendered as a
    short placeholder rather than skipped, so the sheet list in the
    metadata always matches the headings in the document.
    """
    options = options or ConversionOptions()
    if not sheets:
        return ConversionResult.fail("Excel file contains no sheets")

    parts: List[str] = []
    for name, rows in sheets.items():
        if options.include_sheet_headings:
            parts.append(f"{options.sheet_heading_prefix} {name}\n\n")
        parts.append(table_to_markdown(rows, options) if rows else EMPTY_SHEET)
        parts.append("\n\n")
    return ConversionResult.ok(
        "".join(parts),
        metadata={"sheets": list(sheets), "type": "excel_all_sheets"},
    )


def pages_to_result(
    pages: Sequence[str],
    options: Optional[ConversionOptions] = None,
    page_count: Optional[int] = None,
    password_protected: bool = False,
) -> ConversionResult:
    """Render extracted page texts with heading detection.

    Parameters
    ----------
    pages:
        Text of each page, in document order.
    options:
        ``max_pages`` limits how many pages are processed; the heading
        tier is selected by ``preserve_formatting``/``detect_headings``.
    page_count:
        Total pages in the source document, when known.  Defaults to
        ``len(pages)``.
    password_protected:
        Reported as-is in the metadata.
    """
    options = options or ConversionOptions()
    total = len(pages) if page_count is None else page_count
    processed = len(pages) if options.max_pages is None else min(options.max_pages, len(pages))

    parts: List[str] = []
    for i in range(processed):
        text = pages[i]
        if not text:
            continue
        if processed > 1:
            parts.append(f"## Page {i + 1}\n\n")
        parts.append(format_text(text, options) + "\n")
        if i < processed - 1:
            parts.append("\n---\n\n")

    return ConversionResult.ok(
        "".join(parts).strip(),
        metadata={
            "type": "pdf",
            "pageCount": total,
            "processedPages": processed,
            "passwordProtected": password_protected,
        },
    )


def format_blocks(blocks: Sequence[Sequence[str]], style: str = "plain") -> str:
    """Render recognised text blocks in one of the OCR styles.

    Blocks are separated by a blank line; trailing blank lines are
    dropped.  ``list`` prefixes every line with ``- ``, ``code`` wraps
    the body in a fenced block and anything else renders as ``plain``.
    """
    lines: List[str] = []
    for block in blocks:
        lines.extend(t for t in (line.strip() for line in block) if t)
        # paragraph hint between blocks
        lines.append("")
    while lines and not lines[-1]:
        lines.pop()

    if not lines:
        return ""
    body = "\n".join(lines)
    if style == "code":
        return f"```\n{body}\n```"
    if style == "list":
        return "\n".join(f"- {line}" if line else "" for line in lines)
    return body


def blocks_to_result(
    blocks: Sequence[Sequence[str]],
    options: Optional[ConversionOptions] = None,
    extra: Optional[Dict[str, Any]] = None,
) -> ConversionResult:
    options = options or ConversionOptions()
    markdown = format_blocks(blocks, options.ocr_style)
    if not markdown.strip():
        return ConversionResult.fail("No text recognized in image.")
    metadata: Dict[str, Any] = {"type": "ocr", "blocks": len(blocks), "style": options.ocr_style}
    metadata.update(extra or {})
    return ConversionResult.ok(markdown, metadata=metadata)
