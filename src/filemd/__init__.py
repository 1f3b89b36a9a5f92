"""Top‑level package for the file→Markdown converter.

Tabular input (CSV, Excel) is rendered as Markdown pipe tables, PDF
text gets heuristic headings and OCR output is rendered in a plain,
list or code style.  The programmatic API lives in
:mod:`filemd.converter`; the ``filemd`` console script is defined in
:mod:`filemd.cli`.
"""

from .config import ConversionOptions, load_options
from .converter import convert_all_sheets, convert_bytes, convert_file, convert_image
from .result import ConversionResult

__all__ = [
    "ConversionOptions",
    "ConversionResult",
    "convert_all_sheets",
    "convert_bytes",
    "convert_file",
    "convert_image",
    "load_options",
]
