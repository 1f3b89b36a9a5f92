"""Conversion options and their YAML loader.

Options can be stored in YAML files whose keys map one‑to‑one to the
fields of :class:`ConversionOptions`.  Unlike a strict schema, values
outside the supported range never cause an error: they are normalised
to the documented default and a warning is logged.  A utility function
:func:`load_options` reads a YAML file and returns the corresponding
dataclass instance.
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple, Union

import yaml

logger = logging.getLogger(__name__)

OCR_STYLES = {"plain", "list", "code"}
PREPROCESS_PROFILES = {"pil_gray", "pil_bin", "none"}


def _positive_or_none(name: str, value: Optional[int]) -> Optional[int]:
    if value is None:
        return None
    try:
        value = int(value)
    except (TypeError, ValueError):
        logger.warning("Ignoring non-integer %s=%r, treating as unlimited", name, value)
        return None
    # zero and negative limits mean "no limit"
    return value if value > 0 else None


def _selector_tuple(value: Any) -> Tuple[Any, ...]:
    from .columns import ByIndex, ByName

    if value is None or value == "":
        return ()
    # a single selector, not a sequence of them
    if isinstance(value, (str, int, ByIndex, ByName)):
        return (value,)
    try:
        return tuple(value)
    except TypeError:
        logger.warning("Ignoring columns_to_include=%r, selecting all columns", value)
        return ()


@dataclass(frozen=True)
class ConversionOptions:
    """Immutable options shared by every converter.

    Attributes
    ----------
    max_rows:
        Row limit for CSV and Excel input, applied before column
        resolution.  ``None``, zero or negative means unlimited.
    max_pages:
        Page limit for PDF input, same semantics as ``max_rows``.
    include_headers:
        Treat the first row as the header row.
    columns_to_include:
        Ordered column selectors.  Integers (or digit-only strings)
        select by position, other strings select by header name.
    delimiter, eol:
        CSV field delimiter and record separator.
    column_alignments:
        Output column index mapped to ``left``, ``center``, ``right``,
        ``default`` or a literal Markdown marker such as ``:---``.
    preserve_formatting, detect_headings:
        Select the heading heuristic tier for PDF text.
    include_sheet_headings, sheet_heading_prefix:
        Sheet titles for multi-sheet Excel export.
    ocr_style:
        ``plain`` | ``list`` | ``code``.
    ocr_lang, ocr_psm, preprocess, crop_pct:
        Tesseract language, page segmentation mode, image preprocessing
        profile and margin crop used by the OCR reader.
    """

    max_rows: Optional[int] = None
    max_pages: Optional[int] = None
    include_headers: bool = True
    columns_to_include: Tuple[Any, ...] = ()
    delimiter: str = ","
    eol: Optional[str] = None
    column_alignments: Mapping[int, str] = field(default_factory=dict, hash=False)
    preserve_formatting: bool = False
    detect_headings: bool = False
    include_sheet_headings: bool = True
    sheet_heading_prefix: str = "##"
    ocr_style: str = "plain"  # plain | list | code
    ocr_lang: str = "eng"
    ocr_psm: int = 6
    preprocess: str = "pil_gray"  # pil_gray | pil_bin | none
    crop_pct: float = 0.0

    def __post_init__(self) -> None:
        # frozen dataclass: normalised values go through object.__setattr__
        set_ = object.__setattr__
        set_(self, "max_rows", _positive_or_none("max_rows", self.max_rows))
        set_(self, "max_pages", _positive_or_none("max_pages", self.max_pages))
        set_(self, "columns_to_include", _selector_tuple(self.columns_to_include))

        alignments: Dict[int, str] = {}
        raw_alignments = self.column_alignments or {}
        if not isinstance(raw_alignments, Mapping):
            logger.warning("Ignoring column_alignments=%r, expected a mapping", raw_alignments)
            raw_alignments = {}
        for key, value in raw_alignments.items():
            try:
                alignments[int(key)] = str(value)
            except (TypeError, ValueError):
                logger.warning("Ignoring alignment for non-integer column key %r", key)
        set_(self, "column_alignments", MappingProxyType(alignments))

        if not self.delimiter:
            set_(self, "delimiter", ",")
        if self.ocr_style not in OCR_STYLES:
            logger.warning("Unknown ocr_style %r, using 'plain'", self.ocr_style)
            set_(self, "ocr_style", "plain")
        if self.preprocess not in PREPROCESS_PROFILES:
            logger.warning("Unknown preprocess profile %r, using 'pil_gray'", self.preprocess)
            set_(self, "preprocess", "pil_gray")
        if self.ocr_psm not in range(0, 14):
            logger.warning("ocr_psm must be between 0 and 13 inclusive, got %r; using 6", self.ocr_psm)
            set_(self, "ocr_psm", 6)
        try:
            crop = float(self.crop_pct or 0.0)
        except (TypeError, ValueError):
            logger.warning("Ignoring non-numeric crop_pct %r", self.crop_pct)
            crop = 0.0
        set_(self, "crop_pct", min(max(crop, 0.0), 0.5))

    def replace(self, **changes: Any) -> "ConversionOptions":
        """Return a copy with ``changes`` applied (options are frozen)."""
        return dataclasses.replace(self, **changes)


def load_options(path: Union[str, Path]) -> ConversionOptions:
    """Load a YAML options file into a :class:`ConversionOptions`.

    Parameters
    ----------
    path:
        Path to the YAML file.

    Returns
    -------
    ConversionOptions
        A populated options instance.  Unknown keys are ignored.
    """
    path = Path(path)
    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    known = {f.name for f in dataclasses.fields(ConversionOptions)}
    kwargs: Dict[str, Any] = {}
    for key, value in data.items():
        if key not in known:
            logger.warning("Unknown option %r in %s", key, path)
            continue
        kwargs[key] = value
    return ConversionOptions(**kwargs)
