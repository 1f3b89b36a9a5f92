"""Command line interface for file to Markdown conversion.

This module defines the ``filemd`` console entry point.  Each input
file is converted with :mod:`filemd.converter` and written next to the
others in the output directory as ``<stem>.md``.  It uses Python's
built‑in ``argparse`` module to parse command line options.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List

from tqdm import tqdm

from .config import OCR_STYLES, ConversionOptions, load_options
from .converter import convert_all_sheets, convert_file

logger = logging.getLogger(__name__)


def _setup_logger(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def _build_options(args: argparse.Namespace) -> ConversionOptions:
    options = load_options(args.config) if args.config else ConversionOptions()
    # command line flags take precedence over the YAML file
    if args.style:
        options = options.replace(ocr_style=args.style)
    if args.max_rows is not None:
        options = options.replace(max_rows=args.max_rows)
    return options


def main(argv: List[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Convert CSV, Excel, PDF and image files to Markdown")
    parser.add_argument("inputs", nargs="+", help="Files to convert")
    parser.add_argument("-c", "--config", default=None, help="Path to YAML options file")
    parser.add_argument("-o", "--output-dir", default="output", help="Directory for generated Markdown files")
    parser.add_argument("--sheet", default=None, help="Excel sheet to convert (default: first sheet)")
    parser.add_argument("--all-sheets", action="store_true", help="Convert every sheet of Excel inputs")
    parser.add_argument("--password", default=None, help="Password for encrypted PDF inputs")
    parser.add_argument("--style", choices=sorted(OCR_STYLES), default=None, help="Override OCR output style")
    parser.add_argument("--max-rows", type=int, default=None, help="Override row limit for tables")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose logging")
    args = parser.parse_args(argv)
    _setup_logger(args.verbose)

    options = _build_options(args)
    out_dir = Path(args.output_dir)
    out_dir.mkdir(parents=True, exist_ok=True)

    failures = 0
    for name in tqdm(args.inputs, desc="Convert", unit="file", disable=len(args.inputs) < 2):
        path = Path(name)
        if args.all_sheets and path.suffix.lower() in {".xlsx", ".xls"}:
            result = convert_all_sheets(path, options, password=args.password)
        else:
            result = convert_file(path, options, sheet_name=args.sheet, password=args.password)
        if not result.success:
            failures += 1
            logger.error("%s: %s", path, result.error)
            continue
        out_path = out_dir / f"{path.stem}.md"
        out_path.write_text(result.markdown, encoding="utf-8")
        logger.info("Wrote %s", out_path)
    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
