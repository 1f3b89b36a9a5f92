"""File and byte level conversion entry points.

Every function here returns a :class:`~filemd.result.ConversionResult`
and never raises: reader errors and unexpected exceptions are logged
and reported through ``result.error``.
"""

from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import Optional, Union

from PIL import Image

from .config import ConversionOptions
from .csv_reader import read_csv
from .errors import ConversionError, SheetNotFoundError, UnsupportedFormatError
from .excel import read_workbook
from .markdown import EMPTY_SHEET, blocks_to_result, pages_to_result, rows_to_result, sheets_to_result
from .ocr import recognize_blocks
from .pdf import extract_page_texts
from .preprocess import preprocess
from .result import ConversionResult

logger = logging.getLogger(__name__)

EXCEL_TYPES = {"xlsx", "xls"}
IMAGE_TYPES = {"png", "jpg", "jpeg", "tif", "tiff", "bmp"}
EXCEL_PASSWORD_UNSUPPORTED = "Password-protected Excel files are not supported."

PathLike = Union[str, Path]


def _file_type(value: str) -> str:
    return value.lower().lstrip(".")


def _convert_csv(data: bytes, options: ConversionOptions) -> ConversionResult:
    text = data.decode("utf-8-sig")
    rows = read_csv(text, delimiter=options.delimiter, eol=options.eol)
    return rows_to_result(rows, options, source="csv")


def _convert_sheet(
    data: bytes,
    file_type: str,
    options: ConversionOptions,
    sheet_name: Optional[str],
) -> ConversionResult:
    sheets = read_workbook(data, file_type)
    available = list(sheets)
    if sheet_name is None:
        sheet_name = available[0]
    elif sheet_name not in sheets:
        raise SheetNotFoundError(sheet_name, available)

    rows = sheets[sheet_name]
    metadata = {"sheetName": sheet_name, "availableSheets": available, "maxRows": len(rows)}
    if not rows:
        return ConversionResult.ok(EMPTY_SHEET, metadata={**metadata, "type": "excel", "rows": 0, "columns": 0})

    result = rows_to_result(rows, options, source="excel")
    return ConversionResult.ok(result.markdown, metadata={**(result.metadata or {}), **metadata})


def _convert_pdf(data: bytes, options: ConversionOptions, password: Optional[str]) -> ConversionResult:
    texts, page_count, encrypted = extract_page_texts(data, password=password, max_pages=options.max_pages)
    return pages_to_result(texts, options, page_count=page_count, password_protected=encrypted)


def _dispatch(
    data: bytes,
    file_type: str,
    options: ConversionOptions,
    sheet_name: Optional[str],
    password: Optional[str],
) -> ConversionResult:
    if file_type == "csv":
        return _convert_csv(data, options)
    if file_type in EXCEL_TYPES:
        if password:
            return ConversionResult.fail(EXCEL_PASSWORD_UNSUPPORTED)
        return _convert_sheet(data, file_type, options, sheet_name)
    if file_type == "pdf":
        return _convert_pdf(data, options, password)
    if file_type in IMAGE_TYPES:
        with Image.open(io.BytesIO(data)) as img:
            return convert_image(img, options)
    raise UnsupportedFormatError(f"Unsupported file format: .{file_type}")


def _failure(exc: ConversionError) -> ConversionResult:
    if isinstance(exc, SheetNotFoundError):
        return ConversionResult.fail(str(exc), metadata={"availableSheets": exc.available})
    return ConversionResult.fail(str(exc))


def convert_bytes(
    data: bytes,
    file_type: str,
    options: Optional[ConversionOptions] = None,
    sheet_name: Optional[str] = None,
    password: Optional[str] = None,
) -> ConversionResult:
    """Convert in-memory file content of the given type (``"csv"``, ``".pdf"``...)."""
    options = options or ConversionOptions()
    try:
        return _dispatch(data, _file_type(file_type), options, sheet_name, password)
    except ConversionError as exc:
        return _failure(exc)
    except Exception as exc:
        logger.exception("Conversion of %s bytes failed", file_type)
        return ConversionResult.fail(f"Error converting file bytes: {exc}")


def convert_file(
    path: PathLike,
    options: Optional[ConversionOptions] = None,
    sheet_name: Optional[str] = None,
    password: Optional[str] = None,
) -> ConversionResult:
    """Convert the file at ``path``, choosing the reader by its extension.

    Parameters
    ----------
    path:
        CSV, Excel (``.xlsx``/``.xls``), PDF or image file.
    options:
        Conversion options; defaults are used when omitted.
    sheet_name:
        Excel sheet to convert.  The first sheet is used when omitted.
    password:
        Password for encrypted PDFs.  Rejected for Excel files.
    """
    path = Path(path)
    if not path.exists():
        return ConversionResult.fail(f"File not found: {path}")
    options = options or ConversionOptions()
    try:
        result = _dispatch(path.read_bytes(), _file_type(path.suffix), options, sheet_name, password)
    except ConversionError as exc:
        return _failure(exc)
    except Exception as exc:
        logger.exception("Conversion of %s failed", path)
        return ConversionResult.fail(f"Error converting file: {exc}")
    if result.success:
        logger.info("Converted %s (%s)", path, (result.metadata or {}).get("type"))
    return result


def convert_all_sheets(
    path: PathLike,
    options: Optional[ConversionOptions] = None,
    password: Optional[str] = None,
) -> ConversionResult:
    """Convert every sheet of a workbook into one document."""
    path = Path(path)
    if password:
        return ConversionResult.fail(EXCEL_PASSWORD_UNSUPPORTED)
    if not path.exists():
        return ConversionResult.fail(f"File not found: {path}")
    try:
        sheets = read_workbook(path.read_bytes(), path.suffix)
        return sheets_to_result(sheets, options)
    except ConversionError as exc:
        return _failure(exc)
    except Exception as exc:
        logger.exception("Conversion of %s failed", path)
        return ConversionResult.fail(f"Error processing Excel file: {exc}")


def convert_image(
    image: Union[PathLike, Image.Image],
    options: Optional[ConversionOptions] = None,
) -> ConversionResult:
    """Recognise the text of an image and render it in ``options.ocr_style``."""
    options = options or ConversionOptions()
    if not isinstance(image, Image.Image):
        path = Path(image)
        if not path.exists():
            return ConversionResult.fail(f"File not found: {path}")
        try:
            with Image.open(path) as img:
                return convert_image(img, options)
        except Exception as exc:
            logger.warning("Cannot open image %s: %s", path, exc)
            return ConversionResult.fail(f"OCR failed: {exc}")
    try:
        pre = preprocess(image, options.preprocess, crop_pct=options.crop_pct)
        blocks = recognize_blocks(pre, lang=options.ocr_lang, psm=options.ocr_psm)
    except Exception as exc:
        logger.warning("Tesseract failed: %s", exc)
        return ConversionResult.fail(f"OCR failed: {exc}")
    return blocks_to_result(blocks, options, extra={"lang": options.ocr_lang, "psm": options.ocr_psm})
