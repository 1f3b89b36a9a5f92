"""PDF text extraction with PyMuPDF.

Pages are opened from memory and their text layer is extracted page by
page with ``Page.get_text("text")``.  Encrypted documents are unlocked
with :meth:`fitz.Document.authenticate`; a missing or wrong password is
reported as :class:`~filemd.errors.PasswordError`.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple

import fitz  # type: ignore

from .errors import PasswordError

logger = logging.getLogger(__name__)


def extract_page_texts(
    data: bytes,
    password: Optional[str] = None,
    max_pages: Optional[int] = None,
) -> Tuple[List[str], int, bool]:
    """Extract the text of each page of a PDF.

    Parameters
    ----------
    data:
        Raw PDF bytes.
    password:
        Password used when the document is encrypted.
    max_pages:
        Only extract the first ``max_pages`` pages.  ``None`` or a
        non-positive value extracts everything.

    Returns
    -------
    tuple
        ``(texts, page_count, encrypted)`` where ``page_count`` is the
        total number of pages in the document.
    """
    doc = fitz.open(stream=data, filetype="pdf")
    try:
        encrypted = bool(doc.needs_pass)
        if encrypted and not doc.authenticate(password or ""):
            raise PasswordError("Incorrect or missing PDF password.")
        page_count = doc.page_count
        limit = page_count if not max_pages or max_pages <= 0 else min(max_pages, page_count)
        logger.debug("Extracting text from %d of %d PDF page(s)", limit, page_count)
        texts = [doc[i].get_text("text") for i in range(limit)]
        return texts, page_count, encrypted
    finally:
        doc.close()
