"""CSV tokenising on top of the standard library :mod:`csv` module."""

from __future__ import annotations

import csv
import io
import logging
from typing import List, Optional

logger = logging.getLogger(__name__)


def read_csv(text: str, delimiter: str = ",", eol: Optional[str] = None) -> List[List[str]]:
    """Split CSV ``text`` into rows of string cells.

    Values are never converted to numbers.  Blank records are skipped.
    When ``eol`` is given the text is split on it explicitly; otherwise
    the :mod:`csv` reader recognises ``\\n``, ``\\r\\n`` and ``\\r``.
    """
    if len(delimiter) != 1:
        logger.warning("CSV delimiter must be a single character, got %r; using ','", delimiter)
        delimiter = ","
    if eol:
        source = text.split(eol)
    else:
        source = io.StringIO(text, newline="")
    reader = csv.reader(source, delimiter=delimiter)
    return [row for row in reader if row]
