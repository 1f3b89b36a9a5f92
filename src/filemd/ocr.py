"""Text recognition with Tesseract.

:func:`recognize_blocks` runs ``pytesseract.image_to_data`` once and
regroups the word-level output into the block/line structure consumed
by :func:`filemd.markdown.format_blocks`.  Tesseract numbers lines per
paragraph and paragraphs per block, so a line is identified by the
``(block_num, par_num, line_num)`` triple.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Tuple

import pytesseract  # type: ignore
from PIL import Image

logger = logging.getLogger(__name__)


def group_blocks(data: Dict[str, List]) -> List[List[str]]:
    """Group word-level OCR data into blocks of line strings.

    Reading order is the order in which Tesseract reports the words.
    Lines without any non-blank word are dropped, and so are blocks
    left without lines.
    """
    blocks: Dict[int, Dict[Tuple[int, int], List[str]]] = {}
    for i, word in enumerate(data["text"]):
        word = str(word).strip()
        if not word:
            continue
        block = int(data["block_num"][i])
        line_key = (int(data["par_num"][i]), int(data["line_num"][i]))
        blocks.setdefault(block, {}).setdefault(line_key, []).append(word)
    return [[" ".join(words) for words in lines.values()] for lines in blocks.values() if lines]


def recognize_blocks(img: Image.Image, lang: str = "eng", psm: int = 6) -> List[List[str]]:
    """Run Tesseract on ``img`` and return its text as blocks of lines."""
    data = pytesseract.image_to_data(img, lang=lang, config=f"--psm {psm}", output_type=pytesseract.Output.DICT)
    blocks = group_blocks(data)
    logger.debug("Tesseract (psm %d) recognised %d block(s)", psm, len(blocks))
    return blocks
