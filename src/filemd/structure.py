"""Heading detection for flat extracted text.

PDF text extraction yields plain lines without any notion of font size
or weight, so headings have to be guessed from the shape of the text.
Two tiers of heuristics are provided:

* the *basic* tier promotes a short line to a level‑2 heading when the
  line after it is longer and the short line does not look like the end
  of a sentence or a bare section number;
* the *advanced* tier promotes all‑caps lines to level‑2 headings and
  short title‑like lines to level‑3 headings.

Each tier is an ordered list of :class:`Rule` objects.  For every line
the first matching rule decides the role; lines matching no rule are
body text.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

from .config import ConversionOptions

logger = logging.getLogger(__name__)

HEADING_MAJOR = "heading-major"
HEADING_MINOR = "heading-minor"
BODY = "body"
BLANK = "blank"

_HEADING_MARKERS = {HEADING_MAJOR: "##", HEADING_MINOR: "###"}

_NUMBERING = re.compile(r"\d+(\.\d+)*")
_TITLE_LIKE = re.compile(r"[A-Z][a-zA-Z0-9 ,;&:\-()]+")


@dataclass
class FormattedLine:
    role: str
    text: str

    def render(self) -> str:
        marker = _HEADING_MARKERS.get(self.role)
        if marker is not None:
            return f"{marker} {self.text}\n\n"
        if self.role == BLANK:
            return "\n"
        return f"{self.text}\n"


@dataclass
class Rule:
    """Promote a line to ``role`` when ``predicate(line, next_line)`` holds."""

    name: str
    role: str
    predicate: Callable[[str, Optional[str]], bool]


def _short_line_before_longer(line: str, next_line: Optional[str]) -> bool:
    return (
        len(line) < 60
        and next_line is not None
        and len(next_line.strip()) > len(line)
        and not line.endswith((".", ",", ";"))
        and not _NUMBERING.fullmatch(line)
    )


def _all_caps(line: str, next_line: Optional[str]) -> bool:
    # isupper() requires at least one cased character
    return 2 < len(line) < 80 and line.isupper()


def _title_like(line: str, next_line: Optional[str]) -> bool:
    return len(line) < 60 and bool(_TITLE_LIKE.fullmatch(line)) and not line.endswith(".")


BASIC_RULES: List[Rule] = [
    Rule("short-before-longer", HEADING_MAJOR, _short_line_before_longer),
]

ADVANCED_RULES: List[Rule] = [
    Rule("all-caps", HEADING_MAJOR, _all_caps),
    Rule("title-like", HEADING_MINOR, _title_like),
]


def normalize_spacing(text: str) -> str:
    """Unify line endings, collapse blank runs and horizontal whitespace."""
    text = re.sub(r"\r\n|\r", "\n", text)
    text = re.sub(r"\n{3,}", "\n\n", text)
    text = re.sub(r"[ \t]+", " ", text)
    return text.strip()


def classify_lines(lines: Sequence[str], rules: Sequence[Rule]) -> List[FormattedLine]:
    """Assign a role to every line, top to bottom."""
    result: List[FormattedLine] = []
    for i, raw in enumerate(lines):
        line = raw.strip()
        if not line:
            result.append(FormattedLine(BLANK, ""))
            continue
        next_line = lines[i + 1] if i + 1 < len(lines) else None
        role = BODY
        for rule in rules:
            if rule.predicate(line, next_line):
                logger.debug("Rule %s promoted %r", rule.name, line)
                role = rule.role
                break
        result.append(FormattedLine(role, line))
    return result


def format_text(text: str, options: ConversionOptions) -> str:
    """Normalise ``text`` and insert Markdown headings per ``options``."""
    normalized = normalize_spacing(text)
    if not options.preserve_formatting:
        rules = BASIC_RULES
    elif options.detect_headings:
        rules = ADVANCED_RULES
    else:
        return normalized
    lines = classify_lines(normalized.split("\n"), rules)
    return "".join(line.render() for line in lines)
