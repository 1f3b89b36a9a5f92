"""Unit tests for the PDF text heading heuristics."""

from filemd.config import ConversionOptions
from filemd.structure import (
    ADVANCED_RULES,
    BASIC_RULES,
    BLANK,
    BODY,
    HEADING_MAJOR,
    HEADING_MINOR,
    classify_lines,
    format_text,
    normalize_spacing,
)

BASIC = ConversionOptions()
ADVANCED = ConversionOptions(preserve_formatting=True, detect_headings=True)
PRESERVE = ConversionOptions(preserve_formatting=True)


def test_normalize_spacing() -> None:
    text = "  a\t\tb\r\nc\r\r\r\r\nd  "
    assert normalize_spacing(text) == "a b\nc\n\nd"


def test_basic_promotes_short_line_before_longer() -> None:
    text = "Intro\nThis is a considerably longer line of body text.\nSome body text."
    out = format_text(text, BASIC)
    assert out == (
        "## Intro\n\n"
        "This is a considerably longer line of body text.\n"
        "Some body text.\n"
    )


def test_basic_skips_punctuated_numbered_and_last_lines() -> None:
    lines = ["Hello,", "a much longer line follows here", "3.2.1", "another long line of text here", "End"]
    roles = [fl.role for fl in classify_lines(lines, BASIC_RULES)]
    assert roles == [BODY, BODY, BODY, BODY, BODY]


def test_basic_keeps_blank_lines() -> None:
    out = format_text("Title\n\nBody text that is long", BASIC)
    # the next line is blank, so no promotion
    assert out == "Title\n\nBody text that is long\n"


def test_advanced_all_caps_and_title_like() -> None:
    lines = ["CHAPTER ONE", "Background and Scope", "This line ends with a period.", "A", "lower case words"]
    roles = [fl.role for fl in classify_lines(lines, ADVANCED_RULES)]
    assert roles == [HEADING_MAJOR, HEADING_MINOR, BODY, BODY, BODY]


def test_advanced_rendering() -> None:
    out = format_text("INTRODUCTION\nOverview\nplain text here.", ADVANCED)
    assert out == "## INTRODUCTION\n\n### Overview\n\nplain text here.\n"


def test_all_caps_needs_a_letter() -> None:
    roles = [fl.role for fl in classify_lines(["2024 - 2025"], ADVANCED_RULES)]
    assert roles == [BODY]


def test_preserve_without_detection_only_normalizes() -> None:
    assert format_text("Intro\n\n\n\nA   longer   line", PRESERVE) == "Intro\n\nA longer line"


def test_blank_role() -> None:
    assert classify_lines([""], BASIC_RULES)[0].role == BLANK


def test_basic_length_boundary() -> None:
    longer = "y" * 70
    under = "S" + "x" * 58
    at_limit = "S" + "x" * 59
    assert classify_lines([under, longer], BASIC_RULES)[0].role == HEADING_MAJOR
    assert classify_lines([at_limit, longer], BASIC_RULES)[0].role == BODY


def test_basic_semicolon_and_last_line() -> None:
    longer = "a much longer line of body text follows"
    assert classify_lines(["Items;", longer], BASIC_RULES)[0].role == BODY
    assert classify_lines(["Items", longer], BASIC_RULES)[0].role == HEADING_MAJOR
    assert classify_lines([longer, "End"], BASIC_RULES)[1].role == BODY
    assert classify_lines(["Alone"], BASIC_RULES)[0].role == BODY


def test_all_caps_length_boundaries() -> None:
    def role(line: str) -> str:
        return classify_lines([line], ADVANCED_RULES)[0].role

    # two characters are too short for all-caps; "AB" still reads as a title
    assert role("AB") == HEADING_MINOR
    assert role("A!") == BODY
    assert role("ABC") == HEADING_MAJOR
    assert role("AB!") == HEADING_MAJOR
    assert role("A" * 79) == HEADING_MAJOR
    assert role("A" * 80) == BODY


def test_title_like_length_boundary() -> None:
    assert classify_lines(["A" + "b" * 58], ADVANCED_RULES)[0].role == HEADING_MINOR
    assert classify_lines(["A" + "b" * 59], ADVANCED_RULES)[0].role == BODY
