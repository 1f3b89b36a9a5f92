"""Unit tests for Markdown table rendering and cell formatting."""

import datetime as dt

import pytest

from filemd.table import alignment_marker, escape_cell, format_cell, render_table


@pytest.mark.parametrize(
    "value, expected",
    [
        (None, ""),
        (True, "TRUE"),
        (False, "FALSE"),
        (3.0, "3"),
        (2.5, "2.5"),
        (7, "7"),
        (dt.datetime(2024, 1, 2, 3, 4, 5), "2024-01-02T03:04:05"),
        (dt.date(2024, 1, 2), "2024-01-02"),
        ("text", "text"),
    ],
)
def test_format_cell(value, expected) -> None:
    assert format_cell(value) == expected


def test_escape_cell() -> None:
    assert escape_cell("a|b") == "a\\|b"
    assert escape_cell("one\ntwo\r\nthree\rfour") == "one two three four"


def test_render_with_header() -> None:
    table = [["A", "B"], ["1", "2"], ["3", "4"]]
    assert render_table(table) == "| A | B |\n| --- | --- |\n| 1 | 2 |\n| 3 | 4 |\n"


def test_render_without_header() -> None:
    table = [["A", "B"], ["1", "2"]]
    assert render_table(table, include_header_row=False) == "| A | B |\n| 1 | 2 |\n"


def test_render_empty_table() -> None:
    assert render_table([]) == ""


def test_alignment_separator() -> None:
    table = [["a", "b", "c"], ["1", "2", "3"]]
    out = render_table(table, alignments={0: "left", 2: "right", 9: "center"})
    assert out.splitlines()[1] == "| :--- | --- | ---: |"


def test_alignment_marker_accepts_literals_and_unknowns() -> None:
    assert alignment_marker("center") == ":---:"
    assert alignment_marker(":---") == ":---"
    assert alignment_marker("sideways") == "---"
    assert alignment_marker(None) == "---"


def test_escaped_cells_stay_on_one_line() -> None:
    out = render_table([["h"], ["a|b\nc"]])
    assert out.splitlines()[2] == "| a\\|b c |"


def test_rerender_is_identical() -> None:
    table = [["x", "y"], [1.0, None]]
    assert render_table(table, alignments={1: "right"}) == render_table(table, alignments={1: "right"})
