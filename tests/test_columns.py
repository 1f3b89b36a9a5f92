"""Unit tests for column resolution, projection and normalisation."""

from filemd.columns import (
    ByIndex,
    ByName,
    limit_rows,
    normalize_rows,
    parse_selector,
    project_rows,
    resolve_columns,
)
from filemd.config import ConversionOptions

TABLE = [
    ["Name", "Age", "City"],
    ["Ann", 31, "Oslo"],
    ["Bob", 27],
    ["Cid", 45, "Rome", "extra"],
]


def test_parse_selector() -> None:
    assert parse_selector(2) == ByIndex(2)
    assert parse_selector("3") == ByIndex(3)
    assert parse_selector("Age") == ByName("Age")
    assert parse_selector("-1") == ByName("-1")
    assert parse_selector(ByName("2024")) == ByName("2024")


def test_no_selectors_selects_all_columns_of_widest_row() -> None:
    res = resolve_columns(TABLE, ConversionOptions())
    assert res.indices == [0, 1, 2, 3]
    assert res.selected_names == ["Name", "Age", "City"]


def test_no_header_gives_no_names() -> None:
    res = resolve_columns(TABLE, ConversionOptions(include_headers=False))
    assert res.selected_names is None


def test_selectors_by_name_and_index_keep_order_and_duplicates() -> None:
    opts = ConversionOptions(columns_to_include=["City", "0", 0, "Missing", 7])
    res = resolve_columns(TABLE, opts)
    assert res.indices == [2, 0, 0, 7]
    assert res.selected_names == ["City", "Name", "Name", "col7"]


def test_name_selectors_are_dropped_without_header() -> None:
    opts = ConversionOptions(include_headers=False, columns_to_include=["Name", "1"])
    res = resolve_columns(TABLE, opts)
    assert res.indices == [1]
    assert res.selected_names == ["col1"]


def test_numeric_header_can_be_selected_by_name() -> None:
    rows = [["2023", "2024"], [1, 2]]
    opts = ConversionOptions(columns_to_include=[ByName("2024")])
    assert resolve_columns(rows, opts).indices == [1]


def test_unmatched_selectors_fall_back_to_all_columns() -> None:
    opts = ConversionOptions(columns_to_include=["Nope", "Nada"])
    assert resolve_columns(TABLE, opts) == resolve_columns(TABLE, ConversionOptions())


def test_project_fills_out_of_range_with_blank() -> None:
    projected = project_rows(TABLE, [2, 3])
    assert projected == [["City", ""], ["Oslo", ""], ["", ""], ["Rome", "extra"]]


def test_normalize_is_rectangular() -> None:
    normalized = normalize_rows([["a"], ["b", "c", "d"], []])
    assert {len(r) for r in normalized} == {3}
    assert normalized[0] == ["a", "", ""]


def test_normalize_empty() -> None:
    assert normalize_rows([]) == []


def test_limit_rows() -> None:
    assert limit_rows(TABLE, 2) == TABLE[:2]
    assert limit_rows(TABLE, 100) == TABLE
    assert limit_rows(TABLE, None) == TABLE
    assert limit_rows(TABLE, 0) == TABLE
    assert limit_rows(TABLE, -3) == TABLE
