"""
Tests for the sortable table controller.
"""
import pytest

from allocation.tables import (
    CustomColumn,
    NumberColumn,
    SortDirection,
    SortState,
    SortableTable,
    StringColumn,
    h,
)

from conftest import Row


def keys(rows):
    return [r.key for r in rows]


def test_initial_state_is_unsorted(abc_rows, value_columns):
    table = SortableTable(value_columns)
    assert table.sort_state == SortState(SortDirection.ASCENDING, None)
    assert keys(table.sorted_rows(abc_rows)) == ["A", "B", "C"]


def test_ascending_then_descending(abc_rows, value_columns):
    table = SortableTable(value_columns)

    table.toggle_sort(1)
    assert keys(table.sorted_rows(abc_rows)) == ["A", "C", "B"]

    table.toggle_sort(1)
    assert keys(table.sorted_rows(abc_rows)) == ["B", "C", "A"]


def test_repeated_toggles_alternate_and_never_reset(value_columns):
    state = SortState()
    directions = []
    for _ in range(6):
        state = state.toggle(1)
        directions.append(state.direction)
        assert state.column_index == 1
    assert directions == [1, -1, 1, -1, 1, -1]


def test_switching_column_restarts_ascending(value_columns):
    table = SortableTable(value_columns)
    table.toggle_sort(1)
    table.toggle_sort(1)
    assert table.sort_state == SortState(SortDirection.DESCENDING, 1)

    table.toggle_sort(0)
    assert table.sort_state == SortState(SortDirection.ASCENDING, 0)


def test_out_of_range_toggle_keeps_state(value_columns):
    table = SortableTable(value_columns)
    table.toggle_sort(0)
    with pytest.raises(IndexError):
        table.toggle_sort(5)
    with pytest.raises(IndexError):
        table.toggle_sort(-1)
    assert table.sort_state == SortState(SortDirection.ASCENDING, 0)


def test_input_rows_not_mutated(abc_rows, value_columns):
    table = SortableTable(value_columns)
    table.toggle_sort(1)
    original = list(abc_rows)
    result = table.sorted_rows(abc_rows)
    assert abc_rows == original
    assert result is not abc_rows


def test_ties_keep_input_order_both_directions():
    rows = [Row("x", 1), Row("y", 1), Row("z", 0)]
    table = SortableTable([NumberColumn('Value', lambda r: r.value)])

    table.toggle_sort(0)
    assert keys(table.sorted_rows(rows)) == ["z", "x", "y"]

    table.toggle_sort(0)
    assert keys(table.sorted_rows(rows)) == ["x", "y", "z"]


def test_unsortable_column_keeps_order(abc_rows):
    table = SortableTable([CustomColumn('Actions')])
    table.toggle_sort(0)
    assert keys(table.sorted_rows(abc_rows)) == ["A", "B", "C"]


def test_inconsistent_comparator_does_not_crash(abc_rows):
    table = SortableTable([CustomColumn('Odd', sort=lambda a, b: 1)])
    table.toggle_sort(0)
    assert sorted(keys(table.sorted_rows(abc_rows))) == ["A", "B", "C"]


def test_render_is_idempotent(abc_rows, value_columns):
    table = SortableTable(value_columns)
    table.toggle_sort(1)
    assert table.render(abc_rows).to_dict() == table.render(abc_rows).to_dict()


def test_render_structure(abc_rows, value_columns):
    table = SortableTable(value_columns, attrs={"id": "t"})
    table.toggle_sort(1)
    element = table.render(abc_rows)

    assert element.tag == "table"
    assert element.attrs["id"] == "t"

    headers = element.find("thead").find_all("th")
    assert [th.attrs["data-sort-column"] for th in headers] == ["0", "1"]
    assert headers[0].find("span") is None
    assert "sort-asc" in headers[1].find("span").attrs["class"]

    body_rows = element.find("tbody").find_all("tr")
    assert [tr.key for tr in body_rows] == ["A", "C", "B"]
    assert [td.text for td in body_rows[0].find_all("td")] == ["alpha", "10"]


def test_descending_header_icon(abc_rows, value_columns):
    table = SortableTable(value_columns)
    table.toggle_sort(1)
    table.toggle_sort(1)
    headers = table.render(abc_rows).find("thead").find_all("th")
    assert "sort-desc" in headers[1].find("span").attrs["class"]


def test_empty_rows_render_empty_body(value_columns):
    table = SortableTable(value_columns)
    table.toggle_sort(0)
    element = table.render([])
    assert element.find("tbody").children == []


def test_custom_body_receives_sorted_rows(abc_rows, value_columns):
    seen = []

    def body(rows, cols):
        seen.append((keys(rows), len(cols)))
        return h("tbody")

    table = SortableTable(value_columns, body=body)
    table.toggle_sort(1)
    table.toggle_sort(1)
    table.render(abc_rows)
    assert seen == [(["B", "C", "A"], 2)]


def test_sort_by_name_column(abc_rows):
    table = SortableTable([StringColumn('Name', lambda r: r.name)])
    table.toggle_sort(0)
    table.toggle_sort(0)
    assert keys(table.sorted_rows(abc_rows)) == ["C", "B", "A"]
