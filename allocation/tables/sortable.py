"""
Sortable table controller.

Owns the sort selection of one table and derives the displayed row order
from it. The only event it reacts to is a header click on a column, which
moves the sort state:

    other column        -> ascending on the clicked column
    same, ascending     -> descending
    same, descending    -> ascending

Once a column has been chosen the table never returns to insertion order.
"""

import logging
from dataclasses import dataclass
from functools import cmp_to_key
from typing import Any, Callable, Dict, Generic, List, Optional, Sequence

from .columns import Column, SortDirection, TRow
from .elements import Child, Element, h

logger = logging.getLogger(__name__)


BodyRenderer = Callable[[List[TRow], Sequence[Column[TRow]]], Element]


@dataclass(frozen=True)
class SortState:
    """Current sort selection. `column_index` None means insertion order."""
    direction: SortDirection = SortDirection.ASCENDING
    column_index: Optional[int] = None

    def toggle(self, column_index: int) -> "SortState":
        if self.column_index != column_index:
            return SortState(SortDirection.ASCENDING, column_index)
        return SortState(SortDirection(-self.direction), column_index)

    def direction_for(self, column_index: int) -> Optional[SortDirection]:
        """Direction to show on a column header, None if it is not sorted."""
        return self.direction if self.column_index == column_index else None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "direction": int(self.direction),
            "column_index": self.column_index,
        }


def render_rows(rows: List[TRow], columns: Sequence[Column[TRow]]) -> Element:
    """Default body: one line per row, one cell per column."""
    return h(
        "tbody",
        [h("tr", [c.render_cell(r) for c in columns], key=r.key) for r in rows],
    )


class SortableTable(Generic[TRow]):
    """
    Table with click-to-sort column headers.

    Args:
        columns: Column descriptors, left to right. Fixed for the table's life.
        body: Optional body renderer receiving the sorted rows and the columns.
        attrs: Extra attributes for the <table> element.
        sort_state: Initial sort state; insertion order by default.
    """

    def __init__(
        self,
        columns: Sequence[Column[TRow]],
        body: Optional[BodyRenderer] = None,
        attrs: Optional[Dict[str, str]] = None,
        sort_state: Optional[SortState] = None,
    ):
        self.columns = tuple(columns)
        self.body = body or render_rows
        self.attrs = dict(attrs or {})
        self.sort_state = sort_state or SortState()

    def toggle_sort(self, column_index: int) -> SortState:
        """Handle a header click on `column_index`."""
        if not 0 <= column_index < len(self.columns):
            raise IndexError(
                f"Column index {column_index} out of range for {len(self.columns)} columns"
            )
        self.sort_state = self.sort_state.toggle(column_index)
        logger.debug(
            f"Sort toggled on {self.columns[column_index].label!r}: "
            f"{self.sort_state.direction.name.lower()}"
        )
        return self.sort_state

    def comparator(self) -> Callable[[TRow, TRow], float]:
        direction = int(self.sort_state.direction)
        index = self.sort_state.column_index
        if index is None:
            return lambda a, b: 0
        column = self.columns[index]
        return lambda a, b: direction * column.sort(a, b)

    def sorted_rows(self, rows: Sequence[TRow]) -> List[TRow]:
        """
        Rows in display order.

        Always returns a new list; the caller's sequence is left untouched.
        The sort is stable, so rows the comparator ties keep their input order.
        """
        if self.sort_state.column_index is None:
            return list(rows)
        return sorted(rows, key=cmp_to_key(self.comparator()))

    def render_header(self, leading: Sequence[Child] = ()) -> Element:
        cells = [
            c.render_header(
                self.sort_state.direction_for(i),
                {"data-sort-column": str(i)},
            )
            for i, c in enumerate(self.columns)
        ]
        return h("thead", h("tr", list(leading), cells))

    def render_body(self, rows: Sequence[TRow]) -> Element:
        return self.body(self.sorted_rows(rows), self.columns)

    def render(
        self,
        rows: Sequence[TRow],
        leading_header: Sequence[Child] = (),
        footer: Optional[Element] = None,
    ) -> Element:
        table = h(
            "table",
            self.render_header(leading_header),
            self.render_body(rows),
            footer,
        )
        table.attrs.update(self.attrs)
        return table
