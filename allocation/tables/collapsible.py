"""
Collapsible table controller.

Wraps a SortableTable and adds, per row, an expand/collapse affordance and
an optional nested table rendered beneath the row while it is expanded.
A footer line aggregates over the outer rows regardless of what is
expanded or how the body is sorted.
"""

import logging
from typing import (
    Any, Callable, Dict, Generic, List, Optional, Sequence, TypeVar,
)

from .columns import Column, TRow
from .elements import Child, Element, h
from .sortable import BodyRenderer, SortableTable, SortState

logger = logging.getLogger(__name__)


TNested = TypeVar("TNested")

FragmentRenderer = Callable[[TRow, Sequence[Column[TRow]]], List[Child]]
NestedRowsProvider = Callable[[TRow], Sequence[Any]]
NestedRenderer = Callable[[Sequence[Any], TRow], Optional[Element]]
FooterRenderer = Callable[[Sequence[TRow], Sequence[Column[TRow]]], Optional[Element]]

CHEVRONS = {False: "▸", True: "▾"}


class ExpansionState:
    """Expanded/collapsed flag per row key. Unknown keys are collapsed."""

    def __init__(self, expanded: Optional[Dict[str, bool]] = None):
        self._expanded: Dict[str, bool] = dict(expanded or {})

    def is_expanded(self, key: str) -> bool:
        return self._expanded.get(key, False)

    def toggle(self, key: str) -> bool:
        self._expanded[key] = not self.is_expanded(key)
        return self._expanded[key]

    def expanded_keys(self) -> List[str]:
        return [k for k, v in self._expanded.items() if v]

    def __len__(self) -> int:
        return len(self._expanded)


def render_cells(row: TRow, columns: Sequence[Column[TRow]]) -> List[Child]:
    """Default row fragment: each column's own body cell."""
    return [c.render_cell(row) for c in columns]


def render_footer(rows: Sequence[TRow], columns: Sequence[Column[TRow]]) -> Element:
    """Default footer: a blank affordance cell, then each column's footer."""
    return h(
        "tfoot",
        h("tr", h("td", key="chevy"), [c.render_footer(rows) for c in columns]),
    )


class NestedTable(Generic[TNested]):
    """
    Nested renderer that gives every parent row its own SortableTable.

    Sort state is kept per parent key, so sorting the holdings of one
    expanded row leaves every other nested table alone.
    """

    def __init__(
        self,
        columns: Sequence[Column[TNested]],
        body: Optional[BodyRenderer] = None,
        attrs: Optional[Dict[str, str]] = None,
    ):
        self.columns = tuple(columns)
        self.body = body
        self.attrs = dict(attrs or {})
        self._tables: Dict[str, SortableTable[TNested]] = {}

    def table_for(self, parent_key: str) -> SortableTable[TNested]:
        table = self._tables.get(parent_key)
        if table is None:
            attrs = dict(self.attrs, **{"data-parent-key": parent_key})
            table = SortableTable(self.columns, body=self.body, attrs=attrs)
            self._tables[parent_key] = table
        return table

    def toggle_sort(self, parent_key: str, column_index: int) -> SortState:
        return self.table_for(parent_key).toggle_sort(column_index)

    def __call__(self, rows: Sequence[TNested], parent: Any) -> Optional[Element]:
        if not rows:
            return None
        return self.table_for(parent.key).render(rows)


class CollapsibleTable(Generic[TRow]):
    """
    Sortable table whose rows can be expanded to show nested detail.

    Args:
        columns: Column descriptors, left to right.
        fragment: Renders the data cells of one row; defaults to the
            columns' own cells.
        nested_rows: Returns the nested collection of a row.
        nested: Renders the nested collection of an expanded row.
        footer: Renders the footer over all outer rows; None for no footer.
        attrs: Extra attributes for the <table> element.
        sort_state: Initial sort state.
        expansion: Initial expansion state; empty by default.
    """

    def __init__(
        self,
        columns: Sequence[Column[TRow]],
        fragment: Optional[FragmentRenderer] = None,
        nested_rows: Optional[NestedRowsProvider] = None,
        nested: Optional[NestedRenderer] = None,
        footer: Optional[FooterRenderer] = render_footer,
        attrs: Optional[Dict[str, str]] = None,
        sort_state: Optional[SortState] = None,
        expansion: Optional[ExpansionState] = None,
    ):
        self.fragment = fragment or render_cells
        self.nested_rows = nested_rows
        self.nested = nested
        self.footer = footer
        self.expansion = expansion if expansion is not None else ExpansionState()
        self._table: SortableTable[TRow] = SortableTable(
            columns, body=self._render_body, attrs=attrs, sort_state=sort_state
        )

    @property
    def columns(self) -> Sequence[Column[TRow]]:
        return self._table.columns

    @property
    def sort_state(self) -> SortState:
        return self._table.sort_state

    def toggle_sort(self, column_index: int) -> SortState:
        return self._table.toggle_sort(column_index)

    def sorted_rows(self, rows: Sequence[TRow]) -> List[TRow]:
        return self._table.sorted_rows(rows)

    def is_expanded(self, key: str) -> bool:
        return self.expansion.is_expanded(key)

    def toggle_expanded(self, key: str) -> bool:
        """Handle a click on a row's expand affordance."""
        expanded = self.expansion.toggle(key)
        logger.debug(f"Row {key!r} {'expanded' if expanded else 'collapsed'}")
        return expanded

    def render_nested(self, row: TRow) -> Optional[Element]:
        """Nested content of a row, or None when it has nothing to show."""
        if self.nested is None or self.nested_rows is None:
            return None
        children = list(self.nested_rows(row))
        if not children:
            return None
        return self.nested(children, row)

    def render_row(self, row: TRow) -> List[Element]:
        expanded = self.is_expanded(row.key)
        toggle = h(
            "button",
            CHEVRONS[expanded],
            class_="expand-toggle",
            data_expand_key=row.key,
            aria_expanded=str(expanded).lower(),
        )
        lines = [
            h("tr", h("td", toggle, key="chevy"), self.fragment(row, self.columns), key=row.key)
        ]
        if expanded:
            nested = self.render_nested(row)
            if nested is not None:
                lines.append(h(
                    "tr",
                    h("td", nested, colspan=len(self.columns) + 1),
                    key=f"{row.key}_nested",
                    class_="nested-row",
                ))
        return lines

    def _render_body(self, rows: List[TRow], columns: Sequence[Column[TRow]]) -> Element:
        return h("tbody", [self.render_row(r) for r in rows])

    def render_footer(self, rows: Sequence[TRow]) -> Optional[Element]:
        if self.footer is None:
            return None
        return self.footer(rows, self.columns)

    def render(self, rows: Sequence[TRow]) -> Element:
        return self._table.render(
            rows,
            leading_header=[h("th", key="chevy")],
            footer=self.render_footer(rows),
        )
