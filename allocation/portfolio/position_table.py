"""
Positions-by-target table.

One collapsible row per allocation target with Value, Target, Profit, Loss
and Net money columns. Expanding a target shows its holdings in a nested
sortable table. The footer totals every money column over all targets.
"""

from typing import Callable, List, Optional, Sequence

from ..tables import (
    Column,
    CollapsibleTable,
    Element,
    NestedTable,
    NumberColumn,
    SortState,
    StringColumn,
    h,
)
from ..tables.collapsible import ExpansionState
from ..tables.columns import PLACEHOLDER, TRow
from .formatting import format_dollars
from .models import AccountPosition, DisplayTargetState


class MoneyColumn(NumberColumn[TRow]):
    """Number column displayed as currency; sorts and sums the raw number."""

    def __init__(self, label: str, get_value: Callable[[TRow], float], symbol: str = "$", **kwargs):
        super().__init__(label, get_value, **kwargs)
        self.symbol = symbol

    def format_value(self, value: float) -> str:
        return format_dollars(value, self.symbol)


def holdings_columns(symbol: str = "$") -> List[Column[AccountPosition]]:
    return [
        StringColumn('Symbol', lambda r: r.ticker),
        MoneyColumn('Value', lambda r: r.value, symbol),
        MoneyColumn('Profit', lambda r: r.gain, symbol),
        MoneyColumn('Loss', lambda r: r.loss, symbol),
        MoneyColumn('Net', lambda r: r.net, symbol),
    ]


def target_columns(total_value: float, symbol: str = "$") -> List[Column[DisplayTargetState]]:
    """Outer columns. `Target` is the target weight applied to the account value."""
    return [
        StringColumn('Name', lambda r: r.target.name),
        MoneyColumn('Value', lambda r: r.value, symbol),
        MoneyColumn('Target', lambda r: r.target.weight * total_value, symbol),
        MoneyColumn('Profit', lambda r: r.gain, symbol),
        MoneyColumn('Loss', lambda r: r.loss, symbol),
        MoneyColumn('Net', lambda r: r.net, symbol),
    ]


def target_row_fragment(
    row: DisplayTargetState,
    cols: Sequence[Column[DisplayTargetState]],
) -> List[Element]:
    return [
        h(
            "td",
            c.get_formatted_value(row),
            key=c.key,
            class_="name-cell" if c.label == 'Name' else "value-cell",
        )
        for c in cols
    ]


def target_table_footer(
    rows: Sequence[DisplayTargetState],
    cols: Sequence[Column[DisplayTargetState]],
) -> Element:
    cells = []
    for c in cols:
        if c.label == 'Name':
            text = 'Total'
        elif c.supports_aggregation:
            text = c.footer_value(rows)
        else:
            text = PLACEHOLDER
        cells.append(h("td", text, key=c.key, class_="total-cell"))
    return h("tfoot", h("tr", h("td", key="chevy"), cells))


def holdings_table_body(
    rows: List[AccountPosition],
    cols: Sequence[Column[AccountPosition]],
) -> Element:
    return h(
        "tbody",
        [
            h(
                "tr",
                [
                    h(
                        "td",
                        c.get_formatted_value(r),
                        key=c.key,
                        class_="symbol-cell" if c.label == 'Symbol' else "value-cell",
                    )
                    for c in cols
                ],
                key=r.key,
            )
            for r in rows
        ],
    )


def build_position_table(
    total_value: float,
    symbol: str = "$",
    sort_state: Optional[SortState] = None,
    expansion: Optional[ExpansionState] = None,
) -> CollapsibleTable[DisplayTargetState]:
    """
    Collapsible positions table for a portfolio worth `total_value`.

    Pass the sort and expansion state of a previous table to keep what the
    user selected when the data is reloaded.
    """
    return CollapsibleTable(
        target_columns(total_value, symbol),
        fragment=target_row_fragment,
        nested_rows=lambda r: r.holdings,
        nested=NestedTable(holdings_columns(symbol), body=holdings_table_body),
        footer=target_table_footer,
        attrs={"id": "positions-table", "class": "positions-table"},
        sort_state=sort_state,
        expansion=expansion,
    )
