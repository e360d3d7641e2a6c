"""
Tables Module - Sortable and collapsible tables rendered to element trees.

Components:
- columns: Column descriptors (comparator + header/cell/footer renderers)
- sortable: SortState and the click-to-sort table controller
- collapsible: ExpansionState, expandable rows and per-row nested tables
- elements: The renderable element tree
- renderer: Jinja2 HTML serialization

Usage:
    from allocation.tables import SortableTable, StringColumn, NumberColumn

    table = SortableTable([
        StringColumn('Symbol', lambda r: r.ticker),
        NumberColumn('Value', lambda r: r.value),
    ])
    table.toggle_sort(1)
    html = TableRenderer().render(table.render(rows))
"""

from .elements import Element, h
from .columns import (
    PLACEHOLDER,
    Column,
    CustomColumn,
    ValueColumn,
    StringColumn,
    NumberColumn,
    SortDirection,
    compare_values,
    unsortable,
)
from .sortable import SortState, SortableTable
from .collapsible import CollapsibleTable, ExpansionState, NestedTable
from .renderer import TableRenderer

__all__ = [
    # Elements
    'Element',
    'h',

    # Columns
    'PLACEHOLDER',
    'Column',
    'CustomColumn',
    'ValueColumn',
    'StringColumn',
    'NumberColumn',
    'SortDirection',
    'compare_values',
    'unsortable',

    # Controllers
    'SortState',
    'SortableTable',
    'CollapsibleTable',
    'ExpansionState',
    'NestedTable',

    # Rendering
    'TableRenderer',
]
