"""
Column descriptors.

A column knows how to compare two rows, and how to render its header cell,
a body cell and a footer cell. Columns are generic over the row type; the
only thing the table controllers require of a row is a string `key`.

Variants:
- CustomColumn: every behaviour supplied as a callable
- ValueColumn: built on a value accessor and a value comparator
- StringColumn / NumberColumn: value columns for text and numbers;
  number columns aggregate in the footer
"""

from abc import ABC, abstractmethod
from enum import IntEnum
from typing import (
    Any, Callable, Dict, Generic, Optional, Protocol, Sequence, TypeVar,
)

from .elements import Element, h


PLACEHOLDER = "--"


class Keyed(Protocol):
    key: str


TRow = TypeVar("TRow", bound=Keyed)
TValue = TypeVar("TValue")

Comparator = Callable[[Any, Any], float]


class SortDirection(IntEnum):
    """Sort direction; the value is the sign applied to the comparator."""
    ASCENDING = 1
    DESCENDING = -1


SORT_ICONS = {
    SortDirection.ASCENDING: "▼",
    SortDirection.DESCENDING: "▲",
}


def compare_values(a: Any, b: Any) -> int:
    """Three-way comparison of two values with a natural order."""
    return (a > b) - (a < b)


def unsortable(_a: Any, _b: Any) -> int:
    return 0


def sort_indicator(sort_direction: Optional[SortDirection]) -> Optional[Element]:
    """Icon shown next to a header label, or None when unsorted."""
    if sort_direction is None:
        return None
    name = "asc" if sort_direction == SortDirection.ASCENDING else "desc"
    return h("span", SORT_ICONS[sort_direction], class_=f"sort-icon sort-{name}")


def _merge_attrs(element: Optional[Element], attrs: Optional[Dict[str, str]]) -> Optional[Element]:
    if element is not None and attrs:
        element.attrs.update(attrs)
    return element


class Column(ABC, Generic[TRow]):
    """
    Base class for all table columns.

    Subclasses must implement the comparator and the three renderers.
    `supports_aggregation` marks columns whose footer is a numeric total;
    every other column renders a neutral placeholder there.
    """

    supports_aggregation: bool = False

    def __init__(self, label: str):
        self.label = label

    @property
    def key(self) -> str:
        return self.label

    @abstractmethod
    def sort(self, a: TRow, b: TRow) -> float:
        """Negative when `a` sorts before `b`, zero on a tie."""

    @abstractmethod
    def render_header(
        self,
        sort_direction: Optional[SortDirection] = None,
        attrs: Optional[Dict[str, str]] = None,
    ) -> Optional[Element]:
        """Header cell, with a sort indicator when this column is sorted."""

    @abstractmethod
    def render_cell(self, row: TRow, attrs: Optional[Dict[str, str]] = None) -> Optional[Element]:
        """Body cell for one row."""

    @abstractmethod
    def render_footer(self, rows: Sequence[TRow], attrs: Optional[Dict[str, str]] = None) -> Optional[Element]:
        """Footer cell over the full row sequence."""

    def aggregate(self, rows: Sequence[TRow]) -> Any:
        raise NotImplementedError(f"Column {self.label!r} does not aggregate")

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.label!r})"


class CustomColumn(Column[TRow]):
    """
    Column whose behaviour comes entirely from optional callables.

    A missing footer callable renders the placeholder cell, so the footer
    row stays aligned with the header.
    """

    def __init__(
        self,
        label: str,
        render_header: Optional[Callable[..., Optional[Element]]] = None,
        render_cell: Optional[Callable[..., Optional[Element]]] = None,
        render_footer: Optional[Callable[..., Optional[Element]]] = None,
        sort: Optional[Callable[[TRow, TRow], float]] = None,
    ):
        super().__init__(label)
        self._render_header = render_header
        self._render_cell = render_cell
        self._render_footer = render_footer
        self._sort = sort

    def sort(self, a: TRow, b: TRow) -> float:
        return self._sort(a, b) if self._sort else 0

    def render_header(self, sort_direction=None, attrs=None):
        if not self._render_header:
            return None
        return _merge_attrs(self._render_header(sort_direction), attrs)

    def render_cell(self, row, attrs=None):
        if not self._render_cell:
            return None
        return _merge_attrs(self._render_cell(row), attrs)

    def render_footer(self, rows, attrs=None):
        if not self._render_footer:
            return _merge_attrs(h("td", PLACEHOLDER, key=self.label), attrs)
        return _merge_attrs(self._render_footer(rows), attrs)


class ValueColumn(Column[TRow], Generic[TRow, TValue]):
    """
    Column that reads one value per row.

    Sorting always compares the raw values returned by the accessor;
    `format_value` only affects what is displayed.
    """

    def __init__(
        self,
        label: str,
        get_value: Callable[[TRow], TValue],
        compare: Comparator = compare_values,
        footer: str = PLACEHOLDER,
        header_class: str = "",
        cell_class: str = "",
    ):
        super().__init__(label)
        self._get_value = get_value
        self._compare = compare
        self.footer = footer
        self.header_class = header_class
        self.cell_class = cell_class

    def get_value(self, row: TRow) -> TValue:
        return self._get_value(row)

    def format_value(self, value: TValue) -> str:
        return "" if value is None else str(value)

    def get_formatted_value(self, row: TRow) -> str:
        return self.format_value(self.get_value(row))

    def footer_value(self, rows: Sequence[TRow]) -> str:
        """Footer text: the formatted total for aggregating columns."""
        if self.supports_aggregation:
            return self.format_value(self.aggregate(rows))
        return self.footer

    def sort(self, a: TRow, b: TRow) -> float:
        return self._compare(self.get_value(a), self.get_value(b))

    def render_header(self, sort_direction=None, attrs=None):
        th = h(
            "th",
            self.label,
            sort_indicator(sort_direction),
            key=self.label,
            class_=self.header_class or None,
        )
        return _merge_attrs(th, attrs)

    def render_cell(self, row, attrs=None):
        td = h(
            "td",
            self.get_formatted_value(row),
            key=f"{self.label}_{row.key}",
            class_=self.cell_class or None,
        )
        return _merge_attrs(td, attrs)

    def render_footer(self, rows, attrs=None):
        return _merge_attrs(h("td", self.footer_value(rows), key=self.label), attrs)


class StringColumn(ValueColumn[TRow, str]):
    """Text column, compared case-insensitively."""

    def __init__(self, label: str, get_value: Callable[[TRow], str], **kwargs):
        kwargs.setdefault("compare", lambda a, b: compare_values(a.casefold(), b.casefold()))
        super().__init__(label, get_value, **kwargs)

    def get_value(self, row: TRow) -> str:
        value = self._get_value(row)
        return "" if value is None else value


class NumberColumn(ValueColumn[TRow, float]):
    """Numeric column; its footer is the sum over all rows."""

    supports_aggregation = True

    def __init__(self, label: str, get_value: Callable[[TRow], float], decimals: int = 2, **kwargs):
        super().__init__(label, get_value, **kwargs)
        self.decimals = decimals

    def get_value(self, row: TRow) -> float:
        value = self._get_value(row)
        return 0 if value is None else value

    def format_value(self, value: float) -> str:
        # Whole floats print without a fraction, others to `decimals` places
        if isinstance(value, float):
            if value.is_integer():
                return f"{value:,.0f}"
            return f"{value:,.{self.decimals}f}"
        return f"{value:,}"

    def aggregate(self, rows: Sequence[TRow]) -> float:
        return sum((self.get_value(r) for r in rows), 0)
