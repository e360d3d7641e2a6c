"""
Tests for element trees and HTML rendering.
"""
from allocation.tables import (
    CollapsibleTable,
    Element,
    NumberColumn,
    SortableTable,
    StringColumn,
    TableRenderer,
    h,
)

from conftest import Row


def test_h_flattens_and_drops_none():
    el = h("tr", None, [h("td", 1), [h("td", "b")]], "c", key="r", class_="x", data_sort_column=2)
    assert [c.tag if isinstance(c, Element) else c for c in el.children] == ["td", "td", "c"]
    assert el.attrs == {"class": "x", "data-sort-column": "2"}
    assert el.key == "r"
    assert el.text == "1bc"


def test_to_dict_round_trips_structure():
    el = h("td", "x", key="k", colspan=2)
    assert el.to_dict() == {"tag": "td", "key": "k", "attrs": {"colspan": "2"}, "children": ["x"]}


def test_render_fragment_escapes_text():
    html = TableRenderer().render(h("td", "<b>&", class_='a"b'))
    assert html == '<td class="a&#34;b">&lt;b&gt;&amp;</td>'


def test_render_sortable_table(abc_rows):
    table = SortableTable([StringColumn('Name', lambda r: r.name), NumberColumn('Value', lambda r: r.value)])
    table.toggle_sort(1)
    html = str(TableRenderer().render(table.render(abc_rows)))

    assert html.startswith("<table><thead><tr>")
    assert '<th data-sort-column="1">Value<span class="sort-icon sort-asc">' in html
    assert html.index("alpha") < html.index("charlie") < html.index("Bravo")


def test_render_page_interactive(tmp_path):
    table = CollapsibleTable([NumberColumn('Value', lambda r: r.value)])
    out = tmp_path / "out" / "table.html"

    html = TableRenderer().render_page(
        table.render([Row("A", 1)]),
        title="My <Table>",
        interactive=True,
        api_root="/api/x",
        output_path=str(out),
    )
    assert "<title>My &lt;Table&gt;</title>" in html
    assert 'data-expand-key="A"' in html
    assert "/api/x/sort/" in html
    assert out.read_text(encoding="utf-8") == html


def test_render_page_static_has_no_script():
    html = TableRenderer().render_page(h("table"), title="Static")
    assert "<script>" not in html
    assert "<table></table>" in html
