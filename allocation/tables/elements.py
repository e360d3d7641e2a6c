"""
Renderable element tree.

Tables are rendered to a small tree of `Element` nodes (tag, attributes,
children) instead of HTML strings, so the controllers can be exercised
headless and the presentation layer decides how to serialize the tree.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Iterator, List, Optional, Union


Child = Union["Element", str]


@dataclass
class Element:
    """One node of the rendered tree."""
    tag: str
    children: List[Child] = field(default_factory=list)
    attrs: Dict[str, str] = field(default_factory=dict)
    key: Optional[str] = None

    def iter(self, tag: Optional[str] = None) -> Iterator["Element"]:
        """Depth-first walk over this element and its descendants."""
        if tag is None or self.tag == tag:
            yield self
        for child in self.children:
            if isinstance(child, Element):
                yield from child.iter(tag)

    def find(self, tag: str) -> Optional["Element"]:
        return next(self.iter(tag), None)

    def find_all(self, tag: str) -> List["Element"]:
        return list(self.iter(tag))

    @property
    def text(self) -> str:
        """Concatenated text content."""
        parts = []
        for child in self.children:
            parts.append(child.text if isinstance(child, Element) else child)
        return "".join(parts)

    def to_dict(self) -> Dict[str, Any]:
        """JSON-friendly representation."""
        return {
            "tag": self.tag,
            "key": self.key,
            "attrs": dict(self.attrs),
            "children": [
                c.to_dict() if isinstance(c, Element) else c
                for c in self.children
            ],
        }


def h(
    tag: str,
    *children: Any,
    key: Optional[str] = None,
    **attrs: Any,
) -> Element:
    """
    Build an element.

    `None` children are dropped, nested lists are flattened and other
    values are converted to text. Attribute names use `class_` for
    `class` and underscores for dashes (`data_sort_column`).
    """
    return Element(
        tag=tag,
        children=list(_flatten(children)),
        attrs={_attr_name(k): str(v) for k, v in attrs.items() if v is not None},
        key=key,
    )


def _attr_name(name: str) -> str:
    return name.rstrip("_").replace("_", "-")


def _flatten(children: Iterable[Any]) -> Iterator[Child]:
    for child in children:
        if child is None:
            continue
        if isinstance(child, (list, tuple)):
            yield from _flatten(child)
        elif isinstance(child, Element):
            yield child
        else:
            yield str(child)
