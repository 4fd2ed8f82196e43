"""Document outline (bookmark) objects."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import BinaryIO, Callable, Optional, Sequence


def _utf16_hex(text: str) -> str:
    return text.encode("utf-16-be").hex().upper()


@dataclass
class Outline:
    """A single outline item."""

    title: str
    dest: int
    parent: int = 0
    prev: int = -1
    next: int = -1
    first: int = 0
    last: int = 0
    height: float = 0.0
    index: int = 0

    def write(self, out: BinaryIO, obj_id: int) -> None:
        """Write the outline item dictionary."""
        parts = ["<<\n", f"  /Parent {self.parent} 0 R\n"]
        if self.prev >= 0:
            parts.append(f"  /Prev {self.prev} 0 R\n")
        if self.next >= 0:
            parts.append(f"  /Next {self.next} 0 R\n")
        if self.first > 0:
            parts.append(f"  /First {self.first} 0 R\n")
        if self.last > 0:
            parts.append(f"  /Last {self.last} 0 R\n")
        parts.append(f"  /Dest [ {self.dest} 0 R /XYZ 90 {self.height:f} 0 ]\n")
        parts.append(f"  /Title <FEFF{_utf16_hex(self.title)}>\n")
        parts.append(">>\n")
        out.write("".join(parts).encode("ascii"))


class Outlines:
    """The outlines dictionary; new items are registered through ``add_obj``.

    ``add_obj`` stores an object in the document and returns its zero-based
    position; object numbers are that position plus one.
    """

    def __init__(self, add_obj: Callable[[object], int], index: int = 0) -> None:
        self._add_obj = add_obj
        self.index = index
        self.first = -1
        self.last = -1
        self.count = 0
        self._last_item: Optional[Outline] = None

    def _append(self, item: Outline) -> None:
        self.last = self._add_obj(item) + 1
        if self.first <= 0:
            self.first = self.last
        if self._last_item is not None:
            self._last_item.next = self.last
        self._last_item = item
        self.count += 1

    def add_outline(self, dest: int, title: str) -> None:
        """Append an outline item pointing at page object ``dest``."""
        self._append(Outline(title=title, dest=dest, parent=self.index, prev=self.last))

    def add_outline_with_position(self, dest: int, title: str, y: float) -> Outline:
        """Append an outline item pointing at a vertical position of a page."""
        item = Outline(title=title, dest=dest, parent=self.index, prev=self.last, height=y)
        self._append(item)
        item.index = self.last
        return item

    def write(self, out: BinaryIO, obj_id: int) -> None:
        """Write the outlines dictionary."""
        parts = ["<<\n", "\t/Type /Outlines\n", f"\t/Count {self.count}\n"]
        if self.first >= 0:
            parts.append(f"\t/First {self.first} 0 R\n")
        if self.last >= 0:
            parts.append(f"\t/Last {self.last} 0 R\n")
        parts.append(">>\n")
        out.write("".join(parts).encode("ascii"))


@dataclass
class OutlineNode:
    """An outline item with its nested children."""

    obj: Outline
    children: list[OutlineNode] = field(default_factory=list)

    def parse(self) -> None:
        """Link children to each other and to this node, recursively."""
        if not self.children:
            return
        last = len(self.children) - 1
        for i, child in enumerate(self.children):
            if i == 0:
                self.obj.first = child.obj.index
                child.obj.prev = -1
            if i == last:
                self.obj.last = child.obj.index
                child.obj.next = -1
            if i != 0:
                child.obj.prev = self.children[i - 1].obj.index
            if i != last:
                child.obj.next = self.children[i + 1].obj.index
            child.obj.parent = self.obj.index
            child.parse()


def parse_outline_nodes(nodes: Sequence[OutlineNode]) -> None:
    """Link top-level nodes in order and parse each subtree."""
    last = len(nodes) - 1
    for i, node in enumerate(nodes):
        if i == 0:
            node.obj.prev = -1
        node.obj.next = nodes[i + 1].obj.index if i != last else -1
        node.parse()