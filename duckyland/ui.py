"""A small retained UI tree with flex-like layout and hit testing."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Callable, Iterator, Optional, Union

Length = Union[float, str]


class Direction(enum.Enum):
    ROW = "row"
    COLUMN = "column"
    GRID = "grid"


class JustifySelf(enum.Enum):
    START = "start"
    END = "end"


@dataclass
class Rect:
    x: float
    y: float
    w: float
    h: float

    def contains(self, point: tuple[float, float]) -> bool:
        px, py = point
        return self.x <= px < self.x + self.w and self.y <= py < self.y + self.h

    @property
    def center(self) -> tuple[float, float]:
        return (self.x + self.w / 2, self.y + self.h / 2)


@dataclass(eq=False)
class Node:
    """A UI element; lengths are pixels or strings such as ``"100%"``."""

    name: str
    width: Optional[Length] = None
    height: Optional[Length] = None
    direction: Direction = Direction.ROW
    align_center: bool = False
    justify_center: bool = False
    row_gap: float = 0.0
    column_gap: float = 0.0
    grid_columns: tuple[float, ...] = ()
    justify_self: Optional[JustifySelf] = None
    padding_x: float = 0.0
    absolute: bool = False
    text: Optional[str] = None
    font_size: float = 24.0
    text_color: Optional[tuple[float, float, float]] = None
    background: Optional[tuple[float, ...]] = None
    rounded: bool = False
    pickable: bool = True
    on_click: Optional[Callable[..., Any]] = None
    palette: Any = None
    interaction: Any = None
    z_index: int = 0
    children: list[Node] = field(default_factory=list)
    rect: Optional[Rect] = None

    def walk(self) -> Iterator[Node]:
        """Yield this node and all descendants, depth first."""
        yield self
        for child in self.children:
            yield from child.walk()

    def find(self, name: str) -> Node:
        """Return the first node with this name; raise KeyError if none."""
        for node in self.walk():
            if node.name == name:
                return node
        raise KeyError(name)


def _resolve(length: Optional[Length], parent: float) -> Optional[float]:
    if length is None:
        return None
    if isinstance(length, str):
        return parent * float(length.rstrip("%")) / 100.0
    return float(length)


def _flow(node: Node) -> list[Node]:
    return [c for c in node.children if not c.absolute]


def _measure(node: Node, parent_w: float, parent_h: float) -> tuple[float, float]:
    w = _resolve(node.width, parent_w)
    h = _resolve(node.height, parent_h)
    if w is not None and h is not None:
        return w, h
    iw, ih = _intrinsic(node, w if w is not None else parent_w, h if h is not None else parent_h)
    return (w if w is not None else iw, h if h is not None else ih)


def _intrinsic(node: Node, avail_w: float, avail_h: float) -> tuple[float, float]:
    if node.text is not None:
        return len(node.text) * node.font_size * 0.55 + 2 * node.padding_x, node.font_size * 1.2
    sizes = [_measure(c, avail_w, avail_h) for c in _flow(node)]
    if not sizes:
        return 2 * node.padding_x, 0.0
    gaps = len(sizes) - 1
    if node.direction is Direction.GRID and node.grid_columns:
        cols = len(node.grid_columns)
        rows = [sizes[i:i + cols] for i in range(0, len(sizes), cols)]
        width = sum(node.grid_columns) + node.column_gap * (cols - 1)
        height = sum(max(h for _, h in row) for row in rows) + node.row_gap * (len(rows) - 1)
    elif node.direction is Direction.COLUMN:
        width = max(w for w, _ in sizes)
        height = sum(h for _, h in sizes) + node.row_gap * gaps
    else:
        width = sum(w for w, _ in sizes) + node.column_gap * gaps
        height = max(h for _, h in sizes)
    return width + 2 * node.padding_x, height


def layout(node: Node, rect: Rect) -> None:
    """Assign ``rect`` to ``node`` and position its descendants inside it."""
    node.rect = rect
    inner = Rect(rect.x + node.padding_x, rect.y, rect.w - 2 * node.padding_x, rect.h)
    for child in node.children:
        if child.absolute:
            w, h = _measure(child, rect.w, rect.h)
            layout(child, Rect(rect.x, rect.y, w, h))
    flow = _flow(node)
    sizes = [_measure(c, inner.w, inner.h) for c in flow]
    if node.direction is Direction.GRID and node.grid_columns:
        cols = len(node.grid_columns)
        y = inner.y
        for start in range(0, len(flow), cols):
            row = list(zip(flow[start:start + cols], sizes[start:start + cols], node.grid_columns))
            row_h = max(h for _, (_, h), _ in row)
            x = inner.x
            for child, (w, h), col_w in row:
                cx = x + col_w - w if child.justify_self is JustifySelf.END else x
                layout(child, Rect(cx, y, w, h))
                x += col_w + node.column_gap
            y += row_h + node.row_gap
        return
    column = node.direction is Direction.COLUMN
    gap = node.row_gap if column else node.column_gap
    main_total = sum(h if column else w for w, h in sizes) + gap * max(len(sizes) - 1, 0)
    main_space = inner.h if column else inner.w
    pos = (inner.y if column else inner.x) + ((main_space - main_total) / 2 if node.justify_center else 0.0)
    for child, (w, h) in zip(flow, sizes):
        if column:
            x = inner.x + (inner.w - w) / 2 if node.align_center else inner.x
            layout(child, Rect(x, pos, w, h))
            pos += h + gap
        else:
            y = inner.y + (inner.h - h) / 2 if node.align_center else inner.y
            layout(child, Rect(pos, y, w, h))
            pos += w + gap


def hit_test(node: Node, position: tuple[float, float]) -> Optional[Node]:
    """Return the topmost pickable node under ``position``, or None."""
    if node.rect is None or not node.rect.contains(position):
        return None
    for child in reversed(node.children):
        hit = hit_test(child, position)
        if hit is not None:
            return hit
    return node if node.pickable else None