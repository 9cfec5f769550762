from __future__ import annotations

import base64
import io
from dataclasses import dataclass
from typing import Iterable, Sequence

from .layout import PositionTable
from .state import HanoiConfig, pegs_of, state_key
from .tree import NodeTable, levels

EDGE_COLOR = "#dee2e6"
PATH_COLOR = "#e03131"
NODE_FILL = "#ffffff"
NODE_HIGHLIGHT_FILL = "#a8b5ff"
NODE_OUTLINE = "#adb5bd"
PEG_COLOR = "#6c757d"
LABEL_COLOR = "#495057"
DISK_COLORS = (
    "#e41a1c",
    "#377eb8",
    "#4daf4a",
    "#ff7f00",
    "#984ea3",
    "#a65628",
    "#f781bf",
    "#999999",
)


@dataclass(frozen=True, slots=True)
class DiagramImage:
    mime_type: str
    data_base64: str
    data_url: str
    width: int
    height: int

    def to_bytes(self) -> bytes:
        return base64.b64decode(self.data_base64)


def canvas_size_for_tree(
    tree: NodeTable, available_width: int = 1260
) -> tuple[int, int]:
    """Canvas that fits the tree: a row of widest level and 120px per depth."""

    width = min(1200, available_width - 60)
    height = 800
    grouped = levels(tree)
    if grouped:
        height = max(800, (max(grouped) + 1) * 120 + 200)
        widest = max(len(states) for states in grouped.values())
        width = max(width, widest * 100 + 200)
    return (width, height)


def _path_edges(highlight: Sequence[HanoiConfig]) -> set[tuple[HanoiConfig, HanoiConfig]]:
    return {(a, b) for a, b in zip(highlight, highlight[1:])}


def _draw_tower(draw, state: HanoiConfig, cx: float, cy: float, radius: float) -> None:
    peg_xs = (cx - radius * 0.4, cx, cx + radius * 0.4)
    disk_h = max(2.0, radius * 0.2)
    for x in peg_xs:
        draw.line((x, cy - radius * 0.6, x, cy + radius * 0.6), fill=PEG_COLOR, width=2)
    for x, stack in zip(peg_xs, pegs_of(state)):
        for level, disk in enumerate(stack):
            w = (disk + 1) * radius * 0.13
            y = cy + radius * 0.4 - level * disk_h
            draw.rectangle(
                [x - w / 2, y - disk_h / 2, x + w / 2, y + disk_h / 2],
                fill=DISK_COLORS[disk % len(DISK_COLORS)],
                outline="black",
            )


def render_tree_image(
    tree: NodeTable,
    positions: PositionTable,
    *,
    size: tuple[int, int] = (1200, 800),
    highlight: Sequence[HanoiConfig] = (),
    node_radius: int = 30,
    show_labels: bool = True,
    background: str = "white",
) -> DiagramImage:
    """Draw the tree as a node-link diagram and return it as a PNG."""

    try:
        from PIL import Image, ImageDraw, ImageFont
    except ImportError as exc:  # pragma: no cover
        raise RuntimeError(
            "Missing pillow. Install with: pip install 'hanoi-explorer'"
        ) from exc

    width, height = size
    img = Image.new("RGB", (max(1, width), max(1, height)), background)
    draw = ImageDraw.Draw(img)
    font = ImageFont.load_default()

    on_path = set(highlight)
    path_edges = _path_edges(highlight)

    # Edges first so nodes cover line ends.
    for state, node in tree.items():
        start = positions.get(state)
        if start is None:
            continue
        for child in node.children:
            end = positions.get(child)
            if end is None:
                continue
            emphasized = (state, child) in path_edges
            draw.line(
                (start.x, start.y, end.x, end.y),
                fill=PATH_COLOR if emphasized else EDGE_COLOR,
                width=4 if emphasized else 2,
            )

    for state, pos in positions.items():
        r = node_radius
        selected = state in on_path
        draw.ellipse(
            [pos.x - r, pos.y - r, pos.x + r, pos.y + r],
            fill=NODE_HIGHLIGHT_FILL if selected else NODE_FILL,
            outline=PATH_COLOR if selected else NODE_OUTLINE,
            width=3 if selected else 2,
        )
        _draw_tower(draw, state, pos.x, pos.y, r)
        if show_labels:
            label = state_key(state)
            bbox = draw.textbbox((0, 0), label, font=font)
            label_w = bbox[2] - bbox[0]
            draw.text(
                (pos.x - label_w / 2, pos.y + r + 6), label, fill=LABEL_COLOR, font=font
            )

    buffer = io.BytesIO()
    img.save(buffer, format="PNG")
    b64 = base64.b64encode(buffer.getvalue()).decode("ascii")
    return DiagramImage(
        mime_type="image/png",
        data_base64=b64,
        data_url=f"data:image/png;base64,{b64}",
        width=img.width,
        height=img.height,
    )


def render_tree_ascii(
    tree: NodeTable, highlight: Iterable[HanoiConfig] = ()
) -> str:
    """Indented outline of the tree; states on `highlight` are starred."""

    roots = [state for state, node in tree.items() if node.parent is None]
    marked = set(highlight)
    lines: list[str] = []
    stack = [(root, 0) for root in reversed(roots)]
    while stack:
        state, indent = stack.pop()
        node = tree[state]
        marker = "*" if state in marked else "-"
        lines.append(f"{'  ' * indent}{marker} {state_key(state)} (depth {node.depth})")
        for child in reversed(node.children):
            if child in tree:
                stack.append((child, indent + 1))
    return "\n".join(lines)
