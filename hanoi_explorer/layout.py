from __future__ import annotations

import math
import random
from dataclasses import dataclass
from typing import Any, Literal, TypeAlias

from .state import HanoiConfig, state_key
from .tree import NodeTable, levels

LayoutKind: TypeAlias = Literal["hierarchical", "radial", "force"]

LAYOUT_KINDS: tuple[str, ...] = ("hierarchical", "radial", "force")
DEFAULT_LAYOUT: LayoutKind = "hierarchical"

LEVEL_TOP = 50
MIN_LEVEL_SPACING = 100
MIN_NODE_SPACING = 80
SIDE_MARGIN = 100
RADIAL_MARGIN = 150

FORCE_ITERATIONS = 100
FORCE_STEP = 0.01
FORCE_DAMPING = 0.9
FORCE_MARGIN = 100
SEPARATION_STEP = 1.0
_MIN_DISTANCE = 1e-9


@dataclass(frozen=True, slots=True)
class Position:
    x: float
    y: float

    def to_dict(self) -> dict[str, float]:
        return {"x": self.x, "y": self.y}


PositionTable: TypeAlias = dict[HanoiConfig, Position]


@dataclass(slots=True)
class _Body:
    x: float
    y: float
    vx: float = 0.0
    vy: float = 0.0


def hierarchical_layout(tree: NodeTable, width: float, height: float) -> PositionTable:
    """One row per depth, rows centered horizontally."""

    grouped = levels(tree)
    if not grouped:
        return {}

    max_depth = max(grouped)
    level_spacing = max(MIN_LEVEL_SPACING, (height - 100) / (max_depth + 1))
    positions: PositionTable = {}
    for depth, states in grouped.items():
        y = LEVEL_TOP + depth * level_spacing
        spacing = max(MIN_NODE_SPACING, (width - 2 * SIDE_MARGIN) / (len(states) + 1))
        start_x = (width - (len(states) - 1) * spacing) / 2
        for index, state in enumerate(states):
            positions[state] = Position(x=start_x + index * spacing, y=y)
    return positions


def radial_layout(tree: NodeTable, width: float, height: float) -> PositionTable:
    """Concentric rings around the canvas center, one ring per depth."""

    grouped = levels(tree)
    if not grouped:
        return {}

    center_x = width / 2
    center_y = height / 2
    max_radius = max(0.0, min(center_x, center_y) - RADIAL_MARGIN)
    max_depth = max(grouped)
    positions: PositionTable = {}
    for depth, states in grouped.items():
        radius = max_radius * depth / max_depth if max_depth > 0 else 0.0
        angle_step = 2 * math.pi / len(states) if len(states) > 1 else 0.0
        for index, state in enumerate(states):
            angle = index * angle_step
            positions[state] = Position(
                x=center_x + radius * math.cos(angle),
                y=center_y + radius * math.sin(angle),
            )
    return positions


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def _separate_edges(
    bodies: list[_Body],
    edges: list[tuple[int, int]],
    bounds: tuple[float, float, float, float],
) -> None:
    """Step a child off its parent when clamping left both on the same point.

    The child walks toward the center of the clamp box until it overlaps none
    of its tree neighbours. A box with no room on either axis leaves the bodies
    collapsed on the margin point.
    """

    low_x, high_x, low_y, high_y = bounds
    if high_x <= low_x and high_y <= low_y:
        return
    neighbours: dict[int, list[int]] = {}
    for parent, child in edges:
        neighbours.setdefault(parent, []).append(child)
        neighbours.setdefault(child, []).append(parent)

    center_x = (low_x + high_x) / 2
    center_y = (low_y + high_y) / 2
    for parent, child in edges:
        a = bodies[parent]
        b = bodies[child]
        if (a.x, a.y) != (b.x, b.y):
            continue
        dx = center_x - b.x if high_x > low_x else 0.0
        dy = center_y - b.y if high_y > low_y else 0.0
        distance = math.hypot(dx, dy)
        if distance < _MIN_DISTANCE:
            dx, dy, distance = (1.0, 0.0, 1.0) if high_x > low_x else (0.0, 1.0, 1.0)
        for attempt in range(1, len(bodies) + 2):
            x = _clamp(b.x + dx / distance * SEPARATION_STEP * attempt, low_x, high_x)
            y = _clamp(b.y + dy / distance * SEPARATION_STEP * attempt, low_y, high_y)
            if all((x, y) != (bodies[n].x, bodies[n].y) for n in neighbours[child]):
                b.x, b.y = x, y
                break


def force_directed_layout(
    tree: NodeTable,
    width: float,
    height: float,
    *,
    iterations: int = FORCE_ITERATIONS,
    seed: int | None = None,
    rng: random.Random | None = None,
) -> PositionTable:
    """Spring-electrical simulation: all pairs repel, tree edges attract.

    Bodies start at uniform-random points inside the margin and are clamped
    to [FORCE_MARGIN, dimension - FORCE_MARGIN] after every step. A final pass
    steps apart edge endpoints that clamping pinned to the same point. Pass
    `seed` or `rng` for reproducible output.
    """

    if not tree:
        return {}
    if rng is None:
        rng = random.Random(seed)

    states = list(tree)
    bodies = [
        _Body(
            x=rng.random() * (width - 2 * FORCE_MARGIN) + FORCE_MARGIN,
            y=rng.random() * (height - 2 * FORCE_MARGIN) + FORCE_MARGIN,
        )
        for _ in states
    ]
    index_of = {state: i for i, state in enumerate(states)}
    edges = [
        (index_of[state], index_of[child])
        for state, node in tree.items()
        for child in node.children
        if child in index_of
    ]
    k = math.sqrt(max(0.0, width * height) / len(states))
    low_x, high_x = FORCE_MARGIN, width - FORCE_MARGIN
    low_y, high_y = FORCE_MARGIN, height - FORCE_MARGIN

    for _ in range(iterations):
        for i in range(len(bodies)):
            a = bodies[i]
            for j in range(i + 1, len(bodies)):
                b = bodies[j]
                dx = a.x - b.x
                dy = a.y - b.y
                distance = math.hypot(dx, dy)
                if distance < _MIN_DISTANCE:
                    # Coincident bodies: separate along a random direction.
                    angle = rng.random() * 2 * math.pi
                    dx, dy, distance = math.cos(angle), math.sin(angle), 1.0
                push = k * k / distance * FORCE_STEP
                fx = dx / distance * push
                fy = dy / distance * push
                a.vx += fx
                a.vy += fy
                b.vx -= fx
                b.vy -= fy

        for parent, child in edges:
            a = bodies[parent]
            b = bodies[child]
            dx = b.x - a.x
            dy = b.y - a.y
            distance = math.hypot(dx, dy)
            if distance < _MIN_DISTANCE:
                distance = 1.0
            pull = distance * distance / k * FORCE_STEP if k else 0.0
            fx = dx / distance * pull
            fy = dy / distance * pull
            a.vx += fx
            a.vy += fy
            b.vx -= fx
            b.vy -= fy

        for body in bodies:
            body.x += body.vx
            body.y += body.vy
            body.vx *= FORCE_DAMPING
            body.vy *= FORCE_DAMPING
            body.x = _clamp(body.x, low_x, high_x)
            body.y = _clamp(body.y, low_y, high_y)

    _separate_edges(bodies, edges, (low_x, high_x, low_y, high_y))
    return {state: Position(x=body.x, y=body.y) for state, body in zip(states, bodies)}


def compute_layout(
    kind: str,
    tree: NodeTable,
    width: float,
    height: float,
    *,
    seed: int | None = None,
    rng: random.Random | None = None,
    iterations: int = FORCE_ITERATIONS,
) -> PositionTable:
    """Dispatch on layout kind; unknown kinds use the hierarchical layout."""

    if kind == "radial":
        return radial_layout(tree, width, height)
    if kind == "force":
        return force_directed_layout(
            tree, width, height, iterations=iterations, seed=seed, rng=rng
        )
    return hierarchical_layout(tree, width, height)


def positions_to_dict(positions: PositionTable) -> dict[str, dict[str, Any]]:
    return {state_key(state): pos.to_dict() for state, pos in positions.items()}
