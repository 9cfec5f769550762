from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Any, Mapping, TypeAlias

from .state import HanoiConfig, initial_state, legal_moves, state_key


@dataclass(frozen=True, slots=True)
class Node:
    """One discovered configuration in the BFS tree.

    `children` keeps discovery order; `parent` is None only for the root.
    """

    depth: int
    parent: HanoiConfig | None
    children: tuple[HanoiConfig, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "depth": self.depth,
            "parent": None if self.parent is None else state_key(self.parent),
            "children": [state_key(child) for child in self.children],
        }


NodeTable: TypeAlias = Mapping[HanoiConfig, Node]


def build_tree(n_disks: int, depth_bound: int | None = None) -> dict[HanoiConfig, Node]:
    """Breadth-first tree of configurations reachable from the root.

    A node is expanded only while its depth does not exceed `depth_bound`, so
    the result holds every node up to depth `depth_bound + 1`. A bound of -1
    yields the root alone; None expands the whole state space.
    """

    start = initial_state(n_disks)
    depths: dict[HanoiConfig, int] = {start: 0}
    parents: dict[HanoiConfig, HanoiConfig | None] = {start: None}
    children: dict[HanoiConfig, list[HanoiConfig]] = {start: []}

    queue: deque[tuple[HanoiConfig, int]] = deque([(start, 0)])
    while queue:
        state, depth = queue.popleft()
        if depth_bound is not None and depth > depth_bound:
            continue
        for child in legal_moves(state):
            if child in depths:
                continue
            depths[child] = depth + 1
            parents[child] = state
            children[child] = []
            children[state].append(child)
            queue.append((child, depth + 1))

    return {
        state: Node(depth=depths[state], parent=parents[state], children=tuple(kids))
        for state, kids in children.items()
    }


def max_expand_bound(n_disks: int) -> int:
    """Largest depth bound worth requesting: its tree already contains the goal."""

    return (1 << n_disks) - 2


def can_expand(n_disks: int, depth_bound: int) -> bool:
    return depth_bound < max_expand_bound(n_disks)


def levels(tree: NodeTable) -> dict[int, list[HanoiConfig]]:
    """Group nodes by depth, preserving table (discovery) order within a level."""

    grouped: dict[int, list[HanoiConfig]] = {}
    for state, node in tree.items():
        grouped.setdefault(node.depth, []).append(state)
    return grouped


def tree_to_dict(tree: NodeTable) -> dict[str, dict[str, Any]]:
    return {state_key(state): node.to_dict() for state, node in tree.items()}
