from __future__ import annotations

import random
from typing import Any

from .layout import DEFAULT_LAYOUT, PositionTable, compute_layout
from .path import solution_path
from .state import HanoiConfig, HanoiGraphError, state_key, validate_n_disks
from .stats import TreeStats, tree_stats
from .tree import Node, build_tree, can_expand

MAX_DISKS = 6
DEFAULT_CANVAS_SIZE: tuple[int, int] = (1200, 800)


class DiskCountError(HanoiGraphError, ValueError):
    """Raised when a disk count is outside the explorer's supported range."""


class HanoiTreeExplorer:
    """Stateful session over the state-graph engine.

    Holds the current tree, depth bound, layout kind and canvas size. Each
    change computes a complete replacement tree or position table and swaps
    it in; nothing is patched in place.
    """

    def __init__(
        self,
        n_disks: int = 3,
        *,
        layout: str = DEFAULT_LAYOUT,
        canvas_size: tuple[int, int] = DEFAULT_CANVAS_SIZE,
        max_disks: int = MAX_DISKS,
        seed: int | None = None,
    ) -> None:
        validate_n_disks(max_disks)
        self.max_disks = max_disks
        self.n_disks = n_disks
        self.layout = layout
        self.width, self.height = canvas_size
        self._rng = random.Random(seed)

        self.depth_bound = -1
        self.tree: dict[HanoiConfig, Node] = {}
        self.positions: PositionTable = {}

        self.set_disk_count(n_disks)

    def set_disk_count(self, n_disks: int) -> None:
        validate_n_disks(n_disks)
        if n_disks > self.max_disks:
            raise DiskCountError(
                f"n_disks must be <= {self.max_disks}, got {n_disks}"
            )
        self.n_disks = n_disks
        self.depth_bound = -1
        self.tree = {}
        self.positions = {}

    def generate(self) -> dict[HanoiConfig, Node]:
        """Start over from the root configuration alone."""

        self._replace_tree(-1)
        return self.tree

    @property
    def can_expand(self) -> bool:
        return bool(self.tree) and can_expand(self.n_disks, self.depth_bound)

    def expand_one_level(self) -> bool:
        if not self.can_expand:
            return False
        self._replace_tree(self.depth_bound + 1)
        return True

    def set_layout(self, kind: str) -> PositionTable:
        self.layout = kind
        self.positions = self._layout()
        return self.positions

    def resize(self, width: int, height: int) -> PositionTable:
        self.width = width
        self.height = height
        self.positions = self._layout()
        return self.positions

    @property
    def stats(self) -> TreeStats:
        return tree_stats(self.tree)

    def solution_path(self) -> list[HanoiConfig]:
        if not self.tree:
            return []
        return solution_path(self.tree, self.n_disks)

    def node_info(self, state: HanoiConfig) -> dict[str, Any] | None:
        node = self.tree.get(state)
        if node is None:
            return None
        return {
            "state": state_key(state),
            "depth": node.depth,
            "children": len(node.children),
            "parent": None if node.parent is None else state_key(node.parent),
        }

    def _replace_tree(self, depth_bound: int) -> None:
        tree = build_tree(self.n_disks, depth_bound)
        self.tree = tree
        self.depth_bound = depth_bound
        self.positions = self._layout()

    def _layout(self) -> PositionTable:
        if not self.tree:
            return {}
        return compute_layout(
            self.layout, self.tree, self.width, self.height, rng=self._rng
        )
