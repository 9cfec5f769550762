"""Tower of Hanoi state-graph explorer: tree building, layouts and paths."""

from __future__ import annotations

from .explorer import MAX_DISKS, DiskCountError, HanoiTreeExplorer
from .layout import (
    LAYOUT_KINDS,
    Position,
    compute_layout,
    force_directed_layout,
    hierarchical_layout,
    radial_layout,
)
from .path import find_path, path_moves, solution_path
from .state import (
    PEGS,
    HanoiConfig,
    HanoiGraphError,
    IllegalMoveError,
    InvalidPegError,
    InvalidStateError,
    Move,
    describe_move,
    goal_state,
    initial_state,
    legal_moves,
    parse_state,
    state_key,
)
from .stats import TreeStats, tree_stats
from .tree import Node, build_tree, can_expand, max_expand_bound

__all__ = [
    "MAX_DISKS",
    "DiskCountError",
    "HanoiTreeExplorer",
    "LAYOUT_KINDS",
    "Position",
    "compute_layout",
    "force_directed_layout",
    "hierarchical_layout",
    "radial_layout",
    "find_path",
    "path_moves",
    "solution_path",
    "PEGS",
    "HanoiConfig",
    "HanoiGraphError",
    "IllegalMoveError",
    "InvalidPegError",
    "InvalidStateError",
    "Move",
    "describe_move",
    "goal_state",
    "initial_state",
    "legal_moves",
    "parse_state",
    "state_key",
    "TreeStats",
    "tree_stats",
    "Node",
    "build_tree",
    "can_expand",
    "max_expand_bound",
]
