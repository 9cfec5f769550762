from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .tree import NodeTable


@dataclass(frozen=True, slots=True)
class TreeStats:
    total_nodes: int
    total_moves: int
    tree_depth: int
    # Equals tree_depth; understates 2**n - 1 until the goal has been reached.
    solution_path_length: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_nodes": self.total_nodes,
            "total_moves": self.total_moves,
            "tree_depth": self.tree_depth,
            "solution_path_length": self.solution_path_length,
        }


def tree_stats(tree: NodeTable) -> TreeStats:
    if not tree:
        return TreeStats(0, 0, 0, 0)
    depth = max(node.depth for node in tree.values())
    return TreeStats(
        total_nodes=len(tree),
        total_moves=sum(len(node.children) for node in tree.values()),
        tree_depth=depth,
        solution_path_length=depth,
    )
