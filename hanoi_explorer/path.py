from __future__ import annotations

from collections import deque

from .state import HanoiConfig, Move, describe_move, goal_state, initial_state
from .tree import NodeTable


def find_path(
    tree: NodeTable, start: HanoiConfig, goal: HanoiConfig
) -> list[HanoiConfig]:
    """Breadth-first search along tree edges from `start` to `goal`.

    Returns the states from start to goal inclusive, or an empty list when the
    goal has not been discovered in `tree` yet.
    """

    if start not in tree:
        return []

    came_from: dict[HanoiConfig, HanoiConfig | None] = {start: None}
    queue: deque[HanoiConfig] = deque([start])
    while queue:
        state = queue.popleft()
        if state == goal:
            path: list[HanoiConfig] = []
            cursor: HanoiConfig | None = state
            while cursor is not None:
                path.append(cursor)
                cursor = came_from[cursor]
            path.reverse()
            return path
        node = tree.get(state)
        if node is None:
            continue
        for child in node.children:
            if child not in came_from:
                came_from[child] = state
                queue.append(child)
    return []


def solution_path(tree: NodeTable, n_disks: int) -> list[HanoiConfig]:
    return find_path(tree, initial_state(n_disks), goal_state(n_disks))


def path_moves(path: list[HanoiConfig]) -> list[Move]:
    return [describe_move(before, after) for before, after in zip(path, path[1:])]
