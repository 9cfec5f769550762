from __future__ import annotations

import unittest

from hanoi_explorer.state import initial_state
from hanoi_explorer.tree import (
    Node,
    build_tree,
    can_expand,
    levels,
    max_expand_bound,
    tree_to_dict,
)


class TestBuildTree(unittest.TestCase):
    def test_bound_minus_one_is_root_only(self) -> None:
        for n_disks in (1, 3, 5):
            tree = build_tree(n_disks, -1)
            self.assertEqual(
                tree, {initial_state(n_disks): Node(depth=0, parent=None)}
            )

    def test_bound_zero_discovers_one_level_past_root(self) -> None:
        tree = build_tree(3, 0)
        root = initial_state(3)
        self.assertEqual(len(tree), 3)
        self.assertEqual(tree[root].children, (("B", "A", "A"), ("C", "A", "A")))
        self.assertEqual({node.depth for node in tree.values()}, {0, 1})

    def test_full_tree_covers_every_configuration(self) -> None:
        for n_disks, expected in ((1, 3), (2, 9), (3, 27), (4, 81)):
            self.assertEqual(len(build_tree(n_disks)), expected)

    def test_full_tree_depth_is_optimal_move_count(self) -> None:
        tree = build_tree(3)
        self.assertEqual(max(node.depth for node in tree.values()), 7)

    def test_tree_invariants(self) -> None:
        tree = build_tree(3)
        root = initial_state(3)
        self.assertIsNone(tree[root].parent)
        self.assertEqual(tree[root].depth, 0)
        for state, node in tree.items():
            if state == root:
                continue
            parent = tree[node.parent]
            self.assertEqual(node.depth, parent.depth + 1)
            self.assertEqual(parent.children.count(state), 1)
        all_children = [c for node in tree.values() for c in node.children]
        self.assertEqual(len(all_children), len(set(all_children)))
        self.assertEqual(len(all_children), len(tree) - 1)

    def test_depth_bound_prefix_is_monotonic(self) -> None:
        previous = build_tree(3, -1)
        for bound in range(0, 8):
            current = build_tree(3, bound)
            self.assertGreaterEqual(len(current), len(previous))
            for state, node in previous.items():
                self.assertIn(state, current)
                self.assertEqual(current[state].depth, node.depth)
                self.assertEqual(current[state].parent, node.parent)
            self.assertEqual(
                max(node.depth for node in current.values()), min(bound + 1, 7)
            )
            previous = current

    def test_each_build_returns_a_fresh_table(self) -> None:
        first = build_tree(2, 0)
        second = build_tree(2, 0)
        self.assertEqual(first, second)
        self.assertIsNot(first, second)

    def test_expand_bounds(self) -> None:
        self.assertEqual(max_expand_bound(1), 0)
        self.assertEqual(max_expand_bound(3), 6)
        self.assertTrue(can_expand(3, 5))
        self.assertFalse(can_expand(3, 6))
        self.assertIn(("C", "C", "C"), build_tree(3, max_expand_bound(3)))

    def test_levels_keep_discovery_order(self) -> None:
        grouped = levels(build_tree(1))
        self.assertEqual(grouped, {0: [("A",)], 1: [("B",), ("C",)]})

    def test_tree_to_dict(self) -> None:
        payload = tree_to_dict(build_tree(1))
        self.assertEqual(
            payload["A"], {"depth": 0, "parent": None, "children": ["B", "C"]}
        )
        self.assertEqual(payload["C"], {"depth": 1, "parent": "A", "children": []})


if __name__ == "__main__":
    unittest.main()
