from __future__ import annotations

import contextlib
import io
import json
import random
import tempfile
import unittest
from pathlib import Path

from hanoi_explorer import cli
from hanoi_explorer.render import canvas_size_for_tree
from hanoi_explorer.tree import build_tree

try:
    from PIL import Image as PILImage
except ImportError:  # pragma: no cover
    PILImage = None


def _run(argv: list[str]) -> tuple[int, str, str]:
    stdout = io.StringIO()
    stderr = io.StringIO()
    with contextlib.redirect_stdout(stdout), contextlib.redirect_stderr(stderr):
        code = cli.main(argv)
    return code, stdout.getvalue(), stderr.getvalue()


class TestCliSmoke(unittest.TestCase):
    def test_help_and_unknown_command(self) -> None:
        code, out, _ = _run([])
        self.assertEqual(code, 0)
        self.assertIn("render", out)
        code, out, _ = _run(["explode"])
        self.assertEqual(code, 2)
        self.assertIn("Unknown command: explode", out)

    def test_build_prints_stats(self) -> None:
        code, out, _ = _run(["build", "--n-disks", "2"])
        self.assertEqual(code, 0)
        self.assertIn("Total nodes: 9", out)
        self.assertIn("Tree depth: 3", out)

    def test_build_partial_hints_expansion(self) -> None:
        code, out, _ = _run(["build", "--n-disks", "3", "--depth-bound", "-1"])
        self.assertEqual(code, 0)
        self.assertIn("Total nodes: 1", out)
        self.assertIn("Goal not reached yet", out)

    def test_build_json(self) -> None:
        code, out, _ = _run(["build", "--n-disks", "1", "--json"])
        self.assertEqual(code, 0)
        payload = json.loads(out)
        self.assertEqual(payload["A"]["children"], ["B", "C"])

    def test_path_json(self) -> None:
        code, out, _ = _run(["path", "--n-disks", "2", "--json"])
        self.assertEqual(code, 0)
        payload = json.loads(out)
        self.assertEqual(payload["path"], ["AA", "BA", "BC", "CC"])
        self.assertEqual(len(payload["moves"]), 3)

    def test_path_unreachable(self) -> None:
        code, _, err = _run(["path", "--n-disks", "3", "--depth-bound", "2"])
        self.assertEqual(code, 1)
        self.assertIn("not reachable", err)

    def test_path_json_unreachable_exits_nonzero(self) -> None:
        code, out, _ = _run(
            ["path", "--n-disks", "3", "--depth-bound", "2", "--json"]
        )
        self.assertEqual(code, 1)
        self.assertEqual(json.loads(out), {"path": [], "moves": []})

    def test_layout_json(self) -> None:
        code, out, _ = _run(
            ["layout", "--n-disks", "2", "--layout", "force", "--seed", "1"]
        )
        self.assertEqual(code, 0)
        self.assertEqual(len(json.loads(out)), 9)

    def test_layout_reads_force_section_from_config(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.json"
            path.write_text(json.dumps({"layout": "force", "force": {"iterations": 0}}))
            code, out, _ = _run(
                ["layout", "--config", str(path), "--n-disks", "1", "--seed", "2"]
            )
        self.assertEqual(code, 0)
        positions = json.loads(out)
        rng = random.Random(2)
        self.assertAlmostEqual(positions["A"]["x"], rng.random() * 1000 + 100)
        self.assertAlmostEqual(positions["A"]["y"], rng.random() * 600 + 100)

    def test_node_text_and_json(self) -> None:
        code, out, _ = _run(["node", "--n-disks", "3", "--state", "baa"])
        self.assertEqual(code, 0)
        self.assertIn("State: BAA", out)
        self.assertIn("Depth: 1", out)
        self.assertIn("Parent: AAA", out)
        self.assertIn("  B: 0", out)
        code, out, _ = _run(["node", "--n-disks", "1", "--state", "A", "--json"])
        self.assertEqual(code, 0)
        self.assertEqual(
            json.loads(out),
            {"state": "A", "depth": 0, "parent": None, "children": ["B", "C"]},
        )

    def test_node_outside_bound_or_invalid(self) -> None:
        code, _, err = _run(
            ["node", "--n-disks", "3", "--depth-bound", "-1", "--state", "BAA"]
        )
        self.assertEqual(code, 1)
        self.assertIn("not in the tree", err)
        code, _, err = _run(["node", "--n-disks", "3", "--state", "ABD"])
        self.assertEqual(code, 2)
        self.assertIn("unknown peg label", err)
        code, _, err = _run(["node", "--n-disks", "3", "--state", "AB"])
        self.assertEqual(code, 2)
        self.assertIn("expected 3", err)

    def test_invalid_disk_count_reports_error(self) -> None:
        code, _, err = _run(["build", "--n-disks", "9"])
        self.assertEqual(code, 2)
        self.assertIn("error:", err)

    def test_render_ascii(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            code, out, _ = _run(
                [
                    "render",
                    "--n-disks",
                    "1",
                    "--format",
                    "ascii",
                    "--highlight-path",
                    "--out-dir",
                    tmp,
                ]
            )
            self.assertEqual(code, 0)
            self.assertIn("Rendered to:", out)
            text = (Path(tmp) / "tree.txt").read_text()
            self.assertIn("* C (depth 1)", text)

    @unittest.skipUnless(PILImage is not None, "pillow required for rendering")
    def test_render_png(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            code, _, _ = _run(
                ["render", "--n-disks", "2", "--fit-canvas", "--out-dir", tmp]
            )
            self.assertEqual(code, 0)
            with PILImage.open(Path(tmp) / "tree.png") as img:
                self.assertEqual(img.size, (1200, 800))

    @unittest.skipUnless(PILImage is not None, "pillow required for rendering")
    def test_render_fits_canvas_by_default(self) -> None:
        expected = canvas_size_for_tree(build_tree(5))
        self.assertNotEqual(expected, (1200, 800))
        with tempfile.TemporaryDirectory() as tmp:
            code, _, _ = _run(["render", "--n-disks", "5", "--out-dir", tmp])
            self.assertEqual(code, 0)
            with PILImage.open(Path(tmp) / "tree.png") as img:
                self.assertEqual(img.size, expected)

    @unittest.skipUnless(PILImage is not None, "pillow required for rendering")
    def test_render_no_fit_canvas_keeps_requested_size(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            code, _, _ = _run(
                ["render", "--n-disks", "5", "--no-fit-canvas", "--out-dir", tmp]
            )
            self.assertEqual(code, 0)
            with PILImage.open(Path(tmp) / "tree.png") as img:
                self.assertEqual(img.size, (1200, 800))


if __name__ == "__main__":
    unittest.main()
