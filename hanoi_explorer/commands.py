from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any

from .config import resolve_config
from .layout import LAYOUT_KINDS, compute_layout, positions_to_dict
from .path import path_moves, solution_path
from .render import canvas_size_for_tree, render_tree_ascii, render_tree_image
from .state import (
    PEGS,
    HanoiGraphError,
    InvalidStateError,
    parse_state,
    pegs_of,
    state_key,
)
from .stats import tree_stats
from .tree import build_tree, max_expand_bound, tree_to_dict


def add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--config", help="Path to JSON config (defaults + overrides).")
    parser.add_argument("--n-disks", type=int, default=None)
    parser.add_argument(
        "--depth-bound",
        type=int,
        default=None,
        help=(
            "Expand nodes up to this depth (-1 = root only). "
            "Defaults to the full tree."
        ),
    )
    parser.add_argument("--layout", choices=list(LAYOUT_KINDS), default=None)
    parser.add_argument("--width", type=int, default=None)
    parser.add_argument("--height", type=int, default=None)
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for the force-directed layout.",
    )


def _resolve(args: argparse.Namespace) -> dict[str, Any]:
    overrides = {
        "n_disks": args.n_disks,
        "depth_bound": args.depth_bound,
        "layout": args.layout,
        "width": args.width,
        "height": args.height,
        "seed": args.seed,
    }
    if getattr(args, "out_dir", None) is not None:
        overrides["out_dir"] = args.out_dir
    return resolve_config(args.config, overrides)


def _run(parser: argparse.ArgumentParser, argv: list[str] | None, handler) -> int:
    args = parser.parse_args(argv)
    try:
        config = _resolve(args)
        return handler(args, config)
    except (HanoiGraphError, ValueError, OSError) as exc:
        print(f"error: {exc}", file=sys.stderr, flush=True)
        return 2


def _build(config: dict[str, Any]):
    return build_tree(config["n_disks"], config["depth_bound"])


def build_main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Build the Hanoi state tree.")
    add_common_arguments(parser)
    parser.add_argument("--json", action="store_true", help="Print the node table.")

    def handler(args: argparse.Namespace, config: dict[str, Any]) -> int:
        tree = _build(config)
        if args.json:
            print(json.dumps(tree_to_dict(tree), indent=2))
            return 0
        stats = tree_stats(tree)
        print(f"Disks: {config['n_disks']}")
        bound = config["depth_bound"]
        print(f"Depth bound: {'full' if bound is None else bound}")
        print(f"Total nodes: {stats.total_nodes}")
        print(f"Total moves: {stats.total_moves}")
        print(f"Tree depth: {stats.tree_depth}")
        print(f"Solution path length: {stats.solution_path_length}")
        if bound is not None and bound < max_expand_bound(config["n_disks"]):
            print("Goal not reached yet; increase --depth-bound to expand further.")
        return 0

    return _run(parser, argv, handler)


def path_main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Print the optimal solution path.")
    add_common_arguments(parser)
    parser.add_argument("--json", action="store_true")

    def handler(args: argparse.Namespace, config: dict[str, Any]) -> int:
        tree = _build(config)
        path = solution_path(tree, config["n_disks"])
        moves = path_moves(path)
        if args.json:
            payload = {
                "path": [state_key(state) for state in path],
                "moves": [move.to_dict() for move in moves],
            }
            print(json.dumps(payload, indent=2))
            return 0 if path else 1
        if not path:
            print("Goal not reachable within the current depth bound.", file=sys.stderr)
            return 1
        print(f"Path: {len(path)} states, {len(moves)} moves")
        print(f"  0. {state_key(path[0])}")
        for i, (state, move) in enumerate(zip(path[1:], moves), start=1):
            print(
                f"{i:3d}. {state_key(state)}  "
                f"(disk {move.disk}: {move.from_peg} -> {move.to_peg})"
            )
        return 0

    return _run(parser, argv, handler)


def layout_main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Print node positions as JSON.")
    add_common_arguments(parser)

    def handler(args: argparse.Namespace, config: dict[str, Any]) -> int:
        tree = _build(config)
        positions = compute_layout(
            config["layout"],
            tree,
            config["width"],
            config["height"],
            seed=config["seed"],
            iterations=config["force"]["iterations"],
        )
        print(json.dumps(positions_to_dict(positions), indent=2))
        return 0

    return _run(parser, argv, handler)


def render_main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Render the state tree.")
    add_common_arguments(parser)
    parser.add_argument("--out-dir", default=None)
    parser.add_argument("--format", choices=["png", "ascii"], default="png")
    parser.add_argument(
        "--highlight-path",
        action="store_true",
        help="Emphasize the solution path.",
    )
    parser.add_argument(
        "--fit-canvas",
        action=argparse.BooleanOptionalAction,
        default=True,
        help=(
            "Grow the canvas to fit the widest level and the tree depth "
            "(default). --no-fit-canvas keeps --width/--height as given."
        ),
    )

    def handler(args: argparse.Namespace, config: dict[str, Any]) -> int:
        tree = _build(config)
        highlight = solution_path(tree, config["n_disks"]) if args.highlight_path else []
        out_dir = Path(config["out_dir"])
        out_dir.mkdir(parents=True, exist_ok=True)

        if args.format == "ascii":
            out_path = out_dir / "tree.txt"
            out_path.write_text(render_tree_ascii(tree, highlight) + "\n")
        else:
            size = (config["width"], config["height"])
            if args.fit_canvas:
                size = canvas_size_for_tree(tree, available_width=config["width"] + 60)
            positions = compute_layout(
                config["layout"],
                tree,
                size[0],
                size[1],
                seed=config["seed"],
                iterations=config["force"]["iterations"],
            )
            image = render_tree_image(tree, positions, size=size, highlight=highlight)
            out_path = out_dir / "tree.png"
            out_path.write_bytes(image.to_bytes())
        print(f"Rendered to: {out_path}")
        return 0

    return _run(parser, argv, handler)


def node_main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Describe one node of the state tree.")
    add_common_arguments(parser)
    parser.add_argument(
        "--state",
        required=True,
        help='Configuration label, one peg per disk (e.g. "BAA").',
    )
    parser.add_argument("--json", action="store_true")

    def handler(args: argparse.Namespace, config: dict[str, Any]) -> int:
        state = parse_state(args.state)
        if len(state) != config["n_disks"]:
            raise InvalidStateError(
                f"state {state_key(state)} has {len(state)} disks, "
                f"expected {config['n_disks']}"
            )
        tree = _build(config)
        node = tree.get(state)
        if node is None:
            print(
                f"State {state_key(state)} is not in the tree at the current depth bound.",
                file=sys.stderr,
            )
            return 1
        if args.json:
            print(json.dumps({"state": state_key(state), **node.to_dict()}, indent=2))
            return 0
        print(f"State: {state_key(state)}")
        print(f"Depth: {node.depth}")
        print(f"Parent: {'-' if node.parent is None else state_key(node.parent)}")
        children = ", ".join(state_key(child) for child in node.children)
        print(f"Children ({len(node.children)}): {children or '-'}")
        for peg, disks in zip(PEGS, pegs_of(state)):
            print(f"  {peg}: {' '.join(str(disk) for disk in disks) or '-'}")
        return 0

    return _run(parser, argv, handler)
