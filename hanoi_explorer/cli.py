from __future__ import annotations

import sys
from typing import Callable

from hanoi_explorer import commands

COMMANDS: dict[str, tuple[str, Callable[[list[str]], int]]] = {
    "build": ("Build the state tree and print stats", commands.build_main),
    "path": ("Print the optimal solution path", commands.path_main),
    "layout": ("Print node positions as JSON", commands.layout_main),
    "node": ("Describe one configuration in the tree", commands.node_main),
    "render": ("Render the tree (png/ascii)", commands.render_main),
}


def _print_help() -> None:
    print("hanoi-explorer <command> [args]\n")
    print("Commands:")
    for name, (desc, _) in COMMANDS.items():
        print(f"  {name:20s} {desc}")


def main(argv: list[str] | None = None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)
    if not args or args[0] in {"-h", "--help"}:
        _print_help()
        return 0

    command = args.pop(0)
    if command not in COMMANDS:
        print(f"Unknown command: {command}\n")
        _print_help()
        return 2

    _, handler = COMMANDS[command]
    return handler(args)


if __name__ == "__main__":
    raise SystemExit(main())
