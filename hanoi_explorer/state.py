from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TypeAlias

Peg: TypeAlias = str
HanoiConfig: TypeAlias = tuple[Peg, ...]

# Left, Middle, Right. Iteration order fixes the order children are discovered.
PEGS: tuple[Peg, ...] = ("A", "B", "C")
START_PEG: Peg = "A"
GOAL_PEG: Peg = "C"


class HanoiGraphError(Exception):
    """Base exception for the Tower of Hanoi state-graph engine."""


class InvalidPegError(HanoiGraphError, ValueError):
    """Raised when a peg label is not one of PEGS."""


class InvalidStateError(HanoiGraphError, ValueError):
    """Raised when a configuration cannot be parsed."""


class IllegalMoveError(HanoiGraphError):
    """Raised when two configurations are not one legal move apart."""


@dataclass(frozen=True, slots=True)
class Move:
    """A single disk relocation.

    `disk` is the position in the configuration tuple. A lower index always
    sits above a higher index on the same peg.
    """

    disk: int
    from_peg: Peg
    to_peg: Peg

    def to_dict(self) -> dict[str, Any]:
        return {"disk": self.disk, "from_peg": self.from_peg, "to_peg": self.to_peg}


def validate_n_disks(n_disks: int) -> None:
    if isinstance(n_disks, bool) or not isinstance(n_disks, int):
        raise TypeError(f"n_disks must be int, got {type(n_disks).__name__}")
    if n_disks < 1:
        raise ValueError(f"n_disks must be >= 1, got {n_disks}")


def _validate_peg(peg: Peg) -> None:
    if peg not in PEGS:
        raise InvalidPegError(f"peg must be one of {PEGS}, got {peg!r}")


def initial_state(n_disks: int, peg: Peg = START_PEG) -> HanoiConfig:
    validate_n_disks(n_disks)
    _validate_peg(peg)
    return (peg,) * n_disks


def goal_state(n_disks: int, peg: Peg = GOAL_PEG) -> HanoiConfig:
    return initial_state(n_disks, peg)


def state_key(state: HanoiConfig) -> str:
    return "".join(state)


def parse_state(text: str) -> HanoiConfig:
    """Parse a label such as "AAB" (one peg label per disk) into a configuration."""

    if not isinstance(text, str):
        raise InvalidStateError(f"state must be a string, got {type(text).__name__}")
    cleaned = text.strip().upper()
    if not cleaned:
        raise InvalidStateError("state must contain at least one peg label")
    unknown = sorted({label for label in cleaned if label not in PEGS})
    if unknown:
        raise InvalidStateError(
            f"unknown peg label(s) {', '.join(unknown)} in {text!r}; expected {PEGS}"
        )
    return tuple(cleaned)


def pegs_of(state: HanoiConfig) -> tuple[tuple[int, ...], ...]:
    """Stack view of a configuration: disk indices per peg, listed bottom->top."""

    stacks: dict[Peg, list[int]] = {peg: [] for peg in PEGS}
    for disk in range(len(state) - 1, -1, -1):
        stacks[state[disk]].append(disk)
    return tuple(tuple(stacks[peg]) for peg in PEGS)


def _top_disks(state: HanoiConfig) -> dict[Peg, int]:
    # Topmost disk on a peg is the lowest index resting there.
    tops: dict[Peg, int] = {}
    for disk, peg in enumerate(state):
        tops.setdefault(peg, disk)
    return tops


def legal_moves(state: HanoiConfig) -> list[HanoiConfig]:
    """All configurations reachable from `state` by one legal move.

    Enumerates (from_peg, to_peg) over PEGS x PEGS, so the result order is
    stable across runs.
    """

    tops = _top_disks(state)
    successors: list[HanoiConfig] = []
    for from_peg in PEGS:
        if from_peg not in tops:
            continue
        disk = tops[from_peg]
        for to_peg in PEGS:
            if to_peg == from_peg:
                continue
            if to_peg not in tops or tops[to_peg] > disk:
                successors.append(state[:disk] + (to_peg,) + state[disk + 1 :])
    return successors


def describe_move(before: HanoiConfig, after: HanoiConfig) -> Move:
    if len(before) != len(after):
        raise IllegalMoveError(
            f"states have different disk counts: {len(before)} vs {len(after)}"
        )
    if after not in legal_moves(before):
        raise IllegalMoveError(
            f"{state_key(before)} -> {state_key(after)} is not a single legal move"
        )
    disk = next(i for i, (a, b) in enumerate(zip(before, after)) if a != b)
    return Move(disk=disk, from_peg=before[disk], to_peg=after[disk])
