#!/usr/bin/env python3
"""Enumerate every shortest gap-free move sequence between two keypad buttons."""

from __future__ import annotations

import argparse
from collections import deque
from typing import Iterator, List

from keypad_model import (
    DIRECTIONAL_KEYPAD,
    MOVE_ACTIVATE,
    MOVE_DOWN,
    MOVE_LEFT,
    MOVE_RIGHT,
    MOVE_UP,
    NUMERIC_KEYPAD,
    InvariantViolation,
    Keypad,
    KeypadError,
    Pos,
)


def manhattan(a: Pos, b: Pos) -> int:
    return abs(a.x - b.x) + abs(a.y - b.y)


def iter_shortest_paths(keypad: Keypad, start: Pos, dest: Pos) -> Iterator[str]:
    """Yield each minimal move sequence from ``start`` to ``dest``, ending in ``A``.

    Every node branches once per axis that still needs moves, so all
    interleavings of the horizontal and vertical moves come out, each exactly
    once. Branches that step onto the gap are dropped.
    """
    if keypad.is_gap(start) or keypad.is_gap(dest):
        raise InvariantViolation(f"path endpoint on the {keypad.name} keypad gap: {start} -> {dest}")

    queue = deque([(start, "")])
    while queue:
        pos, moves = queue.popleft()
        if pos == dest:
            yield moves + MOVE_ACTIVATE
            continue
        steps = []
        if pos.y < dest.y:
            steps.append(MOVE_DOWN)
        elif pos.y > dest.y:
            steps.append(MOVE_UP)
        if pos.x < dest.x:
            steps.append(MOVE_RIGHT)
        elif pos.x > dest.x:
            steps.append(MOVE_LEFT)
        for move in steps:
            nxt = pos.step(move)
            if keypad.is_gap(nxt):
                continue
            queue.append((nxt, moves + move))


def shortest_paths(keypad: Keypad, start: Pos, dest: Pos) -> List[str]:
    paths = list(iter_shortest_paths(keypad, start, dest))
    if not paths:
        raise InvariantViolation(f"no path on the {keypad.name} keypad: {start} -> {dest}")
    return paths


def main() -> None:
    parser = argparse.ArgumentParser(description="List shortest button-to-button paths")
    parser.add_argument("start", help="start button")
    parser.add_argument("dest", help="destination button")
    parser.add_argument(
        "--keypad",
        choices=("numeric", "directional"),
        default="numeric",
        help="keypad layout to walk",
    )
    args = parser.parse_args()

    keypad = NUMERIC_KEYPAD if args.keypad == "numeric" else DIRECTIONAL_KEYPAD
    try:
        start = keypad.position_of(args.start)
        dest = keypad.position_of(args.dest)
    except KeypadError as exc:
        raise SystemExit(str(exc))
    for path in shortest_paths(keypad, start, dest):
        print(path)


if __name__ == "__main__":
    main()
