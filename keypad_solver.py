#!/usr/bin/env python3
"""Keypad chain solver: minimal human key presses for codes typed through robot arms.

A code is typed on the numeric keypad by a robot whose arm is driven from a
directional keypad, which is itself pressed by another robot, and so on down
to the human. ``depth`` counts the robots in that chain, the numeric one
included, so ``depth == 1`` means the human drives the numeric robot
directly.

Costs are memoized on (cursor, destination, depth). The directional keypad
has five buttons, so each depth level holds at most 25 entries and deep
chains stay cheap.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence
import argparse
import logging
import sys
import time

from keypad_model import (
    DIRECTIONAL_KEYPAD,
    NUMERIC_KEYPAD,
    InvariantViolation,
    KeypadError,
    Pos,
    code_value,
    parse_code,
    replay_chain,
)
from keypad_paths import iter_shortest_paths, shortest_paths


logger = logging.getLogger(__name__)

DEFAULT_DEPTHS = (3, 26)
SHOW_LIMIT_DEFAULT = 4
# Upper bound on interpreter frames per chain level.
FRAMES_PER_LEVEL = 4


@dataclass(frozen=True)
class MemoKey:
    cursor: Pos
    dest: Pos
    depth: int


Memo = Dict[MemoKey, int]


def ensure_recursion_limit(depth: int) -> None:
    needed = depth * FRAMES_PER_LEVEL + 100
    if needed > sys.getrecursionlimit():
        sys.setrecursionlimit(needed + 1000)


# ---------- Directional chain ----------


def cheapest(moves: str, depth: int, memo: Memo) -> int:
    """Human presses needed for the robot at ``depth`` to press ``moves`` on a directional keypad."""
    if depth < 1:
        raise ValueError(f"depth must be >= 1, got {depth}")
    if depth == 1:
        return len(moves)
    cost = 0
    cursor = DIRECTIONAL_KEYPAD.home_pos
    for move in moves:
        dest = DIRECTIONAL_KEYPAD.position_of(move)
        cost += cheapest_path(cursor, dest, depth, memo)
        cursor = dest
    return cost


def cheapest_path(cursor: Pos, dest: Pos, depth: int, memo: Memo) -> int:
    if depth < 2:
        raise ValueError(f"directional transitions need depth >= 2, got {depth}")
    key = MemoKey(cursor, dest, depth)
    cached = memo.get(key)
    if cached is not None:
        return cached
    best = min(
        cheapest(candidate, depth - 1, memo)
        for candidate in shortest_paths(DIRECTIONAL_KEYPAD, cursor, dest)
    )
    memo[key] = best
    return best


def build_cost_table(depth: int) -> Memo:
    """Fill every directional (cursor, dest) pair level by level, without recursion.

    Produces the same entries ``cheapest_path`` would memoize for depths
    2..``depth``.
    """
    table: Memo = {}
    positions = sorted(DIRECTIONAL_KEYPAD.buttons.values())
    home = DIRECTIONAL_KEYPAD.home_pos

    def sequence_cost(moves: str, level: int) -> int:
        if level == 1:
            return len(moves)
        total = 0
        cursor = home
        for move in moves:
            nxt = DIRECTIONAL_KEYPAD.position_of(move)
            total += table[MemoKey(cursor, nxt, level)]
            cursor = nxt
        return total

    for level in range(2, depth + 1):
        for cursor in positions:
            for dest in positions:
                table[MemoKey(cursor, dest, level)] = min(
                    sequence_cost(candidate, level - 1)
                    for candidate in iter_shortest_paths(DIRECTIONAL_KEYPAD, cursor, dest)
                )
    return table


# ---------- Numeric keypad ----------


def cheapest_numeric_path(cursor: Pos, dest: Pos, depth: int, memo: Memo) -> int:
    return min(
        cheapest(candidate, depth, memo)
        for candidate in shortest_paths(NUMERIC_KEYPAD, cursor, dest)
    )


def code_cost(code: str, depth: int, memo: Optional[Memo] = None) -> int:
    if memo is None:
        memo = {}
    ensure_recursion_limit(depth)
    cost = 0
    cursor = NUMERIC_KEYPAD.home_pos
    for button in code:
        dest = NUMERIC_KEYPAD.position_of(button)
        cost += cheapest_numeric_path(cursor, dest, depth, memo)
        cursor = dest
    return cost


def complexity(code: str, depth: int, memo: Optional[Memo] = None) -> int:
    return code_cost(code, depth, memo) * code_value(code)


def total_complexity(codes: Iterable[str], depth: int, memo: Optional[Memo] = None) -> int:
    if memo is None:
        memo = {}
    total = sum(complexity(code, depth, memo) for code in codes)
    logger.debug("depth %d: %d memo entries", depth, len(memo))
    return total


# ---------- Keystroke reconstruction ----------


def _expand(moves: str, depth: int, memo: Memo) -> str:
    if depth == 1:
        return moves
    parts: List[str] = []
    cursor = DIRECTIONAL_KEYPAD.home_pos
    for move in moves:
        dest = DIRECTIONAL_KEYPAD.position_of(move)
        best = min(
            shortest_paths(DIRECTIONAL_KEYPAD, cursor, dest),
            key=lambda candidate: cheapest(candidate, depth - 1, memo),
        )
        parts.append(_expand(best, depth - 1, memo))
        cursor = dest
    return "".join(parts)


def optimal_keystrokes(code: str, depth: int, memo: Optional[Memo] = None) -> str:
    """Return one cheapest human keystroke string for ``code``.

    The result length equals ``code_cost(code, depth)`` and grows
    exponentially with depth; use it for small chains only.
    """
    if memo is None:
        memo = {}
    ensure_recursion_limit(depth)
    parts: List[str] = []
    cursor = NUMERIC_KEYPAD.home_pos
    for button in code:
        dest = NUMERIC_KEYPAD.position_of(button)
        best = min(
            shortest_paths(NUMERIC_KEYPAD, cursor, dest),
            key=lambda candidate: cheapest(candidate, depth, memo),
        )
        parts.append(_expand(best, depth, memo))
        cursor = dest
    return "".join(parts)


# ---------- CLI ----------


def load_codes(input_path: Optional[str], inline: Optional[Sequence[str]]) -> List[str]:
    if inline:
        lines = list(inline)
    elif input_path is None or input_path == "-":
        lines = sys.stdin.read().splitlines()
    else:
        lines = Path(input_path).read_text().splitlines()
    return [parse_code(line) for line in lines if line.strip()]


def main() -> None:
    parser = argparse.ArgumentParser(description="Solve keypad robot chains")
    parser.add_argument(
        "input",
        nargs="?",
        default=None,
        help="file with one code per line (default: stdin)",
    )
    parser.add_argument(
        "--code",
        action="append",
        default=None,
        help="code to solve (repeatable, overrides input)",
    )
    parser.add_argument(
        "--depth",
        type=int,
        action="append",
        default=None,
        help="robots in the chain, numeric one included (repeatable)",
    )
    parser.add_argument("--show", action="store_true", help="print per-code details")
    parser.add_argument(
        "--show-limit",
        type=int,
        default=SHOW_LIMIT_DEFAULT,
        help="max depth for printing keystroke strings with --show",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        codes = load_codes(args.input, args.code)
    except KeypadError as exc:
        raise SystemExit(f"bad input: {exc}")
    if not codes:
        raise SystemExit("no codes given")
    depths = args.depth or list(DEFAULT_DEPTHS)
    for depth in depths:
        if depth < 1:
            raise SystemExit(f"depth must be >= 1: {depth}")

    for depth in depths:
        memo: Memo = {}
        start_time = time.monotonic()
        total = total_complexity(codes, depth, memo)
        elapsed_us = int((time.monotonic() - start_time) * 1_000_000)
        print(f"depth {depth}: {total} in {elapsed_us}us")
        if not args.show:
            continue
        for code in codes:
            cost = code_cost(code, depth, memo)
            print(f"  {code}: {cost} x {code_value(code)} = {cost * code_value(code)}")
            if depth <= args.show_limit:
                keys = optimal_keystrokes(code, depth, memo)
                typed = replay_chain(keys, depth)
                if typed != code:
                    raise InvariantViolation(f"replay of {code} typed {typed}")
                logger.debug("replay of %s verified", code)
                print(f"    {keys}")


if __name__ == "__main__":
    main()
