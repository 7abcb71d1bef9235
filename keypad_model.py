#!/usr/bin/env python3
"""Keypad layouts for the robot chain: button coordinates, gaps, and a replay simulator."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List


MOVE_UP = "^"
MOVE_DOWN = "v"
MOVE_LEFT = "<"
MOVE_RIGHT = ">"
MOVE_ACTIVATE = "A"

# Layout rows, top to bottom. A space marks the gap.
NUMERIC_ROWS = ("789", "456", "123", " 0A")
DIRECTIONAL_ROWS = (" ^A", "<v>")

GAP_CHAR = " "


class KeypadError(RuntimeError):
    pass


class MalformedButtonError(KeypadError, ValueError):
    pass


class InvariantViolation(KeypadError):
    pass


@dataclass(frozen=True, order=True)
class Pos:
    x: int
    y: int

    def step(self, move: str) -> "Pos":
        dx, dy = MOVE_DELTAS[move]
        return Pos(self.x + dx, self.y + dy)


MOVE_DELTAS = {
    MOVE_UP: (0, -1),
    MOVE_DOWN: (0, 1),
    MOVE_LEFT: (-1, 0),
    MOVE_RIGHT: (1, 0),
}


@dataclass(frozen=True)
class Keypad:
    name: str
    buttons: Dict[str, Pos]
    gap: Pos
    home: str = MOVE_ACTIVATE

    def position_of(self, button: str) -> Pos:
        pos = self.buttons.get(button)
        if pos is None:
            raise MalformedButtonError(f"{button!r} is not a button on the {self.name} keypad")
        return pos

    def button_at(self, pos: Pos) -> str:
        if pos == self.gap:
            raise InvariantViolation(f"cursor rests on the {self.name} keypad gap at {pos}")
        for button, button_pos in self.buttons.items():
            if button_pos == pos:
                return button
        raise InvariantViolation(f"cursor left the {self.name} keypad at {pos}")

    def is_gap(self, pos: Pos) -> bool:
        return pos == self.gap

    @property
    def home_pos(self) -> Pos:
        return self.position_of(self.home)

    def replay(self, keystrokes: Iterable[str]) -> str:
        """Drive this keypad's arm with ``keystrokes`` and return the buttons it presses.

        The arm starts on the home button. Each direction move shifts it by one
        cell and ``A`` presses whatever is under it. The arm must never stop on
        the gap or leave the grid.
        """
        cursor = self.home_pos
        pressed: List[str] = []
        for move in keystrokes:
            if move == MOVE_ACTIVATE:
                pressed.append(self.button_at(cursor))
                continue
            if move not in MOVE_DELTAS:
                raise MalformedButtonError(f"invalid move: {move!r}")
            cursor = cursor.step(move)
            self.button_at(cursor)
        return "".join(pressed)


def build_keypad(name: str, rows: Iterable[str]) -> Keypad:
    buttons: Dict[str, Pos] = {}
    gaps: List[Pos] = []
    for y, row in enumerate(rows):
        for x, ch in enumerate(row):
            if ch == GAP_CHAR:
                gaps.append(Pos(x, y))
            else:
                buttons[ch] = Pos(x, y)
    if len(gaps) != 1:
        raise ValueError(f"{name} keypad must have exactly one gap, found {len(gaps)}")
    return Keypad(name=name, buttons=buttons, gap=gaps[0])


NUMERIC_KEYPAD = build_keypad("numeric", NUMERIC_ROWS)
DIRECTIONAL_KEYPAD = build_keypad("directional", DIRECTIONAL_ROWS)


def parse_code(text: str) -> str:
    code = text.strip()
    if not code:
        raise MalformedButtonError("empty code")
    for ch in code:
        NUMERIC_KEYPAD.position_of(ch)
    if not code.endswith(MOVE_ACTIVATE):
        raise MalformedButtonError(f"code must end with {MOVE_ACTIVATE!r}: {code!r}")
    return code


def code_value(code: str) -> int:
    digits = "".join(ch for ch in code if ch.isdigit())
    return int(digits) if digits else 0


def replay_chain(keystrokes: str, depth: int) -> str:
    """Feed human keystrokes down a chain of ``depth`` robots and return what the numeric keypad receives.

    The human drives the first robot directly, so ``depth - 1`` directional
    keypads sit between the human and the numeric keypad.
    """
    if depth < 1:
        raise ValueError(f"depth must be >= 1, got {depth}")
    typed = keystrokes
    for _ in range(depth - 1):
        typed = DIRECTIONAL_KEYPAD.replay(typed)
    return NUMERIC_KEYPAD.replay(typed)
