import sys
from itertools import product

import pytest

import keypad_solver
from keypad_model import DIRECTIONAL_KEYPAD, MalformedButtonError, replay_chain
from keypad_solver import (
    MemoKey,
    build_cost_table,
    cheapest,
    cheapest_path,
    code_cost,
    complexity,
    optimal_keystrokes,
    total_complexity,
)


EXAMPLE_CODES = ["029A", "980A", "179A", "456A", "379A"]
DIRECTIONAL_POSITIONS = list(DIRECTIONAL_KEYPAD.buttons.values())


def test_depth_one_is_hand_counted_path_length():
    # <A ^A >^^A vvvA
    assert code_cost("029A", 1) == 12


def test_depth_two():
    assert code_cost("029A", 2) == 28


@pytest.mark.parametrize(
    "code, cost",
    [("029A", 68), ("980A", 60), ("179A", 68), ("456A", 64), ("379A", 64)],
)
def test_depth_three_costs(code, cost):
    assert code_cost(code, 3) == cost


def test_complexity():
    assert complexity("029A", 3) == 68 * 29 == 1972


def test_batch_depth_three():
    assert total_complexity(EXAMPLE_CODES, 3) == 126384


def test_batch_depth_twenty_six():
    memo = {}
    assert total_complexity(EXAMPLE_CODES, 26, memo) == 154115708116294
    assert len(memo) <= 25 * 25


def test_deep_single_code_is_large():
    assert code_cost("029A", 26) > 10**10


@pytest.mark.parametrize("depth", [2, 3, 5, 26])
def test_same_button_costs_one_press(depth):
    memo = {}
    for pos in DIRECTIONAL_POSITIONS:
        assert cheapest_path(pos, pos, depth, memo) == 1


def test_cost_monotonic_in_depth():
    memo = {}
    for cursor, dest in product(DIRECTIONAL_POSITIONS, DIRECTIONAL_POSITIONS):
        costs = [cheapest_path(cursor, dest, depth, memo) for depth in range(2, 12)]
        assert costs == sorted(costs)


def test_memo_entries_bounded_per_level():
    memo = {}
    code_cost("379A", 10, memo)
    assert 0 < len(memo) <= 25 * 9
    for depth in range(2, 11):
        assert sum(1 for key in memo if key.depth == depth) <= 25
    assert all(key.depth >= 2 for key in memo)


def test_memo_hit_returns_same_value():
    memo = {}
    cursor = DIRECTIONAL_KEYPAD.position_of("A")
    dest = DIRECTIONAL_KEYPAD.position_of("<")
    first = cheapest_path(cursor, dest, 6, memo)
    size = len(memo)
    assert cheapest_path(cursor, dest, 6, memo) == first
    assert len(memo) == size
    assert memo[MemoKey(cursor, dest, 6)] == first


def test_memo_is_consulted():
    home = DIRECTIONAL_KEYPAD.home_pos
    memo = {MemoKey(home, home, 2): 99}
    assert cheapest("A", 2, memo) == 99


def test_memo_shared_across_codes_matches_fresh():
    shared = {}
    for code in EXAMPLE_CODES:
        assert code_cost(code, 8, shared) == code_cost(code, 8)


def test_depth_validation():
    home = DIRECTIONAL_KEYPAD.home_pos
    with pytest.raises(ValueError):
        cheapest("A", 0, {})
    with pytest.raises(ValueError):
        cheapest_path(home, home, 1, {})
    with pytest.raises(ValueError):
        code_cost("029A", 0)


def test_malformed_code():
    with pytest.raises(MalformedButtonError):
        code_cost("02^A", 3)


def test_cost_table_matches_recursion():
    depth = 8
    table = build_cost_table(depth)
    assert len(table) == 25 * (depth - 1)
    memo = {}
    for key, value in table.items():
        assert cheapest_path(key.cursor, key.dest, key.depth, memo) == value


@pytest.mark.parametrize("depth", [1, 2, 3, 4])
@pytest.mark.parametrize("code", EXAMPLE_CODES)
def test_optimal_keystrokes_replay(code, depth):
    memo = {}
    keys = optimal_keystrokes(code, depth, memo)
    assert len(keys) == code_cost(code, depth, memo)
    assert replay_chain(keys, depth) == code


def test_cli_inline_codes(monkeypatch, capsys):
    monkeypatch.setattr(sys, "argv", ["keypad_solver.py", "--code", "029A", "--depth", "3"])
    keypad_solver.main()
    out = capsys.readouterr().out
    assert out.startswith("depth 3: 1972 in ")


def test_cli_file_input(tmp_path, monkeypatch, capsys):
    path = tmp_path / "codes.txt"
    path.write_text("\n".join(EXAMPLE_CODES) + "\n\n")
    monkeypatch.setattr(sys, "argv", ["keypad_solver.py", str(path), "--depth", "3", "--show"])
    keypad_solver.main()
    out = capsys.readouterr().out.splitlines()
    assert out[0].startswith("depth 3: 126384 in ")
    assert "  029A: 68 x 29 = 1972" in out


def test_cli_rejects_bad_code(monkeypatch):
    monkeypatch.setattr(sys, "argv", ["keypad_solver.py", "--code", "12B"])
    with pytest.raises(SystemExit):
        keypad_solver.main()
