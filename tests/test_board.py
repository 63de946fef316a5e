"""Tests for snakes_skills.board."""

import pytest

from snakes_skills.board import (
    DEFAULT_BOARD,
    LADDERS,
    SKILL_TILES,
    SNAKES,
    WIN_CELL,
    BoardMap,
)
from snakes_skills.errors import BoardError


# ── constants ────────────────────────────────────────────────────────

def test_default_tables_sizes():
    assert len(LADDERS) == 9
    assert len(SNAKES) == 10
    assert len(SKILL_TILES) == 9


def test_snakes_go_down_ladders_go_up():
    assert all(tail < head for head, tail in SNAKES.items())
    assert all(top > foot for foot, top in LADDERS.items())


def test_default_tables_are_disjoint():
    assert not SNAKES.keys() & LADDERS.keys()
    assert not SKILL_TILES & (SNAKES.keys() | LADDERS.keys())


# ── queries ──────────────────────────────────────────────────────────

def test_teleport_ladder():
    assert DEFAULT_BOARD.teleport(1) == 38
    assert DEFAULT_BOARD.teleport(80) == WIN_CELL


def test_teleport_snake():
    assert DEFAULT_BOARD.teleport(16) == 6
    assert DEFAULT_BOARD.teleport(98) == 78


def test_teleport_plain_cell_unchanged():
    assert DEFAULT_BOARD.teleport(50) == 50
    assert DEFAULT_BOARD.teleport(WIN_CELL) == WIN_CELL


def test_teleport_is_pure():
    for cell in range(1, WIN_CELL + 1):
        first = DEFAULT_BOARD.teleport(cell)
        assert all(DEFAULT_BOARD.teleport(cell) == first for _ in range(3))


def test_is_snake_and_is_ladder():
    assert DEFAULT_BOARD.is_ladder(28) is True
    assert DEFAULT_BOARD.is_snake(28) is False
    assert DEFAULT_BOARD.is_snake(64) is True
    assert DEFAULT_BOARD.is_ladder(64) is False


def test_is_skill_tile():
    assert DEFAULT_BOARD.is_skill_tile(10) is True
    assert DEFAULT_BOARD.is_skill_tile(85) is True
    assert DEFAULT_BOARD.is_skill_tile(11) is False


def test_destination():
    assert DEFAULT_BOARD.destination(36) == 44
    assert DEFAULT_BOARD.destination(47) == 26
    assert DEFAULT_BOARD.destination(45) is None


def test_custom_board_copies_tables():
    ladders = {2: 20}
    board = BoardMap(snakes={30: 3}, ladders=ladders, skill_tiles={5})
    ladders[3] = 50
    assert not board.is_ladder(3)
    assert board.teleport(2) == 20


# ── construction invariants ──────────────────────────────────────────

@pytest.mark.parametrize("kwargs", [
    {"snakes": {10: 20}},                         # snake going up
    {"ladders": {20: 10}},                        # ladder going down
    {"snakes": {WIN_CELL: 50}},                   # snake on the goal
    {"snakes": {101: 5}},                         # off the board
    {"ladders": {0: 5}},
    {"snakes": {30: 3}, "ladders": {30: 40}},     # both at once
    {"skill_tiles": {16}},                        # tile on a snake head
    {"ladders": {1: 38}, "skill_tiles": {WIN_CELL}, "snakes": {}},
])
def test_invalid_boards_rejected(kwargs):
    with pytest.raises(BoardError):
        BoardMap(**kwargs)
