"""Board map: snake and ladder teleports plus the skill-tile set."""

from __future__ import annotations

from dataclasses import dataclass, field

from snakes_skills.errors import BoardError

WIN_CELL = 100
FIRST_CELL = 1

# fmt: off
SNAKES: dict[int, int] = {
    16:  6,  47: 26,  49: 11,  56: 53,  62: 19,
    64: 60,  87: 24,  93: 73,  95: 75,  98: 78,
}

LADDERS: dict[int, int] = {
     1: 38,   4: 14,   9: 31,  21: 42,  28: 84,
    36: 44,  51: 67,  71: 91,  80: 100,
}

SKILL_TILES: frozenset[int] = frozenset({10, 20, 30, 40, 50, 60, 70, 85, 90})
# fmt: on


@dataclass(frozen=True)
class BoardMap:
    """Immutable special-cell tables. All queries are pure."""

    snakes: dict[int, int] = field(default_factory=lambda: dict(SNAKES))
    ladders: dict[int, int] = field(default_factory=lambda: dict(LADDERS))
    skill_tiles: frozenset[int] = SKILL_TILES

    def __post_init__(self) -> None:
        # Own copies of the tables.
        object.__setattr__(self, "snakes", dict(self.snakes))
        object.__setattr__(self, "ladders", dict(self.ladders))
        object.__setattr__(self, "skill_tiles", frozenset(self.skill_tiles))
        _validate(self)

    def is_snake(self, cell: int) -> bool:
        return cell in self.snakes

    def is_ladder(self, cell: int) -> bool:
        return cell in self.ladders

    def is_skill_tile(self, cell: int) -> bool:
        return cell in self.skill_tiles

    def destination(self, cell: int) -> int | None:
        """Where a snake or ladder at *cell* leads, or None."""
        if cell in self.snakes:
            return self.snakes[cell]
        return self.ladders.get(cell)

    def teleport(self, cell: int) -> int:
        """Apply one snake/ladder hop from *cell*.

        Returns *cell* unchanged when it is not special. The result is
        never fed back into ``teleport`` by the engine.
        """
        dest = self.destination(cell)
        return cell if dest is None else dest


def _validate(board: BoardMap) -> None:
    for head, tail in board.snakes.items():
        _check_cell(head, "snake head")
        _check_cell(tail, "snake tail")
        if tail >= head:
            raise BoardError(f"Snake {head}→{tail} must lead downward.")
        if head == WIN_CELL:
            raise BoardError(f"Cell {WIN_CELL} can't be a snake head.")

    for foot, top in board.ladders.items():
        _check_cell(foot, "ladder foot")
        _check_cell(top, "ladder top")
        if top <= foot:
            raise BoardError(f"Ladder {foot}→{top} must lead upward.")

    overlap = board.snakes.keys() & board.ladders.keys()
    if overlap:
        raise BoardError(f"Cells {sorted(overlap)} are both snake and ladder.")

    for cell in board.skill_tiles:
        _check_cell(cell, "skill tile")
    clash = board.skill_tiles & (board.snakes.keys() | board.ladders.keys())
    if clash:
        raise BoardError(f"Skill tiles {sorted(clash)} overlap a snake or ladder.")

    special = board.snakes.keys() | board.ladders.keys() | board.skill_tiles
    if FIRST_CELL in special and WIN_CELL in special:
        raise BoardError(f"Cells {FIRST_CELL} and {WIN_CELL} can't both be special.")


def _check_cell(cell: int, what: str) -> None:
    if not FIRST_CELL <= cell <= WIN_CELL:
        raise BoardError(f"{what.capitalize()} {cell} is off the board.")


DEFAULT_BOARD = BoardMap()
