"""Exception hierarchy for session setup, caller input and board data."""

from __future__ import annotations


class GameError(Exception):
    """Base class for every error raised by the game core."""


# ── Setup ────────────────────────────────────────────────────────────

class SetupError(GameError):
    """The roster handed to ``new_session`` is unusable."""


class InvalidCount(SetupError):
    def __init__(self, count: int, minimum: int, maximum: int):
        self.count = count
        super().__init__(
            f"A game needs {minimum}–{maximum} players, got {count}."
        )


class EmptyName(SetupError):
    def __init__(self, seat: int):
        self.seat = seat
        super().__init__(f"Player {seat + 1} has an empty name.")


class DuplicateName(SetupError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Player name {name!r} is already taken.")


# ── Play ─────────────────────────────────────────────────────────────

class InputRejected(GameError):
    """A caller decision was invalid. Nothing was mutated."""


class SessionFinished(GameError):
    """A turn was requested after the session ended."""


class SkillPoolExhausted(GameError):
    """Every skill in the pool is excluded."""


# ── Data ─────────────────────────────────────────────────────────────

class BoardError(GameError):
    """Board tables violate a construction-time invariant."""
