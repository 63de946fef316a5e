"""Random source for die rolls and skill draws.

The engine only talks to the ``RandomSource`` protocol, so tests can
swap in ``ScriptedRandom`` and replay an exact sequence.
"""

from __future__ import annotations

import random
from collections.abc import Collection, Iterable, Sequence
from typing import Protocol, runtime_checkable

from snakes_skills.errors import SkillPoolExhausted
from snakes_skills.skills import Skill

DIE_FACES = 6


@runtime_checkable
class RandomSource(Protocol):
    def roll_die(self) -> int: ...

    def pick_skill(
        self, pool: Sequence[Skill], exclude: Collection[Skill] = ...,
    ) -> Skill: ...


def _available(pool: Sequence[Skill], exclude: Collection[Skill]) -> list[Skill]:
    remaining = [s for s in pool if s not in exclude]
    if not remaining:
        raise SkillPoolExhausted("No skill left to draw.")
    return remaining


class SeededRandom:
    """Uniform die and skill draws from a private ``random.Random``."""

    def __init__(self, seed: int | None = None):
        self.seed = seed
        self._rng = random.Random(seed)

    def roll_die(self) -> int:
        return self._rng.randint(1, DIE_FACES)

    def pick_skill(
        self, pool: Sequence[Skill], exclude: Collection[Skill] = (),
    ) -> Skill:
        return self._rng.choice(_available(pool, exclude))


class ScriptExhausted(LookupError):
    pass


class ScriptedRandom:
    """Replays fixed rolls and skill picks, in order.

    Scripted picks that are excluded at draw time are skipped over, the
    same way a fair draw would never return them.
    """

    def __init__(self, rolls: Iterable[int] = (), picks: Iterable[Skill] = ()):
        self.rolls = list(rolls)
        self.picks = list(picks)
        for value in self.rolls:
            if not 1 <= value <= DIE_FACES:
                raise ValueError(f"Scripted roll {value} is not a die face.")

    def roll_die(self) -> int:
        if not self.rolls:
            raise ScriptExhausted("Ran out of scripted rolls.")
        return self.rolls.pop(0)

    def pick_skill(
        self, pool: Sequence[Skill], exclude: Collection[Skill] = (),
    ) -> Skill:
        remaining = _available(pool, exclude)
        while self.picks:
            pick = self.picks.pop(0)
            if pick in remaining:
                return pick
        raise ScriptExhausted("Ran out of scripted skill picks.")
