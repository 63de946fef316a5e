"""Per-player state and roster setup rules."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from snakes_skills.errors import DuplicateName, EmptyName, InvalidCount
from snakes_skills.skills import Skill

MIN_PLAYERS = 2
MAX_PLAYERS = 4
START_CELL = 0  # off the board until the first roll


@dataclass
class PlayerState:
    """Mutable state for one player. Owned by a single session."""

    name: str
    position: int = START_CELL
    skills: list[Skill] = field(default_factory=list)
    stunned: bool = False
    has_won: bool = False

    @property
    def key(self) -> str:
        return name_key(self.name)

    def mark_won(self) -> None:
        # has_won only ever goes False -> True
        self.has_won = True


@dataclass(frozen=True)
class PlayerSnapshot:
    """Read-only copy of a player for rendering."""

    name: str
    position: int
    skills: tuple[Skill, ...]
    stunned: bool
    has_won: bool

    @classmethod
    def of(cls, player: PlayerState) -> PlayerSnapshot:
        return cls(
            name=player.name,
            position=player.position,
            skills=tuple(player.skills),
            stunned=player.stunned,
            has_won=player.has_won,
        )

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "position": self.position,
            "skills": [s.value for s in self.skills],
            "stunned": self.stunned,
            "has_won": self.has_won,
        }


def name_key(name: str) -> str:
    return name.strip().casefold()


def make_roster(names: Iterable[str]) -> list[PlayerState]:
    """Build players in turn order from user-supplied names.

    Names are stripped. Raises ``InvalidCount`` for anything outside
    2–4 players, ``EmptyName`` for blank names and ``DuplicateName``
    when two names match ignoring case.
    """
    names = [n.strip() for n in names]
    if not MIN_PLAYERS <= len(names) <= MAX_PLAYERS:
        raise InvalidCount(len(names), MIN_PLAYERS, MAX_PLAYERS)

    seen: set[str] = set()
    roster = []
    for seat, name in enumerate(names):
        if not name:
            raise EmptyName(seat)
        key = name_key(name)
        if key in seen:
            raise DuplicateName(name)
        seen.add(key)
        roster.append(PlayerState(name=name))
    return roster


def find_player(roster: list[PlayerState], ref: int | str) -> int | None:
    """Resolve a roster index or a case-insensitive name to an index."""
    if isinstance(ref, bool):
        return None
    if isinstance(ref, int):
        return ref if 0 <= ref < len(roster) else None
    if isinstance(ref, str):
        key = name_key(ref)
        for idx, player in enumerate(roster):
            if player.key == key:
                return idx
    return None
