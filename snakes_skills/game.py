"""Game runner — drives a session to the end with one decider per seat."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

from snakes_skills.engine import (
    Decisions,
    Session,
    SessionSnapshot,
    TurnOutcome,
    resolve_turn,
    snapshot,
)
from snakes_skills.errors import InputRejected


# ── Decider interface ────────────────────────────────────────────────

@runtime_checkable
class Decider(Protocol):
    """Structural interface — any object with these members works."""

    @property
    def name(self) -> str: ...

    def decide(self, view: SessionSnapshot, seat: int) -> Decisions: ...


@dataclass
class PassiveDecider:
    """Never spends a skill. Anchor still fires on snakes."""

    display_name: str = "passive"

    @property
    def name(self) -> str:
        return self.display_name

    def decide(self, view: SessionSnapshot, seat: int) -> Decisions:
        return Decisions()


# ── Structured types ────────────────────────────────────────────────

@dataclass
class GameResult:
    winners: list[int]  # seats, in the order they finished
    reason: str  # "win" | "max_turns"
    turns: int = 0
    rejected_decisions: int = 0


# ── Observer ────────────────────────────────────────────────────────

class GameObserver(Protocol):
    """Receives every turn outcome as a game is played."""

    def on_turn(self, outcome: TurnOutcome) -> None: ...


@dataclass
class ListObserver:
    """Default observer — collects outcomes into a list."""

    outcomes: list[TurnOutcome] = field(default_factory=list)

    def on_turn(self, outcome: TurnOutcome) -> None:
        self.outcomes.append(outcome)


# ── Runner ───────────────────────────────────────────────────────────

MAX_DECISION_RETRIES = 3  # re-asks before a seat's choice counts as declined


class GameRunner:
    """Play one session to completion."""

    def __init__(
        self,
        deciders: list[Decider],
        session: Session,
        max_turns: int = 1000,
        observer: GameObserver | None = None,
    ):
        if len(deciders) != len(session.players):
            raise ValueError(
                f"{len(deciders)} deciders for {len(session.players)} players"
            )
        self.deciders = deciders
        self.session = session
        self.max_turns = max_turns
        self.observer = observer or ListObserver()
        self._finish_order: list[int] = []
        self._rejected = 0

    def play(self) -> GameResult:
        while not self.session.finished:
            if self.session.turn_number >= self.max_turns:
                return self._result("max_turns")
            outcome = self._play_turn()
            self.observer.on_turn(outcome)
            if outcome.won:
                self._finish_order.append(outcome.player)
        return self._result("win")

    def _play_turn(self) -> TurnOutcome:
        """Ask the acting seat for decisions, re-asking on rejection."""
        view = snapshot(self.session)
        seat = self._acting_seat()
        decider = self.deciders[seat]
        for _ in range(MAX_DECISION_RETRIES):
            decisions = decider.decide(view, seat)
            try:
                return resolve_turn(self.session, decisions, strict=True)
            except InputRejected:
                self._rejected += 1
        return resolve_turn(self.session, Decisions())

    def _acting_seat(self) -> int:
        players = self.session.players
        idx = self.session.active_index
        while players[idx].has_won:
            idx = (idx + 1) % len(players)
        return idx

    def _result(self, reason: str) -> GameResult:
        return GameResult(
            winners=list(self._finish_order),
            reason=reason,
            turns=self.session.turn_number,
            rejected_decisions=self._rejected,
        )
