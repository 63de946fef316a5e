"""Monte-Carlo simulation of passive games and summary statistics."""

from __future__ import annotations

import statistics
from dataclasses import dataclass, field

from snakes_skills.dice import SeededRandom
from snakes_skills.engine import RuleSet, new_session
from snakes_skills.game import GameResult, GameRunner, PassiveDecider


@dataclass
class SimulationSummary:
    """Aggregate of many simulated games."""

    games: int
    names: list[str]
    wins_by_player: dict[str, int] = field(default_factory=dict)
    turn_counts: list[int] = field(default_factory=list)
    max_turns_hit: int = 0

    @property
    def mean_turns(self) -> float:
        return statistics.fmean(self.turn_counts) if self.turn_counts else 0.0

    @property
    def median_turns(self) -> float:
        return statistics.median(self.turn_counts) if self.turn_counts else 0.0


def simulate(
    n_games: int,
    names: list[str],
    seed: int | None = None,
    max_turns: int = 1000,
    rules: RuleSet | None = None,
) -> list[GameResult]:
    """Play *n_games* games between passive deciders.

    Game *i* uses seed ``seed + i`` so a run is reproducible end to end.
    """
    results = []
    for i in range(n_games):
        game_seed = None if seed is None else seed + i
        session = new_session(names, rng=SeededRandom(game_seed), rules=rules)
        runner = GameRunner(
            deciders=[PassiveDecider(name) for name in names],
            session=session,
            max_turns=max_turns,
        )
        results.append(runner.play())
    return results


def summarize(results: list[GameResult], names: list[str]) -> SimulationSummary:
    """Count first-place finishes per player and collect game lengths.

    Games cut off by ``max_turns`` still contribute their winners (if
    any) but not their length.
    """
    summary = SimulationSummary(
        games=len(results),
        names=list(names),
        wins_by_player={name: 0 for name in names},
    )
    for result in results:
        if result.winners:
            summary.wins_by_player[names[result.winners[0]]] += 1
        if result.reason == "max_turns":
            summary.max_turns_hit += 1
        else:
            summary.turn_counts.append(result.turns)
    return summary
