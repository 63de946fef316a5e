"""Turn engine — resolves one player's turn against a game session.

A turn runs through a fixed sequence:

    TurnStart → (stunned? skip) → OptionalSkillUse → DiceResolution
      → MovementResolution → SkillTileCheck → WinCheck → TurnEnd

The engine never prompts. Everything a player might choose during a
turn arrives up front in a ``Decisions`` value, and everything that
happened comes back as a ``TurnOutcome``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, fields, is_dataclass

from snakes_skills.board import DEFAULT_BOARD, WIN_CELL, BoardMap
from snakes_skills.dice import DIE_FACES, RandomSource, SeededRandom
from snakes_skills.errors import InputRejected, SessionFinished
from snakes_skills.players import (
    PlayerSnapshot,
    PlayerState,
    find_player,
    make_roster,
)
from snakes_skills.skills import (
    CATALOG,
    MAX_SKILLS,
    Skill,
    acquire_skill,
    apply_targeted,
    consume,
    shield_blocks,
    take_skill,
)

logger = logging.getLogger(__name__)


# ── Configuration ────────────────────────────────────────────────────

@dataclass
class RuleSet:
    max_skills: int = MAX_SKILLS
    # End the session on the first win instead of playing out the rest.
    stop_at_first_win: bool = False

    def __post_init__(self) -> None:
        # A full hand must leave something to draw on a skill tile.
        if not 0 <= self.max_skills < len(CATALOG):
            raise ValueError(
                f"max_skills must be 0–{len(CATALOG) - 1}, got {self.max_skills}"
            )


# ── Inputs ───────────────────────────────────────────────────────────

@dataclass
class Decisions:
    """Choices the active player makes for one turn.

    ``use_skill`` is an index into the player's skill list; leaving it
    None declines. ``skill_target`` is a roster index or a player name.
    ``dice_value`` is only read for Dice Control. ``use_anchor`` answers
    the reactive Anchor prompt ahead of time.
    """

    use_skill: int | None = None
    skill_target: int | str | None = None
    dice_value: int | None = None
    replace_skill_on_tile: int | None = None
    use_anchor: bool = True


# ── Outcome ──────────────────────────────────────────────────────────

@dataclass
class MovementTrace:
    start: int
    after_roll: int
    after_teleport: int
    overshoot: bool = False
    teleport_kind: str | None = None  # "snake" | "ladder"
    teleport_blocked_by: Skill | None = None


@dataclass
class SkillUseTrace:
    skill: Skill | None = None
    target: int | None = None
    blocked_by_shield: bool = False
    effect_value: int | None = None
    rejected: str | None = None  # why the requested use was dropped


@dataclass
class AcquisitionTrace:
    cell: int
    skill: Skill | None = None
    replaced: Skill | None = None
    full: bool = False


@dataclass
class TurnOutcome:
    """Everything that happened during one resolved turn."""

    player: int
    player_name: str
    turn_number: int
    skipped: bool = False
    roll: int | None = None
    dice_controlled: bool = False
    movement: MovementTrace | None = None
    skill_use: SkillUseTrace | None = None
    acquisition: AcquisitionTrace | None = None
    won: bool = False
    finished: bool = False

    def to_dict(self) -> dict:
        return _plain(self)


def _plain(obj):
    if isinstance(obj, Skill):
        return obj.value
    if is_dataclass(obj):
        return {f.name: _plain(getattr(obj, f.name)) for f in fields(obj)}
    if isinstance(obj, (list, tuple)):
        return [_plain(v) for v in obj]
    return obj


# ── Session ──────────────────────────────────────────────────────────

@dataclass
class Session:
    """One game. Exclusively owns its players."""

    players: list[PlayerState]
    board: BoardMap = DEFAULT_BOARD
    rng: RandomSource = field(default_factory=SeededRandom)
    rules: RuleSet = field(default_factory=RuleSet)
    active_index: int = 0
    finished: bool = False
    turn_number: int = 0

    @property
    def active_player(self) -> PlayerState:
        return self.players[self.active_index]

    @property
    def winners(self) -> list[int]:
        return [i for i, p in enumerate(self.players) if p.has_won]


@dataclass(frozen=True)
class SessionSnapshot:
    players: tuple[PlayerSnapshot, ...]
    active_index: int
    finished: bool
    turn_number: int

    def to_dict(self) -> dict:
        return {
            "players": [p.to_dict() for p in self.players],
            "active_index": self.active_index,
            "finished": self.finished,
            "turn_number": self.turn_number,
        }


def new_session(
    names: list[str],
    board: BoardMap | None = None,
    rng: RandomSource | None = None,
    rules: RuleSet | None = None,
) -> Session:
    """Create a session with players seated in the order given.

    Raises a ``SetupError`` subclass for a bad roster.
    """
    session = Session(
        players=make_roster(names),
        board=board or DEFAULT_BOARD,
        rng=rng or SeededRandom(),
        rules=rules or RuleSet(),
    )
    logger.debug("New session: %s", ", ".join(p.name for p in session.players))
    return session


def snapshot(session: Session) -> SessionSnapshot:
    return SessionSnapshot(
        players=tuple(PlayerSnapshot.of(p) for p in session.players),
        active_index=session.active_index,
        finished=session.finished,
        turn_number=session.turn_number,
    )


# ── Decision validation ──────────────────────────────────────────────

@dataclass
class _SkillPlan:
    index: int
    skill: Skill
    target: int | None = None
    dice_value: int | None = None


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _next_live_index(session: Session) -> int:
    """First player at or after the cursor who hasn't won yet."""
    count = len(session.players)
    for step in range(count):
        idx = (session.active_index + step) % count
        if not session.players[idx].has_won:
            return idx
    raise SessionFinished("Every player has already won.")


def _plan_skill_use(
    session: Session, player_idx: int, decisions: Decisions,
) -> _SkillPlan | None:
    if decisions.use_skill is None:
        return None

    player = session.players[player_idx]
    slot = decisions.use_skill
    if not _is_int(slot) or not 0 <= slot < len(player.skills):
        raise InputRejected(f"No skill in slot {slot!r}.")

    skill = player.skills[slot]
    if not skill.selectable:
        raise InputRejected(f"{skill.label} can't be used on your own turn.")

    if skill is Skill.DICE_CONTROL:
        value = decisions.dice_value
        if not _is_int(value) or not 1 <= value <= DIE_FACES:
            raise InputRejected(f"Dice value must be 1–{DIE_FACES}, got {value!r}.")
        return _SkillPlan(index=slot, skill=skill, dice_value=value)

    if decisions.skill_target is None:
        raise InputRejected(f"{skill.label} needs a target.")
    target = find_player(session.players, decisions.skill_target)
    if target is None:
        raise InputRejected(f"Unknown target {decisions.skill_target!r}.")
    if target == player_idx:
        raise InputRejected(f"{skill.label} can't target yourself.")
    if session.players[target].has_won:
        raise InputRejected(f"{session.players[target].name} has already won.")
    return _SkillPlan(index=slot, skill=skill, target=target)


def validate_decisions(session: Session, decisions: Decisions) -> None:
    """Check *decisions* for the player about to act. Never mutates.

    Raises ``InputRejected`` with a human-readable reason.
    """
    if session.finished:
        raise SessionFinished("The session is over.")
    _plan_skill_use(session, _next_live_index(session), decisions)


# ── Turn resolution ──────────────────────────────────────────────────

def resolve_turn(
    session: Session,
    decisions: Decisions | None = None,
    strict: bool = False,
) -> TurnOutcome:
    """Play one turn for the next player who hasn't won.

    With ``strict=True`` an invalid decision raises ``InputRejected``
    before any state changes, so the caller can ask again. Otherwise it
    is treated as declining and the reason lands in
    ``outcome.skill_use.rejected``.
    """
    if session.finished:
        raise SessionFinished("The session is over.")
    decisions = decisions or Decisions()

    idx = _next_live_index(session)
    player = session.players[idx]

    plan = None
    rejected = None
    if not player.stunned:
        try:
            plan = _plan_skill_use(session, idx, decisions)
        except InputRejected as exc:
            if strict:
                raise
            rejected = str(exc)
            logger.info("Skill use by %s declined: %s", player.name, rejected)

    # Nothing below may raise InputRejected.
    session.active_index = idx
    session.turn_number += 1
    outcome = TurnOutcome(
        player=idx, player_name=player.name, turn_number=session.turn_number,
    )

    if player.stunned:
        player.stunned = False
        outcome.skipped = True
        logger.debug("Turn %d: %s is stunned, skipping", outcome.turn_number, player.name)
        _end_turn(session)
        return outcome

    roll = None
    if plan is not None:
        outcome.skill_use = _use_skill(session, player, plan)
        if plan.skill is Skill.DICE_CONTROL:
            roll = plan.dice_value
            outcome.dice_controlled = True
    elif rejected is not None:
        outcome.skill_use = SkillUseTrace(rejected=rejected)

    if roll is None:
        roll = session.rng.roll_die()
    outcome.roll = roll

    outcome.movement = _move(session, player, roll, decisions.use_anchor)

    if not outcome.movement.overshoot and session.board.is_skill_tile(player.position):
        outcome.acquisition = _acquire(session, player, decisions.replace_skill_on_tile)

    if player.position == WIN_CELL:
        player.mark_won()
        outcome.won = True
        if session.rules.stop_at_first_win or all(p.has_won for p in session.players):
            session.finished = True
        logger.debug("Turn %d: %s reached %d", outcome.turn_number, player.name, WIN_CELL)
    outcome.finished = session.finished

    logger.debug(
        "Turn %d: %s rolled %d, %d → %d",
        outcome.turn_number, player.name, roll,
        outcome.movement.start, outcome.movement.after_teleport,
    )
    _end_turn(session)
    return outcome


def _use_skill(session: Session, player: PlayerState, plan: _SkillPlan) -> SkillUseTrace:
    skill = take_skill(player, plan.index)
    trace = SkillUseTrace(skill=skill, target=plan.target)
    if skill.needs_target:
        target = session.players[plan.target]
        effect = apply_targeted(skill, player, target, session.rng)
        trace.blocked_by_shield = effect.blocked_by_shield
        trace.effect_value = effect.value
        logger.debug(
            "%s used %s on %s%s", player.name, skill.label, target.name,
            " (blocked)" if effect.blocked_by_shield else "",
        )
    else:
        logger.debug("%s used %s", player.name, skill.label)
    return trace


def _move(
    session: Session, player: PlayerState, roll: int, use_anchor: bool,
) -> MovementTrace:
    board = session.board
    start = player.position
    landing = start + roll

    # Overshoot → stay put
    if landing > WIN_CELL:
        return MovementTrace(start=start, after_roll=start, after_teleport=start, overshoot=True)

    player.position = landing
    trace = MovementTrace(start=start, after_roll=landing, after_teleport=landing)

    if board.is_ladder(landing):
        trace.teleport_kind = "ladder"
    elif board.is_snake(landing):
        trace.teleport_kind = "snake"
        if use_anchor and consume(player, Skill.ANCHOR):
            trace.teleport_blocked_by = Skill.ANCHOR
        elif shield_blocks(player):
            trace.teleport_blocked_by = Skill.SHIELD

    # One hop at most: the destination is never checked again.
    if trace.teleport_kind is not None and trace.teleport_blocked_by is None:
        player.position = board.teleport(landing)
    trace.after_teleport = player.position
    return trace


def _acquire(
    session: Session, player: PlayerState, replace_index: int | None,
) -> AcquisitionTrace:
    if replace_index is not None and not _is_int(replace_index):
        replace_index = None
    got = acquire_skill(
        player, session.rng,
        max_skills=session.rules.max_skills,
        replace_index=replace_index,
    )
    return AcquisitionTrace(
        cell=player.position, skill=got.skill, replaced=got.replaced, full=got.full,
    )


def _end_turn(session: Session) -> None:
    session.active_index = (session.active_index + 1) % len(session.players)
