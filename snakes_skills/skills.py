"""Skill catalog and the per-skill resolution rules.

Skills are a closed enum; dispatch happens on the member, never on its
label. The helpers here mutate ``PlayerState`` objects directly and are
only called by the turn engine.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from snakes_skills.dice import RandomSource
    from snakes_skills.players import PlayerState

logger = logging.getLogger(__name__)

MAX_SKILLS = 2


class Skill(Enum):
    SHIELD = "shield"
    STUN = "stun"
    SWAP = "swap"
    DICE_CONTROL = "dice_control"
    ANCHOR = "anchor"
    SABOTAGE = "sabotage"

    @property
    def label(self) -> str:
        return _LABELS[self]

    @property
    def needs_target(self) -> bool:
        return self in TARGETED

    @property
    def selectable(self) -> bool:
        """Whether the holder may pick this skill on their own turn."""
        return self not in REACTIVE


_LABELS = {
    Skill.SHIELD: "Shield",
    Skill.STUN: "Stun",
    Skill.SWAP: "Swap",
    Skill.DICE_CONTROL: "Dice Control",
    Skill.ANCHOR: "Anchor",
    Skill.SABOTAGE: "Sabotage",
}

# Acquisition pool, in catalog order.
CATALOG: tuple[Skill, ...] = tuple(Skill)

TARGETED = frozenset({Skill.STUN, Skill.SWAP, Skill.SABOTAGE})

# Only react to incoming effects; never picked on the holder's turn.
REACTIVE = frozenset({Skill.SHIELD, Skill.ANCHOR})


# ── Consumption helpers ──────────────────────────────────────────────

def take_skill(player: PlayerState, index: int) -> Skill:
    """Remove and return the skill at *index* of *player*'s list."""
    return player.skills.pop(index)


def consume(player: PlayerState, skill: Skill) -> bool:
    """Drop one copy of *skill* from *player*. False if they hold none."""
    try:
        player.skills.remove(skill)
    except ValueError:
        return False
    return True


def shield_blocks(target: PlayerState) -> bool:
    """Spend *target*'s Shield if they hold one. True when it fired."""
    if consume(target, Skill.SHIELD):
        logger.debug("%s's Shield absorbed an effect", target.name)
        return True
    return False


# ── Targeted effects ─────────────────────────────────────────────────

@dataclass
class EffectResult:
    blocked_by_shield: bool = False
    value: int | None = None  # sabotage distance, when one was rolled


def apply_stun(target: PlayerState) -> EffectResult:
    if shield_blocks(target):
        return EffectResult(blocked_by_shield=True)
    target.stunned = True
    return EffectResult()


def apply_swap(user: PlayerState, target: PlayerState) -> EffectResult:
    user.position, target.position = target.position, user.position
    return EffectResult()


def apply_sabotage(target: PlayerState, rng: RandomSource) -> EffectResult:
    if shield_blocks(target):
        return EffectResult(blocked_by_shield=True)
    distance = rng.roll_die()
    target.position = max(0, target.position - distance)
    return EffectResult(value=distance)


def apply_targeted(
    skill: Skill,
    user: PlayerState,
    target: PlayerState,
    rng: RandomSource,
) -> EffectResult:
    if skill is Skill.STUN:
        return apply_stun(target)
    if skill is Skill.SWAP:
        return apply_swap(user, target)
    if skill is Skill.SABOTAGE:
        return apply_sabotage(target, rng)
    raise ValueError(f"{skill.label} does not take a target")


# ── Acquisition ──────────────────────────────────────────────────────

@dataclass
class Acquisition:
    skill: Skill | None = None
    replaced: Skill | None = None
    full: bool = False  # already at capacity and no replacement requested


def acquire_skill(
    player: PlayerState,
    rng: RandomSource,
    max_skills: int = MAX_SKILLS,
    replace_index: int | None = None,
) -> Acquisition:
    """Draw a skill the player doesn't hold yet and give it to them.

    At capacity nothing happens unless *replace_index* names a slot in
    the player's current list; that slot is then overwritten.
    """
    at_capacity = len(player.skills) >= max_skills
    if at_capacity:
        if replace_index is None or not 0 <= replace_index < len(player.skills):
            return Acquisition(full=True)

    drawn = rng.pick_skill(CATALOG, exclude=frozenset(player.skills))

    if at_capacity:
        old = player.skills[replace_index]
        player.skills[replace_index] = drawn
        return Acquisition(skill=drawn, replaced=old)

    player.skills.append(drawn)
    return Acquisition(skill=drawn)
