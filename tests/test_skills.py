"""Tests for snakes_skills.skills (catalog and resolution helpers)."""

import pytest

from snakes_skills.dice import ScriptedRandom
from snakes_skills.players import PlayerState
from snakes_skills.skills import (
    CATALOG,
    MAX_SKILLS,
    Skill,
    acquire_skill,
    apply_sabotage,
    apply_stun,
    apply_swap,
    apply_targeted,
    consume,
    shield_blocks,
    take_skill,
)


# ── catalog ──────────────────────────────────────────────────────────

def test_catalog_has_six_skills():
    assert len(CATALOG) == 6
    assert len(CATALOG) > MAX_SKILLS


def test_labels_are_separate_from_identity():
    assert Skill.DICE_CONTROL.label == "Dice Control"
    assert Skill.DICE_CONTROL.value == "dice_control"


def test_targeting_and_selectability():
    assert {s for s in CATALOG if s.needs_target} == {Skill.STUN, Skill.SWAP, Skill.SABOTAGE}
    assert not Skill.SHIELD.selectable
    assert not Skill.ANCHOR.selectable
    assert Skill.DICE_CONTROL.selectable


# ── consumption ──────────────────────────────────────────────────────

def test_take_skill_removes_by_index():
    p = PlayerState(name="A", skills=[Skill.STUN, Skill.SWAP])
    assert take_skill(p, 1) is Skill.SWAP
    assert p.skills == [Skill.STUN]


def test_consume_missing_skill():
    p = PlayerState(name="A", skills=[Skill.STUN])
    assert consume(p, Skill.ANCHOR) is False
    assert p.skills == [Skill.STUN]


def test_shield_blocks_once():
    p = PlayerState(name="A", skills=[Skill.SHIELD])
    assert shield_blocks(p) is True
    assert shield_blocks(p) is False
    assert p.skills == []


def test_each_shield_blocks_once():
    p = PlayerState(name="A", skills=[Skill.SHIELD, Skill.SHIELD])
    assert shield_blocks(p)
    assert p.skills == [Skill.SHIELD]
    assert shield_blocks(p)
    assert not shield_blocks(p)


# ── effects ──────────────────────────────────────────────────────────

def test_stun_sets_flag():
    target = PlayerState(name="B")
    result = apply_stun(target)
    assert target.stunned
    assert not result.blocked_by_shield


def test_stun_blocked_by_shield():
    target = PlayerState(name="B", skills=[Skill.SHIELD, Skill.SWAP])
    result = apply_stun(target)
    assert result.blocked_by_shield
    assert not target.stunned
    assert target.skills == [Skill.SWAP]


def test_swap_ignores_shield():
    user = PlayerState(name="A", position=50)
    target = PlayerState(name="B", position=20, skills=[Skill.SHIELD])
    result = apply_swap(user, target)
    assert (user.position, target.position) == (20, 50)
    assert not result.blocked_by_shield
    assert target.skills == [Skill.SHIELD]


def test_sabotage_moves_back():
    target = PlayerState(name="B", position=30)
    result = apply_sabotage(target, ScriptedRandom(rolls=[4]))
    assert target.position == 26
    assert result.value == 4


def test_sabotage_floors_at_zero():
    target = PlayerState(name="B", position=3)
    apply_sabotage(target, ScriptedRandom(rolls=[5]))
    assert target.position == 0


def test_sabotage_blocked_by_shield_rolls_nothing():
    rng = ScriptedRandom(rolls=[6])
    target = PlayerState(name="B", position=30, skills=[Skill.SHIELD])
    result = apply_sabotage(target, rng)
    assert result.blocked_by_shield
    assert target.position == 30
    assert rng.rolls == [6]


def test_apply_targeted_rejects_untargeted_skill():
    with pytest.raises(ValueError):
        apply_targeted(Skill.DICE_CONTROL, PlayerState("A"), PlayerState("B"), ScriptedRandom())


# ── acquisition ──────────────────────────────────────────────────────

def test_acquire_appends():
    p = PlayerState(name="A")
    got = acquire_skill(p, ScriptedRandom(picks=[Skill.ANCHOR]))
    assert got.skill is Skill.ANCHOR
    assert p.skills == [Skill.ANCHOR]


def test_acquire_never_duplicates():
    p = PlayerState(name="A", skills=[Skill.ANCHOR])
    acquire_skill(p, ScriptedRandom(picks=[Skill.ANCHOR, Skill.STUN]))
    assert p.skills == [Skill.ANCHOR, Skill.STUN]


def test_acquire_at_capacity_is_noop():
    p = PlayerState(name="A", skills=[Skill.STUN, Skill.SWAP])
    rng = ScriptedRandom(picks=[Skill.SHIELD])
    got = acquire_skill(p, rng)
    assert got.full
    assert got.skill is None
    assert p.skills == [Skill.STUN, Skill.SWAP]
    assert rng.picks == [Skill.SHIELD]


def test_acquire_at_capacity_with_replacement():
    p = PlayerState(name="A", skills=[Skill.STUN, Skill.SWAP])
    got = acquire_skill(p, ScriptedRandom(picks=[Skill.SWAP, Skill.SHIELD]), replace_index=1)
    assert got.replaced is Skill.SWAP
    assert got.skill is Skill.SHIELD
    assert p.skills == [Skill.STUN, Skill.SHIELD]


def test_acquire_bad_replacement_index_is_noop():
    p = PlayerState(name="A", skills=[Skill.STUN, Skill.SWAP])
    got = acquire_skill(p, ScriptedRandom(picks=[Skill.SHIELD]), replace_index=5)
    assert got.full
    assert p.skills == [Skill.STUN, Skill.SWAP]
