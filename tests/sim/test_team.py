"""Tests for team assembly: units, boss, reserve split, and log interval."""

from __future__ import annotations

from cosmic_battle.catalog.cards import BossDefinition, RosterCard
from cosmic_battle.sim.core.config import BattleConfig, Mechanic
from cosmic_battle.sim.team import (
    build_reserve,
    prepare_boss,
    prepare_unit,
    split_team,
    suggest_log_interval,
)


def _make_card(card_id: str = "101", **kwargs) -> RosterCard:
    defaults = dict(id=card_id, name=f"Card {card_id}", realm=1, power=10, defense=100)
    defaults.update(kwargs)
    return RosterCard(**defaults)


class TestPrepareUnit:
    def test_stats_and_identity(self):
        card = _make_card("702", name="Hydra", realm=7, power=10, tier=2, level=4, defense=50, quantity=4)
        unit = prepare_unit(card, BattleConfig())

        assert unit.card_id == "702"
        assert unit.name == "Hydra"
        assert unit.realm == 7
        assert unit.attack == 40
        assert unit.max_hp == unit.current_hp == 100
        assert unit.stun_turns == 0
        assert unit.evolution_bonus == 0.0

    def test_skills_projected_from_config(self):
        config = BattleConfig(weak_point_chance=0.03)
        unit = prepare_unit(_make_card(realm=7), config)
        assert unit.skills == {Mechanic.WEAK_POINT: 0.03}


class TestPrepareBoss:
    def test_stats(self):
        boss = prepare_boss(BossDefinition(name="Kraken", realm=2, power=20, defense=0.25))

        assert boss.name == "Kraken"
        assert boss.attack == 200
        assert boss.max_hp == boss.current_hp == 100_000
        assert boss.dismember_stacks == 0


class TestSplitTeam:
    def test_overflow_goes_to_reserve_in_order(self):
        cards = [_make_card(str(i)) for i in range(5)]
        team, reserve = split_team(cards, 3)

        assert [c.id for c in team] == ["0", "1", "2"]
        assert [c.id for c in reserve] == ["3", "4"]

    def test_no_overflow(self):
        team, reserve = split_team([_make_card()], 3)

        assert len(team) == 1
        assert reserve == []

    def test_slot_limit_at_least_one(self):
        team, reserve = split_team([_make_card("a"), _make_card("b")], 0)

        assert [c.id for c in team] == ["a"]
        assert [c.id for c in reserve] == ["b"]

    def test_build_reserve(self):
        reserve = build_reserve([_make_card("a"), _make_card("b")], BattleConfig())
        assert [u.card_id for u in reserve] == ["a", "b"]


class TestSuggestLogInterval:
    def test_short_battle_logs_every_round(self):
        boss = BossDefinition(name="Kraken", realm=2, defense=0.025)  # 10k HP
        team = [_make_card(power=1000)]
        assert suggest_log_interval(team, boss, BattleConfig()) == 1

    def test_long_battle_skips_rounds(self):
        boss = BossDefinition(name="Kraken", realm=2, defense=2.5)  # 1M HP
        team = [_make_card(power=500), _make_card("b", power=500)]
        # 1M / 1000 = 1000 rounds -> floor(1000 / 100) * 5
        assert suggest_log_interval(team, boss, BattleConfig()) == 50

    def test_zero_attack_team(self):
        boss = BossDefinition(name="Kraken", realm=2, defense=1)
        assert suggest_log_interval([_make_card(power=0)], boss, BattleConfig()) == 1
