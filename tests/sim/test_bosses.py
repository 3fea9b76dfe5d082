"""Tests for the boss behavior table and its dispatch helpers."""

from __future__ import annotations

from cosmic_battle.catalog.cards import BossDefinition
from cosmic_battle.sim.bosses import (
    BOSS_BEHAVIORS,
    DEFAULT_BEHAVIOR,
    AttackCount,
    DamageMultiplier,
    Interception,
    Targeting,
    get_behavior,
    get_special_rules,
    reflected_damage,
    roll_attack_count,
    roll_damage_multiplier,
    roll_interception,
)
from cosmic_battle.sim.core.entities import CombatUnit


def _make_unit(**kwargs) -> CombatUnit:
    defaults = dict(
        card_id="202", name="Blue Whale", realm=2, attack=10, max_hp=1000, current_hp=1000,
    )
    defaults.update(kwargs)
    return CombatUnit(**defaults)


# ---------------------------------------------------------------------------
# Table lookups
# ---------------------------------------------------------------------------

class TestLookups:
    def test_unknown_boss_gets_default(self):
        assert get_behavior("Kraken") is DEFAULT_BEHAVIOR

    def test_default_behavior_is_plain(self):
        assert DEFAULT_BEHAVIOR.interception is Interception.NONE
        assert DEFAULT_BEHAVIOR.attack_count is AttackCount.FIXED
        assert DEFAULT_BEHAVIOR.attacks == 1
        assert DEFAULT_BEHAVIOR.targeting is Targeting.FRONT
        assert DEFAULT_BEHAVIOR.reflect_fraction == 0.0
        assert DEFAULT_BEHAVIOR.death_attack_mult == 1.0

    def test_special_rules_for_boss(self):
        boss = BossDefinition(name="Darth Vader", realm=10, power=40, defense=0.5)
        assert get_special_rules(boss) == ["Mitigates 97% of incoming damage"]

    def test_no_special_rules(self):
        boss = BossDefinition(name="Kraken", realm=2)
        assert get_special_rules(boss) == []

    def test_every_special_boss_describes_its_rules(self):
        for name, behavior in BOSS_BEHAVIORS.items():
            assert behavior.rules, name

    def test_kaguya_row(self):
        kaguya = get_behavior("Kaguya")

        assert kaguya.interception is Interception.FIRST_ATTACKER_ONLY
        assert kaguya.attacks == 2
        assert kaguya.targeting is Targeting.LAST_FOLLOW_UP


# ---------------------------------------------------------------------------
# roll_interception
# ---------------------------------------------------------------------------

class TestRollInterception:
    def test_no_rule_consumes_no_draw(self, always_rng):
        assert roll_interception(DEFAULT_BEHAVIOR, 0, always_rng) is Interception.NONE
        assert always_rng.float_draws == 0

    def test_dodge_fires(self, always_rng):
        assert roll_interception(get_behavior("Agent Smith"), 0, always_rng) is Interception.DODGE

    def test_dodge_misses(self, never_rng):
        assert roll_interception(get_behavior("Dr Wily"), 0, never_rng) is Interception.NONE

    def test_mitigate_heal_redirect(self, always_rng):
        assert roll_interception(get_behavior("Darth Vader"), 1, always_rng) is Interception.MITIGATE
        assert roll_interception(get_behavior("Typhon"), 1, always_rng) is Interception.HEAL
        assert roll_interception(get_behavior("Arceus"), 1, always_rng) is Interception.REDIRECT

    def test_first_attacker_only_is_deterministic(self, always_rng):
        kaguya = get_behavior("Kaguya")

        assert roll_interception(kaguya, 0, always_rng) is Interception.NONE
        assert roll_interception(kaguya, 1, always_rng) is Interception.FIRST_ATTACKER_ONLY
        assert roll_interception(kaguya, 2, always_rng) is Interception.FIRST_ATTACKER_ONLY
        assert always_rng.float_draws == 0


# ---------------------------------------------------------------------------
# roll_attack_count
# ---------------------------------------------------------------------------

class TestRollAttackCount:
    def test_fixed(self, always_rng):
        assert roll_attack_count(get_behavior("Zeus"), always_rng) == 3
        assert roll_attack_count(get_behavior("Chaos"), always_rng) == 2
        assert roll_attack_count(DEFAULT_BEHAVIOR, always_rng) == 1

    def test_coin_flip(self, always_rng, never_rng):
        cronus = get_behavior("Cronus")

        assert roll_attack_count(cronus, always_rng) == 2
        assert roll_attack_count(cronus, never_rng) == 1

    def test_chain_is_capped(self, always_rng):
        aizen = get_behavior("Aizen")
        assert roll_attack_count(aizen, always_rng) == aizen.max_attacks == 10

    def test_chain_stops_on_first_failure(self, never_rng):
        assert roll_attack_count(get_behavior("Aizen"), never_rng) == 1
        assert never_rng.float_draws == 1


# ---------------------------------------------------------------------------
# Damage multipliers and reflection
# ---------------------------------------------------------------------------

class TestDamageMultiplier:
    def test_multiply_fires(self, always_rng):
        damage, empowered = roll_damage_multiplier(
            get_behavior("Genghis Khan"), 100, _make_unit(), always_rng,
        )
        assert (damage, empowered) == (300, True)

    def test_multiply_misses(self, never_rng):
        damage, empowered = roll_damage_multiplier(
            get_behavior("Your Ego"), 100, _make_unit(), never_rng,
        )
        assert (damage, empowered) == (100, False)

    def test_percent_of_max_hp(self, always_rng):
        sauron = get_behavior("Sauron")
        assert sauron.damage_multiplier is DamageMultiplier.PERCENT_MAX_HP

        damage, empowered = roll_damage_multiplier(sauron, 5, _make_unit(max_hp=1000), always_rng)
        assert (damage, empowered) == (1010, True)

    def test_no_multiplier_consumes_no_draw(self, always_rng):
        damage, empowered = roll_damage_multiplier(DEFAULT_BEHAVIOR, 50, _make_unit(), always_rng)

        assert (damage, empowered) == (50, False)
        assert always_rng.float_draws == 0


class TestReflection:
    def test_reflect_fraction(self):
        assert reflected_damage(get_behavior("Bowser"), 100) == 10
        assert reflected_damage(get_behavior("Godzilla"), 100) == 20

    def test_reflect_floors(self):
        assert reflected_damage(get_behavior("Bowser"), 9) == 0
