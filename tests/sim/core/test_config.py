"""Tests for BattleConfig and the mechanic accessors."""

import pytest
from pydantic import ValidationError

from cosmic_battle.sim.core.config import REALM_SET_FIELDS, BattleConfig, Mechanic


class TestDefaults:
    def test_neutral_defaults(self):
        config = BattleConfig()

        assert config.global_attack_mult == 1.0
        assert config.global_hp_mult == 1.0
        assert config.slot_limit == 3
        for mechanic in Mechanic:
            assert config.chance(mechanic) == 0.0
            assert config.activation_set(mechanic) == frozenset()

    def test_every_mechanic_has_a_realm_set(self):
        assert set(REALM_SET_FIELDS) == set(Mechanic)


class TestAccessors:
    def test_chance_reads_scalar_field(self):
        config = BattleConfig(stun_chance=0.03, protection_chance=0.1)

        assert config.chance(Mechanic.STUN) == 0.03
        assert config.chance(Mechanic.PROTECTION) == 0.1

    def test_activation_set_reads_realm_field(self):
        config = BattleConfig(dodge_realms=frozenset({1}))
        assert config.activation_set(Mechanic.DODGE) == frozenset({1})


class TestImmutability:
    def test_frozen(self):
        config = BattleConfig()
        with pytest.raises(ValidationError):
            config.crit_chance = 0.5

    def test_with_upgrades_returns_copy(self):
        config = BattleConfig(crit_chance=0.05)
        upgraded = config.with_upgrades(1.5, 2.0)

        assert upgraded.global_attack_mult == 1.5
        assert upgraded.global_hp_mult == 2.0
        assert upgraded.crit_chance == 0.05
        assert config.global_attack_mult == 1.0
