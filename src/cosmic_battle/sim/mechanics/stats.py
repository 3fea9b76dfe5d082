"""Attack and HP formulas for roster cards and bosses.

Every formula truncates to an integer (floor), matching the game's own
display values:

    card attack = power * tier * sqrt(level) * global_attack_mult
    card hp     = defense * sqrt(quantity) * global_hp_mult
    boss attack = power * 10 (* 100 for the ego boss)
    boss hp     = defense * 400k (100k for ego-realm bosses)
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from cosmic_battle.catalog.cards import EGO_REALM

if TYPE_CHECKING:
    from cosmic_battle.catalog.cards import BossDefinition, RosterCard
    from cosmic_battle.sim.core.config import BattleConfig

EGO_BOSS_NAME = "Your Ego"
_EGO_ATTACK_MULT = 100
_EGO_REALM_HP_SCALE = 100_000
_BOSS_HP_SCALE = 400_000


def calculate_attack(card: RosterCard, config: BattleConfig) -> int:
    """Attack power of *card* with the config's global multiplier."""
    level = card.level or 1
    return math.floor(card.power * card.tier * math.sqrt(level) * config.global_attack_mult)


def calculate_hp(card: RosterCard, config: BattleConfig) -> int:
    """Hit points of *card* with the config's global multiplier."""
    quantity = card.quantity or 1
    return math.floor(card.defense * math.sqrt(quantity) * config.global_hp_mult)


def calculate_boss_attack(boss: BossDefinition) -> int:
    attack = boss.power * 10
    if boss.name == EGO_BOSS_NAME:
        attack *= _EGO_ATTACK_MULT
    return math.floor(attack)


def calculate_boss_hp(boss: BossDefinition) -> int:
    scale = _EGO_REALM_HP_SCALE if boss.realm == EGO_REALM else _BOSS_HP_SCALE
    return math.floor(boss.defense * scale)
