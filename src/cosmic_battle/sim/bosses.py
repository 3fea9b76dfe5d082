"""Boss behavior table -- per-boss special rules layered on the battle loop.

Each boss name maps to one :class:`BossBehavior` row built from a closed
set of tagged variants (interception, attack count, targeting, damage
multiplier, reflection, death trigger).  The battle loop only ever asks
this module *what* happens; adding a boss means adding a row to
:data:`BOSS_BEHAVIORS`, never a branch in the loop.
"""

from __future__ import annotations

import math
from enum import Enum
from typing import TYPE_CHECKING

from pydantic import BaseModel

if TYPE_CHECKING:
    from cosmic_battle.catalog.cards import BossDefinition
    from cosmic_battle.sim.core.entities import BossUnit, CombatUnit
    from cosmic_battle.sim.core.rng import BattleRNG


class Interception(str, Enum):
    """What the boss does to a team attack before it lands."""

    NONE = "NONE"
    MITIGATE = "MITIGATE"
    """Damage is scaled down by ``interception_factor``."""

    HEAL = "HEAL"
    """The boss heals by the attempted damage before taking it."""

    DODGE = "DODGE"
    """The attacker misses; the rest of its turn is forfeited."""

    REDIRECT = "REDIRECT"
    """The attack hits a random living teammate instead."""

    FIRST_ATTACKER_ONLY = "FIRST_ATTACKER_ONLY"
    """Only the card in the first team slot can damage the boss."""


class AttackCount(str, Enum):
    """How many attacks the boss makes in its phase."""

    FIXED = "FIXED"
    COIN_FLIP = "COIN_FLIP"
    """``attacks`` attacks with probability ``attack_chance``, else one."""

    CHAIN = "CHAIN"
    """Each extra attack continues with probability ``attack_chance``."""


class Targeting(str, Enum):
    """Which living unit the boss's follow-up attacks land on."""

    FRONT = "FRONT"
    RANDOM_FOLLOW_UPS = "RANDOM_FOLLOW_UPS"
    LAST_FOLLOW_UP = "LAST_FOLLOW_UP"


class DamageMultiplier(str, Enum):
    NONE = "NONE"
    MULTIPLY = "MULTIPLY"
    """Damage is multiplied by ``multiplier_value``."""

    PERCENT_MAX_HP = "PERCENT_MAX_HP"
    """Damage becomes ``multiplier_value`` times the target's max HP."""


class BossBehavior(BaseModel):
    """One row of the boss behavior table."""

    model_config = {"frozen": True}

    interception: Interception = Interception.NONE
    interception_chance: float = 1.0
    interception_factor: float = 1.0

    attack_count: AttackCount = AttackCount.FIXED
    attacks: int = 1
    attack_chance: float = 0.0
    max_attacks: int = 10
    """Upper bound on a chained attack count, so a chain always ends."""

    targeting: Targeting = Targeting.FRONT

    damage_multiplier: DamageMultiplier = DamageMultiplier.NONE
    multiplier_chance: float = 0.0
    multiplier_value: float = 1.0

    reflect_fraction: float = 0.0
    """Fraction of each landed hit bounced back onto the same target."""

    death_attack_mult: float = 1.0
    """Permanent boss attack multiplier applied whenever a team unit dies."""

    rules: tuple[str, ...] = ()
    """Human-readable descriptions, for display only."""


DEFAULT_BEHAVIOR = BossBehavior()

BOSS_BEHAVIORS: dict[str, BossBehavior] = {
    "Darth Vader": BossBehavior(
        interception=Interception.MITIGATE,
        interception_chance=0.97,
        interception_factor=0.03,
        rules=("Mitigates 97% of incoming damage",),
    ),
    "Typhon": BossBehavior(
        interception=Interception.HEAL,
        interception_chance=0.025,
        rules=("2.5% chance to heal from damage",),
    ),
    "Dr Wily": BossBehavior(
        interception=Interception.DODGE,
        interception_chance=0.25,
        rules=("25% chance to dodge attacks",),
    ),
    "Agent Smith": BossBehavior(
        interception=Interception.DODGE,
        interception_chance=0.75,
        rules=("75% chance to dodge attacks",),
    ),
    "Arceus": BossBehavior(
        interception=Interception.REDIRECT,
        interception_chance=0.05,
        rules=("5% chance to redirect attacks to random team member",),
    ),
    "Kaguya": BossBehavior(
        interception=Interception.FIRST_ATTACKER_ONLY,
        attacks=2,
        targeting=Targeting.LAST_FOLLOW_UP,
        rules=(
            "Only takes damage from the first card",
            "2 attacks (first on first card, second on last)",
        ),
    ),
    "Zeus": BossBehavior(
        attacks=3,
        targeting=Targeting.RANDOM_FOLLOW_UPS,
        rules=("3 attacks on random targets",),
    ),
    "Isshin": BossBehavior(
        attacks=3,
        targeting=Targeting.RANDOM_FOLLOW_UPS,
        rules=("3 attacks on random targets",),
    ),
    "Chaos": BossBehavior(attacks=2, rules=("2 attacks",)),
    "Cronus": BossBehavior(
        attack_count=AttackCount.COIN_FLIP,
        attacks=2,
        attack_chance=0.5,
        rules=("50% chance for 2 attacks",),
    ),
    "Your Ego": BossBehavior(
        attack_count=AttackCount.COIN_FLIP,
        attacks=2,
        attack_chance=0.5,
        targeting=Targeting.RANDOM_FOLLOW_UPS,
        damage_multiplier=DamageMultiplier.MULTIPLY,
        multiplier_chance=0.05,
        multiplier_value=5,
        rules=(
            "50% chance for 2 attacks on random targets",
            "5% chance for 5x damage",
        ),
    ),
    "Aizen": BossBehavior(
        attack_count=AttackCount.CHAIN,
        attack_chance=0.5,
        rules=("Variable number of attacks (cumulative 50% chance)",),
    ),
    "Genghis Khan": BossBehavior(
        damage_multiplier=DamageMultiplier.MULTIPLY,
        multiplier_chance=0.25,
        multiplier_value=3,
        rules=("25% chance for 3x damage",),
    ),
    "Sauron": BossBehavior(
        damage_multiplier=DamageMultiplier.PERCENT_MAX_HP,
        multiplier_chance=0.08,
        multiplier_value=1.01,
        rules=("8% chance for 101% of target HP damage",),
    ),
    "Bowser": BossBehavior(
        reflect_fraction=0.1,
        rules=("Reflects 10% of damage back",),
    ),
    "Godzilla": BossBehavior(
        reflect_fraction=0.2,
        rules=("Reflects 20% of damage back",),
    ),
    "Galactus": BossBehavior(
        death_attack_mult=1.5,
        rules=("Attack +50% when a team member dies",),
    ),
}


# ---------------------------------------------------------------------------
# Lookups
# ---------------------------------------------------------------------------

def get_behavior(boss_name: str) -> BossBehavior:
    """Return the behavior row for *boss_name* (the default row if none)."""
    return BOSS_BEHAVIORS.get(boss_name, DEFAULT_BEHAVIOR)


def get_special_rules(boss: BossDefinition | BossUnit) -> list[str]:
    """Return display descriptions of *boss*'s special rules."""
    return list(get_behavior(boss.name).rules)


# ---------------------------------------------------------------------------
# Dispatch predicates used by the battle loop
# ---------------------------------------------------------------------------

def roll_interception(
    behavior: BossBehavior,
    attacker_slot: int,
    rng: BattleRNG,
) -> Interception:
    """Decide whether the boss intercepts an attack from *attacker_slot*.

    Returns :attr:`Interception.NONE` when the attack proceeds normally.
    Only bosses that have an interception rule consume a draw.
    """
    kind = behavior.interception
    if kind is Interception.NONE:
        return Interception.NONE
    if kind is Interception.FIRST_ATTACKER_ONLY:
        return kind if attacker_slot != 0 else Interception.NONE
    return kind if rng.chance(behavior.interception_chance) else Interception.NONE


def roll_attack_count(behavior: BossBehavior, rng: BattleRNG) -> int:
    """Return how many attacks the boss makes this phase."""
    if behavior.attack_count is AttackCount.COIN_FLIP:
        return behavior.attacks if rng.chance(behavior.attack_chance) else 1

    if behavior.attack_count is AttackCount.CHAIN:
        count = 1
        while count < behavior.max_attacks and rng.chance(behavior.attack_chance):
            count += 1
        return count

    return behavior.attacks


def roll_damage_multiplier(
    behavior: BossBehavior,
    damage: int,
    target: CombatUnit,
    rng: BattleRNG,
) -> tuple[int, bool]:
    """Apply the boss's damage multiplier rule.

    Returns ``(damage, empowered)`` where *empowered* is True when the
    multiplier fired.
    """
    kind = behavior.damage_multiplier
    if kind is DamageMultiplier.NONE or not rng.chance(behavior.multiplier_chance):
        return damage, False
    if kind is DamageMultiplier.PERCENT_MAX_HP:
        return math.floor(target.max_hp * behavior.multiplier_value), True
    return math.floor(damage * behavior.multiplier_value), True


def reflected_damage(behavior: BossBehavior, damage: int) -> int:
    """Return the damage bounced back onto a target that just took *damage*."""
    return math.floor(damage * behavior.reflect_fraction)
