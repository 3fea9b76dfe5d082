"""Combat mechanics and the compiled battle configuration.

A :class:`BattleConfig` is produced once per save import by the skill
compiler (:mod:`cosmic_battle.sim.skills`) and is read-only for the
duration of every battle that uses it.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class Mechanic(str, Enum):
    """The ten realm mechanics a card can carry into battle."""

    DAMAGE_ABSORPTION = "damage_absorption"
    """Multiplicative reduction of incoming boss damage."""

    PROTECTION = "protection_chance"
    """Chance to take a hit at half strength on behalf of the unit in front."""

    EVOLUTION = "evolution_chance"
    """Chance per turn to permanently grow attack by the chance itself."""

    EXTRA_ATTACK = "extra_attack_chance"
    """Chance to chain additional plain attacks after the main hit."""

    EMPOWERMENT = "empowerment"
    """Damage bonus granted to the unit directly behind this one."""

    DODGE = "dodge_chance"
    """Chance to wholly avoid a boss attack."""

    STUN = "stun_chance"
    """Chance that being attacked stuns the boss."""

    WEAK_POINT = "weak_point_chance"
    """On critical hits, bonus damage as a fraction of the boss's current HP."""

    DISMEMBER = "dismember_chance"
    """On critical hits, permanently shrinks the boss's attack."""

    RESOURCEFUL_ATTACK = "resourceful_attack"
    """Carried for display; has no effect inside the battle loop."""


class BattleConfig(BaseModel):
    """Global combat modifiers compiled from a player's purchased skills.

    Scalar mechanic fields are base chances/magnitudes shared by every card
    whose realm carries that mechanic.  The ``*_realms`` sets record realms
    that received a mechanic through a fusion skill.
    """

    model_config = {"frozen": True}

    global_attack_mult: float = 1.0
    global_hp_mult: float = 1.0
    crit_chance: float = 0.0
    crit_damage: float = 0.0
    slot_limit: int = 3
    """Team size before additional cards overflow into the reserve."""

    damage_absorption: float = 0.0
    protection_chance: float = 0.0
    evolution_chance: float = 0.0
    extra_attack_chance: float = 0.0
    empowerment: float = 0.0
    dodge_chance: float = 0.0
    stun_chance: float = 0.0
    weak_point_chance: float = 0.0
    dismember_chance: float = 0.0
    resourceful_attack: float = 0.0

    damage_absorption_realms: frozenset[int] = Field(default_factory=frozenset)
    protection_realms: frozenset[int] = Field(default_factory=frozenset)
    evolution_realms: frozenset[int] = Field(default_factory=frozenset)
    extra_attack_realms: frozenset[int] = Field(default_factory=frozenset)
    empowerment_realms: frozenset[int] = Field(default_factory=frozenset)
    dodge_realms: frozenset[int] = Field(default_factory=frozenset)
    stun_realms: frozenset[int] = Field(default_factory=frozenset)
    weak_point_realms: frozenset[int] = Field(default_factory=frozenset)
    dismember_realms: frozenset[int] = Field(default_factory=frozenset)
    resourceful_attack_realms: frozenset[int] = Field(default_factory=frozenset)

    # -- per-mechanic accessors ----------------------------------------------

    def chance(self, mechanic: Mechanic) -> float:
        """Return the compiled base value for *mechanic*."""
        return getattr(self, mechanic.value)

    def activation_set(self, mechanic: Mechanic) -> frozenset[int]:
        """Return the realms that gained *mechanic* through fusion."""
        return getattr(self, REALM_SET_FIELDS[mechanic])

    # -- derived copies ------------------------------------------------------

    def with_upgrades(self, attack_mult: float, hp_mult: float) -> BattleConfig:
        """Return a copy with the save file's global multipliers applied."""
        return self.model_copy(
            update={"global_attack_mult": attack_mult, "global_hp_mult": hp_mult}
        )


REALM_SET_FIELDS: dict[Mechanic, str] = {
    Mechanic.DAMAGE_ABSORPTION: "damage_absorption_realms",
    Mechanic.PROTECTION: "protection_realms",
    Mechanic.EVOLUTION: "evolution_realms",
    Mechanic.EXTRA_ATTACK: "extra_attack_realms",
    Mechanic.EMPOWERMENT: "empowerment_realms",
    Mechanic.DODGE: "dodge_realms",
    Mechanic.STUN: "stun_realms",
    Mechanic.WEAK_POINT: "weak_point_realms",
    Mechanic.DISMEMBER: "dismember_realms",
    Mechanic.RESOURCEFUL_ATTACK: "resourceful_attack_realms",
}
