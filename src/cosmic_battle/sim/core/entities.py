"""Battle-time unit models for the boss battle simulator.

All data classes use Pydantic v2 BaseModel for validation and
serialization.  Units are created fresh at battle start and mutated only
inside the engine's round loop; callers receive clones, never the live
objects of another battle.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from cosmic_battle.sim.core.config import Mechanic


# ---------------------------------------------------------------------------
# Entity base
# ---------------------------------------------------------------------------

class Entity(BaseModel):
    """Common base for anything with attack, HP, and a stun counter."""

    name: str
    attack: int
    max_hp: int
    current_hp: int
    stun_turns: int = 0
    """Turns this entity still has to skip.  Counts down as turns are missed."""

    # -- HP queries ----------------------------------------------------------

    @property
    def is_dead(self) -> bool:
        return self.current_hp <= 0

    # -- damage --------------------------------------------------------------

    def take_damage(self, amount: int) -> int:
        """Subtract *amount* from current HP and return it.

        HP may drop below zero; dead units are filtered out of targeting by
        the engine rather than clamped here.
        """
        if amount <= 0:
            return 0
        self.current_hp -= amount
        return amount

    def clone(self) -> Entity:
        """Return a deep copy that shares no mutable state with this unit."""
        return self.model_copy(deep=True)


# ---------------------------------------------------------------------------
# CombatUnit
# ---------------------------------------------------------------------------

class CombatUnit(Entity):
    """A roster card instantiated for one battle."""

    card_id: str
    realm: int
    skills: dict[Mechanic, float] = Field(default_factory=dict)
    """Maps a mechanic to the probability or magnitude this unit carries."""

    evolution_bonus: float = 0.0
    """Cumulative attack multiplier increment gained through evolution."""

    def skill(self, mechanic: Mechanic) -> float:
        """Return this unit's value for *mechanic*, or ``0.0`` if absent."""
        return self.skills.get(mechanic, 0.0)


# ---------------------------------------------------------------------------
# BossUnit
# ---------------------------------------------------------------------------

class BossUnit(Entity):
    """The single boss opponent of a battle."""

    realm: int
    dismember_stacks: int = 0
    """Critical dismember procs so far; each shrinks boss damage by 1%."""
