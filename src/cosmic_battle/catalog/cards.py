"""Catalog definitions -- roster cards and the bosses they fight."""

from __future__ import annotations

from enum import IntEnum
from typing import Any

from pydantic import BaseModel, Field


class Realm(IntEnum):
    """The ten thematic card realms.  Each carries one native mechanic."""

    ROCKS = 1
    SEA_WORLD = 2
    BUGDOM = 3
    AVIARY = 4
    ANCIENT_RELICS = 5
    CELESTIAL_BODIES = 6
    MYTHICAL_BEASTS = 7
    INCREMENTAL_GAMES = 8
    SPIRIT_FAMILIARS = 9
    WEAPONS = 10


EGO_REALM = 11
"""Bosses from this realm scale their HP by 100k instead of 400k."""


class RosterCard(BaseModel):
    """A catalog card, optionally overlaid with the player's save data."""

    id: str
    """Catalog identifier, also the key used by save files."""

    name: str
    """Display name used in battle log lines."""

    realm: int = Field(ge=1, le=10)
    power: float = 0
    defense: float = 0
    tier: int = 1
    level: int = 1
    quantity: int = 1
    locked: bool = False
    rarity: str = "unknown"

    def with_save_overlay(self, owned: dict[str, Any] | None) -> RosterCard:
        """Return a copy carrying the level/tier/quantity/locked of *owned*.

        Missing or zero save values keep the catalog's value; ``locked``
        falls back to False.
        """
        if not owned:
            return self
        return self.model_copy(
            update={
                "level": owned.get("level") or owned.get("lvl") or self.level,
                "tier": owned.get("tier") or self.tier,
                "quantity": owned.get("quantity") or owned.get("qty") or self.quantity,
                "locked": bool(owned.get("locked", False)),
            }
        )


class BossDefinition(BaseModel):
    """A boss the roster can be sent against."""

    name: str
    """Display name; also the key into the boss behavior table."""

    realm: int
    power: float = 0
    defense: float = 0
