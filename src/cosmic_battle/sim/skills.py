"""Skill aggregation -- purchased skill ids to a compiled BattleConfig.

Every purchasable skill id has one fixed effect:

- most ids belong to a *family* and add a small increment to one scalar
  field of :class:`BattleConfig`; each family may have a single capstone id
  that contributes a larger jump instead,
- five *fusion* ids add two realms to two different activation sets,
  granting a mechanic to a realm that does not natively have it,
- a handful of ids drive unrelated game systems and are no-ops here.

Unknown ids are ignored.  Compilation walks the ids in sorted order, so the
same set always yields a bit-identical config whatever order the save file
listed it in.
"""

from __future__ import annotations

import logging
from typing import Iterable

from cosmic_battle.catalog.cards import Realm
from cosmic_battle.sim.core.config import REALM_SET_FIELDS, BattleConfig, Mechanic

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Skill tables
# ---------------------------------------------------------------------------

# (field, first id, last id, increment per id, capstone id, capstone increment)
_FAMILIES: list[tuple[str, int, int, float, int | None, float]] = [
    ("crit_chance", 26002, 26006, 0.02, 26001, 0.05),
    ("crit_damage", 26101, 26115, 0.1, None, 0.0),
    ("slot_limit", 26201, 26203, 1, None, 0.0),
    ("dodge_chance", 26301, 26310, 0.025, 26311, 0.08),
    ("stun_chance", 26401, 26410, 0.01, 26411, 0.025),
    ("damage_absorption", 26501, 26505, 0.1, 26506, 0.16),
    ("protection_chance", 26601, 26610, 0.05, 26611, 0.16),
    ("evolution_chance", 27701, 27710, 0.01, 27711, 0.05),
    ("extra_attack_chance", 27801, 27810, 0.04, 27811, 0.1),
    ("resourceful_attack", 27901, 27910, 0.5, None, 0.0),
    ("empowerment", 28001, 28010, 0.025, 28011, 0.08),
    ("weak_point_chance", 28101, 28110, 0.01, 28111, 0.025),
    ("dismember_chance", 28201, 28210, 0.01, 28211, 0.025),
]

# fusion id -> ((mechanic, realm), (mechanic, realm))
FUSION_SKILLS: dict[int, tuple[tuple[Mechanic, int], tuple[Mechanic, int]]] = {
    29001: ((Mechanic.RESOURCEFUL_ATTACK, 4), (Mechanic.EXTRA_ATTACK, 8)),
    29002: ((Mechanic.EMPOWERMENT, 2), (Mechanic.PROTECTION, 5)),
    29003: ((Mechanic.DODGE, 1), (Mechanic.DAMAGE_ABSORPTION, 9)),
    29004: ((Mechanic.DISMEMBER, 6), (Mechanic.STUN, 10)),
    29005: ((Mechanic.WEAK_POINT, 3), (Mechanic.EVOLUTION, 7)),
}

# Reserved for boss-mechanic reveals and realm cooldowns; no combat effect.
NOOP_SKILLS: frozenset[int] = frozenset({29101, 29102, 29103, 29104, 30001, 30002, 30003})


def _build_scalar_effects() -> dict[int, tuple[str, float]]:
    effects: dict[int, tuple[str, float]] = {}
    for field, first, last, increment, capstone, capstone_increment in _FAMILIES:
        for skill_id in range(first, last + 1):
            effects[skill_id] = (field, increment)
        if capstone is not None:
            effects[capstone] = (field, capstone_increment)
    return effects


SCALAR_SKILLS: dict[int, tuple[str, float]] = _build_scalar_effects()


# ---------------------------------------------------------------------------
# Realm mechanics
# ---------------------------------------------------------------------------

NATIVE_MECHANICS: dict[int, Mechanic] = {
    Realm.ROCKS: Mechanic.DAMAGE_ABSORPTION,
    Realm.SEA_WORLD: Mechanic.PROTECTION,
    Realm.BUGDOM: Mechanic.EVOLUTION,
    Realm.AVIARY: Mechanic.EXTRA_ATTACK,
    Realm.ANCIENT_RELICS: Mechanic.EMPOWERMENT,
    Realm.CELESTIAL_BODIES: Mechanic.STUN,
    Realm.MYTHICAL_BEASTS: Mechanic.WEAK_POINT,
    Realm.INCREMENTAL_GAMES: Mechanic.RESOURCEFUL_ATTACK,
    Realm.SPIRIT_FAMILIARS: Mechanic.DODGE,
    Realm.WEAPONS: Mechanic.DISMEMBER,
}

# Value a fused mechanic falls back to while its compiled value is still 0.
FUSION_DEFAULTS: dict[Mechanic, float] = {
    Mechanic.RESOURCEFUL_ATTACK: 0.5,
    Mechanic.EXTRA_ATTACK: 0.04,
    Mechanic.EMPOWERMENT: 0.025,
    Mechanic.PROTECTION: 0.05,
    Mechanic.DODGE: 0.025,
    Mechanic.DAMAGE_ABSORPTION: 0.1,
    Mechanic.STUN: 0.01,
    Mechanic.EVOLUTION: 0.01,
    Mechanic.WEAK_POINT: 0.01,
    Mechanic.DISMEMBER: 0.01,
}

# Fused values replace these mechanics instead of stacking on the native one.
_NON_ADDITIVE = frozenset({Mechanic.RESOURCEFUL_ATTACK, Mechanic.EMPOWERMENT})


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def compile_battle_config(purchased_skills: Iterable[int]) -> BattleConfig:
    """Fold a set of purchased skill ids into a :class:`BattleConfig`.

    Scalar fields only ever grow and activation sets only ever gain realms,
    so compiling a superset never yields a weaker config.
    """
    defaults = BattleConfig()
    update: dict[str, object] = {}
    realm_sets: dict[str, set[int]] = {}

    for skill_id in sorted(set(purchased_skills)):
        if skill_id in SCALAR_SKILLS:
            field, increment = SCALAR_SKILLS[skill_id]
            update[field] = update.get(field, getattr(defaults, field)) + increment
        elif skill_id in FUSION_SKILLS:
            for mechanic, realm in FUSION_SKILLS[skill_id]:
                realm_sets.setdefault(REALM_SET_FIELDS[mechanic], set()).add(realm)
        elif skill_id not in NOOP_SKILLS:
            logger.debug("Ignoring unknown skill id %d", skill_id)

    for field, realms in realm_sets.items():
        update[field] = frozenset(realms)
    return BattleConfig(**update)


def project_card_skills(realm: int, config: BattleConfig) -> dict[Mechanic, float]:
    """Return the mechanic values a card of *realm* carries into battle.

    The realm's native mechanic is always present at the compiled value
    (possibly 0).  Every mechanic fused onto the realm is then added on top
    of it, or set outright for empowerment and resourceful attack, falling
    back to :data:`FUSION_DEFAULTS` while the compiled value is still 0.
    """
    skills: dict[Mechanic, float] = {}

    native = NATIVE_MECHANICS.get(realm)
    if native is not None:
        skills[native] = config.chance(native)

    for mechanic in Mechanic:
        if realm not in config.activation_set(mechanic):
            continue
        value = config.chance(mechanic) or FUSION_DEFAULTS[mechanic]
        if mechanic in _NON_ADDITIVE:
            skills[mechanic] = value
        else:
            skills[mechanic] = skills.get(mechanic, 0.0) + value

    return skills
