"""Save import -- turn an exported game save into simulator inputs.

The game exports its save as a JSON document.  Only three parts of it
matter to the simulator: the owned cards (overlaid on the catalog), the
purchased skill ids (compiled into a :class:`BattleConfig`) and the global
attack/HP multipliers.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from cosmic_battle.sim.core.config import BattleConfig
from cosmic_battle.sim.skills import compile_battle_config

if TYPE_CHECKING:
    from cosmic_battle.catalog.cards import RosterCard
    from cosmic_battle.catalog.registry import CardCatalog

logger = logging.getLogger(__name__)


class SaveParseError(ValueError):
    """Raised when a save string is not a JSON object."""


@dataclass
class SaveImport:
    """Everything the simulator takes from one save file."""

    roster: list[RosterCard] = field(default_factory=list)
    purchased_skills: frozenset[int] = frozenset()
    config: BattleConfig = field(default_factory=BattleConfig)


def parse_save_string(raw: str) -> dict[str, Any]:
    """Parse an exported save string into a dict."""
    try:
        save = json.loads(raw.strip())
    except json.JSONDecodeError as exc:
        raise SaveParseError(f"Invalid JSON format: {exc}") from exc
    if not isinstance(save, dict):
        raise SaveParseError("Invalid save format: expected a JSON object")
    return save


def extract_global_upgrades(save: dict[str, Any]) -> tuple[float, float]:
    """Return ``(global_attack_mult, global_hp_mult)``, defaulting to 1.0."""
    battle = save.get("battle") or {}
    upgrades = save.get("upgrades") or {}
    attack_mult = battle.get("globalAttackMult") or upgrades.get("globalAttackMult") or 1.0
    hp_mult = battle.get("globalHPMult") or upgrades.get("globalHPMult") or 1.0
    return float(attack_mult), float(hp_mult)


def extract_purchased_skills(save: dict[str, Any]) -> frozenset[int]:
    """Return the purchased skill ids listed in *save*."""
    skills: set[int] = set()
    for entry in save.get("purchasedSkills") or []:
        try:
            skills.add(int(entry))
        except (TypeError, ValueError):
            logger.warning("Skipping non-numeric skill id %r", entry)
    return frozenset(skills)


def map_owned_cards(owned: Any, catalog: CardCatalog) -> list[RosterCard]:
    """Overlay the save's owned-card entries on their catalog cards.

    *owned* is either a list of ``{"id": ..., ...}`` entries or a mapping
    of card id to entry.  Entries whose id the catalog does not know are
    dropped.
    """
    if not owned:
        return []
    if isinstance(owned, dict):
        entries = [{"id": card_id, **(data or {})} for card_id, data in owned.items()]
    elif isinstance(owned, list):
        entries = owned
    else:
        logger.warning("Unrecognised owned-cards section of type %s", type(owned).__name__)
        return []

    roster: list[RosterCard] = []
    for entry in entries:
        if not isinstance(entry, dict):
            logger.warning("Skipping malformed owned-card entry %r", entry)
            continue
        card = catalog.get_card(entry.get("id"))
        if card is None:
            logger.debug("Dropping owned card %r not in catalog", entry.get("id"))
            continue
        roster.append(card.with_save_overlay(entry))
    return roster


def import_save(raw: str, catalog: CardCatalog) -> SaveImport:
    """Parse *raw* and build the roster, skills and compiled config."""
    save = parse_save_string(raw)
    purchased = extract_purchased_skills(save)
    attack_mult, hp_mult = extract_global_upgrades(save)
    config = compile_battle_config(purchased).with_upgrades(attack_mult, hp_mult)

    roster = map_owned_cards(save.get("cards"), catalog)
    logger.debug(
        "Imported save: %d cards, %d skills", len(roster), len(purchased),
    )
    return SaveImport(roster=roster, purchased_skills=purchased, config=config)
