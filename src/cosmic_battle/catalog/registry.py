"""Card catalog -- an immutable, explicitly constructed catalog value.

The catalog is loaded once (from a JSON export of the game's card data or
from in-memory records) and then passed to the layers that need it: save
import, team assembly, and the scripts.  Nothing in the package keeps a
process-wide copy.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Iterable, Iterator, Mapping

from pydantic import ValidationError

from cosmic_battle.catalog.cards import BossDefinition, RosterCard

logger = logging.getLogger(__name__)

# Default paths relative to the project root.
_PROJECT_ROOT = Path(__file__).resolve().parents[3]  # src/cosmic_battle/catalog -> root
_DEFAULT_CATALOG_PATH = _PROJECT_ROOT / "data" / "catalog.json"


class CatalogError(ValueError):
    """Raised when a catalog file is missing or cannot be parsed."""


def _parse_card(raw: dict[str, Any]) -> RosterCard:
    """Parse a raw catalog record into a RosterCard."""
    return RosterCard(
        id=str(raw["id"]),
        name=raw["name"],
        realm=raw["realm"],
        power=raw.get("power") or 0,
        defense=raw.get("defense") or 0,
        tier=raw.get("tier") or 1,
        level=raw.get("level") or 1,
        quantity=raw.get("quantity") or 1,
        rarity=raw.get("rarity") or "unknown",
    )


def _parse_boss(raw: dict[str, Any]) -> BossDefinition:
    """Parse a raw catalog record into a BossDefinition."""
    return BossDefinition(
        name=raw["name"],
        realm=raw["realm"],
        power=raw.get("power") or 0,
        defense=raw.get("defense") or 0,
    )


class CardCatalog:
    """Read-only lookup of every card and boss known to the simulator.

    Usage::

        catalog = CardCatalog.load("data/catalog.json")

        card = catalog.get_card("101")
        boss = catalog.get_boss("Darth Vader")
        rocks = catalog.cards_in_realm(1)
    """

    def __init__(
        self,
        cards: Iterable[RosterCard] = (),
        bosses: Iterable[BossDefinition] = (),
    ) -> None:
        self._cards: dict[str, RosterCard] = {c.id: c for c in cards}
        self._bosses: dict[str, BossDefinition] = {b.name: b for b in bosses}

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def from_records(
        cls,
        cards: Iterable[dict[str, Any]] = (),
        bosses: Iterable[dict[str, Any]] = (),
    ) -> CardCatalog:
        """Build a catalog from raw JSON-style records.

        Records carrying a ``_section`` key are organizational markers and
        are skipped.
        """
        return cls(
            cards=[_parse_card(r) for r in cards if "_section" not in r],
            bosses=[_parse_boss(r) for r in bosses if "_section" not in r],
        )

    @classmethod
    def load(cls, path: str | Path | None = None) -> CardCatalog:
        """Load a catalog from a JSON file.

        Parameters
        ----------
        path:
            Path to the JSON file.  Defaults to ``data/catalog.json``
            relative to the project root.  The file holds either a list of
            card records or an object with ``"cards"`` and ``"bosses"``
            lists.

        Raises
        ------
        CatalogError
            If the file cannot be read or does not describe a catalog.
        """
        if path is None:
            path = _DEFAULT_CATALOG_PATH
        path = Path(path)

        try:
            with open(path, encoding="utf-8") as f:
                raw = json.load(f)
        except OSError as exc:
            raise CatalogError(f"Cannot read catalog {path}: {exc}") from exc
        except json.JSONDecodeError as exc:
            raise CatalogError(f"Invalid catalog JSON in {path}: {exc}") from exc

        if isinstance(raw, list):
            raw = {"cards": raw}
        if not isinstance(raw, dict):
            raise CatalogError(f"Catalog {path} must be a list or an object")

        try:
            catalog = cls.from_records(raw.get("cards", []), raw.get("bosses", []))
        except (KeyError, ValidationError) as exc:
            raise CatalogError(f"Malformed catalog record in {path}: {exc}") from exc

        logger.debug(
            "Loaded catalog %s: %d cards, %d bosses",
            path, len(catalog._cards), len(catalog._bosses),
        )
        return catalog

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def cards(self) -> list[RosterCard]:
        return list(self._cards.values())

    @property
    def bosses(self) -> list[BossDefinition]:
        return list(self._bosses.values())

    def get_card(self, card_id: str | int) -> RosterCard | None:
        """Return the card with *card_id*, or ``None``."""
        return self._cards.get(str(card_id))

    def require_card(self, card_id: str | int) -> RosterCard:
        """Return the card with *card_id*, raising ``KeyError`` if unknown."""
        card = self.get_card(card_id)
        if card is None:
            raise KeyError(f"Unknown card_id: {card_id!r}")
        return card

    def get_boss(self, name: str) -> BossDefinition | None:
        """Return the boss called *name*, or ``None``."""
        return self._bosses.get(name)

    def cards_in_realm(self, realm: int) -> list[RosterCard]:
        return [c for c in self._cards.values() if c.realm == realm]

    def with_overlay(self, owned: Mapping[str, dict[str, Any]]) -> CardCatalog:
        """Return a new catalog with save data overlaid on the owned cards."""
        return CardCatalog(
            cards=[c.with_save_overlay(owned.get(c.id)) for c in self._cards.values()],
            bosses=self._bosses.values(),
        )

    # -- dunder helpers ------------------------------------------------------

    def __contains__(self, card_id: object) -> bool:
        return str(card_id) in self._cards

    def __iter__(self) -> Iterator[RosterCard]:
        return iter(self._cards.values())

    def __len__(self) -> int:
        return len(self._cards)

    def __repr__(self) -> str:
        return f"CardCatalog(cards={len(self._cards)}, bosses={len(self._bosses)})"
