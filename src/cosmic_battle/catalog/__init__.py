"""Card and boss catalog: definitions and the immutable catalog value."""

from .cards import EGO_REALM, BossDefinition, Realm, RosterCard
from .registry import CardCatalog, CatalogError

__all__ = [
    "BossDefinition",
    "CardCatalog",
    "CatalogError",
    "EGO_REALM",
    "Realm",
    "RosterCard",
]
