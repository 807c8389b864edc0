"""Factory helpers for constructing Combatant records from catalog documents.

Catalog documents follow the public Pokemon API shape::

    {"id": 25, "name": "pikachu",
     "stats": [{"base_stat": 35, "stat": {"name": "hp"}}, ...],
     "types": [{"slot": 1, "type": {"name": "electric"}}],
     "sprites": {"front_default": "https://..."}}

Shared by the battle session, the CLI and tests.
"""
from __future__ import annotations
import random
from typing import Any, Dict, Iterable, List, Mapping, Optional, Protocol

from pokebattle.core.logging import logger
from .models import Combatant, MAX_TEAM_SIZE

MIN_CATALOG_ID = 1
MAX_CATALOG_ID = 150

DEFAULT_STATS: Dict[str, int] = {"hp": 100, "attack": 50, "defense": 50, "speed": 50}
DEFAULT_TYPES = ("normal",)

_default_rng = random.Random()


class CatalogSource(Protocol):
    def fetch(self, pokemon_id: int) -> Mapping[str, Any]: ...


def _normalize_stat(name: str) -> str:
    return str(name).strip().lower().replace("-", "_")


def base_stats(entry: Mapping[str, Any]) -> Dict[str, int]:
    stats: Dict[str, int] = {}
    for s in entry.get("stats") or []:
        name = (s.get("stat") or {}).get("name")
        if not name:
            continue
        stats[_normalize_stat(name)] = int(s.get("base_stat") or 0)
    return stats


def combatant_from_catalog(entry: Mapping[str, Any]) -> Combatant:
    """Convert a catalog document into a battle-ready Combatant.

    Missing (or zero) stats fall back to ``DEFAULT_STATS``; a document
    without types fights as normal type. Never raises on sparse data.
    """
    stats = base_stats(entry)
    hp = stats.get("hp") or DEFAULT_STATS["hp"]
    types = [(t.get("type") or {}).get("name") for t in entry.get("types") or []]
    types = [t for t in types if t]
    sprite = (entry.get("sprites") or {}).get("front_default")
    return Combatant(
        id=int(entry.get("id") or 0),
        name=str(entry.get("name") or "unknown"),
        max_hp=hp,
        current_hp=hp,
        attack=stats.get("attack") or DEFAULT_STATS["attack"],
        defense=stats.get("defense") or DEFAULT_STATS["defense"],
        speed=stats.get("speed") or DEFAULT_STATS["speed"],
        types=tuple(types) or DEFAULT_TYPES,
        image=sprite,
    )


def random_catalog_ids(size: int = MAX_TEAM_SIZE, rng: Optional[random.Random] = None) -> List[int]:
    """Independent uniform draws; duplicates are allowed."""
    r = rng if rng is not None else _default_rng
    return [r.randint(MIN_CATALOG_ID, MAX_CATALOG_ID) for _ in range(size)]


def load_roster_combatants(catalog: CatalogSource, ids: Iterable[int]) -> List[Combatant]:
    return [combatant_from_catalog(catalog.fetch(pid)) for pid in ids]


def generate_opponent_team(catalog: CatalogSource, rng: Optional[random.Random] = None,
                           size: int = MAX_TEAM_SIZE) -> List[Combatant]:
    ids = random_catalog_ids(size, rng)
    logger.debug("OpponentTeamDrawn", ids=",".join(str(i) for i in ids))
    return load_roster_combatants(catalog, ids)


__all__ = [
    "CatalogSource", "combatant_from_catalog", "base_stats",
    "random_catalog_ids", "load_roster_combatants", "generate_opponent_team",
    "MIN_CATALOG_ID", "MAX_CATALOG_ID", "DEFAULT_STATS",
]
