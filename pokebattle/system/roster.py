"""Player roster store: an ordered list of up to six catalog ids.

Persisted as a JSON array. An unreadable or invalid file reads as an empty
roster (logged) rather than failing the caller.
"""
from __future__ import annotations
import json
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

import jsonschema

from pokebattle.core.logging import logger
from pokebattle.core.paths import roster_path
from pokebattle.battle.models import MAX_TEAM_SIZE

MAX_ROSTER_SIZE = MAX_TEAM_SIZE

ROSTER_SCHEMA = {
    "type": "array",
    "items": {"type": "integer", "minimum": 1},
    "maxItems": MAX_ROSTER_SIZE,
    "uniqueItems": True,
}

@dataclass(frozen=True)
class RosterInfo:
    pokemon: List[int]
    size: int
    is_full: bool
    has_space: bool
    empty_slots: int

class RosterStore:
    def __init__(self, path: Optional[Path] = None):
        self.path = path or roster_path()

    def ids(self) -> List[int]:
        if not self.path.exists():
            return []
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
            jsonschema.validate(raw, ROSTER_SCHEMA)
        except (OSError, ValueError, jsonschema.ValidationError) as e:
            logger.warn("RosterReadFailed", path=str(self.path), error=str(e))
            return []
        return list(raw)

    def _save(self, ids: List[int]):
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(ids), encoding="utf-8")
        logger.debug("RosterSaved", path=str(self.path), size=len(ids))

    def add(self, pokemon_id: int) -> bool:
        current = self.ids()
        if len(current) >= MAX_ROSTER_SIZE:
            logger.warn("RosterFull", max=MAX_ROSTER_SIZE)
            return False
        if pokemon_id in current:
            logger.warn("RosterDuplicate", id=pokemon_id)
            return False
        updated = current + [pokemon_id]
        try:
            jsonschema.validate(updated, ROSTER_SCHEMA)
        except jsonschema.ValidationError as e:
            logger.warn("RosterInvalidId", id=pokemon_id, error=e.message)
            return False
        self._save(updated)
        logger.info("RosterAdded", id=pokemon_id)
        return True

    def remove(self, pokemon_id: int) -> bool:
        current = self.ids()
        if pokemon_id not in current:
            logger.warn("RosterMissing", id=pokemon_id)
            return False
        self._save([i for i in current if i != pokemon_id])
        logger.info("RosterRemoved", id=pokemon_id)
        return True

    def clear(self):
        if self.path.exists():
            self.path.unlink()
        logger.info("RosterCleared")

    def contains(self, pokemon_id: int) -> bool:
        return pokemon_id in self.ids()

    def size(self) -> int:
        return len(self.ids())

    def is_full(self) -> bool:
        return self.size() >= MAX_ROSTER_SIZE

    def info(self) -> RosterInfo:
        ids = self.ids()
        return RosterInfo(
            pokemon=ids,
            size=len(ids),
            is_full=len(ids) >= MAX_ROSTER_SIZE,
            has_space=len(ids) < MAX_ROSTER_SIZE,
            empty_slots=MAX_ROSTER_SIZE - len(ids),
        )

__all__ = ["RosterStore", "RosterInfo", "MAX_ROSTER_SIZE"]
