"""Ranked leaderboard of finished battles, persisted as JSON."""
from __future__ import annotations
import json
import uuid
from dataclasses import dataclass, asdict
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Literal, Optional

import jsonschema

from pokebattle.core.errors import ValidationError
from pokebattle.core.logging import logger
from pokebattle.core.paths import leaderboard_path
from pokebattle.battle.engine import BattleSummary

Filter = Literal["all", "wins", "recent"]
RECENT_LIMIT = 20

ENTRY_SCHEMA = {
    "type": "object",
    "required": ["id", "username", "score", "player_pokemon", "opponent_pokemon", "timestamp", "battle_result"],
    "properties": {
        "id": {"type": "string"},
        "username": {"type": "string", "minLength": 1},
        "score": {"type": "integer", "minimum": 0},
        "player_pokemon": {"type": "string"},
        "opponent_pokemon": {"type": "string"},
        "timestamp": {"type": "string"},
        "battle_result": {"enum": ["win", "lose"]},
    },
}
LEADERBOARD_SCHEMA = {"type": "array", "items": ENTRY_SCHEMA}

@dataclass(frozen=True)
class LeaderboardEntry:
    id: str
    username: str
    score: int
    player_pokemon: str
    opponent_pokemon: str
    timestamp: str  # ISO-8601, UTC
    battle_result: str

    @property
    def when(self) -> datetime:
        return datetime.fromisoformat(self.timestamp)

@dataclass(frozen=True)
class LeaderboardStats:
    total_battles: int
    wins: int
    best_score: int

class Leaderboard:
    def __init__(self, path: Optional[Path] = None):
        self.path = path or leaderboard_path()

    def _load(self) -> List[LeaderboardEntry]:
        if not self.path.exists():
            return []
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
            jsonschema.validate(raw, LEADERBOARD_SCHEMA)
        except (OSError, ValueError, jsonschema.ValidationError) as e:
            logger.warn("LeaderboardReadFailed", path=str(self.path), error=str(e))
            return []
        return [LeaderboardEntry(**{k: e[k] for k in ENTRY_SCHEMA["required"]}) for e in raw]

    def _save(self, entries: List[LeaderboardEntry]):
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps([asdict(e) for e in entries], indent=2), encoding="utf-8")
        logger.debug("LeaderboardSaved", path=str(self.path), count=len(entries))

    def submit(self, entry: LeaderboardEntry) -> int:
        """Persist ``entry`` and return its 1-based rank by score."""
        try:
            jsonschema.validate(asdict(entry), ENTRY_SCHEMA)
        except jsonschema.ValidationError as e:
            raise ValidationError(f"Invalid leaderboard entry: {e.message}") from e
        entries = self._load()
        entries.append(entry)
        self._save(entries)
        rank = self.rank_of(entry.id)
        logger.info("ScoreSubmitted", username=entry.username, score=entry.score, rank=rank)
        return rank

    def submit_result(self, summary: BattleSummary, username: str,
                      now: Optional[datetime] = None) -> LeaderboardEntry:
        if summary.result == "ongoing":
            raise ValidationError("Cannot submit a battle that is still ongoing")
        stamp = (now or datetime.now(timezone.utc)).isoformat()
        entry = LeaderboardEntry(
            id=uuid.uuid4().hex,
            username=username.strip(),
            score=summary.score,
            player_pokemon=summary.player_pokemon,
            opponent_pokemon=summary.opponent_pokemon,
            timestamp=stamp,
            battle_result=summary.result,
        )
        self.submit(entry)
        return entry

    def entries(self, filter: Filter = "all") -> List[LeaderboardEntry]:
        items = self._load()
        if filter == "wins":
            return [e for e in items if e.battle_result == "win"]
        if filter == "recent":
            return sorted(items, key=lambda e: e.when, reverse=True)[:RECENT_LIMIT]
        return sorted(items, key=lambda e: e.score, reverse=True)

    def rank_of(self, entry_id: str) -> int:
        """1-based rank by score, 0 if the entry is unknown."""
        ranked = sorted(self._load(), key=lambda e: e.score, reverse=True)
        for i, e in enumerate(ranked, 1):
            if e.id == entry_id:
                return i
        return 0

    def stats(self) -> LeaderboardStats:
        items = self._load()
        return LeaderboardStats(
            total_battles=len(items),
            wins=sum(1 for e in items if e.battle_result == "win"),
            best_score=max((e.score for e in items), default=0),
        )

    def clear(self):
        if self.path.exists():
            self.path.unlink()

__all__ = ["Leaderboard", "LeaderboardEntry", "LeaderboardStats", "RECENT_LIMIT"]
