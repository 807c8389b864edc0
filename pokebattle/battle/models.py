"""Battle data model.

``Combatant`` is a value record; every HP change produces a new record.
``BattleState`` holds both rosters plus a ``stage`` describing the current
phase. Each stage variant carries exactly the combatants that exist in that
phase, so e.g. a ``Battle`` stage can never be missing a combatant.
"""
from __future__ import annotations
from dataclasses import dataclass, field, replace
from typing import Literal, Optional, Tuple, Union

from pokebattle.core.types import normalize_type

Side = Literal["player", "opponent"]
Phase = Literal[
    "player-selection",
    "opponent-selection",
    "battle",
    "player-fainted",
    "opponent-fainted",
    "player-switch",
    "result",
]
Result = Literal["ongoing", "win", "lose"]

MAX_TEAM_SIZE = 6


@dataclass(frozen=True)
class Combatant:
    id: int
    name: str
    max_hp: int
    current_hp: int
    attack: int
    defense: int
    speed: int
    types: Tuple[str, ...]
    image: Optional[str] = None

    def __post_init__(self):
        # Accept a single type name or any iterable of them; store a normalised tuple
        raw = (self.types,) if isinstance(self.types, str) else self.types
        object.__setattr__(self, "types", tuple(normalize_type(t) for t in raw))
        hp = max(0, min(int(self.current_hp), int(self.max_hp)))
        object.__setattr__(self, "current_hp", hp)

    def is_fainted(self) -> bool:
        return self.current_hp <= 0

    def with_hp(self, hp: int) -> "Combatant":
        return replace(self, current_hp=max(0, min(int(hp), self.max_hp)))


Roster = Tuple[Combatant, ...]


# ---------------------------------------------------------------------------
# Stage variants
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class PlayerSelection:
    """Battle just started; nobody is on the field."""
    phase: Phase = field(default="player-selection", init=False)


@dataclass(frozen=True)
class OpponentSelection:
    """Player has sent out a combatant; the opponent has not answered yet."""
    player: Combatant
    previous: Optional[Combatant] = None  # opponent combatant that just left the field
    phase: Phase = field(default="opponent-selection", init=False)


@dataclass(frozen=True)
class Battle:
    player: Combatant
    opponent: Combatant
    turn: Side = "player"
    phase: Phase = field(default="battle", init=False)


@dataclass(frozen=True)
class PlayerFainted:
    opponent: Combatant
    fainted: Combatant
    phase: Phase = field(default="player-fainted", init=False)


@dataclass(frozen=True)
class OpponentFainted:
    player: Combatant
    fainted: Combatant
    phase: Phase = field(default="opponent-fainted", init=False)


@dataclass(frozen=True)
class PlayerSwitch:
    """Optional switch window offered after the opponent lost a combatant."""
    player: Combatant
    fainted: Combatant
    phase: Phase = field(default="player-switch", init=False)


@dataclass(frozen=True)
class Finished:
    player: Optional[Combatant] = None
    opponent: Optional[Combatant] = None
    phase: Phase = field(default="result", init=False)


Stage = Union[
    PlayerSelection, OpponentSelection, Battle,
    PlayerFainted, OpponentFainted, PlayerSwitch, Finished,
]


@dataclass(frozen=True)
class BattleState:
    player_roster: Roster
    opponent_roster: Roster
    stage: Stage = field(default_factory=PlayerSelection)
    battle_log: Tuple[str, ...] = ()
    result: Result = "ongoing"
    score: int = 0
    defeated_player: Tuple[str, ...] = ()
    defeated_opponent: Tuple[str, ...] = ()

    @property
    def phase(self) -> Phase:
        return self.stage.phase

    @property
    def turn(self) -> Side:
        if isinstance(self.stage, Battle):
            return self.stage.turn
        return "player"

    @property
    def current_player(self) -> Optional[Combatant]:
        return getattr(self.stage, "player", None)

    @property
    def current_opponent(self) -> Optional[Combatant]:
        return getattr(self.stage, "opponent", None)

    @property
    def is_over(self) -> bool:
        return self.result != "ongoing"


__all__ = [
    "Side", "Phase", "Result", "MAX_TEAM_SIZE",
    "Combatant", "Roster", "Stage", "BattleState",
    "PlayerSelection", "OpponentSelection", "Battle",
    "PlayerFainted", "OpponentFainted", "PlayerSwitch", "Finished",
]
