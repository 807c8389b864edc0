from __future__ import annotations
import math
import random
from dataclasses import dataclass
from typing import Optional

from pokebattle.battle.models import Combatant
from pokebattle.battle.typechart import effectiveness

DAMAGE_SCALE = 30
RANDOM_MIN = 0.85
RANDOM_MAX = 1.15
MIN_DAMAGE = 1

SUPER_EFFECTIVE = "It's super effective!"
NOT_VERY_EFFECTIVE = "It's not very effective..."
NO_EFFECT = "It has no effect!"

_default_rng = random.Random()


@dataclass(frozen=True)
class AttackOutcome:
    damage: int
    multiplier: float
    effectiveness: str
    defender: Combatant
    message: str


def _rng(rng: Optional[random.Random]) -> random.Random:
    return rng if rng is not None else _default_rng


def move_type_for(attacker: Combatant, move_type: Optional[str]) -> str:
    return move_type or attacker.types[0]


def effectiveness_message(multiplier: float) -> str:
    if multiplier == 0:
        return NO_EFFECT
    if multiplier > 1:
        return SUPER_EFFECTIVE
    if multiplier < 1:
        return NOT_VERY_EFFECTIVE
    return ""


def calculate_damage(attacker: Combatant, defender: Combatant, move_type: Optional[str] = None,
                     rng: Optional[random.Random] = None) -> int:
    base = math.floor(attacker.attack / max(1, defender.defense) * DAMAGE_SCALE)
    jitter = _rng(rng).uniform(RANDOM_MIN, RANDOM_MAX)
    mult = effectiveness(move_type_for(attacker, move_type), defender.types)
    dmg = math.floor(base * jitter * mult)
    # The floor applies even to immune matchups: a 0x hit still lands for 1.
    return max(MIN_DAMAGE, dmg)


def execute_attack(attacker: Combatant, defender: Combatant, move_type: Optional[str] = None,
                   rng: Optional[random.Random] = None) -> AttackOutcome:
    """Resolve one hit and return the damaged defender plus narration."""
    used = move_type_for(attacker, move_type)
    damage = calculate_damage(attacker, defender, used, rng)
    mult = effectiveness(used, defender.types)
    eff_txt = effectiveness_message(mult)
    message = f"{attacker.name} attacks {defender.name} for {damage} damage! {eff_txt}".strip()
    return AttackOutcome(
        damage=damage,
        multiplier=mult,
        effectiveness=eff_txt,
        defender=defender.with_hp(defender.current_hp - damage),
        message=message,
    )


def pick_opponent_move(opponent: Combatant, rng: Optional[random.Random] = None) -> str:
    """The opponent attacks with one of its own types, chosen uniformly."""
    return _rng(rng).choice(opponent.types)


__all__ = [
    "AttackOutcome", "calculate_damage", "execute_attack",
    "effectiveness_message", "pick_opponent_move", "move_type_for",
    "SUPER_EFFECTIVE", "NOT_VERY_EFFECTIVE", "NO_EFFECT",
]
