"""Static type-effectiveness chart (standard eighteen-type chart).

Rows are attacking types, columns defending types. Pairs not listed are
neutral (1x). The chart is read-only: both levels are ``MappingProxyType``.
"""
from __future__ import annotations
from types import MappingProxyType
from typing import Iterable, Mapping

from pokebattle.core.types import normalize_type

_RAW_CHART: dict[str, dict[str, float]] = {
    "normal":  {"rock": 0.5, "ghost": 0.0, "steel": 0.5},
    "fire":    {"fire": 0.5, "water": 0.5, "grass": 2.0, "ice": 2.0, "bug": 2.0, "rock": 0.5, "dragon": 0.5, "steel": 2.0},
    "water":   {"fire": 2.0, "water": 0.5, "grass": 0.5, "ground": 2.0, "rock": 2.0, "dragon": 0.5},
    "electric":{"water": 2.0, "electric": 0.5, "grass": 0.5, "ground": 0.0, "flying": 2.0, "dragon": 0.5},
    "grass":   {"fire": 0.5, "water": 2.0, "grass": 0.5, "poison": 0.5, "ground": 2.0, "flying": 0.5, "bug": 0.5, "rock": 2.0, "dragon": 0.5, "steel": 0.5},
    "ice":     {"fire": 0.5, "water": 0.5, "grass": 2.0, "ice": 0.5, "ground": 2.0, "flying": 2.0, "dragon": 2.0, "steel": 0.5},
    "fighting":{"normal": 2.0, "ice": 2.0, "poison": 0.5, "flying": 0.5, "psychic": 0.5, "bug": 0.5, "rock": 2.0, "ghost": 0.0, "dark": 2.0, "steel": 2.0, "fairy": 0.5},
    "poison":  {"grass": 2.0, "poison": 0.5, "ground": 0.5, "rock": 0.5, "ghost": 0.5, "steel": 0.0, "fairy": 2.0},
    "ground":  {"fire": 2.0, "electric": 2.0, "grass": 0.5, "poison": 2.0, "flying": 0.0, "bug": 0.5, "rock": 2.0, "steel": 2.0},
    "flying":  {"electric": 0.5, "grass": 2.0, "fighting": 2.0, "bug": 2.0, "rock": 0.5, "steel": 0.5},
    "psychic": {"fighting": 2.0, "poison": 2.0, "psychic": 0.5, "dark": 0.0, "steel": 0.5},
    "bug":     {"fire": 0.5, "grass": 2.0, "fighting": 0.5, "poison": 0.5, "flying": 0.5, "psychic": 2.0, "ghost": 0.5, "dark": 2.0, "steel": 0.5, "fairy": 0.5},
    "rock":    {"fire": 2.0, "ice": 2.0, "fighting": 0.5, "ground": 0.5, "flying": 2.0, "bug": 2.0, "steel": 0.5},
    "ghost":   {"normal": 0.0, "psychic": 2.0, "ghost": 2.0, "dark": 0.5},
    "dragon":  {"dragon": 2.0, "steel": 0.5, "fairy": 0.0},
    "dark":    {"fighting": 0.5, "psychic": 2.0, "ghost": 2.0, "dark": 0.5, "fairy": 0.5},
    "steel":   {"fire": 0.5, "water": 0.5, "electric": 0.5, "ice": 2.0, "rock": 2.0, "steel": 0.5, "fairy": 2.0},
    "fairy":   {"fire": 0.5, "fighting": 2.0, "poison": 0.5, "dragon": 2.0, "dark": 2.0, "steel": 0.5},
}

TYPE_CHART: Mapping[str, Mapping[str, float]] = MappingProxyType(
    {attacker: MappingProxyType(dict(row)) for attacker, row in _RAW_CHART.items()}
)

_EMPTY: Mapping[str, float] = MappingProxyType({})


def matchup(attack_type: str, defender_type: str) -> float:
    """Multiplier for a single attacking type against a single defending type."""
    row = TYPE_CHART.get(normalize_type(attack_type), _EMPTY)
    return row.get(normalize_type(defender_type), 1.0)


def effectiveness(attack_type: str, defender_types: Iterable[str]) -> float:
    """Product of the pairwise multipliers across every defending type.

    Dual types compound: water into fire/rock is 4x, an immunity anywhere
    makes the whole product 0.
    """
    mult = 1.0
    for t in defender_types:
        mult *= matchup(attack_type, t)
    return mult


__all__ = ["TYPE_CHART", "matchup", "effectiveness"]
