"""Global elemental type metadata: names & colors.

Provides:
  ALL_TYPES: the eighteen elemental types in chart order
  TYPE_COLORS_HEX: mapping type -> hex color string (#RRGGBB)
  rich markup badges for terminal output.
"""
from __future__ import annotations
from typing import Dict, Tuple

ALL_TYPES: Tuple[str, ...] = (
    "normal", "fire", "water", "electric", "grass", "ice",
    "fighting", "poison", "ground", "flying", "psychic", "bug",
    "rock", "ghost", "dragon", "dark", "steel", "fairy",
)

TYPE_COLORS_HEX: Dict[str, str] = {
    "normal": "#A8A77A",
    "fire": "#EE8130",
    "water": "#6390F0",
    "electric": "#F7D02C",
    "grass": "#7AC74C",
    "ice": "#96D9D6",
    "fighting": "#C22E28",
    "poison": "#A33EA1",
    "ground": "#E2BF65",
    "flying": "#A98FF3",
    "psychic": "#F95587",
    "bug": "#A6B91A",
    "rock": "#B6A136",
    "ghost": "#735797",
    "dragon": "#6F35FC",
    "dark": "#705746",
    "steel": "#B7B7CE",
    "fairy": "#D685AD",
}

def normalize_type(type_name: str) -> str:
    return str(type_name).strip().lower()

def is_known_type(type_name: str) -> bool:
    return normalize_type(type_name) in TYPE_COLORS_HEX

def rich_type_badge(type_name: str) -> str:
    """Rich markup for a type label, e.g. ``[bold #EE8130]FIRE[/bold #EE8130]``."""
    label = normalize_type(type_name).upper()
    hex_val = TYPE_COLORS_HEX.get(normalize_type(type_name))
    if not hex_val:
        return label
    return f"[bold {hex_val}]{label}[/bold {hex_val}]"

__all__ = [
    'ALL_TYPES','TYPE_COLORS_HEX',
    'normalize_type','is_known_type','rich_type_badge'
]
