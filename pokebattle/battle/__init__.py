"""
Team battle package.
Modules:
- typechart.py (static type-effectiveness chart)
- models.py (Combatant, phase variants, BattleState)
- mechanics.py (damage model, effectiveness narration)
- engine.py (pure state transitions, scoring)
- factory.py (catalog conversion, opponent team generation)
- ai.py (automatic move / replacement choice)
- session.py (orchestration around the engine)
"""
from .typechart import effectiveness
from .models import BattleState, Combatant
from .mechanics import calculate_damage
from .engine import (
    initialize_battle, select_combatant, select_opponent, choose_combatant,
    open_switch_window, keep_current_combatant, resolve_round,
    available_combatants, calculate_team_score, battle_summary,
)
from .session import BattleSession
__all__ = [
    "effectiveness", "BattleState", "Combatant", "calculate_damage",
    "initialize_battle", "select_combatant", "select_opponent", "choose_combatant",
    "open_switch_window", "keep_current_combatant", "resolve_round",
    "available_combatants", "calculate_team_score", "battle_summary",
    "BattleSession",
]
