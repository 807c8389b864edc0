from __future__ import annotations
from typing import Optional, Sequence

from .models import Combatant
from .typechart import effectiveness

def choose_move(user: Combatant, foe: Combatant) -> str:
    best = user.types[0]
    best_score = -1.0
    for t in user.types:
        score = effectiveness(t, foe.types)
        if score > best_score:
            best_score = score
            best = t
    return best

def choose_replacement(roster: Sequence[Combatant], foe: Optional[Combatant] = None) -> Optional[int]:
    """Index of the roster entry to send out next, or None if nobody can fight."""
    best: Optional[int] = None
    best_score = -1.0
    for i, p in enumerate(roster):
        if p.is_fainted():
            continue
        if foe is None:
            return i
        score = effectiveness(choose_move(p, foe), foe.types)
        if score > best_score:
            best_score = score
            best = i
    return best
