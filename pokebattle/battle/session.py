"""Higher-level orchestration for 6v6 team battles.

The engine functions are pure; a session owns the "current" state, feeds
the opponent's automatic actions back in, and exposes a small imperative
API for front ends. Presentation pacing belongs to the caller (see
``message_cb``), never to the session.
"""
from __future__ import annotations
import random
from typing import Callable, Iterable, List, Optional

from pokebattle.core.logging import logger
from .ai import choose_move, choose_replacement
from .engine import (
    BattleSummary, battle_summary, choose_combatant, initialize_battle,
    keep_current_combatant, open_switch_window, resolve_round, select_opponent,
)
from .factory import CatalogSource, generate_opponent_team, load_roster_combatants
from .models import BattleState, Combatant, Result

class BattleSession:
    def __init__(self, player_roster: Iterable[Combatant], opponent_roster: Iterable[Combatant],
                 rng: Optional[random.Random] = None, *, offer_switch: bool = True,
                 message_cb: Optional[Callable[[str], None]] = None):
        self.rng = rng or random.Random()
        self.offer_switch = offer_switch
        self.message_cb = message_cb
        self.state: BattleState = initialize_battle(list(player_roster), list(opponent_roster))
        self.history: List[BattleState] = [self.state]
        self.round_counter = 0

    @property
    def log(self) -> List[str]:
        return list(self.state.battle_log)

    def is_over(self) -> bool:
        return self.state.is_over

    def _advance(self, new: BattleState) -> bool:
        if new is self.state:
            return False
        fresh = new.battle_log[len(self.state.battle_log):]
        self.state = new
        self.history.append(new)
        if self.message_cb:
            for line in fresh:
                self.message_cb(line)
        return True

    def _run_opponent_turns(self):
        while self.state.phase == "battle" and self.state.turn == "opponent":
            if not self._advance(resolve_round(self.state, rng=self.rng)):
                break
            self.round_counter += 1

    def _after_opponent_faint(self):
        if self.state.phase != "opponent-fainted":
            return
        if self.offer_switch:
            self._advance(open_switch_window(self.state))
        else:
            self._advance(select_opponent(self.state))

    # ---------------- Player actions -----------------
    def choose(self, index: int) -> bool:
        """Send out roster entry ``index``; returns False if the pick was rejected."""
        if not self._advance(choose_combatant(self.state, index)):
            logger.debug("SelectionRejected", index=index, phase=self.state.phase)
            return False
        self._run_opponent_turns()
        return True

    def keep(self) -> bool:
        if not self._advance(keep_current_combatant(self.state)):
            return False
        self._run_opponent_turns()
        return True

    def attack(self, move_type: str) -> bool:
        if self.state.phase != "battle" or self.state.turn != "player":
            return False
        if not self._advance(resolve_round(self.state, move_type, self.rng)):
            return False
        self.round_counter += 1
        self._after_opponent_faint()
        self._run_opponent_turns()
        return True

    # ---------------- Automated play -----------------
    def step(self) -> bool:
        """Take one automatic decision for the player; False when stuck or over."""
        st = self.state
        if st.is_over:
            return False
        if st.phase in ("player-selection", "player-fainted"):
            idx = choose_replacement(st.player_roster, st.current_opponent)
            return idx is not None and self.choose(idx)
        if st.phase == "player-switch":
            return self.keep()
        if st.phase == "battle" and st.turn == "player":
            return self.attack(choose_move(st.current_player, st.current_opponent))
        if st.phase in ("opponent-selection", "opponent-fainted"):
            moved = self._advance(select_opponent(st))
            self._run_opponent_turns()
            return moved
        moved = self._advance(resolve_round(st, rng=self.rng))
        self._run_opponent_turns()
        return moved

    def run_auto(self, max_rounds: int = 500) -> Result:
        while not self.is_over() and self.round_counter < max_rounds:
            if not self.step():
                break
        return self.outcome()

    def outcome(self) -> Result:
        return self.state.result

    def summary(self) -> BattleSummary:
        return battle_summary(self.state)

    @classmethod
    def from_catalog(cls, catalog: CatalogSource, roster_ids: Iterable[int],
                     rng: Optional[random.Random] = None, **kw) -> 'BattleSession':
        """Factory: build the player's team from stored ids and draw a random opponent team."""
        rng = rng or random.Random()
        player = load_roster_combatants(catalog, roster_ids)
        opponent = generate_opponent_team(catalog, rng)
        logger.info("BattleStart", player=",".join(p.name for p in player),
                    opponent=",".join(p.name for p in opponent))
        return cls(player, opponent, rng, **kw)

__all__ = ["BattleSession"]
