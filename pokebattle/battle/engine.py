"""Team battle engine: pure transitions over :class:`BattleState`.

Every public transition takes a state and returns a new one. Calls that do
not apply to the current phase (wrong phase, bad index, fainted pick,
missing move) return the input state untouched, so callers can detect a
rejected action by comparing phase/turn before and after.

Typical flow::

    state = initialize_battle(player_team, opponent_team)
    state = choose_combatant(state, 0)          # select + opponent answers
    while not state.is_over:
        if state.phase == "battle":
            state = resolve_round(state, "fire" if state.turn == "player" else None)
        ...
"""
from __future__ import annotations
import math
import random
from dataclasses import replace
from typing import Iterable, NamedTuple, Optional, Sequence, Tuple

from pokebattle.core.logging import logger
from .models import (
    Battle, BattleState, Combatant, Finished, OpponentFainted, OpponentSelection,
    PlayerFainted, PlayerSelection, PlayerSwitch, Result, Roster, Side,
)
from .mechanics import execute_attack, pick_opponent_move

INTRO_LOG: Tuple[str, ...] = ("A Trainer appeared!", "Choose your first Pokemon!")
UNKNOWN_POKEMON = "Unknown Pokemon"

WIN_BONUS = 200
DEFEATED_OPPONENT_BONUS = 50
SURVIVOR_BONUS = 30
HP_BONUS_SCALE = 100
LOST_POKEMON_PENALTY = 20


class BattleSummary(NamedTuple):
    result: Result
    score: int
    player_pokemon: str
    opponent_pokemon: str


# ---------------------------------------------------------------------------
# Roster queries
# ---------------------------------------------------------------------------

def available_combatants(roster: Iterable[Combatant]) -> Tuple[Combatant, ...]:
    return tuple(p for p in roster if p.current_hp > 0)


def has_usable_combatant(roster: Iterable[Combatant]) -> bool:
    return any(p.current_hp > 0 for p in roster)


def first_to_act(player: Combatant, opponent: Combatant) -> Side:
    # Ties go to the player on every path
    return "player" if player.speed >= opponent.speed else "opponent"


def _write_back(roster: Roster, before: Combatant, after: Combatant) -> Roster:
    """Replace the roster entry for ``before`` with ``after``.

    Opponent teams may hold the same species twice, so the exact pre-hit
    value is matched first and the id only as a fallback.
    """
    idx = next((i for i, p in enumerate(roster) if p == before), None)
    if idx is None:
        idx = next((i for i, p in enumerate(roster) if p.id == before.id), None)
    if idx is None:
        return roster
    return roster[:idx] + (after,) + roster[idx + 1:]


# ---------------------------------------------------------------------------
# Transitions
# ---------------------------------------------------------------------------

def initialize_battle(player_roster: Sequence[Combatant], opponent_roster: Sequence[Combatant]) -> BattleState:
    state = BattleState(
        player_roster=tuple(player_roster),
        opponent_roster=tuple(opponent_roster),
        stage=PlayerSelection(),
        battle_log=INTRO_LOG,
    )
    logger.debug("BattleInitialized", player=len(state.player_roster), opponent=len(state.opponent_roster))
    return state


def select_combatant(state: BattleState, index: int) -> BattleState:
    """Send out the player's roster entry at ``index``.

    Valid while choosing the first combatant, after a faint, and during the
    optional switch window. From ``player-fainted`` the opponent is already
    on the field, so the battle resumes immediately; otherwise the state
    waits in ``opponent-selection`` for :func:`select_opponent`.
    """
    stage = state.stage
    if not isinstance(stage, (PlayerSelection, PlayerFainted, PlayerSwitch)):
        return state
    if not 0 <= index < len(state.player_roster):
        return state
    chosen = state.player_roster[index]
    if chosen.is_fainted():
        return state

    log = list(state.battle_log)
    if isinstance(stage, PlayerFainted):
        new_stage = Battle(player=chosen, opponent=stage.opponent, turn=first_to_act(chosen, stage.opponent))
    elif isinstance(stage, PlayerSwitch):
        if stage.player != chosen:
            log.append(f"{stage.player.name}, come back!")
        new_stage = OpponentSelection(player=chosen, previous=stage.fainted)
    else:
        new_stage = OpponentSelection(player=chosen)
    log.append(f"Go, {chosen.name}!")

    logger.debug("PokemonSelected", pokemon=chosen.name, index=index, phase=new_stage.phase)
    return replace(state, stage=new_stage, battle_log=tuple(log))


def select_opponent(state: BattleState) -> BattleState:
    """Let the opponent send out its next combatant.

    Picks the first usable entry that is not the combatant that just left
    the field, falling back to the first usable one. With nothing usable
    left the player wins.
    """
    stage = state.stage
    if isinstance(stage, OpponentSelection):
        player, previous = stage.player, stage.previous
    elif isinstance(stage, (OpponentFainted, PlayerSwitch)):
        player, previous = stage.player, stage.fainted
    else:
        return state

    usable = available_combatants(state.opponent_roster)
    if not usable:
        ended = replace(
            state,
            stage=Finished(player=player, opponent=None),
            result="win",
            battle_log=state.battle_log + ("All opponent Pokemon fainted! You win!",),
        )
        ended = replace(ended, score=calculate_team_score(ended))
        logger.debug("BattleFinished", result="win", score=ended.score)
        return ended

    exclude = previous.id if previous is not None else None
    chosen = next((p for p in usable if p.id != exclude), usable[0])
    turn = first_to_act(player, chosen)
    logger.debug("OpponentSelected", pokemon=chosen.name, hp=f"{chosen.current_hp}/{chosen.max_hp}", turn=turn)
    return replace(
        state,
        stage=Battle(player=player, opponent=chosen, turn=turn),
        battle_log=state.battle_log + (f"Opponent sends out {chosen.name}!",),
    )


def choose_combatant(state: BattleState, index: int) -> BattleState:
    """Select a player combatant and, when needed, let the opponent answer."""
    selected = select_combatant(state, index)
    if selected is state:
        return state
    if isinstance(selected.stage, OpponentSelection):
        return select_opponent(selected)
    return selected


def open_switch_window(state: BattleState) -> BattleState:
    """Offer the player an optional switch after the opponent lost a combatant."""
    stage = state.stage
    if not isinstance(stage, OpponentFainted):
        return state
    return replace(
        state,
        stage=PlayerSwitch(player=stage.player, fainted=stage.fainted),
        battle_log=state.battle_log + (f"Switch Pokemon or keep {stage.player.name} in the battle?",),
    )


def keep_current_combatant(state: BattleState) -> BattleState:
    stage = state.stage
    if not isinstance(stage, PlayerSwitch):
        return state
    kept = replace(state, battle_log=state.battle_log + (f"{stage.player.name} stays in the battle!",))
    return select_opponent(kept)


def resolve_round(state: BattleState, move_type: Optional[str] = None,
                  rng: Optional[random.Random] = None) -> BattleState:
    """Resolve one attack by whichever side holds the turn.

    The player's attack needs ``move_type``; the opponent's move is chosen
    by the engine and ``move_type`` is ignored.
    """
    stage = state.stage
    if not isinstance(stage, Battle):
        return state
    if stage.turn == "player":
        if not move_type:
            return state
        return _player_attacks(state, stage, move_type, rng)
    return _opponent_attacks(state, stage, rng)


def _player_attacks(state: BattleState, stage: Battle, move_type: str,
                    rng: Optional[random.Random]) -> BattleState:
    outcome = execute_attack(stage.player, stage.opponent, move_type, rng)
    foe = outcome.defender
    roster = _write_back(state.opponent_roster, stage.opponent, foe)
    log = [*state.battle_log, outcome.message]
    logger.debug("RoundResolved", attacker=stage.player.name, move=move_type, damage=outcome.damage,
                 multiplier=outcome.multiplier, hp=foe.current_hp)

    if not foe.is_fainted():
        return replace(state, opponent_roster=roster, battle_log=tuple(log),
                       stage=replace(stage, opponent=foe, turn="opponent"))

    log.append(f"{foe.name} fainted!")
    defeated = state.defeated_opponent + (foe.name,)
    if has_usable_combatant(roster):
        log.append("Opponent's Pokemon fainted! They will send out a new Pokemon...")
        log.append("You can also switch Pokemon if you want!")
        return replace(state, opponent_roster=roster, battle_log=tuple(log), defeated_opponent=defeated,
                       stage=OpponentFainted(player=stage.player, fainted=foe))

    log.append("All opponent Pokemon fainted! You win the battle!")
    ended = replace(state, opponent_roster=roster, battle_log=tuple(log), defeated_opponent=defeated,
                    stage=Finished(player=stage.player, opponent=foe), result="win")
    ended = replace(ended, score=calculate_team_score(ended))
    logger.debug("BattleFinished", result="win", score=ended.score)
    return ended


def _opponent_attacks(state: BattleState, stage: Battle, rng: Optional[random.Random]) -> BattleState:
    move_type = pick_opponent_move(stage.opponent, rng)
    outcome = execute_attack(stage.opponent, stage.player, move_type, rng)
    me = outcome.defender
    roster = _write_back(state.player_roster, stage.player, me)
    log = [*state.battle_log, outcome.message]
    logger.debug("RoundResolved", attacker=stage.opponent.name, move=move_type, damage=outcome.damage,
                 multiplier=outcome.multiplier, hp=me.current_hp)

    if not me.is_fainted():
        return replace(state, player_roster=roster, battle_log=tuple(log),
                       stage=replace(stage, player=me, turn="player"))

    log.append(f"{me.name} fainted!")
    defeated = state.defeated_player + (me.name,)
    if has_usable_combatant(roster):
        log.append("Choose your next Pokemon!")
        return replace(state, player_roster=roster, battle_log=tuple(log), defeated_player=defeated,
                       stage=PlayerFainted(opponent=stage.opponent, fainted=me))

    log.append("All your Pokemon fainted! You lose the battle!")
    logger.debug("BattleFinished", result="lose")
    return replace(state, player_roster=roster, battle_log=tuple(log), defeated_player=defeated,
                   stage=Finished(player=me, opponent=stage.opponent), result="lose")


# ---------------------------------------------------------------------------
# Scoring & summary
# ---------------------------------------------------------------------------

def calculate_team_score(state: BattleState) -> int:
    roster = state.player_roster
    score = WIN_BONUS
    score += DEFEATED_OPPONENT_BONUS * len(state.defeated_opponent)
    score += SURVIVOR_BONUS * len(available_combatants(roster))
    total_max = sum(p.max_hp for p in roster)
    if total_max > 0:
        score += math.floor(HP_BONUS_SCALE * sum(p.current_hp for p in roster) / total_max)
    score -= LOST_POKEMON_PENALTY * len(state.defeated_player)
    return max(0, score)


def _last_known(current: Optional[Combatant], defeated: Tuple[str, ...]) -> str:
    if current is not None:
        return current.name
    if defeated:
        return defeated[-1]
    return UNKNOWN_POKEMON


def battle_summary(state: BattleState) -> BattleSummary:
    """Names and score handed to the leaderboard once a battle is over.

    A side with nobody on the field falls back to its most recently
    defeated combatant.
    """
    return BattleSummary(
        result=state.result,
        score=state.score,
        player_pokemon=_last_known(state.current_player, state.defeated_player),
        opponent_pokemon=_last_known(state.current_opponent, state.defeated_opponent),
    )


__all__ = [
    "BattleSummary", "INTRO_LOG", "UNKNOWN_POKEMON",
    "available_combatants", "has_usable_combatant", "first_to_act",
    "initialize_battle", "select_combatant", "select_opponent", "choose_combatant",
    "open_switch_window", "keep_current_combatant", "resolve_round",
    "calculate_team_score", "battle_summary",
]
