"""Terminal battle UI built on rich.

Renders the battle state (active combatants with HP bars, team status and
the tail of the battle log) and drives an interactive session:

  selection phases -> pick a roster slot
  battle (your turn) -> pick one of your combatant's types as the move
  switch window -> pick a slot or keep the current combatant

Pacing between messages is handled here through ``delay``; the session and
engine never sleep.
"""
from __future__ import annotations
import time
from typing import Callable, Optional, Sequence

from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from rich.box import ROUNDED

from pokebattle.battle.models import BattleState, Combatant
from pokebattle.battle.session import BattleSession
from pokebattle.core.types import is_known_type, rich_type_badge

LOG_TAIL = 6

def hp_bar(current: int, max_hp: int, width: int = 20) -> Text:
    if max_hp <= 0:
        return Text("░" * width, style="red")
    ratio = max(0.0, min(1.0, current / max_hp))
    filled = int(round(ratio * width))
    # Color based on HP percentage
    if ratio > 0.5:
        color = "green"
    elif ratio > 0.2:
        color = "yellow"
    else:
        color = "red"
    bar = Text("█" * filled, style=color)
    bar.append("░" * (width - filled), style="grey50")
    bar.append(f" {current}/{max_hp}")
    return bar

def type_badges(types: Sequence[str]) -> str:
    return " ".join(rich_type_badge(t) for t in types)

def combatant_panel(c: Optional[Combatant], title: str) -> Panel:
    if c is None:
        return Panel(Text("-", justify="center"), title=title, box=ROUNDED)
    body = Table.grid(padding=(0, 1))
    body.add_row(Text(c.name.capitalize(), style="bold"), type_badges(c.types))
    body.add_row("HP", hp_bar(c.current_hp, c.max_hp))
    body.add_row("ATK/DEF/SPD", f"{c.attack}/{c.defense}/{c.speed}")
    return Panel(body, title=title, box=ROUNDED)

def roster_table(roster: Sequence[Combatant], title: str, active: Optional[Combatant] = None) -> Table:
    table = Table(title=title, box=ROUNDED, show_lines=False)
    table.add_column("#", justify="right")
    table.add_column("Pokemon")
    table.add_column("Types")
    table.add_column("HP")
    for i, c in enumerate(roster):
        name = c.name.capitalize()
        if active is not None and c == active:
            name = f"[bold]{name} *[/bold]"
        if c.is_fainted():
            name = f"[strike dim]{c.name.capitalize()}[/strike dim]"
        table.add_row(str(i + 1), name, type_badges(c.types), hp_bar(c.current_hp, c.max_hp, width=10))
    return table

def render_state(state: BattleState, log_tail: int = LOG_TAIL) -> Group:
    arena = Table.grid(expand=True)
    arena.add_column(ratio=1)
    arena.add_column(ratio=1)
    arena.add_row(combatant_panel(state.current_player, "You"),
                  combatant_panel(state.current_opponent, "Opponent"))
    log = Text("\n".join(state.battle_log[-log_tail:]))
    footer = f"phase: {state.phase}   turn: {state.turn}   result: {state.result}"
    return Group(arena, Panel(log, title="Battle log", box=ROUNDED), Text(footer, style="dim"))

def render_result(state: BattleState) -> Panel:
    if state.result == "win":
        text = Text(f"You win! Score: {state.score}", style="bold green", justify="center")
    else:
        text = Text("You lost the battle...", style="bold red", justify="center")
    return Panel(text, box=ROUNDED)

def _prompt_slot(ask: Callable[[str], str], roster_size: int, allow_keep: bool = False) -> Optional[int]:
    hint = f"Choose 1-{roster_size}" + (" or K to keep" if allow_keep else "")
    raw = ask(hint).strip().lower()
    if allow_keep and raw in {"k", "keep"}:
        return None
    if raw.isdigit():
        return int(raw) - 1
    return -1

def run_battle_ui(session: BattleSession, console: Optional[Console] = None,
                  ask: Optional[Callable[[str], str]] = None, delay: float = 0.0) -> BattleState:
    """Play a battle interactively until it finishes; returns the final state."""
    console = console or Console()
    ask = ask or (lambda prompt: console.input(f"{prompt}: "))

    def _on_message(line: str):
        console.print(line)
        if delay:
            time.sleep(delay)
    session.message_cb = _on_message

    for line in session.log:
        console.print(line)
    while not session.is_over():
        st = session.state
        if st.phase in ("player-selection", "player-fainted", "player-switch"):
            console.print(roster_table(st.player_roster, "Your team", st.current_player))
            keep = st.phase == "player-switch"
            idx = _prompt_slot(ask, len(st.player_roster), allow_keep=keep)
            ok = session.keep() if idx is None else session.choose(idx)
            if not ok:
                console.print("[red]That Pokemon can't battle right now.[/red]")
        elif st.phase == "battle" and st.turn == "player":
            console.print(render_state(st))
            moves = st.current_player.types
            options = ", ".join(f"{i + 1}) {rich_type_badge(t)}" for i, t in enumerate(moves))
            console.print(f"Moves: {options}")
            raw = ask("Attack with").strip().lower()
            move = moves[int(raw) - 1] if raw.isdigit() and 0 < int(raw) <= len(moves) else raw
            if move not in moves or not is_known_type(move):
                console.print("[red]Pick one of your Pokemon's types.[/red]")
                continue
            session.attack(move)
        elif not session.step():
            break
    console.print(render_result(session.state))
    return session.state
