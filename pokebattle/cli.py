from __future__ import annotations
import argparse
import random
from typing import List, Optional

from rich.console import Console
from rich.table import Table
from rich.box import ROUNDED

from pokebattle.core.errors import CatalogError, PokebattleError
from pokebattle.core.logging import logger
from pokebattle.data.catalog import CatalogClient
from pokebattle.battle.factory import CatalogSource, MAX_CATALOG_ID, MIN_CATALOG_ID
from pokebattle.battle.session import BattleSession
from pokebattle.system.leaderboard import Leaderboard
from pokebattle.system.roster import RosterStore
from pokebattle.system.settings import Settings
from pokebattle.ui.battle import render_result, roster_table, run_battle_ui

class AppContext:
    def __init__(self, settings: Settings, roster: Optional[RosterStore] = None,
                 leaderboard: Optional[Leaderboard] = None, catalog: Optional[CatalogSource] = None,
                 console: Optional[Console] = None):
        self.settings = settings
        self.roster = roster or RosterStore()
        self.leaderboard = leaderboard or Leaderboard()
        self.catalog = catalog or CatalogClient(settings.data.catalog_url)
        self.console = console or Console()

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="pokebattle", description="6v6 Pokemon team battles in the terminal")
    parser.add_argument("--debug", action="store_true", help="Verbose engine logging")
    sub = parser.add_subparsers(dest="command", required=True)

    roster = sub.add_parser("roster", help="Manage your team of up to six Pokemon")
    rsub = roster.add_subparsers(dest="action", required=True)
    rsub.add_parser("show", help="List the stored team")
    for name, text in (("add", "Add a Pokemon by catalog id"), ("remove", "Remove a Pokemon by catalog id")):
        p = rsub.add_parser(name, help=text)
        p.add_argument("pokemon_id", type=int)
    rsub.add_parser("clear", help="Empty the team")

    battle = sub.add_parser("battle", help="Battle a random trainer interactively")
    battle.add_argument("--seed", type=int, default=None)
    battle.add_argument("--no-submit", action="store_true", help="Do not record a win on the leaderboard")

    sim = sub.add_parser("simulate", help="Let both sides play automatically")
    sim.add_argument("--seed", type=int, default=None)
    sim.add_argument("--submit", action="store_true", help="Record a win on the leaderboard")

    board = sub.add_parser("leaderboard", help="Show ranked battle results")
    board.add_argument("--filter", choices=["all", "wins", "recent"], default="all")
    return parser

# ---------------- Commands -----------------
def _cmd_roster(args, ctx: AppContext) -> int:
    console = ctx.console
    if args.action == "show":
        info = ctx.roster.info()
        if not info.pokemon:
            console.print("Your roster is empty. Add Pokemon with 'pokebattle roster add <id>'.")
            return 0
        console.print(f"Roster ({info.size}/{info.size + info.empty_slots}): "
                      + ", ".join(f"#{i}" for i in info.pokemon))
        return 0
    if args.action == "add":
        if not MIN_CATALOG_ID <= args.pokemon_id <= MAX_CATALOG_ID:
            console.print(f"[red]Pick an id between {MIN_CATALOG_ID} and {MAX_CATALOG_ID}.[/red]")
            return 1
        if not ctx.roster.add(args.pokemon_id):
            console.print("[red]Could not add: roster is full or already has that Pokemon.[/red]")
            return 1
        console.print(f"Added #{args.pokemon_id} to your roster.")
        return 0
    if args.action == "remove":
        if not ctx.roster.remove(args.pokemon_id):
            console.print(f"[red]#{args.pokemon_id} is not in your roster.[/red]")
            return 1
        console.print(f"Removed #{args.pokemon_id} from your roster.")
        return 0
    ctx.roster.clear()
    console.print("Roster cleared.")
    return 0

def _start_session(args, ctx: AppContext) -> Optional[BattleSession]:
    ids = ctx.roster.ids()
    if not ids:
        ctx.console.print("[red]Your roster is empty. Add Pokemon before battling.[/red]")
        return None
    rng = random.Random(args.seed)
    return BattleSession.from_catalog(ctx.catalog, ids, rng)

def _submit(ctx: AppContext, session: BattleSession):
    entry = ctx.leaderboard.submit_result(session.summary(), ctx.settings.data.trainer_name)
    rank = ctx.leaderboard.rank_of(entry.id)
    ctx.console.print(f"Recorded {entry.username}: {entry.score} points (rank #{rank}).")

def _cmd_battle(args, ctx: AppContext) -> int:
    session = _start_session(args, ctx)
    if session is None:
        return 1
    run_battle_ui(session, ctx.console, delay=ctx.settings.data.turn_delay)
    if not args.no_submit and session.outcome() == "win":
        _submit(ctx, session)
    return 0

def _cmd_simulate(args, ctx: AppContext) -> int:
    session = _start_session(args, ctx)
    if session is None:
        return 1
    session.run_auto()
    for line in session.log:
        ctx.console.print(line)
    if not session.is_over():
        ctx.console.print("[yellow]Simulation stopped before the battle ended.[/yellow]")
        return 1
    ctx.console.print(roster_table(session.state.player_roster, "Your team"))
    ctx.console.print(render_result(session.state))
    if args.submit and session.outcome() == "win":
        _submit(ctx, session)
    return 0

def _cmd_leaderboard(args, ctx: AppContext) -> int:
    entries = ctx.leaderboard.entries(args.filter)
    stats = ctx.leaderboard.stats()
    table = Table(title="Leaderboard", box=ROUNDED)
    for col in ("Rank", "Trainer", "Score", "Result", "Your Pokemon", "Opponent", "When"):
        table.add_column(col)
    for i, e in enumerate(entries, 1):
        style = "green" if e.battle_result == "win" else "red"
        table.add_row(str(i), e.username, str(e.score), f"[{style}]{e.battle_result}[/{style}]",
                      e.player_pokemon, e.opponent_pokemon, e.when.strftime("%Y-%m-%d %H:%M"))
    ctx.console.print(table)
    ctx.console.print(f"Battles: {stats.total_battles}  Wins: {stats.wins}  Best: {stats.best_score}")
    return 0

COMMANDS = {
    "roster": _cmd_roster,
    "battle": _cmd_battle,
    "simulate": _cmd_simulate,
    "leaderboard": _cmd_leaderboard,
}

def run(argv: Optional[List[str]] = None, ctx: Optional[AppContext] = None) -> int:
    args = build_parser().parse_args(argv)
    if ctx is None:
        ctx = AppContext(Settings.load())
    ctx.settings.apply_logging()
    if args.debug:
        logger.set_level("DEBUG")
    try:
        return COMMANDS[args.command](args, ctx)
    except CatalogError as e:
        ctx.console.print(f"[red]{e}[/red]")
        return 2
    except PokebattleError as e:
        logger.error("CommandFailed", command=args.command, error=str(e))
        ctx.console.print(f"[red]{e}[/red]")
        return 1
    except KeyboardInterrupt:
        ctx.console.print("\nBye!")
        return 130

def main():
    raise SystemExit(run())
