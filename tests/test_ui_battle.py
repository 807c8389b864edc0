import io

from rich.console import Console

from pokebattle.battle.engine import choose_combatant, initialize_battle
from pokebattle.battle.models import Combatant
from pokebattle.battle.session import BattleSession
from pokebattle.ui.battle import hp_bar, render_state, run_battle_ui


class DummyRng:
    def uniform(self, a, b): return 1.0
    def choice(self, seq): return seq[0]
    def randint(self, a, b): return a


def mon(pid, name, hp=100, atk=50, spd=50, types=("normal",)):
    return Combatant(id=pid, name=name, max_hp=hp, current_hp=hp, attack=atk, defense=50, speed=spd, types=types)


def make_console():
    return Console(file=io.StringIO(), width=120, color_system=None)


def test_hp_bar_fill_and_label():
    bar = hp_bar(50, 100, width=10)
    assert bar.plain == "█" * 5 + "░" * 5 + " 50/100"
    assert hp_bar(0, 100, width=4).plain.startswith("░░░░")


def test_render_state_shows_both_sides_and_log():
    state = choose_combatant(initialize_battle([mon(1, "pikachu")], [mon(2, "onix")]), 0)
    console = make_console()
    console.print(render_state(state))
    out = console.file.getvalue()
    assert "Pikachu" in out and "Onix" in out
    assert "Opponent sends out onix!" in out


def test_interactive_battle_with_scripted_answers():
    player = [mon(1, "titan", hp=500, atk=300, spd=100, types=("fighting",))]
    foes = [mon(2, "rattata", hp=50, spd=10), mon(3, "pidgey", hp=50, spd=10)]
    session = BattleSession(player, foes, DummyRng())
    answers = ["x", "1", "dragon", "1", "k", "fighting"]
    console = make_console()
    final = run_battle_ui(session, console, ask=lambda prompt: answers.pop(0))
    assert final.result == "win"
    assert answers == []
    out = console.file.getvalue()
    assert "That Pokemon can't battle right now." in out
    assert "Pick one of your Pokemon's types." in out
    assert "titan stays in the battle!" in out
    assert "You win! Score:" in out
