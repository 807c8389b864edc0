import random

from pokebattle.battle.models import Combatant
from pokebattle.battle.session import BattleSession


class DummyRng:
    def uniform(self, a, b): return 1.0
    def choice(self, seq): return seq[0]
    def randint(self, a, b): return a
    def random(self): return 0.0


def mon(pid, name, hp=100, atk=50, df=50, spd=50, types=("normal",)):
    return Combatant(id=pid, name=name, max_hp=hp, current_hp=hp, attack=atk, defense=df, speed=spd, types=types)


def titan_vs_minnows():
    player = [mon(1, "titan", hp=500, atk=300, df=100, spd=100)]
    foes = [mon(pid, f"minnow{pid}", hp=50, atk=10, spd=10) for pid in (2, 3, 4)]
    return player, foes


def test_auto_battle_player_wins():
    player, foes = titan_vs_minnows()
    lines = []
    session = BattleSession(player, foes, DummyRng(), message_cb=lines.append)
    assert session.run_auto() == "win"
    assert session.is_over()
    assert session.state.score == 200 + 150 + 30 + 100
    assert session.log.count("titan stays in the battle!") == 2
    assert lines == session.log[2:]
    summary = session.summary()
    assert summary.player_pokemon == "titan"
    assert summary.opponent_pokemon == "minnow4"


def test_without_switch_window_opponent_replaces_directly():
    player, foes = titan_vs_minnows()
    session = BattleSession(player, foes, DummyRng(), offer_switch=False)
    assert session.run_auto() == "win"
    assert not any("stays in the battle" in line for line in session.log)
    assert session.round_counter == 3


def test_opponent_turns_run_automatically():
    player = [mon(1, "slowpoke", hp=300, spd=10), mon(2, "backup", hp=300, spd=10)]
    foes = [mon(3, "speedy", hp=300, spd=90)]
    session = BattleSession(player, foes, DummyRng())
    assert session.choose(0)
    # the faster opponent already struck; control is back with the player
    assert session.state.turn == "player"
    assert session.state.current_player.current_hp == 270
    assert session.attack("normal")
    assert session.state.current_opponent.current_hp == 270
    assert session.state.current_player.current_hp == 240
    assert session.round_counter == 3


def test_rejected_actions_return_false():
    player, foes = titan_vs_minnows()
    session = BattleSession(player, foes, DummyRng())
    assert not session.attack("normal")
    assert not session.keep()
    assert not session.choose(5)
    assert len(session.history) == 1
    assert session.choose(0)
    assert not session.choose(0)


def test_seeded_battles_are_reproducible():
    def play(seed):
        player = [mon(i, f"p{i}", hp=80 + i, atk=40 + i, spd=30 + i, types=("fire",)) for i in range(1, 4)]
        foes = [mon(i, f"o{i}", hp=90, atk=45, spd=40, types=("water", "grass")) for i in range(4, 7)]
        session = BattleSession(player, foes, random.Random(seed))
        return session.run_auto(), session.log
    assert play(42) == play(42)
    result, log = play(42)
    assert result in ("win", "lose")


class FakeCatalog:
    def fetch(self, pokemon_id):
        return {"id": pokemon_id, "name": f"mon{pokemon_id}",
                "stats": [{"base_stat": 60, "stat": {"name": "hp"}}],
                "types": [{"type": {"name": "water"}}]}


def test_from_catalog_builds_both_teams():
    session = BattleSession.from_catalog(FakeCatalog(), [7, 8], DummyRng())
    assert [c.name for c in session.state.player_roster] == ["mon7", "mon8"]
    assert [c.id for c in session.state.opponent_roster] == [1] * 6
    assert session.state.phase == "player-selection"
