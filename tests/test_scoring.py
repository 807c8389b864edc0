from pokebattle.battle.engine import calculate_team_score
from pokebattle.battle.models import BattleState, Combatant, Finished


def mon(pid, hp=100, current=None):
    return Combatant(id=pid, name=f"mon{pid}", max_hp=hp, current_hp=hp if current is None else current,
                     attack=50, defense=50, speed=50, types=("normal",))


def finished(player_roster, defeated_opponent=(), defeated_player=()):
    return BattleState(
        player_roster=tuple(player_roster),
        opponent_roster=(),
        stage=Finished(),
        result="win",
        defeated_opponent=tuple(defeated_opponent),
        defeated_player=tuple(defeated_player),
    )


def test_flawless_six_on_six():
    state = finished([mon(i) for i in range(1, 7)], defeated_opponent=[f"foe{i}" for i in range(6)])
    assert calculate_team_score(state) == 200 + 300 + 180 + 100 - 0 == 780


def test_partial_hp_and_losses():
    roster = [mon(1, hp=100, current=50), mon(2, hp=100, current=0), mon(3, hp=200, current=200)]
    state = finished(roster, defeated_opponent=["x", "y"], defeated_player=["mon2"])
    # 200 + 100 + 60 + floor(100*250/400) - 20
    assert calculate_team_score(state) == 402


def test_score_never_negative():
    state = finished([mon(1, current=0)], defeated_player=[f"p{i}" for i in range(20)])
    assert calculate_team_score(state) == 0


def test_empty_roster_has_no_hp_bonus():
    assert calculate_team_score(finished([])) == 200
