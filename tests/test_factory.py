import random

from pokebattle.battle.factory import (
    DEFAULT_STATS, MAX_CATALOG_ID, MIN_CATALOG_ID, base_stats, combatant_from_catalog,
    generate_opponent_team, load_roster_combatants, random_catalog_ids,
)


def doc(pid, name=None, stats=None, types=("fire",), sprite="https://img/1.png"):
    stats = stats if stats is not None else {"hp": 39, "attack": 52, "defense": 43, "special-attack": 60, "speed": 65}
    return {
        "id": pid,
        "name": name or f"mon{pid}",
        "stats": [{"base_stat": v, "stat": {"name": k}} for k, v in stats.items()],
        "types": [{"slot": i + 1, "type": {"name": t}} for i, t in enumerate(types)],
        "sprites": {"front_default": sprite},
    }


class FakeCatalog:
    def __init__(self):
        self.requested = []
    def fetch(self, pokemon_id):
        self.requested.append(pokemon_id)
        return doc(pokemon_id)


class FirstRng:
    def randint(self, a, b): return a


def test_conversion_maps_stats_and_types():
    c = combatant_from_catalog(doc(4, "charmander"))
    assert (c.id, c.name) == (4, "charmander")
    assert c.max_hp == c.current_hp == 39
    assert (c.attack, c.defense, c.speed) == (52, 43, 65)
    assert c.types == ("fire",)
    assert c.image == "https://img/1.png"


def test_conversion_defaults_for_sparse_documents():
    c = combatant_from_catalog({"id": 9, "name": "missingno"})
    assert c.max_hp == c.current_hp == DEFAULT_STATS["hp"]
    assert (c.attack, c.defense, c.speed) == (50, 50, 50)
    assert c.types == ("normal",)
    assert c.image is None


def test_zero_stats_fall_back_to_defaults():
    c = combatant_from_catalog(doc(1, stats={"hp": 0, "attack": 0, "defense": 10, "speed": 5}))
    assert c.max_hp == 100
    assert c.attack == 50
    assert c.defense == 10


def test_stat_names_are_normalized():
    stats = base_stats(doc(1))
    assert stats["special_attack"] == 60
    assert "special-attack" not in stats


def test_random_ids_stay_in_catalog_range():
    ids = random_catalog_ids(rng=random.Random(11))
    assert len(ids) == 6
    assert all(MIN_CATALOG_ID <= i <= MAX_CATALOG_ID for i in ids)
    assert random_catalog_ids(3, FirstRng()) == [1, 1, 1]


def test_roster_conversion_preserves_order():
    catalog = FakeCatalog()
    team = load_roster_combatants(catalog, [25, 1, 7])
    assert [c.id for c in team] == [25, 1, 7]
    assert catalog.requested == [25, 1, 7]


def test_opponent_team_draws_six_with_duplicates_allowed():
    catalog = FakeCatalog()
    team = generate_opponent_team(catalog, FirstRng())
    assert len(team) == 6
    assert catalog.requested == [1] * 6
    assert all(c.name == "mon1" for c in team)
