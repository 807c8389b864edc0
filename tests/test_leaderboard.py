from datetime import datetime, timedelta, timezone

import pytest

from pokebattle.battle.engine import BattleSummary
from pokebattle.core.errors import ValidationError
from pokebattle.system.leaderboard import RECENT_LIMIT, Leaderboard, LeaderboardEntry

T0 = datetime(2024, 1, 1, tzinfo=timezone.utc)


def entry(eid, score, result="win", minutes=0, username="ash"):
    return LeaderboardEntry(
        id=eid, username=username, score=score, player_pokemon="pikachu",
        opponent_pokemon="onix", timestamp=(T0 + timedelta(minutes=minutes)).isoformat(),
        battle_result=result,
    )


def test_submit_returns_rank_by_score(tmp_path):
    board = Leaderboard(tmp_path / "lb.json")
    assert board.submit(entry("a", 300)) == 1
    assert board.submit(entry("b", 500)) == 1
    assert board.submit(entry("c", 100, result="lose")) == 3
    assert board.rank_of("a") == 2
    assert board.rank_of("missing") == 0
    assert [e.id for e in board.entries()] == ["b", "a", "c"]


def test_filters_and_stats(tmp_path):
    board = Leaderboard(tmp_path / "lb.json")
    board.submit(entry("old", 700, minutes=0))
    board.submit(entry("new", 10, result="lose", minutes=5))
    assert [e.id for e in board.entries("wins")] == ["old"]
    assert [e.id for e in board.entries("recent")] == ["new", "old"]
    stats = board.stats()
    assert (stats.total_battles, stats.wins, stats.best_score) == (2, 1, 700)


def test_recent_is_capped(tmp_path):
    board = Leaderboard(tmp_path / "lb.json")
    for i in range(RECENT_LIMIT + 5):
        board.submit(entry(str(i), i, minutes=i))
    recent = board.entries("recent")
    assert len(recent) == RECENT_LIMIT
    assert recent[0].id == str(RECENT_LIMIT + 4)


def test_submit_result_from_summary(tmp_path):
    board = Leaderboard(tmp_path / "lb.json")
    summary = BattleSummary("win", 380, "charmander", "bulbasaur")
    e = board.submit_result(summary, "  misty ", now=T0)
    assert e.username == "misty"
    assert e.score == 380
    assert e.timestamp == T0.isoformat()
    assert board.entries()[0] == e


def test_rejects_invalid_entries(tmp_path):
    board = Leaderboard(tmp_path / "lb.json")
    with pytest.raises(ValidationError):
        board.submit_result(BattleSummary("ongoing", 0, "a", "b"), "ash")
    with pytest.raises(ValidationError):
        board.submit(entry("x", 10, username=""))
    with pytest.raises(ValidationError):
        board.submit(entry("y", -5))
    assert board.entries() == []


def test_corrupt_file_reads_as_empty(tmp_path):
    path = tmp_path / "lb.json"
    path.write_text('{"oops": true}', encoding="utf-8")
    board = Leaderboard(path)
    assert board.entries() == []
    board.clear()
    assert not path.exists()
