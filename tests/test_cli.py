import io

import pytest

from rich.console import Console

import pokebattle.cli as cli
from pokebattle.cli import AppContext, run
from pokebattle.core.errors import CatalogError
from pokebattle.system.leaderboard import Leaderboard
from pokebattle.system.roster import RosterStore
from pokebattle.system.settings import Settings, SettingsData


class FakeCatalog:
    """Ids above the catalog range are overpowered; regular ids are feeble."""
    def fetch(self, pokemon_id):
        value = 255 if pokemon_id > 150 else 5
        stats = {"hp": value, "attack": value, "defense": value, "speed": value}
        return {"id": pokemon_id, "name": f"mon{pokemon_id}",
                "stats": [{"base_stat": v, "stat": {"name": k}} for k, v in stats.items()],
                "types": [{"type": {"name": "water"}}]}


class OfflineCatalog:
    def fetch(self, pokemon_id):
        raise CatalogError(pokemon_id, "offline")


def make_ctx(tmp_path, catalog=None):
    settings = Settings(SettingsData(trainer_name="Brock", turn_delay=0), tmp_path / "settings.json")
    return AppContext(
        settings,
        roster=RosterStore(tmp_path / "roster.json"),
        leaderboard=Leaderboard(tmp_path / "leaderboard.json"),
        catalog=catalog or FakeCatalog(),
        console=Console(file=io.StringIO(), width=140, color_system=None),
    )


def output(ctx):
    return ctx.console.file.getvalue()


def test_roster_commands(tmp_path):
    ctx = make_ctx(tmp_path)
    assert run(["roster", "show"], ctx) == 0
    assert "roster is empty" in output(ctx)
    assert run(["roster", "add", "25"], ctx) == 0
    assert run(["roster", "add", "25"], ctx) == 1
    assert run(["roster", "add", "151"], ctx) == 1
    assert run(["roster", "show"], ctx) == 0
    assert "#25" in output(ctx)
    assert run(["roster", "remove", "4"], ctx) == 1
    assert run(["roster", "remove", "25"], ctx) == 0
    assert run(["roster", "clear"], ctx) == 0
    assert ctx.roster.ids() == []


def test_simulate_requires_a_roster(tmp_path):
    ctx = make_ctx(tmp_path)
    assert run(["simulate", "--seed", "1"], ctx) == 1


def test_simulate_and_submit(tmp_path):
    ctx = make_ctx(tmp_path)
    for pid in (201, 202, 203):
        ctx.roster.add(pid)
    assert run(["simulate", "--seed", "3", "--submit"], ctx) == 0
    entries = ctx.leaderboard.entries()
    assert len(entries) == 1
    assert entries[0].username == "Brock"
    assert entries[0].score == 200 + 300 + 90 + 100
    assert "Recorded Brock" in output(ctx)
    assert run(["leaderboard", "--filter", "recent"], ctx) == 0
    assert "Battles: 1" in output(ctx)


def test_catalog_failure_exits_nonzero(tmp_path):
    ctx = make_ctx(tmp_path, OfflineCatalog())
    ctx.roster.add(1)
    assert run(["simulate"], ctx) == 2
    assert "Catalog lookup for #1 failed: offline" in output(ctx)


def test_console_entry_exits_with_command_status(monkeypatch):
    monkeypatch.setattr(cli, "run", lambda argv=None, ctx=None: 2)
    with pytest.raises(SystemExit) as exc:
        cli.main()
    assert exc.value.code == 2
