"""
Unit tests for codevault/cli/

Coverage plan
─────────────
arg parsing   → 4 tests  (run / list / show / encode subcommands)
commands      → 5 tests  (encode, list empty / populated, show decoded / raw / missing)
main()        → 6 tests  (encode, no subcommand, missing config,
                          missing token, rejected token,
                          unreachable database)
─────────────────────────────────────────────────────────────────
Total         = 15 tests
"""

from unittest.mock import MagicMock

import discord
import mongomock
import pytest

from codevault.exceptions import StoreConnectionError


# ─────────────────────────────────────────────────────────────────────────────
# Helpers
# ─────────────────────────────────────────────────────────────────────────────

def _parse(args: list[str]):
    """Call the CLI argument parser and return the parsed namespace."""
    from codevault.cli.main import build_parser
    return build_parser().parse_args(args)


@pytest.fixture
def store():
    """Fresh CodeStore over an in-memory collection."""
    from codevault.store.db import CodeStore
    return CodeStore(mongomock.MongoClient().codevault.codes)


@pytest.fixture
def env(monkeypatch):
    """No codevault variables and no .env loading."""
    for var in ("DISCORD_TOKEN", "CLIENT_ID", "MONGODB_URI", "CODEVAULT_LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setattr("codevault.config.load_dotenv", lambda *a, **k: False)
    return monkeypatch


# ─────────────────────────────────────────────────────────────────────────────
# 1. Argument parsing
# ─────────────────────────────────────────────────────────────────────────────

class TestArgParsing:

    def test_run_subcommand(self):
        ns = _parse(["run"])
        assert ns.subcommand == "run"
        assert ns.env_file is None

    def test_list_requires_owner(self):
        ns = _parse(["list", "--owner", "42"])
        assert ns.owner == "42"
        with pytest.raises(SystemExit):
            _parse(["list"])

    def test_show_parses_owner_name_and_raw(self):
        ns = _parse(["show", "--owner", "42", "--name", "greeting", "--raw"])
        assert (ns.owner, ns.name, ns.raw) == ("42", "greeting", True)

    def test_encode_takes_positional_text(self):
        ns = _parse(["--debug", "encode", "hello world"])
        assert ns.debug is True
        assert ns.text == "hello world"


# ─────────────────────────────────────────────────────────────────────────────
# 2. Command functions
# ─────────────────────────────────────────────────────────────────────────────

class TestCommands:

    def test_cmd_encode_prints_base64(self, capsys):
        from codevault.cli.main import cmd_encode
        assert cmd_encode("hello") == "aGVsbG8="
        assert capsys.readouterr().out.strip() == "aGVsbG8="

    def test_cmd_list_empty_store(self, store, capsys):
        from codevault.cli.main import cmd_list
        cmd_list(store=store, owner="42")
        assert "0 codes" in capsys.readouterr().out

    def test_cmd_list_prints_names(self, store, capsys):
        from codevault.cli.main import cmd_list
        store.save("42", "alice", "greeting", "aGVsbG8=")
        cmd_list(store=store, owner="42")
        assert "greeting" in capsys.readouterr().out

    def test_cmd_show_decodes_unless_raw(self, store, capsys):
        from codevault.cli.main import cmd_show
        store.save("42", "alice", "greeting", "aGVsbG8=")
        assert cmd_show(store=store, owner="42", name="greeting") is True
        assert capsys.readouterr().out.strip() == "hello"
        cmd_show(store=store, owner="42", name="greeting", raw=True)
        assert capsys.readouterr().out.strip() == "aGVsbG8="

    def test_cmd_show_missing_returns_false(self, store, capsys):
        from codevault.cli.main import cmd_show
        assert cmd_show(store=store, owner="42", name="nope") is False
        assert "nope" in capsys.readouterr().err


# ─────────────────────────────────────────────────────────────────────────────
# 3. main()
# ─────────────────────────────────────────────────────────────────────────────

class TestMain:

    def test_encode_needs_no_configuration(self, env, capsys):
        from codevault.cli.main import main
        assert main(["encode", "a"]) == 0
        assert "YQ==" in capsys.readouterr().out

    def test_no_subcommand_prints_help(self, capsys):
        from codevault.cli.main import main
        assert main([]) == 0
        assert "usage" in capsys.readouterr().out.lower()

    def test_missing_mongodb_uri_exits_1(self, env, capsys):
        from codevault.cli.main import main
        assert main(["run"]) == 1
        assert "MONGODB_URI" in capsys.readouterr().err

    def test_run_without_token_exits_1(self, env, capsys):
        from codevault.cli.main import main
        env.setenv("MONGODB_URI", "mongodb://db")
        connect = MagicMock()
        env.setattr("codevault.store.db.CodeStore.connect", connect)
        assert main(["run"]) == 1
        assert "DISCORD_TOKEN" in capsys.readouterr().err
        connect.assert_not_called()

    def test_unreachable_database_exits_1(self, env, capsys):
        from codevault.cli.main import main
        env.setenv("MONGODB_URI", "mongodb://db")
        env.setenv("DISCORD_TOKEN", "tok")
        env.setattr(
            "codevault.store.db.CodeStore.connect",
            MagicMock(side_effect=StoreConnectionError("Cannot connect to MongoDB")),
        )
        assert main(["run"]) == 1
        assert "Cannot connect" in capsys.readouterr().err

    def test_rejected_token_exits_1(self, env, capsys):
        from codevault.cli.main import main
        env.setenv("MONGODB_URI", "mongodb://db")
        env.setenv("DISCORD_TOKEN", "not-a-real-token")
        env.setattr("codevault.store.db.CodeStore.connect", MagicMock())
        env.setattr(
            "codevault.bot.client.CodeVaultBot.run",
            MagicMock(side_effect=discord.LoginFailure("Improper token has been passed.")),
        )
        assert main(["run"]) == 1
        assert "rejected DISCORD_TOKEN" in capsys.readouterr().err
