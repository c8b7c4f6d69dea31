"""
Unit tests for codevault/bot/client.py — slash command definitions.

No gateway connection is opened: app command objects are built directly and
Bot.run is replaced where run_bot is exercised.
"""

from unittest.mock import MagicMock

import discord
import pytest

from codevault.bot.client import CodeVaultBot, build_app_commands, run_bot
from codevault.bot.models import BotContext, Command
from codevault.config import BotConfig
from codevault.exceptions import ConfigError


@pytest.fixture
def ctx():
    return BotContext(
        store=MagicMock(),
        config=BotConfig(mongodb_uri="mongodb://test", token="t", application_id=1234),
    )


class TestBuildAppCommands:

    def test_one_command_per_member(self, ctx):
        built = build_app_commands(ctx)
        assert set(built) == set(Command)
        assert {cmd.name for cmd in built.values()} == {"save", "files", "encode"}

    def test_save_requires_name_and_code(self, ctx):
        params = {p.name: p.required for p in build_app_commands(ctx)[Command.SAVE].parameters}
        assert params == {"name": True, "code": True}

    def test_files_name_is_optional(self, ctx):
        params = {p.name: p.required for p in build_app_commands(ctx)[Command.FILES].parameters}
        assert params == {"user": True, "name": False}

    def test_encode_requires_text(self, ctx):
        params = {p.name: p.required for p in build_app_commands(ctx)[Command.ENCODE].parameters}
        assert params == {"text": True}

    def test_descriptions_are_set(self, ctx):
        for cmd in build_app_commands(ctx).values():
            assert cmd.description
            for param in cmd.parameters:
                assert param.description and param.description != "…"


class TestCodeVaultBot:

    def test_bot_keeps_context_and_application_id(self, ctx):
        bot = CodeVaultBot(ctx)
        assert bot.ctx is ctx
        assert bot.application_id == 1234


class TestRunBot:

    def test_rejected_token_raises_config_error(self, ctx, monkeypatch):
        monkeypatch.setattr(
            CodeVaultBot, "run",
            MagicMock(side_effect=discord.LoginFailure("Improper token has been passed.")),
        )
        with pytest.raises(ConfigError, match="DISCORD_TOKEN"):
            run_bot(ctx)

    def test_run_passes_token_without_discord_log_handler(self, ctx, monkeypatch):
        run = MagicMock()
        monkeypatch.setattr(CodeVaultBot, "run", run)
        run_bot(ctx)
        run.assert_called_once_with("t", log_handler=None)
