"""
Discord wiring — slash command definitions and the bot client.

Slash commands are defined per Command member and handed to dispatch();
registration with Discord's application command registry happens once in
``setup_hook`` (global sync).
"""

import logging
from typing import Optional

import discord
from discord import app_commands
from discord.ext import commands

from codevault.exceptions import ConfigError

from .handlers import check_handlers, dispatch
from .models import BotContext, Command, EncodeRequest, FilesRequest, SaveRequest

__all__ = ["build_app_commands", "CodeVaultBot", "run_bot"]

logger = logging.getLogger(__name__)


def build_app_commands(ctx: BotContext) -> dict[Command, app_commands.Command]:
    """
    Return one app command per Command member, bound to *ctx*.

    Raises:
        RuntimeError: a Command member has no handler or no slash command.
    """
    check_handlers()

    @app_commands.command(name=Command.SAVE.value, description="Save a base64 code")
    @app_commands.describe(name="Name to save the code under", code="Base64 code to save")
    async def save(interaction: discord.Interaction, name: str, code: str) -> None:
        await dispatch(ctx, interaction, SaveRequest(name=name, code=code))

    @app_commands.command(name=Command.FILES.value, description="List a user's saved codes")
    @app_commands.describe(
        user="User whose codes you want to see",
        name="Name of a specific code to receive by direct message",
    )
    async def files(
        interaction: discord.Interaction,
        user: discord.User,
        name: Optional[str] = None,
    ) -> None:
        await dispatch(ctx, interaction, FilesRequest(user=user, name=name))

    @app_commands.command(name=Command.ENCODE.value, description="Convert text to base64")
    @app_commands.describe(text="Text to convert to base64")
    async def encode(interaction: discord.Interaction, text: str) -> None:
        await dispatch(ctx, interaction, EncodeRequest(text=text))

    built = {
        Command.SAVE:   save,
        Command.FILES:  files,
        Command.ENCODE: encode,
    }
    missing = [cmd.value for cmd in Command if cmd not in built]
    if missing:
        raise RuntimeError(f"No slash command defined for: {', '.join(missing)}")
    return built


class CodeVaultBot(commands.Bot):
    """Bot client carrying the BotContext shared by all commands."""

    def __init__(self, ctx: BotContext) -> None:
        super().__init__(
            command_prefix="!",
            intents=discord.Intents.default(),
            application_id=ctx.config.application_id,
        )
        self.ctx = ctx

    async def setup_hook(self) -> None:
        for command in build_app_commands(self.ctx).values():
            self.tree.add_command(command)

        logger.info("Registering slash commands...")
        try:
            synced = await self.tree.sync()
        except discord.HTTPException:
            logger.exception("Slash command registration failed")
            return
        logger.info("Registered %d slash commands", len(synced))

    async def on_ready(self) -> None:
        logger.info("Bot connected as %s", self.user)


def run_bot(ctx: BotContext) -> None:
    """
    Start the bot and block until it disconnects.

    Raises:
        ConfigError: DISCORD_TOKEN is missing or Discord rejected it.
    """
    bot = CodeVaultBot(ctx)
    # logging is configured by the CLI; keep discord.py from adding a handler
    try:
        bot.run(ctx.config.require_token(), log_handler=None)
    except discord.LoginFailure as exc:
        raise ConfigError(f"Discord rejected DISCORD_TOKEN: {exc}") from exc
