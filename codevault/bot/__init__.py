"""Discord bot — slash commands for saving, listing and encoding base64 codes."""

from .client import CodeVaultBot, build_app_commands, run_bot
from .handlers import HANDLERS, dispatch, handle_encode, handle_files, handle_save
from .models import BotContext, Command, EncodeRequest, FilesRequest, SaveRequest

__all__ = [
    "CodeVaultBot",
    "build_app_commands",
    "run_bot",
    "HANDLERS",
    "dispatch",
    "handle_save",
    "handle_files",
    "handle_encode",
    "BotContext",
    "Command",
    "SaveRequest",
    "FilesRequest",
    "EncodeRequest",
]
