"""Data models for the bot module."""

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Optional, Union

import discord

from codevault.config import BotConfig
from codevault.store.db import CodeStore

__all__ = [
    "Command",
    "SaveRequest",
    "FilesRequest",
    "EncodeRequest",
    "CommandRequest",
    "BotContext",
]


class Command(str, Enum):
    """Slash commands exposed by the bot. Values are the registered names."""
    SAVE   = "save"
    FILES  = "files"
    ENCODE = "encode"


# ── Parsed command invocations ────────────────────────────────────────────────

@dataclass(frozen=True)
class SaveRequest:
    """``/save name code`` — store *code* under *name* for the invoker."""
    command: ClassVar[Command] = Command.SAVE
    name: str
    code: str


@dataclass(frozen=True)
class FilesRequest:
    """``/files user [name]`` — list *user*'s codes or fetch one by name."""
    command: ClassVar[Command] = Command.FILES
    user: Union[discord.User, discord.Member]
    name: Optional[str] = None


@dataclass(frozen=True)
class EncodeRequest:
    """``/encode text`` — reply with *text* as base64."""
    command: ClassVar[Command] = Command.ENCODE
    text: str


CommandRequest = Union[SaveRequest, FilesRequest, EncodeRequest]


# ── Runtime context ───────────────────────────────────────────────────────────

@dataclass
class BotContext:
    """
    Everything a handler needs, built once at startup and passed explicitly.

    store  — CodeStore bound to the configured collection
    config — the BotConfig the process was started with
    """
    store:  CodeStore
    config: BotConfig
