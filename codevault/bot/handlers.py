"""
Command handlers — one coroutine per Command member.

Each handler answers a single interaction and keeps no state between calls.
Reply visibility:

  save   → always ephemeral (only the invoker sees it)
  files  → ephemeral for a single code (the decoded text goes to the invoker
           by DM); public for a listing
  encode → public

Text that does not fit in one Discord message is sent as a .txt attachment.

Store calls are blocking pymongo calls and run in a worker thread.
"""

from __future__ import annotations

import asyncio
import io
import logging
from typing import Awaitable, Callable, Optional

import discord

from codevault.codec import decode, encode, is_valid_base64

from .models import (
    BotContext,
    Command,
    CommandRequest,
    EncodeRequest,
    FilesRequest,
    SaveRequest,
)

__all__ = [
    "handle_save",
    "handle_files",
    "handle_encode",
    "HANDLERS",
    "check_handlers",
    "dispatch",
]

logger = logging.getLogger(__name__)

Handler = Callable[[BotContext, discord.Interaction, CommandRequest], Awaitable[None]]

# ── Reply texts ───────────────────────────────────────────────────────────────

MSG_INVALID_BASE64 = "❌ The provided code is not valid base64."
MSG_SAVED          = "✅ Code '{name}' saved successfully!"
MSG_SAVE_FAILED    = "❌ Error while saving the code."
MSG_NOT_FOUND      = "❌ No code named '{name}' found for {user}."
MSG_DM_BODY        = "📁 Requested code: {name}\n```\n{text}\n```"
MSG_DM_SENT        = "✅ Code '{name}' from {user} has been sent to you by direct message."
MSG_DM_FAILED      = "❌ Error while decoding or sending the direct message."
MSG_NO_CODES       = "{user} has no saved codes."
MSG_CODE_LIST      = "📋 Codes saved by {user}:\n{lines}"
MSG_CODE_LINE      = "- `{name}` (created on {date})"
MSG_ENCODED        = "🔒 Base64-encoded text:\n```\n{text}\n```"
MSG_ENCODED_FILE   = "🔒 Base64-encoded text (attached, too long for a message):"
MSG_CODE_LIST_FILE = "📋 Codes saved by {user} (attached, too long for a message):"
MSG_DM_BODY_FILE   = "📁 Requested code: {name} (attached, too long for a message)"
MSG_REPLY_FAILED   = "❌ Error while sending the reply."

# Discord rejects message content longer than this
MESSAGE_LIMIT = 2000


def _fit(message: str, header: str, body: str, filename: str) -> tuple[str, Optional[discord.File]]:
    """
    Return *message* unchanged when it fits in one Discord message, otherwise
    *header* plus *body* as a UTF-8 text attachment named *filename*.
    """
    if len(message) <= MESSAGE_LIMIT:
        return message, None
    attachment = discord.File(io.BytesIO(body.encode("utf-8")), filename=filename)
    return header, attachment


def _safe_filename(name: str) -> str:
    """Attachment name for a saved code, e.g. "my_script.txt"."""
    safe = "".join(c if c.isalnum() or c in "-_" else "_" for c in name)
    return f"{safe or 'code'}.txt"


async def _reply(
    interaction: discord.Interaction,
    content: str,
    *,
    private: bool,
    file: Optional[discord.File] = None,
) -> None:
    kwargs = {"ephemeral": private}
    if file is not None:
        kwargs["file"] = file
    try:
        await interaction.response.send_message(content, **kwargs)
    except discord.HTTPException:
        logger.exception("Reply to interaction %s from %s failed", interaction.id, interaction.user.id)
        if not interaction.response.is_done():
            await interaction.response.send_message(MSG_REPLY_FAILED, ephemeral=True)


# ── Handlers ──────────────────────────────────────────────────────────────────

async def handle_save(ctx: BotContext, interaction: discord.Interaction, request: SaveRequest) -> None:
    """Validate the payload, then upsert it under the invoking user."""
    user = interaction.user
    if not is_valid_base64(request.code):
        logger.info("Rejected non-base64 code %r from %s", request.name, user.id)
        await _reply(interaction, MSG_INVALID_BASE64, private=True)
        return

    ok = await asyncio.to_thread(
        ctx.store.save, str(user.id), user.name, request.name, request.code
    )
    if ok:
        await _reply(interaction, MSG_SAVED.format(name=request.name), private=True)
    else:
        await _reply(interaction, MSG_SAVE_FAILED, private=True)


async def handle_files(ctx: BotContext, interaction: discord.Interaction, request: FilesRequest) -> None:
    """
    Fetch one of *request.user*'s codes, or list all of them.

    A fetched code is decoded and sent to the *invoker* (not the owner) by
    direct message.
    """
    target = request.user
    owner_id = str(target.id)

    if request.name:
        payload = await asyncio.to_thread(ctx.store.get, owner_id, request.name)
        if not payload:
            await _reply(
                interaction,
                MSG_NOT_FOUND.format(name=request.name, user=target.name),
                private=True,
            )
            return

        try:
            text = decode(payload)
            content, attachment = _fit(
                MSG_DM_BODY.format(name=request.name, text=text),
                MSG_DM_BODY_FILE.format(name=request.name),
                text,
                _safe_filename(request.name),
            )
            if attachment is None:
                await interaction.user.send(content)
            else:
                await interaction.user.send(content, file=attachment)
        except (discord.DiscordException, ValueError):
            logger.exception(
                "Could not deliver code %r of %s to %s",
                request.name, owner_id, interaction.user.id,
            )
            await _reply(interaction, MSG_DM_FAILED, private=True)
            return

        await _reply(
            interaction,
            MSG_DM_SENT.format(name=request.name, user=target.name),
            private=True,
        )
        return

    codes = await asyncio.to_thread(ctx.store.list_codes, owner_id)
    if not codes:
        await _reply(interaction, MSG_NO_CODES.format(user=target.name), private=False)
        return

    lines = "\n".join(
        MSG_CODE_LINE.format(name=code.name, date=code.created_on()) for code in codes
    )
    content, attachment = _fit(
        MSG_CODE_LIST.format(user=target.name, lines=lines),
        MSG_CODE_LIST_FILE.format(user=target.name),
        lines,
        "codes.txt",
    )
    await _reply(interaction, content, private=False, file=attachment)


async def handle_encode(ctx: BotContext, interaction: discord.Interaction, request: EncodeRequest) -> None:
    """Reply publicly with the base64 form of the given text."""
    encoded = encode(request.text)
    content, attachment = _fit(
        MSG_ENCODED.format(text=encoded), MSG_ENCODED_FILE, encoded, "encoded.txt"
    )
    await _reply(interaction, content, private=False, file=attachment)


# ── Dispatch table ────────────────────────────────────────────────────────────

HANDLERS: dict[Command, Handler] = {
    Command.SAVE:   handle_save,
    Command.FILES:  handle_files,
    Command.ENCODE: handle_encode,
}


def check_handlers(table: dict[Command, Handler] = HANDLERS) -> None:
    """
    Raise RuntimeError unless *table* covers every Command member.

    Called once when the slash commands are registered.
    """
    missing = [cmd.value for cmd in Command if cmd not in table]
    if missing:
        raise RuntimeError(f"No handler registered for: {', '.join(missing)}")


async def dispatch(ctx: BotContext, interaction: discord.Interaction, request: CommandRequest) -> None:
    """Route *request* to the handler of its Command."""
    logger.debug("/%s from %s", request.command.value, interaction.user.id)
    await HANDLERS[request.command](ctx, interaction, request)
