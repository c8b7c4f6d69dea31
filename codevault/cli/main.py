"""
CLI entry point for codevault.

Usage
─────
  # Start the Discord bot (reads DISCORD_TOKEN / CLIENT_ID / MONGODB_URI)
  codevault run

  # List the codes a Discord user has saved
  codevault list --owner 123456789012345678

  # Print one saved code, decoded
  codevault show --owner 123456789012345678 --name greeting

  # Encode text locally
  codevault encode "hello"

Subcommands are implemented as standalone functions (cmd_run, cmd_list,
cmd_show, cmd_encode) so they can be unit-tested without invoking argparse.
"""

import argparse
import logging
import sys
from typing import Optional

from codevault.codec import decode, encode
from codevault.config import BotConfig
from codevault.exceptions import ConfigError, StoreConnectionError
from codevault.store.db import CodeStore

__all__ = ["build_parser", "cmd_run", "cmd_list", "cmd_show", "cmd_encode", "main"]

logger = logging.getLogger(__name__)


# ── Argument parser ────────────────────────────────────────────────────────────


def build_parser() -> argparse.ArgumentParser:
    """
    Build and return the top-level argument parser.

    Subcommands: run | list | show | encode
    """
    parser = argparse.ArgumentParser(
        prog="codevault",
        description="Discord bot storing base64 codes per user",
    )
    parser.add_argument(
        "--env-file",
        default=None,
        dest="env_file",
        metavar="PATH",
        help="Load settings from this .env file (default: search for .env)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="Enable verbose debug logging",
    )

    sub = parser.add_subparsers(dest="subcommand")

    # ── run ───────────────────────────────────────────────────────────────
    sub.add_parser("run", help="Connect to MongoDB and start the bot")

    # ── list ──────────────────────────────────────────────────────────────
    lst = sub.add_parser("list", help="List the codes saved by a user")
    lst.add_argument(
        "--owner",
        required=True,
        metavar="USER_ID",
        help="Discord user id of the owner",
    )

    # ── show ──────────────────────────────────────────────────────────────
    show = sub.add_parser("show", help="Print one saved code, decoded")
    show.add_argument("--owner", required=True, metavar="USER_ID",
                      help="Discord user id of the owner")
    show.add_argument("--name", required=True, metavar="NAME",
                      help="Name the code was saved under")
    show.add_argument(
        "--raw",
        action="store_true",
        default=False,
        help="Print the stored base64 instead of the decoded text",
    )

    # ── encode ────────────────────────────────────────────────────────────
    enc = sub.add_parser("encode", help="Print TEXT encoded as base64")
    enc.add_argument("text", metavar="TEXT", help="Text to encode")

    return parser


# ── Command implementations ───────────────────────────────────────────────────


def cmd_run(config: BotConfig) -> None:
    """
    Connect to MongoDB, then run the bot until it disconnects.

    Raises:
        ConfigError:          DISCORD_TOKEN is missing or rejected by Discord.
        StoreConnectionError: MongoDB is unreachable.
    """
    from codevault.bot import BotContext, run_bot

    config.require_token()
    store = CodeStore.connect(config.mongodb_uri, config.database, config.collection)
    logger.info("Starting bot with %r", config)
    run_bot(BotContext(store=store, config=config))


def cmd_list(store: CodeStore, owner: str) -> None:
    """Print the codes saved by *owner* to stdout."""
    codes = store.list_codes(owner)
    if not codes:
        print(f"0 codes saved by {owner}.")
        return
    for code in codes:
        print(f"{code.name:<30} {code.created_on()}")


def cmd_show(store: CodeStore, owner: str, name: str, raw: bool = False) -> bool:
    """Print one saved code; returns False if it does not exist."""
    record = store.get_record(owner, name)
    if record is None:
        print(f"No code named '{name}' for {owner}.", file=sys.stderr)
        return False
    print(record.payload if raw else decode(record.payload))
    return True


def cmd_encode(text: str) -> str:
    """Print and return the base64 form of *text*."""
    encoded = encode(text)
    print(encoded)
    return encoded


# ── Entry point ───────────────────────────────────────────────────────────────


def main(argv: Optional[list[str]] = None) -> int:
    """Main CLI entry point. Returns exit code."""
    parser = build_parser()
    ns = parser.parse_args(argv)

    level = logging.DEBUG if ns.debug else logging.INFO
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")

    if ns.subcommand is None:
        parser.print_help()
        return 0

    if ns.subcommand == "encode":
        cmd_encode(ns.text)
        return 0

    try:
        config = BotConfig.from_env(ns.env_file)
    except ConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    if not ns.debug:
        logging.getLogger().setLevel(config.log_level)

    try:
        if ns.subcommand == "run":
            cmd_run(config)
            return 0

        store = CodeStore.connect(config.mongodb_uri, config.database, config.collection)
        if ns.subcommand == "list":
            cmd_list(store=store, owner=ns.owner)
            return 0
        if ns.subcommand == "show":
            return 0 if cmd_show(store=store, owner=ns.owner, name=ns.name, raw=ns.raw) else 1
    except (ConfigError, StoreConnectionError) as exc:
        logger.debug("%s failed", ns.subcommand, exc_info=True)
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    parser.print_help()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
