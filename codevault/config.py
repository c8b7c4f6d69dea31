"""
Process configuration for the codevault bot.

Values come from the environment; a ``.env`` file in the working directory
(or any parent) is loaded first via python-dotenv, without overriding
variables that are already set.

Environment
───────────
  DISCORD_TOKEN          bot authentication token
  CLIENT_ID              Discord application id (optional, numeric)
  MONGODB_URI            MongoDB connection string (required)
  CODEVAULT_DATABASE     database name when the URI names none (default: codevault)
  CODEVAULT_COLLECTION   collection holding the codes (default: codes)
  CODEVAULT_LOG_LEVEL    logging level name (default: INFO)
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import find_dotenv, load_dotenv

from codevault.exceptions import ConfigError

__all__ = ["BotConfig"]


@dataclass
class BotConfig:
    """Runtime configuration shared by the bot and the console commands."""
    mongodb_uri:    str
    token:          str            = ""
    application_id: Optional[int]  = None
    database:       str            = "codevault"
    collection:     str            = "codes"
    log_level:      str            = "INFO"

    @classmethod
    def from_env(cls, dotenv_path: Optional[str] = None) -> "BotConfig":
        """
        Build a config from the environment.

        Raises:
            ConfigError: MONGODB_URI is unset, CLIENT_ID is not numeric or the
                         log level is unknown.
        """
        load_dotenv(dotenv_path or find_dotenv(usecwd=True))

        uri = os.getenv("MONGODB_URI", "").strip()
        if not uri:
            raise ConfigError("MONGODB_URI is not set")

        raw_app_id = os.getenv("CLIENT_ID", "").strip()
        try:
            application_id = int(raw_app_id) if raw_app_id else None
        except ValueError:
            raise ConfigError(f"CLIENT_ID must be numeric, got {raw_app_id!r}") from None

        log_level = os.getenv("CODEVAULT_LOG_LEVEL", "INFO").strip().upper()
        if not isinstance(logging.getLevelName(log_level), int):
            raise ConfigError(f"Unknown CODEVAULT_LOG_LEVEL {log_level!r}")

        return cls(
            mongodb_uri=uri,
            token=os.getenv("DISCORD_TOKEN", "").strip(),
            application_id=application_id,
            database=os.getenv("CODEVAULT_DATABASE", "codevault"),
            collection=os.getenv("CODEVAULT_COLLECTION", "codes"),
            log_level=log_level,
        )

    def require_token(self) -> str:
        """Return the bot token, raising ConfigError when it is empty."""
        if not self.token:
            raise ConfigError("DISCORD_TOKEN is not set")
        return self.token

    def __repr__(self) -> str:
        # never print the token
        return (
            f"BotConfig(database={self.database!r}, collection={self.collection!r}, "
            f"application_id={self.application_id}, token={'set' if self.token else 'unset'})"
        )
