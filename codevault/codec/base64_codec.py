"""
Base64 conversion between user text and stored payloads.

Decoding is lenient:

  1. URL-safe ``-`` / ``_`` are read as ``+`` / ``/``
  2. any character outside the base64 alphabet is dropped
  3. a dangling single character (cannot carry a full byte) is ignored
  4. missing ``=`` padding is restored
  5. decoded bytes are read as UTF-8, invalid sequences become U+FFFD

``is_valid_base64`` uses the same lenient decoder and then re-encodes: only
input that survives the round trip unchanged is canonical base64.
"""

import base64
import binascii
import logging
import re

__all__ = ["encode", "decode", "is_valid_base64"]

logger = logging.getLogger(__name__)

_NON_ALPHABET_RE = re.compile(r"[^A-Za-z0-9+/]")
_URLSAFE_TABLE = str.maketrans("-_", "+/")


def _decode_bytes(payload: str) -> bytes:
    cleaned = _NON_ALPHABET_RE.sub("", payload.translate(_URLSAFE_TABLE))
    if len(cleaned) % 4 == 1:
        cleaned = cleaned[:-1]
    cleaned += "=" * (-len(cleaned) % 4)
    return base64.b64decode(cleaned)


def encode(text: str) -> str:
    """Return the standard base64 encoding of *text*'s UTF-8 bytes."""
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


def decode(payload: str) -> str:
    """Decode *payload* to text, best effort (see module docstring)."""
    return _decode_bytes(payload).decode("utf-8", errors="replace")


def is_valid_base64(value: str) -> bool:
    """
    Return True if *value* is already in canonical base64 form.

    Never raises; anything that cannot be checked counts as invalid.
    """
    try:
        return base64.b64encode(_decode_bytes(value)).decode("ascii") == value
    except (binascii.Error, ValueError, TypeError, AttributeError):
        logger.debug("base64 check failed for %r", value, exc_info=True)
        return False
