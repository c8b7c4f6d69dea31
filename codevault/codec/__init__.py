"""
codec — base64 helpers used by the bot commands.

Public API
──────────
encode          — text → base64
decode          — base64 → text (permissive)
is_valid_base64 — True iff a string is already canonical base64
"""

from codevault.codec.base64_codec import decode, encode, is_valid_base64

__all__ = ["encode", "decode", "is_valid_base64"]
