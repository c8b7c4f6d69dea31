"""
Project-wide custom exception hierarchy.
All modules raise subclasses of CodeVaultError — never bare Exception.
"""

__all__ = [
    "CodeVaultError",
    "ConfigError",
    "StoreError",
    "StoreConnectionError",
]


class CodeVaultError(Exception):
    """Root exception for all codevault errors."""


# ── Configuration ─────────────────────────────────────────────────────────────

class ConfigError(CodeVaultError):
    """Raised when a required setting is missing or malformed."""


# ── Store ─────────────────────────────────────────────────────────────────────

class StoreError(CodeVaultError):
    """Raised on MongoDB / store I/O errors."""


class StoreConnectionError(StoreError):
    """Raised when the database cannot be reached at startup."""
