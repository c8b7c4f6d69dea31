"""
store — MongoDB-backed persistence layer for saved base64 codes.

Public API
──────────
CodeRecord  — dataclass representing one saved code
CodeSummary — name + creation time, as returned by listings
CodeStore   — save / get / list interface keyed on (owner, name)
"""

from codevault.store.models import CodeRecord, CodeSummary
from codevault.store.db import CodeStore

__all__ = ["CodeRecord", "CodeSummary", "CodeStore"]
