"""
Checked byte cursor for GBF containers.

Public API:
- `ByteCursor`
- wire constants shared with the decoder (`WORD_BYTES`, `ESCAPE_BYTE`).
"""

from __future__ import annotations

from .api import (  # noqa: F401
    ESCAPE_BYTE,
    STRING_TERMINATOR,
    WORD_BYTES,
    ByteCursor,
)

__all__ = [
    "ByteCursor",
    "WORD_BYTES",
    "ESCAPE_BYTE",
    "STRING_TERMINATOR",
]
