"""
Session decoder for GBF irep containers.

Public API:
- `decode_irep`, `decode_irep_file`, `decode_irep_dict`
- `Decoder`, `ReferenceCache`, `DecodedIrep`, `DecodeStats`
- `DecodeSummary`, `summarize_irep`
- tag constants used by tests and tooling.
"""

from __future__ import annotations

from .api import (  # noqa: F401
    NODE_TERMINATOR,
    TAG_CHILD,
    TAG_COMMENT,
    TAG_NAMED,
    UNRESOLVED,
    DecodedIrep,
    Decoder,
    DecodeStats,
    DecodeSummary,
    ReferenceCache,
    decode_irep,
    decode_irep_dict,
    decode_irep_file,
    summarize_irep,
)

__all__ = [
    "Decoder",
    "ReferenceCache",
    "DecodedIrep",
    "DecodeStats",
    "DecodeSummary",
    "decode_irep",
    "decode_irep_file",
    "decode_irep_dict",
    "summarize_irep",
    "TAG_CHILD",
    "TAG_NAMED",
    "TAG_COMMENT",
    "NODE_TERMINATOR",
    "UNRESOLVED",
]
