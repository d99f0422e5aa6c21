"""
Structural decoder for GBF irep containers.

A GBF container serializes one irep value (a tagged tree with ordered, named
and comment children) written by an external model checker. Shared subtrees
and repeated strings are written once and referenced by wire id afterwards,
so a decoded container is a DAG of immutable `Node` values whose identifiers
are ids in a `StringInterner`.

Scope / non-goals:
- Read-only. There is no encoder.
- Structural only: the wire encoding is checked, the meaning of the nodes is
  not.
- No partial results: truncated or corrupt input raises an `IrepDecodeError`
  subclass and the session is discarded.

Subpackages (functional groups):
- `cursor`: checked big-endian byte cursor and escaped-string reader.
- `interner`: the canonical string interner.
- `nodes`: the immutable node type and graph walkers.
- `ingestion`: header contract and file loading.
- `decoder`: session decoder, reference caches, structural summary.

Preferred imports:
- `from gbf.api.irep import decoder, ingestion, nodes`
- Keep top-level convenience imports to a minimum.
"""

from __future__ import annotations

# Submodules are the preferred import surface.
from . import errors as errors  # noqa: F401
from . import cursor as cursor  # noqa: F401
from . import interner as interner  # noqa: F401
from . import nodes as nodes  # noqa: F401
from . import ingestion as ingestion  # noqa: F401
from . import decoder as decoder  # noqa: F401
from . import cli as cli  # noqa: F401

# Small stable convenience surface (keep this list intentionally short).
from .cursor import ByteCursor  # noqa: F401
from .decoder import DecodedIrep, Decoder, decode_irep, decode_irep_file  # noqa: F401
from .errors import (  # noqa: F401
    HeaderMismatchError,
    IrepDecodeError,
    TruncatedInputError,
    UnsupportedVersionError,
    UnterminatedNodeError,
)
from .interner import StringInterner  # noqa: F401
from .nodes import Node  # noqa: F401

__all__ = [
    # modules
    "errors",
    "cursor",
    "interner",
    "nodes",
    "ingestion",
    "decoder",
    "cli",
    # core types
    "ByteCursor",
    "StringInterner",
    "Node",
    "Decoder",
    "DecodedIrep",
    "decode_irep",
    "decode_irep_file",
    # errors
    "IrepDecodeError",
    "HeaderMismatchError",
    "UnsupportedVersionError",
    "TruncatedInputError",
    "UnterminatedNodeError",
]
