"""
Header contract and file loading for GBF containers.

Public API:
- `IrepBlob`, `Header`, `load_blob`, `parse_header`
- `MAGIC`, `SUPPORTED_VERSION`, `HEADER_BYTES`
"""

from __future__ import annotations

from .api import (  # noqa: F401
    HEADER_BYTES,
    MAGIC,
    SUPPORTED_VERSION,
    Header,
    IrepBlob,
    load_blob,
    parse_header,
)

__all__ = [
    "IrepBlob",
    "Header",
    "load_blob",
    "parse_header",
    "MAGIC",
    "SUPPORTED_VERSION",
    "HEADER_BYTES",
]
