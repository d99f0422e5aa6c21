"""
Container ingestion helpers: blob loading and the header contract.

This module owns the *header contract* for GBF containers:
- bytes 0-2 hold the ASCII magic `GBF`;
- bytes 3-6 hold a big-endian u32 version, and only version 1 is read;
- the root node encoding starts at byte 7.

It also owns the file boundary. The decoder never streams: a container is
read fully into memory and labelled with a `source` string that later shows
up in CLI diagnostics.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Union

from ..cursor import ByteCursor
from ..errors import BlobLoadError, HeaderMismatchError, UnsupportedVersionError

MAGIC = b"GBF"
SUPPORTED_VERSION = 1
# magic + version word; the root node starts here.
HEADER_BYTES = len(MAGIC) + 4

Pathish = Union[str, Path]


@dataclass
class IrepBlob:
    """Container bytes with a human-friendly source label (for logs/errors)."""

    bytes: bytes
    source: str


@dataclass(frozen=True)
class Header:
    """Accepted container header."""

    magic: bytes
    version: int
    length: int = HEADER_BYTES


def load_blob(path: Pathish) -> IrepBlob:
    """Read a whole container file into memory."""
    p = Path(path)
    try:
        data = p.read_bytes()
    except OSError as exc:
        raise BlobLoadError(f"could not read container {p}: {exc.strerror or exc}") from exc
    return IrepBlob(bytes=data, source=str(p))


def parse_header(cursor: ByteCursor) -> Header:
    """
    Validate magic and version at the cursor and advance past them.

    A buffer too short to hold the magic is reported as a header mismatch
    carrying whatever prefix was present. A truncated version word surfaces as
    `TruncatedInputError` from the cursor.
    """
    if cursor.remaining < len(MAGIC):
        found = cursor.read_bytes(cursor.remaining)
        raise HeaderMismatchError(found, MAGIC)
    magic = cursor.read_bytes(len(MAGIC))
    if magic != MAGIC:
        raise HeaderMismatchError(magic, MAGIC)
    version = cursor.read_word()
    if version != SUPPORTED_VERSION:
        raise UnsupportedVersionError(version, SUPPORTED_VERSION)
    return Header(magic=magic, version=version)
