"""
Error contract for the irep container decoder.

Every failure raised while loading or decoding a GBF container derives from
`IrepDecodeError`, so callers can catch one type and print a diagnostic.

Two families:
- `IrepFormatError`: the container is not one we read (bad magic, unsupported
  version). No node bytes have been touched when these are raised.
- Structural failures found mid-stream (truncated buffer, missing terminator,
  re-declared wire id). The partial session must be discarded.
"""

from __future__ import annotations

from typing import Optional


class IrepDecodeError(Exception):
    """Base error for GBF container decoding."""


class IrepFormatError(IrepDecodeError):
    """Raised when the container header is not accepted."""


class HeaderMismatchError(IrepFormatError):
    """Raised when the first three bytes are not the GBF magic."""

    def __init__(self, found: bytes, expected: bytes) -> None:
        self.found = bytes(found)
        self.expected = bytes(expected)
        super().__init__(f"invalid container header: expected {self.expected!r}, found {self.found!r}")


class UnsupportedVersionError(IrepFormatError):
    """Raised when the version word is not the supported one."""

    def __init__(self, version: int, supported: int) -> None:
        self.version = version
        self.supported = supported
        super().__init__(f"unsupported container version {version} (supported: {supported})")


class TruncatedInputError(IrepDecodeError):
    """Raised when a primitive read runs past the end of the buffer."""

    def __init__(self, offset: int, needed: int, available: int) -> None:
        self.offset = offset
        self.needed = needed
        self.available = available
        super().__init__(
            f"truncated input at offset {offset}: needed {needed} byte(s), {available} available"
        )


class UnterminatedNodeError(IrepDecodeError):
    """Raised when a node body does not end with a 0x00 terminator."""

    def __init__(self, offset: int, found: int, wire_id: Optional[int] = None) -> None:
        self.offset = offset
        self.found = found
        self.wire_id = wire_id
        where = f" (node wire id {wire_id})" if wire_id is not None else ""
        super().__init__(f"unterminated node at offset {offset}: found byte 0x{found:02x}{where}")


class DuplicateNodeIdError(IrepDecodeError):
    """Raised when a node wire id is cached twice in one session."""

    def __init__(self, wire_id: int) -> None:
        self.wire_id = wire_id
        super().__init__(f"node wire id {wire_id} was declared twice in one session")


class NestingLimitError(IrepDecodeError):
    """Raised when node nesting exceeds the configured depth bound."""

    def __init__(self, limit: int, offset: int) -> None:
        self.limit = limit
        self.offset = offset
        super().__init__(f"node nesting exceeds max depth {limit} at offset {offset}")


class DecodeCancelledError(IrepDecodeError):
    """Raised when the caller cancels a decode session."""

    def __init__(self, offset: int) -> None:
        self.offset = offset
        super().__init__(f"decode cancelled at offset {offset}")


class BlobLoadError(IrepDecodeError):
    """Raised when a container file cannot be read."""
