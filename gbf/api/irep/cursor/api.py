"""
Positional byte reader for GBF containers.

`ByteCursor` walks a fully resident buffer strictly left to right. Every read
is bounds-checked and raises `TruncatedInputError` instead of indexing past
the end, so a malformed container surfaces as an ordinary exception.

Wire conventions handled here:
- words are 4-byte *big-endian* unsigned integers;
- strings are NUL-terminated, with `\\` escaping the next byte literally
  (this is how the producer embeds NUL and backslash in payloads);
- string payloads are decoded as UTF-8 with replacement characters, since
  the producer does not guarantee well-formed UTF-8.
"""

from __future__ import annotations

from ..errors import TruncatedInputError

WORD_BYTES = 4
STRING_TERMINATOR = 0x00
ESCAPE_BYTE = 0x5C


class ByteCursor:
    """Checked, forward-only reader over an in-memory byte buffer."""

    __slots__ = ("_data", "_pos")

    def __init__(self, data: bytes | bytearray | memoryview) -> None:
        self._data = bytes(data)
        self._pos = 0

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"ByteCursor(position={self._pos}, length={len(self._data)})"

    @property
    def position(self) -> int:
        return self._pos

    @property
    def remaining(self) -> int:
        return len(self._data) - self._pos

    @property
    def at_end(self) -> bool:
        return self._pos >= len(self._data)

    def _require(self, count: int) -> None:
        available = self.remaining
        if available < count:
            raise TruncatedInputError(self._pos, count, max(available, 0))

    def peek(self) -> int:
        """Return the current byte without advancing."""
        self._require(1)
        return self._data[self._pos]

    def get(self) -> int:
        """Return the current byte and advance by one."""
        self._require(1)
        value = self._data[self._pos]
        self._pos += 1
        return value

    def read_bytes(self, count: int) -> bytes:
        """Return exactly `count` bytes and advance past them."""
        self._require(count)
        start = self._pos
        self._pos += count
        return self._data[start : self._pos]

    def read_word(self) -> int:
        """Read a 4-byte big-endian unsigned word."""
        return int.from_bytes(self.read_bytes(WORD_BYTES), "big")

    def read_escaped_string(self) -> str:
        """
        Read an escaped, NUL-terminated string.

        The terminator is consumed but not returned. A backslash copies the
        following byte verbatim, even when that byte is NUL or another
        backslash. Running out of bytes before the terminator (or right after
        an escape) raises `TruncatedInputError`.
        """
        data = self._data
        end = len(data)
        pos = self._pos
        out = bytearray()
        while True:
            if pos >= end:
                self._pos = pos
                raise TruncatedInputError(pos, 1, 0)
            byte = data[pos]
            pos += 1
            if byte == STRING_TERMINATOR:
                break
            if byte == ESCAPE_BYTE:
                if pos >= end:
                    self._pos = pos
                    raise TruncatedInputError(pos, 1, 0)
                out.append(data[pos])
                pos += 1
                continue
            out.append(byte)
        self._pos = pos
        return out.decode("utf-8", errors="replace")
