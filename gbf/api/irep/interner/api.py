"""
String interning for decoded irep identifiers.

Node identifiers, field names and comment keys are stored on nodes as small
integers. `StringInterner` is the only place those integers are issued and
resolved back to text.
"""

from __future__ import annotations

from typing import Dict, Iterator, List, Optional


class StringInterner:
    """
    Append-only, bidirectional string table.

    Ids are dense, start at 0, and are issued in first-seen order. Once issued
    an id never changes and is never reused.
    """

    __slots__ = ("_ids", "_strings")

    def __init__(self) -> None:
        self._ids: Dict[str, int] = {}
        self._strings: List[str] = []

    def __len__(self) -> int:
        return len(self._strings)

    def __contains__(self, value: object) -> bool:
        return value in self._ids

    def __iter__(self) -> Iterator[str]:
        return iter(self._strings)

    def __repr__(self) -> str:
        return f"StringInterner(strings={len(self._strings)})"

    def get_or_intern(self, value: str) -> int:
        """Return the id for `value`, issuing a new one on first sight."""
        existing = self._ids.get(value)
        if existing is not None:
            return existing
        index = len(self._strings)
        self._strings.append(value)
        self._ids[value] = index
        return index

    def get(self, value: str) -> Optional[int]:
        """Return the id for `value` without interning it."""
        return self._ids.get(value)

    def resolve(self, index: int) -> Optional[str]:
        """Return the string for `index`, or None if this interner never issued it."""
        if 0 <= index < len(self._strings):
            return self._strings[index]
        return None
