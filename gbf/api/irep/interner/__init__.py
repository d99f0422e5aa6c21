"""Canonical string interner for irep identifiers."""

from __future__ import annotations

from .api import StringInterner  # noqa: F401

__all__ = ["StringInterner"]
