"""
Irep node value type and graph walkers.

Public API:
- `Node` (immutable, structurally compared)
- `iter_unique_nodes`, `graph_depth`, `count_references`
"""

from __future__ import annotations

from .api import (  # noqa: F401
    Node,
    count_references,
    graph_depth,
    iter_unique_nodes,
)

__all__ = [
    "Node",
    "iter_unique_nodes",
    "graph_depth",
    "count_references",
]
