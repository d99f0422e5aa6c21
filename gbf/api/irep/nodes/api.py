"""
Immutable irep node value.

A decoded container is a DAG: the wire format lets a later occurrence of a
node id point back at an already decoded node, so one `Node` object may have
several parents. Sharing is plain Python object sharing; nothing is copied.

Equality and hashing are *structural*: two nodes are equal when their
identifier, ordered children, named children and comments are recursively
equal, independent of wire ids or object identity.

How to read this module:
- identifiers and mapping keys are interned string ids; resolve them through
  the `StringInterner` that decoded the node.
- the structural hash is computed once at construction. Children always exist
  before their parents, so this costs O(direct children) per node even when
  the DAG has heavy sharing.
- equality walks both graphs on an explicit stack and remembers which object
  pairs it has already queued, so it is neither recursive nor path-exponential.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Tuple

_EMPTY: Mapping[int, "Node"] = MappingProxyType({})


@dataclass(frozen=True, eq=False, repr=False)
class Node:
    """One irep node: identifier plus ordered, named and comment children."""

    identifier: int
    children: Tuple["Node", ...] = ()
    named_children: Mapping[int, "Node"] = field(default_factory=lambda: _EMPTY)
    comments: Mapping[int, "Node"] = field(default_factory=lambda: _EMPTY)
    _hash: int = field(init=False, compare=False)

    def __post_init__(self) -> None:
        children = tuple(self.children)
        named = MappingProxyType(dict(self.named_children)) if self.named_children else _EMPTY
        comments = MappingProxyType(dict(self.comments)) if self.comments else _EMPTY
        object.__setattr__(self, "children", children)
        object.__setattr__(self, "named_children", named)
        object.__setattr__(self, "comments", comments)
        object.__setattr__(
            self,
            "_hash",
            hash((self.identifier, children, frozenset(named.items()), frozenset(comments.items()))),
        )

    @classmethod
    def leaf(cls, identifier: int) -> "Node":
        """Build a node with no children of any kind."""
        return cls(identifier)

    def __hash__(self) -> int:
        return self._hash

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, Node):
            return NotImplemented
        return _structurally_equal(self, other)

    def __repr__(self) -> str:
        # Summary only: a full repr of a shared DAG can be exponential.
        return (
            f"Node(identifier={self.identifier}, children={len(self.children)}, "
            f"named_children={len(self.named_children)}, comments={len(self.comments)})"
        )

    @property
    def is_leaf(self) -> bool:
        return not (self.children or self.named_children or self.comments)

    def named(self, key: int) -> Optional["Node"]:
        """Return the named child under interned key `key`, if present."""
        return self.named_children.get(key)

    def comment(self, key: int) -> Optional["Node"]:
        """Return the comment child under interned key `key`, if present."""
        return self.comments.get(key)

    def direct_children(self) -> Iterator["Node"]:
        """Yield ordered children, then named children, then comments."""
        yield from self.children
        yield from self.named_children.values()
        yield from self.comments.values()


def _structurally_equal(left: Node, right: Node) -> bool:
    """
    Compare two node graphs pair by pair on an explicit stack.

    Each `(left, right)` object pair is compared at most once per call, so
    separately built graphs with heavy sharing cost O(distinct pairs) rather
    than O(paths), and deep chains never touch the recursion limit.
    """
    seen: set[Tuple[int, int]] = set()
    stack: List[Tuple[Node, Node]] = [(left, right)]
    while stack:
        a, b = stack.pop()
        if a is b:
            continue
        key = (id(a), id(b))
        if key in seen:
            continue
        seen.add(key)
        if a._hash != b._hash or a.identifier != b.identifier:
            return False
        if len(a.children) != len(b.children):
            return False
        if a.named_children.keys() != b.named_children.keys():
            return False
        if a.comments.keys() != b.comments.keys():
            return False
        stack.extend(zip(a.children, b.children))
        stack.extend((a.named_children[k], b.named_children[k]) for k in a.named_children)
        stack.extend((a.comments[k], b.comments[k]) for k in a.comments)
    return True


def iter_unique_nodes(root: Node) -> Iterator[Node]:
    """
    Yield every distinct node object reachable from `root` exactly once.

    Distinct means distinct *objects*: a shared subtree is visited once, while
    two structurally equal but separately decoded subtrees are both visited.
    Iterative, so deep graphs do not hit the recursion limit.
    """
    seen: set[int] = set()
    stack: List[Node] = [root]
    while stack:
        node = stack.pop()
        key = id(node)
        if key in seen:
            continue
        seen.add(key)
        yield node
        stack.extend(reversed(list(node.direct_children())))


def graph_depth(root: Node) -> int:
    """
    Return the longest parent-to-child path length below `root`.

    A leaf root has depth 0. Shared nodes are measured once.
    """
    depths: Dict[int, int] = {}
    stack: List[Tuple[Node, bool]] = [(root, False)]
    while stack:
        node, expanded = stack.pop()
        key = id(node)
        if key in depths:
            continue
        kids = list(node.direct_children())
        if expanded or not kids:
            depths[key] = 1 + max((depths[id(k)] for k in kids), default=-1)
            continue
        stack.append((node, True))
        stack.extend((k, False) for k in kids if id(k) not in depths)
    return depths[id(root)]


def count_references(nodes: Iterable[Node]) -> int:
    """Count parent-to-child edges over `nodes` (shared children counted per edge)."""
    return sum(len(n.children) + len(n.named_children) + len(n.comments) for n in nodes)
