"""
Decoder for GBF irep containers.

Decoding is one *session*: a `Decoder` owns a `ByteCursor` over the buffer and
a `ReferenceCache` (node cache + string-ref cache). The session validates the
header, decodes one root node, and hands back a `DecodedIrep` that keeps the
root, the interner and the header. The caches stay behind with the decoder.

Node encoding (all words are big-endian u32):

    id  string-ref  ('S' node)*  ('N' string-ref node)*  ('C' string-ref node)*  0x00

- If `id` was already decoded in this session, only the 4 id bytes are present
  and the cached node is reused. This is what makes the result a DAG.
- A string-ref is `sid` followed, on first occurrence only, by an escaped
  NUL-terminated string.
- The three tag groups are contiguous and appear in that order. A tag outside
  its group is not re-scanned; it lands on the terminator check instead.

How to read this module:
- `Decoder.decode_node` is a stack machine. Each `_Frame` is a node whose body
  is still being read; finishing a frame pops it and attaches the built node to
  its parent. Deep nesting therefore never touches the Python recursion limit.
- `max_depth` and `cancel` are the two knobs for untrusted input.
"""

from __future__ import annotations

import threading
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ..cursor import WORD_BYTES, ByteCursor
from ..errors import (
    DecodeCancelledError,
    DuplicateNodeIdError,
    NestingLimitError,
    UnterminatedNodeError,
)
from ..ingestion import Header, IrepBlob, load_blob, parse_header
from ..interner import StringInterner
from ..nodes import Node, count_references, graph_depth, iter_unique_nodes

TAG_CHILD = ord("S")
TAG_NAMED = ord("N")
TAG_COMMENT = ord("C")
NODE_TERMINATOR = 0x00

UNRESOLVED = "<NOT FOUND>"

_PHASE_CHILDREN = 0
_PHASE_NAMED = 1
_PHASE_COMMENTS = 2


class ReferenceCache:
    """
    Session-scoped back-reference tables.

    - `nodes`: node wire id -> decoded `Node`
    - `strings`: string wire id -> interned string id

    Wire ids are only meaningful inside one session; never share an instance
    between decoders.
    """

    __slots__ = ("nodes", "strings", "node_hits", "string_hits")

    def __init__(self) -> None:
        self.nodes: Dict[int, Node] = {}
        self.strings: Dict[int, int] = {}
        self.node_hits = 0
        self.string_hits = 0

    def node(self, wire_id: int) -> Optional[Node]:
        found = self.nodes.get(wire_id)
        if found is not None:
            self.node_hits += 1
        return found

    def store_node(self, wire_id: int, node: Node) -> None:
        if wire_id in self.nodes:
            raise DuplicateNodeIdError(wire_id)
        self.nodes[wire_id] = node

    def string(self, sid: int) -> Optional[int]:
        found = self.strings.get(sid)
        if found is not None:
            self.string_hits += 1
        return found

    def store_string(self, sid: int, interned: int) -> None:
        self.strings[sid] = interned


@dataclass
class _Frame:
    wire_id: int
    identifier: int
    phase: int = _PHASE_CHILDREN
    pending_key: Optional[int] = None
    children: List[Node] = field(default_factory=list)
    named: Dict[int, Node] = field(default_factory=dict)
    comments: Dict[int, Node] = field(default_factory=dict)

    def attach(self, node: Node) -> None:
        if self.phase == _PHASE_CHILDREN:
            self.children.append(node)
        elif self.phase == _PHASE_NAMED:
            self.named[self.pending_key] = node  # type: ignore[index]
        else:
            self.comments[self.pending_key] = node  # type: ignore[index]
        self.pending_key = None

    def build(self) -> Node:
        return Node(self.identifier, tuple(self.children), self.named, self.comments)


@dataclass(frozen=True)
class DecodeStats:
    """Counters collected from the session caches before they are dropped."""

    unique_nodes: int
    node_back_references: int
    string_refs: int
    string_back_references: int


@dataclass
class DecodedIrep:
    """
    Result of one decode session.

    `interner` resolves every identifier, field name and comment key found in
    the graph under `root`.
    """

    root: Node
    interner: StringInterner
    header: Header
    source: str
    stats: DecodeStats
    trailing_bytes: int = 0

    def text(self, interned_id: int) -> str:
        value = self.interner.resolve(interned_id)
        return UNRESOLVED if value is None else value

    def identifier_text(self, node: Node) -> str:
        return self.text(node.identifier)

    def named_child(self, node: Node, name: str) -> Optional[Node]:
        """Look up a named child by field-name text."""
        key = self.interner.get(name)
        return None if key is None else node.named(key)

    def comment_child(self, node: Node, name: str) -> Optional[Node]:
        """Look up a comment child by key text."""
        key = self.interner.get(name)
        return None if key is None else node.comment(key)


class Decoder:
    """
    One decode session over an in-memory buffer.

    Pass `interner` to keep ids stable across several sessions; otherwise each
    session gets its own. `max_depth` bounds how deep node bodies may nest
    (root is depth 0); `cancel` is checked before every node.
    """

    def __init__(
        self,
        data: bytes,
        *,
        interner: Optional[StringInterner] = None,
        max_depth: Optional[int] = None,
        cancel: Optional[threading.Event] = None,
        source: Optional[str] = None,
    ) -> None:
        if max_depth is not None and max_depth < 0:
            raise ValueError(f"max_depth must be >= 0 (got {max_depth})")
        self.cursor = ByteCursor(data)
        self.interner = interner if interner is not None else StringInterner()
        self.cache = ReferenceCache()
        self.max_depth = max_depth
        self.cancel = cancel
        self.source = source or "<memory>"
        self.header: Optional[Header] = None

    @classmethod
    def from_blob(cls, blob: IrepBlob, **kwargs: Any) -> "Decoder":
        kwargs.setdefault("source", blob.source)
        return cls(blob.bytes, **kwargs)

    def read_header(self) -> Header:
        """Validate magic + version; must run before any node decoding."""
        self.header = parse_header(self.cursor)
        return self.header

    def read_string_ref(self) -> int:
        """Decode one string-ref and return its interned id."""
        sid = self.cursor.read_word()
        cached = self.cache.string(sid)
        if cached is not None:
            return cached
        interned = self.interner.get_or_intern(self.cursor.read_escaped_string())
        self.cache.store_string(sid, interned)
        return interned

    def _open(self, stack: List[_Frame]) -> Optional[Node]:
        """
        Read a node id and either return its cached node or push a frame.

        Returns None when a new frame was pushed.
        """
        if self.cancel is not None and self.cancel.is_set():
            raise DecodeCancelledError(self.cursor.position)
        wire_id = self.cursor.read_word()
        cached = self.cache.node(wire_id)
        if cached is not None:
            return cached
        if self.max_depth is not None and len(stack) > self.max_depth:
            raise NestingLimitError(self.max_depth, self.cursor.position - WORD_BYTES)
        identifier = self.read_string_ref()
        stack.append(_Frame(wire_id, identifier))
        return None

    def decode_node(self) -> Node:
        """Decode one node (and everything below it) at the cursor."""
        cursor = self.cursor
        stack: List[_Frame] = []
        node = self._open(stack)
        if node is not None:
            return node
        while True:
            frame = stack[-1]
            if node is not None:
                frame.attach(node)
                node = None
            tag = cursor.peek()
            if frame.phase == _PHASE_CHILDREN:
                if tag == TAG_CHILD:
                    cursor.get()
                    node = self._open(stack)
                    continue
                frame.phase = _PHASE_NAMED
            if frame.phase == _PHASE_NAMED:
                if tag == TAG_NAMED:
                    cursor.get()
                    frame.pending_key = self.read_string_ref()
                    node = self._open(stack)
                    continue
                frame.phase = _PHASE_COMMENTS
            if tag == TAG_COMMENT:
                cursor.get()
                frame.pending_key = self.read_string_ref()
                node = self._open(stack)
                continue
            offset = cursor.position
            terminator = cursor.get()
            if terminator != NODE_TERMINATOR:
                raise UnterminatedNodeError(offset, terminator, frame.wire_id)
            stack.pop()
            node = frame.build()
            self.cache.store_node(frame.wire_id, node)
            if not stack:
                return node

    def stats(self) -> DecodeStats:
        return DecodeStats(
            unique_nodes=len(self.cache.nodes),
            node_back_references=self.cache.node_hits,
            string_refs=len(self.cache.strings),
            string_back_references=self.cache.string_hits,
        )

    def decode(self) -> DecodedIrep:
        """Run the whole session: header, then the root node."""
        header = self.read_header()
        root = self.decode_node()
        return DecodedIrep(
            root=root,
            interner=self.interner,
            header=header,
            source=self.source,
            stats=self.stats(),
            trailing_bytes=self.cursor.remaining,
        )


def decode_irep(data: bytes, **kwargs: Any) -> DecodedIrep:
    """Decode a GBF container held in memory."""
    return Decoder(data, **kwargs).decode()


def decode_irep_file(path: Union[str, Path], **kwargs: Any) -> DecodedIrep:
    """Load a GBF container from disk and decode it."""
    return Decoder.from_blob(load_blob(path), **kwargs).decode()


@dataclass
class DecodeSummary:
    """JSON-friendly structural counts for a decoded container."""

    source: str
    version: int
    root_identifier: str
    unique_nodes: int
    edges: int
    depth: int
    node_back_references: int
    distinct_strings: int
    string_refs: int
    string_back_references: int
    trailing_bytes: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def summarize_irep(decoded: DecodedIrep) -> DecodeSummary:
    """Compute structural counts over a decoded graph (no tree rendering)."""
    nodes = list(iter_unique_nodes(decoded.root))
    return DecodeSummary(
        source=decoded.source,
        version=decoded.header.version,
        root_identifier=decoded.identifier_text(decoded.root),
        unique_nodes=len(nodes),
        edges=count_references(nodes),
        depth=graph_depth(decoded.root),
        node_back_references=decoded.stats.node_back_references,
        distinct_strings=len(decoded.interner),
        string_refs=decoded.stats.string_refs,
        string_back_references=decoded.stats.string_back_references,
        trailing_bytes=decoded.trailing_bytes,
    )


def decode_irep_dict(data: bytes, **kwargs: Any) -> Dict[str, Any]:
    """Decode and return the structural summary as a plain dict."""
    return summarize_irep(decode_irep(data, **kwargs)).to_dict()
