"""
Parsing and structural query execution behind a narrow interface.

The chunk extractor only needs two capabilities: turn content into a syntax
tree, and run a structural query over that tree yielding matches whose
captures expose an index, a byte range and the captured text.
:class:`TreeSitterEngine` provides both on top of py-tree-sitter; tests and
alternative engines can supply any object satisfying :class:`SyntaxEngine`.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Iterator, Optional, Protocol, Tuple

from tree_sitter import Node, Parser  # type: ignore[import]

from ..ranges import ByteRange
from ..languages.descriptor import CompiledQuery, Grammar


@dataclass(frozen=True)
class Capture:
    index: int
    byte_range: ByteRange
    text: str


@dataclass(frozen=True)
class MatchResult:
    pattern_index: int
    captures: Tuple[Capture, ...]


class SyntaxEngine(Protocol):
    def parse(self, content: bytes, grammar: Grammar) -> Any:
        ...

    def matches(self, query: CompiledQuery, tree: Any, content: bytes) -> Iterator[MatchResult]:
        ...


class TreeSitterEngine:
    """
    Reusable tree-sitter parser and query runner.

    The parser handle is mutated by every call (active grammar, new parse) but
    keeps no information between calls. Not safe for concurrent use; create
    one engine per worker.
    """

    def __init__(self) -> None:
        self.parser = Parser()
        self._active_language: Optional[Any] = None

    def parse(self, content: bytes, grammar: Grammar) -> Any:
        ts_language = grammar.ts_language
        if ts_language is not self._active_language:
            self.parser.set_language(ts_language)
            self._active_language = ts_language
        return self.parser.parse(content)

    def matches(self, query: CompiledQuery, tree: Any, content: bytes) -> Iterator[MatchResult]:
        """
        Lazily yield matches of ``query`` over the tree root.

        py-tree-sitter groups captures by name; nodes sharing a capture name
        keep their relative order, which is all the classification relies on.
        """
        for pattern_index, captured in query.handle.matches(tree.root_node):
            captures = []
            for capture_name, nodes in captured.items():
                index = query.capture_index(capture_name)
                if index is None:
                    continue
                for node in _as_nodes(nodes):
                    captures.append(_to_capture(index, node, content))
            yield MatchResult(pattern_index=pattern_index, captures=tuple(captures))


def _as_nodes(nodes: Any) -> Iterable[Node]:
    if isinstance(nodes, (list, tuple)):
        return nodes
    return (nodes,)


def _to_capture(index: int, node: Node, content: bytes) -> Capture:
    byte_range = ByteRange(node.start_byte, node.end_byte)
    text = byte_range.slice(content).decode("utf-8", errors="replace")
    return Capture(index=index, byte_range=byte_range, text=text)


__all__ = ["Capture", "MatchResult", "SyntaxEngine", "TreeSitterEngine"]
