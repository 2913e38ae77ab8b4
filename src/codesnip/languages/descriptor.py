"""
Language descriptors consumed by the chunk extractor.

A :class:`Language` names a display name and, optionally, a :class:`Grammar`.
Grammars that can be decomposed into chunks carry an :class:`EmbeddingConfig`
bundling the compiled structural query with the indices of its ``@item``,
``@name`` and optional ``@context`` captures.
"""
from __future__ import annotations

import enum
import re
from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Tuple

from ..logger import get_logger

log = get_logger(__name__)

ITEM_CAPTURE = "item"
NAME_CAPTURE = "name"
CONTEXT_CAPTURE = "context"

_CAPTURE_RE = re.compile(r"@([A-Za-z_][\w.\-]*)")
_COMMENT_RE = re.compile(r";[^\n]*")
_STRING_RE = re.compile(r'"(?:\\.|[^"\\])*"')


def capture_names_from_source(source: str) -> Tuple[str, ...]:
    """
    Return the capture names of a query in index order.

    Tree-sitter numbers captures in order of first appearance while parsing the
    query, so scanning the source (minus comments and string literals)
    reproduces the engine's numbering.
    """
    stripped = _COMMENT_RE.sub("", _STRING_RE.sub('""', source))
    names: list[str] = []
    for match in _CAPTURE_RE.finditer(stripped):
        name = match.group(1)
        if name not in names:
            names.append(name)
    return tuple(names)


@dataclass(frozen=True)
class CompiledQuery:
    """A compiled structural query together with its capture table."""

    source: str
    handle: Any
    capture_names: Tuple[str, ...]

    @classmethod
    def compile(cls, source: str, ts_language: Any) -> "CompiledQuery":
        try:
            handle = ts_language.query(source)
        except Exception as exc:
            raise RuntimeError(f"Invalid structural query: {exc}") from exc
        return cls(source=source, handle=handle, capture_names=capture_names_from_source(source))

    def capture_index(self, name: str) -> Optional[int]:
        try:
            return self.capture_names.index(name)
        except ValueError:
            return None


class CaptureKind(enum.Enum):
    ITEM = "item"
    NAME = "name"
    CONTEXT = "context"
    OTHER = "other"


@dataclass(frozen=True)
class EmbeddingConfig:
    """Structural query bundle used to decompose a file into chunks."""

    query: CompiledQuery
    item_capture_ix: int
    name_capture_ix: int
    context_capture_ix: Optional[int] = None

    @classmethod
    def from_query(cls, query: CompiledQuery) -> Optional["EmbeddingConfig"]:
        item_ix = query.capture_index(ITEM_CAPTURE)
        name_ix = query.capture_index(NAME_CAPTURE)
        if item_ix is None or name_ix is None:
            log.warning(
                "embedding_query_incomplete",
                captures=list(query.capture_names),
                has_item=item_ix is not None,
                has_name=name_ix is not None,
            )
            return None
        return cls(
            query=query,
            item_capture_ix=item_ix,
            name_capture_ix=name_ix,
            context_capture_ix=query.capture_index(CONTEXT_CAPTURE),
        )

    def classify(self, capture_index: int) -> CaptureKind:
        if capture_index == self.item_capture_ix:
            return CaptureKind.ITEM
        if capture_index == self.name_capture_ix:
            return CaptureKind.NAME
        if self.context_capture_ix is not None and capture_index == self.context_capture_ix:
            return CaptureKind.CONTEXT
        return CaptureKind.OTHER


@dataclass(eq=False)
class Grammar:
    """
    A tree-sitter grammar and its optional structural query.

    Both the compiled language and the embedding config are resolved lazily
    through the supplied loaders and cached on first access.
    """

    name: str
    loader: Callable[[], Any]
    embedding_loader: Optional[Callable[["Grammar"], Optional[EmbeddingConfig]]] = None
    _ts_language: Any = field(default=None, init=False, repr=False)
    _embedding_config: Optional[EmbeddingConfig] = field(default=None, init=False, repr=False)
    _embedding_resolved: bool = field(default=False, init=False, repr=False)

    @property
    def ts_language(self) -> Any:
        if self._ts_language is None:
            self._ts_language = self.loader()
        return self._ts_language

    @property
    def embedding_config(self) -> Optional[EmbeddingConfig]:
        if not self._embedding_resolved:
            if self.embedding_loader is not None:
                self._embedding_config = self.embedding_loader(self)
            self._embedding_resolved = True
        return self._embedding_config


@dataclass(frozen=True)
class Language:
    """Registry entry describing one language."""

    name: str
    grammar: Optional[Grammar] = None
    path_suffixes: Tuple[str, ...] = ()


__all__ = [
    "CaptureKind",
    "CompiledQuery",
    "EmbeddingConfig",
    "Grammar",
    "Language",
    "capture_names_from_source",
]
