"""
Structural chunk extraction for embedding.

A file is either wrapped whole (flat formats such as TOML or JSON) or
decomposed by the language's structural query: every match carrying an
``@item`` capture and at least one fresh ``@name`` capture becomes one chunk,
prefixed by any ``@context`` captures and wrapped in the code prompt template.
"""
from __future__ import annotations

from typing import FrozenSet, List, Optional

from ..errors import MissingGrammar, MissingQueryConfig, ParseFailure
from ..languages.descriptor import CaptureKind, EmbeddingConfig, Language
from ..logger import get_logger
from ..parsing.engine import MatchResult, SyntaxEngine, TreeSitterEngine
from ..ranges import ByteRange
from .models import Chunk
from .templates import PathLikeStr, render_code_context, render_entire_file

log = get_logger(__name__)

PARSEABLE_ENTIRE_FILE_TYPES: FrozenSet[str] = frozenset({"TOML", "YAML", "JSON", "CSS"})


class ChunkExtractor:
    """
    Turns one file's content into prompt-wrapped chunks.

    The extractor owns a reusable parsing engine; results depend only on the
    arguments of each call. Not safe for concurrent use, use one instance per
    worker.
    """

    def __init__(self, engine: Optional[SyntaxEngine] = None) -> None:
        self.engine: SyntaxEngine = engine if engine is not None else TreeSitterEngine()

    def _parse_entire_file(
        self, relative_path: PathLikeStr, language_name: str, content: str
    ) -> List[Chunk]:
        chunk = Chunk(
            name=language_name,
            range=ByteRange(0, len(content.encode("utf-8", errors="surrogatepass"))),
            content=render_entire_file(relative_path, language_name, content),
        )
        log.debug(
            "entire_file_chunk_created",
            file=str(relative_path),
            language=language_name,
            bytes=chunk.range.end,
        )
        return [chunk]

    def parse_file(
        self, relative_path: PathLikeStr, content: str, language: Language
    ) -> List[Chunk]:
        """
        Extract chunks from ``content``.

        Raises
        ------
        MissingGrammar
            The language has no grammar and is not a whole-file type.
        MissingQueryConfig
            The grammar has no structural query.
        ParseFailure
            No syntax tree could be built for the content.
        """
        if language.name in PARSEABLE_ENTIRE_FILE_TYPES:
            return self._parse_entire_file(relative_path, language.name, content)

        grammar = language.grammar
        if grammar is None:
            raise MissingGrammar(f"no grammar for language {language.name}", language.name)
        embedding_config = grammar.embedding_config
        if embedding_config is None:
            raise MissingQueryConfig(
                f"no embedding queries for language {language.name}", language.name
            )

        try:
            source = content.encode("utf-8")
        except UnicodeEncodeError as exc:
            raise ParseFailure(f"parsing failed: {exc}", language.name) from exc
        try:
            tree = self.engine.parse(source, grammar)
        except (ValueError, TypeError) as exc:
            raise ParseFailure(f"parsing failed: {exc}", language.name) from exc
        if tree is None:
            raise ParseFailure("parsing failed", language.name)

        chunks: List[Chunk] = []
        name_ranges: List[ByteRange] = []
        match_count = 0
        for match in self.engine.matches(embedding_config.query, tree, source):
            match_count += 1
            chunk = self._chunk_from_match(
                match, embedding_config, name_ranges, relative_path, language
            )
            if chunk is not None:
                chunks.append(chunk)

        log.debug(
            "structural_chunks_extracted",
            file=str(relative_path),
            language=language.name,
            matches=match_count,
            chunks=len(chunks),
        )
        return chunks

    extract = parse_file

    def _chunk_from_match(
        self,
        match: MatchResult,
        config: EmbeddingConfig,
        name_ranges: List[ByteRange],
        relative_path: PathLikeStr,
        language: Language,
    ) -> Optional[Chunk]:
        names: List[str] = []
        item: Optional[str] = None
        item_range: Optional[ByteRange] = None
        context_spans: List[str] = []

        for capture in match.captures:
            kind = config.classify(capture.index)
            if kind is CaptureKind.ITEM:
                item = capture.text
                item_range = capture.byte_range
            elif kind is CaptureKind.NAME:
                # A name node shared by overlapping matches is only used once per file.
                if capture.byte_range in name_ranges:
                    continue
                name_ranges.append(capture.byte_range)
                names.append(capture.text)
            elif kind is CaptureKind.CONTEXT:
                context_spans.append(capture.text)

        if item is None or item_range is None:
            self._log_dropped(relative_path, language, "no_item")
            return None
        if not names:
            self._log_dropped(relative_path, language, "no_name")
            return None

        body = "\n".join(context_spans + [item]) if context_spans else item
        return Chunk(
            name=" ".join(names),
            range=item_range,
            content=render_code_context(relative_path, language.name, body),
        )

    @staticmethod
    def _log_dropped(relative_path: PathLikeStr, language: Language, reason: str) -> None:
        log.debug(
            "structural_match_dropped",
            file=str(relative_path),
            language=language.name,
            reason=reason,
        )


__all__ = ["ChunkExtractor", "PARSEABLE_ENTIRE_FILE_TYPES"]
