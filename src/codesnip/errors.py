"""
Error types raised while extracting chunks from a single file.

Every error is terminal for the call that raised it: no chunks are returned
and nothing is retried. Callers decide whether to skip the file or abort.
"""
from __future__ import annotations

from typing import Optional


class ExtractionError(Exception):
    """Base class for chunk extraction failures."""

    def __init__(self, message: str, language: Optional[str] = None) -> None:
        super().__init__(message)
        self.language = language


class MissingGrammar(ExtractionError):
    """The language has no grammar and is not extracted as a whole file."""


class MissingQueryConfig(ExtractionError):
    """The grammar carries no structural (embedding) query."""


class ParseFailure(ExtractionError):
    """The parser could not build a syntax tree for the content."""


__all__ = [
    "ExtractionError",
    "MissingGrammar",
    "MissingQueryConfig",
    "ParseFailure",
]
