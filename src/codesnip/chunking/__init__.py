"""
Chunk extraction for semantic code indexing.

Splits source files into prompt-wrapped chunks using tree-sitter structural
queries, or wraps flat formats whole.
"""

from .extractor import PARSEABLE_ENTIRE_FILE_TYPES, ChunkExtractor
from .models import ByteRange, Chunk
from .templates import CODE_CONTEXT_TEMPLATE, ENTIRE_FILE_TEMPLATE

__all__ = [
    "ByteRange",
    "CODE_CONTEXT_TEMPLATE",
    "Chunk",
    "ChunkExtractor",
    "ENTIRE_FILE_TEMPLATE",
    "PARSEABLE_ENTIRE_FILE_TYPES",
]
