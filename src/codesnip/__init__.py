"""codesnip: structural chunk extraction for code search indexes."""

from .chunking import PARSEABLE_ENTIRE_FILE_TYPES, ByteRange, Chunk, ChunkExtractor
from .errors import ExtractionError, MissingGrammar, MissingQueryConfig, ParseFailure
from .languages import Language, LanguageRegistry, language_for_path

__version__ = "0.1.0"

__all__ = [
    "ByteRange",
    "Chunk",
    "ChunkExtractor",
    "ExtractionError",
    "Language",
    "LanguageRegistry",
    "MissingGrammar",
    "MissingQueryConfig",
    "PARSEABLE_ENTIRE_FILE_TYPES",
    "ParseFailure",
    "__version__",
    "language_for_path",
]
