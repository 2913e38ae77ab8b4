"""Language descriptors and the built-in registry."""

from .descriptor import CaptureKind, CompiledQuery, EmbeddingConfig, Grammar, Language
from .registry import LanguageRegistry, default_registry, language_for_path

__all__ = [
    "CaptureKind",
    "CompiledQuery",
    "EmbeddingConfig",
    "Grammar",
    "Language",
    "LanguageRegistry",
    "default_registry",
    "language_for_path",
]
