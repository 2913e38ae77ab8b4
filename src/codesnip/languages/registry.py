"""
Built-in language registry.

Maps display names and file suffixes to :class:`Language` descriptors. Grammars
come prebuilt from ``tree_sitter_languages`` and are loaded on first use;
structural queries are compiled the first time a grammar's embedding config is
requested, optionally replaced by ``<queries_dir>/<grammar>/embedding.scm``.
"""
from __future__ import annotations

from pathlib import Path, PurePath
from typing import Dict, Iterator, Mapping, Optional, Tuple, Union

from tree_sitter import Language as TSLanguage  # type: ignore[import]

from ..logger import get_logger
from ..settings import normalize_suffix, settings
from .descriptor import CompiledQuery, EmbeddingConfig, Grammar, Language

log = get_logger(__name__)


_LANGUAGE_CACHE: dict[str, TSLanguage] = {}

EMBEDDING_QUERY_FILENAME = "embedding.scm"

PYTHON_EMBEDDING_QUERY = """
(class_definition
  "class" @context
  name: (identifier) @name) @item

(function_definition
  "async"? @context
  "def" @context
  name: (_) @name) @item
"""

CPP_EMBEDDING_QUERY = """
(class_specifier
  name: (type_identifier) @name
  body: (field_declaration_list)) @item

(struct_specifier
  name: (type_identifier) @name
  body: (field_declaration_list)) @item

(enum_specifier
  name: (type_identifier) @name
  body: (enumerator_list)) @item

(function_definition
  declarator: (function_declarator
    declarator: (_) @name)) @item
"""

# display name, grammar name, embedding query, path suffixes
_BUILTIN_LANGUAGES: Tuple[Tuple[str, Optional[str], Optional[str], Tuple[str, ...]], ...] = (
    ("Python", "python", PYTHON_EMBEDDING_QUERY, (".py", ".pyi")),
    ("C++", "cpp", CPP_EMBEDDING_QUERY, (".cpp", ".cxx", ".cc", ".hpp", ".hxx", ".hh", ".h")),
    ("TOML", "toml", None, (".toml",)),
    ("YAML", "yaml", None, (".yaml", ".yml")),
    ("JSON", "json", None, (".json",)),
    ("CSS", "css", None, (".css",)),
    ("Plain Text", None, None, (".txt",)),
)


def _load_language(language_name: str) -> TSLanguage:
    """
    Lazily load a prebuilt tree-sitter language.

    Users are expected to install `tree_sitter_languages`, which bundles a
    collection of compiled grammars.
    """
    if language_name in _LANGUAGE_CACHE:
        return _LANGUAGE_CACHE[language_name]

    try:
        from tree_sitter_languages import get_language  # type: ignore
    except ImportError as exc:  # pragma: no cover - runtime configuration issue
        raise RuntimeError(
            "tree_sitter_languages is required for prebuilt grammars. "
            "Install it via `pip install tree-sitter-languages`."
        ) from exc

    try:
        language = get_language(language_name)
    except Exception as exc:
        raise RuntimeError(f"Unable to load grammar '{language_name}': {exc}") from exc
    _LANGUAGE_CACHE[language_name] = language
    log.info("grammar_loaded", grammar=language_name)
    return language


def _read_query_override(queries_dir: Optional[Path], grammar_name: str) -> Optional[str]:
    if queries_dir is None:
        return None
    candidate = queries_dir / grammar_name / EMBEDDING_QUERY_FILENAME
    if not candidate.is_file():
        return None
    log.info("embedding_query_override", grammar=grammar_name, path=str(candidate))
    return candidate.read_text(encoding="utf-8")


class LanguageRegistry:
    """Lookup of languages by display name or file suffix."""

    def __init__(
        self,
        queries_dir: Optional[Path] = None,
        extension_overrides: Optional[Mapping[str, str]] = None,
    ) -> None:
        self.queries_dir = queries_dir if queries_dir is not None else settings.queries_dir
        overrides = (
            extension_overrides
            if extension_overrides is not None
            else settings.extension_overrides
        )
        self._languages: Dict[str, Language] = {}
        self._suffixes: Dict[str, str] = {}
        for name, grammar_name, query, suffixes in _BUILTIN_LANGUAGES:
            self.register(
                Language(
                    name=name,
                    grammar=self._build_grammar(grammar_name, query) if grammar_name else None,
                    path_suffixes=suffixes,
                )
            )
        for suffix, name in overrides.items():
            self._suffixes[normalize_suffix(suffix)] = name.lower()

    def _build_grammar(self, grammar_name: str, default_query: Optional[str]) -> Grammar:
        def load_embedding(grammar: Grammar) -> Optional[EmbeddingConfig]:
            source = _read_query_override(self.queries_dir, grammar.name) or default_query
            if source is None:
                return None
            return EmbeddingConfig.from_query(CompiledQuery.compile(source, grammar.ts_language))

        return Grammar(
            name=grammar_name,
            loader=lambda: _load_language(grammar_name),
            embedding_loader=load_embedding,
        )

    def register(self, language: Language) -> None:
        key = language.name.lower()
        self._languages[key] = language
        for suffix in language.path_suffixes:
            self._suffixes[suffix.lower()] = key

    def get(self, name: str) -> Optional[Language]:
        return self._languages.get(name.lower())

    def for_path(self, path: Union[str, PurePath]) -> Optional[Language]:
        """Resolve a language from the file suffix; content is never read."""
        suffix = PurePath(path).suffix.lower()
        key = self._suffixes.get(suffix)
        if key is None:
            return None
        return self._languages.get(key)

    def __iter__(self) -> Iterator[Language]:
        return iter(self._languages.values())

    def __len__(self) -> int:
        return len(self._languages)


_DEFAULT_REGISTRY: Optional[LanguageRegistry] = None


def default_registry() -> LanguageRegistry:
    global _DEFAULT_REGISTRY
    if _DEFAULT_REGISTRY is None:
        _DEFAULT_REGISTRY = LanguageRegistry()
    return _DEFAULT_REGISTRY


def language_for_path(path: Union[str, PurePath]) -> Optional[Language]:
    return default_registry().for_path(path)


__all__ = [
    "CPP_EMBEDDING_QUERY",
    "LanguageRegistry",
    "PYTHON_EMBEDDING_QUERY",
    "default_registry",
    "language_for_path",
]
