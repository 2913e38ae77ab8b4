from pathlib import Path

import pytest

from codesnip.chunking import ChunkExtractor
from codesnip.errors import MissingGrammar
from codesnip.languages import Language, LanguageRegistry

from fakes import FakeEngine


@pytest.fixture
def registry(tmp_path: Path) -> LanguageRegistry:
    return LanguageRegistry(queries_dir=tmp_path, extension_overrides={})


def test_builtin_languages(registry: LanguageRegistry) -> None:
    names = {language.name for language in registry}
    assert {"Python", "C++", "TOML", "YAML", "JSON", "CSS", "Plain Text"} <= names
    assert len(registry) == len(names)


def test_lookup_by_name_is_case_insensitive(registry: LanguageRegistry) -> None:
    language = registry.get("python")
    assert language is not None
    assert language.name == "Python"
    assert language.grammar is not None
    assert language.grammar.name == "python"
    assert registry.get("cobol") is None


@pytest.mark.parametrize(
    "path, expected",
    [
        ("src/app.py", "Python"),
        ("include/vec.HPP", "C++"),
        ("Cargo.toml", "TOML"),
        (".github/workflows/ci.yml", "YAML"),
        ("package.json", "JSON"),
        ("notes.txt", "Plain Text"),
        ("Makefile", None),
    ],
)
def test_lookup_by_path(registry: LanguageRegistry, path: str, expected: str) -> None:
    language = registry.for_path(Path(path))
    assert (language.name if language else None) == expected


def test_extension_overrides(tmp_path: Path) -> None:
    registry = LanguageRegistry(queries_dir=tmp_path, extension_overrides={".pyw": "Python"})
    language = registry.for_path("tool.pyw")
    assert language is not None
    assert language.name == "Python"


def test_register_custom_language(registry: LanguageRegistry) -> None:
    registry.register(Language(name="Markdown", path_suffixes=(".md",)))
    language = registry.for_path("README.md")
    assert language is not None
    assert language.grammar is None


def test_entire_file_language_skips_grammar_loading(registry: LanguageRegistry) -> None:
    language = registry.get("JSON")
    assert language is not None

    chunks = ChunkExtractor(engine=FakeEngine()).parse_file("a.json", '{"a": 1}', language)

    assert [chunk.name for chunk in chunks] == ["JSON"]
    assert language.grammar is not None
    assert language.grammar._ts_language is None


def test_plain_text_has_no_grammar(registry: LanguageRegistry) -> None:
    language = registry.for_path("notes.txt")
    assert language is not None
    with pytest.raises(MissingGrammar):
        ChunkExtractor(engine=FakeEngine()).parse_file("notes.txt", "hello", language)


@pytest.mark.parametrize("suffix", ["pyw", "PYW", ".pyw", " .Pyw "])
def test_extension_overrides_are_normalized(tmp_path: Path, suffix: str) -> None:
    registry = LanguageRegistry(queries_dir=tmp_path, extension_overrides={suffix: "Python"})
    language = registry.for_path("tool.pyw")
    assert language is not None
    assert language.name == "Python"
