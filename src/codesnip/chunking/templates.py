"""
Prompt templates wrapped around extracted chunks.

The wording is consumed verbatim by the embedding stage, so both strings and
the order of substitutions are part of the output contract.
"""
from __future__ import annotations

from os import PathLike
from typing import Union

CODE_CONTEXT_TEMPLATE = (
    "The below code snippet is from file '<path>'\n\n```<language>\n<item>\n```"
)
ENTIRE_FILE_TEMPLATE = (
    "The below snippet is from file '<path>'\n\n```<language>\n<item>\n```"
)

PathLikeStr = Union[str, "PathLike[str]"]


def _fill(template: str, path: PathLikeStr, language: str, item: str) -> str:
    # Order is path, language, item; placeholders inside earlier values are replaced too.
    return (
        template.replace("<path>", str(path))
        .replace("<language>", language)
        .replace("<item>", item)
    )


def render_entire_file(path: PathLikeStr, language_name: str, content: str) -> str:
    """Wrap a whole file using its display name as the fence language."""
    return _fill(ENTIRE_FILE_TEMPLATE, path, language_name, content)


def render_code_context(path: PathLikeStr, language_name: str, item: str) -> str:
    """Wrap a structural item; the fence language is the lowercased display name."""
    return _fill(CODE_CONTEXT_TEMPLATE, path, language_name.lower(), item)


__all__ = [
    "CODE_CONTEXT_TEMPLATE",
    "ENTIRE_FILE_TEMPLATE",
    "render_code_context",
    "render_entire_file",
]
