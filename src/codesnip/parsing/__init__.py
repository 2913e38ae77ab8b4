"""Syntax tree construction and structural query matching."""

from .engine import Capture, MatchResult, SyntaxEngine, TreeSitterEngine

__all__ = ["Capture", "MatchResult", "SyntaxEngine", "TreeSitterEngine"]
