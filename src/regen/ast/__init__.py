"""Regular-expression AST: node types, simplification and serialization."""

from regen.ast.nodes import (
    MAX_RUNE,
    AnyChar,
    AnyCharNotNL,
    Alternate,
    BeginLine,
    BeginText,
    Capture,
    CharClass,
    Concat,
    EmptyMatch,
    EndLine,
    EndText,
    Literal,
    NoMatch,
    Node,
    NoWordBoundary,
    Plus,
    Quest,
    Repeat,
    Star,
    WordBoundary,
    walk,
)
from regen.ast.serialize import regex_to_pattern
from regen.ast.simplify import simplify

__all__ = [
    "MAX_RUNE",
    # Nodes
    "Node",
    "NoMatch",
    "EmptyMatch",
    "Literal",
    "CharClass",
    "AnyCharNotNL",
    "AnyChar",
    "BeginLine",
    "EndLine",
    "BeginText",
    "EndText",
    "WordBoundary",
    "NoWordBoundary",
    "Star",
    "Plus",
    "Quest",
    "Repeat",
    "Concat",
    "Capture",
    "Alternate",
    # Traversal
    "walk",
    "simplify",
    "regex_to_pattern",
]
