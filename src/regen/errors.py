"""Exceptions raised while parsing patterns and generating strings."""

from __future__ import annotations

from typing import Any, Optional


class RegenError(Exception):
    """Base class for all regen errors."""


class PatternSyntaxError(RegenError):
    """A pattern could not be parsed into an AST."""

    def __init__(self, message: str, pattern: str, pos: Optional[int] = None) -> None:
        self.pattern = pattern
        self.pos = pos
        if pos is not None:
            message = f"{message} at position {pos}"
        super().__init__(message)


class UnsupportedConstructError(RegenError):
    """The generator reached a node it declines to produce output for."""

    def __init__(self, node: Any, message: Optional[str] = None) -> None:
        self.node = node
        super().__init__(message or f"{type(node).__name__} is not supported")


class EntropyUnavailableError(RegenError):
    """The randomness source could not supply a value."""
