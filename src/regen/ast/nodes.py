"""Node types for parsed regular expressions.

Every operator kind is its own frozen dataclass so a tree can be shared
between threads and generation calls without copying. Composite nodes keep
their children in ``subs``; repetition nodes apply to all of their children
concatenated in order.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

# Highest Unicode code point.
MAX_RUNE = 0x10FFFF

Range = tuple[int, int]


@dataclass(frozen=True, slots=True)
class Node:
    """Base class for all AST nodes."""

    @property
    def children(self) -> tuple[Node, ...]:
        return ()


@dataclass(frozen=True, slots=True)
class NoMatch(Node):
    """Matches nothing, e.g. an empty character class."""


@dataclass(frozen=True, slots=True)
class EmptyMatch(Node):
    """Matches the empty string."""


@dataclass(frozen=True, slots=True)
class Literal(Node):
    text: str


@dataclass(frozen=True, slots=True)
class CharClass(Node):
    """A set of characters given as sorted, inclusive ``(lo, hi)`` code point pairs."""

    ranges: tuple[Range, ...]

    def __post_init__(self) -> None:
        for lo, hi in self.ranges:
            if lo > hi or lo < 0 or hi > MAX_RUNE:
                raise ValueError(f"invalid class range ({lo:#x}, {hi:#x})")

    @property
    def size(self) -> int:
        return sum(hi - lo + 1 for lo, hi in self.ranges)


@dataclass(frozen=True, slots=True)
class AnyCharNotNL(Node):
    pass


@dataclass(frozen=True, slots=True)
class AnyChar(Node):
    pass


@dataclass(frozen=True, slots=True)
class BeginLine(Node):
    pass


@dataclass(frozen=True, slots=True)
class EndLine(Node):
    pass


@dataclass(frozen=True, slots=True)
class BeginText(Node):
    pass


@dataclass(frozen=True, slots=True)
class EndText(Node):
    pass


@dataclass(frozen=True, slots=True)
class WordBoundary(Node):
    pass


@dataclass(frozen=True, slots=True)
class NoWordBoundary(Node):
    pass


@dataclass(frozen=True, slots=True)
class _Composite(Node):
    subs: tuple[Node, ...]

    @property
    def children(self) -> tuple[Node, ...]:
        return self.subs


@dataclass(frozen=True, slots=True)
class Star(_Composite):
    pass


@dataclass(frozen=True, slots=True)
class Plus(_Composite):
    pass


@dataclass(frozen=True, slots=True)
class Quest(_Composite):
    pass


@dataclass(frozen=True, slots=True)
class Repeat(_Composite):
    """Counted repetition ``{min,max}``; ``max == -1`` means no upper bound."""

    min: int = 0
    max: int = -1

    def __post_init__(self) -> None:
        if self.min < 0:
            raise ValueError(f"repeat minimum must be >= 0, got {self.min}")
        if self.max < -1 or (self.max >= 0 and self.max < self.min):
            raise ValueError(f"invalid repeat bounds {{{self.min},{self.max}}}")


@dataclass(frozen=True, slots=True)
class Concat(_Composite):
    pass


@dataclass(frozen=True, slots=True)
class Capture(_Composite):
    index: int = 0
    name: str | None = field(default=None)


@dataclass(frozen=True, slots=True)
class Alternate(_Composite):
    def __post_init__(self) -> None:
        if not self.subs:
            raise ValueError("alternation needs at least one branch")


def walk(node: Node) -> Iterator[Node]:
    """Yield ``node`` and all of its descendants, depth first."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children))
