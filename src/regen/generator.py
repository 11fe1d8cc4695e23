"""Random string generation by walking a regular-expression AST.

Instead of simulating an automaton, the generator interprets each node
directly and resolves every non-deterministic construct (repetition counts,
class members, alternation branches) with a :class:`RandomSelector`.

The result is a best-effort match: anchors and line handling are
approximated, and word boundaries are rejected outright.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from loguru import logger

from regen.ast import nodes
from regen.errors import UnsupportedConstructError
from regen.random_selector import RandomSelector

DEFAULT_MAX_UNBOUNDED_REPEAT = 32

# '.' is approximated by the printable ASCII window starting at space.
PRINTABLE_START = ord(" ")
PRINTABLE_COUNT = 95


class GenerationResult(Enum):
    CONTINUE = "continue"
    # An end-of-text marker was reached; nothing more should be appended.
    STOP = "stop"


class OutputBuffer:
    """Accumulates generated text for a single generation run."""

    def __init__(self) -> None:
        self._parts: list[str] = []
        self._length = 0

    def write(self, text: str) -> None:
        if text:
            self._parts.append(text)
            self._length += len(text)

    def getvalue(self) -> str:
        return "".join(self._parts)

    def reset(self) -> None:
        self._parts.clear()
        self._length = 0

    def __len__(self) -> int:
        return self._length

    def __repr__(self) -> str:
        return f"OutputBuffer({self.getvalue()!r})"


@dataclass(frozen=True)
class GeneratorConfig:
    """Settings for a generation run."""

    # Extra iterations allowed for '*', '+' and '{m,}' beyond their minimum.
    max_unbounded_repeat: int = DEFAULT_MAX_UNBOUNDED_REPEAT

    def __post_init__(self):
        if self.max_unbounded_repeat < 0:
            raise ValueError(
                f"max_unbounded_repeat must be >= 0, got {self.max_unbounded_repeat}"
            )


class _Walker:
    """One recursive descent over a tree, writing into ``output``."""

    def __init__(self, output: OutputBuffer, max_unbounded_repeat: int, selector: RandomSelector) -> None:
        self.output = output
        self.max_unbounded_repeat = max_unbounded_repeat
        self.selector = selector

    def visit(self, node: nodes.Node) -> GenerationResult:
        try:
            handler = _HANDLERS[type(node)]
        except KeyError:
            raise TypeError(f"unknown node type: {type(node).__name__}") from None
        return handler(self, node)

    def visit_all(self, subs: tuple[nodes.Node, ...]) -> GenerationResult:
        for sub in subs:
            if self.visit(sub) is GenerationResult.STOP:
                return GenerationResult.STOP
        return GenerationResult.CONTINUE

    def repeat(self, subs: tuple[nodes.Node, ...], lo: int, hi: int) -> GenerationResult:
        count = lo + self.selector.uniform(hi - lo + 1)
        for _ in range(count):
            if self.visit_all(subs) is GenerationResult.STOP:
                return GenerationResult.STOP
        return GenerationResult.CONTINUE

    # Handlers

    def nothing(self, node: nodes.Node) -> GenerationResult:
        return GenerationResult.CONTINUE

    def literal(self, node: nodes.Literal) -> GenerationResult:
        self.output.write(node.text)
        return GenerationResult.CONTINUE

    def char_class(self, node: nodes.CharClass) -> GenerationResult:
        # Pick uniformly over all members, so wide ranges are proportionally likelier.
        nth = self.selector.uniform(node.size)
        for lo, hi in node.ranges:
            width = hi - lo + 1
            if nth < width:
                self.output.write(chr(lo + nth))
                return GenerationResult.CONTINUE
            nth -= width
        # Only an empty class gets here; it matches nothing.
        return GenerationResult.CONTINUE

    def any_char_not_nl(self, node: nodes.AnyCharNotNL) -> GenerationResult:
        self.output.write(chr(PRINTABLE_START + self.selector.uniform(PRINTABLE_COUNT)))
        return GenerationResult.CONTINUE

    def any_char(self, node: nodes.AnyChar) -> GenerationResult:
        # One extra slot past the printable window stands for newline.
        i = self.selector.uniform(PRINTABLE_COUNT + 1)
        self.output.write("\n" if i == PRINTABLE_COUNT else chr(PRINTABLE_START + i))
        return GenerationResult.CONTINUE

    def begin_line(self, node: nodes.BeginLine) -> GenerationResult:
        if len(self.output):
            self.output.write("\n")
        return GenerationResult.CONTINUE

    def end_line(self, node: nodes.EndLine) -> GenerationResult:
        if not len(self.output):
            return GenerationResult.STOP
        self.output.write("\n")
        return GenerationResult.CONTINUE

    def end_text(self, node: nodes.EndText) -> GenerationResult:
        return GenerationResult.STOP

    def word_boundary(self, node: nodes.Node) -> GenerationResult:
        raise UnsupportedConstructError(node, "word boundaries are not supported")

    def star(self, node: nodes.Star) -> GenerationResult:
        return self.repeat(node.subs, 0, self.max_unbounded_repeat)

    def plus(self, node: nodes.Plus) -> GenerationResult:
        return self.repeat(node.subs, 1, 1 + self.max_unbounded_repeat)

    def quest(self, node: nodes.Quest) -> GenerationResult:
        if self.selector.coin():
            return self.visit_all(node.subs)
        return GenerationResult.CONTINUE

    def counted(self, node: nodes.Repeat) -> GenerationResult:
        hi = node.max if node.max >= 0 else node.min + self.max_unbounded_repeat
        return self.repeat(node.subs, node.min, hi)

    def concat(self, node: nodes.Concat | nodes.Capture) -> GenerationResult:
        return self.visit_all(node.subs)

    def alternate(self, node: nodes.Alternate) -> GenerationResult:
        return self.visit(node.subs[self.selector.uniform(len(node.subs))])


_HANDLERS: dict[type, Callable[[_Walker, nodes.Node], GenerationResult]] = {
    nodes.NoMatch: _Walker.nothing,
    nodes.EmptyMatch: _Walker.nothing,
    nodes.Literal: _Walker.literal,
    nodes.CharClass: _Walker.char_class,
    nodes.AnyCharNotNL: _Walker.any_char_not_nl,
    nodes.AnyChar: _Walker.any_char,
    nodes.BeginLine: _Walker.begin_line,
    nodes.EndLine: _Walker.end_line,
    nodes.BeginText: _Walker.nothing,
    nodes.EndText: _Walker.end_text,
    nodes.WordBoundary: _Walker.word_boundary,
    nodes.NoWordBoundary: _Walker.word_boundary,
    nodes.Star: _Walker.star,
    nodes.Plus: _Walker.plus,
    nodes.Quest: _Walker.quest,
    nodes.Repeat: _Walker.counted,
    nodes.Concat: _Walker.concat,
    nodes.Capture: _Walker.concat,
    nodes.Alternate: _Walker.alternate,
}


def generate(
    node: nodes.Node,
    output: OutputBuffer,
    max_unbounded_repeat: int = DEFAULT_MAX_UNBOUNDED_REPEAT,
    selector: Optional[RandomSelector] = None,
) -> GenerationResult:
    """Write a random string plausibly matched by ``node`` into ``output``.

    Args:
        node: Root of the tree to generate from. It is only read.
        output: Buffer that receives the text. Its current length decides how
            line anchors behave.
        max_unbounded_repeat: Extra iterations allowed when a repetition has no
            upper bound.
        selector: Source of random decisions. Defaults to a system-entropy
            selector.

    Returns:
        ``GenerationResult.STOP`` if an end-of-text marker cut generation
        short, ``GenerationResult.CONTINUE`` otherwise.

    Raises:
        UnsupportedConstructError: A word boundary was reached.
        EntropyUnavailableError: The selector could not supply randomness.
    """
    if max_unbounded_repeat < 0:
        raise ValueError(f"max_unbounded_repeat must be >= 0, got {max_unbounded_repeat}")
    walker = _Walker(output, max_unbounded_repeat, selector or RandomSelector())
    return walker.visit(node)


class RegexGenerator:
    """Generates whole strings from trees with a fixed config and selector."""

    def __init__(self, config: Optional[GeneratorConfig] = None, selector: Optional[RandomSelector] = None) -> None:
        self.config = config or GeneratorConfig()
        self.selector = selector or RandomSelector()

    def generate_into(self, node: nodes.Node, output: OutputBuffer) -> GenerationResult:
        return generate(node, output, self.config.max_unbounded_repeat, self.selector)

    def generate_string(self, node: nodes.Node) -> str:
        """Generate one string; text written before an end marker is kept."""
        output = OutputBuffer()
        if self.generate_into(node, output) is GenerationResult.STOP:
            logger.debug("Generation stopped early after {} characters", len(output))
        return output.getvalue()
