"""Parse pattern text into :mod:`regen.ast` trees.

RE2-only syntax (POSIX and Unicode classes, ``\\Q...\\E``, ``(?<name>...)``)
is first rewritten by :mod:`regen.re2_syntax`. Parsing is then delegated to
the standard library's regular-expression parser; this module converts its
token lists into AST nodes and rejects the constructs that fall outside RE2
syntax (backreferences, lookaround, conditionals, atomic groups and
possessive quantifiers).

Character classes follow RE2: ``\\d``, ``\\s`` and ``\\w`` are ASCII-only, and
negated classes range over every code point except surrogates.
"""

from __future__ import annotations

import re
from re import _constants as sre
from re import _parser as sre_parse

from loguru import logger

from regen.ast import nodes
from regen.ast.nodes import Range
from regen.charset import (
    PERL_DIGIT,
    PERL_SPACE,
    PERL_WORD,
    complement_ranges,
    fold_ascii_case,
    normalize_ranges,
)
from regen.errors import PatternSyntaxError
from regen.re2_syntax import to_python_syntax

# RE2 rejects counted repetitions above this, alone or multiplied through nesting.
MAX_REPEAT_COUNT = 1000

_UNSUPPORTED = {
    sre.GROUPREF: "backreferences",
    sre.GROUPREF_EXISTS: "conditional groups",
    sre.ASSERT: "lookaround assertions",
    sre.ASSERT_NOT: "lookaround assertions",
    sre.ATOMIC_GROUP: "atomic groups",
    sre.POSSESSIVE_REPEAT: "possessive quantifiers",
}

_CATEGORIES: dict[object, list[Range]] = {
    sre.CATEGORY_DIGIT: list(PERL_DIGIT),
    sre.CATEGORY_NOT_DIGIT: complement_ranges(list(PERL_DIGIT)),
    sre.CATEGORY_SPACE: list(PERL_SPACE),
    sre.CATEGORY_NOT_SPACE: complement_ranges(list(PERL_SPACE)),
    sre.CATEGORY_WORD: list(PERL_WORD),
    sre.CATEGORY_NOT_WORD: complement_ranges(list(PERL_WORD)),
}


class _Converter:
    """Turns the stdlib parser's SubPattern tree into AST nodes."""

    def __init__(self, pattern: str, state: sre_parse.State) -> None:
        self.pattern = pattern
        self.group_names = {index: name for name, index in state.groupdict.items()}

    def error(self, message: str) -> PatternSyntaxError:
        return PatternSyntaxError(message, self.pattern)

    def convert(self, subpattern: sre_parse.SubPattern, flags: int) -> nodes.Node:
        items: list[nodes.Node] = []
        pending: list[str] = []

        for op, av in subpattern.data:
            if op is sre.LITERAL:
                pending.append(chr(av))
                continue
            # Non-capturing groups come back as Concat and are spliced in.
            for part in _subs_of(self.convert_item(op, av, flags)):
                if isinstance(part, nodes.Literal):
                    pending.append(part.text)
                elif not isinstance(part, nodes.EmptyMatch):
                    if pending:
                        items.append(nodes.Literal("".join(pending)))
                        pending = []
                    items.append(part)

        if pending:
            items.append(nodes.Literal("".join(pending)))

        if not items:
            return nodes.EmptyMatch()
        if len(items) == 1:
            return items[0]
        return nodes.Concat(tuple(items))

    def convert_item(self, op, av, flags: int) -> nodes.Node:
        if op in _UNSUPPORTED:
            raise self.error(f"{_UNSUPPORTED[op]} are not supported in RE2 syntax")

        if op is sre.NOT_LITERAL:
            return self.char_class([(sre.NEGATE, None), (sre.LITERAL, av)], flags)
        if op is sre.IN:
            return self.char_class(av, flags)
        if op is sre.ANY:
            return nodes.AnyChar() if flags & re.DOTALL else nodes.AnyCharNotNL()
        if op is sre.AT:
            return self.anchor(av, flags)
        if op is sre.BRANCH:
            _, branches = av
            return nodes.Alternate(tuple(self.convert(branch, flags) for branch in branches))
        if op is sre.SUBPATTERN:
            group, add_flags, del_flags, p = av
            inner = self.convert(p, (flags | add_flags) & ~del_flags)
            if group is None:
                return inner
            return nodes.Capture(_subs_of(inner), group, self.group_names.get(group))
        if op in (sre.MAX_REPEAT, sre.MIN_REPEAT):
            return self.repeat(av, flags)

        raise self.error(f"unsupported construct {op}")

    def anchor(self, at, flags: int) -> nodes.Node:
        multiline = bool(flags & re.MULTILINE)
        if at is sre.AT_BEGINNING:
            return nodes.BeginLine() if multiline else nodes.BeginText()
        if at is sre.AT_END:
            return nodes.EndLine() if multiline else nodes.EndText()
        if at is sre.AT_BEGINNING_STRING:
            return nodes.BeginText()
        if at is sre.AT_END_STRING:
            return nodes.EndText()
        if at is sre.AT_BOUNDARY:
            return nodes.WordBoundary()
        if at is sre.AT_NON_BOUNDARY:
            return nodes.NoWordBoundary()
        raise self.error(f"unsupported anchor {at}")

    def repeat(self, av, flags: int) -> nodes.Node:
        lo, hi, item = av
        if hi == sre.MAXREPEAT:
            hi = -1
        if lo > MAX_REPEAT_COUNT or hi > MAX_REPEAT_COUNT:
            raise self.error(f"invalid repeat count {{{lo},{'' if hi < 0 else hi}}}")

        subs = _subs_of(self.convert(item, flags))
        if hi == -1 and lo == 0:
            return nodes.Star(subs)
        if hi == -1 and lo == 1:
            return nodes.Plus(subs)
        if lo == 0 and hi == 1:
            return nodes.Quest(subs)
        return nodes.Repeat(subs, lo, hi)

    def char_class(self, items, flags: int) -> nodes.Node:
        ranges: list[Range] = []
        negate = False
        for op, av in items:
            if op is sre.NEGATE:
                negate = True
            elif op is sre.LITERAL:
                ranges.append((av, av))
            elif op is sre.RANGE:
                ranges.append(av)
            elif op is sre.CATEGORY:
                if av not in _CATEGORIES:
                    raise self.error(f"unsupported character category {av}")
                ranges.extend(_CATEGORIES[av])
            else:
                raise self.error(f"unsupported class item {op}")

        if flags & re.IGNORECASE:
            ranges = fold_ascii_case(ranges)
        ranges = normalize_ranges(ranges)
        if negate:
            ranges = complement_ranges(ranges)
        if not ranges:
            return nodes.NoMatch()
        return nodes.CharClass(tuple(ranges))


def _subs_of(node: nodes.Node) -> tuple[nodes.Node, ...]:
    if isinstance(node, nodes.Concat):
        return node.subs
    return (node,)


def _repeat_within(node: nodes.Node, budget: int) -> bool:
    """Check that nested counted repeats multiply out to at most ``budget``."""
    if isinstance(node, nodes.Repeat):
        count = node.min if node.max == -1 else node.max
        if count == 0:
            return True
        if count > budget:
            return False
        budget //= count
    return all(_repeat_within(child, budget) for child in node.children)


def parse_regex(pattern: str, flags: int = 0) -> nodes.Node:
    """
    Parse ``pattern`` into an AST.

    :param pattern: Pattern text in RE2-compatible syntax.
    :param flags: ``re`` flags applied to the whole pattern (``re.I``, ``re.M``, ``re.S``).
    :return: Root node of the parsed tree.
    :raises PatternSyntaxError: If the pattern is malformed or uses unsupported syntax.
    """
    try:
        parsed = sre_parse.parse(to_python_syntax(pattern), flags)
    except re.error as e:
        raise PatternSyntaxError(e.msg, pattern, e.pos) from e

    converter = _Converter(pattern, parsed.state)
    node = converter.convert(parsed, parsed.state.flags)
    if not _repeat_within(node, MAX_REPEAT_COUNT):
        raise PatternSyntaxError("invalid nested repetition operator", pattern)
    logger.debug("Parsed {!r} into {}", pattern, type(node).__name__)
    return node
