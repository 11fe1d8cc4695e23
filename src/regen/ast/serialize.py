"""Render AST nodes back into pattern text.

The output is accepted by :func:`regen.parser.parse_regex`, which makes it
handy for logging what a (possibly simplified) tree looks like.
"""

from __future__ import annotations

import re

from regen.ast import nodes

_CLASS_SPECIALS = frozenset("\\]^-[")


def _class_char(cp: int) -> str:
    ch = chr(cp)
    if 0x20 < cp < 0x7F and ch not in _CLASS_SPECIALS:
        return ch
    if cp <= 0xFF:
        return f"\\x{cp:02x}"
    if cp <= 0xFFFF:
        return f"\\u{cp:04x}"
    return f"\\U{cp:08x}"


def format_ranges(ranges) -> str:
    """Render ``(lo, hi)`` pairs as the inside of a bracket expression."""
    parts = []
    for lo, hi in ranges:
        if lo == hi:
            parts.append(_class_char(lo))
        else:
            parts.append(f"{_class_char(lo)}-{_class_char(hi)}")
    return "".join(parts)


def _class_to_pattern(node: nodes.CharClass) -> str:
    if not node.ranges:
        return "[^\\x00-\\U0010ffff]"
    return "[" + format_ranges(node.ranges) + "]"


def _is_atom(node: nodes.Node) -> bool:
    if isinstance(node, nodes.Literal):
        return len(node.text) == 1
    return isinstance(node, (nodes.CharClass, nodes.AnyChar, nodes.AnyCharNotNL, nodes.Capture))


def _body(subs: tuple[nodes.Node, ...]) -> str:
    if len(subs) == 1 and _is_atom(subs[0]):
        return regex_to_pattern(subs[0])
    return "(?:" + _join(subs) + ")"


def _join(subs: tuple[nodes.Node, ...]) -> str:
    if len(subs) == 1:
        return regex_to_pattern(subs[0])
    return "".join(_in_concat(sub) for sub in subs)


def _in_concat(node: nodes.Node) -> str:
    text = regex_to_pattern(node)
    if isinstance(node, nodes.Alternate):
        return f"(?:{text})"
    return text


def regex_to_pattern(node: nodes.Node) -> str:
    """Convert an AST back into a pattern string."""
    if isinstance(node, nodes.NoMatch):
        return "[^\\x00-\\U0010ffff]"
    if isinstance(node, nodes.EmptyMatch):
        return "(?:)"
    if isinstance(node, nodes.Literal):
        return re.escape(node.text)
    if isinstance(node, nodes.CharClass):
        return _class_to_pattern(node)
    if isinstance(node, nodes.AnyCharNotNL):
        return "."
    if isinstance(node, nodes.AnyChar):
        return "(?s:.)"
    if isinstance(node, nodes.BeginLine):
        return "(?m:^)"
    if isinstance(node, nodes.EndLine):
        return "(?m:$)"
    if isinstance(node, nodes.BeginText):
        return "\\A"
    if isinstance(node, nodes.EndText):
        return "\\Z"
    if isinstance(node, nodes.WordBoundary):
        return "\\b"
    if isinstance(node, nodes.NoWordBoundary):
        return "\\B"
    if isinstance(node, nodes.Star):
        return _body(node.subs) + "*"
    if isinstance(node, nodes.Plus):
        return _body(node.subs) + "+"
    if isinstance(node, nodes.Quest):
        return _body(node.subs) + "?"
    if isinstance(node, nodes.Repeat):
        if node.max == node.min:
            bounds = f"{{{node.min}}}"
        elif node.max == -1:
            bounds = f"{{{node.min},}}"
        else:
            bounds = f"{{{node.min},{node.max}}}"
        return _body(node.subs) + bounds
    if isinstance(node, nodes.Capture):
        inner = _join(node.subs)
        if node.name is not None:
            return f"(?P<{node.name}>{inner})"
        return f"({inner})"
    if isinstance(node, nodes.Concat):
        return "".join(_in_concat(sub) for sub in node.subs)
    if isinstance(node, nodes.Alternate):
        return "|".join(regex_to_pattern(sub) for sub in node.subs)
    raise TypeError(f"unknown node type: {type(node).__name__}")
