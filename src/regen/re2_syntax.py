"""Rewrite RE2-only syntax into the dialect the stdlib parser understands.

Handled here, before parsing:

- POSIX classes inside brackets: ``[[:alpha:]]``, ``[[:^digit:]]``
- Unicode classes: ``\\pL``, ``\\p{Greek}``, ``\\PN``, ``\\p{^Lu}``
- Quoted literals: ``\\Q...\\E``
- ``\\x{10FFFF}``, ``\\z`` and ``(?<name>...)``
- The ``U`` (swap greediness) flag, dropped since generation ignores greediness

Anything left that the stdlib parser rejects is reported by it.
"""

from __future__ import annotations

import re

from regen.ast.nodes import MAX_RUNE, Range
from regen.ast.serialize import format_ranges
from regen.charset import POSIX_CLASSES, complement_ranges, unicode_property_ranges
from regen.errors import PatternSyntaxError

_POSIX_CLASS = re.compile(r"\[:(\^?)([A-Za-z]+):\]")
_PROPERTY = re.compile(r"\\([pP])(?:\{(\^?)([^}]*)\}|([A-Za-z]))")
_HEX_BRACE = re.compile(r"\\x\{([0-9A-Fa-f]{1,8})\}")
_FLAG_GROUP = re.compile(r"\(\?([imsU-]*)([:)])")
_NAMED_GROUP = re.compile(r"\(\?<(?![=!])")

# Literal inside RE2 brackets, set operators to the stdlib parser.
_CLASS_ESCAPE = frozenset("&~|")

_NO_MATCH = "[^\\x00-\\U0010ffff]"


def _strip_ungreedy(flags: str, terminator: str) -> str:
    # (?U) -> nothing, (?iU:x) -> (?i:x), (?U:x) -> (?:x)
    on, _, off = flags.replace("U", "").partition("-")
    kept = on + (f"-{off}" if off else "")
    if kept:
        return f"(?{kept}{terminator}"
    return "(?:" if terminator == ":" else ""


class _Translator:
    def __init__(self, pattern: str) -> None:
        self.pattern = pattern
        self.out: list[str] = []
        self.pos = 0
        self.in_class = False

    def error(self, message: str) -> PatternSyntaxError:
        return PatternSyntaxError(message, self.pattern, self.pos)

    def emit_ranges(self, ranges: list[Range] | tuple[Range, ...]) -> None:
        if self.in_class:
            self.out.append(format_ranges(ranges))
        elif ranges:
            self.out.append("[" + format_ranges(ranges) + "]")
        else:
            self.out.append(_NO_MATCH)

    def property_class(self, m: re.Match) -> None:
        name = m.group(3) if m.group(3) is not None else m.group(4)
        negate = (m.group(1) == "P") != (m.group(2) == "^")
        try:
            ranges = list(unicode_property_ranges(name))
        except ValueError:
            raise self.error(f"invalid character class range \\p{{{name}}}") from None
        self.emit_ranges(complement_ranges(ranges) if negate else ranges)

    def posix_class(self, m: re.Match) -> None:
        negate, name = m.groups()
        if name not in POSIX_CLASSES:
            raise self.error(f"invalid character class range [:{name}:]")
        ranges = list(POSIX_CLASSES[name])
        self.emit_ranges(complement_ranges(ranges) if negate else ranges)

    def escape(self) -> None:
        pattern, i = self.pattern, self.pos
        if i + 1 >= len(pattern):
            # Trailing backslash; the parser reports it.
            self.out.append("\\")
            self.pos += 1
            return

        nxt = pattern[i + 1]
        if nxt in "pP":
            m = _PROPERTY.match(pattern, i)
            if m is None:
                raise self.error("invalid character class range")
            self.property_class(m)
            self.pos = m.end()
        elif nxt == "x" and pattern.startswith("{", i + 2):
            m = _HEX_BRACE.match(pattern, i)
            if m is None or int(m.group(1), 16) > MAX_RUNE:
                raise self.error("invalid escape sequence")
            self.out.append(f"\\U{int(m.group(1), 16):08x}")
            self.pos = m.end()
        elif nxt == "Q" and not self.in_class:
            end = pattern.find("\\E", i + 2)
            if end < 0:
                self.out.append(re.escape(pattern[i + 2:]))
                self.pos = len(pattern)
            else:
                self.out.append(re.escape(pattern[i + 2:end]))
                self.pos = end + 2
        elif nxt == "z" and not self.in_class:
            self.out.append("\\Z")
            self.pos += 2
        else:
            self.out.append(pattern[i:i + 2])
            self.pos += 2

    def class_char(self) -> None:
        pattern, ch = self.pattern, self.pattern[self.pos]
        if ch == "[":
            m = _POSIX_CLASS.match(pattern, self.pos)
            if m is not None:
                self.posix_class(m)
                self.pos = m.end()
                return
            self.out.append("\\[")
        elif ch in _CLASS_ESCAPE:
            self.out.append("\\" + ch)
        else:
            if ch == "]":
                self.in_class = False
            self.out.append(ch)
        self.pos += 1

    def open_class(self) -> None:
        pattern = self.pattern
        self.in_class = True
        self.out.append("[")
        self.pos += 1
        if pattern.startswith("^", self.pos):
            self.out.append("^")
            self.pos += 1
        # A leading ']' is a literal member.
        if pattern.startswith("]", self.pos):
            self.out.append("\\]")
            self.pos += 1

    def translate(self) -> str:
        pattern = self.pattern
        while self.pos < len(pattern):
            ch = pattern[self.pos]
            if ch == "\\":
                self.escape()
            elif self.in_class:
                self.class_char()
            elif ch == "[":
                self.open_class()
            elif (m := _FLAG_GROUP.match(pattern, self.pos)) and "U" in m.group(1):
                self.out.append(_strip_ungreedy(m.group(1), m.group(2)))
                self.pos = m.end()
            elif _NAMED_GROUP.match(pattern, self.pos):
                self.out.append("(?P<")
                self.pos += 3
            else:
                self.out.append(ch)
                self.pos += 1
        return "".join(self.out)


def to_python_syntax(pattern: str) -> str:
    """
    Translate RE2 pattern text into equivalent stdlib ``re`` syntax.

    :param pattern: Pattern in RE2 syntax.
    :return: Pattern text for the stdlib parser.
    :raises PatternSyntaxError: If an RE2 class name is unknown or malformed.
    """
    return _Translator(pattern).translate()
