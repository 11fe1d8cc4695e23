"""Code point range algebra and the RE2 named character classes.

Ranges are inclusive ``(lo, hi)`` pairs. Perl (``\\d``) and POSIX
(``[:alpha:]``) classes are ASCII-only as in RE2; Unicode classes
(``\\p{Greek}``) are computed from the ``regex`` module's property tables.
"""

from __future__ import annotations

import re
from functools import lru_cache

import regex

from regen.ast.nodes import MAX_RUNE, Range

SURROGATES = (0xD800, 0xDFFF)

PERL_DIGIT: tuple[Range, ...] = ((0x30, 0x39),)
PERL_SPACE: tuple[Range, ...] = ((0x09, 0x0A), (0x0C, 0x0D), (0x20, 0x20))
PERL_WORD: tuple[Range, ...] = ((0x30, 0x39), (0x41, 0x5A), (0x5F, 0x5F), (0x61, 0x7A))

POSIX_CLASSES: dict[str, tuple[Range, ...]] = {
    "alnum": ((0x30, 0x39), (0x41, 0x5A), (0x61, 0x7A)),
    "alpha": ((0x41, 0x5A), (0x61, 0x7A)),
    "ascii": ((0x00, 0x7F),),
    "blank": ((0x09, 0x09), (0x20, 0x20)),
    "cntrl": ((0x00, 0x1F), (0x7F, 0x7F)),
    "digit": ((0x30, 0x39),),
    "graph": ((0x21, 0x7E),),
    "lower": ((0x61, 0x7A),),
    "print": ((0x20, 0x7E),),
    "punct": ((0x21, 0x2F), (0x3A, 0x40), (0x5B, 0x60), (0x7B, 0x7E)),
    "space": ((0x09, 0x0D), (0x20, 0x20)),
    "upper": ((0x41, 0x5A),),
    "word": PERL_WORD,
    "xdigit": ((0x30, 0x39), (0x41, 0x46), (0x61, 0x66)),
}

_PROPERTY_NAME = re.compile(r"[A-Za-z][A-Za-z0-9_]*")


def normalize_ranges(ranges: list[Range]) -> list[Range]:
    """Sort ranges and merge the ones that overlap or touch."""
    merged: list[Range] = []
    for lo, hi in sorted(ranges):
        if merged and lo <= merged[-1][1] + 1:
            if hi > merged[-1][1]:
                merged[-1] = (merged[-1][0], hi)
        else:
            merged.append((lo, hi))
    return merged


def complement_ranges(ranges: list[Range]) -> list[Range]:
    """Complement normalized ranges over all non-surrogate code points."""
    gaps: list[Range] = []
    next_lo = 0
    for lo, hi in ranges:
        if lo > next_lo:
            gaps.append((next_lo, lo - 1))
        next_lo = hi + 1
    if next_lo <= MAX_RUNE:
        gaps.append((next_lo, MAX_RUNE))
    return _without_surrogates(gaps)


def _without_surrogates(ranges: list[Range]) -> list[Range]:
    result: list[Range] = []
    for lo, hi in ranges:
        if hi < SURROGATES[0] or lo > SURROGATES[1]:
            result.append((lo, hi))
            continue
        if lo < SURROGATES[0]:
            result.append((lo, SURROGATES[0] - 1))
        if hi > SURROGATES[1]:
            result.append((SURROGATES[1] + 1, hi))
    return result


def fold_ascii_case(ranges: list[Range]) -> list[Range]:
    """Add the other-case counterpart of every ASCII letter in ``ranges``."""
    folded = list(ranges)
    for lo, hi in ranges:
        for start, end, delta in ((0x41, 0x5A, 0x20), (0x61, 0x7A, -0x20)):
            a, b = max(lo, start), min(hi, end)
            if a <= b:
                folded.append((a + delta, b + delta))
    return normalize_ranges(folded)


@lru_cache(maxsize=1)
def _code_points() -> str:
    # Every scalar value in order; index i is code point i below the surrogate block.
    return "".join(map(chr, range(SURROGATES[0]))) + "".join(
        map(chr, range(SURROGATES[1] + 1, MAX_RUNE + 1))
    )


def _code_point_at(index: int) -> int:
    if index < SURROGATES[0]:
        return index
    return index + (SURROGATES[1] - SURROGATES[0] + 1)


@lru_cache(maxsize=None)
def unicode_property_ranges(name: str) -> tuple[Range, ...]:
    """
    Ranges of the Unicode general category or script called ``name``.

    :param name: Property name as written in ``\\p{name}``, e.g. ``L``, ``Nd`` or ``Greek``.
    :return: Normalized ranges, surrogates excluded.
    :raises ValueError: If the name is not a known property.
    """
    if not _PROPERTY_NAME.fullmatch(name):
        raise ValueError(f"invalid Unicode class name {name!r}")
    try:
        compiled = regex.compile(rf"\p{{{name}}}+")
    except regex.error as e:
        raise ValueError(f"unknown Unicode class {name!r}") from e

    runs = [
        (_code_point_at(m.start()), _code_point_at(m.end() - 1))
        for m in compiled.finditer(_code_points())
    ]
    # A run crossing the surrogate block in index space is split by this.
    return tuple(normalize_ranges(_without_surrogates(runs)))
