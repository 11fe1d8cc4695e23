#!/usr/bin/env python3
"""Command-line entry point for generating strings from regular expressions.

Usage:
    regen [options] <pattern>...

    or

    python -m regen [options] <pattern>...

Example:
    $ regen 'foo(-(bar|baz|quux|woop)){4}'
    foo-woop-quux-bar-quux

    # Three strings per pattern, alternating between patterns
    $ regen -n 3 --zip '[a-f]{4}' '\\d{3}'
"""

from __future__ import annotations

import argparse
import sys

from loguru import logger

from regen.errors import PatternSyntaxError, RegenError
from regen.generator import DEFAULT_MAX_UNBOUNDED_REPEAT
from regen.string_generator import RegenStringGenerator, RegenStringGeneratorConfig


def _non_negative(value: str) -> int:
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0, got {number}")
    return number


def parse_arguments(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="regen",
        description="Generate random strings that match regular expressions",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Patterns use RE2 syntax, described at <https://github.com/google/re2/wiki/Syntax>.

Note that --simplify converts {m,n} repetitions into chains of zero-or-one
repetitions. This can produce less variance in result strings, as zero-or-one
repetitions are a coin toss and skip nested sub-expressions when the toss fails.
        """,
    )

    parser.add_argument("patterns", nargs="*", metavar="pattern", help="Regular expression to generate from")
    parser.add_argument(
        "-n", "--count",
        type=_non_negative,
        default=1,
        help="Number of strings to generate per pattern (default: 1)"
    )
    parser.add_argument(
        "--max",
        type=_non_negative,
        default=DEFAULT_MAX_UNBOUNDED_REPEAT,
        dest="max_unbounded_repeat",
        metavar="REPETITIONS",
        help=f"Max repetitions for unbounded repeats (default: {DEFAULT_MAX_UNBOUNDED_REPEAT})"
    )
    parser.add_argument(
        "--simplify",
        action="store_true",
        help="Simplify the parsed regular expressions before generating"
    )
    parser.add_argument(
        "--zip",
        action="store_true",
        help="Interleave patterns instead of going pattern by pattern"
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for reproducible output (default: system entropy)"
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose debug logging"
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Only log warnings and errors"
    )
    return parser.parse_args(argv)


def setup_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Configure logging to stderr.

    Args:
        verbose: Whether to enable debug logging
        quiet: Whether to suppress everything below warnings
    """
    logger.remove()
    logger.enable("regen")

    if verbose:
        level = "DEBUG"
    elif quiet:
        level = "WARNING"
    else:
        level = "INFO"
    logger.add(
        sys.stderr,
        format="<green>regen</green> | <level>{level: <8}</level> | <level>{message}</level>",
        level=level,
        colorize=None,
    )


def main(argv: list[str] | None = None) -> int:
    """Main entry point.

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    args = parse_arguments(argv)
    setup_logging(verbose=args.verbose, quiet=args.quiet)

    if not args.patterns:
        logger.warning("no regexp given")
        return 0

    config = RegenStringGeneratorConfig(
        seed=args.seed,
        max_unbounded_repeat=args.max_unbounded_repeat,
        simplify=args.simplify,
    )
    generator = RegenStringGenerator(config)

    first = True
    try:
        for _, text in generator.generate_many(args.patterns, args.count, interleave=args.zip):
            if not first:
                sys.stdout.write("\n")
            first = False
            sys.stdout.write(text)
    except PatternSyntaxError as e:
        logger.error(f"error parsing regular expression {e.pattern!r}: {e}")
        return 1
    except RegenError as e:
        logger.error(f"Error generating string: {e}")
        return 1

    if sys.stdout.isatty():
        sys.stdout.write("\n")
    sys.stdout.flush()
    return 0


if __name__ == "__main__":
    sys.exit(main())
