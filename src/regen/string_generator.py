from __future__ import annotations

from collections.abc import Generator, Iterable

from loguru import logger

from regen.ast import Node, regex_to_pattern, simplify
from regen.generator import DEFAULT_MAX_UNBOUNDED_REPEAT, GeneratorConfig, RegexGenerator
from regen.parser import parse_regex
from regen.random_selector import RandomSelector


class RegenStringGeneratorConfig:
    """Configuration for the RegenStringGenerator."""

    def __init__(
        self,
        *,
        seed: int | None = None,
        max_unbounded_repeat: int = DEFAULT_MAX_UNBOUNDED_REPEAT,
        simplify: bool = False,
        flags: int = 0,
    ) -> None:
        """
        Initialize the configuration.

        :param seed: Optional seed for reproducibility via random.Random(seed).
            Without one, system entropy is used.
        :param max_unbounded_repeat: Extra iterations allowed for '*', '+' and '{m,}'.
        :param simplify: Rewrite counted repetitions into '?' chains before generating.
        :param flags: ``re`` flags applied when parsing patterns.
        """
        self.seed = seed
        self.max_unbounded_repeat = max_unbounded_repeat
        self.simplify = simplify
        self.flags = flags


class RegenStringGenerator:
    """Generates strings matching a regex pattern by walking its AST."""

    def __init__(self, config: RegenStringGeneratorConfig | None = None) -> None:
        """
        Initialize the generator with a configuration.

        :param config: An instance of RegenStringGeneratorConfig.
        """
        self.config = config or RegenStringGeneratorConfig()

        if self.config.seed is not None:
            selector = RandomSelector.seeded(self.config.seed)
        else:
            selector = RandomSelector()
        self._generator = RegexGenerator(
            GeneratorConfig(max_unbounded_repeat=self.config.max_unbounded_repeat),
            selector,
        )

    def parse(self, regex_pattern: str) -> Node:
        """
        Parse a pattern, simplifying it if configured to.

        :raises PatternSyntaxError: If the pattern cannot be parsed.
        """
        node = parse_regex(regex_pattern, self.config.flags)
        if self.config.simplify:
            node = simplify(node)
            logger.debug("Simplified {!r} to {!r}", regex_pattern, regex_to_pattern(node))
        return node

    def generate_from_node(self, node: Node, count: int) -> Generator[str, None, None]:
        for _ in range(count):
            yield self._generator.generate_string(node)

    def generate(self, regex_pattern: str, count: int) -> Generator[str, None, None]:
        """
        Generate strings for the given regex pattern.

        The pattern is parsed once, before the first string is produced.
        Generation errors are not caught here.

        :param regex_pattern: The regex pattern to generate strings from.
        :param count: The number of strings to generate.
        :yield: Generated strings.
        """
        node = self.parse(regex_pattern)
        yield from self.generate_from_node(node, count)

    def generate_many(
        self, patterns: Iterable[str], count: int, interleave: bool = False
    ) -> Generator[tuple[str, str], None, None]:
        """
        Generate ``count`` strings for each of several patterns.

        All patterns are parsed up front, so a syntax error in any of them is
        raised before anything is yielded.

        :param patterns: Patterns to generate from.
        :param count: Number of strings per pattern.
        :param interleave: Cycle through the patterns once per round instead of
            finishing each pattern before moving to the next.
        :yield: ``(pattern, generated_string)`` pairs.
        """
        parsed = [(pattern, self.parse(pattern)) for pattern in patterns]
        logger.debug("Parsed {} patterns", len(parsed))

        if interleave:
            for _ in range(count):
                for pattern, node in parsed:
                    yield pattern, self._generator.generate_string(node)
        else:
            for pattern, node in parsed:
                for text in self.generate_from_node(node, count):
                    yield pattern, text
