"""Generate random strings from regular expressions by walking their AST."""

from loguru import logger

from regen.errors import (
    EntropyUnavailableError,
    PatternSyntaxError,
    RegenError,
    UnsupportedConstructError,
)
from regen.generator import (
    DEFAULT_MAX_UNBOUNDED_REPEAT,
    GenerationResult,
    GeneratorConfig,
    OutputBuffer,
    RegexGenerator,
    generate,
)
from regen.parser import parse_regex
from regen.random_selector import RandomSelector
from regen.string_generator import RegenStringGenerator, RegenStringGeneratorConfig

__version__ = "0.1.0"

# Library logging stays silent until an application opts in with logger.enable("regen").
logger.disable("regen")

__all__ = [
    # Errors
    "RegenError",
    "PatternSyntaxError",
    "UnsupportedConstructError",
    "EntropyUnavailableError",
    # Generation
    "DEFAULT_MAX_UNBOUNDED_REPEAT",
    "GenerationResult",
    "GeneratorConfig",
    "OutputBuffer",
    "RegexGenerator",
    "generate",
    "RandomSelector",
    # Patterns
    "parse_regex",
    "RegenStringGenerator",
    "RegenStringGeneratorConfig",
]
