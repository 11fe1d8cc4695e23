"""Uniform integer selection for every random decision made by the generator."""

from __future__ import annotations

import random
from typing import Optional

from regen.errors import EntropyUnavailableError


class RandomSelector:
    """Produces uniformly distributed integers in ``[0, n)``.

    By default values come from the operating system's entropy pool via
    :class:`random.SystemRandom`. Pass any :class:`random.Random` instance (or
    use :meth:`seeded`) for reproducible sequences.
    """

    def __init__(self, source: Optional[random.Random] = None) -> None:
        """
        Initialize the selector.

        :param source: Random instance to draw from. Defaults to SystemRandom.
        """
        self._source = source if source is not None else random.SystemRandom()

    @classmethod
    def seeded(cls, seed: int | str | bytes) -> RandomSelector:
        """Create a selector over a deterministic ``random.Random(seed)``."""
        return cls(random.Random(seed))

    @property
    def is_deterministic(self) -> bool:
        return not isinstance(self._source, random.SystemRandom)

    def uniform(self, n: int) -> int:
        """
        Return an integer in ``[0, n)`` with uniform probability.

        ``n`` of 0 or 1 returns 0 without touching the entropy source.

        :param n: Exclusive upper bound.
        :return: The selected integer.
        :raises ValueError: If ``n`` is negative.
        :raises EntropyUnavailableError: If the source cannot supply randomness.
        """
        if n < 0:
            raise ValueError(f"uniform: n must be >= 0, got {n}")
        if n <= 1:
            return 0
        try:
            return self._source.randrange(n)
        except (OSError, NotImplementedError) as e:
            raise EntropyUnavailableError(f"randomness source failed: {e}") from e

    def coin(self) -> bool:
        """Fair coin flip."""
        return self.uniform(2) == 1
