from __future__ import annotations

import random

import pytest
from loguru import logger

from regen.random_selector import RandomSelector


class ScriptedSelector(RandomSelector):
    """Selector that replays a fixed list of choices."""

    def __init__(self, values):
        super().__init__(random.Random(0))
        self.values = list(values)
        self.calls: list[int] = []

    def uniform(self, n: int) -> int:
        if n <= 1:
            return 0
        self.calls.append(n)
        value = self.values.pop(0)
        assert 0 <= value < n, f"scripted value {value} out of range for n={n}"
        return value


@pytest.fixture
def scripted():
    return ScriptedSelector


@pytest.fixture
def seeded():
    return RandomSelector.seeded(1234)


@pytest.fixture
def restore_logger():
    yield
    logger.remove()
    logger.disable("regen")
