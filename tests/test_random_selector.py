import random
from collections import Counter

import pytest

from regen.errors import EntropyUnavailableError
from regen.random_selector import RandomSelector


class ExplodingRandom(random.Random):
    def __init__(self, exc):
        super().__init__(0)
        self.exc = exc

    def randrange(self, *args, **kwargs):
        raise self.exc


class TestUniform:
    @pytest.mark.parametrize("n", [0, 1])
    def test_trivial_bounds_skip_the_source(self, n):
        selector = RandomSelector(ExplodingRandom(AssertionError("source was used")))
        assert selector.uniform(n) == 0

    def test_negative_bound_rejected(self):
        with pytest.raises(ValueError):
            RandomSelector.seeded(1).uniform(-1)

    def test_values_stay_in_range(self):
        selector = RandomSelector.seeded(7)
        values = {selector.uniform(5) for _ in range(500)}
        assert values == {0, 1, 2, 3, 4}

    def test_large_bounds(self):
        selector = RandomSelector.seeded(7)
        n = 2**70
        for _ in range(100):
            assert 0 <= selector.uniform(n) < n

    def test_roughly_uniform(self):
        selector = RandomSelector.seeded(99)
        trials = 8000
        counts = Counter(selector.uniform(4) for _ in range(trials))
        for value in range(4):
            assert abs(counts[value] / trials - 0.25) < 0.03

    def test_system_entropy_by_default(self):
        selector = RandomSelector()
        assert not selector.is_deterministic
        assert 0 <= selector.uniform(10) < 10


class TestSeeding:
    def test_same_seed_same_sequence(self):
        a = RandomSelector.seeded("fixtures")
        b = RandomSelector.seeded("fixtures")
        assert [a.uniform(1000) for _ in range(20)] == [b.uniform(1000) for _ in range(20)]
        assert a.is_deterministic

    def test_coin(self):
        selector = RandomSelector.seeded(3)
        flips = [selector.coin() for _ in range(200)]
        assert True in flips and False in flips


class TestEntropyFailure:
    @pytest.mark.parametrize("exc", [OSError("no urandom"), NotImplementedError("no source")])
    def test_source_failure_is_reported(self, exc):
        selector = RandomSelector(ExplodingRandom(exc))
        with pytest.raises(EntropyUnavailableError) as info:
            selector.uniform(10)
        assert info.value.__cause__ is exc
