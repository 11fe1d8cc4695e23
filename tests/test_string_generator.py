import re

import pytest
import regex

from regen.errors import PatternSyntaxError, UnsupportedConstructError
from regen.string_generator import RegenStringGenerator, RegenStringGeneratorConfig


def make(**kwargs):
    kwargs.setdefault("seed", 42)
    return RegenStringGenerator(RegenStringGeneratorConfig(**kwargs))


class TestGenerate:
    def test_count(self):
        assert list(make().generate("abc", 3)) == ["abc", "abc", "abc"]
        assert list(make().generate("abc", 0)) == []

    def test_seed_is_reproducible(self):
        pattern = r"[a-z]{3,8}\d*"
        assert list(make(seed=5).generate(pattern, 20)) == list(make(seed=5).generate(pattern, 20))

    @pytest.mark.parametrize(
        "pattern",
        [
            "foo(-(bar|baz|quux|woop)){4}",
            r"[a-f0-9]{8}-[a-f0-9]{4}",
            r"\d{3}-\d{4}",
            r"(ab|cd)*e+",
            r"[^a-z]\D\W.",
            r"(?i)[a-c]{2}x",
            r"(?s)a.b",
            r"^\w+@\w+\.(com|org)$",
        ],
    )
    def test_output_matches_pattern(self, pattern):
        compiled = re.compile(pattern, re.ASCII)
        for text in make(seed=3).generate(pattern, 200):
            assert compiled.fullmatch(text), (pattern, text)

    def test_posix_class(self):
        results = list(make(seed=7).generate("[[:digit:]]{3}", 100))
        assert all(re.fullmatch("[0-9]{3}", text) for text in results), results

    def test_unicode_class(self):
        for text in make(seed=8).generate(r"\p{Greek}{2}\PL", 100):
            assert regex.fullmatch(r"\p{Greek}{2}\PL", text), text

    def test_ceiling(self):
        assert set(make(max_unbounded_repeat=0).generate("ab*", 20)) == {"a"}

    def test_simplify(self):
        lengths = {len(s) for s in make(simplify=True).generate("x{2,4}", 300)}
        assert lengths == {2, 3, 4}

    def test_flags(self):
        assert list(make(flags=re.MULTILINE).generate("a$b", 1)) == ["a\nb"]
        assert list(make().generate("a$b", 1)) == ["a"]

    def test_word_boundary_raises(self):
        with pytest.raises(UnsupportedConstructError):
            list(make().generate(r"\bfoo", 1))

    def test_syntax_error(self):
        with pytest.raises(PatternSyntaxError):
            list(make().generate("a[", 1))

    def test_system_entropy_without_seed(self):
        generator = RegenStringGenerator()
        assert generator.config.seed is None
        assert all(re.fullmatch("[0-9]{4}", s) for s in generator.generate("[0-9]{4}", 10))


class TestGenerateMany:
    def test_pattern_by_pattern(self):
        results = list(make().generate_many(["a", "b"], 2))
        assert results == [("a", "a"), ("a", "a"), ("b", "b"), ("b", "b")]

    def test_interleaved(self):
        results = list(make().generate_many(["a", "b"], 2, interleave=True))
        assert [text for _, text in results] == ["a", "b", "a", "b"]

    def test_all_patterns_parsed_before_output(self):
        results = make().generate_many(["a", "("], 1)
        with pytest.raises(PatternSyntaxError):
            next(results)
