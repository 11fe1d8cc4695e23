import re

import pytest

from regen.ast import (
    AnyChar,
    AnyCharNotNL,
    Alternate,
    BeginLine,
    Capture,
    CharClass,
    Concat,
    EmptyMatch,
    EndText,
    Literal,
    NoMatch,
    Plus,
    Quest,
    Repeat,
    Star,
    WordBoundary,
    regex_to_pattern,
    simplify,
    walk,
)
from regen.generator import RegexGenerator
from regen.parser import parse_regex
from regen.random_selector import RandomSelector

X = Literal("x")


class TestNodes:
    def test_nodes_are_immutable_and_hashable(self):
        node = Concat((X, Star((Literal("y"),))))
        with pytest.raises(AttributeError):
            node.subs = ()
        assert hash(node) == hash(Concat((X, Star((Literal("y"),)))))

    def test_class_size(self):
        assert CharClass(((ord("a"), ord("c")), (ord("x"), ord("x")))).size == 4

    @pytest.mark.parametrize("ranges", [((5, 4),), ((-1, 3),), ((0, 0x110000),)])
    def test_bad_class_ranges(self, ranges):
        with pytest.raises(ValueError):
            CharClass(ranges)

    @pytest.mark.parametrize("lo, hi", [(-1, 3), (3, 2), (0, -2)])
    def test_bad_repeat_bounds(self, lo, hi):
        with pytest.raises(ValueError):
            Repeat((X,), lo, hi)

    def test_empty_alternation(self):
        with pytest.raises(ValueError):
            Alternate(())

    def test_walk_is_depth_first(self):
        tree = Concat((Capture((X,), 1), Alternate((Literal("a"), Literal("b")))))
        assert [type(n).__name__ for n in walk(tree)] == [
            "Concat", "Capture", "Literal", "Alternate", "Literal", "Literal",
        ]


class TestSimplify:
    def test_bounded_repeat_becomes_quest_chain(self):
        assert simplify(Repeat((X,), 2, 4)) == Concat((X, X, Quest((X, Quest((X,))))))

    @pytest.mark.parametrize(
        "node, expected",
        [
            (Repeat((X,), 0, 0), EmptyMatch()),
            (Repeat((X,), 1, 1), X),
            (Repeat((X,), 0, -1), Star((X,))),
            (Repeat((X,), 1, -1), Plus((X,))),
            (Repeat((X,), 3, -1), Concat((X, X, Plus((X,))))),
            (Repeat((X,), 0, 2), Quest((X, Quest((X,))))),
            (Repeat((X,), 3, 3), Concat((X, X, X))),
        ],
    )
    def test_repeat_forms(self, node, expected):
        assert simplify(node) == expected

    def test_multi_child_repeat_body(self):
        body = Concat((Literal("a"), Literal("b")))
        assert simplify(Repeat((Literal("a"), Literal("b")), 0, 1)) == Quest((body,))

    def test_repeats_of_empty_collapse(self):
        assert simplify(Star((EmptyMatch(),))) == EmptyMatch()
        assert simplify(Quest((Repeat((X,), 0, 0),))) == EmptyMatch()

    def test_nested_same_operator_collapses(self):
        assert simplify(Star((Star((X,)),))) == Star((X,))
        assert simplify(Plus((Star((X,)),))) == Plus((Star((X,)),))

    def test_recurses_into_groups(self):
        tree = Alternate((Capture((Repeat((X,), 1, 1),), 1, "g"), Literal("y")))
        assert simplify(tree) == Alternate((Capture((X,), 1, "g"), Literal("y")))

    def test_input_is_not_modified(self):
        tree = parse_regex("a{2,3}(b{1,}|c)")
        before = repr(tree)
        simplify(tree)
        assert repr(tree) == before

    def test_simplified_tree_generates_same_lengths(self):
        generator = RegexGenerator(selector=RandomSelector.seeded(21))
        node = simplify(parse_regex("x{2,4}"))
        lengths = {len(generator.generate_string(node)) for _ in range(300)}
        assert lengths == {2, 3, 4}


class TestSerialize:
    @pytest.mark.parametrize(
        "node, expected",
        [
            (Literal("a.b"), r"a\.b"),
            (CharClass(((ord("a"), ord("c")), (ord("]"), ord("]")))), r"[a-c\x5d]"),
            (CharClass(((0x100, 0x1F600),)), r"[\u0100-\U0001f600]"),
            (NoMatch(), r"[^\x00-\U0010ffff]"),
            (EmptyMatch(), "(?:)"),
            (AnyCharNotNL(), "."),
            (AnyChar(), "(?s:.)"),
            (BeginLine(), "(?m:^)"),
            (EndText(), r"\Z"),
            (WordBoundary(), r"\b"),
            (Star((X,)), "x*"),
            (Plus((Literal("ab"),)), "(?:ab)+"),
            (Repeat((X,), 2, -1), "x{2,}"),
            (Repeat((X,), 2, 2), "x{2}"),
            (Repeat((X,), 2, 5), "x{2,5}"),
            (Capture((X,), 1, "name"), "(?P<name>x)"),
            (Concat((X, Alternate((Literal("a"), Literal("bc"))))), "x(?:a|bc)"),
            (Star((Alternate((Literal("a"), Literal("bc"))),)), "(?:a|bc)*"),
        ],
    )
    def test_render(self, node, expected):
        assert regex_to_pattern(node) == expected

    @pytest.mark.parametrize(
        "pattern",
        ["foo(-(bar|baz|quux|woop)){4}", r"[a-f0-9]{8}-(?:x|yz)+\d?", r"(?m)^a$\Z", "(a|)*b{2,}"],
    )
    def test_rendered_pattern_parses_to_same_tree(self, pattern):
        tree = parse_regex(pattern)
        assert parse_regex(regex_to_pattern(tree)) == tree

    def test_rendered_pattern_is_valid_python_regex(self):
        tree = parse_regex(r"[^\s\S]|[\w.]{2,3}")
        re.compile(regex_to_pattern(tree))
