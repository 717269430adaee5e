"""Tests for expression node construction and structure.

Covers literal coercion, construction-time validation of composites,
immutability and the non-recursive structural helpers.
"""

import dataclasses
import sys
import time
from decimal import Decimal
from fractions import Fraction
from pathlib import Path

import pytest

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from exprtreelib import (
    InvalidLiteralError,
    Literal,
    MalformedTreeError,
    Mul,
    NodeKind,
    Paren,
    Plus,
)


def build_sample():
    """(3 * (5 + 7)) + (2 + 4)"""
    return Plus(
        Mul(Literal(3), Plus(Literal(5), Literal(7))),
        Plus(Literal(2), Literal(4)),
    )


class TestLiteralCoercion:
    """Literal values are coerced once, at construction."""

    @pytest.mark.parametrize("raw, expected", [
        (5, 5),
        (2.5, 2.5),
        ("5", 5),
        (" 42 ", 42),
        ("2.5", 2.5),
        ("-3", -3),
        (Fraction(1, 4), 0.25),
    ])
    def test_accepted_values(self, raw, expected):
        literal = Literal(raw)
        assert literal.value == expected
        assert type(literal.value) is type(expected)

    @pytest.mark.parametrize("raw", [
        "abc",
        "",
        "nan",
        "inf",
        float("nan"),
        float("-inf"),
        None,
        True,
        False,
        3 + 4j,
        [1],
        Decimal("1.5"),
    ])
    def test_rejected_values(self, raw):
        with pytest.raises(InvalidLiteralError):
            Literal(raw)

    def test_error_carries_value(self):
        with pytest.raises(InvalidLiteralError) as excinfo:
            Literal("seven")
        assert excinfo.value.value == "seven"
        assert "seven" in str(excinfo.value)

    def test_invalid_literal_is_value_error(self):
        with pytest.raises(ValueError):
            Literal("x")


class TestMalformedTrees:
    """Malformed trees are rejected before any traversal."""

    def test_missing_left_child(self):
        with pytest.raises(MalformedTreeError, match="missing its left child"):
            Plus(None, Literal(1))

    def test_missing_right_child(self):
        with pytest.raises(MalformedTreeError, match="missing its right child"):
            Mul(Literal(1), None)

    def test_missing_inner(self):
        with pytest.raises(MalformedTreeError):
            Paren(None)

    def test_non_node_child(self):
        with pytest.raises(MalformedTreeError, match="must be a Node"):
            Plus(Literal(1), 2)

    def test_same_node_twice(self):
        leaf = Literal(1)
        with pytest.raises(MalformedTreeError):
            Plus(leaf, leaf)

    def test_shared_subtree(self):
        shared = Plus(Literal(1), Literal(2))
        with pytest.raises(MalformedTreeError, match="already belongs to another node"):
            Mul(Paren(shared), Plus(Literal(3), shared))

    def test_node_cannot_join_a_second_tree(self):
        leaf = Literal(7)
        Plus(leaf, Literal(1))
        with pytest.raises(MalformedTreeError):
            Mul(Literal(2), leaf)

    def test_rejected_construction_claims_nothing(self):
        leaf = Literal(7)
        with pytest.raises(MalformedTreeError):
            Plus(leaf, None)
        assert Plus(leaf, Literal(1)).left is leaf

    def test_equal_but_distinct_nodes_are_fine(self):
        tree = Plus(Literal(1), Literal(1))
        assert tree.left == tree.right
        assert tree.left is not tree.right


class TestImmutability:
    """Nodes can't be changed after construction."""

    def test_literal_is_frozen(self):
        literal = Literal(3)
        with pytest.raises(dataclasses.FrozenInstanceError):
            literal.value = 4

    def test_composite_is_frozen(self):
        tree = Plus(Literal(1), Literal(2))
        with pytest.raises(dataclasses.FrozenInstanceError):
            tree.left = Literal(9)

    def test_paren_is_frozen(self):
        paren = Paren(Literal(1))
        with pytest.raises(dataclasses.FrozenInstanceError):
            paren.inner = Literal(2)


class TestStructure:
    """Structural helpers."""

    def test_kind_discriminants(self):
        assert Literal(1).kind is NodeKind.LITERAL
        assert Plus(Literal(1), Literal(2)).kind is NodeKind.PLUS
        assert Mul(Literal(1), Literal(2)).kind is NodeKind.MUL
        assert Paren(Literal(1)).kind is NodeKind.PAREN

    def test_symbols(self):
        assert Plus(Literal(1), Literal(2)).symbol == '+'
        assert Mul(Literal(1), Literal(2)).symbol == '*'

    def test_height_and_size(self):
        tree = build_sample()
        assert tree.height == 4
        assert tree.size == 9
        assert Literal(1).height == 1
        assert Paren(Literal(1)).size == 2

    def test_walk_is_pre_order(self):
        tree = build_sample()
        values = [node.value for node in tree.walk() if node.kind is NodeKind.LITERAL]
        assert values == [3, 5, 7, 2, 4]
        assert next(tree.walk()) is tree

    def test_kinds(self):
        assert build_sample().kinds() == {NodeKind.PLUS, NodeKind.MUL, NodeKind.LITERAL}
        assert Paren(Literal(1)).kinds() == {NodeKind.PAREN, NodeKind.LITERAL}

    def test_children(self):
        left, right = Literal(1), Literal(2)
        tree = Mul(left, right)
        assert tree.children() == (left, right)
        assert Literal(1).children() == ()
        assert Literal(1).is_leaf()
        assert not tree.is_leaf()

    def test_structural_equality(self):
        assert build_sample() == build_sample()
        assert Plus(Literal(1), Literal(2)) != Mul(Literal(1), Literal(2))
        assert hash(build_sample()) == hash(build_sample())

    def test_deep_tree_construction_does_not_recurse(self):
        tree = Literal(0)
        for i in range(1500):
            tree = Plus(tree, Literal(i))
        assert tree.height == 1501
        assert sum(1 for _ in tree.walk()) == tree.size

    def test_long_chain_builds_in_linear_time(self):
        start = time.perf_counter()
        tree = Literal(0)
        for i in range(10000):
            tree = Plus(tree, Literal(i))
        elapsed = time.perf_counter() - start

        assert tree.size == 20001
        assert elapsed < 2.0, f"Building 10000 levels took {elapsed:.2f}s"

    def test_equality_and_hash_on_tall_trees(self):
        def tall(depth, last):
            tree = Literal(0)
            for i in range(depth):
                tree = Plus(tree, Literal(i))
            return Mul(tree, Literal(last))

        assert tall(3000, 1) == tall(3000, 1)
        assert tall(3000, 1) != tall(3000, 2)
        assert hash(tall(3000, 1)) == hash(tall(3000, 1))

    def test_equality_ignores_numeric_type(self):
        assert Plus(Literal(1), Literal(2)) == Plus(Literal(1.0), Literal(2))
        assert hash(Literal(1)) == hash(Literal(1.0))
        assert Literal(1) != "1"
