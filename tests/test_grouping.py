"""Tests for Grouping, the rebuild that makes trees safe for node-owned traversal."""

from exprtreelib import (
    Grouping,
    Literal,
    Mul,
    Paren,
    Plus,
    StepwisePrint,
    group,
)


def regroup(tree):
    grouping = Grouping()
    tree.accept(grouping)
    return grouping.tree


def stepwise_text(tree):
    printer = StepwisePrint()
    tree.accept(printer)
    return printer.expression


def test_literal_is_copied():
    original = Literal(4)
    grouped = regroup(original)
    assert grouped == original
    assert grouped is not original


def test_composite_right_operand_is_wrapped():
    tree = Mul(Literal(3), Plus(Literal(5), Literal(7)))
    assert regroup(tree) == Mul(Literal(3), Paren(Plus(Literal(5), Literal(7))))


def test_sum_under_product_on_the_left_is_wrapped():
    tree = Mul(Plus(Literal(1), Literal(2)), Literal(3))
    assert regroup(tree) == Mul(Paren(Plus(Literal(1), Literal(2))), Literal(3))


def test_product_under_sum_on_the_left_is_kept_flat():
    tree = Plus(Mul(Literal(1), Literal(2)), Literal(3))
    assert regroup(tree) == tree


def test_existing_paren_is_not_doubled():
    tree = Mul(Literal(3), Paren(Plus(Literal(5), Literal(7))))
    assert regroup(tree) == tree


def test_grouping_is_idempotent():
    tree = Plus(
        Mul(Plus(Literal(1), Literal(2)), Mul(Literal(3), Literal(4))),
        Plus(Literal(5), Mul(Literal(6), Literal(7))),
    )
    once = regroup(tree)
    assert regroup(once) == once


def test_original_tree_is_untouched():
    tree = Mul(Literal(3), Plus(Literal(5), Literal(7)))
    snapshot = Mul(Literal(3), Plus(Literal(5), Literal(7)))
    regroup(tree)
    assert tree == snapshot


def test_grouped_tree_prints_with_precedence():
    tree = Plus(
        Mul(Literal(3), Plus(Literal(5), Literal(7))),
        Plus(Literal(2), Literal(4)),
    )
    assert stepwise_text(regroup(tree)) == "3 * (5 + 7) + (2 + 4)"


def test_group_api_matches_operation():
    tree = Plus(Literal(1), Mul(Literal(2), Literal(3)))
    assert group(tree) == regroup(tree)
    assert group(tree) == Plus(Literal(1), Paren(Mul(Literal(2), Literal(3))))


def test_tree_default_before_traversal():
    assert Grouping().tree is None
