"""Operation-owned recursion.

Every handler here decides for itself when to visit the children of the
node it was handed. Two accumulation styles are shown:

- RecursivePrint shares one text buffer across the whole traversal, so
  grouping falls out of recursion depth and no Paren node is needed.
- RecursiveCalculate and Grouping evaluate each child in a fresh instance
  and combine the isolated results, trading allocations for state that
  never leaks between subtrees.
"""

from typing import List, Optional, Type

from ..core.node import BinaryNode, Literal, Mul, Node, NodeKind, Number, Paren, Plus, combine
from ..core.operation import RecursiveOperation

COMPOSITE_KINDS = frozenset({NodeKind.PLUS, NodeKind.MUL})


class RecursivePrint(RecursiveOperation):
    """Render a tree as a fully parenthesised infix string.

    Example:
        Mul(Literal(3), Plus(Literal(5), Literal(7))) -> "(3 * (5 + 7))"
    """

    def __init__(self, policy=None):
        super().__init__(policy)
        self._parts: List[str] = []

    def handle_literal(self, node: Literal) -> None:
        self._parts.append(str(node.value))

    def handle_plus(self, node: Plus) -> None:
        self._wrap(node)

    def handle_mul(self, node: Mul) -> None:
        self._wrap(node)

    def handle_paren(self, node: Paren) -> None:
        # Composites already bring their own parentheses
        node.inner.accept(self)

    def _wrap(self, node: BinaryNode) -> None:
        self._parts.append('(')
        node.left.accept(self)
        self._parts.append(f' {node.symbol} ')
        node.right.accept(self)
        self._parts.append(')')

    @property
    def expression(self) -> str:
        """The rendered expression ("" before traversal)."""
        return ''.join(self._parts)


class RecursiveCalculate(RecursiveOperation):
    """Evaluate a tree, one fresh instance per subtree."""

    def __init__(self, policy=None):
        super().__init__(policy)
        self._result: Number = 0

    def handle_literal(self, node: Literal) -> None:
        self._result = node.value

    def handle_plus(self, node: Plus) -> None:
        left, right = self._evaluate_operands(node)
        self._result = combine(node.symbol, left, right)

    def handle_mul(self, node: Mul) -> None:
        left, right = self._evaluate_operands(node)
        self._result = combine(node.symbol, left, right)

    def handle_paren(self, node: Paren) -> None:
        self._result = self._evaluate(node.inner)

    def _evaluate_operands(self, node: BinaryNode):
        return self._evaluate(node.left), self._evaluate(node.right)

    def _evaluate(self, subtree: Node) -> Number:
        calculator = self.spawn()
        subtree.accept(calculator)
        return calculator.result

    @property
    def result(self) -> Number:
        """The computed value (0 before traversal)."""
        return self._result


class Grouping(RecursiveOperation):
    """Rebuild a tree so node-owned traversal keeps its meaning.

    Node-owned traversal reads a tree as a flat left-to-right stream. The
    rebuilt tree wraps in Paren:

    - every composite right operand, and
    - a Plus left operand of a Mul, so the printed form stays faithful.

    Existing Paren nodes are kept. Grouping an already grouped tree returns
    an equal tree.
    """

    def __init__(self, policy=None):
        super().__init__(policy)
        self._tree: Optional[Node] = None

    def handle_literal(self, node: Literal) -> None:
        self._tree = Literal(node.value)

    def handle_plus(self, node: Plus) -> None:
        self._tree = self._rebuild(node, Plus)

    def handle_mul(self, node: Mul) -> None:
        self._tree = self._rebuild(node, Mul)

    def handle_paren(self, node: Paren) -> None:
        self._tree = Paren(self._group(node.inner))

    def _rebuild(self, node: BinaryNode, factory: Type[BinaryNode]) -> BinaryNode:
        left = self._group(node.left)
        right = self._group(node.right)

        if factory.kind is NodeKind.MUL and node.left.kind is NodeKind.PLUS:
            left = Paren(left)
        if node.right.kind in COMPOSITE_KINDS:
            right = Paren(right)

        return factory(left, right)

    def _group(self, subtree: Node) -> Node:
        grouping = self.spawn()
        subtree.accept(grouping)
        return grouping.tree

    @property
    def tree(self) -> Optional[Node]:
        """The regrouped tree (None before traversal)."""
        return self._tree
