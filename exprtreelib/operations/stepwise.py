"""Node-owned recursion.

The nodes drive the descent (left, self, right), so each handler here is a
single step. A composite's handler fires between its two children and never
sees either of their values, which is why the calculator threads a
pending-operator register through the traversal.
"""

from typing import List, Optional

from ..core.node import BinaryNode, Literal, Mul, Number, Paren, Plus, combine
from ..core.operation import SteppedOperation
from ..errors import TraversalStateError


class StepwisePrint(SteppedOperation):
    """Render a tree as a flat infix stream.

    Only Paren nodes emit parentheses, so structure that isn't spelled out
    with Paren is lost:

        Mul(Literal(3), Paren(Plus(Literal(5), Literal(7)))) -> "3 * (5 + 7)"
        Mul(Literal(3), Plus(Literal(5), Literal(7)))        -> "3 * 5 + 7"
    """

    def __init__(self, policy=None):
        super().__init__(policy)
        self._parts: List[str] = []

    def handle_literal(self, node: Literal) -> None:
        self._parts.append(str(node.value))

    def handle_plus(self, node: Plus) -> None:
        self._parts.append(f' {node.symbol} ')

    def handle_mul(self, node: Mul) -> None:
        self._parts.append(f' {node.symbol} ')

    def handle_paren(self, node: Paren) -> None:
        self._parts.append('(')
        node.inner.accept(self)
        self._parts.append(')')

    @property
    def expression(self) -> str:
        """The rendered expression ("" before traversal)."""
        return ''.join(self._parts)


class StepwiseCalculate(SteppedOperation):
    """Evaluate a tree with a running total and a pending-operator register.

    Register states: empty, holding '+', holding '*'.

    - handle_plus / handle_mul: empty -> holding(op)
    - handle_literal / handle_paren supply a value: holding(op) -> empty after
      combining it into the total; empty + first value initialises the total

    Values combine strictly left to right; precedence only survives through
    Paren, whose subtree is evaluated in a fresh instance.
    """

    def __init__(self, policy=None):
        super().__init__(policy)
        self._result: Number = 0
        self._pending: Optional[str] = None
        self._primed = False

    def handle_literal(self, node: Literal) -> None:
        self._consume(node.value)

    def handle_plus(self, node: Plus) -> None:
        self._hold(node)

    def handle_mul(self, node: Mul) -> None:
        self._hold(node)

    def handle_paren(self, node: Paren) -> None:
        calculator = self.spawn()
        node.inner.accept(calculator)
        self._consume(calculator.result)

    def _hold(self, node: BinaryNode) -> None:
        if self._pending is not None:
            raise TraversalStateError(
                f"Operator '{node.symbol}' arrived while '{self._pending}' is still pending"
            )
        if not self._primed:
            raise TraversalStateError(f"Operator '{node.symbol}' arrived before any value")
        self._pending = node.symbol

    def _consume(self, value: Number) -> None:
        if self._pending is None:
            if self._primed:
                raise TraversalStateError(f"Value {value!r} arrived with no pending operator")
            self._result = value
            self._primed = True
            return

        self._result = combine(self._pending, self._result, value)
        self._pending = None

    @property
    def pending(self) -> Optional[str]:
        """The operator waiting for its right-hand value, if any."""
        return self._pending

    @property
    def result(self) -> Number:
        """The computed value (0 before traversal)."""
        return self._result
