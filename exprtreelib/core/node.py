"""Expression nodes for exprtreelib.

Nodes are immutable data. The only way an operation gets to observe a node
is through the node's dispatch hook, accept(operation), which always calls
the handler belonging to the node's own variant. The variant set is closed:
Literal, Plus, Mul and Paren.

How accept() descends depends on who owns the recursion:

- operation-owned: accept() calls the handler and nothing else; the handler
  decides whether and when to visit the children.
- node-owned: composites visit left, call their handler, then visit right.
  Literals and Parens call their handler directly.
"""

import math
import numbers
import operator
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, ClassVar, Dict, FrozenSet, Iterator, List, Optional, Tuple, Union

from ..config import TraversalOwnership
from ..errors import InvalidLiteralError, MalformedTreeError, NonFiniteResultError

Number = Union[int, float]

OPERATORS: Dict[str, Callable[[Number, Number], Number]] = {
    '+': operator.add,
    '*': operator.mul,
}


class NodeKind(Enum):
    """Discriminant carried by every node variant."""
    LITERAL = "literal"
    PLUS = "plus"
    MUL = "mul"
    PAREN = "paren"


def coerce_number(value: Any) -> Number:
    """Coerce a literal's raw value to the library's scalar kind.

    int and float values are kept as they are, numeric strings are parsed
    (integers first), other real numbers become float.

    Args:
        value: Raw literal value

    Returns:
        The value as a finite int or float

    Raises:
        InvalidLiteralError: If the value is not a finite real number
    """
    if isinstance(value, bool):
        raise InvalidLiteralError(value, "booleans are not numbers")

    if isinstance(value, str):
        text = value.strip()
        try:
            number = int(text)
        except ValueError:
            try:
                number = float(text)
            except ValueError:
                raise InvalidLiteralError(value, "not a numeric string") from None
    elif isinstance(value, (int, float)):
        number = value
    elif isinstance(value, numbers.Integral):
        number = int(value)
    elif isinstance(value, numbers.Real):
        number = float(value)
    else:
        raise InvalidLiteralError(value, f"unsupported type {type(value).__name__}")

    if isinstance(number, float) and not math.isfinite(number):
        raise InvalidLiteralError(value, "not a finite number")
    return number


def combine(symbol: str, left: Number, right: Number) -> Number:
    """Apply a binary operator to two operand values.

    Args:
        symbol: '+' or '*'
        left: Left operand value
        right: Right operand value

    Returns:
        The combined value

    Raises:
        NonFiniteResultError: If the result overflows the float range
    """
    try:
        result = OPERATORS[symbol](left, right)
    except OverflowError:
        raise NonFiniteResultError(symbol, left, right) from None
    if isinstance(result, float) and not math.isfinite(result):
        raise NonFiniteResultError(symbol, left, right)
    return result


class Node(ABC):
    """Abstract base class for expression tree nodes.

    Subclasses are frozen dataclasses. Besides the dispatch hook, nodes
    offer a few read-only structural helpers. Those helpers, equality and
    hashing never recurse, so they are safe on trees of any height. The
    dataclass repr does recurse.

    A node belongs to at most one parent. Building a composite claims its
    children; handing a claimed node to a second parent is rejected.
    """

    kind: ClassVar[NodeKind]

    def accept(self, operation) -> None:
        """Let an operation observe this node.

        Args:
            operation: Operation to dispatch to
        """
        with operation.visit_scope(self):
            self._dispatch(operation)

    @abstractmethod
    def _dispatch(self, operation) -> None:
        """Route to the handler for this variant."""
        pass

    def children(self) -> Tuple['Node', ...]:
        """Return the direct children, left to right."""
        return ()

    def is_leaf(self) -> bool:
        return not self.children()

    def walk(self) -> Iterator['Node']:
        """Iterate over the subtree in pre-order, this node first."""
        stack: List[Node] = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children()))

    def kinds(self) -> FrozenSet[NodeKind]:
        """Return every variant that occurs in the subtree."""
        return frozenset(node.kind for node in self.walk())

    def _tokens(self) -> Iterator[Tuple[NodeKind, Optional[Number]]]:
        # Pre-order kinds determine the shape; only literals carry a value
        for node in self.walk():
            yield node.kind, getattr(node, 'value', None)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Node):
            return NotImplemented
        if self is other:
            return True
        if self.size != other.size:
            return False
        return all(mine == theirs for mine, theirs in zip(self._tokens(), other._tokens()))

    def __hash__(self) -> int:
        return hash(tuple(self._tokens()))


def _check_child(parent: str, role: str, child: Any) -> None:
    if child is None:
        raise MalformedTreeError(f"{parent} is missing its {role} child")
    if not isinstance(child, Node):
        raise MalformedTreeError(
            f"{parent} {role} child must be a Node, got {type(child).__name__}"
        )
    if child._adopted:
        raise MalformedTreeError(
            f"{parent} {role} child ({type(child).__name__}) already belongs to another node"
        )


def _adopt(*children: Node) -> None:
    for child in children:
        object.__setattr__(child, '_adopted', True)


@dataclass(frozen=True, eq=False)
class Literal(Node):
    """Leaf holding a single number."""

    value: Number
    height: int = field(default=1, init=False, repr=False, compare=False)
    size: int = field(default=1, init=False, repr=False, compare=False)
    _adopted: bool = field(default=False, init=False, repr=False, compare=False)

    kind = NodeKind.LITERAL

    def __post_init__(self):
        object.__setattr__(self, 'value', coerce_number(self.value))

    def _dispatch(self, operation) -> None:
        operation.handle_literal(self)


@dataclass(frozen=True, eq=False)
class BinaryNode(Node):
    """Composite with exactly two order-significant children."""

    left: Node
    right: Node
    height: int = field(default=0, init=False, repr=False, compare=False)
    size: int = field(default=0, init=False, repr=False, compare=False)
    _adopted: bool = field(default=False, init=False, repr=False, compare=False)

    symbol: ClassVar[str]

    def __post_init__(self):
        name = type(self).__name__
        _check_child(name, 'left', self.left)
        _check_child(name, 'right', self.right)
        if self.left is self.right:
            raise MalformedTreeError(f"{name} uses the same node as both children")
        _adopt(self.left, self.right)
        object.__setattr__(self, 'height', 1 + max(self.left.height, self.right.height))
        object.__setattr__(self, 'size', 1 + self.left.size + self.right.size)

    def children(self) -> Tuple[Node, ...]:
        return (self.left, self.right)

    def _dispatch(self, operation) -> None:
        if operation.ownership is TraversalOwnership.NODE:
            self.left.accept(operation)
            self._handle(operation)
            self.right.accept(operation)
        else:
            self._handle(operation)

    @abstractmethod
    def _handle(self, operation) -> None:
        pass


@dataclass(frozen=True, eq=False)
class Plus(BinaryNode):
    """Addition of left and right."""

    kind = NodeKind.PLUS
    symbol = '+'

    def _handle(self, operation) -> None:
        operation.handle_plus(self)


@dataclass(frozen=True, eq=False)
class Mul(BinaryNode):
    """Multiplication of left and right."""

    kind = NodeKind.MUL
    symbol = '*'

    def _handle(self, operation) -> None:
        operation.handle_mul(self)


@dataclass(frozen=True, eq=False)
class Paren(Node):
    """Grouping marker around a single subtree.

    Under node-owned traversal this is the only way to keep precedence: the
    handler re-enters traversal on the inner subtree in its own scope.
    """

    inner: Node
    height: int = field(default=0, init=False, repr=False, compare=False)
    size: int = field(default=0, init=False, repr=False, compare=False)
    _adopted: bool = field(default=False, init=False, repr=False, compare=False)

    kind = NodeKind.PAREN

    def __post_init__(self):
        _check_child('Paren', 'inner', self.inner)
        _adopt(self.inner)
        object.__setattr__(self, 'height', 1 + self.inner.height)
        object.__setattr__(self, 'size', 1 + self.inner.size)

    def children(self) -> Tuple[Node, ...]:
        return (self.inner,)

    def _dispatch(self, operation) -> None:
        operation.handle_paren(self)
