"""Operation contract for exprtreelib.

An Operation is a stateful traversal client: it carries an accumulator,
is driven through a tree by the nodes' dispatch hooks, and exposes its
result read-only afterwards. One instance serves exactly one root
traversal.

Two base classes fix who owns the recursion:

- RecursiveOperation: handlers visit children themselves.
- SteppedOperation: nodes visit children; handlers see one step at a time.
"""

import logging
from abc import ABC
from contextlib import contextmanager
from enum import Enum
from typing import ClassVar, Dict, FrozenSet, Iterator, Optional, Type

from cachetools import LRUCache, cached

from ..config import TraversalOwnership
from ..error_policies import FailFastPolicy, UnsupportedVariantPolicy
from ..errors import OperationReuseError, UnsupportedVariantError
from .node import Node, NodeKind

logger = logging.getLogger(__name__)


class _State(Enum):
    FRESH = "fresh"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


_HANDLERS: Dict[NodeKind, str] = {
    NodeKind.LITERAL: 'handle_literal',
    NodeKind.PLUS: 'handle_plus',
    NodeKind.MUL: 'handle_mul',
    NodeKind.PAREN: 'handle_paren',
}


@cached(LRUCache(maxsize=256))
def _overridden_kinds(cls: Type["Operation"]) -> FrozenSet[NodeKind]:
    # Keyed by class; handler methods are fixed once a class is defined
    return frozenset(
        kind for kind, name in _HANDLERS.items()
        if getattr(cls, name) is not getattr(Operation, name)
    )


class Operation(ABC):
    """Abstract base class for operations over expression trees.

    Concrete operations override the handlers for the variants they expect
    to meet. A handler that isn't overridden routes the node to the
    instance's UnsupportedVariantPolicy, which fails fast by default.

    Lifecycle:
        fresh -> running (first accept on a root) -> completed | failed.
        Any attempt to start a second root traversal raises
        OperationReuseError; build a new instance instead.
    """

    ownership: ClassVar[TraversalOwnership]

    def __init__(self, policy: Optional[UnsupportedVariantPolicy] = None):
        """Initialize the operation.

        Args:
            policy: What to do with unsupported variants (default: fail fast)
        """
        self.policy = policy or FailFastPolicy()
        self._state = _State.FRESH
        self._depth = 0

    # Handlers

    def handle_literal(self, node) -> None:
        self._unsupported(node)

    def handle_plus(self, node) -> None:
        self._unsupported(node)

    def handle_mul(self, node) -> None:
        self._unsupported(node)

    def handle_paren(self, node) -> None:
        self._unsupported(node)

    def _unsupported(self, node: Node) -> None:
        error = UnsupportedVariantError(type(self).__name__, node.kind.value, node)
        self.policy.handle(error, self, node)

    # Capabilities

    @classmethod
    def supported_kinds(cls) -> FrozenSet[NodeKind]:
        """Return the variants this operation class has handlers for."""
        return _overridden_kinds(cls)

    def missing_kinds(self, root: Node) -> FrozenSet[NodeKind]:
        """Return the variants in root's tree this operation can't handle."""
        return root.kinds() - self.supported_kinds()

    def spawn(self) -> 'Operation':
        """Create a fresh instance of the same operation for a sub-traversal.

        Subclasses whose constructor takes extra arguments must override this.
        """
        return type(self)(policy=self.policy)

    # Lifecycle

    @property
    def fresh(self) -> bool:
        """True until the first root traversal starts."""
        return self._state is _State.FRESH

    @property
    def completed(self) -> bool:
        """True once a root traversal has finished without raising."""
        return self._state is _State.COMPLETED

    @contextmanager
    def visit_scope(self, node: Node) -> Iterator[None]:
        """Track traversal depth around one accept() call.

        Entering at depth zero starts the instance's one and only root
        traversal; leaving depth zero ends it.

        Raises:
            OperationReuseError: If the instance already ran a traversal
        """
        if self._depth == 0:
            if self._state is not _State.FRESH:
                raise OperationReuseError(
                    f"{type(self).__name__} instance already {self._state.value} a "
                    f"traversal; create a new instance for the {node.kind.value} node"
                )
            self._state = _State.RUNNING

        self._depth += 1
        try:
            yield
        except BaseException:
            self._depth -= 1
            if self._depth == 0:
                self._state = _State.FAILED
            raise

        self._depth -= 1
        if self._depth == 0:
            self._state = _State.COMPLETED
            logger.debug("%s completed traversal of %s", type(self).__name__, node.kind.value)


class RecursiveOperation(Operation):
    """Operation that owns the recursion.

    accept() only calls the matching handler; a composite handler must call
    accept() on the children itself, in whatever order it needs.
    """

    ownership = TraversalOwnership.OPERATION


class SteppedOperation(Operation):
    """Operation whose recursion is owned by the nodes.

    Composite nodes visit left, call the handler, then visit right, so a
    composite handler runs between its children and sees neither of their
    values. Paren handlers re-enter traversal on the inner subtree.
    """

    ownership = TraversalOwnership.NODE
