"""High-level API for exprtreelib.

Simple, functional interfaces for the common cases. These wrap the
object-oriented API (configs, plans, operations) and build one fresh
operation per call.

Example:
    >>> tree = Mul(Literal(3), Plus(Literal(5), Literal(7)))
    >>> evaluate(tree)
    36
    >>> render(tree)
    '(3 * (5 + 7))'
    >>> render(tree, ownership="node")
    '3 * (5 + 7)'
"""

from typing import Dict, Optional, Type, Union

from .config import DepthConfig, EvaluationConfig, TraversalOwnership
from .core.node import Node, Number
from .core.operation import Operation
from .error_policies import UnsupportedVariantPolicy
from .operations.recursive import Grouping, RecursiveCalculate, RecursivePrint
from .operations.stepwise import StepwiseCalculate, StepwisePrint
from .planning import ExecutionPlan

_CALCULATORS: Dict[TraversalOwnership, Type[Operation]] = {
    TraversalOwnership.OPERATION: RecursiveCalculate,
    TraversalOwnership.NODE: StepwiseCalculate,
}

_PRINTERS: Dict[TraversalOwnership, Type[Operation]] = {
    TraversalOwnership.OPERATION: RecursivePrint,
    TraversalOwnership.NODE: StepwisePrint,
}


def evaluate(
    root: Node,
    ownership: Union[TraversalOwnership, str] = TraversalOwnership.OPERATION,
    auto_group: bool = True,
    max_depth: Optional[int] = None,
    policy: Optional[UnsupportedVariantPolicy] = None,
) -> Number:
    """Compute the value of an expression tree.

    Args:
        root: Root of the tree
        ownership: Traversal ownership ("operation" or "node")
        auto_group: Regroup the tree before node-owned traversal
        max_depth: Maximum tree height (None = derive from recursion limit)
        policy: Unsupported-variant policy for the operation

    Returns:
        The numeric result
    """
    config = _build_config(ownership, auto_group, max_depth, policy)
    operation = run_operation(root, _CALCULATORS[config.ownership](policy), config)
    return operation.result


def render(
    root: Node,
    ownership: Union[TraversalOwnership, str] = TraversalOwnership.OPERATION,
    auto_group: bool = True,
    max_depth: Optional[int] = None,
    policy: Optional[UnsupportedVariantPolicy] = None,
) -> str:
    """Render an expression tree as infix text.

    Operation-owned rendering parenthesises every composite; node-owned
    rendering only emits the parentheses that Paren nodes ask for.

    Args:
        root: Root of the tree
        ownership: Traversal ownership ("operation" or "node")
        auto_group: Regroup the tree before node-owned traversal
        max_depth: Maximum tree height (None = derive from recursion limit)
        policy: Unsupported-variant policy for the operation

    Returns:
        The rendered expression
    """
    config = _build_config(ownership, auto_group, max_depth, policy)
    operation = run_operation(root, _PRINTERS[config.ownership](policy), config)
    return operation.expression


def group(root: Node, max_depth: Optional[int] = None) -> Node:
    """Return a copy of the tree with Paren inserted where precedence needs it.

    Args:
        root: Root of the tree
        max_depth: Maximum tree height (None = derive from recursion limit)

    Returns:
        A new, equivalent tree safe for node-owned traversal
    """
    config = EvaluationConfig(depth=DepthConfig(max_depth=max_depth))
    return run_operation(root, Grouping(), config).tree


def run_operation(
    root: Node,
    operation: Operation,
    config: Optional[EvaluationConfig] = None,
) -> Operation:
    """Validate and run one traversal of any operation.

    Args:
        root: Root of the tree
        operation: A fresh operation instance
        config: Evaluation config (default: matches the operation's ownership)

    Returns:
        The operation, holding its result
    """
    if config is None:
        config = EvaluationConfig(ownership=operation.ownership)
    return ExecutionPlan(config, operation, root).execute()


def _build_config(
    ownership: Union[TraversalOwnership, str],
    auto_group: bool,
    max_depth: Optional[int],
    policy: Optional[UnsupportedVariantPolicy],
) -> EvaluationConfig:
    return EvaluationConfig(
        ownership=_parse_ownership(ownership),
        auto_group=auto_group,
        depth=DepthConfig(max_depth=max_depth),
        policy=policy,
    )


def _parse_ownership(ownership: Union[TraversalOwnership, str]) -> TraversalOwnership:
    """Convert an ownership name to the enum."""
    if isinstance(ownership, TraversalOwnership):
        return ownership

    ownership_map = {
        'operation': TraversalOwnership.OPERATION,
        'operation_owned': TraversalOwnership.OPERATION,
        'node': TraversalOwnership.NODE,
        'node_owned': TraversalOwnership.NODE,
    }

    ownership_lower = str(ownership).lower()
    if ownership_lower not in ownership_map:
        raise ValueError(
            f"Unknown traversal ownership: {ownership}. "
            f"Choose from: {', '.join(ownership_map.keys())}"
        )
    return ownership_map[ownership_lower]
