"""Execution planning for exprtreelib.

The ExecutionPlan validates that an EvaluationConfig can be satisfied by an
operation and a tree before a single node is visited, then runs the one
traversal the operation is good for.
"""

import logging
from typing import Any, Dict, List

from .config import EvaluationConfig, TraversalOwnership
from .core.node import Node
from .core.operation import Operation
from .errors import CapabilityMismatchError, TreeTooDeepError, UnsupportedVariantError
from .operations.recursive import Grouping

logger = logging.getLogger(__name__)


class ExecutionPlan:
    """Validated execution plan for one traversal.

    The plan is the bridge between caller intent (EvaluationConfig) and
    execution. Everything that can be checked up front is checked in the
    constructor:

    - the configuration is consistent
    - the operation owns recursion the way the config says
    - the tree fits in the recursion budget
    - a fail-fast operation handles every variant in the tree
    """

    def __init__(self, config: EvaluationConfig, operation: Operation, root: Node):
        """Create and validate an execution plan.

        Args:
            config: Evaluation configuration
            operation: A fresh operation instance
            root: Root of the tree to traverse

        Raises:
            CapabilityMismatchError: If config, operation and tree don't fit
            TreeTooDeepError: If the tree exceeds the depth limit
            UnsupportedVariantError: If a fail-fast operation would meet a
                variant it has no handler for
        """
        self.config = config
        self.operation = operation
        self.original_root = root

        config_errors = config.validate()
        if config_errors:
            raise CapabilityMismatchError(
                f"Invalid configuration: {'; '.join(config_errors)}"
            )

        capability_issues = self._validate_capabilities()
        if capability_issues:
            raise CapabilityMismatchError(
                f"Operation limitations: {'; '.join(capability_issues)}"
            )

        self.root = self._prepare_tree(root)
        self._validate_variants()

        logger.debug("Planned %s", self.get_summary())

    def _validate_capabilities(self) -> List[str]:
        """Validate the operation can satisfy the configuration.

        Returns:
            List of capability issues (empty if all satisfied)
        """
        issues = []

        if self.operation.ownership is not self.config.ownership:
            issues.append(
                f"{type(self.operation).__name__} uses {self.operation.ownership.value}-owned "
                f"recursion but the config asks for {self.config.ownership.value}-owned"
            )

        if not self.operation.fresh:
            issues.append("operation has already been used for a traversal")

        return issues

    def _prepare_tree(self, root: Node) -> Node:
        # Paren levels added by grouping fit in the per-level frame budget,
        # so only the height the caller built is checked
        self._check_height(root)
        if self.config.ownership is TraversalOwnership.NODE and self.config.auto_group:
            grouping = Grouping()
            root.accept(grouping)
            return grouping.tree
        return root

    def _check_height(self, root: Node) -> None:
        if not self.config.depth.allows(root.height):
            raise TreeTooDeepError(root.height, self.config.depth.effective_max_depth())

    def _validate_variants(self) -> None:
        if not self.operation.policy.fail_fast:
            return
        missing = self.operation.missing_kinds(self.root)
        if missing:
            variants = ", ".join(sorted(kind.value for kind in missing))
            raise UnsupportedVariantError(type(self.operation).__name__, variants)

    def execute(self) -> Operation:
        """Execute the plan.

        Returns:
            The operation, now holding its result
        """
        self.root.accept(self.operation)
        return self.operation

    def get_summary(self) -> Dict[str, Any]:
        """Get summary of execution plan.

        Returns:
            Dictionary with plan details
        """
        return {
            'ownership': self.config.ownership.value,
            'auto_group': self.config.auto_group,
            'max_depth': self.config.depth.effective_max_depth(),
            'height': self.root.height,
            'size': self.root.size,
            'operation': type(self.operation).__name__,
            'policy': type(self.operation.policy).__name__,
        }
