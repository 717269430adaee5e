"""Configuration system for exprtreelib.

This module defines how callers specify an evaluation: which side owns the
traversal recursion, whether trees are regrouped for node-owned traversal,
how deep a tree may be, and what happens when an operation meets a variant
it doesn't handle.
"""

import sys
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from .error_policies import UnsupportedVariantPolicy


class TraversalOwnership(Enum):
    """Who drives the descent into child nodes.

    OPERATION: accept() only routes to the handler; handlers recurse.
    NODE: accept() visits left, self, right; handlers are single steps.
    """
    OPERATION = "operation"
    NODE = "node"


# Python frames one tree level costs in the most expensive operation
FRAMES_PER_LEVEL = 6
# Frames kept free for the caller and the test runner
FRAME_RESERVE = 50


@dataclass
class DepthConfig:
    """Configuration for the traversal depth guard."""

    max_depth: Optional[int] = None  # None = derive from the recursion limit

    def effective_max_depth(self) -> int:
        """Return the height limit actually enforced.

        Returns:
            max_depth if set, otherwise what the interpreter's recursion
            limit can safely accommodate
        """
        if self.max_depth is not None:
            return self.max_depth
        return max(1, (sys.getrecursionlimit() - FRAME_RESERVE) // FRAMES_PER_LEVEL)

    def allows(self, height: int) -> bool:
        """Check if a tree of the given height may be traversed."""
        return height <= self.effective_max_depth()


@dataclass
class EvaluationConfig:
    """Complete configuration for one evaluation.

    The ExecutionPlan validates this configuration against the operation
    and the tree before anything is visited.
    """

    # Traversal architecture
    ownership: TraversalOwnership = TraversalOwnership.OPERATION

    # Insert Paren nodes so node-owned traversal respects precedence
    auto_group: bool = True

    # Recursion guard
    depth: DepthConfig = field(default_factory=DepthConfig)

    # Applied to operations built by the high-level API
    policy: Optional[UnsupportedVariantPolicy] = None

    @classmethod
    def operation_owned(cls) -> 'EvaluationConfig':
        """Create config for operation-owned recursion."""
        return cls(ownership=TraversalOwnership.OPERATION)

    @classmethod
    def node_owned(cls, auto_group: bool = True) -> 'EvaluationConfig':
        """Create config for node-owned recursion.

        Args:
            auto_group: Regroup the tree before traversal (default True).
                With False, the tree is read as a flat left-to-right stream.

        Returns:
            EvaluationConfig for node-owned recursion
        """
        return cls(ownership=TraversalOwnership.NODE, auto_group=auto_group)

    def validate(self) -> List[str]:
        """Validate configuration for consistency.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        if not isinstance(self.ownership, TraversalOwnership):
            errors.append(f"ownership must be a TraversalOwnership, got {self.ownership!r}")

        if self.depth.max_depth is not None and self.depth.max_depth < 0:
            errors.append("max_depth cannot be negative")

        if self.policy is not None and not isinstance(self.policy, UnsupportedVariantPolicy):
            errors.append("policy must be an UnsupportedVariantPolicy")

        return errors
