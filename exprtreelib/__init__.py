"""exprtreelib - Extensible operations over immutable expression trees.

exprtreelib adds new operations to an arithmetic expression tree without
touching the node classes: a node's accept(operation) hook calls the
handler for its own variant, and the operation does the rest.

Choose who owns the recursion:
━━━━━━━━━━━━━━━━━━━━━━━━━━
Operation-owned (handlers recurse):
    from exprtreelib import RecursiveCalculate, RecursivePrint

Node-owned (nodes recurse, handlers step):
    from exprtreelib import StepwiseCalculate, StepwisePrint
━━━━━━━━━━━━━━━━━━━━━━━━━━

Or let the high-level API pick for you:
    from exprtreelib import evaluate, render
"""

__version__ = "0.1.0"

from .core import (
    Node,
    NodeKind,
    Literal,
    BinaryNode,
    Plus,
    Mul,
    Paren,
    Operation,
    RecursiveOperation,
    SteppedOperation,
)
from .operations import (
    RecursivePrint,
    RecursiveCalculate,
    Grouping,
    StepwisePrint,
    StepwiseCalculate,
)
from .config import EvaluationConfig, DepthConfig, TraversalOwnership
from .planning import ExecutionPlan
from .error_policies import (
    UnsupportedVariantPolicy,
    FailFastPolicy,
    IgnorePolicy,
    CollectErrorsPolicy,
    ThresholdPolicy,
)
from .errors import (
    ExprTreeError,
    MalformedTreeError,
    InvalidLiteralError,
    UnsupportedVariantError,
    OperationReuseError,
    TraversalStateError,
    CapabilityMismatchError,
    TreeTooDeepError,
    NonFiniteResultError,
)
from .api import evaluate, render, group, run_operation

__all__ = [
    "__version__",
    # Core
    "Node",
    "NodeKind",
    "Literal",
    "BinaryNode",
    "Plus",
    "Mul",
    "Paren",
    "Operation",
    "RecursiveOperation",
    "SteppedOperation",
    # Operations
    "RecursivePrint",
    "RecursiveCalculate",
    "Grouping",
    "StepwisePrint",
    "StepwiseCalculate",
    # Config and planning
    "EvaluationConfig",
    "DepthConfig",
    "TraversalOwnership",
    "ExecutionPlan",
    # Policies
    "UnsupportedVariantPolicy",
    "FailFastPolicy",
    "IgnorePolicy",
    "CollectErrorsPolicy",
    "ThresholdPolicy",
    # Errors
    "ExprTreeError",
    "MalformedTreeError",
    "InvalidLiteralError",
    "UnsupportedVariantError",
    "OperationReuseError",
    "TraversalStateError",
    "CapabilityMismatchError",
    "TreeTooDeepError",
    "NonFiniteResultError",
    # API
    "evaluate",
    "render",
    "group",
    "run_operation",
]
