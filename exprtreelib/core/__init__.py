"""Core abstractions for exprtreelib.

This package contains the node variants and the operation contract that
every concrete operation builds on.
"""

from .node import (
    Node,
    NodeKind,
    Literal,
    BinaryNode,
    Plus,
    Mul,
    Paren,
    coerce_number,
    combine,
)
from .operation import Operation, RecursiveOperation, SteppedOperation

__all__ = [
    "Node",
    "NodeKind",
    "Literal",
    "BinaryNode",
    "Plus",
    "Mul",
    "Paren",
    "coerce_number",
    "combine",
    "Operation",
    "RecursiveOperation",
    "SteppedOperation",
]
