"""Exception taxonomy for exprtreelib.

Everything the library raises on purpose derives from ExprTreeError, so
callers can catch the whole family in one place. Validation errors are
raised before traversal starts; computation errors are raised at the
offending handler and never deferred.
"""

from typing import Any, Optional


class ExprTreeError(Exception):
    """Base class for all exprtreelib errors."""
    pass


class MalformedTreeError(ExprTreeError, ValueError):
    """Raised when a node is built with a missing, foreign or shared child."""
    pass


class InvalidLiteralError(ExprTreeError, ValueError):
    """Raised when a literal's value cannot be coerced to a finite number."""

    def __init__(self, value: Any, reason: str):
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid literal {value!r}: {reason}")


class UnsupportedVariantError(ExprTreeError):
    """Raised when an operation meets a variant it has no handler for.

    Attributes:
        operation: Name of the operation class
        variant: Name of the variant (e.g. 'paren', 'service')
        element: The element being visited, if known
    """

    def __init__(self, operation: str, variant: str, element: Optional[Any] = None):
        self.operation = operation
        self.variant = variant
        self.element = element
        super().__init__(f"{operation} does not handle '{variant}' elements")


class OperationReuseError(ExprTreeError, RuntimeError):
    """Raised when one operation instance is asked to run a second traversal."""
    pass


class TraversalStateError(ExprTreeError, RuntimeError):
    """Raised when an operation's traversal state no longer adds up."""
    pass


class CapabilityMismatchError(ExprTreeError):
    """Raised when a configuration can't be satisfied by the operation or tree."""
    pass


class TreeTooDeepError(CapabilityMismatchError):
    """Raised when a tree is taller than the configured recursion budget."""

    def __init__(self, height: int, max_depth: int):
        self.height = height
        self.max_depth = max_depth
        super().__init__(
            f"Tree height {height} exceeds the maximum traversal depth {max_depth}"
        )


class NonFiniteResultError(ExprTreeError, ArithmeticError):
    """Raised when combining two values leaves the finite float range."""

    def __init__(self, symbol: str, left: Any, right: Any):
        self.symbol = symbol
        self.left = left
        self.right = right
        super().__init__(f"{left!r} {symbol} {right!r} is not a finite number")
