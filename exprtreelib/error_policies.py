"""
Unsupported-variant policies for exprtreelib.

An operation only has to implement the handlers for the variants it expects
to meet. When it is dispatched against any other variant, the base class
hands the situation to a policy object, which decides whether the traversal
stops or carries on. FailFastPolicy is the default everywhere.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List

from .errors import UnsupportedVariantError

logger = logging.getLogger(__name__)


class UnsupportedVariantPolicy(ABC):
    """
    Base class for unsupported-variant policies.

    Subclasses implement different strategies for dealing with an operation
    that was handed an element it has no handler for.
    """

    # Plans reject trees with unsupported variants up front for fail-fast policies
    fail_fast: bool = False

    @abstractmethod
    def handle(self, error: UnsupportedVariantError, operation: Any, element: Any) -> None:
        """
        Handle an unsupported dispatch.

        Args:
            error: The error describing the missing handler
            operation: The operation instance that was dispatched to
            element: The element being visited

        Raises:
            UnsupportedVariantError: If the policy decides traversal must stop
        """
        pass

    def _record(self, error: UnsupportedVariantError, element: Any) -> Dict[str, Any]:
        return {
            'operation': error.operation,
            'variant': error.variant,
            'element': element,
            'error': error,
            'error_message': str(error),
        }


class FailFastPolicy(UnsupportedVariantPolicy):
    """
    Policy that immediately raises, stopping traversal.

    This is the default behavior. A half-visited tree never produces a
    result that looks valid.
    """

    fail_fast = True

    def handle(self, error: UnsupportedVariantError, operation: Any, element: Any) -> None:
        """Raise the error immediately."""
        raise error


class IgnorePolicy(UnsupportedVariantPolicy):
    """
    Policy that treats an unsupported variant as a silent no-op.

    The element (and, for composites under operation-owned traversal, its
    whole subtree) contributes nothing to the result. Opt-in only.
    """

    def handle(self, error: UnsupportedVariantError, operation: Any, element: Any) -> None:
        """Do nothing."""
        logger.debug("Ignoring unsupported dispatch: %s", error)


class CollectErrorsPolicy(UnsupportedVariantPolicy):
    """
    Policy that records every unsupported dispatch and continues.

    Useful for finding out everything an operation is missing in one pass.
    """

    def __init__(self, verbose: bool = False):
        """
        Initialize the policy.

        Args:
            verbose: If True, log a warning for every unsupported dispatch
        """
        self.errors: List[Dict[str, Any]] = []
        self.verbose = verbose

    def handle(self, error: UnsupportedVariantError, operation: Any, element: Any) -> None:
        """Record the error and let traversal continue."""
        self.errors.append(self._record(error, element))
        if self.verbose:
            logger.warning("Skipping element: %s", error)

    def get_statistics(self) -> dict:
        """
        Get statistics about the dispatches that were skipped.

        Returns:
            Dictionary with total count, per-variant counts and full details
        """
        by_variant: Dict[str, int] = {}
        for record in self.errors:
            by_variant[record['variant']] = by_variant.get(record['variant'], 0) + 1
        return {
            'total_errors': len(self.errors),
            'by_variant': by_variant,
            'errors': self.errors,
        }


class ThresholdPolicy(UnsupportedVariantPolicy):
    """
    Policy that tolerates unsupported dispatches up to a threshold.

    Once more than max_errors have been seen the next one is raised, on the
    grounds that the operation is clearly being used on the wrong kind of tree.
    """

    def __init__(self, max_errors: int = 10):
        if max_errors < 0:
            raise ValueError("max_errors cannot be negative")
        self.max_errors = max_errors
        self.error_count = 0
        self.errors: List[UnsupportedVariantError] = []

    def handle(self, error: UnsupportedVariantError, operation: Any, element: Any) -> None:
        """Swallow the error if under the threshold, otherwise raise it."""
        self.error_count += 1
        self.errors.append(error)

        if self.error_count > self.max_errors:
            raise error

        logger.warning("[%d/%d] %s", self.error_count, self.max_errors, error)
