"""Availability checks over products and services.

The same double-dispatch idea as the expression operations, applied to a
small business domain. Every element exposes accept(check), which calls
exactly one handler on the check and hands it a single boolean outcome.
The outcome is computed directly by the element; there are no callbacks
and no inspection of class names.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import date
from typing import Callable, Dict, Iterable, List, Optional

from .error_policies import FailFastPolicy, UnsupportedVariantPolicy
from .errors import UnsupportedVariantError

logger = logging.getLogger(__name__)

# date.weekday() numbering, Monday = 0
SATURDAY = 5


class AvailabilityElement(ABC):
    """Anything that can report whether it is currently available."""

    name: str

    @abstractmethod
    def is_available(self) -> bool:
        pass

    @abstractmethod
    def accept(self, check: 'AvailabilityCheck') -> None:
        """Call the check's handler for this element with its availability."""
        pass


@dataclass
class Product(AvailabilityElement):
    """A stocked item."""

    name: str
    price: float
    in_stock: bool = True

    def is_available(self) -> bool:
        return self.in_stock

    def accept(self, check: 'AvailabilityCheck') -> None:
        check.handle_product(self, self.is_available())


@dataclass
class Service(AvailabilityElement):
    """A service offered on working days (Monday to Friday)."""

    name: str
    clock: Callable[[], date] = field(default=date.today, repr=False, compare=False)

    def is_available_at(self, day: date) -> bool:
        return day.weekday() < SATURDAY

    def is_available(self) -> bool:
        return self.is_available_at(self.clock())

    def accept(self, check: 'AvailabilityCheck') -> None:
        check.handle_service(self, self.is_available())


class AvailabilityCheck(ABC):
    """Base class for operations over availability elements.

    Handlers that aren't overridden go to the unsupported-variant policy,
    exactly like expression operations.
    """

    def __init__(self, policy: Optional[UnsupportedVariantPolicy] = None):
        self.policy = policy or FailFastPolicy()

    def handle_product(self, product: Product, available: bool) -> None:
        self._unsupported('product', product)

    def handle_service(self, service: Service, available: bool) -> None:
        self._unsupported('service', service)

    def _unsupported(self, variant: str, element: AvailabilityElement) -> None:
        error = UnsupportedVariantError(type(self).__name__, variant, element)
        self.policy.handle(error, self, element)


class Purchase(AvailabilityCheck):
    """An order: keeps the available products and the delivery, if available."""

    def __init__(self,
                 items: Iterable[Product],
                 delivery: Service,
                 policy: Optional[UnsupportedVariantPolicy] = None):
        super().__init__(policy)
        self.items: List[Product] = []
        self.delivery: Optional[Service] = None

        for item in items:
            item.accept(self)
        delivery.accept(self)

    def handle_product(self, product: Product, available: bool) -> None:
        logger.info('Product "%s" is %savailable', product.name, '' if available else 'not ')
        if available:
            self.items.append(product)

    def handle_service(self, service: Service, available: bool) -> None:
        logger.info('Service "%s" is %savailable', service.name, '' if available else 'not ')
        self.delivery = service if available else None

    @property
    def total(self) -> float:
        """Sum of the prices of the products kept in the order."""
        return sum(item.price for item in self.items)


class Inspection(AvailabilityCheck):
    """Stock inspection over a list of products.

    Only products are inspected; a Service in the list is an unsupported
    variant and, under the default policy, stops the inspection.
    """

    def __init__(self,
                 items: Iterable[AvailabilityElement],
                 policy: Optional[UnsupportedVariantPolicy] = None):
        super().__init__(policy)
        self.items = list(items)
        self._reports: Dict[str, bool] = {}

    def check(self) -> Dict[str, bool]:
        """Inspect every item.

        Returns:
            Mapping of product name to whether it is in stock
        """
        self._reports = {}
        for item in self.items:
            item.accept(self)
        return dict(self._reports)

    def handle_product(self, product: Product, available: bool) -> None:
        logger.info('Product "%s" is %s', product.name, 'in stock' if available else 'out of stock')
        self._reports[product.name] = available
