"""Tests for the product/service availability checks."""

import logging
from datetime import date

import pytest

from exprtreelib import CollectErrorsPolicy, IgnorePolicy, UnsupportedVariantError
from exprtreelib.availability import (
    AvailabilityCheck,
    Inspection,
    Product,
    Purchase,
    Service,
)

FRIDAY = date(2024, 5, 17)
SATURDAY = date(2024, 5, 18)
SUNDAY = date(2024, 5, 19)
MONDAY = date(2024, 5, 20)


def courier(day):
    return Service("Courier", clock=lambda: day)


class Recorder(AvailabilityCheck):
    """Records every dispatch it receives."""

    def __init__(self):
        super().__init__()
        self.calls = []

    def handle_product(self, product, available):
        self.calls.append(('product', product.name, available))

    def handle_service(self, service, available):
        self.calls.append(('service', service.name, available))


class TestElements:
    """Each element computes its own availability."""

    def test_product_follows_stock(self):
        assert Product("Pen", 1.5).is_available()
        assert not Product("Ink", 4.0, in_stock=False).is_available()

    @pytest.mark.parametrize("day,expected", [
        (MONDAY, True),
        (FRIDAY, True),
        (SATURDAY, False),
        (SUNDAY, False),
    ])
    def test_service_works_weekdays(self, day, expected):
        assert courier(day).is_available() is expected
        assert Service("Courier").is_available_at(day) is expected

    def test_dispatch_calls_one_handler(self):
        recorder = Recorder()
        Product("Pen", 1.5).accept(recorder)
        Product("Ink", 4.0, in_stock=False).accept(recorder)
        courier(SATURDAY).accept(recorder)
        assert recorder.calls == [
            ('product', 'Pen', True),
            ('product', 'Ink', False),
            ('service', 'Courier', False),
        ]

    def test_clock_not_part_of_equality(self):
        assert courier(FRIDAY) == courier(SATURDAY)


class TestPurchase:
    """A purchase keeps what is available."""

    def test_keeps_available_items_and_delivery(self):
        pen = Product("Pen", 1.5)
        ink = Product("Ink", 4.0, in_stock=False)
        paper = Product("Paper", 3.0)
        delivery = courier(FRIDAY)

        purchase = Purchase([pen, ink, paper], delivery)

        assert purchase.items == [pen, paper]
        assert purchase.delivery is delivery
        assert purchase.total == pytest.approx(4.5)

    def test_weekend_drops_delivery(self):
        purchase = Purchase([Product("Pen", 1.5)], courier(SUNDAY))
        assert purchase.delivery is None
        assert len(purchase.items) == 1

    def test_empty_order(self):
        purchase = Purchase([], courier(MONDAY))
        assert purchase.items == []
        assert purchase.total == 0

    def test_logs_each_outcome(self, caplog):
        with caplog.at_level(logging.INFO, logger="exprtreelib.availability"):
            Purchase([Product("Ink", 4.0, in_stock=False)], courier(SATURDAY))
        assert 'Product "Ink" is not available' in caplog.text
        assert 'Service "Courier" is not available' in caplog.text


class TestInspection:
    """Inspection only understands products."""

    def test_reports_stock(self):
        inspection = Inspection([Product("Pen", 1.5), Product("Ink", 4.0, in_stock=False)])
        assert inspection.check() == {"Pen": True, "Ink": False}

    def test_check_can_run_again(self):
        inspection = Inspection([Product("Pen", 1.5)])
        assert inspection.check() == inspection.check()

    def test_service_is_unsupported(self):
        inspection = Inspection([Product("Pen", 1.5), courier(FRIDAY)])
        with pytest.raises(UnsupportedVariantError) as excinfo:
            inspection.check()
        assert excinfo.value.variant == "service"
        assert excinfo.value.operation == "Inspection"

    def test_service_skipped_under_collect_policy(self):
        policy = CollectErrorsPolicy()
        inspection = Inspection([courier(FRIDAY), Product("Pen", 1.5)], policy=policy)
        assert inspection.check() == {"Pen": True}
        assert policy.get_statistics()['by_variant'] == {'service': 1}

    def test_service_ignored(self):
        inspection = Inspection([courier(MONDAY)], policy=IgnorePolicy())
        assert inspection.check() == {}

    def test_logs_stock(self, caplog):
        with caplog.at_level(logging.INFO, logger="exprtreelib.availability"):
            Inspection([Product("Ink", 4.0, in_stock=False)]).check()
        assert 'Product "Ink" is out of stock' in caplog.text
