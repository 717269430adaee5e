#!/usr/bin/env python3
"""
Availability example: the same double dispatch over products and services.

Pass an ISO date (YYYY-MM-DD) to pretend it is that day.
"""

import logging
import sys
from datetime import date
from pathlib import Path

# Add parent directory to path for development
sys.path.insert(0, str(Path(__file__).parent.parent))

from exprtreelib import CollectErrorsPolicy
from exprtreelib.availability import Inspection, Product, Purchase, Service


def main():
    """Place an order and inspect the stock."""
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    today = date.fromisoformat(sys.argv[1]) if len(sys.argv) > 1 else date.today()
    delivery = Service("Courier", clock=lambda: today)
    products = [
        Product("Notebook", 3.5),
        Product("Fountain pen", 24.0, in_stock=False),
        Product("Ink", 6.25),
    ]

    print(f"Ordering on {today:%A %Y-%m-%d}")
    print("-" * 50)
    purchase = Purchase(products, delivery)
    print(f"  Items:    {', '.join(item.name for item in purchase.items)}")
    print(f"  Total:    {purchase.total:.2f}")
    print(f"  Delivery: {purchase.delivery.name if purchase.delivery else 'not available today'}")

    print("\nStock inspection (services are skipped)")
    print("-" * 50)
    policy = CollectErrorsPolicy()
    report = Inspection(products + [delivery], policy=policy).check()
    for name, in_stock in report.items():
        print(f"  {name:<14} {'in stock' if in_stock else 'out of stock'}")
    print(f"  Skipped: {policy.get_statistics()['total_errors']}")


if __name__ == "__main__":
    main()
