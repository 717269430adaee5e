#!/usr/bin/env python3
"""
Basic example showing both traversal strategies over one expression tree.

This example demonstrates:
- Operation-owned printing and calculation
- Node-owned printing and calculation, with and without regrouping
- The high-level evaluate/render helpers
"""

import sys
from pathlib import Path

# Add parent directory to path for development
sys.path.insert(0, str(Path(__file__).parent.parent))

from exprtreelib import (
    Literal,
    Mul,
    Plus,
    RecursiveCalculate,
    RecursivePrint,
    StepwiseCalculate,
    StepwisePrint,
    evaluate,
    group,
    render,
)


def run(operation, tree):
    tree.accept(operation)
    return operation


def main():
    """Evaluate 3 * (5 + 7) every way the library knows."""
    tree = Mul(Literal(3), Plus(Literal(5), Literal(7)))

    print("Operation-owned recursion")
    print("-" * 50)
    print(f"  Expression: {run(RecursivePrint(), tree).expression}")
    print(f"  Result:     {run(RecursiveCalculate(), tree).result}")

    print("\nNode-owned recursion (tree as built)")
    print("-" * 50)
    print(f"  Expression: {run(StepwisePrint(), tree).expression}")
    print(f"  Result:     {run(StepwiseCalculate(), tree).result}")

    grouped = group(tree)
    print("\nNode-owned recursion (regrouped)")
    print("-" * 50)
    print(f"  Expression: {run(StepwisePrint(), grouped).expression}")
    print(f"  Result:     {run(StepwiseCalculate(), grouped).result}")

    print("\nHigh-level API")
    print("-" * 50)
    for ownership in ("operation", "node"):
        print(f"  {ownership:<10} {render(tree, ownership=ownership):<16} = {evaluate(tree, ownership=ownership)}")


if __name__ == "__main__":
    main()
