"""Concrete operations, one module per traversal-ownership strategy."""

from .recursive import RecursivePrint, RecursiveCalculate, Grouping
from .stepwise import StepwisePrint, StepwiseCalculate

__all__ = [
    "RecursivePrint",
    "RecursiveCalculate",
    "Grouping",
    "StepwisePrint",
    "StepwiseCalculate",
]
