"""Chained-equation calculator: input state machine, keypad routing and web widget."""

from .equation import CalculatorState, EquationCalculator
from .operations import ERROR, UnknownOperatorError, evaluate

__all__ = [
    "CalculatorState",
    "EquationCalculator",
    "ERROR",
    "UnknownOperatorError",
    "evaluate",
]
