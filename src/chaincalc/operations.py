"""
Arithmetic primitives and the operator dispatch table.

Every evaluation either yields a finite float or the ``ERROR`` marker; callers
never see an exception for division by zero or a non-numeric operand.
"""

import logging
import math
from typing import Callable, Dict, Union

logger = logging.getLogger(__name__)

ERROR = "Error"

Result = Union[float, str]


class UnknownOperatorError(ValueError):
    """Raised when a symbol outside the operator table reaches ``evaluate``."""


def add(a: float, b: float) -> float:
    return a + b


def subtract(a: float, b: float) -> float:
    return a - b


def multiply(a: float, b: float) -> float:
    return a * b


def divide(a: float, b: float) -> Result:
    if b == 0:
        return ERROR
    return a / b


OPERATIONS: Dict[str, Callable[[float, float], Result]] = {
    "+": add,
    "-": subtract,
    "×": multiply,
    "÷": divide,
}


def evaluate(op: str, a: float, b: float) -> Result:
    """
    Apply the operator ``op`` to ``a`` and ``b``.

    Args:
        op: One of '+', '-', '×', '÷'
        a: First operand (may be NaN for a non-numeric segment)
        b: Second operand

    Returns:
        The finite result, or ``ERROR``

    Raises:
        UnknownOperatorError: If ``op`` is not in the dispatch table
    """
    try:
        fn = OPERATIONS[op]
    except KeyError:
        raise UnknownOperatorError(f"Unknown operator: {op!r}") from None

    if not (math.isfinite(a) and math.isfinite(b)):
        logger.info("Non-numeric operand in %r %s %r", a, op, b)
        return ERROR

    result = fn(a, b)
    if result == ERROR:
        logger.info("Division by zero: %r %s %r", a, op, b)
        return ERROR
    if not math.isfinite(result):
        logger.info("Result out of range: %r %s %r", a, op, b)
        return ERROR
    return result


def parse_operand(text: str) -> float:
    """Parse a segment as a decimal float; anything non-finite becomes NaN."""
    try:
        value = float(text)
    except ValueError:
        return math.nan
    if not math.isfinite(value):
        return math.nan
    return value


def format_number(value: Result) -> str:
    """Render a result for the equation buffer."""
    if isinstance(value, str):
        return value
    if value.is_integer() and abs(value) < 1e16:
        return str(int(value))
    return repr(value)
