"""
=============================================================================
MODULE NAME: equation.py
=============================================================================

INPUT:
- Discrete key events: digit, decimal point, operator, equals, clear,
  all-clear, backspace.

OUTPUT:
- The equation string shown to the user (e.g. "12+7-1=18").

NOTES:
- The buffer is kept as tokens: even indexes hold operand segments, odd
  indexes hold operator symbols. The equals result is stored separately and
  only joined in at render time.
- A chained operator folds the expression into its running result ("19-"),
  but the typed tokens are remembered so equals can show "12+7-1=18".
- One instance assumes a single writer. Callers sharing an instance across
  threads must serialize access themselves (see webapp.sessions).
=============================================================================
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .operations import ERROR, OPERATIONS, evaluate, format_number, parse_operand

logger = logging.getLogger(__name__)

DIGITS = frozenset("0123456789")


@dataclass(slots=True)
class CalculatorState:
    """Buffer, operand registers, pending operator and reset flag."""

    tokens: List[str] = field(default_factory=list)
    folded: List[str] = field(default_factory=list)  # typed tokens behind tokens[0]
    result: Optional[str] = None
    first_operand: Optional[float] = None
    second_operand: Optional[float] = None
    pending_operator: Optional[str] = None
    reset_pending: bool = False

    def render(self) -> str:
        text = "".join(self.tokens)
        if self.result is not None:
            text += "=" + self.result
        return text or "0"


class EquationCalculator:
    """Input state machine that builds the equation string one key at a time."""

    def __init__(self) -> None:
        self.state = CalculatorState()

    @property
    def display(self) -> str:
        return self.state.render()

    def snapshot(self) -> Dict:
        """Display string plus registers, with NaN reported as None."""
        s = self.state
        return {
            "display": self.display,
            "first_operand": _jsonable(s.first_operand),
            "second_operand": _jsonable(s.second_operand),
            "pending_operator": s.pending_operator,
            "reset_pending": s.reset_pending,
            "error": s.result == ERROR or ERROR in s.tokens,
        }

    # ------------------------------------------------------------------
    # Buffer helpers
    # ------------------------------------------------------------------

    def _has_operand_tail(self) -> bool:
        return len(self.state.tokens) % 2 == 1

    def _current_operand(self) -> str:
        """Text of the segment being entered, or the result after equals."""
        s = self.state
        if s.result is not None:
            return s.result
        if self._has_operand_tail():
            return s.tokens[-1]
        return ""

    def _typed_expression(self) -> List[str]:
        """Tokens as the user typed them, with chained results unfolded."""
        s = self.state
        if s.folded and s.tokens:
            return s.folded + s.tokens[1:]
        return list(s.tokens)

    def _start_fresh_if_finished(self) -> None:
        s = self.state
        if s.result is not None:
            s.tokens = []
            s.result = None

    # ------------------------------------------------------------------
    # Handlers
    # ------------------------------------------------------------------

    def on_digit(self, digit: str) -> str:
        """
        Add a digit to the current operand segment.

        Args:
            digit: Single digit character (0-9)

        Returns:
            The display string

        Raises:
            ValueError: If ``digit`` is not a single digit
        """
        if digit not in DIGITS:
            raise ValueError(f"Not a digit: {digit!r}")
        s = self.state
        self._start_fresh_if_finished()
        s.reset_pending = False

        if not self._has_operand_tail():
            s.tokens.append(digit)
        elif s.tokens[-1] in ("0", ERROR):
            s.tokens[-1] = digit
        else:
            s.tokens[-1] += digit
        return self.display

    def on_decimal(self) -> str:
        """Add a decimal point; a second point in the same segment is ignored."""
        s = self.state
        self._start_fresh_if_finished()
        s.reset_pending = False

        if not self._has_operand_tail():
            s.tokens.append("0.")
        elif s.tokens[-1] == ERROR:
            s.tokens[-1] = "0."
        elif "." in s.tokens[-1]:
            logger.debug("Ignoring second decimal point in %r", s.tokens[-1])
        else:
            s.tokens[-1] += "."
        return self.display

    def on_operator(self, op: str) -> str:
        """
        Set the pending operator, evaluating the previous one first if a new
        operand was entered since.

        Args:
            op: One of '+', '-', '×', '÷'

        Returns:
            The display string

        Raises:
            ValueError: If ``op`` is not a known operator
        """
        if op not in OPERATIONS:
            raise ValueError(f"Not an operator: {op!r}")
        s = self.state

        if s.result is not None:
            # continue from the previous result
            s.tokens = [s.result]
            s.result = None
        elif not s.tokens:
            s.tokens = ["0"]
        value = parse_operand(self._current_operand())

        if s.first_operand is None:
            s.first_operand = value
            s.tokens.append(op)
        elif s.pending_operator and not s.reset_pending:
            s.second_operand = value
            result = evaluate(s.pending_operator, s.first_operand, value)
            logger.debug(
                "Chained %r %s %r -> %r", s.first_operand, s.pending_operator, value, result
            )
            text = format_number(result)
            s.first_operand = parse_operand(text)
            s.folded = self._typed_expression()
            s.tokens = [text, op]
        elif self._has_operand_tail():
            s.tokens.append(op)
        else:
            s.tokens[-1] = op

        s.pending_operator = op
        s.reset_pending = True
        return self.display

    def on_equals(self) -> str:
        """Evaluate the pending operation; a no-op until a second operand exists."""
        s = self.state
        if s.first_operand is None or not s.pending_operator or s.reset_pending:
            return self.display

        s.second_operand = parse_operand(self._current_operand())
        result = evaluate(s.pending_operator, s.first_operand, s.second_operand)
        logger.debug(
            "Evaluated %r %s %r -> %r",
            s.first_operand,
            s.pending_operator,
            s.second_operand,
            result,
        )
        s.tokens = self._typed_expression()
        s.folded = []
        s.result = format_number(result)
        s.first_operand = None
        s.second_operand = None
        s.pending_operator = None
        s.reset_pending = True
        return self.display

    def on_clear(self) -> str:
        """Clear the entry; after an operator or a result this is a full clear."""
        s = self.state
        if s.reset_pending or s.result is not None:
            return self.on_all_clear()

        if len(s.tokens) > 1:
            if self._has_operand_tail():
                s.tokens.pop()
            s.reset_pending = True
        else:
            s.tokens = []
        return self.display

    def on_all_clear(self) -> str:
        """Reset calculator to initial state."""
        self.state = CalculatorState()
        return self.display

    reset = on_all_clear

    def on_backspace(self) -> str:
        """Remove the last character, or collapse a finished equation to its result."""
        s = self.state
        if s.result is not None:
            s.tokens = [s.result]
            s.result = None
            s.reset_pending = False
            return self.display

        if s.tokens:
            if self._has_operand_tail():
                last = s.tokens[-1]
                # a bare sign is not an operand
                if last == ERROR or len(last) <= 1 or last[:-1] == "-":
                    s.tokens.pop()
                    if s.tokens:
                        s.reset_pending = True
                else:
                    s.tokens[-1] = last[:-1]
            else:
                s.tokens.pop()
                s.folded = []
                s.first_operand = None
                s.second_operand = None
                s.pending_operator = None
                s.reset_pending = False

        if not s.tokens:
            s.tokens = ["0"]
        return self.display


def _jsonable(value: Optional[float]) -> Optional[float]:
    if value is None or math.isnan(value):
        return None
    return value
