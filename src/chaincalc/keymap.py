"""
Keypad layout and keyboard routing.

Both the web page and the CLI resolve input to a ``Button`` here and hand it
to ``route``, so mouse, keyboard and command-line presses behave the same.
"""

from dataclasses import dataclass
from typing import Dict, Optional

from .equation import EquationCalculator


@dataclass(frozen=True)
class Button:
    value: str
    kind: str  # all-clear, clear, backspace, operator, number, zero, decimal, equals


# Keypad layout, row by row (four columns)
CALCULATOR_BUTTONS = (
    Button("AC", "all-clear"),
    Button("C", "clear"),
    Button("←", "backspace"),
    Button("÷", "operator"),
    Button("7", "number"),
    Button("8", "number"),
    Button("9", "number"),
    Button("×", "operator"),
    Button("4", "number"),
    Button("5", "number"),
    Button("6", "number"),
    Button("-", "operator"),
    Button("1", "number"),
    Button("2", "number"),
    Button("3", "number"),
    Button("+", "operator"),
    Button("0", "zero"),
    Button(".", "decimal"),
    Button("=", "equals"),
)

_BY_VALUE: Dict[str, Button] = {b.value: b for b in CALCULATOR_BUTTONS}

# Only keys whose name differs from the button value
KEYBOARD_MAP: Dict[str, str] = {
    "*": "×",
    "/": "÷",
    "Enter": "=",
    "Escape": "AC",
    "Delete": "C",
    "c": "C",
    "C": "C",
    "Backspace": "←",
    "NumpadDivide": "÷",
    "NumpadMultiply": "×",
    "NumpadSubtract": "-",
    "NumpadAdd": "+",
    "NumpadEnter": "=",
    "NumpadDecimal": ".",
}


def find_button(value: str) -> Optional[Button]:
    """Look up a keypad button by its label."""
    return _BY_VALUE.get(value)


def resolve_key(key: str) -> Optional[Button]:
    """Map a browser ``KeyboardEvent.key`` name to a keypad button."""
    value = KEYBOARD_MAP.get(key, key)
    # Numpad0 .. Numpad9
    if key.startswith("Numpad") and len(key) == 7 and key[-1].isdigit():
        value = key[-1]
    return find_button(value)


def route(calculator: EquationCalculator, button: Button) -> str:
    """
    Dispatch a button press to the matching calculator handler.

    Args:
        calculator: Calculator to drive
        button: Button from ``CALCULATOR_BUTTONS``

    Returns:
        The display string after the press

    Raises:
        ValueError: If the button kind is unknown
    """
    kind = button.kind
    if kind in ("number", "zero"):
        return calculator.on_digit(button.value)
    if kind == "operator":
        return calculator.on_operator(button.value)
    if kind == "equals":
        return calculator.on_equals()
    if kind == "decimal":
        return calculator.on_decimal()
    if kind == "all-clear":
        return calculator.on_all_clear()
    if kind == "clear":
        return calculator.on_clear()
    if kind == "backspace":
        return calculator.on_backspace()
    raise ValueError(f"Unknown button kind: {kind}")
