"""Tests for the equation input state machine."""

import pytest

from chaincalc.equation import EquationCalculator


def press(calc, keys):
    """Feed a compact key string; '=' equals, 'C' clear, 'A' all-clear, '<' backspace."""
    out = []
    for k in keys:
        if k.isdigit():
            out.append(calc.on_digit(k))
        elif k == ".":
            out.append(calc.on_decimal())
        elif k == "=":
            out.append(calc.on_equals())
        elif k == "C":
            out.append(calc.on_clear())
        elif k == "A":
            out.append(calc.on_all_clear())
        elif k == "<":
            out.append(calc.on_backspace())
        else:
            out.append(calc.on_operator(k))
    return out


def test_initial_display():
    assert EquationCalculator().display == "0"


def test_simple_addition_progression():
    calc = EquationCalculator()
    assert press(calc, "41+8=") == ["4", "41", "41+", "41+8", "41+8=49"]


def test_leading_zero_suppressed():
    calc = EquationCalculator()
    assert press(calc, "05") == ["0", "5"]
    press(calc, "+005")
    assert calc.display == "5+5"


def test_single_decimal_point_per_segment():
    calc = EquationCalculator()
    press(calc, "12.3.4")
    assert calc.display == "12.34"
    press(calc, "+..5")
    assert calc.display == "12.34+0.5"


def test_decimal_starts_new_segment_after_reset():
    calc = EquationCalculator()
    assert press(calc, "7+.") == ["7", "7+", "7+0."]
    press(calc, "5=")
    assert calc.display == "7+0.5=7.5"
    assert calc.on_decimal() == "0."


def test_chained_operation():
    calc = EquationCalculator()
    steps = press(calc, "12+7-")
    assert steps[-1] == "19-"
    press(calc, "1=")
    assert calc.display == "12+7-1=18"


def test_longer_chain_keeps_typed_expression():
    calc = EquationCalculator()
    press(calc, "2+3×")
    assert calc.display == "5×"
    press(calc, "4÷")
    assert calc.display == "20÷"
    press(calc, "8=")
    assert calc.display == "2+3×4÷8=2.5"


def test_operator_substitution():
    calc = EquationCalculator()
    press(calc, "5+×")
    assert calc.display == "5×"
    press(calc, "3=")
    assert calc.display == "5×3=15"


def test_repeated_equals_is_noop():
    calc = EquationCalculator()
    press(calc, "5+3=")
    before = calc.display
    assert calc.on_equals() == before


def test_premature_equals_is_noop():
    calc = EquationCalculator()
    assert calc.on_equals() == "0"
    press(calc, "5")
    assert calc.on_equals() == "5"
    press(calc, "+")
    assert calc.on_equals() == "5+"


def test_division_by_zero_then_digit_replaces():
    calc = EquationCalculator()
    press(calc, "10÷0=")
    assert calc.display == "10÷0=Error"
    assert calc.snapshot()["error"] is True
    assert calc.on_digit("7") == "7"


def test_error_propagates_through_chain():
    calc = EquationCalculator()
    press(calc, "10÷0+")
    assert calc.display == "Error+"
    press(calc, "5=")
    assert calc.display.endswith("=Error")
    assert calc.on_digit("3") == "3"


def test_operator_after_result_continues():
    calc = EquationCalculator()
    press(calc, "5-8=")
    assert calc.display == "5-8=-3"
    press(calc, "×2=")
    assert calc.display == "-3×2=-6"


def test_operator_on_empty_buffer_uses_zero():
    calc = EquationCalculator()
    assert calc.on_operator("+") == "0+"
    press(calc, "4=")
    assert calc.display == "0+4=4"


def test_new_digit_after_result_starts_fresh():
    calc = EquationCalculator()
    press(calc, "2×3=")
    assert press(calc, "9") == ["9"]
    assert calc.state.first_operand is None


def test_clear_entry_keeps_operator():
    calc = EquationCalculator()
    press(calc, "5+3")
    assert calc.on_clear() == "5+"
    press(calc, "7=")
    assert calc.display == "5+7=12"


def test_clear_without_operator_empties():
    calc = EquationCalculator()
    press(calc, "53")
    assert calc.on_clear() == "0"


def test_clear_after_operator_or_result_is_all_clear():
    calc = EquationCalculator()
    press(calc, "5+")
    assert calc.on_clear() == "0"
    assert calc.state.first_operand is None
    assert calc.state.pending_operator is None

    press(calc, "5+3=")
    assert calc.on_clear() == "0"
    assert calc.state.reset_pending is False


def test_all_clear_resets_everything():
    calc = EquationCalculator()
    press(calc, "12+7-")
    assert calc.on_all_clear() == "0"
    s = calc.state
    assert s.tokens == [] and s.result is None
    assert s.first_operand is None and s.second_operand is None
    assert s.pending_operator is None and s.reset_pending is False


def test_backspace_collapses_result_then_zero():
    calc = EquationCalculator()
    press(calc, "5+3=")
    assert calc.on_backspace() == "8"
    assert calc.on_backspace() == "0"
    assert calc.on_backspace() == "0"


def test_backspace_edits_result():
    calc = EquationCalculator()
    press(calc, "5+3=<")
    assert calc.on_digit("4") == "84"
    press(calc, "+1=")
    assert calc.display == "84+1=85"


def test_backspace_never_empty():
    calc = EquationCalculator()
    press(calc, "12.5×3")
    for _ in range(10):
        assert calc.on_backspace() != ""
    assert calc.display == "0"


def test_backspace_removing_operand_restores_operator_state():
    calc = EquationCalculator()
    press(calc, "5+3<")
    assert calc.display == "5+"
    # no second operand any more: equals does nothing, operator substitutes
    assert calc.on_equals() == "5+"
    assert calc.on_operator("-") == "5-"


def test_backspace_removing_operator_returns_to_first_operand():
    calc = EquationCalculator()
    press(calc, "5+<")
    assert calc.display == "5"
    assert calc.state.pending_operator is None
    press(calc, "3")
    assert calc.display == "53"
    assert calc.on_equals() == "53"


def test_backspace_drops_whole_error_segment():
    calc = EquationCalculator()
    press(calc, "1÷0=<")
    assert calc.display == "Error"
    assert calc.on_backspace() == "0"


@pytest.mark.parametrize("digit", ["", "12", "a", "+"])
def test_non_digit_rejected(digit):
    with pytest.raises(ValueError):
        EquationCalculator().on_digit(digit)


def test_unknown_operator_rejected():
    with pytest.raises(ValueError):
        EquationCalculator().on_operator("*")


def test_snapshot_is_json_friendly():
    calc = EquationCalculator()
    press(calc, "10÷0+")
    snap = calc.snapshot()
    assert snap["display"] == "Error+"
    assert snap["first_operand"] is None  # NaN is not valid JSON
    assert snap["pending_operator"] == "+"
    assert snap["reset_pending"] is True


def test_backspace_negative_result_drops_bare_sign():
    calc = EquationCalculator()
    press(calc, "5-8=")
    assert calc.on_backspace() == "-3"
    assert calc.on_backspace() == "0"
    press(calc, "+2=")
    assert calc.display == "0+2=2"
