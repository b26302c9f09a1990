"""Tests for the token model and the left-to-right evaluator."""

import functools
import operator

import pytest

from backend.engine import (
    CalcSyntaxError,
    CalculatorEngine,
    DivisionByZero,
    Number,
    Operation,
    make_expression,
    tokenize,
)


@pytest.fixture
def engine():
    return CalculatorEngine()


# --- Basic evaluation ---

def test_single_operand(engine):
    assert engine.evaluate(make_expression(5)) == pytest.approx(5.0)


def test_addition(engine):
    assert engine.evaluate(make_expression(2, "+", 3)) == pytest.approx(5.0)


def test_division(engine):
    assert engine.evaluate(make_expression(15, "/", 4)) == pytest.approx(3.75)


def test_left_to_right_ignores_precedence(engine):
    # (2 + 3) x 4, not 2 + (3 x 4)
    assert engine.evaluate(make_expression(2, "+", 3, "x", 4)) == pytest.approx(20.0)


def test_subtraction_chain(engine):
    assert engine.evaluate(make_expression(10, "-", 4, "-", 3)) == pytest.approx(3.0)


def test_matches_left_fold(engine):
    operands = [7.5, 2.0, 3.0, 4.0, 0.5]
    ops = [Operation.SUBTRACT, Operation.MULTIPLY, Operation.DIVIDE, Operation.ADD]
    expected = functools.reduce(
        lambda acc, pair: pair[0].calculate(acc, pair[1]),
        zip(ops, operands[1:]),
        operands[0],
    )
    expression = [Number(operands[0])]
    for op, value in zip(ops, operands[1:]):
        expression += [op, Number(value)]
    assert engine.evaluate(expression) == pytest.approx(expected)
    assert engine.evaluate(expression) == pytest.approx(((7.5 - 2.0) * 3.0) / 4.0 + 0.5)


# --- Division by zero ---

def test_divide_by_zero_raises(engine):
    with pytest.raises(DivisionByZero):
        engine.evaluate(make_expression(6, "/", 0))


def test_divide_by_zero_midway_aborts_everything(engine):
    with pytest.raises(DivisionByZero):
        engine.evaluate(make_expression(1, "+", 1, "/", 0, "+", 5))


def test_divide_by_negative_zero_raises():
    with pytest.raises(DivisionByZero):
        Operation.DIVIDE.calculate(1.0, -0.0)


def test_zero_divided_is_fine(engine):
    assert engine.evaluate(make_expression(0, "/", 5)) == pytest.approx(0.0)


# --- Malformed streams are tolerated ---

def test_trailing_operator_is_ignored(engine):
    assert engine.evaluate(make_expression(2, "+", 3, "x")) == pytest.approx(5.0)


def test_two_operands_in_a_row_stop_evaluation(engine):
    expression = (Number(2), Operation.ADD, Number(3), Number(4), Operation.ADD, Number(100))
    assert engine.evaluate(expression) == pytest.approx(5.0)


def test_two_operators_in_a_row_stop_evaluation(engine):
    expression = (Number(2), Operation.ADD, Operation.MULTIPLY, Number(4))
    assert engine.evaluate(expression) == pytest.approx(2.0)


def test_empty_or_operator_first_yields_zero(engine):
    assert engine.evaluate(()) == 0.0
    assert engine.evaluate((Operation.ADD, Number(3))) == 0.0


# --- Operations ---

@pytest.mark.parametrize("symbol,op", [
    ("+", Operation.ADD),
    ("-", Operation.SUBTRACT),
    ("x", Operation.MULTIPLY),
    ("*", Operation.MULTIPLY),
    ("×", Operation.MULTIPLY),
    ("/", Operation.DIVIDE),
    ("÷", Operation.DIVIDE),
])
def test_operation_from_symbol(symbol, op):
    assert Operation.from_symbol(symbol) is op


def test_unknown_operation_symbol():
    with pytest.raises(CalcSyntaxError):
        Operation.from_symbol("^")


def test_number_is_immutable():
    n = Number(3)
    assert n.value == 3.0 and isinstance(n.value, float)
    with pytest.raises(AttributeError):
        n.value = 4.0


# --- Tokenizer ---

def test_tokenize_basic():
    assert tokenize("2 + 3 x 4") == make_expression(2, "+", 3, "x", 4)


def test_tokenize_decimal_comma_and_point():
    assert tokenize("2,5 / 0.5") == make_expression(2.5, "/", 0.5)


def test_tokenize_without_spaces():
    assert tokenize("10-4-3") == make_expression(10, "-", 4, "-", 3)


def test_tokenize_rejects_leading_operator():
    with pytest.raises(CalcSyntaxError):
        tokenize("-5 + 2")


def test_tokenize_rejects_adjacent_numbers():
    with pytest.raises(CalcSyntaxError):
        tokenize("1,5,3")


def test_tokenize_rejects_unknown_symbol():
    with pytest.raises(CalcSyntaxError):
        tokenize("2 ^ 3")


def test_calculate_text(engine):
    assert engine.calculate("2 + 3 * 4") == pytest.approx(20.0)
    with pytest.raises(DivisionByZero):
        engine.calculate("6 / 0")


def test_operation_matches_operator_module():
    assert Operation.SUBTRACT.calculate(3, 5) == operator.sub(3, 5)
