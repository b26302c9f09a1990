import operator
import re
from dataclasses import dataclass
from enum import Enum
from typing import List, Sequence, Tuple, Union


class CalculationError(Exception):
    pass


class DivisionByZero(CalculationError):
    pass


class CalcSyntaxError(CalculationError, ValueError):
    pass


class Operation(Enum):
    """The four binary operations offered by the keypad, keyed by their symbol."""

    ADD = "+"
    SUBTRACT = "-"
    MULTIPLY = "x"
    DIVIDE = "/"

    @classmethod
    def from_symbol(cls, symbol: str) -> "Operation":
        symbol = _ALIASES.get(symbol, symbol)
        try:
            return cls(symbol)
        except ValueError:
            raise CalcSyntaxError(f"Unsupported operator: {symbol}")

    def calculate(self, number1: float, number2: float) -> float:
        if self is Operation.DIVIDE and number2 == 0:
            raise DivisionByZero("Division by zero")
        return _FUNCS[self](number1, number2)

    def __str__(self):
        return self.value


_FUNCS = {
    Operation.ADD: operator.add,
    Operation.SUBTRACT: operator.sub,
    Operation.MULTIPLY: operator.mul,
    Operation.DIVIDE: operator.truediv,
}

# other spellings typed on a keyboard
_ALIASES = {"*": "x", "×": "x", "X": "x", "÷": "/", ":": "/", "−": "-"}


@dataclass(frozen=True)
class Number:
    value: float

    def __post_init__(self):
        object.__setattr__(self, "value", float(self.value))

    def __float__(self):
        return self.value

    def __str__(self):
        return repr(self.value)


Token = Union[Number, Operation]
Expression = Tuple[Token, ...]


def make_expression(*items: Union[float, int, str, Token]) -> Expression:
    """
    Build an expression from loose values: numbers become Number tokens,
    operator symbols become Operation members.
        make_expression(2, "+", 3, "x", 4)
    """
    tokens: List[Token] = []
    for item in items:
        if isinstance(item, (Number, Operation)):
            tokens.append(item)
        elif isinstance(item, str):
            tokens.append(Operation.from_symbol(item))
        else:
            tokens.append(Number(item))
    return tuple(tokens)


token_re = re.compile(r"""
    \s*
    (?:
        (?P<number> \d+(?:[.,]\d*)? | [.,]\d+ )
      | (?P<symbol> \S )
    )
""", re.VERBOSE)


def tokenize(text: str, decimal_separator: str = ",") -> Expression:
    """
    Convert typed input such as "2 + 3 x 4" or "2,5 / 0,5" into an expression.
    Both '.' and the configured separator are accepted inside numbers.
    """
    tokens: List[Token] = []
    text = text.strip()
    pos = 0
    while pos < len(text):
        m = token_re.match(text, pos)
        if m is None:
            break
        if m.group("number") is not None:
            raw = m.group("number").replace(decimal_separator, ".").replace(",", ".")
            if tokens and isinstance(tokens[-1], Number):
                raise CalcSyntaxError(f"Missing operator before {m.group('number')!r}")
            tokens.append(Number(float(raw)))
        else:
            symbol = m.group("symbol")
            if not tokens or isinstance(tokens[-1], Operation):
                raise CalcSyntaxError(f"Operator '{symbol}' is in the wrong place")
            tokens.append(Operation.from_symbol(symbol))
        pos = m.end()
    return tuple(tokens)


class CalculatorEngine:
    def evaluate(self, expression: Sequence[Token]) -> float:
        """
        Fold the expression left to right: (2 + 3) x 4 == 20, there is no precedence.

        A malformed pair (an operand where an operator belongs, or the reverse,
        or a dangling trailing operator) ends the fold early and the value so
        far is returned. DivisionByZero propagates and no partial result is kept.
        """
        if not expression or not isinstance(expression[0], Number):
            return 0.0

        current = expression[0].value
        for index in range(1, len(expression) - 1, 2):
            operation, number = expression[index], expression[index + 1]
            if not isinstance(operation, Operation) or not isinstance(number, Number):
                break
            current = operation.calculate(current, number.value)
        return current

    def calculate(self, text: str, decimal_separator: str = ",") -> float:
        """Tokenize and evaluate a typed expression."""
        return self.evaluate(tokenize(text, decimal_separator))


# Quick local demo
if __name__ == "__main__":
    c = CalculatorEngine()
    print(c.calculate("2 + 3 x 4"))    # 20.0, not 14
    print(c.calculate("10 - 4 - 3"))   # 3.0
    try:
        c.calculate("6 / 0")
    except DivisionByZero as e:
        print(e)
