"""
Number formatting for the display and the history table.

The display works like a locale "decimal" number style: no grouping
separators, a configurable decimal separator and at most three fraction
digits, rounded half-to-even.
"""
import math
import re
from decimal import ROUND_HALF_EVEN, Decimal, localcontext
from typing import Optional, Sequence

from backend import config
from backend.engine import Number, Token

_number_re = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)$")


class NumberFormatter:
    def __init__(self, decimal_separator: str = config.DECIMAL_SEPARATOR,
                 max_fraction_digits: int = config.DISPLAY_CONFIG["max_fraction_digits"]):
        self.decimal_separator = config.decimal_separator(decimal_separator)
        self.max_fraction_digits = max_fraction_digits

    def parse(self, text: str) -> Optional[float]:
        """Parse display text ("2,5", "0,", "12") into a float, or None if it is not a number."""
        if text is None:
            return None
        normalized = text.strip().replace(self.decimal_separator, ".")
        if not _number_re.match(normalized):
            return None
        return float(normalized)

    def format(self, value: float) -> str:
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "-∞" if value < 0 else "∞"

        with localcontext() as ctx:
            # wide enough for any finite double
            ctx.prec = 400
            quantum = Decimal(1).scaleb(-self.max_fraction_digits)
            rounded = Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_EVEN)
            text = format(rounded, "f")
        if "." in text:
            text = text.rstrip("0").rstrip(".")
        if text in ("-0", ""):
            text = "0"
        return text.replace(".", self.decimal_separator)

    @staticmethod
    def format_expression(expression: Sequence[Token]) -> str:
        # history rows show raw operand values, e.g. "2.0 + 3.0 x 4.0"
        return " ".join(str(token) for token in expression)


def format_result(value: float) -> str:
    """Raw result text for the history table ("20.0")."""
    return str(Number(value))
