"""
Input surface of the calculator.

Keypad events (digit, operator, equals, clear) arrive here and are turned
into token-stream mutations and display text. The controller knows nothing
about Tkinter; views subscribe to the listener lists to animate errors,
results and the hidden alert.
"""
import logging
from typing import Callable, List, Optional

from backend import config
from backend.engine import CalculationError, CalculatorEngine, Number, Operation, Token
from backend.formatting import NumberFormatter
from backend.history import Calculation, HistoryRecorder

logger = logging.getLogger(__name__)


class CalculatorController:
    def __init__(self, history: Optional[HistoryRecorder] = None,
                 engine: Optional[CalculatorEngine] = None,
                 formatter: Optional[NumberFormatter] = None):
        self.engine = engine or CalculatorEngine()
        self.history = history if history is not None else HistoryRecorder()
        self.formatter = formatter or NumberFormatter()

        self.tokens: List[Token] = []
        self.display = "0"
        self.was_calculation = False
        self.last_result = 0.0

        self.result_listeners: List[Callable[[Calculation], None]] = []
        self.error_listeners: List[Callable[[CalculationError], None]] = []
        self.easter_egg_listeners: List[Callable[[], None]] = []

    @property
    def separator(self) -> str:
        return self.formatter.decimal_separator

    # -------------------------
    # Keypad events
    # -------------------------
    def digit_pressed(self, text: str):
        """Append a digit or the decimal separator to the display."""
        if text == self.separator and self.separator in self.display:
            return

        if self.display == config.ERROR_TEXT:
            self.reset_display()

        if self.display == "0" and text == self.separator:
            self.display = "0" + self.separator
        elif self.display == "0":
            self.display = text
        else:
            self.display += text

        if self.display == config.easter_egg_text(self.separator):
            for listener in self.easter_egg_listeners:
                listener()

    def operation_pressed(self, operation: Operation):
        number = self.formatter.parse(self.display)
        if number is None:
            return
        self.tokens.append(Number(number))
        self.tokens.append(operation)
        self.reset_display()

    def clear_pressed(self):
        self.tokens.clear()
        self.reset_display()

    def equals_pressed(self) -> Optional[float]:
        """
        Close the token stream with the displayed number and evaluate it.
        Returns the result, or None when the display is not a number or the
        evaluation failed. The token stream is emptied either way.
        """
        number = self.formatter.parse(self.display)
        if number is None:
            return None
        self.tokens.append(Number(number))

        try:
            result = self.engine.evaluate(self.tokens)
        except CalculationError as e:
            logger.info("Evaluation of %s failed: %s", self.expression_text(), e)
            self.display = config.ERROR_TEXT
            for listener in self.error_listeners:
                listener(e)
            return None
        finally:
            expression = tuple(self.tokens)
            self.tokens.clear()

        self.display = self.formatter.format(result)
        calculation = self.history.record(expression, result)
        self.was_calculation = True
        self.last_result = result
        for listener in self.result_listeners:
            listener(calculation)
        return result

    # -------------------------
    # Helpers
    # -------------------------
    def press(self, key: str):
        """Dispatch a key label ("7", ",", "+", "=", "C") to the matching event."""
        if key.isdigit() or key == self.separator:
            self.digit_pressed(key)
        elif key in (".", ",") and key != self.separator:
            self.digit_pressed(self.separator)
        elif key == "=":
            self.equals_pressed()
        elif key in ("C", "AC"):
            self.clear_pressed()
        else:
            self.operation_pressed(Operation.from_symbol(key))

    def reset_display(self):
        self.display = "0"

    def expression_text(self) -> str:
        return self.formatter.format_expression(self.tokens)
