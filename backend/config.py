"""Configuration for the calculator backend and views."""
import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

DECIMAL_SEPARATORS = (",", ".")


def decimal_separator(value: str) -> str:
    """Check a decimal separator; raises ValueError for anything but ',' or '.'."""
    if value not in DECIMAL_SEPARATORS:
        raise ValueError(f"Decimal separator must be one of {DECIMAL_SEPARATORS}, got {value!r}")
    return value


def _separator_from_env(default: str = ",") -> str:
    value = os.environ.get("CALC_DECIMAL_SEPARATOR", default)
    try:
        return decimal_separator(value)
    except ValueError as e:
        logger.warning("Ignoring CALC_DECIMAL_SEPARATOR: %s", e)
        return default


# Decimal separator used by the display and the history table
DECIMAL_SEPARATOR = _separator_from_env()

# Where the history list is persisted
HISTORY_FILE = Path(os.environ.get(
    "CALC_HISTORY_FILE",
    Path.home() / ".history_calculator" / "history.json",
))

# Text shown in the display when an evaluation fails
ERROR_TEXT = "Error"

# Typing this value into the display triggers the hidden alert
EASTER_EGG_DIGITS = ("3", "1", "4", "1", "5", "9")
EASTER_EGG_TEXT = "You found the easter egg!"

DISPLAY_CONFIG = {
    "max_fraction_digits": 3,   # same as a locale "decimal" number style
    "history_date_format": "%d.%m.%Y",
    "history_limit": 200,       # rows shown in the history window
}

ANIMATION_CONFIG = {
    "tap_flash_ms": 150,
    "shake_offset": 5,
    "shake_repeats": 5,
    "shake_step_ms": 50,
    "long_press_ms": 1000,      # hold time before the circle starts growing
    "circle_start": 100,
    "circle_scale": 4.0,
    "circle_duration_ms": 2000,
    "alert_delay_ms": 500,
    "alert_duration_ms": 2000,
}


def easter_egg_text(separator: str = DECIMAL_SEPARATOR) -> str:
    digits = EASTER_EGG_DIGITS
    return digits[0] + separator + "".join(digits[1:])
