#!/usr/bin/env python3
"""
Entry point for the Calculator application.

Run:

    python main.py
    python main.py --history-file ./history.json --debug

History is stored in ~/.history_calculator/history.json unless
--history-file or the CALC_HISTORY_FILE environment variable says otherwise.
"""
import argparse
import logging
import sys
from pathlib import Path

# Optional: ensure current repo root is on sys.path so relative imports work
ROOT = Path(__file__).resolve().parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from backend import config
from backend.controller import CalculatorController
from backend.formatting import NumberFormatter
from backend.history import HistoryRecorder, HistoryStorage

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Calculator with history")
    parser.add_argument("--history-file", type=Path, default=config.HISTORY_FILE,
                        help="JSON file the history is stored in")
    parser.add_argument("--decimal-separator", type=config.decimal_separator, default=config.DECIMAL_SEPARATOR,
                        choices=config.DECIMAL_SEPARATORS, help="decimal separator for the display")
    parser.add_argument("--debug", action="store_true", help="verbose logging")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    history = HistoryRecorder(HistoryStorage(args.history_file))
    logger.info("Loaded %d past calculations from %s", len(history), args.history_file)
    controller = CalculatorController(history=history,
                                      formatter=NumberFormatter(args.decimal_separator))

    # Imported here so the backend stays usable without a display
    from frontend.gui import CalculatorGUI

    app = CalculatorGUI(controller)
    app.mainloop()


if __name__ == "__main__":
    main()
