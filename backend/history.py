"""
Calculation history: the record type, the JSON file storage behind it and the
recorder that the controller appends to after every successful evaluation.
"""
import json
import logging
import os
import tempfile
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, NamedTuple, Optional, Sequence

from backend import config
from backend.engine import CalculationError, Expression, Number, Operation, Token
from backend.formatting import NumberFormatter, format_result

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Calculation:
    expression: Expression
    result: float
    date: datetime

    def to_dict(self) -> Dict[str, Any]:
        return {
            "expression": [_token_to_dict(t) for t in self.expression],
            "result": self.result,
            "date": self.date.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Calculation":
        return cls(
            expression=tuple(_token_from_dict(t) for t in data["expression"]),
            result=float(data["result"]),
            date=datetime.fromisoformat(data["date"]),
        )


def _token_to_dict(token: Token) -> Dict[str, Any]:
    if isinstance(token, Number):
        return {"number": token.value}
    return {"operation": token.value}


def _token_from_dict(data: Dict[str, Any]) -> Token:
    if "number" in data:
        return Number(data["number"])
    if "operation" in data:
        return Operation.from_symbol(data["operation"])
    raise ValueError(f"Unknown token: {data!r}")


class HistoryRow(NamedTuple):
    date_label: str
    expression_text: str
    result_text: str


class HistoryStorage:
    """Persists the history list as a JSON file."""

    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path) if path is not None else config.HISTORY_FILE

    def save(self, calculations: Sequence[Calculation]):
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = [c.to_dict() for c in calculations]
        # write next to the target and swap in, so a crash never leaves half a file
        fd, tmp = tempfile.mkstemp(dir=str(self.path.parent), suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(payload, f, ensure_ascii=False, indent=2)
            os.replace(tmp, self.path)
        except OSError:
            if os.path.exists(tmp):
                os.remove(tmp)
            raise
        logger.debug("Saved %d calculations to %s", len(payload), self.path)

    def load(self) -> List[Calculation]:
        if not self.path.exists():
            return []
        try:
            with self.path.open(encoding="utf-8") as f:
                payload = json.load(f)
            calculations = [Calculation.from_dict(item) for item in payload]
        except (OSError, ValueError, KeyError, TypeError, CalculationError) as e:
            logger.warning("Could not read history from %s: %s", self.path, e)
            return []
        logger.debug("Loaded %d calculations from %s", len(calculations), self.path)
        return calculations


class HistoryRecorder:
    def __init__(self, storage: Optional[HistoryStorage] = None):
        self.storage = storage
        self.calculations: List[Calculation] = storage.load() if storage else []

    def record(self, expression: Sequence[Token], result: float,
               date: Optional[datetime] = None) -> Calculation:
        """Append one calculation and persist the whole list."""
        calculation = Calculation(
            expression=tuple(expression),
            result=result,
            date=date or datetime.now(),
        )
        self.calculations.append(calculation)
        self._save()
        return calculation

    def _save(self):
        """Persist the list; a failed write keeps the in-memory history usable."""
        if not self.storage:
            return
        try:
            self.storage.save(self.calculations)
        except OSError:
            logger.warning("Could not save history to %s", self.storage.path, exc_info=True)

    def clear(self):
        self.calculations = []
        self._save()

    def by_recency(self) -> List[Calculation]:
        """Most recent first."""
        return sorted(self.calculations, key=lambda c: c.date, reverse=True)

    def chronological(self) -> List[Calculation]:
        return sorted(self.calculations, key=lambda c: c.date)

    def rows(self, formatter: Optional[NumberFormatter] = None,
             limit: Optional[int] = None) -> List[HistoryRow]:
        formatter = formatter or NumberFormatter()
        date_format = config.DISPLAY_CONFIG["history_date_format"]
        calculations = self.by_recency()
        if limit is not None:
            calculations = calculations[:limit]
        return [
            HistoryRow(
                date_label=c.date.strftime(date_format),
                expression_text=formatter.format_expression(c.expression),
                result_text=format_result(c.result),
            )
            for c in calculations
        ]

    def __len__(self):
        return len(self.calculations)
