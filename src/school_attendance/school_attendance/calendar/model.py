from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class CalendarWeek:
    """A school week (Monday..Saturday) inside a month."""

    number: int
    dates: tuple[date, ...]
    range: str

    @property
    def start(self) -> date:
        return self.dates[0]

    @property
    def end(self) -> date:
        return self.dates[-1]
