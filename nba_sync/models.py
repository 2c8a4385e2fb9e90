from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, List, Optional


class FeedShape(Enum):
    CURRENT = "current"
    LEGACY = "legacy"


@dataclass(frozen=True)
class GameRecord:
    game_id: str
    home_tricode: str
    away_tricode: str
    home_name: str
    away_name: str
    start_utc: datetime
    display_time_utc: Optional[datetime] = None


@dataclass(frozen=True)
class CalendarEvent:
    date: str
    summary: str

    def to_gcal_body(self) -> dict:
        return {
            "start": {"date": self.date},
            "end": {"date": self.date},
            "summary": self.summary,
        }


@dataclass
class OperationResult:
    item: Any
    ok: bool
    error: Optional[str] = None


@dataclass
class SyncReport:
    action: str
    results: List[OperationResult] = field(default_factory=list)

    @property
    def succeeded(self) -> int:
        return sum(1 for result in self.results if result.ok)

    @property
    def attempted(self) -> int:
        return len(self.results)

    @property
    def failures(self) -> List[OperationResult]:
        return [result for result in self.results if not result.ok]

    def __str__(self) -> str:
        return f"{self.action} {self.succeeded} of {self.attempted} events"
