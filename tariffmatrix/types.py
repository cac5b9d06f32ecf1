from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Literal, Optional, TYPE_CHECKING

from . import canon

if TYPE_CHECKING:
    from .schema import TimeConfiguration


class TimePeriodLabel(str, Enum):
    """Pricing tier of a time period. Declaration order is the display order."""

    TIP = "tip"
    PEAK = "peak"
    FLAT = "flat"
    VALLEY = "valley"
    DEEP = "deep"

    @property
    def rank(self) -> int:
        return canon.LABEL_ORDER.index(self.value)

    def __str__(self) -> str:
        return self.value


# One label per hour of day, index = hour (0..23)
DayGrid = List[TimePeriodLabel]

# Month number (1..12) -> DayGrid
MonthMatrix = Dict[int, DayGrid]

# [lo, hi) in minutes since midnight, within [0, 1440]
Segment = tuple[int, int]

SkipReason = Literal["missing_tariff", "no_intersection"]


## Composite price results
@dataclass(frozen=True)
class BreakdownItem:
    label: TimePeriodLabel
    price: float  # currency per kWh
    hours: float
    cost: float  # price * hours


@dataclass(frozen=True)
class CompositeResult:
    month: str  # "YYYY-MM"
    start_time: str  # "HH:MM"
    end_time: str  # "HH:MM"
    avg_price: float
    breakdown: list[BreakdownItem]
    total_hours: float


@dataclass(frozen=True)
class SkippedMonth:
    month: str
    reason: SkipReason


@dataclass
class CompositeSummary:
    results: list[CompositeResult] = field(default_factory=list)
    skipped: list[SkippedMonth] = field(default_factory=list)
    avg_price: float = 0.0
    total_hours: float = 0.0
    average_hours: float = 0.0

    @property
    def has_data(self) -> bool:
        return bool(self.results)

    @property
    def months(self) -> list[str]:
        return [r.month for r in self.results]


## Matrix persistence plan
@dataclass
class ConfigReplacement:
    province: str
    upserts: list[TimeConfiguration] = field(default_factory=list)
    deletes: list[str] = field(default_factory=list)


@dataclass
class CoverageReport:
    province: Optional[str]
    overlaps: Dict[int, List[str]] = field(default_factory=dict)  # month -> config ids
    missing: List[int] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.overlaps and not self.missing
