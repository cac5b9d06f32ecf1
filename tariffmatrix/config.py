from __future__ import annotations

from dataclasses import dataclass

from . import canon
from .types import TimePeriodLabel


@dataclass
class CalculatorConfig:
    # Window offered when the caller has not picked one
    default_start_time: str = "08:00"
    default_end_time: str = "17:00"

    # Label for hours no rule covers when decoding rules into a grid
    fallback_label: TimePeriodLabel = TimePeriodLabel(canon.FALLBACK_LABEL)
    # Log rules whose boundaries are not on the hour
    warn_on_truncation: bool = True


def default_config() -> CalculatorConfig:
    return CalculatorConfig()
