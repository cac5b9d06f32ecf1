"""
Conversion between the hourly label grid used by the matrix editor and the
run-length time rules that are stored on configuration and tariff records.
"""

from __future__ import annotations
import logging
from typing import Iterable, Mapping, Optional, Sequence

from . import canon, intervals
from .config import CalculatorConfig, default_config
from .exceptions import GridError
from .schema import TimeRule
from .types import DayGrid, TimePeriodLabel

log = logging.getLogger(__name__)


def coerce_grid(grid: Sequence[TimePeriodLabel | str]) -> DayGrid:
    """Return a copy of grid as labels, or raise GridError."""
    if len(grid) != canon.HOURS_PER_DAY:
        raise GridError(
            f"Day grid must have {canon.HOURS_PER_DAY} slots, got {len(grid)}"
        )
    out: DayGrid = []
    for hour, value in enumerate(grid):
        try:
            out.append(TimePeriodLabel(value))
        except ValueError:
            raise GridError(f"Unknown label {value!r} at hour {hour}") from None
    return out


def _hour_str(hour: int) -> str:
    return f"{hour % canon.HOURS_PER_DAY:02d}:00"


def grid_to_rules(grid: Sequence[TimePeriodLabel | str]) -> list[TimeRule]:
    """
    Minimal run-length encoding of a 24-slot grid.

    One rule per maximal run of equal labels, in hour order. The run that
    reaches the end of the day ends at '00:00' rather than '24:00', except
    for a single run covering the whole day: '00:00'-'00:00' would be an empty
    window, so that rule ends at '24:00'.
    """
    labels = coerce_grid(grid)
    rules: list[TimeRule] = []
    run_start = 0
    for hour in range(1, canon.HOURS_PER_DAY + 1):
        if hour < canon.HOURS_PER_DAY and labels[hour] == labels[run_start]:
            continue
        rules.append(
            TimeRule(
                start=_hour_str(run_start),
                end=(
                    canon.END_OF_DAY
                    if run_start == 0 and hour == canon.HOURS_PER_DAY
                    else _hour_str(hour)
                ),
                label=labels[run_start],
            )
        )
        run_start = hour
    return rules


def _as_rule(rule: TimeRule | Mapping) -> TimeRule:
    return rule if isinstance(rule, TimeRule) else TimeRule.model_validate(rule)


def rules_to_grid(
    rules: Iterable[TimeRule | Mapping],
    *,
    config: Optional[CalculatorConfig] = None,
) -> DayGrid:
    """
    Expand time rules into a 24-slot grid.

    Slots no rule reaches keep the fallback label. Only whole hours are
    representable: a boundary inside an hour is floored to that hour.
    """
    cfg = config or default_config()
    grid: DayGrid = [cfg.fallback_label] * canon.HOURS_PER_DAY
    for raw in rules:
        rule = _as_rule(raw)
        for lo, hi in intervals.segments_of(rule.start, rule.end):
            if cfg.warn_on_truncation and (
                lo % canon.MINUTES_PER_HOUR or hi % canon.MINUTES_PER_HOUR
            ):
                log.warning(
                    "Rule %s-%s (%s) is not hour aligned; truncated to whole hours",
                    rule.start,
                    rule.end,
                    rule.label.value,
                )
            for hour in range(
                lo // canon.MINUTES_PER_HOUR, hi // canon.MINUTES_PER_HOUR
            ):
                grid[hour] = rule.label
    return grid


def rules_key(rules: Iterable[TimeRule]) -> tuple[tuple[str, str, str], ...]:
    """Order-sensitive structural key for a rule sequence."""
    return tuple(r.key() for r in rules)
