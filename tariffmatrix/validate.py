from __future__ import annotations
from typing import Iterable, Optional, Sequence

import numpy as np

from . import canon, intervals
from .codec import coerce_grid
from .exceptions import CoverageError, RuleError
from .schema import TimeConfiguration, TimeRule
from .types import CoverageReport, DayGrid, TimePeriodLabel


def assert_grid(grid: Sequence[TimePeriodLabel | str]) -> DayGrid:
    return coerce_grid(grid)


def minute_coverage(rules: Iterable[TimeRule]) -> np.ndarray:
    """Number of rules covering each minute of the day."""
    counts = np.zeros(canon.MINUTES_PER_DAY, dtype=int)
    for rule in rules:
        for lo, hi in intervals.segments_of(rule.start, rule.end):
            counts[lo:hi] += 1
    return counts


def assert_partition(rules: Iterable[TimeRule]) -> None:
    """Rules must cover every minute of the day exactly once."""
    counts = minute_coverage(rules)
    gaps = np.flatnonzero(counts == 0)
    if len(gaps):
        raise RuleError(
            f"Rules leave {len(gaps)} minute(s) uncovered, first at "
            f"{intervals.minutes_to_time(int(gaps[0]))}"
        )
    overlaps = np.flatnonzero(counts > 1)
    if len(overlaps):
        raise RuleError(
            f"Rules overlap for {len(overlaps)} minute(s), first at "
            f"{intervals.minutes_to_time(int(overlaps[0]))}"
        )


def month_coverage(
    configs: Iterable[TimeConfiguration], province: Optional[str] = None
) -> CoverageReport:
    """Check that a province's month patterns cover 1..12 once each."""
    owners: dict[int, list[str]] = {m: [] for m in canon.MONTHS}
    for cfg in configs:
        if province is not None and cfg.province != province:
            continue
        for m in cfg.months():
            owners[m].append(cfg.id)
    return CoverageReport(
        province=province,
        overlaps={m: ids for m, ids in owners.items() if len(ids) > 1},
        missing=[m for m, ids in owners.items() if not ids],
    )


def assert_month_coverage(
    configs: Iterable[TimeConfiguration], province: Optional[str] = None
) -> None:
    report = month_coverage(configs, province)
    if report.overlaps:
        raise CoverageError(
            f"Months covered by more than one configuration: {sorted(report.overlaps)}"
        )
    if report.missing:
        raise CoverageError(f"Months without a configuration: {report.missing}")
