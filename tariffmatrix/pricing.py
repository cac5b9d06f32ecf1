from __future__ import annotations
import logging
from typing import Iterable, Optional, Sequence

import numpy as np
import pandas as pd

from . import canon, catalog, intervals
from .config import CalculatorConfig, default_config
from .exceptions import EmptySelectionError, require
from .schema import SavedCompositeResult, TariffRecord
from .types import (
    BreakdownItem,
    CompositeResult,
    CompositeSummary,
    Segment,
    SkippedMonth,
    TimePeriodLabel,
)

log = logging.getLogger(__name__)


def composite_for_record(
    record: TariffRecord,
    start_time: str,
    end_time: str,
    *,
    window: Optional[Sequence[Segment]] = None,
) -> Optional[CompositeResult]:
    """
    Overlap-weighted average price of one month's schedule over a window.

    Each rule's price is weighted by the minutes it shares with the window.
    Returns None when the window touches none of the rules.
    """
    user_segments = (
        window if window is not None else intervals.segments_of(start_time, end_time)
    )

    weighted = 0.0
    minutes_total = 0
    buckets: dict[TimePeriodLabel, list] = {}  # label -> [price, minutes]
    for rule in record.time_rules:
        price = record.prices.price_for(rule.label)
        for r_lo, r_hi in intervals.segments_of(rule.start, rule.end):
            for u_lo, u_hi in user_segments:
                overlap = intervals.overlap_minutes(u_lo, u_hi, r_lo, r_hi)
                if overlap <= 0:
                    continue
                weighted += price * overlap
                minutes_total += overlap
                buckets.setdefault(rule.label, [price, 0])[1] += overlap

    if minutes_total == 0:
        return None

    breakdown = []
    for label in sorted(buckets, key=lambda lbl: lbl.rank):
        price, minutes = buckets[label]
        hours = minutes / canon.MINUTES_PER_HOUR
        breakdown.append(
            BreakdownItem(label=label, price=price, hours=hours, cost=price * hours)
        )
    return CompositeResult(
        month=record.month,
        start_time=start_time,
        end_time=end_time,
        avg_price=weighted / minutes_total,
        breakdown=breakdown,
        total_hours=minutes_total / canon.MINUTES_PER_HOUR,
    )


def aggregate_average(results: Iterable[CompositeResult]) -> Optional[float]:
    """Hours-weighted mean of monthly averages; None when there are no hours."""
    results = list(results)
    if not results:
        return None
    hours = np.array([r.total_hours for r in results], dtype=float)
    if hours.sum() <= 0:
        return None
    prices = np.array([r.avg_price for r in results], dtype=float)
    return float(np.average(prices, weights=hours))


def average_hours(results: Iterable[CompositeResult]) -> float:
    hours = [r.total_hours for r in results]
    return float(np.mean(hours)) if hours else 0.0


def calculate_composite(
    tariffs: Iterable[TariffRecord],
    *,
    province: str,
    category: str,
    voltage_level: str,
    months: Sequence[str],
    start_time: Optional[str] = None,
    end_time: Optional[str] = None,
    config: Optional[CalculatorConfig] = None,
) -> CompositeSummary:
    """
    Composite price of a daily window across the selected months.

    Raises EmptySelectionError when no month is selected. Months without a
    matching tariff record, or whose rules miss the window entirely, are
    reported in `skipped` and left out of the average.
    """
    require(len(months) > 0, "Select at least one month", EmptySelectionError)
    cfg = config or default_config()
    start_time = start_time or cfg.default_start_time
    end_time = end_time or cfg.default_end_time

    window = intervals.segments_of(start_time, end_time)
    candidates = catalog.filter_tariffs(tariffs, province, category, voltage_level)

    summary = CompositeSummary()
    for month in dict.fromkeys(months):
        record = catalog.find_tariff(
            candidates,
            province=province,
            category=category,
            voltage_level=voltage_level,
            month=month,
        )
        if record is None:
            log.info(
                "No tariff for %s %s %s in %s; skipped",
                province,
                category,
                voltage_level,
                month,
            )
            summary.skipped.append(SkippedMonth(month, "missing_tariff"))
            continue
        result = composite_for_record(record, start_time, end_time, window=window)
        if result is None:
            log.info(
                "Window %s-%s misses every rule in %s; skipped",
                start_time,
                end_time,
                month,
            )
            summary.skipped.append(SkippedMonth(month, "no_intersection"))
            continue
        log.debug(
            "%s: avg %.4f over %.2f h", month, result.avg_price, result.total_hours
        )
        summary.results.append(result)

    avg = aggregate_average(summary.results)
    if avg is not None:
        summary.avg_price = avg
        summary.total_hours = float(sum(r.total_hours for r in summary.results))
        summary.average_hours = average_hours(summary.results)
    return summary


def build_saved_result(
    summary: CompositeSummary,
    *,
    province: str,
    category: str,
    voltage_level: str,
    months: Sequence[str],
    start_time: str,
    end_time: str,
) -> SavedCompositeResult:
    """Package a summary for the store. One saved result is kept per province."""
    require(
        summary.has_data,
        "Nothing to save: no month produced a price",
        EmptySelectionError,
    )
    return SavedCompositeResult(
        id=f"{canon.SAVED_RESULT_PREFIX}{province}",
        province=province,
        category=category,
        voltage_level=voltage_level,
        avg_price=summary.avg_price,
        months=list(months),
        start_time=start_time,
        end_time=end_time,
    )


def breakdown_frame(summary: CompositeSummary) -> pd.DataFrame:
    """Long table of the per-month breakdowns: month, label, price, hours, cost."""
    rows = [
        {
            "month": r.month,
            "label": item.label.value,
            "price": item.price,
            "hours": item.hours,
            "cost": item.cost,
        }
        for r in summary.results
        for item in r.breakdown
    ]
    return pd.DataFrame(rows, columns=["month", "label", "price", "hours", "cost"])
