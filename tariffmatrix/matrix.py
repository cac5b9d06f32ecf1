"""Editing operations on a 12-month by 24-hour label matrix.

Every function returns a new matrix; the input is never modified.
"""

from __future__ import annotations

from . import canon
from .codec import coerce_grid
from .exceptions import GridError, require
from .types import MonthMatrix, TimePeriodLabel


def _check_month(month: int) -> None:
    require(month in canon.MONTHS, f"Month must be 1..12, got {month!r}", GridError)


def _check_hour(hour: int) -> None:
    require(
        isinstance(hour, int) and 0 <= hour < canon.HOURS_PER_DAY,
        f"Hour must be 0..23, got {hour!r}",
        GridError,
    )


def blank_matrix(
    fill: TimePeriodLabel | str = canon.FALLBACK_LABEL,
) -> MonthMatrix:
    label = TimePeriodLabel(fill)
    return {m: [label] * canon.HOURS_PER_DAY for m in canon.MONTHS}


def _copy(matrix: MonthMatrix) -> MonthMatrix:
    out = blank_matrix()
    for m, grid in matrix.items():
        _check_month(m)
        out[m] = coerce_grid(grid)
    return out


def set_cell(
    matrix: MonthMatrix, month: int, hour: int, label: TimePeriodLabel | str
) -> MonthMatrix:
    _check_month(month)
    _check_hour(hour)
    out = _copy(matrix)
    out[month][hour] = TimePeriodLabel(label)
    return out


def paint(
    matrix: MonthMatrix,
    cells: list[tuple[int, int]],
    label: TimePeriodLabel | str,
) -> MonthMatrix:
    """Apply one label to many (month, hour) cells, as a drag selection does."""
    out = _copy(matrix)
    lbl = TimePeriodLabel(label)
    for month, hour in cells:
        _check_month(month)
        _check_hour(hour)
        out[month][hour] = lbl
    return out


def fill_month(
    matrix: MonthMatrix, month: int, label: TimePeriodLabel | str
) -> MonthMatrix:
    _check_month(month)
    out = _copy(matrix)
    out[month] = [TimePeriodLabel(label)] * canon.HOURS_PER_DAY
    return out


def copy_previous_month(matrix: MonthMatrix, month: int) -> MonthMatrix:
    """Copy month-1 onto month. January has no previous month and is left as is."""
    _check_month(month)
    out = _copy(matrix)
    if month > 1:
        out[month] = list(out[month - 1])
    return out
