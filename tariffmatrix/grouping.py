from __future__ import annotations
import logging
from typing import Iterable, Mapping, Optional, Sequence

from . import canon
from .codec import grid_to_rules, rules_key, rules_to_grid
from .config import CalculatorConfig
from .exceptions import GridError, require
from .matrix import blank_matrix
from .schema import TimeConfiguration, TimeRule
from .types import ConfigReplacement, MonthMatrix, TimePeriodLabel

log = logging.getLogger(__name__)


def group_month_grids(
    province: str,
    matrix: Mapping[int, Sequence[TimePeriodLabel | str]],
) -> list[TimeConfiguration]:
    """
    Compress a 12-month label matrix into as few configurations as possible.

    Months whose grids encode to the same rule sequence share one
    configuration. If every month agrees the result is a single 'All'
    configuration, otherwise one per group with a sorted comma-joined
    month list. Groups come out in order of their first month.
    """
    require(
        set(matrix) == set(canon.MONTHS),
        f"Matrix must have exactly months 1..12, got {sorted(matrix)}",
        GridError,
    )

    groups: dict[tuple, tuple[list[TimeRule], list[int]]] = {}
    for month in canon.MONTHS:
        rules = grid_to_rules(matrix[month])
        key = rules_key(rules)
        if key not in groups:
            groups[key] = (rules, [])
        groups[key][1].append(month)

    if len(groups) == 1:
        (rules, months), = groups.values()
        if len(months) == len(canon.MONTHS):
            return [
                TimeConfiguration(
                    province=province,
                    month_pattern=canon.ALL_MONTHS_PATTERN,
                    time_rules=rules,
                )
            ]

    configs = []
    for rules, months in groups.values():
        if not rules:
            continue
        configs.append(
            TimeConfiguration(
                province=province,
                month_pattern=",".join(str(m) for m in sorted(months)),
                time_rules=rules,
            )
        )
    return configs


def matrix_from_configs(
    province: str,
    configs: Iterable[TimeConfiguration],
    *,
    config: Optional[CalculatorConfig] = None,
) -> MonthMatrix:
    """
    Load a province's configurations into the editor matrix.

    Months no configuration covers stay at the fallback label. When patterns
    overlap, later configurations win.
    """
    fallback = config.fallback_label if config else canon.FALLBACK_LABEL
    out = blank_matrix(fallback)
    for cfg in configs:
        if cfg.province != province:
            continue
        grid = rules_to_grid(cfg.time_rules, config=config)
        for month in cfg.months():
            out[month] = list(grid)
    return out


def plan_province_replace(
    province: str,
    matrix: Mapping[int, Sequence[TimePeriodLabel | str]],
    existing: Iterable[TimeConfiguration],
) -> ConfigReplacement:
    """New configurations for the province plus the ids of all it replaces."""
    upserts = group_month_grids(province, matrix)
    deletes = [c.id for c in existing if c.province == province]
    log.info(
        "Replacing %d configuration(s) for %s with %d",
        len(deletes),
        province,
        len(upserts),
    )
    return ConfigReplacement(province=province, upserts=upserts, deletes=deletes)
