"""Selecting and deriving tariff records from in-memory record lists."""

from __future__ import annotations
from typing import Dict, Iterable, List, Literal, Optional

import pandas as pd

from . import canon
from .schema import PriceSchema, TariffRecord, TimeConfiguration


def filter_tariffs(
    tariffs: Iterable[TariffRecord],
    province: Optional[str] = None,
    category: Optional[str] = None,
    voltage_level: Optional[str] = None,
    month: Optional[str] = None,
) -> list[TariffRecord]:
    """Records matching every criterion given; None matches anything."""
    out = []
    for t in tariffs:
        if province is not None and t.province != province:
            continue
        if category is not None and t.category != category:
            continue
        if voltage_level is not None and t.voltage_level != voltage_level:
            continue
        if month is not None and t.month != month:
            continue
        out.append(t)
    return out


def find_tariff(
    tariffs: Iterable[TariffRecord],
    *,
    province: str,
    category: str,
    voltage_level: str,
    month: str,
) -> Optional[TariffRecord]:
    matches = filter_tariffs(tariffs, province, category, voltage_level, month)
    return matches[0] if matches else None


def _unique(values: Iterable[str]) -> list[str]:
    # first-seen order, blanks dropped
    return list(dict.fromkeys(v for v in values if v))


def active_provinces(tariffs: Iterable[TariffRecord]) -> list[str]:
    return sorted(_unique(t.province for t in tariffs))


def available_categories(tariffs: Iterable[TariffRecord], province: str) -> list[str]:
    return _unique(t.category for t in filter_tariffs(tariffs, province))


def available_voltages(
    tariffs: Iterable[TariffRecord], province: str, category: str
) -> list[str]:
    return _unique(t.voltage_level for t in filter_tariffs(tariffs, province, category))


def available_months(
    tariffs: Iterable[TariffRecord], province: str, category: str, voltage_level: str
) -> list[str]:
    return sorted(
        _unique(
            t.month for t in filter_tariffs(tariffs, province, category, voltage_level)
        )
    )


def configs_for_province(
    configs: Iterable[TimeConfiguration], province: str
) -> list[TimeConfiguration]:
    return [c for c in configs if c.province in (province, canon.ANY_PROVINCE)]


def tariff_from_config(
    config: TimeConfiguration,
    *,
    province: str,
    month: str,
    category: str,
    voltage_level: str,
    prices: PriceSchema | dict,
    city: Optional[str] = None,
    currency_unit: str = canon.DEFAULT_CURRENCY_UNIT,
) -> TariffRecord:
    """New tariff record carrying its own copy of the configuration's rules."""
    return TariffRecord(
        province=province,
        city=city,
        month=month,
        category=category,
        voltage_level=voltage_level,
        prices=prices,
        time_rules=list(config.time_rules),
        currency_unit=currency_unit,
        source_config_id=config.id,
    )


def _price_key(prices: PriceSchema) -> str:
    return prices.model_dump_json()


def find_duplicates(
    tariffs: Iterable[TariffRecord],
    mode: Literal["exact", "price"] = "exact",
) -> Dict[str, List[TariffRecord]]:
    """
    Group records that look like duplicates; only groups of two or more.

    'exact' keys on province, month, category, voltage and prices; 'price'
    ignores category and voltage.
    """
    groups: Dict[str, List[TariffRecord]] = {}
    for t in tariffs:
        if mode == "exact":
            key = (
                f"{t.province}-{t.month}-{t.category}-{t.voltage_level}-"
                f"{_price_key(t.prices)}"
            )
        else:
            key = f"{t.province}-{t.month}-{_price_key(t.prices)}"
        groups.setdefault(key, []).append(t)
    return {k: v for k, v in groups.items() if len(v) > 1}


def price_trend(
    tariffs: Iterable[TariffRecord],
    province: str,
    category: str,
    voltage_level: str,
) -> pd.DataFrame:
    """
    Month-sorted unit prices for one tariff series.

    Columns: 'month', then one column per label in display order.
    """
    rows = [
        {"month": t.month, **{lb: t.prices.price_for(lb) for lb in canon.LABEL_ORDER}}
        for t in filter_tariffs(tariffs, province, category, voltage_level)
    ]
    out = pd.DataFrame(rows, columns=["month", *canon.LABEL_ORDER])
    return out.sort_values("month", kind="stable").reset_index(drop=True)
