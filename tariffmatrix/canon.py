from __future__ import annotations
from typing import Final

MINUTES_PER_HOUR: Final[int] = 60
HOURS_PER_DAY: Final[int] = 24
MINUTES_PER_DAY: Final[int] = MINUTES_PER_HOUR * HOURS_PER_DAY
MONTHS: Final[tuple[int, ...]] = tuple(range(1, 13))

# Tier order, highest price first. Breakdown tables are sorted by this.
LABEL_ORDER: Final[tuple[str, ...]] = ("tip", "peak", "flat", "valley", "deep")
FALLBACK_LABEL: Final[str] = "valley"

ALL_MONTHS_PATTERN: Final[str] = "All"
ANY_PROVINCE: Final[str] = "全部"
END_OF_DAY: Final[str] = "24:00"
DEFAULT_CURRENCY_UNIT: Final[str] = "CNY/kWh"
SAVED_RESULT_PREFIX: Final[str] = "comp-"
