from __future__ import annotations
from datetime import datetime, timezone
from typing import Optional
from uuid import uuid4

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from . import canon, intervals
from .types import TimePeriodLabel

CurrencyPerKwh = float


def new_id() -> str:
    return str(uuid4())


def utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


class TimeRule(BaseModel):
    """One labelled [start, end) period of a day; end may wrap past midnight."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    start: str  # "HH:MM"
    end: str  # "HH:MM"; "00:00"/"24:00" after a non-zero start is end of day
    # stored records from the editor use "type" for the tier
    label: TimePeriodLabel = Field(validation_alias=AliasChoices("label", "type"))

    @field_validator("start", "end", mode="before")
    @classmethod
    def _strip(cls, v):
        return v.strip() if isinstance(v, str) else v

    def key(self) -> tuple[str, str, str]:
        return (self.start, self.end, self.label.value)


class PriceSchema(BaseModel):
    tip: CurrencyPerKwh = Field(0.0, ge=0)
    peak: CurrencyPerKwh = Field(0.0, ge=0)
    flat: CurrencyPerKwh = Field(0.0, ge=0)
    valley: CurrencyPerKwh = Field(0.0, ge=0)
    deep: Optional[CurrencyPerKwh] = Field(None, ge=0)

    def price_for(self, label: TimePeriodLabel | str) -> float:
        value = getattr(self, TimePeriodLabel(label).value)
        return float(value) if value is not None else 0.0


class TimeConfiguration(BaseModel):
    id: str = Field(default_factory=new_id)
    province: str
    month_pattern: str  # "All" or e.g. "1,2,12"
    time_rules: list[TimeRule]
    updated_at: str = Field(default_factory=utc_now)

    @property
    def applies_to_all(self) -> bool:
        return self.month_pattern.strip() == canon.ALL_MONTHS_PATTERN

    def months(self) -> tuple[int, ...]:
        """Months covered by month_pattern; junk entries are ignored."""
        if self.applies_to_all:
            return canon.MONTHS
        out = set()
        for part in self.month_pattern.split(","):
            part = part.strip()
            if part.isdigit() and 1 <= int(part) <= 12:
                out.add(int(part))
        return tuple(sorted(out))


class TariffRecord(BaseModel):
    id: str = Field(default_factory=new_id)
    created_at: str = Field(default_factory=utc_now)
    province: str
    city: Optional[str] = None
    month: str = Field(pattern=r"^\d{4}-\d{2}$")  # "YYYY-MM"
    category: str
    voltage_level: str
    prices: PriceSchema
    time_rules: list[TimeRule] = Field(default_factory=list)
    currency_unit: str = canon.DEFAULT_CURRENCY_UNIT
    source_config_id: Optional[str] = None

    @property
    def month_number(self) -> int:
        return int(self.month[5:7])


class SavedCompositeResult(BaseModel):
    id: str
    province: str
    category: str
    voltage_level: str
    avg_price: float
    months: list[str]
    start_time: str
    end_time: str
    last_modified: str = Field(default_factory=utc_now)


class SavedTimeRange(BaseModel):
    id: str = Field(default_factory=new_id)
    name: str = Field(min_length=1)
    start_time: str
    end_time: str
    created_at: str = Field(default_factory=utc_now)

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("name must not be blank")
        return v.strip()

    @field_validator("start_time")
    @classmethod
    def _start_bound(cls, v: str) -> str:
        v = v.strip()
        intervals.time_to_minutes(v)
        return v

    @field_validator("end_time")
    @classmethod
    def _end_bound(cls, v: str) -> str:
        # "24:00" is only meaningful as an end of day
        v = v.strip()
        if v != canon.END_OF_DAY:
            intervals.time_to_minutes(v)
        return v
