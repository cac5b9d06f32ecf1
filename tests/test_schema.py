"""Record models: aliases, defaults and pattern parsing."""

import pydantic
import pytest

from tariffmatrix.exceptions import FormatError
from tariffmatrix.schema import (
    PriceSchema,
    SavedTimeRange,
    TariffRecord,
    TimeConfiguration,
    TimeRule,
)
from tariffmatrix.types import TimePeriodLabel


def test_time_rule_accepts_type_alias_and_dumps_label():
    rule = TimeRule.model_validate({"start": " 08:00", "end": "12:00", "type": "peak"})
    assert rule.label is TimePeriodLabel.PEAK
    assert rule.start == "08:00"
    assert rule.model_dump(mode="json") == {"start": "08:00", "end": "12:00", "label": "peak"}


def test_unknown_label_rejected():
    with pytest.raises(pydantic.ValidationError):
        TimeRule(start="00:00", end="24:00", label="shoulder")


def test_price_schema_deep_defaults_to_zero():
    prices = PriceSchema(tip=1.2, peak=1.0, flat=0.6, valley=0.3)
    assert prices.deep is None
    assert prices.price_for("deep") == 0.0
    assert prices.price_for(TimePeriodLabel.TIP) == 1.2
    with pytest.raises(pydantic.ValidationError):
        PriceSchema(peak=-0.1)


@pytest.mark.parametrize(
    "pattern,months",
    [
        ("All", tuple(range(1, 13))),
        ("12,1,2", (1, 2, 12)),
        (" 3 , 4,,x,0,13", (3, 4)),
    ],
)
def test_month_pattern_parsing(pattern, months):
    cfg = TimeConfiguration(province="江苏省", month_pattern=pattern, time_rules=[])
    assert cfg.months() == months


def test_tariff_record_ignores_store_fields():
    rec = TariffRecord.model_validate(
        {
            "id": "t1",
            "province": "江苏省",
            "month": "2024-07",
            "category": "工商业",
            "voltage_level": "10kV",
            "prices": {"tip": 1.3, "peak": 1.0, "flat": 0.6, "valley": 0.3},
            "time_rules": [{"start": "00:00", "end": "24:00", "type": "flat"}],
            "last_modified": "2024-07-01T00:00:00Z",
            "_deleted": False,
        }
    )
    assert rec.month_number == 7
    assert rec.time_rules[0].label is TimePeriodLabel.FLAT


def test_tariff_record_month_format():
    with pytest.raises(pydantic.ValidationError):
        TariffRecord(
            province="江苏省",
            month="2024-7",
            category="工商业",
            voltage_level="10kV",
            prices=PriceSchema(),
        )


def test_saved_time_range_validates_window():
    rng = SavedTimeRange(name=" 白班 ", start_time="08:00", end_time="24:00")
    assert rng.name == "白班"
    with pytest.raises(pydantic.ValidationError) as err:
        SavedTimeRange(name="夜班", start_time="25:00", end_time="06:00")
    assert "Hour out of range" in str(err.value)
    assert issubclass(FormatError, ValueError)


def test_saved_time_range_end_of_day_only_as_end():
    """'24:00' closes a window but cannot open one."""
    SavedTimeRange(name="晚班", start_time="18:00", end_time="24:00")
    with pytest.raises(pydantic.ValidationError):
        SavedTimeRange(name="夜班", start_time="24:00", end_time="06:00")
