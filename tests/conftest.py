import pytest

from tariffmatrix.schema import PriceSchema, TariffRecord, TimeRule

PROVINCE = "江苏省"
CATEGORY = "工商业"
VOLTAGE = "10kV"


def _grid(runs):
    """Build a 24-slot grid from [(start_hour, end_hour, label), ...]."""
    out = [None] * 24
    for lo, hi, label in runs:
        for h in range(lo, hi):
            out[h] = label
    assert None not in out
    return out


@pytest.fixture
def peak_valley_grid():
    return _grid([(0, 8, "valley"), (8, 20, "peak"), (20, 24, "valley")])


@pytest.fixture
def summer_grid():
    return _grid(
        [
            (0, 8, "valley"),
            (8, 11, "flat"),
            (11, 13, "tip"),
            (13, 17, "peak"),
            (17, 22, "flat"),
            (22, 24, "valley"),
        ]
    )


@pytest.fixture
def peak_valley_rules():
    return [
        TimeRule(start="00:00", end="08:00", label="valley"),
        TimeRule(start="08:00", end="20:00", label="peak"),
        TimeRule(start="20:00", end="00:00", label="valley"),
    ]


@pytest.fixture
def make_tariff(peak_valley_rules):
    def _make(month="2024-01", rules=None, prices=None, **kw):
        return TariffRecord(
            province=kw.pop("province", PROVINCE),
            category=kw.pop("category", CATEGORY),
            voltage_level=kw.pop("voltage_level", VOLTAGE),
            month=month,
            prices=prices or PriceSchema(valley=0.3, peak=1.0),
            time_rules=peak_valley_rules if rules is None else rules,
            **kw,
        )

    return _make
