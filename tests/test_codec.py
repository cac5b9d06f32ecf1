"""Grid <-> rules codec: minimal encoding and lossless round trip."""

import itertools
import logging
import random

import pytest

from tariffmatrix import canon, codec, intervals
from tariffmatrix.exceptions import GridError
from tariffmatrix.schema import TimeRule
from tariffmatrix.types import TimePeriodLabel


def _random_grids(n=200, seed=7):
    rnd = random.Random(seed)
    labels = list(canon.LABEL_ORDER)
    for _ in range(n):
        # few labels so that runs of equal neighbours are common
        pool = rnd.sample(labels, rnd.randint(1, 3))
        yield [rnd.choice(pool) for _ in range(24)]


def test_grid_to_rules_basic(peak_valley_grid):
    rules = codec.grid_to_rules(peak_valley_grid)
    assert [(r.start, r.end, r.label.value) for r in rules] == [
        ("00:00", "08:00", "valley"),
        ("08:00", "20:00", "peak"),
        ("20:00", "00:00", "valley"),
    ]


def test_uniform_grid_is_one_rule():
    rules = codec.grid_to_rules(["flat"] * 24)
    assert len(rules) == 1
    assert (rules[0].start, rules[0].end) == ("00:00", "24:00")
    assert codec.rules_to_grid(rules) == [TimePeriodLabel.FLAT] * 24


def test_round_trip_grid_rules_grid(summer_grid):
    grids = [summer_grid, *_random_grids()]
    for g in grids:
        assert codec.rules_to_grid(codec.grid_to_rules(g)) == [TimePeriodLabel(x) for x in g]


def test_rules_are_minimal():
    """No two adjacent rules share a label; one rule per maximal run."""
    for g in _random_grids():
        rules = codec.grid_to_rules(g)
        runs = len([k for k, _ in itertools.groupby(g)])
        assert len(rules) == runs
        for a, b in zip(rules, rules[1:]):
            assert a.label != b.label


def test_rules_partition_the_day():
    for g in _random_grids(50):
        covered = [0] * canon.MINUTES_PER_DAY
        for r in codec.grid_to_rules(g):
            for lo, hi in intervals.segments_of(r.start, r.end):
                for m in range(lo, hi):
                    covered[m] += 1
        assert set(covered) == {1}


def test_rules_to_grid_fills_gaps_with_valley():
    rules = [TimeRule(start="08:00", end="10:00", label="peak")]
    grid = codec.rules_to_grid(rules)
    assert grid[8:10] == [TimePeriodLabel.PEAK] * 2
    assert grid[:8] == [TimePeriodLabel.VALLEY] * 8
    assert grid[10:] == [TimePeriodLabel.VALLEY] * 14


def test_rules_to_grid_empty_rules():
    assert codec.rules_to_grid([]) == [TimePeriodLabel.VALLEY] * 24


def test_rules_to_grid_wrapping_rule():
    grid = codec.rules_to_grid([TimeRule(start="22:00", end="06:00", label="deep")])
    deep = [h for h, lbl in enumerate(grid) if lbl == TimePeriodLabel.DEEP]
    assert deep == [0, 1, 2, 3, 4, 5, 22, 23]


def test_rules_to_grid_accepts_stored_dicts():
    """Stored rules carry the tier under 'type'."""
    grid = codec.rules_to_grid([{"start": "00:00", "end": "24:00", "type": "tip"}])
    assert grid == [TimePeriodLabel.TIP] * 24


def test_sub_hour_rule_is_truncated_and_logged(caplog):
    rules = [TimeRule(start="08:30", end="10:30", label="peak")]
    with caplog.at_level(logging.WARNING, logger="tariffmatrix.codec"):
        grid = codec.rules_to_grid(rules)
    assert grid[8] == grid[9] == TimePeriodLabel.PEAK
    assert grid[10] == TimePeriodLabel.VALLEY
    assert "not hour aligned" in caplog.text


def test_grid_validation():
    with pytest.raises(GridError):
        codec.grid_to_rules(["flat"] * 23)
    with pytest.raises(GridError):
        codec.grid_to_rules(["flat"] * 23 + ["shoulder"])


def test_midnight_to_midnight_rule_covers_nothing():
    """'00:00'-'00:00' is an empty window; its hours keep the fallback."""
    grid = codec.rules_to_grid([TimeRule(start="00:00", end="00:00", label="tip")])
    assert grid == [TimePeriodLabel.VALLEY] * 24
