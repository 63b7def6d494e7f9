from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import List

import pytest

from campboard.stats import (
    UNRANKED,
    calculate_rank,
    current_streak,
    daily_mission_counts,
    is_qualified,
    percentage,
    qualified_dates,
    summarize_camper,
)

TODAY = date(2025, 7, 10)


@dataclass
class Row:
    date: date
    missions: List[str] = field(default_factory=list)
    status: str = "approved"


@dataclass
class Threshold:
    rank_name: str
    missions_required: int
    qualified_days_required: int
    rank_order: int


THRESHOLDS = [
    Threshold("Bronze", 50, 5, 1),
    Threshold("Silver", 150, 15, 2),
    Threshold("Gold", 300, 30, 3),
]


@pytest.mark.parametrize("threshold", range(1, 21))
def test_is_qualified_grid(threshold):
    for count in range(0, threshold + 6):
        assert is_qualified(count, threshold) is (count >= threshold)


def test_streak_counts_consecutive_days_ending_today():
    days = [TODAY, TODAY - timedelta(days=1), TODAY - timedelta(days=2), TODAY - timedelta(days=4)]
    assert current_streak(days, TODAY) == 3


def test_streak_starts_from_yesterday_when_today_is_open():
    days = [TODAY - timedelta(days=1), TODAY - timedelta(days=2)]
    assert current_streak(days, TODAY) == 2


def test_streak_broken_by_gap():
    days = [TODAY - timedelta(days=2), TODAY - timedelta(days=3)]
    assert current_streak(days, TODAY) == 0
    assert current_streak([], TODAY) == 0


@pytest.mark.parametrize(
    "missions, days, expected",
    [
        (160, 16, "Silver"),
        (40, 2, UNRANKED),
        (500, 3, UNRANKED),
        (500, 30, "Gold"),
        (50, 5, "Bronze"),
    ],
)
def test_calculate_rank(missions, days, expected):
    assert calculate_rank(missions, days, THRESHOLDS) == expected


def test_calculate_rank_ignores_input_order():
    assert calculate_rank(160, 16, list(reversed(THRESHOLDS))) == "Silver"
    assert calculate_rank(10, 10, []) == UNRANKED


def test_daily_counts_keep_largest_per_day():
    rows = [Row(TODAY, ["a"]), Row(TODAY, ["a", "b", "c"]), Row(TODAY - timedelta(days=1), ["a", "b"])]
    assert daily_mission_counts(rows) == {TODAY: 3, TODAY - timedelta(days=1): 2}
    assert qualified_dates(rows, 3) == {TODAY}


def test_summary_only_counts_approved_rows():
    rows = [
        Row(TODAY, ["a", "b", "c"]),
        Row(TODAY - timedelta(days=1), ["a", "b", "c"]),
        Row(TODAY - timedelta(days=2), ["a", "b", "c", "d"], status="rejected"),
        Row(TODAY - timedelta(days=3), ["a"], status="submitted"),
    ]
    summary = summarize_camper(rows, 3, TODAY)
    assert summary.total_submissions == 2
    assert summary.total_missions == 6
    assert summary.qualified_days == 2
    assert summary.current_streak == 2


def test_percentage_rounds_and_handles_empty():
    assert percentage(1, 3) == 33
    assert percentage(2, 3) == 67
    assert percentage(5, 0) == 0
