# backend/campboard/stats.py
"""
Read-side aggregation over submission rows: qualification, streaks and ranks.

Everything here is a pure function over already-loaded rows so the report
routers can recompute on every request.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Dict, Iterable, List, Optional, Protocol, Sequence, Set

UNRANKED = "Unranked"


class _SubmissionLike(Protocol):
    date: date
    missions: list
    status: str


class _ThresholdLike(Protocol):
    rank_name: str
    missions_required: int
    qualified_days_required: int
    rank_order: int


def is_qualified(mission_count: int, threshold: int) -> bool:
    return mission_count >= threshold


def countable(submissions: Iterable[_SubmissionLike]) -> List[_SubmissionLike]:
    """Only approved submissions count toward totals, qualified days and streaks."""
    return [s for s in submissions if s.status == "approved"]


def daily_mission_counts(submissions: Iterable[_SubmissionLike]) -> Dict[date, int]:
    """Largest mission count per day (there is normally one row per day)."""
    out: Dict[date, int] = {}
    for s in submissions:
        n = len(s.missions or [])
        if n > out.get(s.date, -1):
            out[s.date] = n
    return out


def qualified_dates(submissions: Iterable[_SubmissionLike], threshold: int) -> Set[date]:
    return {d for d, n in daily_mission_counts(submissions).items() if is_qualified(n, threshold)}


def current_streak(qualified: Iterable[date], today: date) -> int:
    """
    Consecutive qualified days ending today.
    An unqualified today does not break the streak (the day is not over),
    counting then starts from yesterday.
    """
    days = set(qualified)
    cursor = today if today in days else today - timedelta(days=1)
    streak = 0
    while cursor in days:
        streak += 1
        cursor -= timedelta(days=1)
    return streak


def calculate_rank(total_missions: int, qualified_days: int, thresholds: Sequence[_ThresholdLike]) -> str:
    achieved = [
        t for t in sorted(thresholds, key=lambda t: t.rank_order)
        if total_missions >= t.missions_required and qualified_days >= t.qualified_days_required
    ]
    if not achieved:
        return UNRANKED
    return achieved[-1].rank_name


@dataclass
class CamperSummary:
    total_submissions: int
    total_missions: int
    qualified_days: int
    total_days: int
    current_streak: int


def summarize_camper(
    submissions: Iterable[_SubmissionLike],
    threshold: int,
    today: Optional[date] = None,
) -> CamperSummary:
    rows = countable(submissions)
    counts = daily_mission_counts(rows)
    qualified = {d for d, n in counts.items() if is_qualified(n, threshold)}
    return CamperSummary(
        total_submissions=len(rows),
        total_missions=sum(len(s.missions or []) for s in rows),
        qualified_days=len(qualified),
        total_days=len(counts),
        current_streak=current_streak(qualified, today) if today else 0,
    )


def percentage(part: int, whole: int) -> int:
    if not whole:
        return 0
    return round(part * 100 / whole)
