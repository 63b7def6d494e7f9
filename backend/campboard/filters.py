# backend/campboard/filters.py
from __future__ import annotations

from datetime import date, timedelta
from typing import Iterable, List, Optional, Protocol

DATE_FILTERS = ("all", "today", "yesterday", "week")


class _PersonRow(Protocol):
    name: str
    access_code: str
    bunk_id: str
    bunk_name: str


def _matches(needle: str, *haystacks: Optional[str]) -> bool:
    needle = needle.lower()
    return any(needle in (h or "").lower() for h in haystacks)


def filter_submissions(
    rows: Iterable,
    search: Optional[str] = None,
    status: Optional[str] = None,
    bunk: Optional[str] = None,
    date_filter: Optional[str] = None,
    today: Optional[date] = None,
) -> List:
    """
    Client-side style filtering over already-loaded submission view rows
    (objects with camper_name, camper_code, bunk_name, status, date).
    Each filter narrows the result, so combining them intersects.
    """
    out = list(rows)
    if search:
        out = [r for r in out if _matches(search, r.camper_name, r.camper_code, r.bunk_name)]
    if status and status != "all":
        out = [r for r in out if r.status == status]
    if bunk and bunk != "all":
        b = bunk.lower()
        out = [r for r in out if (r.bunk_name or "").lower() == b or (getattr(r, "bunk_id", "") or "").lower() == b]
    if date_filter and date_filter != "all" and today is not None:
        if date_filter == "today":
            out = [r for r in out if r.date == today]
        elif date_filter == "yesterday":
            y = today - timedelta(days=1)
            out = [r for r in out if r.date == y]
        elif date_filter == "week":
            week_ago = today - timedelta(days=7)
            out = [r for r in out if r.date >= week_ago]
    return out


def filter_people(rows: Iterable[_PersonRow], search: Optional[str] = None, bunk: Optional[str] = None) -> List:
    out = list(rows)
    if search:
        out = [r for r in out if _matches(search, r.name, r.access_code, r.bunk_name)]
    if bunk:
        out = [r for r in out if r.bunk_id == bunk]
    return out
