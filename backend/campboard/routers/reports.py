# backend/campboard/routers/reports.py
"""
Read-only dashboards. Every report reloads its rows and recomputes from
scratch; nothing is cached between requests.
"""
from __future__ import annotations

import logging
from collections import defaultdict
from datetime import date, timedelta
from typing import Dict, List, Literal, Optional, Tuple

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import select, func
from sqlalchemy.orm import Session

from campboard import lifecycle
from campboard.camp_settings import get_settings, today_for
from campboard.camp_day import week_days
from campboard.csv_export import csv_response, to_csv
from campboard.db import get_db
from campboard.models.bunk import Bunk
from campboard.models.camp_session import CampSession
from campboard.models.camper import Camper
from campboard.models.camper_session_stats import CamperSessionStats
from campboard.models.camper_weekly_points import CamperWeeklyPoints
from campboard.models.mission import Mission
from campboard.models.rank_threshold import RankThreshold
from campboard.models.submission import Submission, REJECTED
from campboard.schemas.reports import (
    BunkPerformance,
    BunkReport,
    CamperHistory,
    CamperQualification,
    DailyStatusItem,
    DailyStatusReport,
    DayDetail,
    LeaderboardEntry,
    MissionAnalytics,
    QualificationReport,
    WeeklyReport,
    WeeklyRow,
)
from campboard.stats import (
    calculate_rank,
    countable,
    daily_mission_counts,
    is_qualified,
    percentage,
    summarize_camper,
)

router = APIRouter(prefix="/reports", tags=["reports"])
logger = logging.getLogger(__name__)

SortBy = Literal["name", "qualified", "missions"]

QUALIFICATION_COLUMNS = [
    ("Camper ID", "camper_id"),
    ("Name", "name"),
    ("Bunk", "bunk_name"),
    ("Qualified Days", "qualified_days"),
    ("Total Missions", "total_missions"),
    ("Days Submitted", "total_days"),
    ("Current Streak", "current_streak"),
    ("Rank", "rank"),
]


# ----------------------------------------------------------------------
# Helpers
# ----------------------------------------------------------------------
def _campers(db: Session) -> List[Camper]:
    return db.scalars(select(Camper).order_by(Camper.name)).all()


def _thresholds(db: Session) -> List[RankThreshold]:
    return db.scalars(
        select(RankThreshold)
        .where(RankThreshold.is_active.is_(True))
        .order_by(RankThreshold.rank_order)
    ).all()


def _window(
    db: Session,
    session_id: Optional[str],
    start_date: Optional[date],
    end_date: Optional[date],
) -> Tuple[date, date, Optional[CampSession]]:
    """
    Resolve the reporting window:
    explicit dates > a session id > "current" (active session) > "all".
    """
    today = today_for(db)
    if start_date or end_date:
        start = start_date or date.min
        end = end_date or today
        if end < start:
            raise HTTPException(status_code=400, detail="end_date must be on/after start_date")
        return start, end, None

    sess: Optional[CampSession] = None
    if session_id in (None, "current"):
        sess = db.scalar(select(CampSession).where(CampSession.is_active.is_(True)))
    elif session_id != "all":
        sess = db.get(CampSession, session_id)
        if sess is None:
            raise HTTPException(status_code=404, detail="Session not found")

    if sess is not None:
        return sess.start_date, sess.end_date, sess

    first = db.scalar(select(func.min(Submission.date)))
    return (first or today), max(today, first or today), None


def _submissions_between(db: Session, start: date, end: date) -> Dict[str, List[Submission]]:
    rows = db.scalars(
        select(Submission).where(Submission.date >= start, Submission.date <= end)
    ).all()
    by_camper: Dict[str, List[Submission]] = defaultdict(list)
    for s in rows:
        by_camper[s.camper_id].append(s)
    return by_camper


def _overrides(db: Session, sess: Optional[CampSession]) -> Dict[str, CamperSessionStats]:
    """Session-specific override rows win over the global (NULL session) ones."""
    rows = db.scalars(select(CamperSessionStats)).all()
    out: Dict[str, CamperSessionStats] = {}
    for r in rows:
        if r.session_id is None:
            out.setdefault(r.camper_id, r)
        elif sess is not None and r.session_id == sess.id:
            out[r.camper_id] = r
    return out


def _with_override(
    total_missions: int, qualified_days: int, ov: Optional[CamperSessionStats]
) -> Tuple[int, int]:
    if ov is not None:
        if ov.total_missions is not None:
            total_missions = ov.total_missions
        if ov.total_qualified_days is not None:
            qualified_days = ov.total_qualified_days
    return total_missions, qualified_days


def _qualification_rows(
    db: Session,
    start: date,
    end: date,
    sess: Optional[CampSession],
    sort_by: SortBy,
) -> List[CamperQualification]:
    settings = get_settings(db)
    required = settings.daily_required_missions
    today = today_for(db)
    thresholds = _thresholds(db)
    subs = _submissions_between(db, start, end)
    overrides = _overrides(db, sess)

    out: List[CamperQualification] = []
    for camper in _campers(db):
        approved = countable(subs.get(camper.id, []))
        counts = daily_mission_counts(approved)
        summary = summarize_camper(approved, required, today)

        total_missions, qualified_days = _with_override(
            summary.total_missions, summary.qualified_days, overrides.get(camper.id)
        )

        out.append(CamperQualification(
            camper_id=camper.id,
            name=camper.name,
            bunk_name=camper.bunk_name,
            qualified_days=qualified_days,
            total_missions=total_missions,
            total_days=summary.total_days,
            current_streak=summary.current_streak,
            rank=calculate_rank(total_missions, qualified_days, thresholds),
            days=[
                DayDetail(date=d, missions_count=n, qualified=is_qualified(n, required))
                for d, n in sorted(counts.items())
            ],
        ))

    if sort_by == "name":
        out.sort(key=lambda r: r.name)
    elif sort_by == "missions":
        out.sort(key=lambda r: (-r.total_missions, r.name))
    else:
        out.sort(key=lambda r: (-r.qualified_days, r.name))
    return out


def _daily_status(db: Session, day: date) -> List[DailyStatusItem]:
    required = get_settings(db).daily_required_missions
    todays = {
        s.camper_id: s
        for s in db.scalars(select(Submission).where(Submission.date == day)).all()
    }
    items: List[DailyStatusItem] = []
    for camper in _campers(db):
        sub = todays.get(camper.id)
        if sub is None:
            items.append(DailyStatusItem(
                camper_id=camper.id, name=camper.name, bunk_name=camper.bunk_name,
                status="not_submitted",
            ))
            continue
        qualified = sub.status != REJECTED and is_qualified(sub.mission_count, required)
        items.append(DailyStatusItem(
            camper_id=camper.id,
            name=camper.name,
            bunk_name=camper.bunk_name,
            status="qualified" if qualified else "submitted",
            missions_count=sub.mission_count,
            submitted_at=sub.submitted_at,
        ))
    # not submitted first, then by name
    items.sort(key=lambda i: (i.status != "not_submitted", i.name))
    return items


# ----------------------------------------------------------------------
# Daily tracking
# ----------------------------------------------------------------------
@router.get("/today", response_model=DailyStatusReport)
def daily_status(day: Optional[date] = Query(None), db: Session = Depends(get_db)):
    """Who has not submitted yet, who submitted, who qualified."""
    day = day or today_for(db)
    items = _daily_status(db, day)
    return DailyStatusReport(
        day=day,
        daily_required=get_settings(db).daily_required_missions,
        total_campers=len(items),
        not_submitted=sum(1 for i in items if i.status == "not_submitted"),
        submitted=sum(1 for i in items if i.status != "not_submitted"),
        qualified=sum(1 for i in items if i.status == "qualified"),
        campers=items,
    )


@router.get("/bunks", response_model=BunkReport)
def bunk_performance(day: Optional[date] = Query(None), db: Session = Depends(get_db)):
    day = day or today_for(db)
    items = _daily_status(db, day)
    campers = {c.id: c for c in _campers(db)}

    per_bunk: Dict[str, List[DailyStatusItem]] = defaultdict(list)
    for item in items:
        per_bunk[campers[item.camper_id].bunk_id].append(item)

    bunks: List[BunkPerformance] = []
    for bunk in db.scalars(select(Bunk).order_by(Bunk.display_name)).all():
        rows = per_bunk.get(bunk.id, [])
        qualified = sum(1 for r in rows if r.status == "qualified")
        bunks.append(BunkPerformance(
            bunk_id=bunk.id,
            bunk_name=bunk.display_name,
            total_campers=len(rows),
            submitted=sum(1 for r in rows if r.status != "not_submitted"),
            qualified=qualified,
            qualified_percentage=percentage(qualified, len(rows)),
        ))
    bunks.sort(key=lambda b: (-b.qualified_percentage, b.bunk_name))

    total_qualified = sum(b.qualified for b in bunks)
    return BunkReport(
        day=day,
        bunks=bunks,
        total_campers=len(items),
        total_qualified=total_qualified,
        camp_percentage=percentage(total_qualified, len(items)),
    )


# ----------------------------------------------------------------------
# Session-level reports
# ----------------------------------------------------------------------
@router.get("/qualification", response_model=QualificationReport)
def session_qualification(
    session_id: Optional[str] = Query(None, description="session id, 'current' or 'all'"),
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    sort_by: SortBy = Query("qualified"),
    db: Session = Depends(get_db),
):
    start, end, sess = _window(db, session_id, start_date, end_date)
    return QualificationReport(
        start_date=start,
        end_date=end,
        daily_required=get_settings(db).daily_required_missions,
        campers=_qualification_rows(db, start, end, sess, sort_by),
    )


@router.get("/qualification.csv")
def session_qualification_csv(
    session_id: Optional[str] = Query(None),
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    sort_by: SortBy = Query("qualified"),
    db: Session = Depends(get_db),
):
    start, end, sess = _window(db, session_id, start_date, end_date)
    rows = [r.model_dump() for r in _qualification_rows(db, start, end, sess, sort_by)]
    filename = f"qualification-{start.isoformat()}-{end.isoformat()}.csv"
    return csv_response(to_csv(rows, QUALIFICATION_COLUMNS), filename)


@router.get("/leaderboard", response_model=List[LeaderboardEntry])
def leaderboard(
    session_id: Optional[str] = Query(None),
    limit: Optional[int] = Query(None, ge=1),
    db: Session = Depends(get_db),
):
    """Public leaderboard: most missions first, qualified days break ties."""
    start, end, sess = _window(db, session_id, None, None)
    rows = _qualification_rows(db, start, end, sess, "missions")
    rows.sort(key=lambda r: (-r.total_missions, -r.qualified_days, r.name))
    if limit:
        rows = rows[:limit]
    return [
        LeaderboardEntry(
            position=idx,
            camper_id=r.camper_id,
            name=r.name,
            bunk_name=r.bunk_name,
            total_missions=r.total_missions,
            qualified_days=r.qualified_days,
            rank=r.rank,
        )
        for idx, r in enumerate(rows, start=1)
    ]


@router.get("/weekly", response_model=WeeklyReport)
def weekly_history(week_start: Optional[date] = Query(None), db: Session = Depends(get_db)):
    """Seven-day grid; defaults to the week ending today."""
    required = get_settings(db).daily_required_missions
    week_start = week_start or (today_for(db) - timedelta(days=6))
    days = week_days(week_start)
    subs = _submissions_between(db, days[0], days[-1])

    rows: List[WeeklyRow] = []
    for camper in _campers(db):
        counts = daily_mission_counts(countable(subs.get(camper.id, [])))
        day_counts = {d.isoformat(): counts.get(d, 0) for d in days}
        day_qualified = {k: is_qualified(v, required) for k, v in day_counts.items()}
        rows.append(WeeklyRow(
            camper_id=camper.id,
            name=camper.name,
            bunk_name=camper.bunk_name,
            counts=day_counts,
            qualified=day_qualified,
            qualified_days=sum(1 for q in day_qualified.values() if q),
        ))
    return WeeklyReport(week_start=week_start, days=days, daily_required=required, campers=rows)


@router.get("/missions", response_model=List[MissionAnalytics])
def mission_analytics(
    session_id: Optional[str] = Query(None),
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    db: Session = Depends(get_db),
):
    """How many campers completed each mission at least once in the window."""
    start, end, _ = _window(db, session_id, start_date, end_date)
    total_campers = db.scalar(select(func.count()).select_from(Camper)) or 0

    completed_by: Dict[str, set] = defaultdict(set)
    for camper_id, rows in _submissions_between(db, start, end).items():
        for s in countable(rows):
            for mid in s.missions or []:
                completed_by[mid].add(camper_id)

    missions = db.scalars(select(Mission).order_by(Mission.sort_order, Mission.id)).all()
    return [
        MissionAnalytics(
            mission_id=m.id,
            title=m.title,
            type=m.type,
            is_mandatory=m.is_mandatory,
            is_active=m.is_active,
            completion_count=len(completed_by.get(m.id, ())),
            total_campers=total_campers,
            completion_rate=percentage(len(completed_by.get(m.id, ())), total_campers),
        )
        for m in missions
    ]


# ----------------------------------------------------------------------
# Per camper
# ----------------------------------------------------------------------
@router.get("/campers.csv")
def campers_csv(session_id: Optional[str] = Query(None), db: Session = Depends(get_db)):
    start, end, sess = _window(db, session_id, None, None)
    rows = [r.model_dump() for r in _qualification_rows(db, start, end, sess, "name")]
    return csv_response(to_csv(rows, QUALIFICATION_COLUMNS), f"campers-{start.isoformat()}.csv")


@router.get("/campers/{camper_id}", response_model=CamperHistory)
def camper_history(camper_id: str, db: Session = Depends(get_db)):
    camper = db.get(Camper, camper_id)
    if not camper:
        raise HTTPException(status_code=404, detail="Camper not found")

    subs = db.scalars(
        select(Submission)
        .where(Submission.camper_id == camper_id)
        .order_by(Submission.date.desc())
    ).all()
    summary = summarize_camper(subs, get_settings(db).daily_required_missions, today_for(db))
    total_missions, qualified_days = _with_override(
        summary.total_missions, summary.qualified_days, _overrides(db, None).get(camper_id)
    )
    points = db.scalar(
        select(func.coalesce(func.sum(CamperWeeklyPoints.total_points), 0))
        .where(CamperWeeklyPoints.camper_id == camper_id)
    )
    return CamperHistory(
        camper_id=camper.id,
        name=camper.name,
        bunk_name=camper.bunk_name,
        total_submissions=summary.total_submissions,
        total_missions=total_missions,
        qualified_days=qualified_days,
        current_streak=summary.current_streak,
        rank=calculate_rank(total_missions, qualified_days, _thresholds(db)),
        total_points=int(points or 0),
        submissions=[lifecycle.to_view(s) for s in subs],
    )
