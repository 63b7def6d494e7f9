# backend/campboard/schemas/reports.py
from __future__ import annotations
from datetime import date, datetime
from typing import Dict, List, Literal, Optional
from pydantic import BaseModel

from campboard.schemas.submission import SubmissionOut


class DailyStatusItem(BaseModel):
    camper_id: str
    name: str
    bunk_name: str
    status: Literal["not_submitted", "submitted", "qualified"]
    missions_count: int = 0
    submitted_at: Optional[datetime] = None


class DailyStatusReport(BaseModel):
    day: date
    daily_required: int
    total_campers: int
    not_submitted: int
    submitted: int
    qualified: int
    campers: List[DailyStatusItem]


class BunkPerformance(BaseModel):
    bunk_id: str
    bunk_name: str
    total_campers: int
    submitted: int
    qualified: int
    qualified_percentage: int


class BunkReport(BaseModel):
    day: date
    bunks: List[BunkPerformance]
    total_campers: int
    total_qualified: int
    camp_percentage: int


class DayDetail(BaseModel):
    date: date
    missions_count: int
    qualified: bool


class CamperQualification(BaseModel):
    camper_id: str
    name: str
    bunk_name: str
    qualified_days: int
    total_missions: int
    total_days: int
    current_streak: int
    rank: str
    days: List[DayDetail] = []


class QualificationReport(BaseModel):
    start_date: date
    end_date: date
    daily_required: int
    campers: List[CamperQualification]


class LeaderboardEntry(BaseModel):
    position: int
    camper_id: str
    name: str
    bunk_name: str
    total_missions: int
    qualified_days: int
    rank: str


class WeeklyRow(BaseModel):
    camper_id: str
    name: str
    bunk_name: str
    counts: Dict[str, int]
    qualified: Dict[str, bool]
    qualified_days: int


class WeeklyReport(BaseModel):
    week_start: date
    days: List[date]
    daily_required: int
    campers: List[WeeklyRow]


class MissionAnalytics(BaseModel):
    mission_id: str
    title: str
    type: str
    is_mandatory: bool
    is_active: bool
    completion_count: int
    total_campers: int
    completion_rate: int


class CamperHistory(BaseModel):
    camper_id: str
    name: str
    bunk_name: str
    total_submissions: int
    total_missions: int
    qualified_days: int
    current_streak: int
    rank: str
    total_points: int
    submissions: List[SubmissionOut]
