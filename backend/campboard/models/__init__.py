# backend/campboard/models/__init__.py
from campboard.db import Base

# import all model modules so tables get registered on Base.metadata
from .bunk import Bunk
from .camper import Camper
from .staff import Staff
from .mission import Mission
from .camp_session import CampSession
from .submission import Submission
from .working_missions import WorkingMissions
from .system_settings import SystemSettings
from .rank_threshold import RankThreshold
from .camper_weekly_points import CamperWeeklyPoints
from .camper_session_stats import CamperSessionStats


__all__ = [
    "Base",
    "Bunk",
    "Camper",
    "Staff",
    "Mission",
    "CampSession",
    "Submission",
    "WorkingMissions",
    "SystemSettings",
    "RankThreshold",
    "CamperWeeklyPoints",
    "CamperSessionStats",
]
